import hashlib
import logging

from services.hash_implementations.hash_interface import HashEngine

logger = logging.getLogger(__name__)

class HashlibEngine(HashEngine):
    """
    Hash engine backed by the standard cryptographic provider (hashlib).

    Attributes:
        name (str): hashlib algorithm name, e.g. "sha256".
    """
    def __init__(self, name: str):
        """
        Args:
            name: Any fixed-length algorithm listed in hashlib.algorithms_available

        Raises:
            ValueError: If hashlib does not know the algorithm.
        """
        self.name = name
        self._hasher = hashlib.new(name)

    def update(self, data: bytes) -> None:
        self._hasher.update(data)

    def finalize(self) -> bytes:
        return self._hasher.digest()

    @property
    def digest_size(self) -> int:
        return self._hasher.digest_size
