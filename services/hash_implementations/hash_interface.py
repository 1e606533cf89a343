import logging
from abc import ABC, abstractmethod

logger = logging.getLogger(__name__)

class HashEngine(ABC):
    """
    Abstract base class defining the interface for incremental hash engines.

    All subclasses must feed chunks in order and produce the raw digest exactly once.

    Methods:
        update(data): Incorporate a chunk of bytes.
        finalize(): Return the raw digest bytes.
    """

    name: str = ""

    @abstractmethod
    def update(self, data: bytes) -> None:
        """
        Incorporate a chunk into the running hash state.
        Args:
            data: Bytes to add; chunk order matters
        """
        pass

    @abstractmethod
    def finalize(self) -> bytes:
        """
        Finish hashing and return the raw digest.
        Must be called once per computation.
        Returns:
            bytes: Fixed-length digest for this algorithm
        """
        pass

    @property
    @abstractmethod
    def digest_size(self) -> int:
        """Length of the raw digest in bytes."""
        pass

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r})"
