import logging
from types import ModuleType

from models.digest_options import HASH_SEED, HashAlgorithm
from services.hash_implementations.hash_interface import HashEngine

logger = logging.getLogger(__name__)

# algorithm -> constructor name in the xxhash module
XXHASH_CONSTRUCTORS = {
    HashAlgorithm.XXHASH32: "xxh32",
    HashAlgorithm.XXHASH64: "xxh64",
    HashAlgorithm.XXHASH128: "xxh3_128",
}

class XXHashEngine(HashEngine):
    """
    Hash engine using the xxHash family, seeded with HASH_SEED.

    Attributes:
        name (str): Algorithm name (xxhash32, xxhash64 or xxhash128).
    """
    def __init__(self, xxhash_module: ModuleType, algorithm: HashAlgorithm, seed: int = HASH_SEED):
        """
        Args:
            xxhash_module: The imported xxhash module from the capability registry
            algorithm: One of the xxHash variants
            seed: Hash seed
        """
        if algorithm not in XXHASH_CONSTRUCTORS:
            raise ValueError(f"Not an xxHash algorithm: {algorithm}")
        self.name = algorithm.value
        constructor = getattr(xxhash_module, XXHASH_CONSTRUCTORS[algorithm])
        self._hasher = constructor(seed=seed)

    def update(self, data: bytes) -> None:
        self._hasher.update(data)

    def finalize(self) -> bytes:
        return self._hasher.digest()

    @property
    def digest_size(self) -> int:
        return self._hasher.digest_size
