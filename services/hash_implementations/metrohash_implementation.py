import logging
from types import ModuleType

from models.digest_options import HASH_SEED, HashAlgorithm
from services.hash_implementations.hash_interface import HashEngine

logger = logging.getLogger(__name__)

METROHASH_CONSTRUCTORS = {
    HashAlgorithm.METROHASH64: ("MetroHash64", 8),
    HashAlgorithm.METROHASH128: ("MetroHash128", 16),
}

class MetroHashEngine(HashEngine):
    """
    Hash engine using MetroHash (64 or 128 bit), seeded with HASH_SEED.

    Attributes:
        name (str): Algorithm name (metrohash64 or metrohash128).
    """
    def __init__(self, metrohash_module: ModuleType, algorithm: HashAlgorithm, seed: int = HASH_SEED):
        if algorithm not in METROHASH_CONSTRUCTORS:
            raise ValueError(f"Not a MetroHash algorithm: {algorithm}")
        self.name = algorithm.value
        class_name, self._digest_size = METROHASH_CONSTRUCTORS[algorithm]
        self._hasher = getattr(metrohash_module, class_name)(seed=seed)

    def update(self, data: bytes) -> None:
        self._hasher.update(data)

    def finalize(self) -> bytes:
        return self._hasher.digest()

    @property
    def digest_size(self) -> int:
        return self._digest_size
