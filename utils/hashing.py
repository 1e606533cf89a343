"""
Functional hashing helpers. Internally they delegate to services.hashing_service.HashingService.

get_hash and get_hashed_name fall back to the default options (xxhash128, base52,
8 characters). Hasher only truncates when a max_length is given.
"""

from __future__ import annotations

from typing import Optional, Union

from models.digest_options import DEFAULT_ENCODING, DEFAULT_HASH, DEFAULT_MAX_LENGTH, DigestOptions, normalize_encoding
from services.hash_backend_factory import create_hash_engine
from services.hash_implementations.hash_interface import HashEngine
from services.hashing_service import DEFAULT_CHUNK_SIZE, DigestAccumulator, FileSource, HashingService
from utils.base_encoding import base_encode
from utils.digest_formatter import check_max_length, format_digest

__all__ = ["Hasher", "base_encode", "create_hasher", "get_hash", "get_hashed_name"]


def create_hasher(hash: str = DEFAULT_HASH) -> HashEngine:
    return create_hash_engine(hash)


class Hasher:
    """
    Incremental hasher with a formatted digest, for data that is not a file.

    Encoding and max_length are checked up front, so a bad value never uses up
    the hash state.
    """

    def __init__(
        self,
        hash: Optional[str] = None,
        encoding: Optional[str] = None,
        max_length: Optional[int] = None,
    ) -> None:
        self._encoding = normalize_encoding(encoding or DEFAULT_ENCODING)
        self._max_length = check_max_length(max_length)
        self._accumulator = DigestAccumulator(create_hasher(hash or DEFAULT_HASH))

    def update(self, data: Union[bytes, str]) -> "Hasher":
        self._accumulator.update(data)
        return self

    def digest(self, encoding: Optional[str] = None, max_length: Optional[int] = None) -> str:
        encoding = normalize_encoding(encoding) if encoding else self._encoding
        max_length = check_max_length(max_length) if max_length is not None else self._max_length
        return format_digest(self._accumulator.finalize(), encoding, max_length)


def _service(hash: Optional[str], encoding: Optional[str], max_length: Optional[int], chunk_size: int) -> HashingService:
    options = DigestOptions(
        hash=hash or DEFAULT_HASH,
        encoding=normalize_encoding(encoding or DEFAULT_ENCODING),
        max_length=check_max_length(max_length) or DEFAULT_MAX_LENGTH,
    )
    return HashingService(options, chunk_size=chunk_size)


async def get_hash(
    source: FileSource,
    hash: Optional[str] = None,
    encoding: Optional[str] = None,
    max_length: Optional[int] = None,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
) -> str:
    return await _service(hash, encoding, max_length, chunk_size).compute_hash(source)


async def get_hashed_name(
    source: FileSource,
    hash: Optional[str] = None,
    encoding: Optional[str] = None,
    max_length: Optional[int] = None,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
) -> str:
    return await _service(hash, encoding, max_length, chunk_size).compute_hashed_name(source)
