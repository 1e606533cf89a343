"""
Models package for asset-hash.

This package contains Pydantic-based models for digest options and per-file digest results.
"""

from .digest_options import (
    DEFAULT_ENCODING,
    DEFAULT_HASH,
    DEFAULT_MAX_LENGTH,
    HASH_SEED,
    DigestOptions,
    HashAlgorithm,
)
from .digest_result import DigestResult

__all__ = [
    "DigestOptions",
    "DigestResult",
    "HashAlgorithm",
    "DEFAULT_HASH",
    "DEFAULT_ENCODING",
    "DEFAULT_MAX_LENGTH",
    "HASH_SEED",
]
