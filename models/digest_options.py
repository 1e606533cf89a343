"""
DigestOptions model for asset-hash, describing how a digest is computed and formatted.
"""
import hashlib
import logging
from enum import Enum
from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from utils.base_encoding import BASE_ENCODE_TABLES, NATIVE_BASE64, UnknownEncodingError, parse_base

logger = logging.getLogger(__name__)

DEFAULT_HASH = "xxhash128"
DEFAULT_ENCODING = "base52"
DEFAULT_MAX_LENGTH = 8

# Seed for every backend that accepts one, so digests match across processes.
HASH_SEED = 0xCAFEBABE


class HashAlgorithm(str, Enum):
    """Fast non-cryptographic hash variants. Any fixed-length hashlib name is also accepted."""
    XXHASH32 = "xxhash32"
    XXHASH64 = "xxhash64"
    XXHASH128 = "xxhash128"
    METROHASH64 = "metrohash64"
    METROHASH128 = "metrohash128"

    @classmethod
    def lookup(cls, name: str) -> Optional["HashAlgorithm"]:
        """Return the enum member for a name, or None for a hashlib name."""
        try:
            return cls(name.strip().lower())
        except ValueError:
            return None


def is_hashlib_algorithm(name: str) -> bool:
    """True for hashlib algorithms with a fixed digest length."""
    name = name.strip().lower()
    return name in hashlib.algorithms_available and not name.startswith("shake_")


def normalize_encoding(encoding: Union[str, int]) -> str:
    """
    Bring an encoding to its canonical name ("hex", "base64", "utf8" or "baseN").

    Raises:
        UnknownEncodingError: If the encoding is not recognized.
    """
    if isinstance(encoding, str):
        name = encoding.strip().lower()
        if name in ("hex", "base64", "utf8"):
            return name
        if name == "utf-8":
            return "utf8"
        if not (name.startswith("base") or name.isdigit()):
            raise UnknownEncodingError(f"Unknown encoding {encoding}!")
    base = parse_base(encoding)
    if base == NATIVE_BASE64:
        return "base64"
    if base not in BASE_ENCODE_TABLES:
        raise UnknownEncodingError(f"Unknown base encoding {encoding}!")
    return f"base{base}"


class DigestOptions(BaseModel):
    """
    Options for one digest computation.

    Attributes:
        hash (str): Hash algorithm, a HashAlgorithm value or a hashlib name.
        encoding (str): Output encoding: hex, base64, utf8 or baseN.
        max_length (Optional[int]): Maximum characters kept; None disables truncation.
    """

    model_config = ConfigDict(frozen=True, extra='forbid')

    hash: str = Field(DEFAULT_HASH, description="Hash algorithm name")
    encoding: str = Field(DEFAULT_ENCODING, description="Output encoding")
    max_length: Optional[int] = Field(DEFAULT_MAX_LENGTH, ge=1, description="Maximum output length")

    @field_validator('hash', mode='before')
    @classmethod
    def validate_hash(cls, value):
        if isinstance(value, HashAlgorithm):
            return value.value
        if not isinstance(value, str) or not value.strip():
            raise ValueError("hash must be a non-empty algorithm name")
        name = value.strip().lower()
        if HashAlgorithm.lookup(name) is None and not is_hashlib_algorithm(name):
            raise ValueError(f"Unsupported hash algorithm: {value}")
        return name

    @field_validator('encoding', mode='before')
    @classmethod
    def validate_encoding(cls, value):
        try:
            return normalize_encoding(value)
        except UnknownEncodingError as e:
            raise ValueError(str(e)) from e
