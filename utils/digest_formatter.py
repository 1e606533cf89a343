"""
Formatting of raw digest bytes into their configured string encoding.
"""
import base64
import logging
from typing import Optional, Union

from utils.base_encoding import (
    NATIVE_BASE64,
    UnknownEncodingError,
    base_encode,
    parse_base,
)

logger = logging.getLogger(__name__)


def encode_digest(raw_digest: bytes, encoding: Union[str, int]) -> str:
    """
    Encode digest bytes without truncation.

    Args:
        raw_digest: Finalized digest bytes.
        encoding: "hex", "base64", "utf8", "baseN" or an integer base.

    Returns:
        str: The encoded digest.

    Raises:
        UnknownEncodingError: If the encoding is not recognized.
    """
    if isinstance(encoding, str):
        name = encoding.strip().lower()
        if name == "hex":
            return raw_digest.hex()
        if name in ("utf8", "utf-8"):
            return raw_digest.decode("utf-8", errors="replace")
        if name == "base64":
            return base64.b64encode(raw_digest).decode("ascii")
        if not (name.startswith("base") or name.isdigit()):
            raise UnknownEncodingError(f"Unknown encoding {encoding}!")

    base = parse_base(encoding)
    if base == NATIVE_BASE64:
        return base64.b64encode(raw_digest).decode("ascii")
    return base_encode(raw_digest, base)


def check_max_length(max_length: Optional[int]) -> Optional[int]:
    """Reject max_length values that are neither None nor a positive integer."""
    if max_length is not None and (isinstance(max_length, bool) or not isinstance(max_length, int) or max_length < 1):
        raise ValueError(f"max_length must be a positive integer or None, got {max_length!r}")
    return max_length


def truncate(value: str, max_length: Optional[int]) -> str:
    """Keep the first max_length characters; None keeps everything."""
    check_max_length(max_length)
    if max_length is None or len(value) <= max_length:
        return value
    return value[:max_length]


def format_digest(
    raw_digest: bytes,
    encoding: Union[str, int] = "base52",
    max_length: Optional[int] = None,
) -> str:
    """
    Encode digest bytes and bound the result to max_length characters.

    Truncation counts characters of the encoded string, so the same digest keeps
    different amounts of entropy under different encodings.
    """
    check_max_length(max_length)
    output = truncate(encode_digest(raw_digest, encoding), max_length)
    logger.debug(f"Formatted {len(raw_digest)}-byte digest as {encoding} (max_length={max_length}): {output}")
    return output
