"""
Base-N encoding of raw digest bytes into compact, filename-friendly strings.

The digest bytes are read as one unsigned little-endian integer and written out as a
positional numeral in the requested base. Base 64 is handled by the native codec in
utils.digest_formatter and is not part of the table.
"""
import logging
import re
from typing import List, Union

logger = logging.getLogger(__name__)

BASE_ENCODE_TABLES = {
    26: "abcdefghijklmnopqrstuvwxyz",
    32: "123456789abcdefghjkmnpqrstuvwxyz",  # no 0lio
    36: "0123456789abcdefghijklmnopqrstuvwxyz",
    49: "abcdefghijkmnopqrstuvwxyzABCDEFGHJKLMNPQRSTUVWXYZ",  # no lIO
    52: "abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ",
    58: "123456789abcdefghijkmnopqrstuvwxyzABCDEFGHJKLMNPQRSTUVWXYZ",  # no 0lIO
    62: "0123456789abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ",
}

NATIVE_BASE64 = 64

_BASE_PATTERN = re.compile(r"\d+")


class UnknownEncodingError(ValueError):
    """Raised when an encoding name or base has no alphabet."""


def parse_base(base: Union[int, str]) -> int:
    """
    Turn a base given as an int or as a name such as "base62" into an int.

    Args:
        base: Integer base or encoding name containing the base digits.

    Returns:
        int: The numeric base.

    Raises:
        UnknownEncodingError: If no base can be read from the value.
    """
    if isinstance(base, bool):
        raise UnknownEncodingError(f"Unknown base encoding {base}!")
    if isinstance(base, int):
        return base
    match = _BASE_PATTERN.search(str(base))
    if not match:
        raise UnknownEncodingError(f"Unknown base encoding {base}!")
    return int(match.group(0))


def get_alphabet(base: Union[int, str]) -> str:
    """Return the alphabet for a base, failing before any numeric work."""
    base_num = parse_base(base)
    alphabet = BASE_ENCODE_TABLES.get(base_num)
    if alphabet is None:
        raise UnknownEncodingError(f"Unknown base encoding {base}!")
    return alphabet


class UnsignedBigInt:
    """
    Unsigned arbitrary-precision integer stored as little-endian 16-bit limbs.

    Only the operations the encoder needs are provided: multiply by a small
    constant, add a small value, divide by a small divisor with remainder, and a
    zero test. Limb storage is sized up front from the input length and grows only
    if a carry runs past the end.
    """

    LIMB_BITS = 16
    LIMB_BASE = 1 << LIMB_BITS
    LIMB_MASK = LIMB_BASE - 1

    def __init__(self, width: int = 1):
        self.limbs: List[int] = [0] * max(width, 1)

    @classmethod
    def from_bytes_le(cls, data: bytes) -> "UnsignedBigInt":
        """Build the value sum(data[i] * 256**i)."""
        value = cls(width=(len(data) + 1) // 2)
        for byte in reversed(data):
            value.mul_small(256)
            value.add_small(byte)
        return value

    def mul_small(self, factor: int) -> None:
        carry = 0
        for i, limb in enumerate(self.limbs):
            product = limb * factor + carry
            self.limbs[i] = product & self.LIMB_MASK
            carry = product >> self.LIMB_BITS
        while carry:
            self.limbs.append(carry & self.LIMB_MASK)
            carry >>= self.LIMB_BITS

    def add_small(self, addend: int) -> None:
        carry = addend
        i = 0
        while carry:
            if i == len(self.limbs):
                self.limbs.append(0)
            total = self.limbs[i] + carry
            self.limbs[i] = total & self.LIMB_MASK
            carry = total >> self.LIMB_BITS
            i += 1

    def divmod_small(self, divisor: int) -> int:
        """Divide in place by divisor and return the remainder."""
        if divisor <= 0 or divisor >= self.LIMB_BASE:
            raise ValueError(f"Divisor out of range: {divisor}")
        remainder = 0
        for i in range(len(self.limbs) - 1, -1, -1):
            current = (remainder << self.LIMB_BITS) | self.limbs[i]
            self.limbs[i], remainder = divmod(current, divisor)
        return remainder

    def is_zero(self) -> bool:
        return not any(self.limbs)

    def __int__(self) -> int:
        result = 0
        for limb in reversed(self.limbs):
            result = (result << self.LIMB_BITS) | limb
        return result

    def __repr__(self) -> str:
        return f"UnsignedBigInt({int(self)})"


def base_encode(data: bytes, base: Union[int, str]) -> str:
    """
    Encode bytes as a minimal positional numeral in the given base.

    The bytes are read little-endian: data[0] is the least significant byte.
    An all-zero (or empty) input encodes to the empty string.

    Args:
        data: Raw digest bytes.
        base: One of the bases in BASE_ENCODE_TABLES, as int or "baseN".

    Returns:
        str: Encoded string without leading zero symbols.

    Raises:
        UnknownEncodingError: If the base has no alphabet.
    """
    alphabet = get_alphabet(base)
    base_num = len(alphabet)

    current = UnsignedBigInt.from_bytes_le(bytes(data))
    digits = []
    while not current.is_zero():
        digits.append(alphabet[current.divmod_small(base_num)])

    output = "".join(reversed(digits))
    logger.debug(f"Encoded {len(data)} bytes as base{base_num}: {len(output)} characters")
    return output
