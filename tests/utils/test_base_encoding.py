import pytest

from utils.base_encoding import (
    BASE_ENCODE_TABLES,
    UnknownEncodingError,
    UnsignedBigInt,
    base_encode,
    get_alphabet,
    parse_base,
)


def reference_encode(data: bytes, base: int) -> str:
    """Straightforward encoder on Python ints, used to cross-check the limb arithmetic."""
    alphabet = BASE_ENCODE_TABLES[base]
    value = int.from_bytes(data, "little")
    output = ""
    while value > 0:
        value, remainder = divmod(value, base)
        output = alphabet[remainder] + output
    return output


@pytest.mark.parametrize("base,alphabet", list(BASE_ENCODE_TABLES.items()))
def test_alphabet_tables_are_duplicate_free_and_sized(base, alphabet):
    assert len(alphabet) == base
    assert len(set(alphabet)) == base


@pytest.mark.parametrize("base,excluded", [
    (32, "0lIO"),
    (49, "lIO"),
    (58, "0lIO"),
])
def test_reduced_alphabets_omit_lookalike_characters(base, excluded):
    for char in excluded:
        assert char not in BASE_ENCODE_TABLES[base]


def test_full_density_alphabets_keep_all_characters():
    assert "0" in BASE_ENCODE_TABLES[36]
    assert all(char in BASE_ENCODE_TABLES[62] for char in "0lIO")


@pytest.mark.parametrize("data,expected", [
    (bytes([0x00]), ""),
    (bytes([0x01]), "1"),
    (bytes([0x3d]), "Z"),
    (bytes([0x3e]), "10"),
    (bytes([0x3e, 0x00]), "10"),
    (bytes([0x00, 0x01]), "48"),
])
def test_base62_examples(data, expected):
    assert base_encode(data, 62) == expected


@pytest.mark.parametrize("data,base,expected", [
    (bytes([0x1a]), 26, "ba"),
    (bytes([0xff]), 36, "73"),
    (bytes([0x3a]), 58, "21"),
    (bytes([0x20]), 32, "21"),
    (bytes([0x00]), 52, ""),
    (bytes([0x33]), 52, "Z"),
])
def test_other_bases(data, base, expected):
    assert base_encode(data, base) == expected


def test_empty_and_all_zero_input_encode_to_empty_string():
    assert base_encode(b"", 62) == ""
    assert base_encode(bytes(32), 52) == ""


def test_bytes_are_read_little_endian():
    # 0x01 0x00 is one, 0x00 0x01 is 256
    assert base_encode(bytes([0x01, 0x00]), 36) == "1"
    assert base_encode(bytes([0x00, 0x01]), 36) == "74"


def test_trailing_zero_bytes_do_not_add_leading_symbols():
    assert base_encode(bytes([0x05, 0x00, 0x00, 0x00]), 62) == base_encode(bytes([0x05]), 62)


@pytest.mark.parametrize("base", sorted(BASE_ENCODE_TABLES))
def test_long_digests_encode_exactly(base):
    data = bytes(range(256)) + bytes(range(255, -1, -1))
    assert base_encode(data, base) == reference_encode(data, base)


def test_128_bit_all_ones_digest():
    data = b"\xff" * 16
    assert base_encode(data, 62) == reference_encode(data, 62)
    assert len(base_encode(data, 62)) == 22


def test_base_can_be_given_by_name():
    assert base_encode(bytes([0x3e, 0x00]), "base62") == "10"
    assert parse_base("base52") == 52
    assert parse_base(58) == 58


@pytest.mark.parametrize("data", [b"", b"\x00", b"\x01\x02\x03", b"\xff" * 64])
def test_unknown_base_fails_for_every_input(data):
    with pytest.raises(UnknownEncodingError):
        base_encode(data, 99)


@pytest.mark.parametrize("base", [64, 16, 0, "base", "hexadecimal", True])
def test_unknown_bases_are_rejected(base):
    with pytest.raises(UnknownEncodingError):
        get_alphabet(base)


def test_unknown_encoding_is_a_value_error():
    assert issubclass(UnknownEncodingError, ValueError)


class TestUnsignedBigInt:
    """Test cases for the limb-array integer used by the encoder."""

    def test_from_bytes_matches_int(self):
        data = bytes(range(1, 40))
        assert int(UnsignedBigInt.from_bytes_le(data)) == int.from_bytes(data, "little")

    def test_mul_add_and_divmod(self):
        value = UnsignedBigInt()
        value.add_small(65535)
        value.mul_small(65536)
        value.add_small(7)
        assert int(value) == 65535 * 65536 + 7
        remainder = value.divmod_small(62)
        assert remainder == (65535 * 65536 + 7) % 62
        assert int(value) == (65535 * 65536 + 7) // 62

    def test_grows_past_initial_width(self):
        value = UnsignedBigInt(width=1)
        value.add_small(1)
        for _ in range(10):
            value.mul_small(256)
        assert int(value) == 256 ** 10

    def test_is_zero(self):
        assert UnsignedBigInt.from_bytes_le(bytes(8)).is_zero()
        assert not UnsignedBigInt.from_bytes_le(b"\x00\x01").is_zero()

    def test_divisor_out_of_range(self):
        with pytest.raises(ValueError):
            UnsignedBigInt.from_bytes_le(b"\x01").divmod_small(0)
