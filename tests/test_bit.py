import pytest

from vectorwire.bit import Bit, decode_bit, encode_bit
from vectorwire.errors import TextFormatError, TruncatedInputError, VectorCodecError


def test_pack_bits_msb_first():
    bit = Bit([True, False, True])
    assert len(bit) == 3
    assert bit.to_bytes() == bytes([0b10100000])
    assert encode_bit(bit) == bytes.fromhex("00000003") + bytes([0b10100000])


def test_pack_spans_bytes():
    bit = Bit([1, 0, 1, 0, 0, 0, 0, 0, 0, 1])
    assert bit.to_bytes() == bytes([0b10100000, 0b01000000])
    assert bit.to_text() == "1010000001"
    assert bit.to_list() == [True, False, True, False, False, False, False, False, False, True]


def test_from_bytes():
    bit = Bit.from_bytes(bytes([0b00000000, 0b11111111]))
    assert len(bit) == 16
    assert bit.to_bytes() == bytes([0b00000000, 0b11111111])


@pytest.mark.parametrize("data", [b"", b"\x00\xff", b"\x80", bytes(range(256))])
def test_byte_round_trip(data):
    assert decode_bit(encode_bit(Bit.from_bytes(data))).to_bytes() == data


def test_encode_accepts_raw_bytes():
    assert encode_bit(b"\xa0") == bytes.fromhex("00000008a0")


def test_round_trip_partial_byte():
    bit = Bit([True] * 13)
    assert decode_bit(encode_bit(bit)) == bit


def test_empty():
    bit = Bit([])
    assert len(bit) == 0
    assert bit.to_bytes() == b""
    assert encode_bit(bit) == bytes(4)


def test_decode_truncated():
    with pytest.raises(TruncatedInputError):
        decode_bit(bytes.fromhex("00000010ff"))
    with pytest.raises(TruncatedInputError):
        decode_bit(b"\x00\x00")


def test_decode_negative_length():
    with pytest.raises(VectorCodecError):
        decode_bit(bytes.fromhex("ffffffff"))


def test_decode_ignores_trailing_bytes():
    assert decode_bit(bytes.fromhex("00000003a0ff")) == Bit([True, False, True])


def test_text_form():
    assert Bit.from_text("101") == Bit([True, False, True])
    assert repr(Bit([True, False])) == "Bit('10')"
    with pytest.raises(TextFormatError):
        Bit.from_text("10x")


def test_strings_are_not_bit_sequences():
    with pytest.raises(TypeError):
        Bit("101")


def test_equality_includes_length():
    assert Bit([True, False, True]) != Bit.from_bytes(bytes([0b10100000]))
