import struct

import numpy as np
import pytest

from vectorwire import config
from vectorwire.errors import (
    DimensionOverflowError,
    EmptyVectorError,
    ReservedFieldNonZeroError,
    TextFormatError,
    TruncatedInputError,
)
from vectorwire.vector import MAX_DIM, Vector, decode_vector, encode_vector


def test_encode_known_bytes():
    data = encode_vector(Vector([1.0, 2.0, 3.0]))
    assert data == bytes.fromhex("00030000" "3f800000" "40000000" "40400000")


def test_encode_accepts_plain_sequences():
    assert encode_vector([1, 2, 3]) == encode_vector(Vector([1.0, 2.0, 3.0]))
    assert encode_vector(np.array([1, 2, 3], dtype=np.float64)) == encode_vector([1, 2, 3])


def test_round_trip_preserves_nan_payload_and_signed_zero():
    buf = (
        struct.pack(">HH", 4, 0)
        + bytes.fromhex("7fc00001")  # quiet NaN with payload
        + bytes.fromhex("80000000")  # -0.0
        + bytes.fromhex("7f800000")  # +inf
        + bytes.fromhex("3dcccccd")  # 0.1f
    )
    vec = decode_vector(buf)
    assert encode_vector(vec) == buf
    assert decode_vector(encode_vector(vec)) == vec


def test_round_trip_random_values():
    rng = np.random.default_rng(7)
    vec = Vector(rng.standard_normal(300).astype(np.float32))
    assert decode_vector(encode_vector(vec)) == vec


def test_max_dimensions():
    vec = Vector(np.ones(MAX_DIM, dtype=np.float32))
    data = encode_vector(vec)
    assert len(data) == 4 + 4 * MAX_DIM
    assert decode_vector(data) == vec


def test_dimension_overflow():
    with pytest.raises(DimensionOverflowError):
        encode_vector(Vector(np.zeros(MAX_DIM + 1, dtype=np.float32)))


def test_empty_rejected_by_default():
    with pytest.raises(EmptyVectorError):
        encode_vector(Vector([]))


def test_empty_deferred_to_store_when_allowed(monkeypatch):
    assert encode_vector(Vector([]), allow_empty=True) == b"\x00\x00\x00\x00"
    monkeypatch.setattr(config, "ALLOW_EMPTY", True)
    assert encode_vector([]) == b"\x00\x00\x00\x00"
    assert len(decode_vector(b"\x00\x00\x00\x00")) == 0


def test_reserved_field_must_be_zero():
    buf = bytes.fromhex("00010001" "3f800000")
    with pytest.raises(ReservedFieldNonZeroError):
        decode_vector(buf)


def test_truncated_input():
    with pytest.raises(TruncatedInputError):
        decode_vector(bytes.fromhex("00030000" "3f800000" "40000000"))
    with pytest.raises(TruncatedInputError):
        decode_vector(b"\x00\x01")


def test_trailing_bytes_ignored():
    assert decode_vector(bytes.fromhex("00010000" "3f800000" "ffff")) == Vector([1.0])


def test_equality_is_bitwise():
    assert Vector([1, 2]) == Vector([1.0, 2.0])
    assert Vector([0.0]) != Vector([-0.0])
    assert Vector([1.0]) != Vector([1.0, 1.0])
    assert hash(Vector([1, 2])) == hash(Vector([1.0, 2.0]))


def test_values_are_immutable():
    vec = Vector([1.0, 2.0])
    with pytest.raises(ValueError):
        vec.to_numpy()[0] = 5.0


def test_sequence_protocol():
    vec = Vector([1.5, 2.5, 3.5])
    assert len(vec) == 3
    assert vec[1] == 2.5
    assert list(vec) == [1.5, 2.5, 3.5]
    assert vec.to_list() == [1.5, 2.5, 3.5]
    assert repr(vec) == "Vector([1.5, 2.5, 3.5])"


def test_rejects_nested_input():
    with pytest.raises(ValueError):
        Vector([[1.0, 2.0], [3.0, 4.0]])


def test_text_form():
    assert Vector([1, 2, 3]).to_text() == "[1,2,3]"
    assert Vector([1.5, -0.25]).to_text() == "[1.5,-0.25]"
    assert Vector([0.1]).to_text() == "[0.1]"
    assert Vector.from_text(" [1, 2.5 ,3] ") == Vector([1.0, 2.5, 3.0])
    assert Vector.from_text("[]") == Vector([])


def test_text_form_errors():
    with pytest.raises(TextFormatError):
        Vector.from_text("1,2,3")
    with pytest.raises(TextFormatError):
        Vector.from_text("[1,abc]")
