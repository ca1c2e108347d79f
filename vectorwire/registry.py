"""Type name -> codec mapping shared by every driver adapter.

Adapters resolve a codec once when they bind a column type, then call its
``encode``/``decode`` for each value.
"""
from typing import Any, Callable, NamedTuple

from .bit import Bit, decode_bit, encode_bit
from .errors import UnknownTypeError
from .halfvec import HalfVector, decode_halfvec, encode_halfvec
from .sparsevec import SparseVector, decode_sparsevec, encode_sparsevec
from .vector import Vector, decode_vector, encode_vector


class Codec(NamedTuple):
    type_name: str
    value_type: type
    encode: Callable[[Any], bytes]
    decode: Callable[[bytes], Any]

    def from_text(self, text: str) -> Any:
        return self.value_type.from_text(text)


CODECS: dict[str, Codec] = {
    codec.type_name: codec
    for codec in (
        Codec("vector", Vector, encode_vector, decode_vector),
        Codec("halfvec", HalfVector, encode_halfvec, decode_halfvec),
        Codec("sparsevec", SparseVector, encode_sparsevec, decode_sparsevec),
        Codec("bit", Bit, encode_bit, decode_bit),
    )
}


def get_codec(type_name: str) -> Codec:
    try:
        return CODECS[type_name]
    except KeyError:
        raise UnknownTypeError(
            f"No codec for type '{type_name}'; expected one of {sorted(CODECS)}"
        ) from None


def codec_for_value(value: Any) -> Codec:
    for codec in CODECS.values():
        if isinstance(value, codec.value_type):
            return codec
    raise UnknownTypeError(f"No codec for values of type {type(value).__name__}")


def encode_value(value: Any) -> bytes:
    return codec_for_value(value).encode(value)


def decode_value(type_name: str, buf: bytes) -> Any:
    return get_codec(type_name).decode(buf)


def parse_text(type_name: str, text: str) -> Any:
    return get_codec(type_name).from_text(text)


__all__ = [
    "CODECS",
    "Codec",
    "codec_for_value",
    "decode_value",
    "encode_value",
    "get_codec",
    "parse_text",
]
