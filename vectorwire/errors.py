"""Error types raised by the wire codecs.

Every failure is local and deterministic: the same input always raises the
same error, so nothing here is retryable.
"""


class VectorCodecError(ValueError):
    """Base class for encode/decode failures."""


class DimensionOverflowError(VectorCodecError):
    """Value is longer than its header field can describe."""


class TruncatedInputError(VectorCodecError):
    """Buffer is shorter than the size its header declares."""


class ReservedFieldNonZeroError(VectorCodecError):
    """A reserved header slot decoded as nonzero."""


class InvalidSparseLayoutError(VectorCodecError):
    """Sparse vector indices or counts are inconsistent with its dimension."""


class EmptyVectorError(VectorCodecError):
    """Zero-length vector where at least one dimension is required."""


class TextFormatError(VectorCodecError):
    """Text literal could not be parsed."""


class UnknownTypeError(LookupError):
    """No codec is registered under the requested type name."""


__all__ = [
    "VectorCodecError",
    "DimensionOverflowError",
    "TruncatedInputError",
    "ReservedFieldNonZeroError",
    "InvalidSparseLayoutError",
    "EmptyVectorError",
    "TextFormatError",
    "UnknownTypeError",
]
