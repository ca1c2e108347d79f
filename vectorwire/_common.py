"""Helpers shared by the value types: header checks and text literals."""
import math
from typing import Any

import numpy as np

from .errors import TextFormatError, TruncatedInputError

INT32_MAX = 2**31 - 1


def require_length(buf: Any, size: int, what: str) -> None:
    if len(buf) < size:
        raise TruncatedInputError(
            f"{what} needs {size} bytes, buffer has {len(buf)}"
        )


def readonly(arr: np.ndarray) -> np.ndarray:
    arr.flags.writeable = False
    return arr


def format_float(value: np.floating) -> str:
    """Shortest text for a float at its own width, `1.0` rendered as `1`."""
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "-Infinity" if value < 0 else "Infinity"
    text = str(value)
    if text.endswith(".0"):
        text = text[:-2]
    return text


def parse_float(token: str) -> float:
    try:
        return float(token.strip())
    except ValueError as exc:
        raise TextFormatError(f"invalid number '{token.strip()}'") from exc


def parse_bracketed(text: str, kind: str) -> list[float]:
    """Parse a `[v1,v2,...]` literal into Python floats."""
    cleaned = text.strip()
    if not (cleaned.startswith("[") and cleaned.endswith("]")):
        raise TextFormatError(f"{kind} literal must be enclosed in brackets: {text!r}")
    inner = cleaned[1:-1].strip()
    if not inner:
        return []
    return [parse_float(x) for x in inner.split(",")]
