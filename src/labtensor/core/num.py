"""Scalar coercions shared by every Values kind."""

from __future__ import annotations

import math

import numpy as np

_TRUE_STRINGS = {"1", "t", "T", "true", "TRUE", "True"}
_FALSE_STRINGS = {"0", "f", "F", "false", "FALSE", "False"}


def is_float_kind(dtype: np.dtype) -> bool:
    return dtype.kind == "f"


def is_int_kind(dtype: np.dtype) -> bool:
    return dtype.kind in "iu"


def is_string_kind(dtype: np.dtype) -> bool:
    return dtype.kind in "UO"


def is_bool_kind(dtype: np.dtype) -> bool:
    return dtype.kind == "b"


def float_to_int(value: float) -> int:
    """Truncate toward zero; NaN and infinities become 0."""
    if math.isnan(value) or math.isinf(value):
        return 0
    return int(value)


def clamp_int(value: int, dtype: np.dtype) -> int:
    """Saturate ``value`` to the range of the integer ``dtype``."""
    info = np.iinfo(dtype)
    return min(max(int(value), int(info.min)), int(info.max))


def float_to_bool(value: float) -> bool:
    return value != 0


def bool_to_float(value: bool) -> float:
    return 1.0 if value else 0.0


def bool_to_int(value: bool) -> int:
    return 1 if value else 0


def bool_to_string(value: bool) -> str:
    return "true" if value else "false"


def format_float(value: float) -> str:
    # shortest round-trip form, with integral values printed without ".0"
    if math.isfinite(value) and value.is_integer() and abs(value) < 1e16:
        return str(int(value))
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "+Inf" if value > 0 else "-Inf"
    return repr(value)


def parse_float(text: str) -> float:
    """Parse ``text`` as a float, returning NaN when it is not numeric."""
    try:
        return float(text)
    except (TypeError, ValueError):
        return math.nan


def parse_bool(text: str):
    """Parse a boolean literal, returning ``None`` when it is not one."""
    text = text.strip()
    if text in _TRUE_STRINGS:
        return True
    if text in _FALSE_STRINGS:
        return False
    return None
