from __future__ import annotations

from typing import Sequence

import numpy as np

from .base import ArrayValues
from .num import clamp_int, float_to_int, format_float, is_int_kind
from .shape import Shape
from .tensor import Tensor


class Number(ArrayValues):
    """
    Tensor of numeric values of any NumPy numeric ``dtype``.

    Every access coerces between the native type and float / int / string:
    float writes into integer kinds truncate toward zero (NaN becomes 0) and
    saturate at the range of the dtype. String writes parse a float first,
    ignoring text that is not numeric.
    """

    def __init__(self, dtype=np.float64, *sizes: int):
        dtype = np.dtype(dtype)
        if dtype.kind not in "iuf":
            raise TypeError(f"Number requires a numeric dtype, got {dtype}")
        super().__init__(dtype, *sizes)

    def _allocate(self, n: int) -> np.ndarray:
        return np.zeros(n, dtype=self._dtype)

    def _zero(self):
        return 0

    def _is_int(self) -> bool:
        return is_int_kind(self._dtype)

    def _coerce_from(self, src: Tensor, src_index: int, dst_index: int) -> None:
        if self._is_int():
            self.set_int_1d(src.int_1d(src_index), dst_index)
        else:
            self.set_float_1d(src.float_1d(src_index), dst_index)

    def float_1d(self, i: int) -> float:
        return float(self.values[i])

    def set_float_1d(self, value: float, i: int) -> None:
        if self._is_int():
            self.values[i] = clamp_int(float_to_int(float(value)), self._dtype)
        else:
            self.values[i] = value

    def int_1d(self, i: int) -> int:
        if self._is_int():
            return int(self.values[i])
        return float_to_int(float(self.values[i]))

    def set_int_1d(self, value: int, i: int) -> None:
        if self._is_int():
            self.values[i] = clamp_int(value, self._dtype)
        else:
            self.values[i] = float(value)

    def string_1d(self, i: int) -> str:
        if self._is_int():
            return str(int(self.values[i]))
        return format_float(float(self.values[i]))

    def set_string_1d(self, value: str, i: int) -> None:
        try:
            parsed = float(value)
        except (TypeError, ValueError):
            # not numeric: leave the value unchanged
            return
        self.set_float_1d(parsed, i)


class Float64(Number):
    def __init__(self, *sizes: int):
        super().__init__(np.float64, *sizes)


class Float32(Number):
    def __init__(self, *sizes: int):
        super().__init__(np.float32, *sizes)


class Int(Number):
    def __init__(self, *sizes: int):
        super().__init__(np.int64, *sizes)


class Int32(Number):
    def __init__(self, *sizes: int):
        super().__init__(np.int32, *sizes)


class Byte(Number):
    def __init__(self, *sizes: int):
        super().__init__(np.uint8, *sizes)


_NUMBER_TYPES = {
    np.dtype(np.float64): Float64,
    np.dtype(np.float32): Float32,
    np.dtype(np.int64): Int,
    np.dtype(np.int32): Int32,
    np.dtype(np.uint8): Byte,
}


def new_number(dtype, *sizes: int) -> Number:
    """New zeroed Number of ``dtype``, using the named kind where one exists."""
    dtype = np.dtype(dtype)
    cls = _NUMBER_TYPES.get(dtype)
    if cls is None:
        return Number(dtype, *sizes)
    return cls(*sizes)


def new_number_shape(dtype, shape: Shape) -> Number:
    return new_number(dtype, shape.sizes)


def new_number_from_values(values: Sequence, dtype=None) -> Number:
    """
    1D Number over ``values``. A NumPy array of a matching dtype is wrapped
    without copying, so the tensor shares its memory.
    """
    arr = np.asarray(values) if dtype is None else np.asarray(values, dtype=dtype)
    if arr.ndim != 1:
        arr = arr.reshape(-1)
    if arr.dtype.kind == "b":
        arr = arr.astype(np.int64)
    tsr = new_number(arr.dtype)
    tsr._store = arr
    tsr.values = arr
    tsr._shape = Shape(len(arr))
    return tsr
