from __future__ import annotations

from typing import Sequence

import numpy as np

from .base import ArrayValues
from .num import float_to_int, format_float, parse_float
from .shape import Shape
from .tensor import Tensor

STRING_DTYPE = np.dtype(np.str_)


class String(ArrayValues):
    """
    Tensor of strings, stored as a NumPy object array so sub-spaces share memory.

    Float reads parse the text and return NaN for non-numeric values; int reads
    truncate the parsed float and return 0 for non-numeric values.
    """

    def __init__(self, *sizes: int):
        super().__init__(STRING_DTYPE, *sizes)

    def _allocate(self, n: int) -> np.ndarray:
        arr = np.empty(n, dtype=object)
        arr[:] = ""
        return arr

    def _zero(self):
        return ""

    def _coerce_from(self, src: Tensor, src_index: int, dst_index: int) -> None:
        self.values[dst_index] = src.string_1d(src_index)

    def string_1d(self, i: int) -> str:
        return self.values[i]

    def set_string_1d(self, value: str, i: int) -> None:
        self.values[i] = str(value)

    def float_1d(self, i: int) -> float:
        return parse_float(self.values[i])

    def set_float_1d(self, value: float, i: int) -> None:
        self.values[i] = format_float(float(value))

    def int_1d(self, i: int) -> int:
        return float_to_int(parse_float(self.values[i]))

    def set_int_1d(self, value: int, i: int) -> None:
        self.values[i] = str(int(value))


def new_string_shape(shape: Shape) -> String:
    return String(shape.sizes)


def new_string_from_values(values: Sequence[str]) -> String:
    tsr = String(len(values))
    for i, value in enumerate(values):
        tsr.values[i] = str(value)
    return tsr
