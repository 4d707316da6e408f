from __future__ import annotations

from typing import Sequence

import numpy as np

from .bitslice import BitSlice
from .num import (
    bool_to_float,
    bool_to_int,
    bool_to_string,
    float_to_bool,
    parse_bool,
)
from .base import ShapedValues
from .shape import Shape
from .tensor import Tensor

BOOL_DTYPE = np.dtype(np.bool_)


class Bool(ShapedValues):
    """
    Tensor of bits backed by a :class:`BitSlice`, one bit per element.

    Bool is a :class:`Values` but not :class:`Contiguous`: a bit-packed buffer
    has no addressable sub-range, so there is no ``sub_space`` or
    ``row_tensor``.
    """

    def __init__(self, *sizes: int):
        super().__init__()
        self.bits = BitSlice()
        self.set_shape_sizes(*sizes)

    def _resize(self, n: int) -> None:
        self.bits.set_len(n)

    @property
    def data_type(self) -> np.dtype:
        return BOOL_DTYPE

    def clone(self) -> "Bool":
        tsr = Bool()
        tsr._shape = self._shape.clone()
        tsr.bits = self.bits.clone()
        tsr._metadata = dict(self._metadata)
        return tsr

    def view(self) -> "Bool":
        tsr = Bool()
        tsr._shape = self._shape.clone()
        tsr.bits = BitSlice.shared(self.bits)
        tsr._metadata = self._metadata
        return tsr

    def set_zeros(self) -> None:
        self.bits.fill(False)

    def set_true(self) -> None:
        self.bits.fill(True)

    def copy_from(self, src: Tensor) -> None:
        if isinstance(src, Bool):
            self.bits.copy_from(src.bits)
            return
        n = min(len(self), len(src))
        for i in range(n):
            self.bits.set(float_to_bool(src.float_1d(i)), i)

    def append_from(self, src: Tensor) -> "Bool":
        rows, cells, src_rows = self._check_append(src)
        self.set_num_rows(rows + src_rows)
        self.copy_cells_from(src, rows * cells, 0, src_rows * cells)
        return self

    def copy_cells_from(self, src: Tensor, to: int, start: int, n: int) -> None:
        if isinstance(src, Bool):
            for i in range(n):
                self.bits.set(src.bits.index(start + i), to + i)
            return
        for i in range(n):
            self.bits.set(float_to_bool(src.float_1d(start + i)), to + i)

    # bools

    def bool_value(self, *index: int) -> bool:
        return self.bits.index(self._shape.index_to_1d(*index))

    def set_bool(self, value: bool, *index: int) -> None:
        self.bits.set(bool(value), self._shape.index_to_1d(*index))

    def bool_1d(self, i: int) -> bool:
        return self.bits.index(i)

    def set_bool_1d(self, value: bool, i: int) -> None:
        self.bits.set(bool(value), i)

    # coercions

    def float_1d(self, i: int) -> float:
        return bool_to_float(self.bits.index(i))

    def set_float_1d(self, value: float, i: int) -> None:
        self.bits.set(float_to_bool(value), i)

    def int_1d(self, i: int) -> int:
        return bool_to_int(self.bits.index(i))

    def set_int_1d(self, value: int, i: int) -> None:
        self.bits.set(value != 0, i)

    def string_1d(self, i: int) -> str:
        return bool_to_string(self.bits.index(i))

    def set_string_1d(self, value: str, i: int) -> None:
        parsed = parse_bool(value)
        if parsed is None:
            return
        self.bits.set(parsed, i)


def new_bool_shape(shape: Shape) -> Bool:
    return Bool(shape.sizes)


def new_bool_from_values(values: Sequence[bool]) -> Bool:
    tsr = Bool()
    tsr.bits = BitSlice.from_bools(bool(v) for v in values)
    tsr._shape = Shape(len(tsr.bits))
    return tsr
