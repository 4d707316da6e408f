from __future__ import annotations

from abc import abstractmethod
from typing import Any, Dict, Tuple

import numpy as np

from .exceptions import SizeMismatchError
from .shape import Shape, _prod
from .tensor import Contiguous, Tensor, Values


class ShapedValues(Values):
    """
    Shape bookkeeping and the n-dimensional / row-cell accessors, all
    expressed through the flat 1D accessors of each concrete kind.
    """

    def __init__(self):
        self._shape = Shape()
        self._metadata: Dict[str, Any] = {}

    def shape(self) -> Shape:
        return self._shape

    def __len__(self) -> int:
        return len(self._shape)

    def num_dims(self) -> int:
        return len(self._shape.sizes)

    def dim_size(self, dim: int) -> int:
        return self._shape.sizes[dim]

    @property
    def metadata(self) -> Dict[str, Any]:
        return self._metadata

    def row_cell_size(self) -> Tuple[int, int]:
        return self._shape.row_cell_size()

    def set_shape_sizes(self, *sizes: int) -> None:
        self._shape.set_shape_sizes(*sizes)
        self._resize(len(self._shape))

    def set_num_rows(self, rows: int) -> None:
        if not self._shape.sizes:
            self.set_shape_sizes(rows)
            return
        sizes = list(self._shape.sizes)
        sizes[0] = int(rows)
        self.set_shape_sizes(sizes)

    @abstractmethod
    def _resize(self, n: int) -> None:
        ...

    def _row_offset(self, row: int, cell: int) -> int:
        _, cells = self._shape.row_cell_size()
        return row * cells + cell

    def _check_append(self, src: Tensor) -> Tuple[int, int, int]:
        """
        ``(rows, cells, src_rows)`` for appending ``src``. A target without
        dimensions has no rows yet and takes its cell shape from ``src``.
        """
        if src.num_dims() == 0:
            rows, cells = self._shape.row_cell_size()
            return (0 if not self._shape.sizes else rows), cells, 0
        src_rows, src_cells = src.shape().row_cell_size()
        if not self._shape.sizes:
            self._shape.set_shape_sizes([0] + src.shape_sizes()[1:])
        rows, cells = self._shape.row_cell_size()
        if cells != src_cells:
            raise SizeMismatchError(
                "append_from: cell sizes do not match", expected=cells, actual=src_cells
            )
        return rows, cells, src_rows

    # floats

    def float_value(self, *index: int) -> float:
        return self.float_1d(self._shape.index_to_1d(*index))

    def set_float(self, value: float, *index: int) -> None:
        self.set_float_1d(value, self._shape.index_to_1d(*index))

    def float_row_cell(self, row: int, cell: int) -> float:
        return self.float_1d(self._row_offset(row, cell))

    def set_float_row_cell(self, value: float, row: int, cell: int) -> None:
        self.set_float_1d(value, self._row_offset(row, cell))

    # strings

    def string_value(self, *index: int) -> str:
        return self.string_1d(self._shape.index_to_1d(*index))

    def set_string(self, value: str, *index: int) -> None:
        self.set_string_1d(value, self._shape.index_to_1d(*index))

    def string_row_cell(self, row: int, cell: int) -> str:
        return self.string_1d(self._row_offset(row, cell))

    def set_string_row_cell(self, value: str, row: int, cell: int) -> None:
        self.set_string_1d(value, self._row_offset(row, cell))

    # ints

    def int_value(self, *index: int) -> int:
        return self.int_1d(self._shape.index_to_1d(*index))

    def set_int(self, value: int, *index: int) -> None:
        self.set_int_1d(value, self._shape.index_to_1d(*index))

    def int_row_cell(self, row: int, cell: int) -> int:
        return self.int_1d(self._row_offset(row, cell))

    def set_int_row_cell(self, value: int, row: int, cell: int) -> None:
        self.set_int_1d(value, self._row_offset(row, cell))


class ArrayValues(ShapedValues, Contiguous):
    """
    Values backed by a flat NumPy array.

    ``values`` is always exactly ``len(self)`` long and is a view onto a
    possibly larger ``_store``, so shrinking keeps the capacity. Sub-spaces and
    :meth:`view` results hold NumPy views onto the same memory.
    """

    def __init__(self, dtype, *sizes: int):
        super().__init__()
        self._dtype = np.dtype(dtype)
        self._store = self._allocate(0)
        self.values = self._store
        self.set_shape_sizes(*sizes)

    @abstractmethod
    def _allocate(self, n: int) -> np.ndarray:
        ...

    @abstractmethod
    def _zero(self) -> Any:
        ...

    @abstractmethod
    def _coerce_from(self, src: Tensor, src_index: int, dst_index: int) -> None:
        """Set element ``dst_index`` from ``src`` through the standard coercion."""

    def _same_kind(self, src: Tensor) -> bool:
        return isinstance(src, ArrayValues) and src._dtype == self._dtype

    def _resize(self, n: int) -> None:
        old = len(self.values)
        if n > len(self._store):
            store = self._allocate(n)
            store[:old] = self.values
            self._store = store
        self.values = self._store[:n]
        if n > old:
            self.values[old:n] = self._zero()

    def _new_empty(self) -> "ArrayValues":
        tsr = type(self).__new__(type(self))
        ShapedValues.__init__(tsr)
        tsr._dtype = self._dtype
        return tsr

    def _wrap(self, buffer: np.ndarray, sizes) -> "ArrayValues":
        tsr = self._new_empty()
        tsr._shape = Shape(list(sizes))
        tsr._store = buffer
        tsr.values = buffer
        return tsr

    @property
    def data_type(self) -> np.dtype:
        return self._dtype

    def set_zeros(self) -> None:
        self.values[:] = self._zero()

    def clone(self) -> "ArrayValues":
        tsr = self._wrap(self.values.copy(), self._shape.sizes)
        tsr._metadata = dict(self._metadata)
        return tsr

    def view(self) -> "ArrayValues":
        tsr = self._wrap(self.values, self._shape.sizes)
        tsr._metadata = self._metadata
        return tsr

    def copy_from(self, src: Tensor) -> None:
        n = min(len(self), len(src))
        if self._same_kind(src):
            self.values[:n] = src.values[:n]
            return
        for i in range(n):
            self._coerce_from(src, i, i)

    def append_from(self, src: Tensor) -> "ArrayValues":
        rows, cells, src_rows = self._check_append(src)
        self.set_num_rows(rows + src_rows)
        self.copy_cells_from(src, rows * cells, 0, src_rows * cells)
        return self

    def copy_cells_from(self, src: Tensor, to: int, start: int, n: int) -> None:
        if self._same_kind(src):
            self.values[to : to + n] = src.values[start : start + n]
            return
        for i in range(n):
            self._coerce_from(src, start + i, to + i)

    def sub_space(self, *offsets: int) -> "ArrayValues":
        nd = self.num_dims()
        if not offsets or len(offsets) >= nd:
            raise IndexError(
                f"sub_space needs between 1 and {nd - 1} offsets, got {len(offsets)}"
            )
        start = 0
        for dim, offset in enumerate(offsets):
            size = self._shape.sizes[dim]
            if offset < 0 or offset >= size:
                raise IndexError(
                    f"index {offset} out of range for dimension {dim} with size {size}"
                )
            start += offset * self._shape.strides[dim]
        inner = self._shape.sizes[len(offsets):]
        n = _prod(inner)
        return self._wrap(self.values[start : start + n], inner)

    def set_row_tensor(self, value: Tensor, row: int) -> None:
        _, cells = self._shape.row_cell_size()
        self.copy_cells_from(value, row * cells, 0, min(len(value), cells))

    def _append_row(self, setter, values) -> None:
        rows, cells = self._shape.row_cell_size()
        if not self._shape.sizes:
            rows = 0
        self.set_num_rows(rows + 1)
        for cell, value in enumerate(values[:cells]):
            setter(value, rows, cell)

    def append_row_float(self, *values: float) -> None:
        self._append_row(self.set_float_row_cell, values)

    def append_row_int(self, *values: int) -> None:
        self._append_row(self.set_int_row_cell, values)

    def append_row_string(self, *values: str) -> None:
        self._append_row(self.set_string_row_cell, values)
