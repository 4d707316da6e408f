"""
Row-indexed view of a Values tensor.

:class:`Rows` reorders, filters or sorts the outermost dimension of a
:class:`~labtensor.core.tensor.Values` tensor through a list of row indexes,
leaving the inner cells contiguous. ``indexes is None`` is the identity view
and stays distinct from an explicit ``[0, 1, ..., n-1]`` list: operations that
need a list (sorting, filtering, deleting) build it on first use.
"""

from __future__ import annotations

import functools
import logging
import math
import random
from typing import Callable, List, Optional, Sequence, Tuple

from ..core.convert import new_of_type
from ..core.shape import Shape
from ..core.tensor import Contiguous, Tensor, Values

logger = logging.getLogger(__name__)

ASCENDING = True
DESCENDING = False

INCLUDE = False
EXCLUDE = True

CONTAINS = True
EQUALS = False

IGNORE_CASE = True
USE_CASE = False

RowCompare = Callable[[Values, int, int], int]
RowFilter = Callable[[Values, int], bool]


def compare_ascending(a, b, ascending: bool = ASCENDING) -> int:
    """Three-way comparison; NaN sorts before every number."""
    if not ascending:
        a, b = b, a
    a_nan = isinstance(a, float) and math.isnan(a)
    b_nan = isinstance(b, float) and math.isnan(b)
    if a_nan or b_nan:
        return int(b_nan) - int(a_nan)
    if a < b:
        return -1
    if a > b:
        return 1
    return 0


class Rows(Contiguous):
    """
    View over the outermost dimension of ``tensor`` through ``indexes``.

    Row numbers given to accessors are view rows; they are mapped to source
    rows with :meth:`row_index`. Inner cells keep their layout, so
    :meth:`sub_space` and :meth:`row_tensor` return zero-copy views into the
    source storage (when the source is itself contiguous).
    """

    def __init__(self, tensor: Values, indexes: Optional[Sequence[int]] = None):
        self.tensor = tensor
        self.indexes: Optional[List[int]] = None if indexes is None else list(indexes)

    def set_tensor(self, tensor: Values) -> None:
        """Point the view at ``tensor`` and reset to sequential order."""
        self.tensor = tensor
        self.sequential()

    @property
    def data_type(self):
        return self.tensor.data_type

    @property
    def metadata(self):
        return self.tensor.metadata

    def row_index(self, row: int) -> int:
        """Source row for view ``row``."""
        if self.indexes is None:
            return row
        if row < 0 or row >= len(self.indexes):
            raise IndexError(f"row {row} out of range for {len(self.indexes)} indexed rows")
        return self.indexes[row]

    def _source_rows(self) -> int:
        if self.tensor.num_dims() == 0:
            return 0
        return self.tensor.dim_size(0)

    def num_rows(self) -> int:
        if self.indexes is None:
            return self._source_rows()
        return len(self.indexes)

    def shape(self) -> Shape:
        if self.indexes is None or self.tensor.num_dims() == 0:
            return self.tensor.shape().clone()
        sizes = self.tensor.shape_sizes()
        sizes[0] = len(self.indexes)
        return Shape(sizes)

    def __len__(self) -> int:
        if self.tensor.num_dims() == 0:
            return len(self.tensor)
        rows, cells = self.row_cell_size()
        return rows * cells

    def num_dims(self) -> int:
        return self.tensor.num_dims()

    def dim_size(self, dim: int) -> int:
        if dim == 0:
            return self.num_rows()
        return self.tensor.dim_size(dim)

    def row_cell_size(self) -> Tuple[int, int]:
        _, cells = self.tensor.row_cell_size()
        return self.num_rows(), cells

    # index list management

    def sequential(self) -> None:
        self.indexes = None

    def indexes_needed(self) -> None:
        """Materialize the explicit index list if the view is still sequential."""
        if self._source_rows() <= 0:
            self.indexes = None
            return
        if self.indexes is None:
            self.indexes = list(range(self._source_rows()))

    def valid_indexes(self) -> None:
        """
        Drop indexes that no longer refer to a source row, keeping their order.
        Call after rows have been removed from the source tensor.
        """
        rows = self._source_rows()
        if rows <= 0 or self.indexes is None:
            self.indexes = None
            return
        self.indexes[:] = [idx for idx in self.indexes if idx < rows]

    def exclude_missing(self) -> None:
        """Remove rows whose first cell is NaN."""
        if self._source_rows() <= 0:
            self.indexes = None
            return
        self.indexes_needed()
        tensor = self.tensor
        self.indexes[:] = [
            idx for idx in self.indexes if not math.isnan(tensor.float_row_cell(idx, 0))
        ]

    def permuted(self, rng: Optional[random.Random] = None) -> None:
        """Shuffle the rows, starting from sequential order when there is no list yet."""
        if self._source_rows() <= 0:
            self.indexes = None
            return
        rng = rng or random
        self.indexes_needed()
        rng.shuffle(self.indexes)

    def sort_func(self, cmp: RowCompare) -> None:
        """
        Sort rows by ``cmp(tensor, i, j)``, which receives source row numbers
        and returns a negative, zero or positive int.
        """
        self.indexes_needed()
        if self.indexes is None:
            return
        tensor = self.tensor
        key = functools.cmp_to_key(lambda a, b: cmp(tensor, a, b))
        self.indexes.sort(key=key)

    def sort_stable_func(self, cmp: RowCompare) -> None:
        # list.sort is stable, so equal rows keep their current relative order
        self.sort_func(cmp)

    def sort(self, ascending: bool = ASCENDING) -> None:
        """Sort by the first cell of each row: lexically for strings, else numerically."""
        self.sort_func(self._first_cell_compare(ascending))

    def sort_stable(self, ascending: bool = ASCENDING) -> None:
        self.sort_stable_func(self._first_cell_compare(ascending))

    def _first_cell_compare(self, ascending: bool) -> RowCompare:
        if self.tensor.is_string():
            return lambda tsr, i, j: compare_ascending(
                tsr.string_row_cell(i, 0), tsr.string_row_cell(j, 0), ascending
            )
        return lambda tsr, i, j: compare_ascending(
            tsr.float_row_cell(i, 0), tsr.float_row_cell(j, 0), ascending
        )

    def sort_indexes(self) -> None:
        """Restore source order while keeping any filtering."""
        if self.indexes is None:
            return
        self.indexes.sort()

    def filter(self, fn: RowFilter) -> None:
        """Keep the rows for which ``fn(tensor, source_row)`` is true."""
        self.indexes_needed()
        if self.indexes is None:
            return
        before = len(self.indexes)
        tensor = self.tensor
        self.indexes[:] = [idx for idx in self.indexes if fn(tensor, idx)]
        logger.debug("Rows.filter: kept %d of %d rows", len(self.indexes), before)

    def filter_string(
        self,
        text: str,
        exclude: bool = INCLUDE,
        contains: bool = EQUALS,
        ignore_case: bool = USE_CASE,
    ) -> None:
        """
        Filter on the first cell of each row compared to ``text``. Use the
        module constants for the flags: ``INCLUDE``/``EXCLUDE``,
        ``CONTAINS``/``EQUALS`` and ``IGNORE_CASE``/``USE_CASE``.
        """
        folded = text.casefold()

        def keep(tsr: Values, row: int) -> bool:
            val = tsr.string_row_cell(row, 0)
            if contains and ignore_case:
                has = folded in val.casefold()
            elif contains:
                has = text in val
            elif ignore_case:
                has = val.casefold() == folded
            else:
                has = val == text
            return has != exclude

        self.filter(keep)

    def clone_indexes(self) -> "Rows":
        """New view of the same tensor with its own copy of the indexes."""
        rw = Rows(self.tensor)
        rw.copy_indexes(self)
        return rw

    def copy_indexes(self, other: "Rows") -> None:
        self.indexes = None if other.indexes is None else list(other.indexes)

    def add_rows(self, n: int) -> None:
        """Append ``n`` rows to the source tensor and to the end of the view."""
        start = self._source_rows()
        self.tensor.set_num_rows(start + n)
        if self.indexes is not None:
            self.indexes.extend(range(start, start + n))

    def insert_rows(self, at: int, n: int) -> None:
        """Append ``n`` rows to the source tensor and insert them at view row ``at``."""
        start = self._source_rows()
        self.indexes_needed()
        self.tensor.set_num_rows(start + n)
        indexes = self.indexes or []
        self.indexes = indexes[:at] + list(range(start, start + n)) + indexes[at:]

    def delete_rows(self, at: int, n: int) -> None:
        """Remove ``n`` view rows starting at ``at``; the source is unchanged."""
        self.indexes_needed()
        if self.indexes is None:
            return
        del self.indexes[at : at + n]

    def swap(self, i: int, j: int) -> None:
        if self.indexes is None:
            return
        self.indexes[i], self.indexes[j] = self.indexes[j], self.indexes[i]

    def as_values(self) -> Values:
        """
        The source tensor itself when sequential, otherwise a new Values
        holding the rows in view order.
        """
        if self.indexes is None:
            return self.tensor
        out = new_of_type(self.tensor.data_type, self.shape_sizes())
        _, cells = self.row_cell_size()
        for row, src_row in enumerate(self.indexes):
            out.copy_cells_from(self.tensor, row * cells, src_row * cells, cells)
        return out

    # sub-spaces

    def _contiguous(self) -> Contiguous:
        if not isinstance(self.tensor, Contiguous):
            raise TypeError(f"{type(self.tensor).__name__} does not support sub_space")
        return self.tensor

    def sub_space(self, *offsets: int) -> Values:
        if not offsets:
            raise IndexError("sub_space needs at least one offset")
        return self._contiguous().sub_space(self.row_index(offsets[0]), *offsets[1:])

    def row_tensor(self, row: int) -> Values:
        return self._contiguous().row_tensor(self.row_index(row))

    def set_row_tensor(self, value: Tensor, row: int) -> None:
        _, cells = self.row_cell_size()
        src_row = self.row_index(row)
        self.tensor.copy_cells_from(value, src_row * cells, 0, min(len(value), cells))

    # flat and n-dimensional access

    def _source_index(self, index: Sequence[int]) -> List[int]:
        if self.indexes is None or not index:
            return list(index)
        src = list(index)
        src[0] = self.row_index(src[0])
        return src

    def _source_1d(self, i: int) -> int:
        if self.indexes is None:
            return i
        n = len(self)
        if i < 0 or i >= n:
            raise IndexError(f"flat index {i} out of range for length {n}")
        _, cells = self.row_cell_size()
        row, cell = divmod(i, cells)
        return self.indexes[row] * cells + cell

    def float_value(self, *index: int) -> float:
        return self.tensor.float_value(*self._source_index(index))

    def set_float(self, value: float, *index: int) -> None:
        self.tensor.set_float(value, *self._source_index(index))

    def float_1d(self, i: int) -> float:
        return self.tensor.float_1d(self._source_1d(i))

    def set_float_1d(self, value: float, i: int) -> None:
        self.tensor.set_float_1d(value, self._source_1d(i))

    def float_row_cell(self, row: int, cell: int) -> float:
        return self.tensor.float_row_cell(self.row_index(row), cell)

    def set_float_row_cell(self, value: float, row: int, cell: int) -> None:
        self.tensor.set_float_row_cell(value, self.row_index(row), cell)

    def string_value(self, *index: int) -> str:
        return self.tensor.string_value(*self._source_index(index))

    def set_string(self, value: str, *index: int) -> None:
        self.tensor.set_string(value, *self._source_index(index))

    def string_1d(self, i: int) -> str:
        return self.tensor.string_1d(self._source_1d(i))

    def set_string_1d(self, value: str, i: int) -> None:
        self.tensor.set_string_1d(value, self._source_1d(i))

    def string_row_cell(self, row: int, cell: int) -> str:
        return self.tensor.string_row_cell(self.row_index(row), cell)

    def set_string_row_cell(self, value: str, row: int, cell: int) -> None:
        self.tensor.set_string_row_cell(value, self.row_index(row), cell)

    def int_value(self, *index: int) -> int:
        return self.tensor.int_value(*self._source_index(index))

    def set_int(self, value: int, *index: int) -> None:
        self.tensor.set_int(value, *self._source_index(index))

    def int_1d(self, i: int) -> int:
        return self.tensor.int_1d(self._source_1d(i))

    def set_int_1d(self, value: int, i: int) -> None:
        self.tensor.set_int_1d(value, self._source_1d(i))

    def int_row_cell(self, row: int, cell: int) -> int:
        return self.tensor.int_row_cell(self.row_index(row), cell)

    def set_int_row_cell(self, value: int, row: int, cell: int) -> None:
        self.tensor.set_int_row_cell(value, self.row_index(row), cell)


def as_rows(tensor: Tensor) -> Rows:
    """``tensor`` itself if it is a Rows view, else a sequential Rows over its values."""
    if isinstance(tensor, Rows):
        return tensor
    return Rows(tensor.as_values())
