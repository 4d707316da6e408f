"""
Tensor interfaces.

Per C / NumPy conventions indexes are row-major, ordered from outer to inner
left-to-right. :class:`Tensor` is the most general contract: shape access and
reads/writes through three coercions (float, int, string) using either
n-dimensional or flat 1D indexes. Concrete storage kinds implement
:class:`Values`; views implement :class:`Tensor` and only the capabilities
their layout allows.

Capabilities are separate ABCs:

* :class:`RowMajor`: row/cell access where a row is the outermost dimension
  and a cell is the flat index into all inner dimensions.
* :class:`Contiguous`: zero-copy :meth:`Contiguous.sub_space` views, only
  available where inner dimensions are stored contiguously (``Number``,
  ``String`` and the ``Rows`` view, but not the bit-packed ``Bool``).
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Tuple

import numpy as np

from .shape import Shape

MAX_SPRINT_LENGTH = 1000


class Tensor(ABC):
    @abstractmethod
    def shape(self) -> Shape:
        """Shape of the tensor; views may construct this on demand."""

    def shape_sizes(self) -> List[int]:
        return list(self.shape().sizes)

    def __len__(self) -> int:
        return len(self.shape())

    def num_dims(self) -> int:
        return self.shape().num_dims()

    def dim_size(self, dim: int) -> int:
        return self.shape().dim_size(dim)

    @property
    @abstractmethod
    def data_type(self) -> np.dtype:
        """NumPy dtype of the elements; ``<U`` for strings, ``bool`` for Bool."""

    def is_string(self) -> bool:
        return self.data_type.kind == "U"

    @property
    @abstractmethod
    def metadata(self) -> Dict[str, Any]:
        ...

    def label(self) -> str:
        name = self.metadata.get("name")
        sizes = self.shape_sizes()
        if name:
            return f"{name} {sizes}"
        return f"{type(self).__name__} {sizes}"

    @abstractmethod
    def as_values(self) -> "Values":
        """Return raw Values, rendering a view into new contiguous storage."""

    # floats

    @abstractmethod
    def float_value(self, *index: int) -> float:
        ...

    @abstractmethod
    def set_float(self, value: float, *index: int) -> None:
        ...

    @abstractmethod
    def float_1d(self, i: int) -> float:
        ...

    @abstractmethod
    def set_float_1d(self, value: float, i: int) -> None:
        ...

    # strings

    @abstractmethod
    def string_value(self, *index: int) -> str:
        ...

    @abstractmethod
    def set_string(self, value: str, *index: int) -> None:
        ...

    @abstractmethod
    def string_1d(self, i: int) -> str:
        ...

    @abstractmethod
    def set_string_1d(self, value: str, i: int) -> None:
        ...

    # ints

    @abstractmethod
    def int_value(self, *index: int) -> int:
        ...

    @abstractmethod
    def set_int(self, value: int, *index: int) -> None:
        ...

    @abstractmethod
    def int_1d(self, i: int) -> int:
        ...

    @abstractmethod
    def set_int_1d(self, value: int, i: int) -> None:
        ...

    def __repr__(self) -> str:
        return sprint(self)


class RowMajor(Tensor):
    """Row/cell access; the row is the outermost dimension."""

    @abstractmethod
    def row_cell_size(self) -> Tuple[int, int]:
        ...

    @abstractmethod
    def float_row_cell(self, row: int, cell: int) -> float:
        ...

    @abstractmethod
    def set_float_row_cell(self, value: float, row: int, cell: int) -> None:
        ...

    @abstractmethod
    def int_row_cell(self, row: int, cell: int) -> int:
        ...

    @abstractmethod
    def set_int_row_cell(self, value: int, row: int, cell: int) -> None:
        ...

    @abstractmethod
    def string_row_cell(self, row: int, cell: int) -> str:
        ...

    @abstractmethod
    def set_string_row_cell(self, value: str, row: int, cell: int) -> None:
        ...

    def float_row(self, row: int) -> float:
        return self.float_row_cell(row, 0)

    def set_float_row(self, value: float, row: int) -> None:
        self.set_float_row_cell(value, row, 0)

    def int_row(self, row: int) -> int:
        return self.int_row_cell(row, 0)

    def set_int_row(self, value: int, row: int) -> None:
        self.set_int_row_cell(value, row, 0)

    def string_row(self, row: int) -> str:
        return self.string_row_cell(row, 0)

    def set_string_row(self, value: str, row: int) -> None:
        self.set_string_row_cell(value, row, 0)


class Contiguous(RowMajor):
    """Zero-copy access to inner sub-spaces of contiguous row-major storage."""

    @abstractmethod
    def sub_space(self, *offsets: int) -> "Values":
        """
        Values view of the inner dimensions at the given outer offsets
        (``len(offsets) < num_dims()``). The view shares storage with this
        tensor: writes through either are visible in both.
        """

    def row_tensor(self, row: int) -> "Values":
        return self.sub_space(row)

    @abstractmethod
    def set_row_tensor(self, value: Tensor, row: int) -> None:
        ...


class Values(RowMajor):
    """Owning storage: a flat buffer plus a :class:`Shape`."""

    @abstractmethod
    def set_shape_sizes(self, *sizes: int) -> None:
        """Reshape, reallocating as needed and keeping existing data that fits."""

    @abstractmethod
    def set_num_rows(self, rows: int) -> None:
        """
        Set the outermost dimension size. Cheap to call with 0 after a large
        allocation: capacity is kept, so incremental regrowth reuses it.
        """

    @abstractmethod
    def clone(self) -> "Values":
        ...

    @abstractmethod
    def view(self) -> "Values":
        """New Values sharing this buffer with an independent shape."""

    @abstractmethod
    def copy_from(self, src: Tensor) -> None:
        ...

    @abstractmethod
    def append_from(self, src: Tensor) -> "Values":
        ...

    @abstractmethod
    def copy_cells_from(self, src: Tensor, to: int, start: int, n: int) -> None:
        ...

    @abstractmethod
    def set_zeros(self) -> None:
        ...

    def as_values(self) -> "Values":
        return self


def sprint(tensor: Tensor, max_len: int = MAX_SPRINT_LENGTH) -> str:
    """Readable dump of ``tensor`` values, one outermost row per line."""
    sizes = tensor.shape_sizes()
    n = len(tensor)
    header = tensor.label()
    if n == 0:
        return f"{header} []"
    cells = 1
    for size in sizes[1:]:
        cells *= size
    lines = [header]
    shown = min(n, max_len)
    for start in range(0, shown, max(cells, 1)):
        end = min(start + cells, shown)
        row = " ".join(tensor.string_1d(i) for i in range(start, end))
        lines.append(f"[{start // max(cells, 1)}]: {row}")
    if shown < n:
        lines.append("...")
    return "\n".join(lines)
