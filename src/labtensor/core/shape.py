from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Sequence, Tuple

from .exceptions import SliceError


def _prod(values: Iterable[int]) -> int:
    result = 1
    for value in values:
        result *= int(value)
    return int(result)


def normalize_sizes(sizes: Sequence) -> List[int]:
    """Accept either ``(2, 3)`` varargs or a single sequence ``([2, 3],)``."""
    if len(sizes) == 1 and isinstance(sizes[0], (list, tuple)):
        sizes = sizes[0]
    result = [int(s) for s in sizes]
    for size in result:
        if size < 0:
            raise ValueError(f"shape sizes must be non-negative, got {result}")
    return result


class Shape:
    """
    Dimension sizes of an n-dimensional tensor, outer to inner (row-major).

    The last dimension varies fastest. ``strides`` are derived from ``sizes``
    and converted back and forth by :meth:`index_to_1d` and
    :meth:`index_from_1d`. An empty shape is valid and has length 0.
    """

    __slots__ = ("sizes", "strides")

    def __init__(self, *sizes):
        self.sizes: List[int] = []
        self.strides: List[int] = []
        self.set_shape_sizes(*sizes)

    def set_shape_sizes(self, *sizes) -> None:
        self.sizes = normalize_sizes(sizes)
        self.strides = _row_major_strides(self.sizes)

    def copy_from(self, other: "Shape") -> None:
        self.sizes = list(other.sizes)
        self.strides = list(other.strides)

    def clone(self) -> "Shape":
        return Shape(self.sizes)

    def __len__(self) -> int:
        if not self.sizes:
            return 0
        return _prod(self.sizes)

    def num_dims(self) -> int:
        return len(self.sizes)

    def dim_size(self, dim: int) -> int:
        return self.sizes[dim]

    def is_equal(self, other: "Shape") -> bool:
        return self.sizes == other.sizes

    def sizes_equal(self, sizes: Sequence[int]) -> bool:
        return self.sizes == list(sizes)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Shape):
            return NotImplemented
        return self.is_equal(other)

    def __repr__(self) -> str:
        return f"Shape({', '.join(str(s) for s in self.sizes)})"

    def row_cell_size(self) -> Tuple[int, int]:
        """Split into the outermost row count and the size of one row (cells)."""
        if not self.sizes:
            return 1, 1
        return self.sizes[0], _prod(self.sizes[1:])

    def index_to_1d(self, *index: int) -> int:
        if len(index) != len(self.sizes):
            raise IndexError(
                f"index {list(index)} has {len(index)} dimensions, shape has {len(self.sizes)}"
            )
        offset = 0
        for dim, (coord, size, stride) in enumerate(zip(index, self.sizes, self.strides)):
            if coord < 0 or coord >= size:
                raise IndexError(
                    f"index {coord} out of range for dimension {dim} with size {size}"
                )
            offset += coord * stride
        return offset

    def index_from_1d(self, offset: int) -> List[int]:
        n = len(self)
        if offset < 0 or offset >= n:
            raise IndexError(f"flat index {offset} out of range for length {n}")
        index = []
        rem = offset
        for stride in self.strides:
            coord, rem = divmod(rem, stride)
            index.append(coord)
        return index

    def slice(self, *ranges: "Range") -> List[int]:
        """Sizes after applying ``ranges`` in order; trailing dims are kept whole."""
        sizes = list(self.sizes)
        zero_dims = []
        for dim, rng in enumerate(ranges[: len(sizes)]):
            sizes[dim] = rng.size(self.sizes[dim])
            if sizes[dim] == 0:
                zero_dims.append(dim)
        if zero_dims:
            raise SliceError(f"Shape slice has zero size for dimensions: {zero_dims}")
        return sizes


def _row_major_strides(sizes: Sequence[int]) -> List[int]:
    strides = [1] * len(sizes)
    acc = 1
    for dim in range(len(sizes) - 1, -1, -1):
        strides[dim] = acc
        acc *= max(sizes[dim], 1)
    return strides


@dataclass
class Range:
    """
    Start, exclusive end and increment over one dimension.

    Zero values mean defaults: ``end=0`` is the full dimension size and
    ``incr=0`` is 1.
    """

    start: int = 0
    end: int = 0
    incr: int = 0

    def end_actual(self, size: int) -> int:
        if self.end == 0:
            return size
        return min(self.end, size)

    def incr_actual(self) -> int:
        return max(1, self.incr)

    def size(self, size: int) -> int:
        end = self.end_actual(size)
        if end <= self.start:
            return 0
        incr = self.incr_actual()
        return (end - self.start + incr - 1) // incr


def split_at_inner_dims(tensor, n_inner: int) -> List[int]:
    """
    Keep the ``n_inner`` innermost sizes of ``tensor`` and collapse the rest
    into one leading dimension. Returns an empty list when the tensor has
    fewer than ``n_inner`` dimensions.
    """
    sizes = tensor.shape_sizes()
    if len(sizes) < n_inner:
        return []
    split = len(sizes) - n_inner
    return [_prod(sizes[:split])] + list(sizes[split:])
