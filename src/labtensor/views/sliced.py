"""Per-dimension index view of a tensor."""

from __future__ import annotations

import functools
import random
from typing import Callable, List, Optional, Sequence

from ..core.convert import copy_value_1d, new_of_type
from ..core.shape import Shape
from ..core.tensor import Tensor, Values

SliceCompare = Callable[[Tensor, int, int, int], int]
SliceFilter = Callable[[Tensor, int, int], bool]


class Sliced(Tensor):
    """
    View of ``tensor`` through one index list per dimension.

    ``indexes[d] is None`` means the full range of dimension ``d``; otherwise
    the view's size along ``d`` is ``len(indexes[d])`` and view coordinate ``i``
    reads source coordinate ``indexes[d][i]``. Indexes may repeat or reorder
    source positions. There is no ``sub_space``: the selected elements are not
    generally contiguous in the source.
    """

    def __init__(self, tensor: Tensor, *indexes: Optional[Sequence[int]]):
        self.tensor = tensor
        self.indexes: List[Optional[List[int]]] = []
        self.sequential()
        for dim, idxs in enumerate(indexes[: tensor.num_dims()]):
            if idxs is not None:
                self.indexes[dim] = list(idxs)

    def set_tensor(self, tensor: Tensor) -> None:
        self.tensor = tensor
        self.sequential()

    @property
    def data_type(self):
        return self.tensor.data_type

    @property
    def metadata(self):
        return self.tensor.metadata

    def sequential(self) -> None:
        """Reset every dimension to its full identity range."""
        self.indexes = [None] * self.tensor.num_dims()

    def indexes_needed(self, dim: int) -> None:
        if self.indexes[dim] is None:
            self.indexes[dim] = list(range(self.tensor.dim_size(dim)))

    def valid_indexes(self) -> None:
        """Drop indexes past the current end of their source dimension."""
        if len(self.indexes) != self.tensor.num_dims():
            self.sequential()
            return
        for dim, idxs in enumerate(self.indexes):
            if idxs is None:
                continue
            size = self.tensor.dim_size(dim)
            idxs[:] = [i for i in idxs if i < size]

    def shape(self) -> Shape:
        sizes = self.tensor.shape_sizes()
        for dim, idxs in enumerate(self.indexes):
            if idxs is not None:
                sizes[dim] = len(idxs)
        return Shape(sizes)

    def source_indexes(self, *index: int) -> List[int]:
        """Source coordinates for view coordinates ``index``."""
        if len(index) != len(self.indexes):
            raise IndexError(
                f"index {list(index)} has {len(index)} dimensions, view has {len(self.indexes)}"
            )
        src = list(index)
        for dim, idxs in enumerate(self.indexes):
            if idxs is None:
                continue
            coord = index[dim]
            if coord < 0 or coord >= len(idxs):
                raise IndexError(
                    f"index {coord} out of range for dimension {dim} with size {len(idxs)}"
                )
            src[dim] = idxs[coord]
        return src

    def _source_index_1d(self, i: int) -> List[int]:
        return self.source_indexes(*self.shape().index_from_1d(i))

    def sort_func(self, dim: int, cmp: SliceCompare) -> None:
        """Sort the indexes of ``dim`` with ``cmp(tensor, dim, i, j)`` over source positions."""
        self.indexes_needed(dim)
        tensor = self.tensor
        key = functools.cmp_to_key(lambda a, b: cmp(tensor, dim, a, b))
        self.indexes[dim].sort(key=key)

    def filter(self, dim: int, fn: SliceFilter) -> None:
        """Keep the positions ``i`` of ``dim`` for which ``fn(tensor, dim, i)`` is true."""
        self.indexes_needed(dim)
        tensor = self.tensor
        self.indexes[dim][:] = [i for i in self.indexes[dim] if fn(tensor, dim, i)]

    def permuted(self, dim: int, rng: Optional[random.Random] = None) -> None:
        rng = rng or random
        self.indexes_needed(dim)
        rng.shuffle(self.indexes[dim])

    def as_values(self) -> Values:
        """Copy the viewed elements into new Values of the source kind."""
        shape = self.shape()
        out = new_of_type(self.tensor.data_type, shape.sizes)
        src_shape = self.tensor.shape()
        for i in range(len(shape)):
            src = src_shape.index_to_1d(*self.source_indexes(*shape.index_from_1d(i)))
            copy_value_1d(out, i, self.tensor, src)
        return out

    # access

    def float_value(self, *index: int) -> float:
        return self.tensor.float_value(*self.source_indexes(*index))

    def set_float(self, value: float, *index: int) -> None:
        self.tensor.set_float(value, *self.source_indexes(*index))

    def float_1d(self, i: int) -> float:
        return self.tensor.float_value(*self._source_index_1d(i))

    def set_float_1d(self, value: float, i: int) -> None:
        self.tensor.set_float(value, *self._source_index_1d(i))

    def string_value(self, *index: int) -> str:
        return self.tensor.string_value(*self.source_indexes(*index))

    def set_string(self, value: str, *index: int) -> None:
        self.tensor.set_string(value, *self.source_indexes(*index))

    def string_1d(self, i: int) -> str:
        return self.tensor.string_value(*self._source_index_1d(i))

    def set_string_1d(self, value: str, i: int) -> None:
        self.tensor.set_string(value, *self._source_index_1d(i))

    def int_value(self, *index: int) -> int:
        return self.tensor.int_value(*self.source_indexes(*index))

    def set_int(self, value: int, *index: int) -> None:
        self.tensor.set_int(value, *self.source_indexes(*index))

    def int_1d(self, i: int) -> int:
        return self.tensor.int_value(*self._source_index_1d(i))

    def set_int_1d(self, value: int, i: int) -> None:
        self.tensor.set_int(value, *self._source_index_1d(i))


def as_sliced(tensor: Tensor) -> Sliced:
    if isinstance(tensor, Sliced):
        return tensor
    return Sliced(tensor)
