"""Gather view of a tensor through a tensor of coordinates."""

from __future__ import annotations

from typing import List

from ..core.convert import copy_value_1d, new_of_type
from ..core.exceptions import SizeMismatchError
from ..core.shape import Shape
from ..core.tensor import Tensor, Values


def _check_rank(tensor: Tensor, indexes: Tensor) -> None:
    nd = tensor.num_dims()
    sizes = indexes.shape_sizes()
    inner = sizes[-1] if sizes else 0
    if inner != nd:
        raise SizeMismatchError(
            "Indexed: innermost index dimension must equal the source number of dimensions",
            expected=nd,
            actual=inner,
        )


class Indexed(Tensor):
    """
    View of ``tensor`` where each element is addressed by a full coordinate.

    ``indexes`` is an integer tensor whose innermost dimension has one entry
    per source dimension; its outer dimensions give the shape of the view.
    With a ``[3, 2]`` source and ``indexes`` of shape ``[5, 2]`` the view is
    1D of length 5, element ``i`` reading source ``(indexes[i, 0], indexes[i, 1])``.
    """

    def __init__(self, tensor: Tensor, indexes: Tensor):
        _check_rank(tensor, indexes)
        self.tensor = tensor
        self.indexes = indexes

    def set_tensor(self, tensor: Tensor) -> None:
        """Point the view at ``tensor``, which must have the same rank as before."""
        _check_rank(tensor, self.indexes)
        self.tensor = tensor

    @property
    def data_type(self):
        return self.tensor.data_type

    @property
    def metadata(self):
        return self.tensor.metadata

    def shape(self) -> Shape:
        return Shape(self.indexes.shape_sizes()[:-1])

    def _source_1d(self, i: int) -> List[int]:
        n = len(self)
        if i < 0 or i >= n:
            raise IndexError(f"flat index {i} out of range for length {n}")
        nd = self.tensor.num_dims()
        base = i * nd
        return [self.indexes.int_1d(base + d) for d in range(nd)]

    def source_indexes(self, *index: int) -> List[int]:
        """Source coordinates stored for view coordinates ``index``."""
        return self._source_1d(self.shape().index_to_1d(*index))

    def as_values(self) -> Values:
        shape = self.shape()
        out = new_of_type(self.tensor.data_type, shape.sizes)
        src_shape = self.tensor.shape()
        for i in range(len(shape)):
            copy_value_1d(out, i, self.tensor, src_shape.index_to_1d(*self._source_1d(i)))
        return out

    # access

    def float_value(self, *index: int) -> float:
        return self.tensor.float_value(*self.source_indexes(*index))

    def set_float(self, value: float, *index: int) -> None:
        self.tensor.set_float(value, *self.source_indexes(*index))

    def float_1d(self, i: int) -> float:
        return self.tensor.float_value(*self._source_1d(i))

    def set_float_1d(self, value: float, i: int) -> None:
        self.tensor.set_float(value, *self._source_1d(i))

    def string_value(self, *index: int) -> str:
        return self.tensor.string_value(*self.source_indexes(*index))

    def set_string(self, value: str, *index: int) -> None:
        self.tensor.set_string(value, *self.source_indexes(*index))

    def string_1d(self, i: int) -> str:
        return self.tensor.string_value(*self._source_1d(i))

    def set_string_1d(self, value: str, i: int) -> None:
        self.tensor.set_string(value, *self._source_1d(i))

    def int_value(self, *index: int) -> int:
        return self.tensor.int_value(*self.source_indexes(*index))

    def set_int(self, value: int, *index: int) -> None:
        self.tensor.set_int(value, *self.source_indexes(*index))

    def int_1d(self, i: int) -> int:
        return self.tensor.int_value(*self._source_1d(i))

    def set_int_1d(self, value: int, i: int) -> None:
        self.tensor.set_int(value, *self._source_1d(i))
