"""Boolean-masked view of a tensor."""

from __future__ import annotations

import logging
import math
from typing import Callable, Optional

from ..core.booleans import Bool
from ..core.convert import new_float64_from_values, new_int_from_values, set_shape_from
from ..core.num import is_float_kind
from ..core.shape import Shape
from ..core.strings import new_string_from_values
from ..core.tensor import Tensor, Values

logger = logging.getLogger(__name__)

MaskFilter = Callable[[Tensor, int], bool]


class Masked(Tensor):
    """
    View of ``tensor`` where elements whose ``mask`` bit is false are missing.

    Reads of a missing element return NaN (float), ``""`` (string) or 0 (int),
    and writes to it are silently dropped, so bulk loops can run over the full
    shape. The mask has the source shape; without one every element is visible.
    """

    def __init__(self, tensor: Tensor, mask: Optional[Bool] = None):
        self.tensor = tensor
        if mask is None:
            self.mask = Bool(tensor.shape_sizes())
            self.mask.set_true()
        else:
            self.mask = mask
            self.sync_shape()

    def set_tensor(self, tensor: Tensor) -> None:
        self.tensor = tensor
        self.sync_shape()

    def sync_shape(self) -> None:
        """Give the mask the shape of the source tensor."""
        if self.mask is None:
            self.mask = Bool(self.tensor.shape_sizes())
            return
        set_shape_from(self.mask, self.tensor)

    @property
    def data_type(self):
        return self.tensor.data_type

    @property
    def metadata(self):
        return self.tensor.metadata

    def shape(self) -> Shape:
        return self.tensor.shape()

    def filter(self, fn: MaskFilter) -> None:
        """Re-derive the whole mask from ``fn(tensor, flat_index)``."""
        n = len(self.tensor)
        for i in range(n):
            self.mask.set_bool_1d(fn(self.tensor, i), i)
        if logger.isEnabledFor(logging.DEBUG):
            kept = sum(self.mask.bool_1d(i) for i in range(n))
            logger.debug("Masked.filter: %d of %d elements visible", kept, n)

    def as_values(self) -> Values:
        """
        1D Values holding only the visible elements, in source order. String
        sources give String, float sources Float64, and every other kind Int.
        """
        visible = [i for i in range(len(self.tensor)) if self.mask.bool_1d(i)]
        if self.tensor.is_string():
            return new_string_from_values([self.tensor.string_1d(i) for i in visible])
        if is_float_kind(self.tensor.data_type):
            return new_float64_from_values([self.tensor.float_1d(i) for i in visible])
        return new_int_from_values([self.tensor.int_1d(i) for i in visible])

    # access

    def float_value(self, *index: int) -> float:
        return self.float_1d(self.shape().index_to_1d(*index))

    def set_float(self, value: float, *index: int) -> None:
        self.set_float_1d(value, self.shape().index_to_1d(*index))

    def float_1d(self, i: int) -> float:
        if not self.mask.bool_1d(i):
            return math.nan
        return self.tensor.float_1d(i)

    def set_float_1d(self, value: float, i: int) -> None:
        if not self.mask.bool_1d(i):
            return
        self.tensor.set_float_1d(value, i)

    def string_value(self, *index: int) -> str:
        return self.string_1d(self.shape().index_to_1d(*index))

    def set_string(self, value: str, *index: int) -> None:
        self.set_string_1d(value, self.shape().index_to_1d(*index))

    def string_1d(self, i: int) -> str:
        if not self.mask.bool_1d(i):
            return ""
        return self.tensor.string_1d(i)

    def set_string_1d(self, value: str, i: int) -> None:
        if not self.mask.bool_1d(i):
            return
        self.tensor.set_string_1d(value, i)

    def int_value(self, *index: int) -> int:
        return self.int_1d(self.shape().index_to_1d(*index))

    def set_int(self, value: int, *index: int) -> None:
        self.set_int_1d(value, self.shape().index_to_1d(*index))

    def int_1d(self, i: int) -> int:
        if not self.mask.bool_1d(i):
            return 0
        return self.tensor.int_1d(i)

    def set_int_1d(self, value: int, i: int) -> None:
        if not self.mask.bool_1d(i):
            return
        self.tensor.set_int_1d(value, i)


def as_masked(tensor: Tensor) -> Masked:
    """``tensor`` itself if it is a Masked view, else wrapped with an all-visible mask."""
    if isinstance(tensor, Masked):
        return tensor
    return Masked(tensor)
