from __future__ import annotations

from typing import List, Sequence

from .exceptions import SizeMismatchError
from .shape import Range
from .tensor import Tensor, Values


def _source_index(coords: Sequence[int], ranges: Sequence[Range]) -> List[int]:
    src = list(coords)
    for dim, rng in enumerate(ranges[: len(src)]):
        src[dim] = rng.start + coords[dim] * rng.incr_actual()
    return src


def slice_values(tensor: Tensor, out: Values, *ranges: Range) -> None:
    """
    Copy the region of ``tensor`` selected by ``ranges`` into ``out``.

    Dimensions beyond the given ranges are included whole. Unlike
    :meth:`Contiguous.sub_space` the result is a copy, which allows
    discontinuous ranges.
    """
    sizes = tensor.shape().slice(*ranges)
    out.set_shape_sizes(sizes)
    src_shape = tensor.shape()
    out_shape = out.shape()
    strings = out.is_string()
    for i in range(len(out)):
        offset = src_shape.index_to_1d(*_source_index(out_shape.index_from_1d(i), ranges))
        if strings:
            out.set_string_1d(tensor.string_1d(offset), i)
        else:
            out.set_float_1d(tensor.float_1d(offset), i)


def slice_set(tensor: Tensor, sliced: Tensor, *ranges: Range) -> None:
    """
    Write ``sliced`` back into ``tensor`` at the region selected by ``ranges``.
    ``sliced`` must have the shape the ranges produce; starts may differ from
    those used to extract it.
    """
    sizes = tensor.shape().slice(*ranges)
    if sizes != sliced.shape_sizes():
        raise SizeMismatchError(
            f"slice_set: ranges select {sizes}, slice has {sliced.shape_sizes()}"
        )
    src_shape = tensor.shape()
    slc_shape = sliced.shape()
    strings = sliced.is_string()
    for i in range(len(sliced)):
        offset = src_shape.index_to_1d(*_source_index(slc_shape.index_from_1d(i), ranges))
        if strings:
            tensor.set_string_1d(sliced.string_1d(i), offset)
        else:
            tensor.set_float_1d(sliced.float_1d(i), offset)
