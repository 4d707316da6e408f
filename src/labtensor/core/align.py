"""
Shape alignment (NumPy-style broadcasting) and the elementwise helpers built
on it.

Alignment runs from the innermost dimension outward; a dimension missing on
the lower-rank operand counts as size 1. Every broadcasting read goes through
:func:`wrap_index_1d`, which projects a size-1 dimension back to its single
stored element.
"""

from __future__ import annotations

from typing import Callable, List, Tuple, Union

from .booleans import Bool
from .convert import set_shape_from
from .exceptions import AlignmentError
from .funcs import output_like
from .shape import Shape
from .strings import String
from .tensor import Tensor, Values
from .vectorize import vectorize_threaded

ShapeLike = Union[Shape, Tensor]

BOOL_FLOPS = 5


def _sizes_of(item: ShapeLike) -> List[int]:
    if isinstance(item, Shape):
        return list(item.sizes)
    return item.shape_sizes()


def _aligned_pair(a: ShapeLike, b: ShapeLike):
    asz = _sizes_of(a)
    bsz = _sizes_of(b)
    an, bn = len(asz), len(bsz)
    n = max(an, bn)
    for d in range(n):
        ai = an - 1 - d
        bi = bn - 1 - d
        ad = asz[ai] if ai >= 0 else 1
        bd = bsz[bi] if bi >= 0 else 1
        yield n - 1 - d, ad, bd


def align_shapes(a: ShapeLike, b: ShapeLike) -> Tuple[Shape, Shape, Shape]:
    """
    Aligned shapes ``(as, bs, os)`` for a binary operation on ``a`` and ``b``,
    all of the same rank. Each output dimension is the max of the two; sizes
    must match or one of them must be 1, otherwise :class:`AlignmentError`
    names the output dimension and both sizes.
    """
    n = max(len(_sizes_of(a)), len(_sizes_of(b)))
    asizes = [1] * n
    bsizes = [1] * n
    osizes = [1] * n
    for oi, ad, bd in _aligned_pair(a, b):
        if ad != bd and ad != 1 and bd != 1:
            raise AlignmentError(
                f"align_shapes: output dimension {oi} does not align: "
                "sizes must be the same or one of them must be 1",
                dim=oi,
                a_size=ad,
                b_size=bd,
            )
        asizes[oi] = ad
        bsizes[oi] = bd
        osizes[oi] = max(ad, bd)
    return Shape(asizes), Shape(bsizes), Shape(osizes)


def align_for_assign(a: ShapeLike, b: ShapeLike) -> Tuple[Shape, Shape]:
    """
    Aligned shapes ``(as, bs)`` for assigning ``b`` into ``a``. Only ``b`` may
    broadcast; ``a`` is never resized.
    """
    n = max(len(_sizes_of(a)), len(_sizes_of(b)))
    asizes = [1] * n
    bsizes = [1] * n
    for oi, ad, bd in _aligned_pair(a, b):
        if ad != bd and bd != 1:
            raise AlignmentError(
                f"align_for_assign: dimension {oi} does not align: "
                "sizes must be the same or b must be 1",
                dim=oi,
                a_size=ad,
                b_size=bd,
            )
        asizes[oi] = ad
        bsizes[oi] = bd
    return Shape(asizes), Shape(bsizes)


def wrap_index_1d(shape: Shape, *index: int) -> int:
    """
    Flat offset into ``shape`` for a full-rank output ``index``, with every
    coordinate on a size-1 dimension forced to 0.
    """
    wrapped = list(index)
    for d, size in enumerate(shape.sizes):
        if size == 1:
            wrapped[d] = 0
    return shape.index_to_1d(*wrapped)


# assignment


def float_assign_func(fun: Callable[[float, float], float], a: Tensor, b: Tensor) -> None:
    """Set ``a = fun(a, b)`` elementwise, broadcasting ``b`` into ``a``."""
    ashape, bshape = align_for_assign(a, b)
    alen = len(ashape)

    def assign(idx, a, b):
        bi = wrap_index_1d(bshape, *ashape.index_from_1d(idx))
        a.set_float_1d(fun(a.float_1d(idx), b.float_1d(bi)), idx)

    vectorize_threaded(1, lambda *_: alen, assign, a, b)


def string_assign_func(fun: Callable[[str, str], str], a: Tensor, b: Tensor) -> None:
    ashape, bshape = align_for_assign(a, b)
    alen = len(ashape)

    def assign(idx, a, b):
        bi = wrap_index_1d(bshape, *ashape.index_from_1d(idx))
        a.set_string_1d(fun(a.string_1d(idx), b.string_1d(bi)), idx)

    vectorize_threaded(1, lambda *_: alen, assign, a, b)


# binary


def float_binary_func_out(
    flops: int,
    fun: Callable[[float, float], float],
    a: Tensor,
    b: Tensor,
    out: Values,
) -> None:
    """
    ``out = fun(a, b)`` with broadcasting. ``flops`` estimates the cost of one
    call to ``fun`` and drives the threading decision.
    """
    ashape, bshape, oshape = align_shapes(a, b)
    out.set_shape_sizes(oshape.sizes)
    olen = len(oshape)

    def apply(idx, a, b, out):
        oi = oshape.index_from_1d(idx)
        ai = wrap_index_1d(ashape, *oi)
        bi = wrap_index_1d(bshape, *oi)
        out.set_float_1d(fun(a.float_1d(ai), b.float_1d(bi)), idx)

    vectorize_threaded(flops, lambda *_: olen, apply, a, b, out)


def float_binary_func(
    flops: int, fun: Callable[[float, float], float], a: Tensor, b: Tensor
) -> Values:
    out = output_like(a)
    float_binary_func_out(flops, fun, a, b, out)
    return out


def string_binary_func_out(
    fun: Callable[[str, str], str], a: Tensor, b: Tensor, out: Values
) -> None:
    ashape, bshape, oshape = align_shapes(a, b)
    out.set_shape_sizes(oshape.sizes)
    olen = len(oshape)

    def apply(idx, a, b, out):
        oi = oshape.index_from_1d(idx)
        ai = wrap_index_1d(ashape, *oi)
        bi = wrap_index_1d(bshape, *oi)
        out.set_string_1d(fun(a.string_1d(ai), b.string_1d(bi)), idx)

    vectorize_threaded(1, lambda *_: olen, apply, a, b, out)


def string_binary_func(fun: Callable[[str, str], str], a: Tensor, b: Tensor) -> String:
    out = String()
    string_binary_func_out(fun, a, b, out)
    return out


# unary


def float_func_out(
    flops: int, fun: Callable[[float], float], tensor: Tensor, out: Values
) -> None:
    set_shape_from(out, tensor)
    n = len(tensor)

    def apply(idx, tensor, out):
        out.set_float_1d(fun(tensor.float_1d(idx)), idx)

    vectorize_threaded(flops, lambda *_: n, apply, tensor, out)


def float_func(flops: int, fun: Callable[[float], float], tensor: Tensor) -> Values:
    out = output_like(tensor)
    float_func_out(flops, fun, tensor, out)
    return out


def float_set_func(flops: int, fun: Callable[[int], float], tensor: Tensor) -> None:
    """Set every element of ``tensor`` to ``fun(idx)``; ``fun`` must be thread safe."""
    n = len(tensor)

    def apply(idx, tensor):
        tensor.set_float_1d(fun(idx), idx)

    vectorize_threaded(flops, lambda *_: n, apply, tensor)


# bool results


def _bool_out(read: str, fun, a: Tensor, b: Tensor, out: Bool) -> None:
    ashape, bshape, oshape = align_shapes(a, b)
    out.set_shape_sizes(oshape.sizes)
    olen = len(oshape)

    def apply(idx, a, b, out):
        oi = oshape.index_from_1d(idx)
        ai = wrap_index_1d(ashape, *oi)
        bi = wrap_index_1d(bshape, *oi)
        out.set_bool_1d(fun(getattr(a, read)(ai), getattr(b, read)(bi)), idx)

    vectorize_threaded(BOOL_FLOPS, lambda *_: olen, apply, a, b, out)


def bool_floats_func_out(
    fun: Callable[[float, float], bool], a: Tensor, b: Tensor, out: Bool
) -> None:
    _bool_out("float_1d", fun, a, b, out)


def bool_floats_func(fun: Callable[[float, float], bool], a: Tensor, b: Tensor) -> Bool:
    out = Bool()
    bool_floats_func_out(fun, a, b, out)
    return out


def bool_strings_func_out(
    fun: Callable[[str, str], bool], a: Tensor, b: Tensor, out: Bool
) -> None:
    _bool_out("string_1d", fun, a, b, out)


def bool_strings_func(fun: Callable[[str, str], bool], a: Tensor, b: Tensor) -> Bool:
    out = Bool()
    bool_strings_func_out(fun, a, b, out)
    return out


def bool_ints_func_out(
    fun: Callable[[int, int], bool], a: Tensor, b: Tensor, out: Bool
) -> None:
    _bool_out("int_1d", fun, a, b, out)


def bool_ints_func(fun: Callable[[int, int], bool], a: Tensor, b: Tensor) -> Bool:
    out = Bool()
    bool_ints_func_out(fun, a, b, out)
    return out
