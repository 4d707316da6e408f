"""
Elementwise arithmetic on tensors.

Binary operations broadcast their operands (see :func:`align_shapes`). The
``*_assign`` forms update ``a`` in place and only broadcast ``b``. Results
follow IEEE float semantics: division by zero gives an infinity or NaN and
the modulus of a zero divisor is NaN.
"""

from __future__ import annotations

import math

from ..core.align import (
    float_assign_func,
    float_binary_func_out,
    float_func_out,
    string_assign_func,
    string_binary_func_out,
)
from ..core.funcs import call_out1, call_out2, call_out2_float64
from ..core.tensor import Tensor, Values
from ..core.vectorize import vectorize_threaded


def _div(a: float, b: float) -> float:
    if b == 0:
        if a == 0 or math.isnan(a):
            return math.nan
        return math.copysign(math.inf, a) * math.copysign(1.0, b)
    return a / b


def _mod(a: float, b: float) -> float:
    if b == 0 or math.isinf(a):
        return math.nan
    return math.fmod(a, b)


# in place


def assign(a: Tensor, b: Tensor) -> None:
    """Copy ``b`` into ``a``, broadcasting ``b``."""
    if a.is_string():
        string_assign_func(lambda x, y: y, a, b)
        return
    float_assign_func(lambda x, y: y, a, b)


def add_assign(a: Tensor, b: Tensor) -> None:
    """``a += b``; string tensors concatenate."""
    if a.is_string():
        string_assign_func(lambda x, y: x + y, a, b)
        return
    float_assign_func(lambda x, y: x + y, a, b)


def sub_assign(a: Tensor, b: Tensor) -> None:
    float_assign_func(lambda x, y: x - y, a, b)


def mul_assign(a: Tensor, b: Tensor) -> None:
    float_assign_func(lambda x, y: x * y, a, b)


def div_assign(a: Tensor, b: Tensor) -> None:
    float_assign_func(_div, a, b)


def mod_assign(a: Tensor, b: Tensor) -> None:
    float_assign_func(_mod, a, b)


def inc(a: Tensor) -> None:
    """Add 1 to every element of ``a``."""
    n = len(a)

    def apply(idx, a):
        a.set_float_1d(a.float_1d(idx) + 1.0, idx)

    vectorize_threaded(1, lambda *_: n, apply, a)


def dec(a: Tensor) -> None:
    n = len(a)

    def apply(idx, a):
        a.set_float_1d(a.float_1d(idx) - 1.0, idx)

    vectorize_threaded(1, lambda *_: n, apply, a)


# binary


def add_out(a: Tensor, b: Tensor, out: Values) -> None:
    if a.is_string():
        string_binary_func_out(lambda x, y: x + y, a, b, out)
        return
    float_binary_func_out(1, lambda x, y: x + y, a, b, out)


def add(a: Tensor, b: Tensor) -> Values:
    return call_out2(add_out, a, b)


def sub_out(a: Tensor, b: Tensor, out: Values) -> None:
    float_binary_func_out(1, lambda x, y: x - y, a, b, out)


def sub(a: Tensor, b: Tensor) -> Values:
    return call_out2(sub_out, a, b)


def mul_out(a: Tensor, b: Tensor, out: Values) -> None:
    float_binary_func_out(1, lambda x, y: x * y, a, b, out)


def mul(a: Tensor, b: Tensor) -> Values:
    return call_out2(mul_out, a, b)


def div_out(a: Tensor, b: Tensor, out: Values) -> None:
    float_binary_func_out(1, _div, a, b, out)


def div(a: Tensor, b: Tensor) -> Values:
    """Floating point division; the result is Float64 even for integer operands."""
    return call_out2_float64(div_out, a, b)


def mod_out(a: Tensor, b: Tensor, out: Values) -> None:
    float_binary_func_out(1, _mod, a, b, out)


def mod(a: Tensor, b: Tensor) -> Values:
    return call_out2(mod_out, a, b)


# unary


def negate_out(a: Tensor, out: Values) -> None:
    float_func_out(1, lambda x: -x, a, out)


def negate(a: Tensor) -> Values:
    return call_out1(negate_out, a)
