"""
Name to function registry for late-bound tensor calls.

A :class:`FuncRegistry` is built once at startup (see :func:`new_registry`)
and handed to the components that resolve tensor functions by name, such as
an expression transpiler deciding whether an identifier is a registered tensor
function or a plain scalar expression. Registration is not synchronized and
is expected to finish before concurrent lookups start.
"""

from __future__ import annotations

import inspect
import logging
from dataclasses import dataclass
from typing import Callable, Dict, Iterator, List, Optional

from .convert import new_of_type
from .exceptions import FuncNotFoundError
from .number import Float64, Number
from .strings import String
from .tensor import Tensor, Values

logger = logging.getLogger(__name__)

VARIADIC = -1


@dataclass
class Func:
    """
    A registered function. ``n_in`` counts tensor inputs (``VARIADIC`` for
    ``*args``); ``n_out`` counts trailing output parameters, named ``out`` or
    ``out<N>``, which :meth:`call_out` allocates like the first input.
    """

    name: str
    fun: Callable
    n_in: int
    n_out: int

    def call(self, *tensors):
        return self.fun(*tensors)

    def call_out(self, *inputs: Tensor) -> List[Values]:
        if self.n_in != VARIADIC and len(inputs) != self.n_in:
            raise TypeError(
                f"{self.name} takes {self.n_in} input tensors, got {len(inputs)}"
            )
        if self.n_out == 0:
            result = self.fun(*inputs)
            return [] if result is None else [result]
        outs: List[Values] = [
            output_like(inputs[0]) if inputs else Float64() for _ in range(self.n_out)
        ]
        self.fun(*inputs, *outs)
        return outs


def _is_out_param(name: str) -> bool:
    return name == "out" or (name.startswith("out") and name[3:].isdigit())


def new_func(name: str, fun: Callable) -> Func:
    if not callable(fun):
        raise TypeError(f"{name}: registered function must be callable")
    try:
        params = list(inspect.signature(fun).parameters.values())
    except (TypeError, ValueError):
        return Func(name=name, fun=fun, n_in=VARIADIC, n_out=0)
    n_in = 0
    n_out = 0
    for param in params:
        if param.kind == inspect.Parameter.VAR_POSITIONAL:
            n_in = VARIADIC
            continue
        if param.kind not in (
            inspect.Parameter.POSITIONAL_ONLY,
            inspect.Parameter.POSITIONAL_OR_KEYWORD,
        ):
            continue
        if param.default is not inspect.Parameter.empty:
            continue
        if _is_out_param(param.name):
            n_out += 1
        elif n_in != VARIADIC:
            n_in += 1
    return Func(name=name, fun=fun, n_in=n_in, n_out=n_out)


class FuncRegistry:
    def __init__(self):
        self._funcs: Dict[str, Func] = {}

    def add_func(self, name: str, fun: Callable) -> Func:
        """Register ``fun`` under ``name``; a later registration replaces an earlier one."""
        func = new_func(name, fun)
        if name in self._funcs:
            logger.warning("FuncRegistry: replacing existing function %r", name)
        else:
            logger.debug("FuncRegistry: added %r (in=%d out=%d)", name, func.n_in, func.n_out)
        self._funcs[name] = func
        return func

    def func_by_name(self, name: str) -> Func:
        func = self._funcs.get(name)
        if func is None:
            raise FuncNotFoundError(name)
        return func

    def get(self, name: str) -> Optional[Func]:
        return self._funcs.get(name)

    def names(self) -> List[str]:
        return sorted(self._funcs)

    def __contains__(self, name: str) -> bool:
        return name in self._funcs

    def __len__(self) -> int:
        return len(self._funcs)

    def __iter__(self) -> Iterator[str]:
        return iter(self.names())


def new_registry(*, builtins: bool = True) -> FuncRegistry:
    """New registry, with the ``tmath`` elementwise functions unless ``builtins=False``."""
    registry = FuncRegistry()
    if builtins:
        from .. import tmath

        tmath.register(registry)
    return registry


def output_like(tensor: Tensor) -> Values:
    """Empty output Values for a result computed from ``tensor``."""
    if tensor.is_string():
        return String()
    if isinstance(tensor, Number) or tensor.data_type.kind in "iuf":
        return new_of_type(tensor.data_type)
    return Float64()


def call_out1(fun: Callable, a: Tensor, *args) -> Values:
    """Run ``fun(a, *args, out)`` on a freshly allocated output and return it."""
    out = output_like(a)
    fun(a, *args, out)
    return out


def call_out2(fun: Callable, a: Tensor, b: Tensor, *args) -> Values:
    out = output_like(a)
    fun(a, b, *args, out)
    return out


def call_out2_float64(fun: Callable, a: Tensor, b: Tensor, *args) -> Float64:
    out = Float64()
    fun(a, b, *args, out)
    return out
