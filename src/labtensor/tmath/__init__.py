"""Elementwise tensor math, registrable by name in a :class:`FuncRegistry`."""

from __future__ import annotations

from ..core.funcs import FuncRegistry
from .ops import (
    add,
    add_assign,
    add_out,
    assign,
    dec,
    div,
    div_assign,
    div_out,
    inc,
    mod,
    mod_assign,
    mod_out,
    mul,
    mul_assign,
    mul_out,
    negate,
    negate_out,
    sub,
    sub_assign,
    sub_out,
)

PREFIX = "tmath"

FUNCS = {
    "Assign": assign,
    "AddAssign": add_assign,
    "SubAssign": sub_assign,
    "MulAssign": mul_assign,
    "DivAssign": div_assign,
    "ModAssign": mod_assign,
    "Inc": inc,
    "Dec": dec,
    "Add": add,
    "AddOut": add_out,
    "Sub": sub,
    "SubOut": sub_out,
    "Mul": mul,
    "MulOut": mul_out,
    "Div": div,
    "DivOut": div_out,
    "Mod": mod,
    "ModOut": mod_out,
    "Negate": negate,
    "NegateOut": negate_out,
}


def register(registry: FuncRegistry) -> None:
    """Add every function as ``tmath.<Name>``."""
    for name, fun in FUNCS.items():
        registry.add_func(f"{PREFIX}.{name}", fun)


__all__ = [
    "assign",
    "add_assign",
    "sub_assign",
    "mul_assign",
    "div_assign",
    "mod_assign",
    "inc",
    "dec",
    "add",
    "add_out",
    "sub",
    "sub_out",
    "mul",
    "mul_out",
    "div",
    "div_out",
    "mod",
    "mod_out",
    "negate",
    "negate_out",
    "register",
    "FUNCS",
    "PREFIX",
]
