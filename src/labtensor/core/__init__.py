"""Core tensor engine modules for labtensor."""

__all__ = [
    "align",
    "base",
    "bitslice",
    "booleans",
    "convert",
    "exceptions",
    "funcs",
    "num",
    "number",
    "shape",
    "slicing",
    "strings",
    "tensor",
    "vectorize",
]
