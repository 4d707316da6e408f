from __future__ import annotations

from typing import Optional


class TensorError(Exception):
    """Base class for labtensor-specific exceptions."""


class AlignmentError(TensorError, ValueError):
    """Two shapes cannot be broadcast against each other."""

    def __init__(
        self,
        message: str,
        *,
        dim: Optional[int] = None,
        a_size: Optional[int] = None,
        b_size: Optional[int] = None,
    ):
        detail = _format_sizes(dim, a_size, b_size)
        super().__init__(f"{message}{detail}")
        self.dim = dim
        self.a_size = a_size
        self.b_size = b_size


class SizeMismatchError(TensorError, ValueError):
    def __init__(
        self,
        message: str,
        *,
        expected: Optional[int] = None,
        actual: Optional[int] = None,
    ):
        detail = ""
        if expected is not None and actual is not None:
            detail = f": {expected} != {actual}"
        super().__init__(f"{message}{detail}")
        self.expected = expected
        self.actual = actual


class SliceError(TensorError, ValueError):
    pass


class NotValuesError(TensorError, TypeError):
    pass


class FuncNotFoundError(TensorError, KeyError):
    def __init__(self, name: str):
        super().__init__(name)
        self.name = name

    def __str__(self) -> str:
        return f"function '{self.name}' not found"


def _format_sizes(
    dim: Optional[int],
    a_size: Optional[int],
    b_size: Optional[int],
) -> str:
    if dim is None:
        return ""
    parts = [f"dimension {dim}"]
    if a_size is not None:
        parts.append(f"a={a_size}")
    if b_size is not None:
        parts.append(f"b={b_size}")
    return f" ({' '.join(parts)})"
