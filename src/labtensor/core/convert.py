from __future__ import annotations

from typing import List, Sequence

import numpy as np

from .booleans import Bool, new_bool_from_values
from .exceptions import NotValuesError
from .number import Float32, Float64, Int, new_number, new_number_from_values
from .num import is_bool_kind, is_float_kind, is_string_kind
from .shape import Shape, _prod
from .strings import String, new_string_from_values
from .tensor import Contiguous, Tensor, Values


def new_of_type(dtype, *sizes: int) -> Values:
    """New zeroed Values of the kind matching ``dtype``."""
    dtype = np.dtype(dtype)
    if is_string_kind(dtype):
        return String(*sizes)
    if is_bool_kind(dtype):
        return Bool(*sizes)
    return new_number(dtype, *sizes)


def clone(tensor: Tensor) -> Values:
    """Deep copy: :meth:`Values.clone` for raw values, else :meth:`Tensor.as_values`."""
    if isinstance(tensor, Values):
        return tensor.clone()
    return tensor.as_values()


def must_be_values(tensor: Tensor) -> Values:
    if not isinstance(tensor, Values):
        raise NotValuesError(
            f"tensor must be a Values type, got {type(tensor).__name__}"
        )
    return tensor


def set_shape_from(values: Values, source: Tensor) -> None:
    values.set_shape_sizes(source.shape_sizes())


def set_shape(values: Values, shape: Shape) -> None:
    values.set_shape_sizes(shape.sizes)


def set_shape_must_be_values(tensor: Tensor, shape: Shape) -> None:
    """Reshape ``tensor``, which must be a :class:`Values`."""
    must_be_values(tensor).set_shape_sizes(shape.sizes)


def set_shape_sizes_from_tensor(values: Values, sizes: Tensor) -> None:
    """Reshape ``values`` to the sizes held as 1D ints in ``sizes``."""
    values.set_shape_sizes(as_int_list(sizes))


def new_1d_view_of(values: Values) -> Values:
    """1D view of ``values`` sharing the same storage."""
    vw = values.view()
    vw.set_shape_sizes(len(values))
    return vw


def cells_1d(tensor: Contiguous, row: int) -> Values:
    """Flat 1D view of the cells of ``row``."""
    return new_1d_view_of(tensor.sub_space(row))


def row_cell_split(values: Values, split: int) -> Values:
    """
    2D ``[rows, cells]`` view of ``values``: dimensions before ``split`` form
    the rows and the remainder form the cells. Storage is shared.
    """
    sizes = values.shape_sizes()
    vw = values.view()
    vw.set_shape_sizes(_prod(sizes[:split]), _prod(sizes[split:]))
    return vw


def new_float64_scalar(value: float) -> Float64:
    return new_number_from_values([float(value)], dtype=np.float64)


def new_int_scalar(value: int) -> Int:
    return new_number_from_values([int(value)], dtype=np.int64)


def new_string_scalar(value: str) -> String:
    return new_string_from_values([value])


def new_float64_from_values(values: Sequence[float]) -> Float64:
    return new_number_from_values(values, dtype=np.float64)


def new_int_from_values(values: Sequence[int]) -> Int:
    return new_number_from_values(values, dtype=np.int64)


def as_float64_list(tensor: Tensor) -> List[float]:
    return [tensor.float_1d(i) for i in range(len(tensor))]


def as_int_list(tensor: Tensor) -> List[int]:
    return [tensor.int_1d(i) for i in range(len(tensor))]


def as_string_list(tensor: Tensor) -> List[str]:
    return [tensor.string_1d(i) for i in range(len(tensor))]


def as_float64_scalar(tensor: Tensor) -> float:
    """First value of ``tensor`` as a float, 0 when it is empty."""
    if len(tensor) == 0:
        return 0.0
    return tensor.float_1d(0)


def as_int_scalar(tensor: Tensor) -> int:
    if len(tensor) == 0:
        return 0
    return tensor.int_1d(0)


def as_string_scalar(tensor: Tensor) -> str:
    if len(tensor) == 0:
        return ""
    return tensor.string_1d(0)


def _as_kind(tensor: Tensor, kind):
    if type(tensor) is kind:
        return tensor
    out = kind(tensor.shape_sizes())
    out.copy_from(tensor.as_values())
    return out


def as_float64(tensor: Tensor) -> Float64:
    """
    ``tensor`` itself when it is already a :class:`Float64`, otherwise a
    Float64 copy with the same shape.
    """
    return _as_kind(tensor, Float64)


def as_float32(tensor: Tensor) -> Float32:
    return _as_kind(tensor, Float32)


def as_int(tensor: Tensor) -> Int:
    return _as_kind(tensor, Int)


def as_string(tensor: Tensor) -> String:
    return _as_kind(tensor, String)


def copy_value_1d(dst: Tensor, di: int, src: Tensor, si: int) -> None:
    """Copy one element through the coercion that fits ``dst``'s kind."""
    dtype = dst.data_type
    if is_string_kind(dtype):
        dst.set_string_1d(src.string_1d(si), di)
    elif is_float_kind(dtype):
        dst.set_float_1d(src.float_1d(si), di)
    else:
        dst.set_int_1d(src.int_1d(si), di)
