import math

import pytest

from labtensor import AlignmentError, Bool, Float64, Int, Shape, String
from labtensor.core import align
from labtensor.core.convert import (
    as_float64_list,
    as_string_list,
    new_float64_from_values,
    new_int_from_values,
    new_string_from_values,
)


def _column(values) -> Float64:
    tsr = new_float64_from_values(values)
    tsr.set_shape_sizes(len(values), 1)
    return tsr


def test_align_shapes_broadcasts_unit_dimensions():
    ash, bsh, osh = align.align_shapes(Shape(3, 1), Shape(1, 4))
    assert ash.sizes == [3, 1]
    assert bsh.sizes == [1, 4]
    assert osh.sizes == [3, 4]


def test_align_shapes_pads_lower_rank_operand():
    ash, bsh, osh = align.align_shapes(Shape(2, 3, 4), Shape(4))
    assert ash.sizes == [2, 3, 4]
    assert bsh.sizes == [1, 1, 4]
    assert osh.sizes == [2, 3, 4]


def test_align_shapes_reports_mismatched_dimension():
    with pytest.raises(AlignmentError) as info:
        align.align_shapes(Shape(3, 2), Shape(1, 4))
    err = info.value
    assert err.dim == 1
    assert (err.a_size, err.b_size) == (2, 4)
    assert "dimension 1" in str(err)
    assert isinstance(err, ValueError)


def test_align_shapes_accepts_tensors():
    _, _, osh = align.align_shapes(Float64(2, 1), Float64(3))
    assert osh.sizes == [2, 3]


def test_align_for_assign_only_broadcasts_b():
    ash, bsh = align.align_for_assign(Shape(3, 4), Shape(4))
    assert ash.sizes == [3, 4]
    assert bsh.sizes == [1, 4]
    with pytest.raises(AlignmentError) as info:
        align.align_for_assign(Shape(3, 1), Shape(3, 4))
    assert info.value.dim == 1


def test_wrap_index_1d_projects_unit_dimensions():
    shape = Shape(3, 1)
    assert align.wrap_index_1d(shape, 2, 3) == 2
    assert align.wrap_index_1d(Shape(1, 4), 2, 3) == 3
    assert align.wrap_index_1d(Shape(2, 2), 1, 1) == 3


def test_float_binary_func_broadcasts_outer_sum():
    a = _column([1.0, 2.0, 3.0])
    b = new_float64_from_values([10.0, 20.0])
    out = align.float_binary_func(1, lambda x, y: x + y, a, b)
    assert out.shape_sizes() == [3, 2]
    assert as_float64_list(out) == [11.0, 21.0, 12.0, 22.0, 13.0, 23.0]


def test_float_binary_func_output_follows_first_operand_kind():
    a = new_int_from_values([1, 2])
    b = new_float64_from_values([0.5, 0.5])
    out = align.float_binary_func(1, lambda x, y: x + y, a, b)
    assert isinstance(out, Int)
    assert [out.int_1d(i) for i in range(2)] == [1, 2]


def test_float_assign_func_broadcasts_into_a():
    a = Float64(2, 2)
    b = new_float64_from_values([1.0, 2.0])
    align.float_assign_func(lambda x, y: x + y, a, b)
    align.float_assign_func(lambda x, y: x + y, a, b)
    assert as_float64_list(a) == [2.0, 4.0, 2.0, 4.0]
    with pytest.raises(AlignmentError):
        align.float_assign_func(lambda x, y: y, b, a)


def test_string_funcs():
    a = new_string_from_values(["a", "b"])
    b = new_string_from_values(["!"])
    out = align.string_binary_func(lambda x, y: x + y, a, b)
    assert isinstance(out, String)
    assert as_string_list(out) == ["a!", "b!"]
    align.string_assign_func(lambda x, y: y + x, a, b)
    assert as_string_list(a) == ["!a", "!b"]


def test_float_func_and_set_func():
    tsr = new_float64_from_values([1.0, 4.0, 9.0])
    out = align.float_func(1, math.sqrt, tsr)
    assert as_float64_list(out) == [1.0, 2.0, 3.0]
    align.float_set_func(1, lambda idx: float(idx * idx), tsr)
    assert as_float64_list(tsr) == [0.0, 1.0, 4.0]


def test_bool_funcs_produce_bool_tensors():
    a = _column([1.0, 5.0])
    b = new_float64_from_values([2.0, 4.0, 6.0])
    out = align.bool_floats_func(lambda x, y: x > y, a, b)
    assert isinstance(out, Bool)
    assert out.shape_sizes() == [2, 3]
    assert [out.bool_1d(i) for i in range(6)] == [False, False, False, True, True, False]

    names = new_string_from_values(["x", "y"])
    same = align.bool_strings_func(lambda x, y: x == y, names, new_string_from_values(["y"]))
    assert [same.bool_1d(i) for i in range(2)] == [False, True]

    odd = align.bool_ints_func(
        lambda x, y: x % y == 1, new_int_from_values([1, 2, 3]), new_int_from_values([2])
    )
    assert [odd.bool_1d(i) for i in range(3)] == [True, False, True]
