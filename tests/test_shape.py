import pytest

from labtensor import Float64, Range, Shape
from labtensor.core.exceptions import SliceError
from labtensor.core.shape import split_at_inner_dims


def test_shape_len_and_strides_are_row_major():
    shape = Shape(2, 3, 4)
    assert len(shape) == 24
    assert shape.strides == [12, 4, 1]
    assert shape.num_dims() == 3
    assert shape.dim_size(1) == 3


def test_shape_accepts_a_single_sequence():
    assert Shape([2, 3]) == Shape(2, 3)
    assert Shape((2, 3)).sizes_equal([2, 3])


def test_empty_shape_is_zero_length_with_unit_row_cells():
    shape = Shape()
    assert len(shape) == 0
    assert shape.num_dims() == 0
    assert shape.row_cell_size() == (1, 1)


def test_row_cell_size_splits_outer_dimension():
    assert Shape(4, 2, 3).row_cell_size() == (4, 6)
    assert Shape(5).row_cell_size() == (5, 1)


def test_index_to_1d_and_back():
    shape = Shape(2, 3)
    assert shape.index_to_1d(1, 2) == 5
    assert shape.index_to_1d(0, 1) == 1
    assert shape.index_from_1d(5) == [1, 2]
    assert shape.index_from_1d(3) == [1, 0]


def test_out_of_range_coordinates_raise_index_error():
    shape = Shape(2, 3)
    with pytest.raises(IndexError, match="out of range for dimension 1"):
        shape.index_to_1d(0, 3)
    with pytest.raises(IndexError):
        shape.index_to_1d(-1, 0)
    with pytest.raises(IndexError, match="has 1 dimensions"):
        shape.index_to_1d(1)
    with pytest.raises(IndexError):
        shape.index_from_1d(6)


def test_negative_sizes_are_rejected():
    with pytest.raises(ValueError, match="non-negative"):
        Shape(2, -1)


def test_clone_is_independent():
    shape = Shape(2, 3)
    other = shape.clone()
    other.set_shape_sizes(4)
    assert shape.sizes == [2, 3]
    assert other.sizes == [4]
    assert not shape.is_equal(other)


def test_range_defaults_and_stepped_size():
    assert Range().size(4) == 4
    assert Range(1, 6, 2).size(10) == 3
    assert Range(1, 7, 2).size(10) == 3
    assert Range(0, 20).size(5) == 5
    assert Range(start=5).size(3) == 0
    assert Range(incr=3).incr_actual() == 3
    assert Range().incr_actual() == 1


def test_shape_slice_keeps_trailing_dimensions():
    shape = Shape(4, 6, 2)
    assert shape.slice(Range(0, 2), Range(1, 0, 2)) == [2, 3, 2]
    assert shape.slice() == [4, 6, 2]


def test_shape_slice_reports_zero_size_dimensions():
    with pytest.raises(SliceError, match=r"\[1\]"):
        Shape(4, 6).slice(Range(), Range(6))


def test_split_at_inner_dims():
    tsr = Float64(2, 3, 4)
    assert split_at_inner_dims(tsr, 2) == [2, 3, 4]
    assert split_at_inner_dims(tsr, 1) == [6, 4]
    assert split_at_inner_dims(tsr, 4) == []
