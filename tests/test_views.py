import math
import random

import pytest

from labtensor import Bool, Float64, Int, SizeMismatchError, String
from labtensor.core.booleans import new_bool_from_values
from labtensor.core.convert import (
    as_float64_list,
    as_int_list,
    as_string_list,
    new_float64_from_values,
    new_int_from_values,
    new_string_from_values,
)
from labtensor.views import Indexed, Masked, Sliced, as_masked, as_sliced


def _grid(rows: int = 3, cols: int = 4) -> Float64:
    tsr = Float64(rows, cols)
    for i in range(len(tsr)):
        tsr.set_float_1d(float(i), i)
    return tsr


# Sliced


def test_sliced_selects_per_dimension():
    tsr = _grid()
    sl = Sliced(tsr, [2, 0], [1, 3])
    assert sl.shape_sizes() == [2, 2]
    assert sl.float_value(0, 0) == 9.0
    assert sl.float_value(1, 1) == 3.0
    assert sl.source_indexes(0, 1) == [2, 3]
    assert as_float64_list(sl) == [9.0, 11.0, 1.0, 3.0]


def test_sliced_none_keeps_full_dimension():
    tsr = _grid()
    sl = Sliced(tsr, None, [0])
    assert sl.shape_sizes() == [3, 1]
    assert as_float64_list(sl) == [0.0, 4.0, 8.0]


def test_sliced_writes_reach_source():
    tsr = _grid()
    sl = Sliced(tsr, [1], [2, 3])
    sl.set_float_1d(-1.0, 1)
    sl.set_string("7", 0, 0)
    assert tsr.float_value(1, 3) == -1.0
    assert tsr.float_value(1, 2) == 7.0
    with pytest.raises(IndexError):
        sl.float_value(1, 0)


def test_sliced_as_values_copies():
    tsr = _grid()
    sl = Sliced(tsr, [2, 2], [0])
    out = sl.as_values()
    assert isinstance(out, Float64)
    assert out.shape_sizes() == [2, 1]
    assert as_float64_list(out) == [8.0, 8.0]
    out.set_float_1d(100.0, 0)
    assert tsr.float_value(2, 0) == 8.0


def test_sliced_sort_filter_and_sequential():
    tsr = _grid()
    sl = Sliced(tsr)
    sl.sort_func(1, lambda t, dim, i, j: j - i)
    assert sl.indexes[1] == [3, 2, 1, 0]
    sl.filter(0, lambda t, dim, i: i != 1)
    assert sl.indexes[0] == [0, 2]
    assert sl.float_value(1, 0) == 11.0
    sl.permuted(1, random.Random(3))
    assert sorted(sl.indexes[1]) == [0, 1, 2, 3]
    sl.sequential()
    assert sl.indexes == [None, None]
    assert sl.shape_sizes() == [3, 4]


def test_sliced_valid_indexes_after_source_shrinks():
    tsr = _grid()
    sl = Sliced(tsr, [2, 0, 1])
    tsr.set_num_rows(2)
    sl.valid_indexes()
    assert sl.indexes[0] == [0, 1]
    assert as_sliced(sl) is sl
    assert as_sliced(tsr).tensor is tsr


def test_sliced_strings():
    names = new_string_from_values(["a", "b", "c"])
    sl = Sliced(names, [2, 0])
    assert as_string_list(sl) == ["c", "a"]
    assert isinstance(sl.as_values(), String)


# Masked


def test_masked_reads_missing_values_and_renders_visible():
    tsr = new_float64_from_values([1.0, 2.0, 3.0, 4.0])
    mask = new_bool_from_values([True, False, True, False])
    ms = Masked(tsr, mask)
    assert ms.float_1d(0) == 1.0
    assert math.isnan(ms.float_1d(1))
    assert ms.int_1d(1) == 0
    assert ms.string_1d(1) == ""
    out = ms.as_values()
    assert isinstance(out, Float64)
    assert as_float64_list(out) == [1.0, 3.0]


def test_masked_writes_are_dropped_where_hidden():
    tsr = new_float64_from_values([1.0, 2.0, 3.0])
    ms = Masked(tsr, new_bool_from_values([False, True, True]))
    for i in range(3):
        ms.set_float_1d(0.0, i)
    assert as_float64_list(tsr) == [1.0, 0.0, 0.0]
    ms.set_string("9", 0)
    ms.set_int(5, 2)
    assert as_float64_list(tsr) == [1.0, 0.0, 5.0]


def test_masked_defaults_to_all_visible_and_filter_restamps():
    tsr = _grid(2, 2)
    ms = as_masked(tsr)
    assert as_masked(ms) is ms
    assert ms.mask.shape_sizes() == [2, 2]
    assert as_float64_list(ms) == [0.0, 1.0, 2.0, 3.0]
    ms.filter(lambda t, i: t.float_1d(i) >= 2.0)
    assert [ms.mask.bool_1d(i) for i in range(4)] == [False, False, True, True]
    assert ms.float_value(1, 0) == 2.0
    assert math.isnan(ms.float_value(0, 1))
    ms.filter(lambda t, i: i == 0)
    assert [ms.mask.bool_1d(i) for i in range(4)] == [True, False, False, False]


def test_masked_sync_shape_and_set_tensor():
    mask = Bool(2)
    ms = Masked(_grid(2, 3), mask)
    assert mask.shape_sizes() == [2, 3]
    ms.set_tensor(Float64(4))
    assert ms.mask.shape_sizes() == [4]
    assert ms.shape_sizes() == [4]


def test_masked_as_values_kinds():
    names = new_string_from_values(["a", "b"])
    ms = Masked(names, new_bool_from_values([False, True]))
    assert as_string_list(ms.as_values()) == ["b"]

    ints = Masked(new_int_from_values([4, 5, 6]), new_bool_from_values([True, True, False]))
    out = ints.as_values()
    assert isinstance(out, Int)
    assert as_int_list(out) == [4, 5]

    bits = Masked(new_bool_from_values([True, False]))
    assert as_int_list(bits.as_values()) == [1, 0]


# Indexed


def _coords(*pairs) -> Int:
    idx = new_int_from_values([c for pair in pairs for c in pair])
    idx.set_shape_sizes(len(pairs), 2)
    return idx


def test_indexed_gathers_full_coordinates():
    tsr = _grid()
    ix = Indexed(tsr, _coords((2, 1), (0, 3), (2, 1)))
    assert ix.shape_sizes() == [3]
    assert as_float64_list(ix) == [9.0, 3.0, 9.0]
    assert ix.source_indexes(1) == [0, 3]
    assert ix.float_value(0) == 9.0


def test_indexed_writes_reach_source():
    tsr = _grid()
    ix = Indexed(tsr, _coords((1, 1)))
    ix.set_float_1d(-5.0, 0)
    assert tsr.float_value(1, 1) == -5.0
    ix.set_int(6, 0)
    assert tsr.int_value(1, 1) == 6


def test_indexed_outer_dims_shape_the_view():
    tsr = _grid()
    idx = new_int_from_values([0, 0, 0, 1, 1, 0, 1, 1])
    idx.set_shape_sizes(2, 2, 2)
    ix = Indexed(tsr, idx)
    assert ix.shape_sizes() == [2, 2]
    assert ix.float_value(1, 0) == 4.0
    out = ix.as_values()
    assert out.shape_sizes() == [2, 2]
    assert as_float64_list(out) == [0.0, 1.0, 4.0, 5.0]


def test_indexed_rejects_wrong_coordinate_size():
    with pytest.raises(SizeMismatchError, match="2 != 3"):
        Indexed(_grid(), new_int_from_values([0, 1, 2]))
    ix = Indexed(_grid(), _coords((0, 0)))
    with pytest.raises(SizeMismatchError):
        ix.set_tensor(Float64(3))


def test_indexed_out_of_range_coordinates_raise():
    ix = Indexed(_grid(), _coords((3, 0)))
    with pytest.raises(IndexError):
        ix.float_1d(0)
    with pytest.raises(IndexError):
        ix.float_1d(1)
