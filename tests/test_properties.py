import pytest

from labtensor import AlignmentError, Float64, Shape, align_shapes, wrap_index_1d
from labtensor.core.booleans import new_bool_from_values
from labtensor.core.convert import as_float64_list, new_float64_from_values
from labtensor.views import Masked, Rows

hypothesis = pytest.importorskip("hypothesis")
from hypothesis import given  # noqa: E402
from hypothesis import strategies as st  # noqa: E402

sizes_st = st.lists(st.integers(min_value=1, max_value=4), min_size=1, max_size=3)


@given(sizes_st)
def test_index_to_1d_is_a_bijection(sizes):
    shape = Shape(sizes)
    seen = set()
    for offset in range(len(shape)):
        index = shape.index_from_1d(offset)
        assert shape.index_to_1d(*index) == offset
        seen.add(tuple(index))
    assert len(seen) == len(shape)


@given(sizes_st, sizes_st)
def test_broadcast_valid_iff_sizes_match_or_one(a, b):
    n = max(len(a), len(b))
    pa = [1] * (n - len(a)) + a
    pb = [1] * (n - len(b)) + b
    valid = all(x == y or x == 1 or y == 1 for x, y in zip(pa, pb))
    if not valid:
        with pytest.raises(AlignmentError):
            align_shapes(Shape(a), Shape(b))
        return
    as_, bs, os_ = align_shapes(Shape(a), Shape(b))
    assert as_.sizes == pa
    assert bs.sizes == pb
    assert os_.sizes == [max(x, y) for x, y in zip(pa, pb)]


@given(sizes_st, st.data())
def test_wrap_index_projects_onto_size_one_dims(sizes, data):
    shape = Shape(sizes)
    out_sizes = [s if s > 1 else data.draw(st.integers(min_value=1, max_value=3)) for s in sizes]
    index = [data.draw(st.integers(min_value=0, max_value=s - 1)) for s in out_sizes]
    projected = [0 if s == 1 else i for s, i in zip(sizes, index)]
    assert wrap_index_1d(shape, *index) == shape.index_to_1d(*projected)


@given(st.lists(st.floats(allow_nan=False), min_size=1, max_size=12))
def test_sequential_rows_read_like_source(values):
    tsr = new_float64_from_values(values)
    rows = Rows(tsr)
    assert as_float64_list(rows) == values
    rows.indexes_needed()
    assert as_float64_list(rows) == values


@given(st.lists(st.tuples(st.floats(allow_nan=False), st.booleans()), min_size=1, max_size=12))
def test_masked_as_values_keeps_visible_elements_in_order(pairs):
    values = [v for v, _ in pairs]
    flags = [f for _, f in pairs]
    ms = Masked(new_float64_from_values(values), new_bool_from_values(flags))
    assert as_float64_list(ms.as_values()) == [v for v, f in pairs if f]


@given(
    st.integers(min_value=0, max_value=4),
    st.integers(min_value=0, max_value=4),
    st.integers(min_value=1, max_value=3),
)
def test_append_from_grows_rows(rows_a, rows_b, cells):
    a = Float64(rows_a, cells)
    b = Float64(rows_b, cells)
    for i in range(len(b)):
        b.set_float_1d(float(i), i)
    a.append_from(b)
    assert a.shape_sizes() == [rows_a + rows_b, cells]
    assert as_float64_list(a)[rows_a * cells :] == [float(i) for i in range(len(b))]
