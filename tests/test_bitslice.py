import pytest

from labtensor.core.bitslice import BitSlice


def test_new_bitslice_is_all_false():
    bits = BitSlice(10)
    assert len(bits) == 10
    assert bits.to_list() == [False] * 10
    assert bits.capacity() >= 10


def test_set_and_index_across_byte_boundary():
    bits = BitSlice(12)
    bits.set(True, 3)
    bits.set(True, 8)
    bits.set(True, 11)
    assert [i for i in range(12) if bits.index(i)] == [3, 8, 11]
    bits.set(False, 8)
    assert not bits.index(8)
    assert bits.index(11)


def test_from_bools_round_trips_to_list():
    values = [True, False, True, True, False, False, False, True, True]
    assert BitSlice.from_bools(values).to_list() == values


def test_out_of_range_bits_raise_index_error():
    bits = BitSlice(3)
    with pytest.raises(IndexError):
        bits.index(3)
    with pytest.raises(IndexError):
        bits.set(True, -1)


def test_shrink_then_grow_clears_reused_bits():
    bits = BitSlice.from_bools([True] * 9)
    capacity = bits.capacity()
    bits.set_len(4)
    bits.set_len(9)
    assert bits.capacity() == capacity
    assert bits.to_list() == [True] * 4 + [False] * 5


def test_grow_beyond_capacity_preserves_bits():
    bits = BitSlice.from_bools([True, False, True])
    bits.set_len(20)
    assert bits.to_list()[:3] == [True, False, True]
    assert not any(bits.to_list()[3:])


def test_fill_and_copy_from():
    bits = BitSlice(11)
    bits.fill(True)
    assert all(bits.to_list())
    other = BitSlice(5)
    other.copy_from(bits)
    assert other.to_list() == [True] * 5
    bits.fill(False)
    assert not any(bits.to_list())


def test_shared_bitslice_sees_writes_and_clone_does_not():
    bits = BitSlice(4)
    shared = BitSlice.shared(bits)
    copy = bits.clone()
    bits.set(True, 2)
    assert shared.index(2)
    assert not copy.index(2)
