from __future__ import annotations

from typing import Iterable, List, Optional

import numpy as np


def _nbytes(nbits: int) -> int:
    return (nbits + 7) >> 3


class BitSlice:
    """
    Growable bit-packed buffer storing one boolean per bit.

    Bits live in a ``uint8`` array; bit ``i`` is bit ``i & 7`` of byte ``i >> 3``.
    The backing array may be larger than needed, so shrinking then regrowing
    does not reallocate.
    """

    __slots__ = ("_bytes", "_len")

    def __init__(self, n: int = 0, capacity: Optional[int] = None):
        cap = max(int(n), int(capacity or 0))
        self._bytes = np.zeros(_nbytes(cap), dtype=np.uint8)
        self._len = int(n)

    @classmethod
    def from_bools(cls, values: Iterable[bool]) -> "BitSlice":
        values = list(values)
        bits = cls(len(values))
        if values:
            packed = np.packbits(np.asarray(values, dtype=bool), bitorder="little")
            bits._bytes[: len(packed)] = packed
        return bits

    @classmethod
    def shared(cls, other: "BitSlice") -> "BitSlice":
        """A new slice object over the same backing bytes."""
        bits = cls.__new__(cls)
        bits._bytes = other._bytes
        bits._len = other._len
        return bits

    def __len__(self) -> int:
        return self._len

    def capacity(self) -> int:
        return len(self._bytes) * 8

    def _check(self, i: int) -> None:
        if i < 0 or i >= self._len:
            raise IndexError(f"bit index {i} out of range for length {self._len}")

    def index(self, i: int) -> bool:
        self._check(i)
        return bool(self._bytes[i >> 3] & (1 << (i & 7)))

    def set(self, value: bool, i: int) -> None:
        self._check(i)
        byte = i >> 3
        mask = 1 << (i & 7)
        current = int(self._bytes[byte])
        if value:
            self._bytes[byte] = current | mask
        else:
            self._bytes[byte] = current & (0xFF ^ mask)

    def set_len(self, n: int) -> None:
        """Resize to ``n`` bits, preserving existing bits; new bits are false."""
        n = int(n)
        old = self._len
        if n > self.capacity():
            grown = np.zeros(_nbytes(n), dtype=np.uint8)
            keep = _nbytes(old)
            grown[:keep] = self._bytes[:keep]
            self._bytes = grown
        self._len = n
        if n > old:
            self._clear_range(old, n)

    def _clear_range(self, start: int, end: int) -> None:
        for i in range(start, end):
            byte = i >> 3
            self._bytes[byte] = int(self._bytes[byte]) & (0xFF ^ (1 << (i & 7)))

    def fill(self, value: bool) -> None:
        if self._len == 0:
            return
        full = self._len >> 3
        self._bytes[:full] = 0xFF if value else 0
        for i in range(full * 8, self._len):
            self.set(value, i)

    def clone(self) -> "BitSlice":
        bits = BitSlice(self._len)
        keep = _nbytes(self._len)
        bits._bytes[:keep] = self._bytes[:keep]
        return bits

    def copy_from(self, other: "BitSlice") -> None:
        """Copy ``min(len(self), len(other))`` leading bits from ``other``."""
        n = min(self._len, other._len)
        full = n >> 3
        self._bytes[:full] = other._bytes[:full]
        for i in range(full * 8, n):
            self.set(other.index(i), i)

    def to_list(self) -> List[bool]:
        if self._len == 0:
            return []
        bits = np.unpackbits(self._bytes[: _nbytes(self._len)], bitorder="little")
        return [bool(b) for b in bits[: self._len]]

    def __repr__(self) -> str:
        return f"BitSlice({''.join('1' if b else '0' for b in self.to_list())})"
