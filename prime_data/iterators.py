"""
Iterators over coprime-30 numbers and over stored primes.

Responsibility: lazy, ascending enumeration. Both iterators are finite and
exhaust permanently once they pass their upper bound.
"""

from typing import List

import numpy as np

from .arithmetic import div_ceil, missing_range
from .errors import ErrorAction, NotEnoughData
from .prime_byte import PrimeByte
from .wheel_sieve import first_index_at_or_above, index_to_n


SMALL_PRIMES = (2, 3, 5)


class CoprimeIter:
    """
    Every integer in [start, end] coprime with 30, in increasing order.

    >>> list(CoprimeIter(8, 22))
    [11, 13, 17, 19]
    """

    def __init__(self, start: int, end: int):
        # wheel index encodes (window, k-value position) in one int
        self._index = first_index_at_or_above(start)
        self._stop_after = end

    def __iter__(self):
        return self

    def __next__(self) -> int:
        value = index_to_n(self._index)
        if value > self._stop_after:
            raise StopIteration
        self._index += 1
        return value


class PrimeIter:
    """
    Primes of a PrimeData within [start, end], in increasing order.

    Holds a read-only view of the data's blocks. PrimeData blocks are frozen
    once built, so the view cannot change under the iterator.

    Raises NotEnoughData if [start, end] is not inside the data's range.
    """

    def __init__(self, data, start: int, end: int):
        missing = missing_range(data.range(), (start, end))
        if missing is not None:
            raise NotEnoughData(missing, ErrorAction.READING)

        self._stop_at = end
        self._buffer: List[int] = []
        self._pos = 0
        self._cursor = 0

        if start > end:
            self._blocks = np.zeros(0, dtype=np.uint8)
            return

        first_block = start // 30
        last_block = div_ceil(end, 30)
        offset = data.offset()

        self._blocks = data.blocks[first_block - offset:last_block - offset]
        self._block_offset = first_block

        # 2, 3 and 5 have no bits, so they go in front of the first window
        self._buffer = [p for p in SMALL_PRIMES if p >= start]
        if len(self._blocks) > 0:
            first = PrimeByte(int(self._blocks[0]))
            self._buffer += first.as_primes_in_range(first_block, start - 30 * first_block, 29)
            self._cursor = 1

    def __iter__(self):
        return self

    def __next__(self) -> int:
        while self._pos >= len(self._buffer):
            if not self._refill():
                raise StopIteration

        value = self._buffer[self._pos]
        if value > self._stop_at:
            self._exhaust()
            raise StopIteration

        self._pos += 1
        return value

    def _refill(self) -> bool:
        """Load the primes of the next non-empty block. False when none is left."""
        while self._cursor < len(self._blocks):
            byte = int(self._blocks[self._cursor])
            offset = self._block_offset + self._cursor
            self._cursor += 1
            if byte:
                self._buffer = PrimeByte(byte).as_primes(offset)
                self._pos = 0
                return True
        return False

    def _exhaust(self) -> None:
        self._buffer = []
        self._pos = 0
        self._cursor = len(self._blocks)
