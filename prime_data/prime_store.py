"""
PrimeData: primality of every integer in a range, 8 bits per 30 integers.

Storage:
- blocks: uint8 array, block j covers [30*(offset+j), 30*(offset+j+1))
- range: inclusive (start, end) the data is valid for
- offset = start // 30

Blocks are padded out to whole windows, but bits outside `range` were never
sieved and mean nothing. Every accessor checks `range`, not the blocks.
start > end is the canonical empty data.

Creating data:
1. PrimeData.starter()  - primes below 30, the base case
2. PrimeData.expand()   - segmented sieve into a new range, using primes
                          from the current data as witnesses
3. PrimeData.generate() - recursion over square roots down to the base case

Expanding into [X, Y] needs the current data to cover [7, isqrt(Y)]. Every
composite in [X, Y] coprime with 30 has a prime factor in that range.

Instances never change after construction: the block array is frozen
(writeable=False) before it is handed out.
"""

from bisect import bisect_left
from typing import Iterator, Tuple

import numpy as np

from .arithmetic import U64_MAX, missing_range, sqrt_floor
from .errors import ErrorAction, NotEnoughData, OutOfBounds
from .estimate import nth_prime_bounds
from .factorization import Factorization, _FactorAccumulator
from .iterators import SMALL_PRIMES, PrimeIter
from .prime_byte import K_VALUES, PrimeByte
from .wheel_sieve import allocate_blocks, count_set_bits, strike_multiples


# Largest bound reachable by sieving with the primes below 30 alone
STARTER_LIMIT = 900


def _check_domain(start: int, end: int) -> None:
    for value in (start, end):
        if not 0 <= value <= U64_MAX:
            raise OutOfBounds(value, ErrorAction.GENERATING)


class PrimeData:
    """
    Compressed prime data over an inclusive range.

    Build instances with starter(), generate() or expand(); the constructor
    takes ownership of an already-sieved block array.
    """

    def __init__(self, blocks: np.ndarray, start: int, end: int):
        blocks.flags.writeable = False
        self._blocks = blocks
        self._range = (start, end)

    # ---------- creation ----------

    @classmethod
    def starter(cls) -> "PrimeData":
        """All primes in [0, 30]: a single block with only 1 cleared."""
        return cls(allocate_blocks(0, 30), 0, 30)

    @classmethod
    def generate(cls, start: int, end: int) -> "PrimeData":
        """
        Generate data for every prime in [start, end].

        Parameters
        ----------
        start, end : int
            Inclusive range. start > end is accepted and gives empty data.

        Returns
        -------
        PrimeData

        Examples
        --------
        >>> data = PrimeData.generate(0, 100)
        >>> data.count_primes()
        25
        """
        _check_domain(start, end)

        if end <= STARTER_LIMIT:
            return cls.starter().expand(start, end)
        return cls.generate(0, sqrt_floor(end)).expand(start, end)

    def expand(self, start: int, end: int) -> "PrimeData":
        """
        Sieve a new PrimeData for [start, end] using this data's primes.

        Raises NotEnoughData, carrying exactly the uncovered part of
        [7, isqrt(end)], if this data lacks the witnesses.

        Examples
        --------
        >>> list(PrimeData.starter().expand(59, 90).iter_all())
        [59, 61, 67, 71, 73, 79, 83, 89]
        """
        _check_domain(start, end)

        end_sqrt = sqrt_floor(end)
        missing = missing_range(self._range, (7, end_sqrt))
        if missing is not None:
            raise NotEnoughData(missing, ErrorAction.MODIFYING)

        blocks = allocate_blocks(start, end)
        strike_multiples(blocks, start, end, self.iter(7, end_sqrt))

        return PrimeData(blocks, start, end)

    def join(self, other: "PrimeData") -> "PrimeData":
        """
        Combine two data whose ranges touch or overlap.

        The window where the later data starts is shared: bits before that
        start come from the earlier data, the rest from the later one.
        Raises NotEnoughData with the gap if the ranges are disjoint.
        """
        if other.is_empty():
            return self
        if self.is_empty():
            return other

        first, second = (self, other) if self._range[0] <= other._range[0] else (other, self)
        first_start, first_end = first._range
        second_start, second_end = second._range

        if second_start > first_end + 1:
            raise NotEnoughData((first_end + 1, second_start - 1), ErrorAction.MODIFYING)
        if second_end <= first_end:
            return first

        boundary = second_start // 30
        joint_index = boundary - first.offset()
        head = first._blocks[:joint_index]
        tail = second._blocks

        if joint_index < len(first._blocks) and len(second._blocks) > 0:
            joint = PrimeByte(int(first._blocks[joint_index]))
            incoming = PrimeByte(int(second._blocks[0]))

            overlap_lo = second_start % 30
            overlap_hi = min(first_end - 30 * boundary, 29)
            if not joint.matches_in_range(incoming, overlap_lo, overlap_hi):
                raise RuntimeError(
                    f"PrimeData disagree on [{second_start}, {first_end}] while joining"
                )

            joint.overwrite_at(incoming, bisect_left(K_VALUES, overlap_lo))
            tail = np.concatenate(([joint.as_u8()], second._blocks[1:])).astype(np.uint8)

        blocks = np.concatenate((head, tail)).astype(np.uint8)
        return PrimeData(blocks, first_start, second_end)

    # ---------- iteration ----------

    def iter(self, start: int, end: int) -> PrimeIter:
        """
        Iterate over primes in [start, end].

        Raises NotEnoughData if the range is not inside this data's range.

        Examples
        --------
        >>> list(PrimeData.generate(0, 1000).iter(472, 491))
        [479, 487, 491]
        """
        return PrimeIter(self, start, end)

    def iter_all(self) -> PrimeIter:
        """
        Iterate over every prime in the data.

        Materializing this can take far more memory than the data itself.
        """
        return self.iter(*self._range)

    def __iter__(self) -> Iterator[int]:
        return self.iter_all()

    # ---------- general ----------

    def range(self) -> Tuple[int, int]:
        return self._range

    def offset(self) -> int:
        return self._range[0] // 30

    def is_empty(self) -> bool:
        start, end = self._range
        return start > end

    @property
    def blocks(self) -> np.ndarray:
        """Raw, read-only block array."""
        return self._blocks

    def _contains(self, x: int) -> bool:
        start, end = self._range
        return start <= x <= end

    def _byte(self, index: int) -> PrimeByte:
        # index is derived from a value already checked against range
        if not 0 <= index < len(self._blocks):
            raise RuntimeError(
                f"block {index} missing from PrimeData {self._range} ({len(self._blocks)} blocks)"
            )
        return PrimeByte(int(self._blocks[index]))

    # ---------- queries ----------

    def is_prime(self, x: int) -> bool:
        """
        Whether x is prime. Raises OutOfBounds outside the data's range.

        Examples
        --------
        >>> data = PrimeData.generate(0, 900)
        >>> data.is_prime(727), data.is_prime(781)
        (True, False)
        """
        if self.is_empty() or not self._contains(x):
            raise OutOfBounds(x, ErrorAction.READING)

        if x in SMALL_PRIMES:
            return True
        if x % 30 == 0:
            return False

        return self._byte(x // 30 - self.offset()).is_prime(x % 30)

    def check_prime(self, x: int) -> bool:
        """
        Whether x is prime, also for x outside the data's range.

        Outside the range, trial-divides by the primes in [7, isqrt(x)],
        which the data must cover (else NotEnoughData).
        """
        if not self.is_empty() and self._contains(x):
            return self.is_prime(x)

        root = sqrt_floor(x)
        missing = missing_range(self._range, (7, root))
        if missing is not None:
            raise NotEnoughData(missing, ErrorAction.READING)

        if x < 2:
            return False
        if x in SMALL_PRIMES:
            return True
        if x % 2 == 0 or x % 3 == 0 or x % 5 == 0:
            return False

        for p in self.iter(7, root):
            if x % p == 0:
                return False
        return True

    def count_primes_in_range(self, start: int, end: int) -> int:
        """
        Number of primes in [start, end].

        Returns 0 whenever start > end. Otherwise raises NotEnoughData if the
        range is not inside the data's range.

        Examples
        --------
        >>> data = PrimeData.starter()
        >>> data.count_primes_in_range(0, 30), data.count_primes_in_range(2, 7)
        (10, 4)
        """
        if start > end:
            return 0

        missing = missing_range(self._range, (start, end))
        if missing is not None:
            raise NotEnoughData(missing, ErrorAction.READING)

        if start == end:
            return int(self.is_prime(start))

        # 2, 3 and 5 have no bits
        small = sum(1 for p in SMALL_PRIMES if start <= p <= end)

        # multiples of 30 are never prime, and the window they open may be unstored
        if end % 30 == 0:
            end -= 1

        offset = self.offset()
        first, last = start // 30 - offset, end // 30 - offset
        lo, hi = start % 30, end % 30

        if first == last:
            return small + self._byte(first).count_primes_in_range(lo, hi)

        return (
            small
            + self._byte(first).count_primes_in_range(lo, 29)
            + count_set_bits(self._blocks[first + 1:last])
            + self._byte(last).count_primes_in_range(0, hi)
        )

    def count_primes(self) -> int:
        """Number of primes in the whole range."""
        return self.count_primes_in_range(*self._range)

    def nth_prime(self, n: int) -> int:
        """
        The nth prime (1-indexed: nth_prime(1) == 2).

        The data must start at or before 7 and hold at least n primes,
        otherwise NotEnoughData names the missing range. n <= 0 raises
        OutOfBounds.

        Examples
        --------
        >>> PrimeData.generate(0, 1000).nth_prime(19)
        67
        """
        if n <= 0:
            raise OutOfBounds(n, ErrorAction.READING)
        if n <= 3:
            return SMALL_PRIMES[n - 1]

        bound_lo, bound_hi = nth_prime_bounds(n)
        start, end = self._range

        if self.is_empty():
            raise NotEnoughData((7, bound_hi), ErrorAction.READING)
        if start > 7:
            raise NotEnoughData((7, start - 1), ErrorAction.READING)

        total = len(SMALL_PRIMES) + self.count_primes_in_range(7, end)
        if total < n:
            raise NotEnoughData((end + 1, max(end + 1, bound_hi)), ErrorAction.READING)

        lo = max(bound_lo, 7)
        hi = min(bound_hi, end)
        if lo > hi:
            raise RuntimeError(f"nth_prime_bounds({n}) = {(bound_lo, bound_hi)} misses data {self._range}")

        # primes strictly below lo
        below = len(SMALL_PRIMES) + self.count_primes_in_range(7, lo) - int(self.is_prime(lo))

        for ordinal, p in enumerate(self.iter(lo, hi), start=below + 1):
            if ordinal == n:
                return p

        raise RuntimeError(f"nth_prime_bounds({n}) = {(bound_lo, bound_hi)} does not contain prime #{n}")

    def factorize(self, x: int) -> Factorization:
        """
        Prime factorization of x by trial division.

        The data must cover [2, isqrt(x)]. Whatever remains after dividing
        out those primes is 1 or a single prime larger than isqrt(x).

        Examples
        --------
        >>> PrimeData.generate(0, 12).factorize(120).as_tuples()
        [(2, 3), (3, 1), (5, 1)]
        """
        if x == 0:
            raise OutOfBounds(0, ErrorAction.READING)

        root = sqrt_floor(x)
        missing = missing_range(self._range, (2, root))
        if missing is not None:
            raise NotEnoughData(missing, ErrorAction.READING)

        factors = _FactorAccumulator()
        remaining = x

        for p in self.iter(2, root):
            if p * p > remaining:
                break
            while remaining % p == 0:
                factors.add_factor(p)
                remaining //= p

        if remaining > 1:
            factors.add_factor(remaining)

        return factors.freeze()

    def __repr__(self) -> str:
        start, end = self._range
        return f"PrimeData(range=({start}, {end}), blocks={len(self._blocks)})"

    def __str__(self) -> str:
        """
        Boxed table of the raw blocks, each labelled with its first number.

        Examples
        --------
        >>> print(PrimeData.generate(0, 90))  # doctest: +ELLIPSIS
        ### PRIME DATA ###...
        # Range: (0 -> 90) ...
        #  0|01111111| 30|11111011| 60|11110111| ...
        ###...
        """
        digits = len(str(self._range[1]))
        cell = digits + len(str(PrimeByte()))
        per_line = 128 // cell
        width = per_line * (cell + 1) + 3

        title = "### PRIME DATA "
        header = f"Range: ({self._range[0]} -> {self._range[1]})"
        lines = [
            title + "#" * (width - len(title)),
            f"# {header}{' ' * (width - len(header) - 4)} #",
        ]

        offset = self.offset()
        for first in range(0, len(self._blocks), per_line):
            row = "# "
            for j, byte in enumerate(self._blocks[first:first + per_line], start=first):
                row += f"{30 * (offset + j):>{digits}}{PrimeByte(int(byte))} "
            lines.append(row + " " * (width - len(row) - 1) + "#")

        lines.append("#" * width)
        return "\n".join(lines)
