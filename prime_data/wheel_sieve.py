"""
Mod-30 wheel sieve over packed bytes.

Only numbers coprime with 30 are stored, 8 per window of 30 consecutive
integers, one bit each (see prime_byte.py). That is 8/30 of a bit per
integer instead of one byte, and 2, 3, 5 never need striking.

Index mapping (wheel index i, one per coprime-30 number):
- Index i → 30 * (i // 8) + K_VALUES[i % 8]
- n → 8 * (n // 30) + position of (n % 30) in K_VALUES

For n=1: index 0 ✓
For n=7: index 1 ✓
For n=29: index 7 ✓
For n=31: index 8 ✓

Striking works on block-local offsets: a segment starting at block b has
base 30*b, and every value handed to the numba kernel is n - base. Offsets
stay small even when the segment itself sits near 2^64.
"""

from bisect import bisect_left
from typing import Iterable

import numpy as np
from numba import njit

from .arithmetic import div_ceil
from .errors import InvalidResidue
from .prime_byte import K_VALUES, PrimeByte, k_index


# Distance from each k-value to the next one (29 -> 31 wraps to the next window)
WHEEL_GAPS = np.array([6, 4, 2, 4, 2, 4, 6, 2], dtype=np.int64)

# AND-mask clearing the bit of residue r; 0xFF for residues that have no bit
CLEAR_MASKS = np.array(
    [0xFF ^ (0x80 >> k_index(r)) if k_index(r) >= 0 else 0xFF for r in range(30)],
    dtype=np.uint8,
)

POPCOUNT = np.array([bin(b).count("1") for b in range(256)], dtype=np.uint8)


def index_to_n(i: int) -> int:
    """Convert wheel index to actual number."""
    # i=0 → 1, i=1 → 7, ..., i=7 → 29, i=8 → 31
    return 30 * (i // 8) + K_VALUES[i % 8]


def n_to_index(n: int) -> int:
    """Convert number (must be coprime with 30) to wheel index."""
    i = k_index(n % 30)
    if i < 0:
        raise InvalidResidue(n % 30)
    return 8 * (n // 30) + i


def first_index_at_or_above(n: int) -> int:
    """Wheel index of the smallest coprime-30 number >= n."""
    # n % 30 <= 29 and 29 is a k-value, so bisect never runs off the end
    return 8 * (n // 30) + bisect_left(K_VALUES, n % 30)


def allocate_blocks(start: int, end: int) -> np.ndarray:
    """
    Allocate all-prime blocks covering [start, end].

    Parameters
    ----------
    start, end : int
        Inclusive range. Start is rounded down and end rounded up to a
        multiple of 30.

    Returns
    -------
    np.ndarray
        uint8 array, one byte per window. Empty if start > end or the
        range covers no window. If the first window is [0, 30), 1 is
        already cleared.
    """
    block_start = start // 30
    block_end = div_ceil(end, 30)

    if start > end or block_start >= block_end:
        return np.zeros(0, dtype=np.uint8)

    blocks = np.full(block_end - block_start, 0xFF, dtype=np.uint8)

    if block_start == 0:
        first = PrimeByte()
        first.set_non_prime(1)
        blocks[0] = first.as_u8()

    return blocks


@njit(cache=True)
def _strike_kernel(blocks, primes, first_values, first_k, last_value):
    for i in range(primes.shape[0]):
        p = primes[i]
        value = first_values[i]
        k = first_k[i]
        while value <= last_value:
            j = value // 30
            blocks[j] = blocks[j] & CLEAR_MASKS[value % 30]
            value += p * WHEEL_GAPS[k]
            k = (k + 1) & 7


def strike_multiples(blocks: np.ndarray, start: int, end: int, primes: Iterable[int]) -> None:
    """
    Segmented sieve step: clear every p*m in [start, end] from `blocks`.

    For each prime p, multipliers m run over coprime-30 numbers in
    [max(ceil(start/p), 7), end // p]. Products of two coprime-30 numbers
    are coprime-30, so every struck value has a bit. A composite may be
    struck once per prime factor; that is harmless.

    Parameters
    ----------
    blocks : np.ndarray
        Output of allocate_blocks(start, end); modified in place.
    start, end : int
        Inclusive range the blocks were allocated for.
    primes : iterable of int
        Sieving primes, all >= 7.
    """
    if len(blocks) == 0:
        return

    base = 30 * (start // 30)
    sieving, firsts, ks = [], [], []

    for p in primes:
        lo = max(div_ceil(start, p), 7)
        if p * lo > end:
            continue
        w = first_index_at_or_above(lo)
        sieving.append(p)
        firsts.append(p * index_to_n(w) - base)
        ks.append(w % 8)

    if not sieving:
        return

    _strike_kernel(
        blocks,
        np.array(sieving, dtype=np.int64),
        np.array(firsts, dtype=np.int64),
        np.array(ks, dtype=np.int64),
        end - base,
    )


def count_set_bits(blocks: np.ndarray) -> int:
    """Total number of set bits (prime marks) in a block array."""
    if len(blocks) == 0:
        return 0
    return int(POPCOUNT[blocks].sum(dtype=np.int64))
