"""
Integer arithmetic helpers.

Responsibility: exact integer math only. No prime knowledge lives here.

All functions work on non-negative Python ints. Square roots go through
math.isqrt, which is exact for every integer, so values near 2^52 (where
a float sqrt starts to drift) need no correction step.
"""

from math import isqrt
from typing import Optional, Tuple


U64_MAX = (1 << 64) - 1


def sqrt_floor(x: int) -> int:
    """Largest r such that r*r <= x."""
    return isqrt(x)


def sqrt_ceil(x: int) -> int:
    """Smallest r such that r*r >= x."""
    r = isqrt(x)
    return r if r * r == x else r + 1


def is_square(x: int) -> bool:
    r = isqrt(x)
    return r * r == x


def div_floor(a: int, b: int) -> int:
    return a // b


def div_ceil(a: int, b: int) -> int:
    return -(-a // b)


def divisible_by(a: int, b: int) -> bool:
    return a % b == 0


def log2(x: int) -> int:
    """Floor of log2(x). Returns 0 for x < 1."""
    if x < 1:
        return 0
    return x.bit_length() - 1


def log10(x: int) -> int:
    """Floor of log10(x). Returns 0 for x < 1."""
    if x < 1:
        return 0
    return len(str(x)) - 1


def missing_range(outer: Tuple[int, int], inner: Tuple[int, int]) -> Optional[Tuple[int, int]]:
    """
    Check that the inclusive range `inner` lies inside `outer`.

    Parameters
    ----------
    outer : tuple of int
        Covering range (start, end).
    inner : tuple of int
        Requested range (start, end). An empty request (start > end) is
        contained in anything.

    Returns
    -------
    tuple of int or None
        None if covered, otherwise the first uncovered sub-range: the part
        below `outer` if the request starts too early, else the part above.
    """
    outer_start, outer_end = outer
    inner_start, inner_end = inner

    if inner_start > inner_end:
        return None
    if outer_start > outer_end:
        return (inner_start, inner_end)

    if outer_start > inner_start:
        return (inner_start, min(outer_start - 1, inner_end))
    if inner_end > outer_end:
        return (max(outer_end + 1, inner_start), inner_end)

    return None
