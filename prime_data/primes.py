"""
Prime convenience functions.

Responsibility: one-call answers that build and discard a PrimeData.
When asking many questions, generate a PrimeData once and query it.
"""

import numpy as np

from .arithmetic import sqrt_floor
from .prime_store import PrimeData


def is_prime(x: int) -> bool:
    """
    Return True iff x is prime.

    Generates primes up to isqrt(x), then trial-divides.

    Examples
    --------
    >>> is_prime(65_537), is_prime(4_294_967_297)
    (True, False)
    """
    return PrimeData.generate(0, sqrt_floor(x)).check_prime(x)


def count_primes(x: int) -> int:
    """
    Return the number of primes <= x.

    For an estimate that skips the sieve, see estimate.upper_bound.

    Examples
    --------
    >>> count_primes(1_000), count_primes(100_000)
    (168, 9592)
    """
    return PrimeData.generate(0, x).count_primes()


def primes_upto(N: int) -> np.ndarray:
    """
    Return array of all primes <= N.

    Parameters
    ----------
    N : int
        Upper bound (inclusive).

    Returns
    -------
    np.ndarray
        int64 array of primes, ascending.
    """
    return np.fromiter(PrimeData.generate(0, N).iter_all(), dtype=np.int64)
