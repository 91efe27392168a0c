"""
Prime estimates.

Responsibility: closed-form approximations used to bound search windows.
Only exact_count touches a sieve.
"""

import math
from typing import Tuple

from .arithmetic import log10


EXACT_COUNT_LIMIT = 10_000


def exact_count(bound: int) -> int:
    """Number of primes <= bound, by generating the data and counting."""
    from .prime_store import PrimeData

    return PrimeData.generate(0, bound).count_primes()


def upper_bound(bound: int) -> int:
    """
    Upper bound for the number of primes <= bound.

    Never below the true count. Relative error shrinks as bound grows:
    under 1% for 10^4 < bound < 10^5, under 0.5% from 10^5 up.

    Parameters
    ----------
    bound : int
        Inclusive upper limit.

    Returns
    -------
    int
        pi(bound) itself for bound <= 10_000, otherwise
        x / (ln x - 1.109) for 10^4 <= x < 10^5,
        x / (ln x - 1.100) for 10^5 <= x < 10^6,
        and Dusart's x/ln x * (1 + 1/ln x + 2.51/ln^2 x) beyond.
    """
    if bound <= EXACT_COUNT_LIMIT:
        return exact_count(bound)

    magnitude = log10(bound)
    if magnitude == 4:
        return _offset_x_ln_x(bound, 1.109)
    if magnitude == 5:
        return _offset_x_ln_x(bound, 1.100)
    return _dusart(bound, 1.00, 2.51)


def _offset_x_ln_x(bound: int, offset: float) -> int:
    x = float(bound)
    return int(x / (math.log(x) - offset))


def _dusart(bound: int, a: float, b: float) -> int:
    x = float(bound)
    inv_ln = 1.0 / math.log(x)
    return int(x * inv_ln * (1.0 + a * inv_ln + b * inv_ln * inv_ln))


def nth_prime_approximation(n: int) -> int:
    """
    Approximate size of the nth prime.

    p_n ~ n (ln n + ln ln n - 1 + (ln ln n - 2)/ln n
             - ((ln ln n)^2 - 6 ln ln n + 11) / (2 ln^2 n))

    n = 1, 2, 3 give 2, 3, 5 exactly. The series goes negative for a few
    small n; those saturate at 0. Raises ValueError for n = 0.
    """
    if n == 0:
        raise ValueError("Tried to get the zeroth prime!")
    if n <= 3:
        return (2, 3, 5)[n - 1]

    x = float(n)
    logn = math.log(x)
    loglogn = math.log(logn)

    term1 = (loglogn - 2.0) / logn
    term2 = (loglogn * loglogn - 6.0 * loglogn + 11.0) / (2.0 * logn * logn)

    approximation = x * (logn + loglogn - 1.0 + term1 - term2)
    return max(int(approximation), 0)


# Relative error of nth_prime_approximation, by floor(log10(n))
_RELATIVE_EPSILON = {
    4: 2.0 ** -7,
    5: 2.0 ** -10,
    6: 2.0 ** -11,
    7: 2.0 ** -13,
}


def nth_prime_bounds(n: int) -> Tuple[int, int]:
    """
    Inclusive range guaranteed to contain the nth prime.

    Below n = 10^4 this is the fixed range (0, 104723), since p_9999 = 104723.
    Above, the approximation converges, so approximation ± epsilon with a
    relative epsilon that tightens with each order of magnitude.
    """
    magnitude = log10(n)
    if magnitude < 4:
        return (0, 104_723)

    approximation = nth_prime_approximation(n)
    relative_epsilon = _RELATIVE_EPSILON.get(magnitude, 2.0 ** -14)
    epsilon = int(approximation * relative_epsilon)

    return (approximation - epsilon, approximation + epsilon)
