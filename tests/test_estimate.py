"""
Tests for prime estimates.

upper_bound must never undercount; nth_prime_bounds must contain the prime.
"""

import pytest

from prime_data.estimate import (
    exact_count,
    nth_prime_approximation,
    nth_prime_bounds,
    upper_bound,
)
from prime_data.prime_store import PrimeData


# (n, p_n) pairs
KNOWN_NTH_PRIMES = [
    (1, 2), (2, 3), (3, 5), (4, 7), (19, 67), (1_000, 7_919), (9_999, 104_723),
    (10_000, 104_729), (10_001, 104_743), (78_498, 999_983), (100_000, 1_299_709),
]


class TestExactCount:
    def test_exact_count(self):
        assert exact_count(100) == 25
        assert exact_count(1) == 0
        assert exact_count(2) == 1


@pytest.fixture(scope="module")
def million():
    return PrimeData.generate(0, 1_000_000)


class TestUpperBound:
    """upper_bound(n) >= pi(n); the closed forms tighten as n grows."""

    def test_exact_below_limit(self, million):
        for n in [0, 10, 100, 1_000, 10_000]:
            assert upper_bound(n) == million.count_primes_in_range(0, n)

    def test_never_undercounts(self, million):
        for n in [10_001, 12_345, 50_000, 99_999, 100_000, 500_000, 999_999, 1_000_000]:
            pi_n = million.count_primes_in_range(0, n)
            estimate = upper_bound(n)
            assert estimate >= pi_n, f"upper_bound({n}) = {estimate} < pi = {pi_n}"

    def test_error_shrinks_with_magnitude(self, million):
        """Under 1% for 10^4 <= n < 10^5, under 0.5% from 10^5 up."""
        for n, tolerance in [(10_001, 0.01), (12_345, 0.01), (50_000, 0.01), (99_999, 0.01),
                             (100_000, 0.005), (500_000, 0.005), (1_000_000, 0.005)]:
            pi_n = million.count_primes_in_range(0, n)
            error = (upper_bound(n) - pi_n) / pi_n
            assert error < tolerance, f"upper_bound({n}) off by {error:.4f}"

    def test_large_values_use_closed_form(self):
        """Above the exact limit no sieve runs, so huge inputs return at once."""
        assert upper_bound(10**18) > 2.4e16


class TestNthPrime:
    def test_zeroth_prime_raises(self):
        with pytest.raises(ValueError):
            nth_prime_approximation(0)

    def test_first_three_are_exact(self):
        assert [nth_prime_approximation(n) for n in (1, 2, 3)] == [2, 3, 5]

    def test_never_negative(self):
        for n in range(4, 200):
            assert nth_prime_approximation(n) >= 0

    def test_approximation_converges(self):
        p = 1_299_709
        assert abs(nth_prime_approximation(100_000) - p) / p < 2.0 ** -10

    def test_bounds_contain_nth_prime(self):
        for n, p_n in KNOWN_NTH_PRIMES:
            lo, hi = nth_prime_bounds(n)
            assert lo <= p_n <= hi, f"p_{n} = {p_n} not in [{lo}, {hi}]"

    def test_small_n_use_fixed_bounds(self):
        assert nth_prime_bounds(1) == (0, 104_723)
        assert nth_prime_bounds(9_999) == (0, 104_723)

    def test_bounds_tighten(self):
        lo4, hi4 = nth_prime_bounds(10_000)
        lo8, hi8 = nth_prime_bounds(100_000_000)
        assert (hi4 - lo4) / hi4 > (hi8 - lo8) / hi8


if __name__ == '__main__':
    pytest.main([__file__, '-v'])
