"""
Tests for Factorization and divisor listing.
"""

import pytest

from prime_data.factorization import Factorization, all_factors_of


def is_prime_naive(n: int) -> bool:
    return n >= 2 and all(n % d for d in range(2, int(n**0.5) + 1))


class TestFromInt:
    """Factorization.from_int builds its own data up to isqrt(x)."""

    def test_round_trip(self):
        """Rebuilding x from (prime, multiplicity) pairs gives x back."""
        for x in range(1, 2_000):
            assert Factorization.from_int(x).as_int() == x, f"round trip of {x}"

    def test_round_trip_large(self):
        for x in [29_375_346, 4_294_967_297, 999_999_000_001, 2**40, 3**25]:
            assert Factorization.from_int(x).as_int() == x

    def test_as_tuples(self):
        # 43560 = 2^3 * 3^2 * 5 * 11^2
        assert Factorization.from_int(43_560).as_tuples() == [(2, 3), (3, 2), (5, 1), (11, 2)]

    def test_one_is_empty(self):
        one = Factorization.from_int(1)
        assert one.as_tuples() == []
        assert one.as_int() == 1
        assert one == Factorization()

    def test_fermat_number(self):
        assert Factorization.from_int(4_294_967_297).as_tuples() == [(641, 1), (6_700_417, 1)]

    def test_factors_are_prime(self):
        for x in range(2, 500):
            for p, m in Factorization.from_int(x).as_tuples():
                assert is_prime_naive(p), f"{p} in factorization of {x} is not prime"
                assert m > 0


class TestCounts:
    def test_omega(self):
        assert Factorization.from_int(30).omega() == 3
        assert Factorization.from_int(60).omega() == 3
        assert Factorization.from_int(210).omega() == 4
        assert Factorization.from_int(125).omega() == 1

    def test_big_omega(self):
        assert Factorization.from_int(60).big_omega() == 4
        assert Factorization.from_int(1).big_omega() == 0

    def test_distinct_primes(self):
        assert Factorization.from_int(360).distinct_primes() == {2, 3, 5}

    def test_zero_multiplicity_is_dropped(self):
        assert Factorization({2: 1, 3: 0}).as_tuples() == [(2, 1)]


class TestAllFactors:
    """all_factors lists every divisor, ascending."""

    def test_thirty(self):
        assert all_factors_of(30) == [1, 2, 3, 5, 6, 10, 15, 30]
        assert Factorization.from_int(30).all_factors() == [1, 2, 3, 5, 6, 10, 15, 30]

    def test_small_values(self):
        assert all_factors_of(1) == [1]
        assert all_factors_of(3) == [1, 3]
        assert all_factors_of(6) == [1, 2, 3, 6]

    def test_matches_brute_force(self):
        for x in range(1, 600):
            assert all_factors_of(x) == [d for d in range(1, x + 1) if x % d == 0], f"divisors of {x}"

    def test_length_identifies_one_and_primes(self):
        """Length 1 iff x = 1, length 2 iff x is prime."""
        for x in range(1, 1_000):
            n = len(all_factors_of(x))
            assert (n == 1) == (x == 1)
            assert (n == 2) == is_prime_naive(x), f"x={x} has {n} divisors"


class TestRepr:
    def test_repr(self):
        assert repr(Factorization.from_int(360)) == "Factorization(2^3 * 3^2 * 5)"
        assert repr(Factorization.from_int(1)) == "Factorization(1)"


if __name__ == '__main__':
    pytest.main([__file__, '-v'])
