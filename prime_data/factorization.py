"""
Factorization utilities.

Responsibility: represent a number as its prime factorization and derive
divisors from it. Finding the factors is PrimeData.factorize's job.
"""

from collections import Counter
from typing import Dict, List, Set, Tuple

from .arithmetic import sqrt_floor


class Factorization:
    """
    A number as {prime: multiplicity}.

    The product of prime**multiplicity over all entries is the number.
    Multiplicities are always positive; 1 is the empty factorization.
    """

    def __init__(self, factors: Dict[int, int] = None):
        self._factors = {p: m for p, m in (factors or {}).items() if m > 0}

    @classmethod
    def from_int(cls, number: int) -> "Factorization":
        """
        Factorize `number` by generating primes up to its square root.

        If you factorize many numbers, generate a PrimeData once and call
        PrimeData.factorize instead.
        """
        from .prime_store import PrimeData

        return PrimeData.generate(0, sqrt_floor(number)).factorize(number)

    def as_int(self) -> int:
        """
        Rebuild the original number.

        Examples
        --------
        >>> Factorization.from_int(29375346).as_int()
        29375346
        """
        number = 1
        for prime, amount in self._factors.items():
            number *= prime ** amount
        return number

    def as_tuples(self) -> List[Tuple[int, int]]:
        """(prime, multiplicity) pairs sorted by prime. Empty for 1."""
        return sorted(self._factors.items())

    def as_dict(self) -> Dict[int, int]:
        return dict(self._factors)

    def distinct_primes(self) -> Set[int]:
        return set(self._factors)

    def omega(self) -> int:
        """Count distinct prime factors (little omega)."""
        return len(self._factors)

    def big_omega(self) -> int:
        """Count prime factors with multiplicity (big Omega)."""
        return sum(self._factors.values())

    def all_factors(self) -> List[int]:
        """
        Every divisor of the number, ascending, including 1 and itself.

        Length 1 iff the number is 1, length 2 iff it is prime.

        Examples
        --------
        >>> Factorization.from_int(30).all_factors()
        [1, 2, 3, 5, 6, 10, 15, 30]
        """
        divisors = [1]
        for prime, amount in self.as_tuples():
            powers = [prime ** e for e in range(amount + 1)]
            divisors = [d * q for q in powers for d in divisors]
        return sorted(divisors)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Factorization):
            return NotImplemented
        return self._factors == other._factors

    def __repr__(self) -> str:
        if not self._factors:
            return "Factorization(1)"
        terms = " * ".join(str(p) if m == 1 else f"{p}^{m}" for p, m in self.as_tuples())
        return f"Factorization({terms})"


class _FactorAccumulator:
    """Collects prime factors one at a time, then freezes into a Factorization."""

    def __init__(self):
        self._counts = Counter()

    def add_factor(self, prime: int) -> None:
        self._counts[prime] += 1

    def freeze(self) -> Factorization:
        return Factorization(dict(self._counts))


def all_factors_of(number: int) -> List[int]:
    """
    Every divisor of `number`, ascending.

    Examples
    --------
    >>> all_factors_of(1)
    [1]
    >>> all_factors_of(6)
    [1, 2, 3, 6]
    """
    return Factorization.from_int(number).all_factors()
