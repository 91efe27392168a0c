"""
A "byte of primes".

Every integer coprime with 30 is congruent mod 30 to one of 8 values, the
k-values {1, 7, 11, 13, 17, 19, 23, 29}. A PrimeByte stores one bit per
k-value for a single window [30*offset, 30*(offset+1)):

    bit 7 (MSB) -> k=1
    bit 6       -> k=7
    ...
    bit 0 (LSB) -> k=29

A set bit means "30*offset + k is prime". The byte does not know its own
offset; callers supply it when converting bits to integers.

2, 3 and 5 are never represented. Every byte-level query returns False for
them, and for any value that is not a k-value.
"""

from bisect import bisect_left
from typing import List

from .errors import InvalidResidue


K_VALUES = (1, 7, 11, 13, 17, 19, 23, 29)


def k_index(k_value: int) -> int:
    """Bit index (0 = MSB) of a k-value, or -1 if it is not one."""
    i = bisect_left(K_VALUES, k_value)
    if i < 8 and K_VALUES[i] == k_value:
        return i
    return -1


class PrimeByte:
    """Eight primality bits for the k-values of one 30-wide window."""

    __slots__ = ("byte",)

    def __init__(self, byte: int = 0xFF):
        if not 0 <= byte <= 0xFF:
            raise ValueError(f"{byte} does not fit in a byte")
        self.byte = int(byte)

    def copy(self) -> "PrimeByte":
        return PrimeByte(self.byte)

    def set_non_prime(self, k_value: int) -> bool:
        """
        Clear the bit of `k_value`.

        Returns True if the bit was set, False if it was already clear.
        Raises InvalidResidue if `k_value` is not a k-value.
        """
        i = k_index(k_value)
        if i < 0:
            raise InvalidResidue(k_value)

        mask = 0x80 >> i
        if self.byte & mask:
            self.byte ^= mask
            return True
        return False

    def is_prime(self, x: int) -> bool:
        """
        Whether the k-value `x` is marked prime.

        Always False for 2, 3, 5 and for anything above 29, so reduce mod 30
        first and handle the small primes before calling this.
        """
        i = k_index(x)
        return i >= 0 and bool(self.byte & (0x80 >> i))

    def as_boolean_array(self) -> List[bool]:
        return [bool(self.byte & (0x80 >> i)) for i in range(8)]

    def as_k_values(self) -> List[int]:
        return [k for k, bit in zip(K_VALUES, self.as_boolean_array()) if bit]

    def as_k_values_in_range(self, lo: int, hi: int) -> List[int]:
        return [k for k in self.as_k_values() if lo <= k <= hi]

    def as_primes(self, offset: int) -> List[int]:
        """Convert set bits to integers 30*offset + k."""
        base = 30 * offset
        return [base + k for k in self.as_k_values()]

    def as_primes_in_range(self, offset: int, lo: int, hi: int) -> List[int]:
        """Same as as_primes, keeping only k-values in [lo, hi]."""
        base = 30 * offset
        return [base + k for k in self.as_k_values_in_range(lo, hi)]

    def count_primes(self) -> int:
        return bin(self.byte).count("1")

    def count_primes_in_range(self, lo: int, hi: int) -> int:
        return len(self.as_k_values_in_range(lo, hi))

    def overwrite_at(self, other: "PrimeByte", position: int) -> None:
        """
        Replace bits from `position` onward (0 = MSB) with those of `other`.

        position=0 copies the whole byte. Used when joining two data
        structures whose boundary falls inside a window.
        """
        if not 0 <= position <= 7:
            raise ValueError(f"bit position must be in 0..=7, got {position}")

        keep = (0xFF << (8 - position)) & 0xFF
        self.byte = (self.byte & keep) | (other.byte & ~keep & 0xFF)

    def matches_in_range(self, other: "PrimeByte", lo: int, hi: int) -> bool:
        """
        Whether both bytes agree on every k-value in [lo, hi].

        Trivially True if no k-value lies in the range.
        """
        diff = self.byte ^ other.byte
        return not any(
            diff & (0x80 >> i) for i, k in enumerate(K_VALUES) if lo <= k <= hi
        )

    def as_u8(self) -> int:
        return self.byte

    def __int__(self) -> int:
        return self.byte

    def __eq__(self, other) -> bool:
        if not isinstance(other, PrimeByte):
            return NotImplemented
        return self.byte == other.byte

    def __hash__(self) -> int:
        return hash(self.byte)

    def __str__(self) -> str:
        return f"|{self.byte:08b}|"

    def __repr__(self) -> str:
        return f"PrimeByte({self.byte:#010b})"
