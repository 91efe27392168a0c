"""
Tests for PrimeByte, the 8-bit block of k-value primality flags.

Bit order: MSB -> k=1, ..., LSB -> k=29.
"""

import pytest

from prime_data.errors import InvalidResidue, PrimeError
from prime_data.prime_byte import K_VALUES, PrimeByte, k_index


class TestConstruction:
    """Default and explicit construction."""

    def test_new_byte_is_all_prime(self):
        """A new byte marks every k-value prime."""
        assert PrimeByte().as_u8() == 0b11111111
        assert int(PrimeByte()) == 255

    def test_rejects_values_above_a_byte(self):
        with pytest.raises(ValueError):
            PrimeByte(256)

    def test_k_values_are_residues_coprime_with_30(self):
        """K_VALUES are exactly the residues mod 30 coprime with 30."""
        expected = [r for r in range(30) if r % 2 and r % 3 and r % 5]
        assert list(K_VALUES) == expected

    def test_k_index(self):
        assert [k_index(k) for k in K_VALUES] == list(range(8))
        assert k_index(0) == -1
        assert k_index(9) == -1
        assert k_index(31) == -1


class TestSetNonPrime:
    """set_non_prime clears bits and reports whether anything changed."""

    def test_clears_bit_once(self):
        byte = PrimeByte(0b10110111)
        assert byte.set_non_prime(1) is True
        assert byte.as_u8() == 0b00110111
        assert byte.set_non_prime(1) is False
        assert byte.as_u8() == 0b00110111

    def test_each_k_value_maps_to_its_bit(self):
        for i, k in enumerate(K_VALUES):
            byte = PrimeByte()
            byte.set_non_prime(k)
            assert byte.as_u8() == 0xFF ^ (0x80 >> i), f"k={k} should clear bit {i}"

    def test_invalid_residue_raises(self):
        """Non k-values raise InvalidResidue, which is not a PrimeError."""
        byte = PrimeByte()
        with pytest.raises(InvalidResidue):
            byte.set_non_prime(4)
        assert not issubclass(InvalidResidue, PrimeError)
        assert byte.as_u8() == 0xFF


class TestQueries:
    """Primality, extraction and counting."""

    def test_is_prime(self):
        byte = PrimeByte(0b00101000)
        assert byte.is_prime(11)
        assert not byte.is_prime(13)
        assert byte.is_prime(17)

    def test_is_prime_is_false_for_non_k_values(self):
        """2, 3, 5 and anything >= 30 are never reported prime."""
        byte = PrimeByte()
        for x in [0, 2, 3, 4, 5, 9, 25, 30, 31, 255]:
            assert not byte.is_prime(x), f"is_prime({x}) should be False"

    def test_boolean_array(self):
        assert PrimeByte(0b10100110).as_boolean_array() == [
            True, False, True, False, False, True, True, False
        ]

    def test_k_values(self):
        byte = PrimeByte(0b10100110)
        assert byte.as_k_values() == [1, 11, 19, 23]
        assert byte.as_k_values_in_range(2, 23) == [11, 19, 23]

    def test_primes_use_offset(self):
        byte = PrimeByte(0b10100110)
        assert byte.as_primes(21) == [631, 641, 649, 653]
        assert byte.as_primes_in_range(21, 2, 23) == [641, 649, 653]
        assert byte.as_primes(0) == [1, 11, 19, 23]

    def test_count(self):
        byte = PrimeByte(0b11010111)
        assert byte.count_primes() == 6
        assert byte.count_primes_in_range(0, 30) == 6
        assert byte.count_primes_in_range(2, 30) == 5
        assert byte.count_primes_in_range(8, 12) == 0


class TestOverwrite:
    """overwrite_at replaces bits from a position onward."""

    def test_overwrite_from_middle(self):
        original = PrimeByte(0b00000000)
        original.overwrite_at(PrimeByte(0b11111111), 5)
        assert original.as_u8() == 0b00000111

    def test_overwrite_whole_byte(self):
        original = PrimeByte(0b10101010)
        original.overwrite_at(PrimeByte(0b01010101), 0)
        assert original.as_u8() == 0b01010101

    def test_overwrite_keeps_leading_bits(self):
        original = PrimeByte(0b11110000)
        original.overwrite_at(PrimeByte(0b00001111), 7)
        assert original.as_u8() == 0b11110001

    def test_position_above_seven_raises(self):
        with pytest.raises(ValueError):
            PrimeByte().overwrite_at(PrimeByte(0), 8)


class TestMatches:
    """matches_in_range compares only k-values in the range."""

    def test_matches_in_range(self):
        byte = PrimeByte(0b10111010)
        other = PrimeByte(0b10110111)
        assert byte.matches_in_range(other, 0, 14)
        assert byte.matches_in_range(other, 23, 23)
        assert not byte.matches_in_range(other, 16, 17)

    def test_range_without_k_values_trivially_matches(self):
        assert PrimeByte(0).matches_in_range(PrimeByte(255), 30, 255)
        assert PrimeByte(0).matches_in_range(PrimeByte(255), 2, 6)


class TestValueSemantics:
    def test_copy_is_independent(self):
        byte = PrimeByte()
        clone = byte.copy()
        clone.set_non_prime(7)
        assert byte.as_u8() == 0xFF
        assert byte != clone

    def test_str(self):
        assert str(PrimeByte(0b00000101)) == "|00000101|"


if __name__ == '__main__':
    pytest.main([__file__, '-v'])
