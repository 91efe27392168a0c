"""
Error types raised by prime data structures.

Two kinds cover every user-facing failure:

- NotEnoughData: the operation needs knowledge about some range of integers
  the structure does not have. `missing` holds that exact inclusive range,
  so the caller can generate precisely the data that is lacking.
- OutOfBounds: one specific value cannot be accessed or makes no sense
  (e.g. the zeroth prime).

Broken internal invariants raise RuntimeError instead; reaching one means a
bug in this package, not bad input.
"""

from enum import Enum
from typing import Tuple


class ErrorAction(Enum):
    READING = "read"
    MODIFYING = "modify"
    GENERATING = "generate"


class ErrorSource(Enum):
    PRIME_BYTE = "PrimeByte"
    PRIME_DATA = "PrimeData"


class PrimeError(Exception):
    """Base class for errors about missing or inaccessible prime data."""

    def __init__(self, action: ErrorAction, source: ErrorSource, detail: str):
        self.action = action
        self.source = source
        self.detail = detail
        super().__init__(
            f"An error occurred when trying to {action.value} {source.value}\n -> {detail}"
        )


class NotEnoughData(PrimeError):
    """Raised when the data does not cover a required range."""

    def __init__(self, missing: Tuple[int, int],
                 action: ErrorAction = ErrorAction.READING,
                 source: ErrorSource = ErrorSource.PRIME_DATA):
        self.missing = missing
        start, end = missing
        super().__init__(action, source,
                         f"Cannot access any data in the given range: {start}..={end}")


class OutOfBounds(PrimeError):
    """Raised when a single value falls outside what can be accessed."""

    def __init__(self, value: int,
                 action: ErrorAction = ErrorAction.READING,
                 source: ErrorSource = ErrorSource.PRIME_DATA):
        self.value = value
        super().__init__(action, source, f"Cannot access the given number: {value}")


class InvalidResidue(ValueError):
    """Raised when a value mod 30 is not one of the 8 k-values."""

    def __init__(self, k_value: int):
        self.k_value = k_value
        super().__init__(f"{k_value} is not coprime with 30 (valid: 1, 7, 11, 13, 17, 19, 23, 29)")
