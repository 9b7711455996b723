"""Checked uint256 arithmetic for reserve and share amounts.

SafeInt wraps a non-negative integer and checks every operation against the
uint256 range, the way on-chain checked arithmetic does:
- Results above 2^256-1 raise Uint256Overflow
- Subtraction below zero raises Underflow
- Division by zero raises DivisionByZero

All three derive from ArithmeticOverflow, so callers that only care about
"the math left the representable range" catch a single error kind.

Usage pattern:
    from dex.safe_int import S

    def shares_for(amount: int, total: int, reserve: int) -> int:
        # Wrap at entry
        sa, st, sr = S(amount), S(total), S(reserve)

        # Natural arithmetic - every step is bounds checked
        return ((sa * st) // sr).value
"""

from __future__ import annotations

from math import isqrt

from dex.constants import UINT256_MAX
from dex.errors import ArithmeticOverflow


class SafeIntError(ArithmeticOverflow):
    """Base class for SafeInt arithmetic errors."""

    pass


class DivisionByZero(SafeIntError):
    """Division by zero."""

    pass


class Underflow(SafeIntError):
    """Result would be negative."""

    pass


class Uint256Overflow(SafeIntError):
    """Result exceeds the uint256 maximum."""

    pass


class SafeInt:
    """Unsigned 256-bit integer with checked arithmetic.

    Unlike a plain int, a SafeInt can never hold a value outside
    [0, 2^256-1]: construction and every arithmetic result are validated,
    so overflow surfaces at the operation that caused it instead of
    wrapping or silently growing.

    Attributes:
        value: The underlying integer value (read-only)
    """

    __slots__ = ("_value",)
    _value: int

    def __init__(self, value: int | SafeInt) -> None:
        """Create a SafeInt from an integer or another SafeInt.

        Args:
            value: Integer value to wrap, or SafeInt to copy

        Raises:
            TypeError: If value is not an int or SafeInt (bool is rejected)
            Underflow: If value is negative
            Uint256Overflow: If value exceeds 2^256-1
        """
        if isinstance(value, SafeInt):
            self._value = value._value
            return
        if isinstance(value, bool) or not isinstance(value, int):
            raise TypeError(f"SafeInt requires int, got {type(value).__name__}")
        if value < 0:
            raise Underflow(f"Negative value cannot be uint256: {value}")
        if value > UINT256_MAX:
            raise Uint256Overflow(f"Value exceeds uint256 max: {value}")
        self._value = value

    @property
    def value(self) -> int:
        """The underlying integer value."""
        return self._value

    def __repr__(self) -> str:
        return f"SafeInt({self._value})"

    def __str__(self) -> str:
        return str(self._value)

    def __hash__(self) -> int:
        return hash(self._value)

    # --- Arithmetic operations ---

    def __add__(self, other: SafeInt | int) -> SafeInt:
        """Add two values.

        Raises:
            Uint256Overflow: If the sum exceeds uint256
        """
        return SafeInt(self._value + _extract_value(other))

    def __sub__(self, other: SafeInt | int) -> SafeInt:
        """Subtract other from self.

        Raises:
            Underflow: If result would be negative
        """
        other_val = _extract_value(other)
        result = self._value - other_val
        if result < 0:
            raise Underflow(f"Underflow: {self._value} - {other_val} = {result}")
        return SafeInt(result)

    def __mul__(self, other: SafeInt | int) -> SafeInt:
        """Multiply two values.

        Raises:
            Uint256Overflow: If the product exceeds uint256
        """
        other_val = _extract_value(other)
        product = self._value * other_val
        if product > UINT256_MAX:
            raise Uint256Overflow(f"Overflow: {self._value} * {other_val} exceeds uint256")
        return SafeInt(product)

    def __floordiv__(self, other: SafeInt | int) -> SafeInt:
        """Integer division (floor).

        Raises:
            DivisionByZero: If other is zero
        """
        other_val = _extract_value(other)
        if other_val == 0:
            raise DivisionByZero(f"Division by zero: {self._value} // 0")
        return SafeInt(self._value // other_val)

    # --- Comparison operations ---

    def __eq__(self, other: object) -> bool:
        if isinstance(other, SafeInt):
            return self._value == other._value
        if isinstance(other, int):
            return self._value == other
        return NotImplemented

    def __lt__(self, other: SafeInt | int) -> bool:
        return self._value < _extract_value(other)

    def __le__(self, other: SafeInt | int) -> bool:
        return self._value <= _extract_value(other)

    def __gt__(self, other: SafeInt | int) -> bool:
        return self._value > _extract_value(other)

    def __ge__(self, other: SafeInt | int) -> bool:
        return self._value >= _extract_value(other)

    # --- Conversion ---

    def __int__(self) -> int:
        return self._value

    def __bool__(self) -> bool:
        """True if non-zero."""
        return self._value != 0

    def __index__(self) -> int:
        return self._value

    # --- Named operations ---

    def min(self, other: SafeInt | int) -> SafeInt:
        """Return minimum of self and other."""
        return SafeInt(min(self._value, _extract_value(other)))

    def isqrt(self) -> SafeInt:
        """Floor of the square root."""
        return SafeInt(isqrt(self._value))


def _extract_value(x: SafeInt | int) -> int:
    """Extract integer value from SafeInt or int."""
    if isinstance(x, SafeInt):
        return x._value
    return x


# Convenience alias for concise code
S = SafeInt
