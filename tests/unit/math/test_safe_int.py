"""Tests for SafeInt checked uint256 arithmetic."""

import pytest

from dex.constants import UINT256_MAX
from dex.errors import ArithmeticOverflow, DexError
from dex.safe_int import (
    DivisionByZero,
    S,
    SafeInt,
    SafeIntError,
    Uint256Overflow,
    Underflow,
)


class TestSafeIntConstruction:
    """Tests for SafeInt construction."""

    def test_from_int(self):
        assert SafeInt(42).value == 42

    def test_from_safeint(self):
        """SafeInt can be constructed from another SafeInt."""
        assert SafeInt(SafeInt(42)).value == 42

    def test_bounds_are_inclusive(self):
        assert SafeInt(0).value == 0
        assert SafeInt(UINT256_MAX).value == UINT256_MAX

    def test_negative_raises_underflow(self):
        with pytest.raises(Underflow):
            SafeInt(-1)

    def test_above_uint256_raises_overflow(self):
        with pytest.raises(Uint256Overflow):
            SafeInt(UINT256_MAX + 1)

    def test_invalid_types_raise(self):
        with pytest.raises(TypeError):
            SafeInt("42")  # type: ignore[arg-type]
        with pytest.raises(TypeError):
            SafeInt(3.0)  # type: ignore[arg-type]
        with pytest.raises(TypeError):
            SafeInt(True)

    def test_alias_s(self):
        assert S is SafeInt


class TestSafeIntArithmetic:
    """Tests for checked arithmetic operations."""

    def test_add(self):
        assert (S(10) + S(5)).value == 15
        assert (S(10) + 5).value == 15

    def test_add_overflow(self):
        with pytest.raises(Uint256Overflow):
            S(UINT256_MAX) + 1

    def test_sub(self):
        assert (S(10) - S(3)).value == 7

    def test_sub_to_zero(self):
        assert (S(10) - 10).value == 0

    def test_sub_underflow(self):
        with pytest.raises(Underflow):
            S(3) - S(10)

    def test_mul(self):
        assert (S(6) * S(7)).value == 42

    def test_mul_overflow(self):
        """A product above 2^256-1 raises instead of wrapping."""
        with pytest.raises(Uint256Overflow):
            S(2**128) * S(2**128)

    def test_mul_at_limit(self):
        assert (S(2**255) * 1).value == 2**255

    def test_floordiv_rounds_down(self):
        assert (S(10) // S(3)).value == 3

    def test_floordiv_by_zero(self):
        with pytest.raises(DivisionByZero):
            S(10) // 0

    def test_min(self):
        assert S(3).min(5).value == 3
        assert S(5).min(S(3)).value == 3

    def test_isqrt_floors(self):
        assert S(10_000).isqrt().value == 100
        assert S(20_000).isqrt().value == 141
        assert S(1).isqrt().value == 1


class TestSafeIntComparison:
    def test_comparisons_with_int_and_safeint(self):
        assert S(5) == 5
        assert S(5) == S(5)
        assert S(4) < S(5)
        assert S(5) <= 5
        assert S(6) > 5
        assert S(5) >= S(5)

    def test_bool(self):
        assert not S(0)
        assert S(1)


class TestErrorHierarchy:
    """All SafeInt failures are reported as ArithmeticOverflow."""

    @pytest.mark.parametrize("error", [DivisionByZero, Underflow, Uint256Overflow])
    def test_subclasses(self, error):
        assert issubclass(error, SafeIntError)
        assert issubclass(error, ArithmeticOverflow)
        assert issubclass(error, DexError)
        assert issubclass(error, ArithmeticError)
