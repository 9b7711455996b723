"""Constant product swap math.

The pool keeps x * y = k, with a fee taken from every input amount.
With the default 997/1000 multiplier, 0.3% of each input stays in the pool
and accrues to share holders through reserve growth.
"""

from __future__ import annotations

from dex.constants import FEE_DENOMINATOR, FEE_MULTIPLIER
from dex.errors import InsufficientLiquidity, InvalidAmount, InvalidReserves
from dex.safe_int import S


class ConstantProduct:
    """Constant product AMM math.

    Formula: amount_out = (amount_in * 997 * reserve_out) / (reserve_in * 1000 + amount_in * 997)

    All methods are pure: they read the reserves they are given and never
    touch pool state. Every intermediate product is checked against the
    uint256 range and raises ArithmeticOverflow instead of wrapping.
    """

    def get_amount_out(
        self,
        amount_in: int,
        reserve_in: int,
        reserve_out: int,
        fee_multiplier: int = FEE_MULTIPLIER,
        fee_denominator: int = FEE_DENOMINATOR,
    ) -> int:
        """Calculate output amount for an exact input.

        Args:
            amount_in: Input asset amount
            reserve_in: Reserve of input asset in pool
            reserve_out: Reserve of output asset in pool
            fee_multiplier: Fee multiplier (default 997 for 0.3% fee)
            fee_denominator: Scale of fee_multiplier (default 1000)

        Returns:
            Output asset amount, rounded down

        Raises:
            InvalidAmount: If amount_in is zero or negative
            InvalidReserves: If either reserve is empty
            ArithmeticOverflow: If an intermediate product exceeds uint256
        """
        if amount_in <= 0:
            raise InvalidAmount(f"Swap input must be positive, got {amount_in}")
        if reserve_in <= 0 or reserve_out <= 0:
            raise InvalidReserves(
                f"Cannot quote against empty reserves ({reserve_in}, {reserve_out})"
            )

        amount_in_with_fee = S(amount_in) * S(fee_multiplier)
        numerator = amount_in_with_fee * S(reserve_out)
        denominator = S(reserve_in) * S(fee_denominator) + amount_in_with_fee

        return (numerator // denominator).value

    def get_amount_in(
        self,
        amount_out: int,
        reserve_in: int,
        reserve_out: int,
        fee_multiplier: int = FEE_MULTIPLIER,
        fee_denominator: int = FEE_DENOMINATOR,
    ) -> int:
        """Calculate the minimum input that yields at least amount_out.

        Formula: amount_in = (res_in * out * 1000) / ((res_out - out) * 997) + 1

        Args:
            amount_out: Desired output asset amount
            reserve_in: Reserve of input asset in pool
            reserve_out: Reserve of output asset in pool
            fee_multiplier: Fee multiplier (default 997 for 0.3% fee)
            fee_denominator: Scale of fee_multiplier (default 1000)

        Returns:
            Required input asset amount, rounded up

        Raises:
            InvalidAmount: If amount_out is zero or negative
            InvalidReserves: If either reserve is empty
            InsufficientLiquidity: If amount_out would drain the output reserve
            ArithmeticOverflow: If an intermediate product exceeds uint256
        """
        if amount_out <= 0:
            raise InvalidAmount(f"Swap output must be positive, got {amount_out}")
        if reserve_in <= 0 or reserve_out <= 0:
            raise InvalidReserves(
                f"Cannot quote against empty reserves ({reserve_in}, {reserve_out})"
            )
        if amount_out >= reserve_out:
            raise InsufficientLiquidity(
                f"Output {amount_out} must be below the output reserve {reserve_out}"
            )

        numerator = S(reserve_in) * S(amount_out) * S(fee_denominator)
        denominator = (S(reserve_out) - S(amount_out)) * S(fee_multiplier)

        return ((numerator // denominator) + S(1)).value


# Singleton instance
constant_product = ConstantProduct()


def quote(
    amount_in: int,
    reserve_in: int,
    reserve_out: int,
    fee_multiplier: int = FEE_MULTIPLIER,
    fee_denominator: int = FEE_DENOMINATOR,
) -> int:
    """Quote the fee-adjusted output of a swap, independent of any pool.

    quote(10, 100, 200) == 18
    """
    return constant_product.get_amount_out(
        amount_in, reserve_in, reserve_out, fee_multiplier, fee_denominator
    )


__all__ = [
    "ConstantProduct",
    "constant_product",
    "quote",
]
