"""Pool error classes.

Every operation on a pool is all-or-nothing: raising one of these errors
means no reserve, share or ledger change survived the attempt.
"""

from typing import ClassVar


class DexError(Exception):
    """Base error for pool operations."""

    code: ClassVar[str] = "dex_error"


class InvalidAmount(DexError):
    """Input quantity is zero or otherwise not allowed."""

    code: ClassVar[str] = "invalid_amount"


class InsufficientLiquidity(DexError):
    """Mint computation yields zero shares, or the pool cannot cover an output."""

    code: ClassVar[str] = "insufficient_liquidity"


class InsufficientShares(DexError):
    """Burn requested exceeds the holder's share balance."""

    code: ClassVar[str] = "insufficient_shares"


class InvalidReserves(DexError):
    """Query or quote attempted against an empty pool."""

    code: ClassVar[str] = "invalid_reserves"


class ArithmeticOverflow(DexError, ArithmeticError):
    """Intermediate computation left the uint256 range."""

    code: ClassVar[str] = "arithmetic_overflow"


class InvalidIdentifier(DexError, ValueError):
    """Asset or account identifier is empty, too long or not a string."""

    code: ClassVar[str] = "invalid_identifier"


class TransferFailure(DexError):
    """Asset ledger rejected a pull or push."""

    code: ClassVar[str] = "transfer_failure"


__all__ = [
    "DexError",
    "InvalidAmount",
    "InsufficientLiquidity",
    "InsufficientShares",
    "InvalidReserves",
    "InvalidIdentifier",
    "ArithmeticOverflow",
    "TransferFailure",
]
