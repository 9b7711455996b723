"""Constant product two-asset pool engine."""

from dex.amm import quote
from dex.errors import (
    ArithmeticOverflow,
    DexError,
    InsufficientLiquidity,
    InsufficientShares,
    InvalidAmount,
    InvalidIdentifier,
    InvalidReserves,
    TransferFailure,
)
from dex.events import EventBus, LiquidityAdded, LiquidityRemoved, Swap
from dex.ledger import AssetLedger, InMemoryAssetLedger
from dex.pool import Direction, Pool

__version__ = "0.1.0"
__all__ = [
    "Pool",
    "Direction",
    "quote",
    "AssetLedger",
    "InMemoryAssetLedger",
    "EventBus",
    "LiquidityAdded",
    "LiquidityRemoved",
    "Swap",
    "DexError",
    "InvalidAmount",
    "InsufficientLiquidity",
    "InsufficientShares",
    "InvalidReserves",
    "InvalidIdentifier",
    "ArithmeticOverflow",
    "TransferFailure",
    "__version__",
]
