"""Liquidity manager: minting shares for deposits and burning them for withdrawals.

Share math:
- First deposit mints floor(sqrt(amount_a * amount_b)) shares, which sets the
  share unit independent of asset order.
- Later deposits mint min(amount_a * total / reserve_a, amount_b * total / reserve_b),
  so a lopsided deposit is credited only for its weaker-matched side and
  existing holders are never diluted.
- Burning `s` shares returns floor(s * reserve / total) of each asset.
"""

from __future__ import annotations

import structlog

from dex.errors import DexError, InsufficientLiquidity, InsufficientShares, InvalidAmount
from dex.events import EventBus, LiquidityAdded, LiquidityRemoved
from dex.ledger import AssetLedger, TransferBatch
from dex.models.types import validate_identifier
from dex.pool.state import PoolState
from dex.safe_int import S

logger = structlog.get_logger()


def calculate_shares_to_mint(
    amount_a: int,
    amount_b: int,
    reserve_a: int,
    reserve_b: int,
    total_shares: int,
) -> int:
    """Calculate shares minted for a deposit of both assets.

    Args:
        amount_a: Deposited amount of asset A
        amount_b: Deposited amount of asset B
        reserve_a: Pool reserve of asset A before the deposit
        reserve_b: Pool reserve of asset B before the deposit
        total_shares: Total shares before the deposit

    Returns:
        Shares to mint (may be 0 for deposits too small to earn a share)

    Raises:
        InvalidAmount: If either amount is zero or negative
        ArithmeticOverflow: If an intermediate product exceeds uint256
    """
    if amount_a <= 0 or amount_b <= 0:
        raise InvalidAmount(f"Deposit amounts must be positive, got ({amount_a}, {amount_b})")

    if total_shares == 0:
        return (S(amount_a) * S(amount_b)).isqrt().value

    share_a = (S(amount_a) * S(total_shares)) // S(reserve_a)
    share_b = (S(amount_b) * S(total_shares)) // S(reserve_b)
    return share_a.min(share_b).value


def calculate_withdrawal(
    share_amount: int,
    reserve_a: int,
    reserve_b: int,
    total_shares: int,
) -> tuple[int, int]:
    """Calculate the asset amounts returned for burning shares.

    Returns:
        Tuple of (amount_a, amount_b), each rounded down

    Raises:
        ArithmeticOverflow: If total_shares is zero or a product exceeds uint256
    """
    amount_a = (S(share_amount) * S(reserve_a)) // S(total_shares)
    amount_b = (S(share_amount) * S(reserve_b)) // S(total_shares)
    return amount_a.value, amount_b.value


class LiquidityManager:
    """Orchestrates deposits and withdrawals against one pool's state.

    The manager does not lock; the owning Pool serializes calls.
    """

    def __init__(self, state: PoolState, ledger: AssetLedger, events: EventBus) -> None:
        self.state = state
        self.ledger = ledger
        self.events = events

    def add_liquidity(self, amount_a: int, amount_b: int, caller: str) -> int:
        """Deposit both assets and mint shares to the caller.

        Args:
            amount_a: Amount of asset A to pull from the caller
            amount_b: Amount of asset B to pull from the caller
            caller: Account that pays the assets and receives the shares

        Returns:
            Number of shares minted

        Raises:
            InvalidAmount: If either amount is zero or negative
            InvalidIdentifier: If caller is not a valid account identifier
            InsufficientLiquidity: If the deposit would mint zero shares
            TransferFailure: If the ledger rejects either pull
            ArithmeticOverflow: If share or reserve math exceeds uint256
        """
        state = self.state
        try:
            validate_identifier(caller)
            shares_minted = calculate_shares_to_mint(
                amount_a, amount_b, state.reserve_a, state.reserve_b, state.total_shares
            )
            if shares_minted == 0:
                raise InsufficientLiquidity(
                    f"Deposit ({amount_a}, {amount_b}) is too small to mint a share"
                )
            event = LiquidityAdded(
                provider=caller,
                amount_a=amount_a,
                amount_b=amount_b,
                shares_minted=shares_minted,
            )

            with TransferBatch(self.ledger) as transfers:
                transfers.pull(state.asset_a, caller, amount_a)
                transfers.pull(state.asset_b, caller, amount_b)
                state.apply_deposit(caller, amount_a, amount_b, shares_minted)
        except DexError as err:
            logger.warning(
                "add_liquidity_rejected",
                provider=caller,
                amount_a=amount_a,
                amount_b=amount_b,
                error=type(err).__name__,
                reason=str(err),
            )
            raise

        self.events.emit(event)
        return shares_minted

    def remove_liquidity(self, share_amount: int, caller: str) -> tuple[int, int]:
        """Burn the caller's shares and send them their slice of both reserves.

        Args:
            share_amount: Shares to burn, at most the caller's balance
            caller: Holder of the shares and recipient of the assets

        Returns:
            Tuple of (amount_a, amount_b) sent to the caller

        Raises:
            InvalidAmount: If share_amount is zero or negative
            InvalidIdentifier: If caller is not a valid account identifier
            InsufficientShares: If the caller owns fewer than share_amount shares
            TransferFailure: If the ledger rejects either push
        """
        state = self.state
        try:
            validate_identifier(caller)
            if share_amount <= 0:
                raise InvalidAmount(f"Shares to burn must be positive, got {share_amount}")
            owned = state.balance_of(caller)
            if owned < share_amount:
                raise InsufficientShares(
                    f"{caller} owns {owned} shares, cannot burn {share_amount}"
                )

            amount_a, amount_b = calculate_withdrawal(
                share_amount, state.reserve_a, state.reserve_b, state.total_shares
            )
            event = LiquidityRemoved(
                provider=caller,
                amount_a=amount_a,
                amount_b=amount_b,
                shares_burned=share_amount,
            )

            with TransferBatch(self.ledger) as transfers:
                transfers.push(state.asset_a, caller, amount_a)
                transfers.push(state.asset_b, caller, amount_b)
                state.apply_withdrawal(caller, amount_a, amount_b, share_amount)
        except DexError as err:
            logger.warning(
                "remove_liquidity_rejected",
                provider=caller,
                shares=share_amount,
                error=type(err).__name__,
                reason=str(err),
            )
            raise

        self.events.emit(event)
        return amount_a, amount_b
