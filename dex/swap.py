"""Swap orchestrator: exact-input swaps between the two pooled assets."""

from __future__ import annotations

import structlog

from dex.amm.constant_product import constant_product
from dex.config import DEFAULT_POOL_CONFIG, PoolConfig
from dex.errors import DexError, InsufficientLiquidity
from dex.events import EventBus, Swap
from dex.ledger import AssetLedger, TransferBatch
from dex.models.types import validate_identifier
from dex.pool.state import Direction, PoolState

logger = structlog.get_logger()


class SwapOrchestrator:
    """Executes swaps against one pool's state.

    The output is always quoted from the reserves as they stood before the
    swap; the input reserve is only credited when the swap commits.
    The orchestrator does not lock; the owning Pool serializes calls.
    """

    def __init__(
        self,
        state: PoolState,
        ledger: AssetLedger,
        events: EventBus,
        config: PoolConfig = DEFAULT_POOL_CONFIG,
    ) -> None:
        self.state = state
        self.ledger = ledger
        self.events = events
        self.config = config

    def quote(self, amount_in: int, direction: Direction) -> int:
        """Quote an exact-input swap against the current reserves."""
        reserve_in, reserve_out = self.state.reserves_for(direction)
        return constant_product.get_amount_out(
            amount_in,
            reserve_in,
            reserve_out,
            self.config.fee_multiplier,
            self.config.fee_denominator,
        )

    def swap(self, amount_in: int, direction: Direction, caller: str) -> int:
        """Sell `amount_in` of one asset for the other.

        Args:
            amount_in: Amount of the input asset to pull from the caller
            direction: Which asset is sold
            caller: Account that pays the input and receives the output

        Returns:
            Amount of the output asset sent to the caller

        Raises:
            InvalidAmount: If amount_in is zero or negative
            InvalidIdentifier: If caller is not a valid account identifier
            InvalidReserves: If the pool is empty
            InsufficientLiquidity: If the output would drain the reserve
            TransferFailure: If the ledger rejects the pull or the push
            ArithmeticOverflow: If the quote exceeds uint256
        """
        state = self.state
        asset_in, asset_out = state.assets_for(direction)
        try:
            validate_identifier(caller)
            amount_out = self.quote(amount_in, direction)
            _, reserve_out = state.reserves_for(direction)
            if amount_out >= reserve_out:
                raise InsufficientLiquidity(
                    f"Output {amount_out} {asset_out} would drain reserve {reserve_out}"
                )
            event = Swap(
                trader=caller,
                asset_in=asset_in,
                asset_out=asset_out,
                amount_in=amount_in,
                amount_out=amount_out,
            )

            with TransferBatch(self.ledger) as transfers:
                transfers.pull(asset_in, caller, amount_in)
                transfers.push(asset_out, caller, amount_out)
                state.apply_swap(direction, amount_in, amount_out)
        except DexError as err:
            logger.warning(
                "swap_rejected",
                trader=caller,
                asset_in=asset_in,
                amount_in=amount_in,
                error=type(err).__name__,
                reason=str(err),
            )
            raise

        self.events.emit(event)
        return amount_out
