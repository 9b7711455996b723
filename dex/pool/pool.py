"""Pool facade: one pair of assets, its state, and serialized access to it."""

from __future__ import annotations

import threading

import structlog

from dex.config import DEFAULT_POOL_CONFIG, PoolConfig
from dex.errors import InvalidReserves
from dex.events import EventBus
from dex.ledger import AssetLedger
from dex.liquidity import LiquidityManager
from dex.pool.state import Direction, PoolSnapshot, PoolState
from dex.swap import SwapOrchestrator

logger = structlog.get_logger()


class Pool:
    """A two-asset constant product pool.

    All operations, reads included, run under one reentrant lock per pool:
    mutations observe a total order and reads never see a half-applied
    operation. Ledger calls happen while the lock is held.

    Usage:
        ledger = InMemoryAssetLedger()
        pool = Pool("TKA", "TKB", ledger)
        pool.add_liquidity(100, 200, "alice")
        pool.swap(10, Direction.A_TO_B, "bob")
    """

    def __init__(
        self,
        asset_a: str,
        asset_b: str,
        ledger: AssetLedger,
        config: PoolConfig = DEFAULT_POOL_CONFIG,
        events: EventBus | None = None,
    ) -> None:
        self._lock = threading.RLock()
        self._state = PoolState(asset_a=asset_a, asset_b=asset_b)
        self.ledger = ledger
        self.config = config
        self.events = events if events is not None else EventBus()
        self._liquidity = LiquidityManager(self._state, ledger, self.events)
        self._swaps = SwapOrchestrator(self._state, ledger, self.events, config)

        logger.debug("pool_created", asset_a=asset_a, asset_b=asset_b, fee_bps=config.fee_bps)

    @property
    def asset_a(self) -> str:
        return self._state.asset_a

    @property
    def asset_b(self) -> str:
        return self._state.asset_b

    def assets_for(self, direction: Direction) -> tuple[str, str]:
        """Get assets ordered as (asset_in, asset_out)."""
        return self._state.assets_for(direction)

    # --- Mutating operations ---

    def add_liquidity(self, amount_a: int, amount_b: int, caller: str) -> int:
        """Deposit both assets; returns shares minted. See LiquidityManager."""
        with self._lock:
            return self._liquidity.add_liquidity(amount_a, amount_b, caller)

    def remove_liquidity(self, share_amount: int, caller: str) -> tuple[int, int]:
        """Burn shares; returns (amount_a, amount_b). See LiquidityManager."""
        with self._lock:
            return self._liquidity.remove_liquidity(share_amount, caller)

    def swap(self, amount_in: int, direction: Direction, caller: str) -> int:
        """Exact-input swap; returns the output amount. See SwapOrchestrator."""
        with self._lock:
            return self._swaps.swap(amount_in, direction, caller)

    def swap_a_for_b(self, amount_in: int, caller: str) -> int:
        return self.swap(amount_in, Direction.A_TO_B, caller)

    def swap_b_for_a(self, amount_in: int, caller: str) -> int:
        return self.swap(amount_in, Direction.B_TO_A, caller)

    # --- Read-only queries ---

    def get_reserves(self) -> tuple[int, int]:
        """Return (reserve_a, reserve_b)."""
        with self._lock:
            return self._state.reserve_a, self._state.reserve_b

    def get_price(self) -> int:
        """Price of asset A in units of asset B, truncated: reserve_b // reserve_a.

        Raises:
            InvalidReserves: If the pool is empty
        """
        with self._lock:
            if self._state.reserve_a == 0:
                raise InvalidReserves("Price is undefined for an empty pool")
            return self._state.reserve_b // self._state.reserve_a

    def get_balance(self, holder: str) -> int:
        """Share balance of holder, 0 for unknown holders."""
        with self._lock:
            return self._state.balance_of(holder)

    @property
    def total_shares(self) -> int:
        with self._lock:
            return self._state.total_shares

    def snapshot(self) -> PoolSnapshot:
        """Consistent view of reserves and total shares."""
        with self._lock:
            return self._state.snapshot()

    def holders(self) -> dict[str, int]:
        """Copy of the share ledger."""
        with self._lock:
            return dict(self._state.shares)

    def quote(self, amount_in: int, direction: Direction) -> int:
        """Quote an exact-input swap against the current reserves."""
        with self._lock:
            return self._swaps.quote(amount_in, direction)

    def is_consistent(self) -> bool:
        with self._lock:
            return self._state.is_consistent()
