"""Asset ledger interface and the transfer batch used by pool operations.

The ledger owns real asset balances and transfer authorization; a pool only
asks it to pull assets from a caller, push assets to one, or reclaim a push
it made earlier in the same operation. Ledger calls are synchronous and
fallible: a rejected transfer raises TransferFailure.

InMemoryAssetLedger is an ERC-20 style reference implementation with
balances and allowances, used by the HTTP service and the tests.
"""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass
from types import TracebackType
from typing import Literal, Protocol, runtime_checkable

import structlog

from dex.constants import POOL_ACCOUNT
from dex.errors import DexError, TransferFailure

logger = structlog.get_logger()


@runtime_checkable
class AssetLedger(Protocol):
    """Protocol for the external ledger a pool moves assets through."""

    def pull(self, asset: str, from_: str, amount: int) -> None:
        """Debit `from_` and credit the pool.

        Raises:
            TransferFailure: If `from_` lacks balance or has not authorized the amount
        """
        ...

    def push(self, asset: str, to: str, amount: int) -> None:
        """Debit the pool and credit `to`.

        Raises:
            TransferFailure: If the pool's balance of `asset` is insufficient
        """
        ...

    def reclaim(self, asset: str, from_: str, amount: int) -> None:
        """Take back `amount` the pool pushed to `from_` earlier in the same operation.

        Unlike pull, this needs no authorization from `from_`: it only reverses
        a transfer the pool itself made.

        Raises:
            TransferFailure: If `from_` no longer holds `amount` of `asset`
        """
        ...


class InMemoryAssetLedger:
    """Asset balances and pool allowances held in memory.

    Usage:
        ledger = InMemoryAssetLedger()
        ledger.mint("TKA", "alice", 1_000)
        ledger.approve("TKA", "alice", 1_000)  # let the pool pull up to 1000
    """

    def __init__(self, pool_account: str = POOL_ACCOUNT) -> None:
        self.pool_account = pool_account
        # (asset, account) -> balance
        self._balances: defaultdict[tuple[str, str], int] = defaultdict(int)
        # (asset, owner) -> amount the pool may pull
        self._allowances: defaultdict[tuple[str, str], int] = defaultdict(int)

    def balance_of(self, asset: str, account: str) -> int:
        return self._balances.get((asset, account), 0)

    def allowance(self, asset: str, owner: str) -> int:
        return self._allowances.get((asset, owner), 0)

    def mint(self, asset: str, account: str, amount: int) -> None:
        """Create `amount` of `asset` out of thin air for `account`."""
        if amount < 0:
            raise ValueError(f"Mint amount cannot be negative: {amount}")
        self._balances[(asset, account)] += amount

    def approve(self, asset: str, owner: str, amount: int) -> None:
        """Set how much of `asset` the pool may pull from `owner`."""
        if amount < 0:
            raise ValueError(f"Allowance cannot be negative: {amount}")
        self._allowances[(asset, owner)] = amount

    def pull(self, asset: str, from_: str, amount: int) -> None:
        balance = self.balance_of(asset, from_)
        if balance < amount:
            raise TransferFailure(
                f"{from_} has {balance} {asset}, cannot transfer {amount} to the pool"
            )
        allowed = self.allowance(asset, from_)
        if allowed < amount:
            raise TransferFailure(f"{from_} authorized {allowed} {asset}, pool requested {amount}")

        self._allowances[(asset, from_)] = allowed - amount
        self._balances[(asset, from_)] = balance - amount
        self._balances[(asset, self.pool_account)] += amount

    def push(self, asset: str, to: str, amount: int) -> None:
        balance = self.balance_of(asset, self.pool_account)
        if balance < amount:
            raise TransferFailure(f"Pool holds {balance} {asset}, cannot send {amount} to {to}")

        self._balances[(asset, self.pool_account)] = balance - amount
        self._balances[(asset, to)] += amount

    def reclaim(self, asset: str, from_: str, amount: int) -> None:
        balance = self.balance_of(asset, from_)
        if balance < amount:
            raise TransferFailure(
                f"{from_} has {balance} {asset}, cannot return {amount} to the pool"
            )

        self._balances[(asset, from_)] = balance - amount
        self._balances[(asset, self.pool_account)] += amount


@dataclass(frozen=True)
class Transfer:
    """One completed ledger movement."""

    kind: Literal["pull", "push"]
    asset: str
    account: str
    amount: int


class TransferBatch:
    """Runs ledger transfers in order and undoes completed ones on failure.

    Pool operations run their transfers inside a batch and commit state as
    the last step of the block. If any transfer (or the commit itself)
    raises, the transfers already made are reversed newest-first and the
    original error propagates.

    Usage:
        with TransferBatch(ledger) as transfers:
            transfers.pull("TKA", caller, amount_a)
            transfers.pull("TKB", caller, amount_b)
            state.apply_deposit(...)
    """

    def __init__(self, ledger: AssetLedger) -> None:
        self.ledger = ledger
        self.completed: list[Transfer] = []

    def __enter__(self) -> TransferBatch:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> Literal[False]:
        if exc is not None:
            self.rollback()
        return False

    def pull(self, asset: str, from_: str, amount: int) -> None:
        self._run(Transfer("pull", asset, from_, amount))

    def push(self, asset: str, to: str, amount: int) -> None:
        self._run(Transfer("push", asset, to, amount))

    def _run(self, transfer: Transfer) -> None:
        move = self.ledger.pull if transfer.kind == "pull" else self.ledger.push
        try:
            move(transfer.asset, transfer.account, transfer.amount)
        except DexError:
            raise
        except Exception as err:
            raise TransferFailure(
                f"Ledger {transfer.kind} of {transfer.amount} {transfer.asset} failed: {err}"
            ) from err
        self.completed.append(transfer)

    def rollback(self) -> None:
        """Reverse completed transfers, newest first.

        A pull is returned with push; a push is taken back with reclaim, so
        the reversal does not depend on the caller's remaining allowance.
        A reversal the ledger rejects is logged and the remaining reversals
        still run; the caller is already propagating the original failure.
        """
        while self.completed:
            transfer = self.completed.pop()
            try:
                if transfer.kind == "pull":
                    self.ledger.push(transfer.asset, transfer.account, transfer.amount)
                else:
                    self.ledger.reclaim(transfer.asset, transfer.account, transfer.amount)
            except Exception:
                logger.exception(
                    "transfer_rollback_failed",
                    kind=transfer.kind,
                    asset=transfer.asset,
                    account=transfer.account,
                    amount=transfer.amount,
                )
            else:
                logger.warning(
                    "transfer_rolled_back",
                    kind=transfer.kind,
                    asset=transfer.asset,
                    account=transfer.account,
                    amount=transfer.amount,
                )


__all__ = [
    "AssetLedger",
    "InMemoryAssetLedger",
    "Transfer",
    "TransferBatch",
]
