"""Factory functions and ledger doubles for pool tests.

Usage:
    from tests.helpers import make_ledger, make_pool

    ledger = make_ledger(ALICE, BOB)
    pool = make_pool(ledger)
"""

from dataclasses import dataclass, field

from dex.errors import TransferFailure
from dex.ledger import AssetLedger, InMemoryAssetLedger
from dex.pool import Pool
from tests.helpers.constants import ASSET_A, ASSET_B, INITIAL_BALANCE


def make_ledger(*accounts: str, amount: int = INITIAL_BALANCE) -> InMemoryAssetLedger:
    """Create a ledger where each account holds and has approved `amount` of both assets."""
    ledger = InMemoryAssetLedger()
    for account in accounts:
        for asset in (ASSET_A, ASSET_B):
            ledger.mint(asset, account, amount)
            ledger.approve(asset, account, amount)
    return ledger


def make_pool(ledger: AssetLedger | None = None, **kwargs) -> Pool:
    """Create an empty TKA/TKB pool over `ledger` (a fresh empty ledger by default)."""
    return Pool(ASSET_A, ASSET_B, ledger if ledger is not None else InMemoryAssetLedger(), **kwargs)


@dataclass
class FailingLedger:
    """Ledger double that rejects selected calls and records every call.

    Usage:
        # Reject every push of TKB
        ledger = FailingLedger(inner, fail_on={("push", "TKB")})

        # Reject only the second ledger call
        ledger = FailingLedger(inner, fail_on_call=2)
    """

    inner: InMemoryAssetLedger
    fail_on: set[tuple[str, str]] = field(default_factory=set)
    fail_on_call: int | None = None
    error: type[Exception] = TransferFailure
    calls: list[tuple[str, str, str, int]] = field(default_factory=list)

    def _check(self, kind: str, asset: str, account: str, amount: int) -> None:
        self.calls.append((kind, asset, account, amount))
        if (kind, asset) in self.fail_on or self.fail_on_call == len(self.calls):
            raise self.error(f"{kind} of {amount} {asset} rejected")

    def pull(self, asset: str, from_: str, amount: int) -> None:
        self._check("pull", asset, from_, amount)
        self.inner.pull(asset, from_, amount)

    def push(self, asset: str, to: str, amount: int) -> None:
        self._check("push", asset, to, amount)
        self.inner.push(asset, to, amount)

    def reclaim(self, asset: str, from_: str, amount: int) -> None:
        self._check("reclaim", asset, from_, amount)
        self.inner.reclaim(asset, from_, amount)
