"""Tests for the in-memory asset ledger and transfer batches."""

import pytest

from dex.errors import InvalidAmount, TransferFailure
from dex.ledger import InMemoryAssetLedger, Transfer, TransferBatch
from tests.helpers import ALICE, ASSET_A, ASSET_B, FailingLedger, make_ledger


class TestInMemoryAssetLedger:
    def test_mint_and_balance(self):
        ledger = InMemoryAssetLedger()
        ledger.mint(ASSET_A, ALICE, 50)

        assert ledger.balance_of(ASSET_A, ALICE) == 50
        assert ledger.balance_of(ASSET_B, ALICE) == 0

    def test_pull_requires_allowance(self):
        ledger = InMemoryAssetLedger()
        ledger.mint(ASSET_A, ALICE, 50)

        with pytest.raises(TransferFailure):
            ledger.pull(ASSET_A, ALICE, 10)

        assert ledger.balance_of(ASSET_A, ALICE) == 50

    def test_pull_requires_balance(self):
        ledger = InMemoryAssetLedger()
        ledger.approve(ASSET_A, ALICE, 100)

        with pytest.raises(TransferFailure):
            ledger.pull(ASSET_A, ALICE, 10)

    def test_pull_moves_to_pool_and_spends_allowance(self):
        ledger = InMemoryAssetLedger()
        ledger.mint(ASSET_A, ALICE, 50)
        ledger.approve(ASSET_A, ALICE, 30)

        ledger.pull(ASSET_A, ALICE, 20)

        assert ledger.balance_of(ASSET_A, ALICE) == 30
        assert ledger.balance_of(ASSET_A, ledger.pool_account) == 20
        assert ledger.allowance(ASSET_A, ALICE) == 10

    def test_push_requires_pool_balance(self):
        ledger = InMemoryAssetLedger()

        with pytest.raises(TransferFailure):
            ledger.push(ASSET_A, ALICE, 1)

    def test_push_moves_from_pool(self):
        ledger = InMemoryAssetLedger(pool_account="vault")
        ledger.mint(ASSET_A, "vault", 10)

        ledger.push(ASSET_A, ALICE, 4)

        assert ledger.balance_of(ASSET_A, "vault") == 6
        assert ledger.balance_of(ASSET_A, ALICE) == 4

    def test_reclaim_ignores_allowance(self):
        ledger = InMemoryAssetLedger()
        ledger.mint(ASSET_A, ledger.pool_account, 10)
        ledger.push(ASSET_A, ALICE, 10)

        ledger.reclaim(ASSET_A, ALICE, 10)

        assert ledger.allowance(ASSET_A, ALICE) == 0
        assert ledger.balance_of(ASSET_A, ALICE) == 0
        assert ledger.balance_of(ASSET_A, ledger.pool_account) == 10

    def test_reclaim_requires_balance(self):
        ledger = InMemoryAssetLedger()

        with pytest.raises(TransferFailure):
            ledger.reclaim(ASSET_A, ALICE, 1)

    def test_negative_mint_and_approve_rejected(self):
        ledger = InMemoryAssetLedger()
        with pytest.raises(ValueError):
            ledger.mint(ASSET_A, ALICE, -1)
        with pytest.raises(ValueError):
            ledger.approve(ASSET_A, ALICE, -1)


class TestTransferBatch:
    def test_completed_transfers_recorded(self):
        ledger = make_ledger(ALICE, amount=100)

        with TransferBatch(ledger) as transfers:
            transfers.pull(ASSET_A, ALICE, 10)
            transfers.push(ASSET_A, ALICE, 4)

        assert transfers.completed == [
            Transfer("pull", ASSET_A, ALICE, 10),
            Transfer("push", ASSET_A, ALICE, 4),
        ]

    def test_failure_reverses_completed_transfers(self):
        ledger = make_ledger(ALICE, amount=100)

        with pytest.raises(TransferFailure):
            with TransferBatch(ledger) as transfers:
                transfers.pull(ASSET_A, ALICE, 10)
                transfers.pull(ASSET_B, ALICE, 1_000)

        assert transfers.completed == []
        assert ledger.balance_of(ASSET_A, ALICE) == 100
        assert ledger.balance_of(ASSET_A, ledger.pool_account) == 0

    def test_error_inside_block_reverses_transfers(self):
        ledger = make_ledger(ALICE, amount=100)

        with pytest.raises(InvalidAmount):
            with TransferBatch(ledger) as transfers:
                transfers.pull(ASSET_A, ALICE, 10)
                raise InvalidAmount("bookkeeping rejected the operation")

        assert ledger.balance_of(ASSET_A, ALICE) == 100

    def test_rollback_failure_keeps_original_error(self):
        inner = make_ledger(ALICE, amount=100)
        inner.mint(ASSET_A, inner.pool_account, 10)
        ledger = FailingLedger(inner, fail_on={("pull", ASSET_B), ("reclaim", ASSET_A)})

        with pytest.raises(TransferFailure, match="pull of 5 TKB"):
            with TransferBatch(ledger) as transfers:
                transfers.push(ASSET_A, ALICE, 10)
                transfers.pull(ASSET_B, ALICE, 5)

        # the reclaim of TKA was rejected too, so alice keeps the 10
        assert inner.balance_of(ASSET_A, ALICE) == 110
        assert transfers.completed == []

    def test_pushed_transfer_reversed_after_allowance_spent(self):
        ledger = make_ledger(ALICE, amount=100)
        ledger.pull(ASSET_A, ALICE, 100)
        ledger.pull(ASSET_B, ALICE, 100)

        with pytest.raises(InvalidAmount):
            with TransferBatch(ledger) as transfers:
                transfers.push(ASSET_A, ALICE, 40)
                raise InvalidAmount("bookkeeping rejected the operation")

        assert ledger.allowance(ASSET_A, ALICE) == 0
        assert ledger.balance_of(ASSET_A, ALICE) == 0
        assert ledger.balance_of(ASSET_A, ledger.pool_account) == 100
