"""Test helpers module for shared test utilities.

- constants: Asset identifiers, accounts and common amounts
- factories: Ledger and pool factory functions, ledger doubles
"""

from tests.helpers.constants import (
    ALICE,
    ASSET_A,
    ASSET_B,
    BOB,
    CAROL,
    INITIAL_BALANCE,
    ONE,
)
from tests.helpers.factories import FailingLedger, make_ledger, make_pool

__all__ = [
    # Constants
    "ASSET_A",
    "ASSET_B",
    "ALICE",
    "BOB",
    "CAROL",
    "ONE",
    "INITIAL_BALANCE",
    # Factories
    "make_ledger",
    "make_pool",
    "FailingLedger",
]
