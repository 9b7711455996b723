"""Pool state: reserves, total shares and the share ledger.

PoolState is the single source of truth for one pool. It is mutated only
through the apply_* methods, each of which computes every new value with
checked arithmetic first and assigns afterwards, so a failing update
leaves the state untouched.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from dex.errors import InsufficientShares
from dex.models.types import validate_identifier
from dex.safe_int import S


class Direction(str, Enum):
    """Which pooled asset a swap sells."""

    A_TO_B = "a_to_b"  # Sell asset A, receive asset B
    B_TO_A = "b_to_a"  # Sell asset B, receive asset A


@dataclass(frozen=True)
class PoolSnapshot:
    """Immutable view of a pool's reserves and share supply."""

    reserve_a: int
    reserve_b: int
    total_shares: int

    @property
    def k(self) -> int:
        """Invariant product reserve_a * reserve_b."""
        return self.reserve_a * self.reserve_b

    @property
    def is_empty(self) -> bool:
        return self.total_shares == 0


@dataclass
class PoolState:
    """Reserves and share accounting for a fixed pair of assets.

    Invariants:
        reserve_a == 0 <=> reserve_b == 0 <=> total_shares == 0
        sum(shares.values()) == total_shares
        every holder in shares has a positive balance
    """

    asset_a: str
    asset_b: str
    reserve_a: int = 0
    reserve_b: int = 0
    total_shares: int = 0
    shares: dict[str, int] = field(default_factory=dict)

    def __post_init__(self) -> None:
        validate_identifier(self.asset_a, "asset")
        validate_identifier(self.asset_b, "asset")
        if self.asset_a == self.asset_b:
            raise ValueError(f"Pool assets must differ, got {self.asset_a} twice")

    @property
    def is_empty(self) -> bool:
        return self.total_shares == 0

    def balance_of(self, holder: str) -> int:
        """Share balance of a holder, 0 if unknown."""
        return self.shares.get(holder, 0)

    def snapshot(self) -> PoolSnapshot:
        return PoolSnapshot(self.reserve_a, self.reserve_b, self.total_shares)

    def assets_for(self, direction: Direction) -> tuple[str, str]:
        """Get assets ordered as (asset_in, asset_out)."""
        if direction is Direction.A_TO_B:
            return self.asset_a, self.asset_b
        return self.asset_b, self.asset_a

    def reserves_for(self, direction: Direction) -> tuple[int, int]:
        """Get reserves ordered as (reserve_in, reserve_out)."""
        if direction is Direction.A_TO_B:
            return self.reserve_a, self.reserve_b
        return self.reserve_b, self.reserve_a

    def is_consistent(self) -> bool:
        """Check the emptiness and share-sum invariants."""
        empty_flags = {self.reserve_a == 0, self.reserve_b == 0, self.total_shares == 0}
        if len(empty_flags) != 1:
            return False
        if any(balance <= 0 for balance in self.shares.values()):
            return False
        return sum(self.shares.values()) == self.total_shares

    # --- Mutations ---

    def apply_deposit(self, holder: str, amount_a: int, amount_b: int, shares_minted: int) -> None:
        """Credit a deposit: both reserves grow and the holder is minted shares."""
        reserve_a = S(self.reserve_a) + S(amount_a)
        reserve_b = S(self.reserve_b) + S(amount_b)
        total = S(self.total_shares) + S(shares_minted)
        balance = S(self.balance_of(holder)) + S(shares_minted)

        self.reserve_a = reserve_a.value
        self.reserve_b = reserve_b.value
        self.total_shares = total.value
        self.shares[holder] = balance.value

    def apply_withdrawal(
        self, holder: str, amount_a: int, amount_b: int, shares_burned: int
    ) -> None:
        """Debit a withdrawal: both reserves shrink and the holder's shares are burned.

        Raises:
            InsufficientShares: If the holder owns fewer than shares_burned
        """
        owned = self.balance_of(holder)
        if owned < shares_burned:
            raise InsufficientShares(f"{holder} owns {owned} shares, cannot burn {shares_burned}")

        reserve_a = S(self.reserve_a) - S(amount_a)
        reserve_b = S(self.reserve_b) - S(amount_b)
        total = S(self.total_shares) - S(shares_burned)
        balance = S(owned) - S(shares_burned)

        self.reserve_a = reserve_a.value
        self.reserve_b = reserve_b.value
        self.total_shares = total.value
        if balance:
            self.shares[holder] = balance.value
        else:
            self.shares.pop(holder, None)

    def apply_swap(self, direction: Direction, amount_in: int, amount_out: int) -> None:
        """Move reserves for a swap: input reserve grows, output reserve shrinks."""
        reserve_in, reserve_out = self.reserves_for(direction)
        new_in = (S(reserve_in) + S(amount_in)).value
        new_out = (S(reserve_out) - S(amount_out)).value

        if direction is Direction.A_TO_B:
            self.reserve_a, self.reserve_b = new_in, new_out
        else:
            self.reserve_b, self.reserve_a = new_in, new_out
