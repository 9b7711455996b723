#!/usr/bin/env python3
"""Simulate random trading against a pool and report invariant growth.

Seeds a pool, lets a set of traders swap and provide liquidity at random,
then prints the reserves, k and how much the seed provider's shares are
worth compared to their deposit.

Usage:
    python scripts/simulate_pool.py --steps 500 --seed 7
"""

import argparse
import random
import sys
from pathlib import Path

import structlog

sys.path.insert(0, str(Path(__file__).parent.parent))

from dex.errors import DexError
from dex.ledger import InMemoryAssetLedger
from dex.log_config import configure_logging
from dex.pool import Direction, Pool

logger = structlog.get_logger()

ONE = 10**18


def fund(ledger: InMemoryAssetLedger, pool: Pool, account: str, amount: int) -> None:
    for asset in (pool.asset_a, pool.asset_b):
        ledger.mint(asset, account, amount)
        ledger.approve(asset, account, amount)


def simulate(steps: int, traders: int, seed: int) -> Pool:
    rng = random.Random(seed)
    ledger = InMemoryAssetLedger()
    pool = Pool("TKA", "TKB", ledger)

    fund(ledger, pool, "seed", 10_000 * ONE)
    pool.add_liquidity(1_000 * ONE, 2_000 * ONE, "seed")

    names = [f"trader-{i}" for i in range(traders)]
    for name in names:
        fund(ledger, pool, name, 10_000 * ONE)

    rejected = 0
    for _ in range(steps):
        trader = rng.choice(names)
        try:
            if rng.random() < 0.9:
                direction = rng.choice(list(Direction))
                pool.swap(rng.randint(1, 50) * ONE, direction, trader)
            else:
                reserve_a, reserve_b = pool.get_reserves()
                amount_a = rng.randint(1, 20) * ONE
                pool.add_liquidity(amount_a, amount_a * reserve_b // reserve_a + 1, trader)
        except DexError as err:
            rejected += 1
            logger.debug("simulation_step_rejected", trader=trader, error=type(err).__name__)

    logger.info("simulation_finished", steps=steps, rejected=rejected)
    return pool


def main() -> int:
    """Main entry point."""
    parser = argparse.ArgumentParser(description="Simulate random trading against a pool")
    parser.add_argument("--steps", type=int, default=200, help="Number of random operations")
    parser.add_argument("--traders", type=int, default=5, help="Number of trading accounts")
    parser.add_argument("--seed", type=int, default=0, help="Random seed")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    args = parser.parse_args()

    configure_logging("DEBUG" if args.verbose else "WARNING")

    pool = simulate(args.steps, args.traders, args.seed)

    snapshot = pool.snapshot()
    seed_shares = pool.get_balance("seed")
    worth_a = seed_shares * snapshot.reserve_a // snapshot.total_shares
    worth_b = seed_shares * snapshot.reserve_b // snapshot.total_shares

    print(f"Reserves:      {snapshot.reserve_a / ONE:,.4f} TKA")
    print(f"               {snapshot.reserve_b / ONE:,.4f} TKB")
    print(f"k / ONE^2:     {snapshot.k / ONE**2:,.4f} (seeded at 2,000,000.0000)")
    print(f"Total shares:  {snapshot.total_shares / ONE:,.4f}")
    print(f"Seed position: {worth_a / ONE:,.4f} TKA + {worth_b / ONE:,.4f} TKB")
    print(f"Consistent:    {pool.is_consistent()}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
