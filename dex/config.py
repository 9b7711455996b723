"""Configuration for pools and the HTTP service."""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass

from dex.constants import DEFAULT_EVENT_HISTORY, FEE_DENOMINATOR, FEE_MULTIPLIER


@dataclass(frozen=True)
class PoolConfig:
    """Fee parameters applied by a pool's swaps.

    The swap quote keeps `fee_denominator - fee_multiplier` parts per
    `fee_denominator` of every input in the pool. The defaults give the
    standard 0.3% fee (997/1000).

    Attributes:
        fee_multiplier: Share of the input that counts toward the output
        fee_denominator: Scale of fee_multiplier
    """

    fee_multiplier: int = FEE_MULTIPLIER
    fee_denominator: int = FEE_DENOMINATOR

    def __post_init__(self) -> None:
        if self.fee_denominator <= 0:
            raise ValueError(f"fee_denominator must be positive, got {self.fee_denominator}")
        if not 0 < self.fee_multiplier <= self.fee_denominator:
            raise ValueError(
                f"fee_multiplier must be in (0, {self.fee_denominator}], got {self.fee_multiplier}"
            )

    @property
    def fee_bps(self) -> int:
        """Fee in basis points (30 for 997/1000)."""
        return (self.fee_denominator - self.fee_multiplier) * 10000 // self.fee_denominator


# Default configuration instance
DEFAULT_POOL_CONFIG = PoolConfig()


def _env_bool(value: str) -> bool:
    return value.lower() in ("true", "1", "yes")


@dataclass(frozen=True)
class ApiSettings:
    """Settings for the HTTP service, read from DEX_* environment variables.

    Attributes:
        host: Host to bind to (DEX_HOST)
        port: Port to bind to (DEX_PORT)
        debug: Enable reload mode and debug logging (DEX_DEBUG)
        asset_a: Identifier of the pool's first asset (DEX_ASSET_A)
        asset_b: Identifier of the pool's second asset (DEX_ASSET_B)
        log_level: structlog filtering level name (DEX_LOG_LEVEL)
        event_history: Events the pool keeps for observers (DEX_EVENT_HISTORY)
    """

    host: str = "0.0.0.0"
    port: int = 8000
    debug: bool = False
    asset_a: str = "TKA"
    asset_b: str = "TKB"
    log_level: str = "INFO"
    event_history: int = DEFAULT_EVENT_HISTORY

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> ApiSettings:
        """Build settings from the environment, falling back to defaults."""
        env = os.environ if environ is None else environ
        debug = _env_bool(env.get("DEX_DEBUG", "false"))
        return cls(
            host=env.get("DEX_HOST", cls.host),
            port=int(env.get("DEX_PORT", str(cls.port))),
            debug=debug,
            asset_a=env.get("DEX_ASSET_A", cls.asset_a),
            asset_b=env.get("DEX_ASSET_B", cls.asset_b),
            log_level=env.get("DEX_LOG_LEVEL", "DEBUG" if debug else cls.log_level).upper(),
            event_history=int(env.get("DEX_EVENT_HISTORY", str(cls.event_history))),
        )
