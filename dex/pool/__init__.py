"""Pool state and the thread-safe pool facade."""

from dex.pool.pool import Pool
from dex.pool.state import Direction, PoolSnapshot, PoolState

__all__ = [
    "Direction",
    "PoolSnapshot",
    "PoolState",
    "Pool",
]
