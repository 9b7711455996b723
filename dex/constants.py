"""Protocol constants for the constant-product pool.

Centralizes the fee parameters and integer bounds shared by the math,
the pool bookkeeping and the HTTP models.
"""

# Maximum uint256 value; every intermediate product must stay below it
UINT256_MAX = 2**256 - 1

# Swap fee as a multiplier over a denominator: 997/1000 keeps 0.3% in the pool
FEE_MULTIPLIER = 997
FEE_DENOMINATOR = 1000

# Account name the reference ledger uses for pool custody
POOL_ACCOUNT = "pool"

# Longest asset or account identifier a pool accepts
MAX_IDENTIFIER_LENGTH = 128

# Events an EventBus keeps in its history before dropping the oldest
DEFAULT_EVENT_HISTORY = 1_000
