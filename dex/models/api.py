"""Pydantic request/response bodies for the HTTP API."""

from pydantic import BaseModel, Field

from dex.models.types import Identifier, Uint256
from dex.pool.state import Direction


class ReservesResponse(BaseModel):
    """Current reserves and share supply of the pool."""

    asset_a: Identifier
    asset_b: Identifier
    reserve_a: Uint256
    reserve_b: Uint256
    total_shares: Uint256


class PriceResponse(BaseModel):
    """Price of asset A in units of asset B, truncated to an integer."""

    price: Uint256


class BalanceResponse(BaseModel):
    holder: Identifier
    shares: Uint256


class QuoteResponse(BaseModel):
    amount_in: Uint256
    amount_out: Uint256


class AddLiquidityRequest(BaseModel):
    """Deposit both assets from `provider`."""

    provider: Identifier
    amount_a: Uint256
    amount_b: Uint256


class AddLiquidityResponse(BaseModel):
    shares_minted: Uint256


class RemoveLiquidityRequest(BaseModel):
    """Burn `shares` held by `provider`."""

    provider: Identifier
    shares: Uint256


class RemoveLiquidityResponse(BaseModel):
    amount_a: Uint256
    amount_b: Uint256


class SwapRequest(BaseModel):
    """Sell `amount_in` of the input asset selected by `direction`."""

    trader: Identifier
    direction: Direction = Field(description="a_to_b sells asset A, b_to_a sells asset B")
    amount_in: Uint256


class SwapResponse(BaseModel):
    asset_in: Identifier
    asset_out: Identifier
    amount_in: Uint256
    amount_out: Uint256


class LedgerRequest(BaseModel):
    """Mint or approve `amount` of an asset for `account` on the in-memory ledger."""

    account: Identifier
    amount: Uint256


class LedgerBalanceResponse(BaseModel):
    asset: Identifier
    account: Identifier
    balance: Uint256
    allowance: Uint256


class ErrorResponse(BaseModel):
    error: str
    detail: str
