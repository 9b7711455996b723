"""API endpoints for the pool service."""

import structlog
from fastapi import APIRouter, Depends, HTTPException

from dex.amm import quote
from dex.config import ApiSettings
from dex.events import EventBus
from dex.ledger import InMemoryAssetLedger
from dex.models.api import (
    AddLiquidityRequest,
    AddLiquidityResponse,
    BalanceResponse,
    LedgerBalanceResponse,
    LedgerRequest,
    PriceResponse,
    QuoteResponse,
    RemoveLiquidityRequest,
    RemoveLiquidityResponse,
    ReservesResponse,
    SwapRequest,
    SwapResponse,
)
from dex.pool import Direction, Pool

logger = structlog.get_logger()

router = APIRouter()


def _create_default_pool() -> Pool:
    """Create the service's pool over an in-memory ledger.

    Asset identifiers come from DEX_ASSET_A / DEX_ASSET_B and the event
    history bound from DEX_EVENT_HISTORY.
    """
    settings = ApiSettings.from_env()
    ledger = InMemoryAssetLedger()
    logger.info("default_pool_created", asset_a=settings.asset_a, asset_b=settings.asset_b)
    events = EventBus(history_size=settings.event_history)
    return Pool(settings.asset_a, settings.asset_b, ledger, events=events)


default_pool = _create_default_pool()


def get_pool() -> Pool:
    """Dependency provider for the pool instance.

    Override this in tests to inject a fresh pool:
        app.dependency_overrides[get_pool] = lambda: pool
    """
    return default_pool


def get_ledger(pool: Pool = Depends(get_pool)) -> InMemoryAssetLedger:
    """The pool's ledger, when it is the in-memory reference ledger.

    Other ledgers keep their own balances, so the ledger routes answer 404.
    """
    if not isinstance(pool.ledger, InMemoryAssetLedger):
        raise HTTPException(status_code=404, detail="Pool ledger does not expose balances")
    return pool.ledger


# --- Read-only queries ---


@router.get("/reserves")
def get_reserves(pool: Pool = Depends(get_pool)) -> ReservesResponse:
    snapshot = pool.snapshot()
    return ReservesResponse(
        asset_a=pool.asset_a,
        asset_b=pool.asset_b,
        reserve_a=snapshot.reserve_a,
        reserve_b=snapshot.reserve_b,
        total_shares=snapshot.total_shares,
    )


@router.get("/price")
def get_price(pool: Pool = Depends(get_pool)) -> PriceResponse:
    """Price of asset A in asset B. Empty pool returns 409."""
    return PriceResponse(price=pool.get_price())


@router.get("/balances/{holder}")
def get_balance(holder: str, pool: Pool = Depends(get_pool)) -> BalanceResponse:
    return BalanceResponse(holder=holder, shares=pool.get_balance(holder))


@router.get("/quote")
def get_quote(
    amount_in: int,
    reserve_in: int | None = None,
    reserve_out: int | None = None,
    direction: Direction = Direction.A_TO_B,
    pool: Pool = Depends(get_pool),
) -> QuoteResponse:
    """Quote an exact-input swap.

    With reserve_in and reserve_out given, the quote is computed against
    those reserves alone; otherwise against the pool's current reserves in
    the requested direction.
    """
    if reserve_in is not None and reserve_out is not None:
        amount_out = quote(amount_in, reserve_in, reserve_out)
    else:
        amount_out = pool.quote(amount_in, direction)
    return QuoteResponse(amount_in=amount_in, amount_out=amount_out)


# --- Mutating operations ---


@router.post("/liquidity/add")
def add_liquidity(
    request: AddLiquidityRequest, pool: Pool = Depends(get_pool)
) -> AddLiquidityResponse:
    shares = pool.add_liquidity(request.amount_a, request.amount_b, request.provider)
    return AddLiquidityResponse(shares_minted=shares)


@router.post("/liquidity/remove")
def remove_liquidity(
    request: RemoveLiquidityRequest, pool: Pool = Depends(get_pool)
) -> RemoveLiquidityResponse:
    amount_a, amount_b = pool.remove_liquidity(request.shares, request.provider)
    return RemoveLiquidityResponse(amount_a=amount_a, amount_b=amount_b)


@router.post("/swap")
def swap(request: SwapRequest, pool: Pool = Depends(get_pool)) -> SwapResponse:
    amount_out = pool.swap(request.amount_in, request.direction, request.trader)
    asset_in, asset_out = pool.assets_for(request.direction)
    return SwapResponse(
        asset_in=asset_in,
        asset_out=asset_out,
        amount_in=request.amount_in,
        amount_out=amount_out,
    )


# --- In-memory ledger ---


@router.get("/ledger/{asset}/{account}")
def get_ledger_balance(
    asset: str, account: str, ledger: InMemoryAssetLedger = Depends(get_ledger)
) -> LedgerBalanceResponse:
    return LedgerBalanceResponse(
        asset=asset,
        account=account,
        balance=ledger.balance_of(asset, account),
        allowance=ledger.allowance(asset, account),
    )


@router.post("/ledger/{asset}/mint")
def mint(
    asset: str, request: LedgerRequest, ledger: InMemoryAssetLedger = Depends(get_ledger)
) -> LedgerBalanceResponse:
    ledger.mint(asset, request.account, request.amount)
    logger.info("ledger_mint", asset=asset, account=request.account, amount=request.amount)
    return get_ledger_balance(asset, request.account, ledger)


@router.post("/ledger/{asset}/approve")
def approve(
    asset: str, request: LedgerRequest, ledger: InMemoryAssetLedger = Depends(get_ledger)
) -> LedgerBalanceResponse:
    ledger.approve(asset, request.account, request.amount)
    return get_ledger_balance(asset, request.account, ledger)
