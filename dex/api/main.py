"""FastAPI application for the pool service."""

import structlog
import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from dex import __version__
from dex.api.endpoints import router
from dex.config import ApiSettings
from dex.errors import (
    ArithmeticOverflow,
    DexError,
    InsufficientLiquidity,
    InsufficientShares,
    InvalidAmount,
    InvalidIdentifier,
    InvalidReserves,
    TransferFailure,
)
from dex.log_config import configure_logging
from dex.models.api import ErrorResponse

logger = structlog.get_logger()

settings = ApiSettings.from_env()

# HTTP status per error kind; unknown DexError subclasses map to 400
ERROR_STATUS: dict[type[DexError], int] = {
    InvalidAmount: 400,
    InvalidIdentifier: 400,
    ArithmeticOverflow: 400,
    InsufficientShares: 403,
    InvalidReserves: 409,
    InsufficientLiquidity: 409,
    TransferFailure: 402,
}

app = FastAPI(
    title="Constant Product Pool",
    description="Two-asset constant product AMM with proportional shares",
    version=__version__,
)


@app.exception_handler(DexError)
async def dex_error_handler(request: Request, exc: DexError) -> JSONResponse:
    """Return the error kind and message; the operation left no state change."""
    status_code = next(
        (status for kind, status in ERROR_STATUS.items() if isinstance(exc, kind)),
        400,
    )
    logger.info("request_rejected", path=request.url.path, error=exc.code, status=status_code)
    body = ErrorResponse(error=exc.code, detail=str(exc))
    return JSONResponse(status_code=status_code, content=body.model_dump())


app.include_router(router)


@app.get("/health")
async def health() -> dict[str, object]:
    """Health check endpoint."""
    return {"status": "ok"}


def run() -> None:
    """Run the pool API server.

    Configuration via environment variables:
    - DEX_HOST: Host to bind to (default: 0.0.0.0)
    - DEX_PORT: Port to bind to (default: 8000)
    - DEX_DEBUG: Enable debug logging and reload mode (default: false)
    - DEX_LOG_LEVEL: Log level name (default: INFO, DEBUG when DEX_DEBUG is set)
    - DEX_ASSET_A / DEX_ASSET_B: Pool asset identifiers (default: TKA / TKB)
    """
    configure_logging(settings.log_level)
    uvicorn.run(
        "dex.api.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
    )


if __name__ == "__main__":
    run()
