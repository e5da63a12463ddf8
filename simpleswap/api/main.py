"""FastAPI application exposing a SimpleSwap pool.

Pool errors are mapped to HTTP statuses by category:
- ValidationError: 400
- Unauthorized: 403
- StateConsistencyError: 409
- ReentrancyError: 423
- ExternalDependencyError: 502
Every error body is {"detail": <reason>, "error": <error class name>}.
"""

import os

import structlog
import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from simpleswap import __version__
from simpleswap.api.endpoints import router
from simpleswap.errors import (
    ExternalDependencyError,
    ReentrancyError,
    SimpleSwapError,
    StateConsistencyError,
    Unauthorized,
    ValidationError,
)
from simpleswap.log_config import configure_logging

logger = structlog.get_logger()

# Configuration from environment variables with sensible defaults
HOST = os.environ.get("SIMPLESWAP_HOST", "127.0.0.1")
PORT = int(os.environ.get("SIMPLESWAP_PORT", "8000"))
DEBUG = os.environ.get("SIMPLESWAP_DEBUG", "false").lower() in ("true", "1", "yes")
LOG_LEVEL = os.environ.get("SIMPLESWAP_LOG_LEVEL", "INFO")

# Bind addresses only reachable from this machine
LOOPBACK_HOSTS = ("127.0.0.1", "localhost", "::1")

# Most specific first
ERROR_STATUS: list[tuple[type[SimpleSwapError], int]] = [
    (Unauthorized, 403),
    (ValidationError, 400),
    (StateConsistencyError, 409),
    (ReentrancyError, 423),
    (ExternalDependencyError, 502),
]

app = FastAPI(
    title="SimpleSwap",
    description="Two-asset constant-product liquidity pool",
    version=__version__,
)


def status_for(error: SimpleSwapError) -> int:
    for error_type, status in ERROR_STATUS:
        if isinstance(error, error_type):
            return status
    return 400


@app.exception_handler(SimpleSwapError)
async def pool_error_handler(request: Request, exc: SimpleSwapError) -> JSONResponse:
    """Translate pool failures into JSON error responses."""
    status = status_for(exc)
    logger.warning(
        "request_rejected",
        path=request.url.path,
        status=status,
        error=type(exc).__name__,
        reason=exc.reason,
    )
    return JSONResponse(
        status_code=status,
        content={"detail": exc.reason, "error": type(exc).__name__},
    )


def warn_if_exposed(host: str) -> bool:
    """Log a warning when the server binds to a non-loopback address.

    Requests name their own sender and owner accounts and nothing
    authenticates them, so any client that can reach the server can act for
    any account. Returns True if the warning was logged.
    """
    if host in LOOPBACK_HOSTS:
        return False
    logger.warning(
        "api_exposed_without_authentication",
        host=host,
        reason="request bodies choose the acting account",
    )
    return True


app.include_router(router)


@app.get("/health")
async def health() -> dict[str, object]:
    """Health check endpoint."""
    return {"status": "ok", "version": __version__}


def run() -> None:
    """Run the pool API server.

    Configuration via environment variables:
    - SIMPLESWAP_HOST: Host to bind to (default: 127.0.0.1). Binding beyond
      loopback logs a warning, as the API is unauthenticated
    - SIMPLESWAP_PORT: Port to bind to (default: 8000)
    - SIMPLESWAP_DEBUG: Enable debug/reload mode (default: false)
    - SIMPLESWAP_LOG_LEVEL: Minimum log level (default: INFO)
    - SIMPLESWAP_TOKEN_A / SIMPLESWAP_TOKEN_B / SIMPLESWAP_POOL_ADDRESS:
      identities of the default pool
    """
    configure_logging(LOG_LEVEL)
    warn_if_exposed(HOST)
    uvicorn.run(
        "simpleswap.api.main:app",
        host=HOST,
        port=PORT,
        reload=DEBUG,
    )


if __name__ == "__main__":
    run()
