"""FastAPI application for the pair devnet.

Pair operations are synchronous and run to completion on the event loop, so
requests against the same pair never interleave.
"""

import os

import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from amm_pair import __version__
from amm_pair.api.endpoints import router
from amm_pair.errors import AuthorizationError, PairError
from amm_pair.log_config import configure_logging

# Configuration from environment variables with sensible defaults
HOST = os.environ.get("AMM_HOST", "127.0.0.1")
PORT = int(os.environ.get("AMM_PORT", "8000"))
DEBUG = os.environ.get("AMM_DEBUG", "false").lower() in ("true", "1", "yes")
LOG_LEVEL = os.environ.get("AMM_LOG_LEVEL", "DEBUG" if DEBUG else "INFO")

app = FastAPI(
    title="Constant-Product Pair",
    description="Devnet service for a constant-product AMM pair",
    version=__version__,
)


@app.exception_handler(PairError)
async def pair_error_handler(_request: Request, exc: PairError) -> JSONResponse:
    """Map pair failures to a discriminated JSON error body."""
    status_code = 403 if isinstance(exc, AuthorizationError) else 400
    return JSONResponse(status_code=status_code, content={"error": exc.reason, "detail": str(exc)})


app.include_router(router)


@app.get("/health")
async def health() -> dict[str, object]:
    """Health check endpoint."""
    return {"status": "ok", "version": __version__}


def run() -> None:
    """Run the pair API server.

    Configuration via environment variables:
    - AMM_HOST: Host to bind to (default: 127.0.0.1)
    - AMM_PORT: Port to bind to (default: 8000)
    - AMM_DEBUG: Enable debug/reload mode (default: false)
    - AMM_LOG_LEVEL: Minimum log level (default: INFO, DEBUG with AMM_DEBUG)
    - AMM_ENABLE_FAUCET: Expose the token faucet (default: false)
    """
    configure_logging(LOG_LEVEL)
    uvicorn.run(
        "amm_pair.api.main:app",
        host=HOST,
        port=PORT,
        reload=DEBUG,
    )


if __name__ == "__main__":
    run()
