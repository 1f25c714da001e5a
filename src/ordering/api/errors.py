"""HTTP error mapping for the AquaLink API.

Protean's standard handlers cover validation (400), not found (404),
invalid state (409) and invalid operation (422). The handlers here add the
shortage list to stock failures and turn persistence failures into 503 so
clients know the request is safe to retry.
"""

import structlog
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from protean.exceptions import DatabaseError, ExpectedVersionError, TransactionError
from protean.integrations.fastapi import register_exception_handlers

from ordering.exceptions import InsufficientStock

logger = structlog.get_logger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    register_exception_handlers(app)

    @app.exception_handler(InsufficientStock)
    async def insufficient_stock_handler(request: Request, exc: InsufficientStock) -> JSONResponse:
        return JSONResponse(
            status_code=422,
            content={"error": str(exc), "shortages": exc.shortages},
        )

    @app.exception_handler(ExpectedVersionError)
    async def version_conflict_handler(request: Request, exc: ExpectedVersionError) -> JSONResponse:
        return JSONResponse(status_code=409, content={"error": "Order was changed concurrently, reload and retry"})

    @app.exception_handler(DatabaseError)
    @app.exception_handler(TransactionError)
    async def unavailable_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.error("Persistence failure", path=request.url.path, error=str(exc))
        return JSONResponse(
            status_code=503,
            content={"error": "Service temporarily unavailable, safe to retry"},
        )
