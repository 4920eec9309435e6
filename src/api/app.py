"""
FastAPI application factory.

* Registers routes for the driver feed and the admin back office.
* Maps domain / storage errors onto HTTP responses.
* Applies rate-limiting middleware.
* Swagger / OpenAPI UI available at ``/docs``.
"""

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from sqlalchemy.exc import SQLAlchemyError

from src.api.middleware import limiter
from src.api.routes import admin, deliveries
from src.config import settings
from src.infrastructure.repositories import RecordNotFound

logging.basicConfig(level=settings.log_level)
logger = logging.getLogger(__name__)


async def _not_found_handler(request: Request, exc: RecordNotFound) -> JSONResponse:
    return JSONResponse(status_code=404, content={"detail": str(exc)})


async def _storage_error_handler(
    request: Request, exc: SQLAlchemyError
) -> JSONResponse:
    logger.exception("Storage error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=503,
        content={"detail": "Storage is unavailable. Please try again."},
    )


def create_app() -> FastAPI:
    app = FastAPI(
        title="Delivery Dispatch API",
        description=(
            "Back office for customers, products, drivers and delivery "
            "orders, plus a driver feed that lists assigned deliveries "
            "nearest first."
        ),
        version="1.0.0",
    )

    # Rate limiter
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

    app.add_exception_handler(RecordNotFound, _not_found_handler)
    app.add_exception_handler(SQLAlchemyError, _storage_error_handler)

    # Routers
    app.include_router(deliveries.router, prefix="/api/v1")
    app.include_router(admin.router, prefix="/api/v1")

    return app
