"""Stockroom FastAPI application.

Usage:
    uvicorn stockroom.infrastructure.http.app:create_app --factory --port 8000
    stockroom serve --port 8000
"""

from __future__ import annotations

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from stockroom.domain.exceptions import (
    AlreadyExistsError,
    DomainException,
    EntityNotFoundError,
    StorageError,
    ValidationError,
)
from stockroom.domain.repository.order_repository import OrderRepository
from stockroom.domain.repository.product_repository import ProductRepository
from stockroom.infrastructure.bootstrap import build_services
from stockroom.infrastructure.config import Settings
from stockroom.infrastructure.http.routes import order_router, product_router
from stockroom.infrastructure.logging import configure_logging

logger = structlog.get_logger(__name__)

# Most specific first: subclasses of ValidationError/StorageError map with their base.
_STATUS_CODES: list[tuple[type[DomainException], int]] = [
    (EntityNotFoundError, 404),
    (AlreadyExistsError, 409),
    (ValidationError, 400),
    (StorageError, 500),
]


def status_code_for(exc: DomainException) -> int:
    for error_type, status_code in _STATUS_CODES:
        if isinstance(exc, error_type):
            return status_code
    return 500


def create_app(
    settings: Settings | None = None,
    *,
    product_repo: ProductRepository | None = None,
    order_repo: OrderRepository | None = None,
) -> FastAPI:
    """Build the app; repositories may be injected (tests pass in-memory fakes)."""
    settings = settings or Settings.from_env()
    configure_logging(settings.log_level, settings.log_json)

    app = FastAPI(
        title="Stockroom API",
        description="Products, stock and order placement",
    )
    app.state.services = build_services(settings, product_repo, order_repo)

    @app.exception_handler(DomainException)
    async def domain_error_handler(request: Request, exc: DomainException) -> JSONResponse:
        status_code = status_code_for(exc)
        if status_code >= 500:
            logger.error("Request failed", path=request.url.path, error=str(exc))
        return JSONResponse(status_code=status_code, content={"message": str(exc)})

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        details = "; ".join(
            f"{'.'.join(str(part) for part in err['loc'][1:]) or 'body'}: {err['msg']}"
            for err in exc.errors()
        )
        return JSONResponse(status_code=400, content={"message": details or "Invalid request body"})

    app.include_router(product_router)
    app.include_router(order_router)

    @app.get("/health")
    def health() -> dict[str, str]:
        return {"status": "ok", "store": settings.store}

    return app
