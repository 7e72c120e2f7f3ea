"""FastAPI application main entry point."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from apps.api import deps
from apps.api.v1.endpoints import carts, coupons, deliveries, fee_configurations, orders
from core.domain.exceptions import (
    AccessDenied,
    DomainError,
    InvalidArgument,
    OrderAlreadyProcessed,
    PaymentGatewayError,
    ProductUnavailable,
    RequestValidationFailed,
    ResourceNotFound,
)
from core.infrastructure.database.config import close_database, init_database
from core.infrastructure.logging import configure_logging

configure_logging(deps.settings.logging.level)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    await init_database()
    yield
    await deps.get_bus().drain()
    await close_database()


app = FastAPI(
    title="Fulfillment Engine API",
    description="Order fulfillment and settlement for food delivery",
    version="0.1.0",
    lifespan=lifespan,
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=[
        "http://localhost:3000",
        "http://127.0.0.1:3000",
    ],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(orders.router, prefix="/api/v1")
app.include_router(deliveries.router, prefix="/api/v1")
app.include_router(coupons.router, prefix="/api/v1")
app.include_router(fee_configurations.router, prefix="/api/v1")
app.include_router(carts.router, prefix="/api/v1")


def _error(status_code: int, exc: Exception) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"detail": str(exc)})


@app.exception_handler(ResourceNotFound)
async def not_found_handler(request: Request, exc: ResourceNotFound) -> JSONResponse:
    return _error(status.HTTP_404_NOT_FOUND, exc)


@app.exception_handler(OrderAlreadyProcessed)
async def conflict_handler(request: Request, exc: OrderAlreadyProcessed) -> JSONResponse:
    return _error(status.HTTP_409_CONFLICT, exc)


@app.exception_handler(ProductUnavailable)
async def unavailable_handler(request: Request, exc: ProductUnavailable) -> JSONResponse:
    return _error(status.HTTP_409_CONFLICT, exc)


@app.exception_handler(AccessDenied)
async def access_denied_handler(request: Request, exc: AccessDenied) -> JSONResponse:
    return _error(status.HTTP_403_FORBIDDEN, exc)


@app.exception_handler(RequestValidationFailed)
async def validation_failed_handler(request: Request, exc: RequestValidationFailed) -> JSONResponse:
    """Field-level validation errors.

    Args:
        request: FastAPI request
        exc: RequestValidationFailed with the collected field errors

    Returns:
        JSONResponse with the message and every field error
    """
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={"detail": str(exc), "errors": [error.to_dict() for error in exc.errors]},
    )


@app.exception_handler(InvalidArgument)
async def invalid_argument_handler(request: Request, exc: InvalidArgument) -> JSONResponse:
    return _error(status.HTTP_400_BAD_REQUEST, exc)


@app.exception_handler(PaymentGatewayError)
async def payment_gateway_handler(request: Request, exc: PaymentGatewayError) -> JSONResponse:
    logger.error(f"Payment gateway failure on {request.url.path}: {exc}")
    return _error(status.HTTP_502_BAD_GATEWAY, exc)


@app.exception_handler(DomainError)
async def domain_error_handler(request: Request, exc: DomainError) -> JSONResponse:
    return _error(status.HTTP_400_BAD_REQUEST, exc)


@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle general exceptions.

    Args:
        request: FastAPI request
        exc: Exception

    Returns:
        JSONResponse with error details
    """
    logger.error(f"Unhandled error on {request.url.path}: {type(exc).__name__}: {exc}", exc_info=True)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Internal server error"},
    )


@app.get("/health")
async def health_check() -> dict[str, str]:
    """Health check endpoint.

    Returns:
        Health status
    """
    return {"status": "healthy"}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=8000)
