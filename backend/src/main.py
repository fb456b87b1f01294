"""Bakery Backend - Main FastAPI Application

Multi-tenant bakery operations API (customers, customer orders).

This module creates and configures the main FastAPI application, including:
- API routers (auth, customers, customer orders)
- Middleware (request ID correlation, CORS, tenant context binding)
- Exception handlers
- Health endpoints
"""

import logging
from contextlib import asynccontextmanager
from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from sqlalchemy.exc import SQLAlchemyError

from config import settings

# Observability
from observability.logging_config import configure_logging
from observability.middleware import RequestIDMiddleware
from observability.router import router as observability_router

# Authentication
from auth.router import router as auth_router

# Tenancy
from tenancy.middleware import TenantContextMiddleware
from tenancy.registry import get_tenant_registry

# Data access
from datastore.exceptions import DataStoreError

# Domain Routers
from customers.router import router as customers_router
from customer_orders.router import router as customer_orders_router

configure_logging(level=settings.LOG_LEVEL, json_format=settings.LOG_JSON)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler.

    Startup fails if any mapped model is not classified as tenant-scoped or
    global, or if the classification disagrees with TENANT_SCOPED_MODELS.
    """
    logger.info("Bakery API starting up...")
    logger.info(f"Environment: {settings.ENVIRONMENT}")

    registry = get_tenant_registry()
    logger.info(f"Tenant isolation active for {len(registry.names)} models")

    yield

    logger.info("Bakery API shutting down...")


# =============================================================================
# EXCEPTION HANDLERS
# =============================================================================

async def validation_exception_handler(
    request: Request,
    exc: RequestValidationError
) -> JSONResponse:
    """Handle Pydantic validation errors with field-level details."""
    logger.warning(f"Validation error on {request.method} {request.url.path}")
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={
            "error": "validation_error",
            "message": "Request validation failed",
            "details": exc.errors(),
        },
    )


async def data_store_exception_handler(
    request: Request,
    exc: DataStoreError
) -> JSONResponse:
    """Handle malformed data client calls (unknown model, bad filter)."""
    logger.warning(f"Data store error on {request.method} {request.url.path}: {exc}")
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={
            "error": "data_store_error",
            "message": str(exc),
        },
    )


async def database_exception_handler(
    request: Request,
    exc: SQLAlchemyError
) -> JSONResponse:
    """Handle database errors.

    Logs the full error but returns a generic message to prevent
    information leakage.
    """
    logger.error(
        f"Database error on {request.method} {request.url.path}",
        exc_info=exc
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "error": "database_error",
            "message": "A database error occurred. Please try again later.",
        },
    )


async def generic_exception_handler(
    request: Request,
    exc: Exception
) -> JSONResponse:
    """Handle uncaught exceptions; details are logged, not exposed."""
    logger.error(
        f"Unhandled exception on {request.method} {request.url.path}",
        exc_info=exc
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "error": "internal_error",
            "message": "An unexpected error occurred. Please try again later.",
        },
    )


# =============================================================================
# APPLICATION FACTORY
# =============================================================================

def create_app() -> FastAPI:
    """Build the FastAPI application.

    Tests call this to get a fresh instance; ASGI servers use the
    module-level `app`.
    """
    docs_enabled = not settings.is_production

    application = FastAPI(
        title="Bakery API",
        description="Multi-tenant bakery operations platform",
        version="0.1.0",
        docs_url="/docs" if docs_enabled else None,
        redoc_url="/redoc" if docs_enabled else None,
        openapi_url="/openapi.json" if docs_enabled else None,
        lifespan=lifespan,
    )

    # Middleware: the last one added runs outermost.
    # Tenant context binds the token's tenant around routing and handlers
    application.add_middleware(TenantContextMiddleware)

    application.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )

    # Request ID outermost so every log line of the request is correlated
    application.add_middleware(RequestIDMiddleware)

    application.add_exception_handler(RequestValidationError, validation_exception_handler)
    application.add_exception_handler(DataStoreError, data_store_exception_handler)
    application.add_exception_handler(SQLAlchemyError, database_exception_handler)
    application.add_exception_handler(Exception, generic_exception_handler)

    # Health and readiness
    application.include_router(observability_router)

    application.include_router(auth_router, prefix="/api/v1")
    application.include_router(customers_router, prefix="/api/v1")
    application.include_router(customer_orders_router, prefix="/api/v1")

    @application.get("/", include_in_schema=False)
    async def root() -> dict[str, Any]:
        """Root endpoint - API information."""
        return {
            "name": "Bakery API",
            "version": "0.1.0",
            "status": "running",
            "docs": "/docs" if docs_enabled else None,
        }

    @application.get("/api/v1", include_in_schema=False)
    async def api_root() -> dict[str, Any]:
        """API v1 root endpoint."""
        return {
            "version": "v1",
            "status": "active",
            "endpoints": {
                "auth": "/api/v1/auth",
                "customers": "/api/v1/customers",
                "customer_orders": "/api/v1/customer-orders",
            }
        }

    return application


app = create_app()


if __name__ == "__main__":
    import os
    import uvicorn

    uvicorn.run(
        "main:app",
        host=os.getenv("HOST", "0.0.0.0"),
        port=int(os.getenv("PORT", "8000")),
        reload=settings.ENVIRONMENT == "development",
        log_level=settings.LOG_LEVEL.lower(),
    )
