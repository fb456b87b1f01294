"""Observability API endpoints: health and readiness checks."""

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from database import get_db
from .health import (
    check_database_health,
    check_tenant_registry_health,
    get_overall_health,
    HealthStatus,
)
from .logging_config import get_logger

logger = get_logger(__name__)

router = APIRouter(tags=["Observability"])


@router.get(
    "/health",
    summary="Health check endpoint",
    description="Returns health status of system components (database, tenant registry)",
    status_code=200,
)
def health_check(db: Session = Depends(get_db)):
    """Check health of all system components.

    Returns 200 OK if all components are healthy, 503 if any are unhealthy.
    """
    components = {
        "database": check_database_health(db),
        "tenant_registry": check_tenant_registry_health(),
    }

    overall_status = get_overall_health(components)

    response_data = {
        "status": overall_status.value,
        "components": {
            name: {
                "status": comp.status.value,
                "message": comp.message,
                "latency_ms": comp.latency_ms,
            }
            for name, comp in components.items()
        }
    }

    status_code = 200 if overall_status != HealthStatus.UNHEALTHY else 503

    return JSONResponse(
        content=response_data,
        status_code=status_code
    )


@router.get(
    "/ready",
    summary="Readiness check endpoint",
    description="Returns readiness status (for Kubernetes readiness checks)",
    status_code=200,
)
def readiness_check(db: Session = Depends(get_db)):
    """Check if application is ready to serve traffic (database reachable)."""
    db_health = check_database_health(db)

    if db_health.status == HealthStatus.HEALTHY:
        return {
            "status": "ready",
            "message": "Application is ready to serve traffic"
        }
    return JSONResponse(
        content={
            "status": "not_ready",
            "message": db_health.message
        },
        status_code=503
    )
