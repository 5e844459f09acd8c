"""
Health check API routes.

Kubernetes-compatible liveness and readiness probes.
"""

from fastapi import APIRouter, Depends, Response, status

from douanier.di.dependencies import get_health_check
from douanier.infrastructure.monitoring.health_check import (
    DouanierHealthCheck,
    HealthStatus,
)

router = APIRouter(prefix="/health", tags=["health"])


@router.get("/live", status_code=status.HTTP_200_OK)
async def liveness_probe(
    health_check: DouanierHealthCheck = Depends(get_health_check),
):
    """
    Liveness probe endpoint.

    Used by Kubernetes to determine if pod should be restarted.
    """
    return await health_check.check_liveness()


@router.get("/ready", status_code=status.HTTP_200_OK)
async def readiness_probe(
    response: Response,
    health_check: DouanierHealthCheck = Depends(get_health_check),
):
    """
    Readiness probe endpoint.

    Returns 503 only when the session store is unusable. A degraded
    ledger keeps the pod in rotation since polls then stay pending.
    """
    result = await health_check.check_readiness()

    if result["status"] == HealthStatus.UNHEALTHY.value:
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE

    return result
