"""
Health check endpoints

Kubernetes-style probes backed by the lifecycle coordinator:
- GET /health - Lifecycle snapshot
- GET /health/live - Liveness probe (always 200 if running)
- GET /health/ready - Readiness probe (200 once started, 503 otherwise)
"""

from typing import Any

from fastapi import APIRouter, Request, Response

from cluster_bootstrap import __version__
from cluster_bootstrap.startup.coordinator import LifecycleCoordinator
from cluster_bootstrap.startup.models import LifecycleState

router = APIRouter(prefix="/health", tags=["health"])


def _coordinator(request: Request) -> LifecycleCoordinator:
    return request.app.state.coordinator


@router.get("")
async def health_check(request: Request, response: Response) -> dict[str, Any]:
    """
    Lifecycle snapshot

    Returns:
        200: Startup has not failed
        503: Startup failed
    """
    coordinator = _coordinator(request)
    if coordinator.state == LifecycleState.FAILED:
        response.status_code = 503

    return {"version": __version__, **coordinator.snapshot()}


@router.get("/live")
async def liveness_probe() -> dict[str, str]:
    """Always returns 200 if the application is running"""
    return {"status": "alive"}


@router.get("/ready")
async def readiness_probe(request: Request, response: Response) -> dict[str, Any]:
    """
    Readiness probe

    Returns:
        200: Startup completed
        503: Still starting or failed
    """
    coordinator = _coordinator(request)
    ready = coordinator.state == LifecycleState.STARTED
    if not ready:
        response.status_code = 503

    return {"ready": ready, "state": coordinator.state.value}
