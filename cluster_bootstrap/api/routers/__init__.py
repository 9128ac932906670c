"""
API routers
"""

from cluster_bootstrap.api.routers.health import router as health_router

__all__ = ["health_router"]
