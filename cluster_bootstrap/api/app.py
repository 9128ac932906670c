"""
FastAPI application

Wires the lifecycle coordinator into the application's lifespan and
exposes the health endpoints.
"""

import logging
from typing import Iterable

from fastapi import FastAPI

from cluster_bootstrap import __version__
from cluster_bootstrap.api.routers import health_router
from cluster_bootstrap.core.config import Settings, get_settings
from cluster_bootstrap.startup.coordinator import LifecycleCoordinator
from cluster_bootstrap.startup.environment import Environment
from cluster_bootstrap.startup.lifecycle import StartupHook, create_lifespan
from cluster_bootstrap.startup.listeners import LifecycleListener, ListenerChain

logger = logging.getLogger(__name__)


def create_app(
    settings: Settings | None = None,
    startup_hooks: Iterable[StartupHook] = (),
    listeners: Iterable[LifecycleListener] = (),
    coordinator: LifecycleCoordinator | None = None,
) -> FastAPI:
    """
    Create the FastAPI application

    Args:
        settings: Settings to use (defaults to the singleton)
        startup_hooks: Async startup work run while the heartbeat is active
        listeners: Extra lifecycle listeners, ordered after the coordinator
        coordinator: Coordinator to use (a new one is created by default).
            One without a shutdown callable gets the app's shutdown request.

    Returns:
        Configured FastAPI app
    """
    settings = settings or get_settings()
    environment = Environment(settings)

    def request_shutdown() -> None:
        logger.info("Shutdown requested after failed startup")
        app.state.shutdown_requested = True

    if coordinator is None:
        coordinator = LifecycleCoordinator(shutdown=request_shutdown)
    elif coordinator.shutdown is None:
        coordinator.shutdown = request_shutdown
    chain = ListenerChain([coordinator, *listeners])

    app = FastAPI(
        title="cluster-bootstrap",
        version=__version__,
        lifespan=create_lifespan(chain, environment, startup_hooks),
    )
    app.state.shutdown_requested = False
    app.state.coordinator = coordinator
    app.state.environment = environment

    # Register health check router
    app.include_router(health_router)
    return app
