"""
Lifecycle management

Drives the lifecycle listeners from FastAPI's lifespan context manager.
"""

import logging
from contextlib import asynccontextmanager
from datetime import UTC, datetime
from typing import Awaitable, Callable, Iterable

from fastapi import FastAPI

from cluster_bootstrap.startup.environment import Environment
from cluster_bootstrap.startup.listeners import ListenerChain

logger = logging.getLogger(__name__)

StartupHook = Callable[[FastAPI], Awaitable[None]]


def create_lifespan(
    chain: ListenerChain,
    environment: Environment,
    startup_hooks: Iterable[StartupHook] = (),
):
    """
    Build a FastAPI lifespan bound to a listener chain

    Phases:
    1. starting
    2. environment prepared
    3. context prepared
    4. context loaded
    5. startup hooks (awaited in order, the slow part of a startup)
    6. started, then running

    Any exception before the application starts serving triggers ``failed``
    and is re-raised so the ASGI server aborts startup.

    Args:
        chain: Listeners to notify
        environment: Configuration source for environment preparation
        startup_hooks: Async callables run between context loaded and started

    Returns:
        Lifespan context manager factory for ``FastAPI(lifespan=...)``
    """
    hooks = list(startup_hooks)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        start_time = datetime.now(UTC)
        try:
            chain.starting()
            chain.environment_prepared(environment)
            chain.context_prepared()
            chain.context_loaded()
            for index, hook in enumerate(hooks, start=1):
                logger.debug(f"Startup hook {index}/{len(hooks)}: {getattr(hook, '__name__', hook)}")
                await hook(app)
            chain.started()
        except Exception as e:
            chain.failed(e)
            raise

        elapsed = (datetime.now(UTC) - start_time).total_seconds()
        logger.info(f"Startup completed in {elapsed:.2f}s")
        chain.running()

        yield  # Application runs here

        logger.info("Shutting down...")

    return lifespan
