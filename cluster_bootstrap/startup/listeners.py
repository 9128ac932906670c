"""
Lifecycle listeners

Protocol for objects receiving startup callbacks and an ordered chain
that fans each callback out to every registered listener.
"""

import logging
from typing import Iterable, Protocol

from cluster_bootstrap.startup.environment import Environment

logger = logging.getLogger(__name__)

LOWEST_PRECEDENCE = 2**31 - 1


class LifecycleListener(Protocol):
    """Receives startup callbacks in the fixed lifecycle order"""

    order: int

    def on_starting(self) -> None: ...

    def on_environment_prepared(self, environment: Environment) -> None: ...

    def on_context_prepared(self) -> None: ...

    def on_context_loaded(self) -> None: ...

    def on_started(self) -> None: ...

    def on_running(self) -> None: ...

    def on_failed(self, cause: BaseException) -> None: ...


class ListenerChain:
    """
    Ordered fan-out of lifecycle callbacks

    Listeners run lowest ``order`` first. Listeners without an ``order``
    attribute run last. Registration order breaks ties.
    """

    def __init__(self, listeners: Iterable[LifecycleListener] = ()):
        self._listeners: list[LifecycleListener] = []
        for listener in listeners:
            self.add(listener)

    def add(self, listener: LifecycleListener) -> None:
        self._listeners.append(listener)
        # sort is stable, so equal orders keep registration order
        self._listeners.sort(key=lambda item: getattr(item, "order", LOWEST_PRECEDENCE))

    @property
    def listeners(self) -> list[LifecycleListener]:
        return list(self._listeners)

    def starting(self) -> None:
        for listener in self._listeners:
            listener.on_starting()

    def environment_prepared(self, environment: Environment) -> None:
        for listener in self._listeners:
            listener.on_environment_prepared(environment)

    def context_prepared(self) -> None:
        for listener in self._listeners:
            listener.on_context_prepared()

    def context_loaded(self) -> None:
        for listener in self._listeners:
            listener.on_context_loaded()

    def started(self) -> None:
        for listener in self._listeners:
            listener.on_started()

    def running(self) -> None:
        for listener in self._listeners:
            listener.on_running()

    def failed(self, cause: BaseException) -> None:
        """Notify every listener, even when one of them raises"""
        for listener in self._listeners:
            try:
                listener.on_failed(cause)
            except Exception as e:
                logger.error(f"Listener {type(listener).__name__} failed in on_failed: {e}", exc_info=True)
