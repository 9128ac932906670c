"""
Lifecycle coordinator

State machine driven by the host framework's startup callbacks. Owns the
"startup in progress" flag, runs the heartbeat during cluster-mode
startups, and reports the outcome.

Callback order (guaranteed by the host framework):

    starting -> environment_prepared -> context_prepared -> context_loaded
             -> started | failed -> running
"""

import logging
import threading
from typing import Any, Callable

from cluster_bootstrap.startup.cluster_conf import read_cluster_conf
from cluster_bootstrap.startup.directories import provision_directories
from cluster_bootstrap.startup.environment import Environment, configure_environment
from cluster_bootstrap.startup.exceptions import (
    ClusterConfigError,
    DirectoryProvisionError,
    LifecycleStateError,
)
from cluster_bootstrap.startup.heartbeat import HeartbeatScheduler, Waiter
from cluster_bootstrap.startup.models import BootstrapConfig, DeploymentMode, LifecycleState

logger = logging.getLogger(__name__)

HIGHEST_PRECEDENCE = -(2**31)

_ALLOWED_FROM = {
    "on_starting": (LifecycleState.IDLE,),
    "on_environment_prepared": (LifecycleState.STARTING,),
    "on_context_prepared": (LifecycleState.STARTING,),
    "on_context_loaded": (LifecycleState.PREPARED,),
    "on_started": (LifecycleState.PREPARED,),
    "on_failed": (LifecycleState.IDLE, LifecycleState.STARTING, LifecycleState.PREPARED),
}


class LifecycleCoordinator:
    """
    Coordinate bootstrap work across the startup callbacks

    Out-of-order callbacks are tolerated with a warning by default. With
    ``strict=True`` they raise LifecycleStateError instead. Callbacks that
    arrive after the coordinator reached STARTED or FAILED are ignored.

    Args:
        shutdown: Asks the host framework to close the application after a
            failed startup. The coordinator never exits the process itself.
        waiter: Wait function passed to the heartbeat (tests use a
            simulated clock here)
        strict: Raise on out-of-order callbacks instead of warning
    """

    order = HIGHEST_PRECEDENCE

    def __init__(
        self,
        shutdown: Callable[[], None] | None = None,
        waiter: Waiter | None = None,
        strict: bool = False,
    ):
        self.shutdown = shutdown
        self._waiter = waiter
        self._strict = strict
        self._starting = threading.Event()
        self._state = LifecycleState.IDLE
        self._heartbeat: HeartbeatScheduler | None = None
        self.config: BootstrapConfig | None = None
        self.environment: Environment | None = None
        self.members: list[str] = []

    @property
    def state(self) -> LifecycleState:
        return self._state

    @property
    def is_starting(self) -> bool:
        return self._starting.is_set()

    @property
    def heartbeat(self) -> HeartbeatScheduler | None:
        return self._heartbeat

    def _enter(self, callback: str) -> bool:
        """
        Check a callback against the current state

        Returns:
            False when the callback must be ignored
        """
        if self._state.is_terminal:
            if self._strict:
                raise LifecycleStateError(callback, self._state.value)
            logger.warning(f"Ignoring {callback}: lifecycle already {self._state.value}")
            return False
        if self._state not in _ALLOWED_FROM[callback]:
            if self._strict:
                raise LifecycleStateError(callback, self._state.value)
            logger.warning(f"Unexpected {callback} in state {self._state.value}")
        return True

    # ------------------------------------------------------------------
    # Callbacks
    # ------------------------------------------------------------------

    def on_starting(self) -> None:
        if not self._enter("on_starting"):
            return
        self._starting.set()
        self._state = LifecycleState.STARTING

    def on_environment_prepared(self, environment: Environment) -> None:
        if not self._enter("on_environment_prepared"):
            return
        self.environment = environment
        self.config = configure_environment(environment)
        logger.debug(f"Resolved bootstrap config: {self.config.to_dict()}")

    def on_context_prepared(self) -> None:
        if not self._enter("on_context_prepared"):
            return
        self._state = LifecycleState.PREPARED

        config = self.config
        if config is None:
            logger.warning("Context prepared before environment; skipping cluster setup")
            return
        if config.deployment_mode != DeploymentMode.CLUSTER:
            return

        self._log_cluster_conf(config)
        self._start_heartbeat(config)

    def on_context_loaded(self) -> None:
        """Reserved hook, no effect"""

    def on_started(self) -> None:
        if not self._enter("on_started"):
            return
        self._starting.clear()
        self._stop_heartbeat()

        config = self.config
        if config is None:
            self._state = LifecycleState.STARTED
            logger.warning("Started without a prepared environment")
            return

        # A provisioning error leaves the state open so on_failed still runs
        provision_directories(config.home, server_name=config.server_name)
        self._state = LifecycleState.STARTED
        logger.info(
            f"{config.server_name} started successfully in {config.deployment_mode.value} mode."
        )

    def on_running(self) -> None:
        """Reserved hook, no effect"""

    def on_failed(self, cause: BaseException) -> None:
        if not self._enter("on_failed"):
            return
        self._starting.clear()
        self._state = LifecycleState.FAILED
        self._stop_heartbeat()

        config = self.config
        server_name = config.server_name if config else "Server"
        if config is not None:
            try:
                provision_directories(config.home, server_name=server_name)
            except DirectoryProvisionError as e:
                logger.error(f"Directory setup failed during failure handling: {e}")

        logger.error(f"Startup errors : {cause}", exc_info=cause)
        if config is not None:
            logger.error(
                f"{server_name} failed to start, please see {config.log_file} for more details."
            )
        else:
            logger.error(f"{server_name} failed to start before its environment was prepared.")

        if self.shutdown is not None:
            self.shutdown()

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _log_cluster_conf(self, config: BootstrapConfig) -> None:
        try:
            self.members = read_cluster_conf(config.cluster_conf_path)
        except ClusterConfigError as e:
            self.members = []
            logger.error(f"read cluster conf fail: {e}", exc_info=e)
            return
        logger.info(f"The server IP list of {config.server_name} is {self.members}")

    def _start_heartbeat(self, config: BootstrapConfig) -> None:
        if self._heartbeat is not None:
            logger.warning("Heartbeat already created for this startup")
            return
        self._heartbeat = HeartbeatScheduler(
            self._starting.is_set,
            interval=config.heartbeat_interval,
            message=f"{config.server_name} is starting...",
            waiter=self._waiter,
        )
        self._heartbeat.start()

    def _stop_heartbeat(self) -> None:
        if self._heartbeat is not None:
            self._heartbeat.stop()

    def snapshot(self) -> dict[str, Any]:
        """Convert current lifecycle state to a JSON-serializable dict"""
        return {
            "state": self._state.value,
            "starting": self.is_starting,
            "config": self.config.to_dict() if self.config else None,
            "members": list(self.members),
            "heartbeat_running": self._heartbeat.is_running if self._heartbeat else False,
        }
