"""
Startup module - Bootstrap lifecycle coordination

Resolves deployment configuration, reports startup progress, prepares
working directories and reports the startup outcome.
"""

from cluster_bootstrap.startup.coordinator import HIGHEST_PRECEDENCE, LifecycleCoordinator
from cluster_bootstrap.startup.environment import Environment, configure_environment
from cluster_bootstrap.startup.heartbeat import HeartbeatScheduler
from cluster_bootstrap.startup.lifecycle import create_lifespan
from cluster_bootstrap.startup.listeners import LifecycleListener, ListenerChain
from cluster_bootstrap.startup.models import (
    BootstrapConfig,
    DeploymentMode,
    FunctionMode,
    LifecycleState,
)

__all__ = [
    "HIGHEST_PRECEDENCE",
    "LifecycleCoordinator",
    "Environment",
    "configure_environment",
    "HeartbeatScheduler",
    "create_lifespan",
    "LifecycleListener",
    "ListenerChain",
    "BootstrapConfig",
    "DeploymentMode",
    "FunctionMode",
    "LifecycleState",
]
