"""
cluster-bootstrap

Bootstrap lifecycle coordination for clustered server processes.
"""

__version__ = "0.5.0"

from cluster_bootstrap.startup.coordinator import LifecycleCoordinator
from cluster_bootstrap.startup.environment import Environment
from cluster_bootstrap.startup.models import BootstrapConfig, DeploymentMode, FunctionMode

__all__ = [
    "LifecycleCoordinator",
    "Environment",
    "BootstrapConfig",
    "DeploymentMode",
    "FunctionMode",
]
