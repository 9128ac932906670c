"""
Startup models

Enumerations and the resolved bootstrap configuration shared by the
lifecycle components.
"""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from cluster_bootstrap.core.paths import get_cluster_conf_path, get_log_file_path


class DeploymentMode(str, Enum):
    """Cluster topology of this server"""

    STANDALONE = "stand alone"
    CLUSTER = "cluster"


class FunctionMode(str, Enum):
    """Which server functions are enabled"""

    ALL = "All"
    CONFIG_ONLY = "config"
    NAMING_ONLY = "naming"


class LifecycleState(str, Enum):
    """States of the lifecycle coordinator"""

    IDLE = "idle"
    STARTING = "starting"
    PREPARED = "prepared"
    STARTED = "started"
    FAILED = "failed"

    @property
    def is_terminal(self) -> bool:
        return self in (LifecycleState.STARTED, LifecycleState.FAILED)


@dataclass(frozen=True)
class BootstrapConfig:
    """
    Configuration resolved during environment preparation

    Built once by the environment configurator and handed to every later
    stage instead of being read back from process-wide state.

    Attributes:
        deployment_mode: Standalone or cluster
        function_mode: Enabled functions (ALL when unset or unrecognized)
        local_address: Address this server advertises
        home: Server home directory
        server_name: Name used in log lines
        heartbeat_interval: Seconds between "still starting" lines
        log_file_name: Main log file under <home>/logs
    """

    deployment_mode: DeploymentMode
    function_mode: FunctionMode
    local_address: str
    home: Path
    server_name: str = "Server"
    heartbeat_interval: float = 1.0
    log_file_name: str = "server.log"

    @property
    def is_standalone(self) -> bool:
        return self.deployment_mode == DeploymentMode.STANDALONE

    @property
    def cluster_conf_path(self) -> Path:
        return get_cluster_conf_path(self.home)

    @property
    def log_file(self) -> Path:
        return get_log_file_path(self.home, self.log_file_name)

    def to_dict(self) -> dict:
        """Convert to JSON-serializable dict"""
        return {
            "deployment_mode": self.deployment_mode.value,
            "function_mode": self.function_mode.value,
            "local_address": self.local_address,
            "home": str(self.home),
            "server_name": self.server_name,
            "heartbeat_interval": self.heartbeat_interval,
        }
