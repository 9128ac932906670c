"""
Startup-specific exceptions

Provides clear error messages with recovery instructions for startup failures.
"""

from pathlib import Path

from cluster_bootstrap.core.exceptions import BootstrapError


class StartupError(BootstrapError):
    """Base exception for startup failures"""

    def __init__(self, message: str, component: str, recovery_hint: str = ""):
        super().__init__(message, component=component, recovery_hint=recovery_hint)


class ClusterConfigError(StartupError):
    """Cluster membership file could not be read"""

    def __init__(self, path: Path, reason: str):
        self.path = path
        super().__init__(
            f"Cannot read cluster conf {path}: {reason}",
            component="ClusterConf",
            recovery_hint="Create the file with one member address per line",
        )


class DirectoryProvisionError(StartupError):
    """A required working directory could not be created"""

    def __init__(self, path: Path, reason: str):
        self.path = path
        super().__init__(
            f"Cannot create directory {path}: {reason}",
            component="Directories",
            recovery_hint="Check filesystem permissions and that no file occupies the path",
        )


class LifecycleStateError(StartupError):
    """A lifecycle callback arrived in a state that does not allow it"""

    def __init__(self, callback: str, state: str):
        self.callback = callback
        self.state = state
        super().__init__(
            f"Callback '{callback}' is not allowed in state '{state}'",
            component="Lifecycle",
        )
