"""
Base exception hierarchy

Provides a consistent exception structure across the bootstrap package
with clear error messages and recovery hints.
"""


class BootstrapError(Exception):
    """
    Base exception for all bootstrap errors

    Attributes:
        message: Error message
        component: Component that raised the error
        recovery_hint: Optional hint for recovery
    """

    def __init__(self, message: str, component: str = "", recovery_hint: str = ""):
        self.component = component
        self.recovery_hint = recovery_hint
        super().__init__(message)

    def __str__(self) -> str:
        msg = super().__str__()
        if self.component:
            msg = f"[{self.component}] {msg}"
        if self.recovery_hint:
            msg += f"\nRecovery: {self.recovery_hint}"
        return msg


class ConfigurationError(BootstrapError):
    """Configuration-related errors"""

    def __init__(self, message: str, recovery_hint: str = ""):
        super().__init__(
            message,
            component="Configuration",
            recovery_hint=recovery_hint or "Check your .env file and CLUSTER_* variables",
        )
