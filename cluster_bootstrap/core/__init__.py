"""
Core module - Base abstractions

Provides foundational components used across the package:
- Base exception hierarchy
- Configuration management
- Path resolution
"""

from cluster_bootstrap.core.config import Settings, get_settings, reset_settings
from cluster_bootstrap.core.exceptions import BootstrapError, ConfigurationError

__all__ = [
    "Settings",
    "get_settings",
    "reset_settings",
    "BootstrapError",
    "ConfigurationError",
]
