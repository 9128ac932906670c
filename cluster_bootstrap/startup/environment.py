"""
Environment preparation

Derives the deployment mode, function mode and local address from the
settings and publishes them as process-wide properties that later stages
(and the rest of the server) can read.
"""

import logging
import socket
from functools import cached_property

from cluster_bootstrap.core.config import Settings
from cluster_bootstrap.startup.models import BootstrapConfig, DeploymentMode, FunctionMode

logger = logging.getLogger(__name__)

MODE_PROPERTY_KEY = "cluster.mode"
FUNCTION_MODE_PROPERTY_KEY = "cluster.function.mode"
LOCAL_IP_PROPERTY_KEY = "cluster.local.ip"

_LOOPBACK = "127.0.0.1"
# Any routable address works: connecting a UDP socket sends no packets.
_PROBE_ADDRESS = ("10.255.255.255", 1)


def resolve_local_address(settings: Settings) -> str:
    """
    Resolve the address this server advertises to its peers

    Priority order:
    1. CLUSTER_LOCAL_IP (explicit override)
    2. Hostname, when CLUSTER_PREFER_HOSTNAME is set
    3. Address of the interface used for outbound traffic
    4. Address the hostname resolves to
    5. 127.0.0.1

    Args:
        settings: Bootstrap settings

    Returns:
        Address string
    """
    if settings.local_ip:
        return settings.local_ip

    if settings.prefer_hostname:
        return socket.gethostname()

    try:
        with socket.socket(socket.AF_INET, socket.SOCK_DGRAM) as probe:
            probe.connect(_PROBE_ADDRESS)
            address = probe.getsockname()[0]
        if address and not address.startswith("0."):
            return address
    except OSError as e:
        logger.debug(f"Outbound interface probe failed: {e}")

    try:
        return socket.gethostbyname(socket.gethostname())
    except OSError as e:
        logger.warning(f"Cannot resolve local hostname, falling back to {_LOOPBACK}: {e}")
        return _LOOPBACK


class Environment:
    """
    Configuration source handed to the lifecycle callbacks

    Wraps the typed settings together with a mutable property source where
    derived values are published.

    Example:
        env = Environment(get_settings())
        config = configure_environment(env)
        env.get_property("cluster.mode")  # "cluster"
    """

    def __init__(self, settings: Settings, properties: dict[str, str] | None = None):
        self.settings = settings
        self.properties: dict[str, str] = dict(properties or {})

    @cached_property
    def local_address(self) -> str:
        """Local address, resolved on first access and fixed afterwards"""
        return resolve_local_address(self.settings)

    def get_property(self, key: str, default: str | None = None) -> str | None:
        return self.properties.get(key, default)

    def set_property(self, key: str, value: str) -> None:
        self.properties[key] = value


def _resolve_function_mode(raw: str | None) -> tuple[FunctionMode, str | None]:
    """
    Map the raw function-mode value

    Returns:
        The effective mode and the value to publish (None means publish nothing)
    """
    if raw is None or not raw.strip():
        return FunctionMode.ALL, FunctionMode.ALL.value
    if raw == FunctionMode.CONFIG_ONLY.value:
        return FunctionMode.CONFIG_ONLY, FunctionMode.CONFIG_ONLY.value
    if raw == FunctionMode.NAMING_ONLY.value:
        return FunctionMode.NAMING_ONLY, FunctionMode.NAMING_ONLY.value
    # Unrecognized values are left unpublished
    return FunctionMode.ALL, None


def configure_environment(environment: Environment) -> BootstrapConfig:
    """
    Resolve and publish deployment configuration

    Publishes:
    - cluster.mode: "stand alone" or "cluster"
    - cluster.function.mode: "All", "config" or "naming" (untouched when
      the configured value is not recognized)
    - cluster.local.ip: resolved local address

    Args:
        environment: Configuration source to read from and publish into

    Returns:
        BootstrapConfig for the later lifecycle stages
    """
    settings = environment.settings

    mode = DeploymentMode.STANDALONE if settings.standalone else DeploymentMode.CLUSTER
    environment.set_property(MODE_PROPERTY_KEY, mode.value)

    function_mode, published = _resolve_function_mode(settings.function_mode)
    if published is not None:
        environment.set_property(FUNCTION_MODE_PROPERTY_KEY, published)
    else:
        logger.debug(f"Ignoring unrecognized function mode: {settings.function_mode!r}")

    local_address = environment.local_address
    environment.set_property(LOCAL_IP_PROPERTY_KEY, local_address)

    return BootstrapConfig(
        deployment_mode=mode,
        function_mode=function_mode,
        local_address=local_address,
        home=settings.home,
        server_name=settings.server_name,
        heartbeat_interval=settings.heartbeat_interval,
        log_file_name=settings.log_file_name,
    )
