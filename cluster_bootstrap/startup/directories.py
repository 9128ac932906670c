"""
Working directory provisioning
"""

import logging
from pathlib import Path
from typing import Iterable

from cluster_bootstrap.core.paths import REQUIRED_DIRECTORIES
from cluster_bootstrap.startup.exceptions import DirectoryProvisionError

logger = logging.getLogger(__name__)


def provision_directories(
    home: Path,
    names: Iterable[str] = REQUIRED_DIRECTORIES,
    server_name: str = "Server",
) -> list[Path]:
    """
    Ensure the working directories exist under the home path

    Creates ``<home>/<name>`` for each name, including missing parents.
    Existing directories are left alone, nothing is ever deleted.

    Args:
        home: Server home directory
        names: Directory names (defaults to logs, conf, data)
        server_name: Name used in log lines

    Returns:
        List of provisioned directory paths

    Raises:
        DirectoryProvisionError: If a directory cannot be created
    """
    provisioned = []
    for name in names:
        path = Path(home) / name
        logger.info(f"{server_name} {name} files: {path}")
        try:
            path.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise DirectoryProvisionError(path, str(e)) from e
        provisioned.append(path)
    return provisioned
