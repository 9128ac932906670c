"""
Cluster membership file reader
"""

import logging
from pathlib import Path

from cluster_bootstrap.startup.exceptions import ClusterConfigError

logger = logging.getLogger(__name__)


def read_cluster_conf(path: Path) -> list[str]:
    """
    Read the cluster member addresses

    One address per line, returned in file order. Lines are not stripped,
    filtered or deduplicated.

    Args:
        path: Path to the cluster membership file

    Returns:
        List of member lines

    Raises:
        ClusterConfigError: If the file cannot be opened or read
    """
    path = Path(path)
    try:
        content = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise ClusterConfigError(path, str(e)) from e

    members = content.splitlines()
    logger.debug(f"Read {len(members)} cluster members from {path}")
    return members
