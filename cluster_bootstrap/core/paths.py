"""
Dynamic path resolution for cluster-bootstrap.

All package-relative paths are calculated from the installed package
location so the server behaves the same regardless of the current
working directory.
"""

from pathlib import Path

REQUIRED_DIRECTORIES = ("logs", "conf", "data")

CLUSTER_CONF_FILE_NAME = "cluster.conf"


def get_package_root() -> Path:
    """
    Get the directory containing the cluster_bootstrap/ package.

    Returns:
        Path: Absolute path to the project root
    """
    # This file is at: cluster_bootstrap/core/paths.py
    return Path(__file__).parent.parent.parent.resolve()


def get_default_home() -> Path:
    """
    Get the default home directory used when CLUSTER_HOME is not set.

    Returns:
        Path: ~/cluster-bootstrap
    """
    return Path.home() / "cluster-bootstrap"


def get_cluster_conf_path(home: Path) -> Path:
    """
    Get the cluster membership file for a home directory.

    Args:
        home: Server home directory

    Returns:
        Path: <home>/conf/cluster.conf
    """
    return Path(home) / "conf" / CLUSTER_CONF_FILE_NAME


def get_log_file_path(home: Path, file_name: str) -> Path:
    """Get the path of the main log file under <home>/logs"""
    return Path(home) / "logs" / file_name
