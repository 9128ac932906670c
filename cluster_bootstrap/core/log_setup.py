"""
Logging setup

Console logging for every entry point, plus the main log file under
<home>/logs that failed startups point to.
"""

import logging
import sys

from .config import Settings
from .paths import get_log_file_path

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def configure_logging(settings: Settings, log_to_file: bool = True) -> None:
    """
    Configure root logging

    Args:
        settings: Settings providing level, home and log file name
        log_to_file: Also write to <home>/logs/<log_file_name>
    """
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]

    if log_to_file:
        log_file = get_log_file_path(settings.home, settings.log_file_name)
        try:
            log_file.parent.mkdir(parents=True, exist_ok=True)
            handlers.append(logging.FileHandler(log_file, encoding="utf-8"))
        except OSError as e:
            print(f"Cannot open log file {log_file}: {e}", file=sys.stderr)

    logging.basicConfig(
        level=settings.log_level.upper(),
        format=LOG_FORMAT,
        handlers=handlers,
        force=True,
    )
