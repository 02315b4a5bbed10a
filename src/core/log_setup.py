"""Logging setup for a host application. Library modules only ever call logging.getLogger(__name__)."""

import logging

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level: str | int = logging.INFO) -> logging.Logger:
    """Attach a single stream handler to the `src` logger hierarchy. Calling it again only changes the level."""
    package_logger = logging.getLogger("src")
    package_logger.setLevel(level)
    if not package_logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        package_logger.addHandler(handler)
    return package_logger
