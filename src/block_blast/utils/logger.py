from __future__ import annotations

import logging
from typing import Optional


PACKAGE_LOGGER = "block_blast"
_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

logging.getLogger(PACKAGE_LOGGER).addHandler(logging.NullHandler())


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return a logger living under the package namespace."""
    if not name or name == PACKAGE_LOGGER:
        return logging.getLogger(PACKAGE_LOGGER)
    if not name.startswith(PACKAGE_LOGGER + "."):
        name = f"{PACKAGE_LOGGER}.{name}"
    return logging.getLogger(name)


def set_debugging(enabled: bool) -> None:
    """Force debug output for the package, or hand the level back to the host."""
    get_logger().setLevel(logging.DEBUG if enabled else logging.NOTSET)


def configure_logging(level: int = logging.INFO) -> None:
    """Console output for scripts; library code never calls this."""
    logging.basicConfig(level=level, format=_FORMAT)
