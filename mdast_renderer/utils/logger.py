"""Central logging configuration for the library."""
from __future__ import annotations

import logging
from typing import Optional

PACKAGE_LOGGER = "mdast_renderer"
_DEFAULT_LEVEL = logging.INFO


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return a logger under the package hierarchy, configuring output on first use."""
    logger = logging.getLogger(name or PACKAGE_LOGGER)
    if not logging.getLogger().handlers:
        logging.basicConfig(level=_DEFAULT_LEVEL, format="%(asctime)s [%(levelname)s] %(name)s: %(message)s")
    return logger


def set_level(level: int) -> None:
    """Adjust the package level, e.g. when the CLI runs with ``--debug``.

    Only ``mdast_renderer.*`` loggers are affected; other libraries keep their levels.
    """
    logging.getLogger(PACKAGE_LOGGER).setLevel(level)
