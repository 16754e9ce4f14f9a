from __future__ import annotations

import logging

_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


def configure_logging(level: str | int = "INFO") -> None:
    """Set up root logging for the CLI and the API server."""
    if isinstance(level, str):
        level = level.upper()
    logging.basicConfig(level=level, format=_FORMAT, datefmt="%H:%M:%S")
