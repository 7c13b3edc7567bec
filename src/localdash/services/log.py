"""Logging setup for command-line entry points."""

from __future__ import annotations

import logging

DEFAULT_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(level: str = "INFO", fmt: str = DEFAULT_FORMAT) -> None:
    """Configure the root logger once.

    Raises:
        ValueError: ``level`` is not a logging level name.
    """
    numeric = getattr(logging, level.upper(), None)
    if not isinstance(numeric, int):
        raise ValueError(f"Invalid log level: {level}")

    logging.basicConfig(level=numeric, format=fmt)
    # requests/urllib3 are chatty at DEBUG
    logging.getLogger("urllib3").setLevel(max(numeric, logging.INFO))
