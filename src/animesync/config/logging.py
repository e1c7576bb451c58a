"""Shared logging helpers."""

from __future__ import annotations

import logging
import os

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(*, level: int | str | None = None, force: bool = False) -> None:
    """Initialise the root logger once with sensible defaults.

    ``level`` falls back to the ``LOG_LEVEL`` environment variable and then to
    INFO. Pass ``force=True`` to reconfigure during tests or specialised entry
    points.
    """

    if level is None:
        level = os.getenv("LOG_LEVEL", "INFO").strip().upper() or "INFO"
    if isinstance(level, str):
        level = logging.getLevelNamesMapping().get(level, logging.INFO)

    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        datefmt="%H:%M:%S",
        force=force,
    )
