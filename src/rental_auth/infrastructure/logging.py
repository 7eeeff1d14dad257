"""Shared logging configuration for processes hosting the auth core."""

from __future__ import annotations

import logging

_LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"
_NOISY_LOGGERS = ("sqlalchemy.engine", "aiosqlite")


def configure_logging(*, level: str) -> None:
    """Configure root logging with the shared format; unknown levels mean INFO."""

    normalized_level = level.strip().upper() if level.strip() else "INFO"
    resolved_level = logging.getLevelName(normalized_level)
    if not isinstance(resolved_level, int):
        resolved_level = logging.INFO

    logging.basicConfig(level=resolved_level, format=_LOG_FORMAT)

    # SQL echo would print bound parameters, digests included.
    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(resolved_level, logging.WARNING))
