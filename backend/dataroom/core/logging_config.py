from __future__ import annotations

import logging

from dataroom.core.config import settings

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level: str | int | None = None) -> None:
    """Attach a stream handler to the ``dataroom`` logger at the configured level."""
    resolved = level if level is not None else settings.log_level
    if isinstance(resolved, str):
        resolved = logging.getLevelName(resolved.upper())
        if not isinstance(resolved, int):
            raise ValueError(f"Unknown log level: {level or settings.log_level}")

    logger = logging.getLogger("dataroom")
    logger.setLevel(resolved)
    if not any(getattr(handler, "_dataroom_handler", False) for handler in logger.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handler._dataroom_handler = True  # type: ignore[attr-defined]
        logger.addHandler(handler)
