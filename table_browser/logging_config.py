from __future__ import annotations

import logging
import os
from typing import Optional

from pythonjsonlogger import jsonlogger

PLAIN_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
JSON_FIELDS = "%(asctime)s %(levelname)s %(name)s %(message)s"

# Third-party loggers that are too chatty at INFO
_NOISY_LOGGERS = ("werkzeug", "kaleido", "choreographer")


def _resolve_level(level: Optional[int]) -> int:
    if level is not None:
        return level
    name = os.getenv("TABLE_BROWSER_LOG_LEVEL", "INFO").upper()
    resolved = logging.getLevelName(name)
    return resolved if isinstance(resolved, int) else logging.INFO


def configure_logging(
        level: Optional[int] = None,
        force_format: Optional[str] = None,
) -> None:
    """
    Install a single stream handler on the root logger.

    The format is "json" (python-json-logger, fields from `extra=` end up as
    JSON keys) or "plain" for local development. `force_format` wins over
    TABLE_BROWSER_LOG_FORMAT; the level falls back to TABLE_BROWSER_LOG_LEVEL.
    """
    mode = (force_format or os.getenv("TABLE_BROWSER_LOG_FORMAT", "json")).lower()

    if mode == "plain":
        formatter: logging.Formatter = logging.Formatter(PLAIN_FORMAT)
    else:
        formatter = jsonlogger.JsonFormatter(JSON_FIELDS)

    handler = logging.StreamHandler()
    handler.setFormatter(formatter)

    root = logging.getLogger()
    root.setLevel(_resolve_level(level))
    root.handlers.clear()
    root.addHandler(handler)

    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
