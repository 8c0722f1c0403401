"""Logging setup for the proximity graph package.

Modules log through ``logging.getLogger(__name__)`` with structured
``extra`` fields. ``configure_logging`` attaches a single handler to the
package logger, either human-readable or JSON depending on
``ObservabilityConfig.structured``.
"""

from __future__ import annotations

import json
import logging
import sys
from typing import Any, Optional

from .config import ObservabilityConfig, get_config

PACKAGE_LOGGER = "proximity_graph"

# Attributes every LogRecord has; anything else came from ``extra``.
_RECORD_ATTRS = set(
    vars(logging.LogRecord("", logging.INFO, "", 0, "", None, None))
) | {"message", "asctime"}


class JsonFormatter(logging.Formatter):
    """One JSON object per record, with ``extra`` fields inlined."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "level": record.levelname,
            "msg": record.getMessage(),
            "logger": record.name,
        }
        for key, value in vars(record).items():
            if key not in _RECORD_ATTRS and not key.startswith("_"):
                payload[key] = value
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str)


def configure_logging(config: Optional[ObservabilityConfig] = None) -> logging.Logger:
    """Apply the observability settings to the package logger.

    Calling it again replaces the handler installed by a previous call.

    Args:
        config: Settings to apply; defaults to ``get_config().observability``.

    Returns:
        The configured package logger.
    """
    config = config or get_config().observability
    logger = logging.getLogger(PACKAGE_LOGGER)

    for handler in list(logger.handlers):
        if getattr(handler, "_proximity_graph", False):
            logger.removeHandler(handler)
            handler.close()

    handler = logging.StreamHandler(sys.stderr)
    handler._proximity_graph = True  # type: ignore[attr-defined]
    if config.structured:
        handler.setFormatter(JsonFormatter())
    else:
        handler.setFormatter(logging.Formatter(config.format))

    logger.addHandler(handler)
    logger.setLevel(config.level.upper())
    logger.debug(
        "Logging configured",
        extra={"log_level": config.level, "structured": config.structured},
    )
    return logger
