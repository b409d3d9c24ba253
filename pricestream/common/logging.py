"""Structured logging setup for pricestream.

Every log line includes: timestamp, level, module tag, message, and structured data.

Usage:
    from pricestream.common.logging import get_logger
    logger = get_logger("INGEST")
    logger.info("Series loaded", extra={"data": {"source": "prices.csv", "records": 250}})
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import UTC, datetime

from pricestream.common.config import get_settings

# Module tags for structured logging
MODULE_TAGS = {
    "INGEST",
    "STREAM",
    "BACKTEST",
    "SYSTEM",
    "TEST",
}


class StructuredFormatter(logging.Formatter):
    """Formats log records as structured, human-readable lines.

    Output format:
        2025-02-15T10:30:00Z | INFO | INGEST | Series loaded | {"records": 250}
    """

    def format(self, record: logging.LogRecord) -> str:
        timestamp = datetime.now(UTC).strftime("%Y-%m-%dT%H:%M:%SZ")
        level = record.levelname
        module_tag = getattr(record, "module_tag", "SYSTEM")

        # Extract structured data from extra
        data = getattr(record, "data", None)
        if data is not None:
            try:
                data_str = json.dumps(data, default=str)
            except (TypeError, ValueError):
                data_str = str(data)
        else:
            data_str = ""

        parts = [timestamp, level, module_tag, record.getMessage()]
        if data_str:
            parts.append(data_str)

        return " | ".join(parts)


class ModuleTagLogger(logging.LoggerAdapter):
    """Logger adapter that injects module_tag and supports structured data.

    Usage:
        logger = get_logger("STREAM")
        logger.debug("Stream exhausted", extra={"data": {"windows": 12}})
    """

    def process(self, msg: str, kwargs: dict) -> tuple[str, dict]:
        # Inject module_tag into the record
        extra = kwargs.get("extra", {})
        extra["module_tag"] = self.extra.get("module_tag", "SYSTEM")
        kwargs["extra"] = extra
        return msg, kwargs


# Cache loggers to avoid duplicate handlers
_loggers: dict[str, ModuleTagLogger] = {}


def get_logger(module_tag: str) -> ModuleTagLogger:
    """Get a structured logger with the given module tag.

    Args:
        module_tag: One of the MODULE_TAGS (INGEST, STREAM, BACKTEST, etc.)

    Returns:
        A logger adapter that injects the module tag into every log line.
    """
    if module_tag in _loggers:
        return _loggers[module_tag]

    logger = logging.getLogger(f"pricestream.{module_tag.lower()}")

    # Only add handler if this logger doesn't have one yet
    if not logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(StructuredFormatter())
        logger.addHandler(handler)
        logger.setLevel(get_settings().log_level.upper())
        logger.propagate = False

    adapter = ModuleTagLogger(logger, {"module_tag": module_tag})
    _loggers[module_tag] = adapter
    return adapter
