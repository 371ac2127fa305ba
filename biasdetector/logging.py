"""
Logging Setup

Everything under the `biasdetector` logger namespace goes to one stream
handler. Production gets one JSON object per line; development can
switch to plain text with BIASDETECTOR_LOG_FORMAT=text.

Scores, service names, error details and request timings passed through
`extra=` become top-level keys of the JSON line:

    logger.warning("AI authorship detection failed", extra={"service": "ai_detector"})
"""

from __future__ import annotations

import json
import logging
import os
import sys
from datetime import datetime, timezone
from typing import TextIO

NAMESPACE = "biasdetector"

LOG_LEVEL = os.getenv("BIASDETECTOR_LOG_LEVEL", "INFO").upper()
LOG_FORMAT = os.getenv("BIASDETECTOR_LOG_FORMAT", "json")  # "json" | "text"

EXTRA_FIELDS = (
    # analysis
    "overall_bias_score", "overall_factual_score", "bias_count",
    "claims_count", "source_category", "ai_generated", "degraded",
    # enrichment
    "service", "provider", "error", "error_type",
    # requests
    "method", "path", "status_code", "duration_ms", "batch_size",
)

# Libraries that log every request at INFO
_QUIET_LOGGERS = ("uvicorn.access", "httpx", "httpcore")


class JSONFormatter(logging.Formatter):
    """One JSON object per record."""

    def format(self, record: logging.LogRecord) -> str:
        line = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        line.update(
            (name, getattr(record, name))
            for name in EXTRA_FIELDS
            if getattr(record, name, None) is not None
        )
        if record.exc_info and record.exc_info[0]:
            line["exception"] = self.formatException(record.exc_info)
        return json.dumps(line, default=str)


class TextFormatter(logging.Formatter):
    def __init__(self):
        super().__init__(
            fmt="%(asctime)s %(levelname)-7s %(name)s | %(message)s",
            datefmt="%H:%M:%S",
        )


_FORMATTERS = {"json": JSONFormatter, "text": TextFormatter}


def setup_logging(
    fmt: str = LOG_FORMAT, level: str = LOG_LEVEL, stream: TextIO = sys.stdout,
) -> logging.Logger:
    """
    (Re)configure the package logger with a single handler on `stream`.

    Unknown formats fall back to text, unknown levels to INFO. Safe to
    call more than once; earlier handlers are replaced.
    """
    package_logger = logging.getLogger(NAMESPACE)
    package_logger.setLevel(getattr(logging, level.upper(), logging.INFO))

    handler = logging.StreamHandler(stream)
    handler.setFormatter(_FORMATTERS.get(fmt, TextFormatter)())
    package_logger.handlers = [handler]

    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    return package_logger


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(f"{NAMESPACE}.{name}")
