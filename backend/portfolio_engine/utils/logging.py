# backend/portfolio_engine/utils/logging.py
"""
Logging configuration for the statistics engine.

The calculators only create module loggers (logging.getLogger(__name__))
and never configure handlers. Host applications, scripts and tests call
setup_logging() once to get a consistent output format:

- Environment-based log level (settings.log_level)
- Human-readable text format, or JSON lines for log aggregation

Usage:
    from portfolio_engine.utils import setup_logging

    setup_logging()                     # from settings
    setup_logging(level="DEBUG")        # see excluded outliers, short-circuits
    setup_logging(log_format="json")

Log Levels:
    DEBUG   - Per-investment detail (outliers dropped, zero-value records)
    INFO    - Portfolio-level summaries
    WARNING - Suspicious input that was still processed
"""

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any

from portfolio_engine.config import settings

# =============================================================================
# CONSTANTS
# =============================================================================

# timestamp | level | logger_name | message
DEFAULT_TEXT_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
DEFAULT_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "WARN": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}

# Attributes every LogRecord has; anything else came in through `extra=`
_RESERVED_ATTRS = frozenset(vars(logging.LogRecord("", 0, "", 0, "", None, None))) | {
    "message",
    "asctime",
    "taskName",
}


# =============================================================================
# JSON FORMATTER
# =============================================================================

class JsonFormatter(logging.Formatter):
    """
    One JSON object per log line.

    Output format:
    {
        "timestamp": "2024-01-15T10:30:00.123456+00:00",
        "level": "INFO",
        "logger": "portfolio_engine.services.investments.statistics",
        "message": "Portfolio statistics computed for 3 investments",
        "extra": {"investment_count": 3}
    }
    """

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)

        extra = {
            key: value
            for key, value in record.__dict__.items()
            if key not in _RESERVED_ATTRS
        }
        if extra:
            # Decimals and dates are common in extras here; str() them
            entry["extra"] = json.loads(json.dumps(extra, default=str))

        return json.dumps(entry)


# =============================================================================
# SETUP FUNCTION
# =============================================================================

def setup_logging(
        level: str | None = None,
        log_format: str | None = None,
) -> None:
    """
    Configure root logging for the engine.

    Args:
        level: Log level name. Defaults to settings.log_level.
        log_format: "text" or "json". Defaults to settings.log_format.

    Raises:
        ValueError: If the level name is unknown
    """
    level_name = level or settings.log_level
    log_level = get_log_level(level_name)
    format_type = (log_format or settings.log_format).lower()

    if format_type == "json":
        formatter: logging.Formatter = JsonFormatter()
    else:
        formatter = logging.Formatter(fmt=DEFAULT_TEXT_FORMAT, datefmt=DEFAULT_DATE_FORMAT)

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    root_logger.handlers.clear()
    root_logger.addHandler(handler)

    logging.getLogger(__name__).info(
        f"Logging configured for {settings.app_name}: level={level_name}, format={format_type}",
        extra={"config": {"level": level_name, "format": format_type}},
    )


def get_log_level(level_str: str) -> int:
    """
    Convert a level name (case-insensitive) to a logging constant.

    Raises:
        ValueError: If level_str is not a valid log level
    """
    key = level_str.upper().strip()

    if key not in LEVELS:
        valid_levels = ", ".join(LEVELS)
        raise ValueError(
            f"Invalid log level: '{level_str}'. Valid levels are: {valid_levels}"
        )

    return LEVELS[key]


def get_logger(name: str) -> logging.Logger:
    """Return the standard logger for `name` (typically __name__)."""
    return logging.getLogger(name)
