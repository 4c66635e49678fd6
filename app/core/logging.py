"""Structured logging for the ValidateAI service.

Every line is ``key=value`` pairs: timestamp, level, logger, message, then
the request_id (when set) and any context fields passed to
``log_with_context``. Values containing whitespace, quotes or ``=`` are
JSON-quoted so a line always splits back into the same pairs.
"""

import json
import logging
import sys
from typing import Any

CONTEXT_ATTR = "context"


def format_value(value: Any) -> str:
    text = str(value)
    if not text or any(ch.isspace() or ch in '="' for ch in text):
        return json.dumps(text, ensure_ascii=False)
    return text


class StructuredFormatter(logging.Formatter):
    """Formats records as key=value pairs on a single line."""

    def format(self, record: logging.LogRecord) -> str:
        fields: dict[str, Any] = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        request_id = getattr(record, "request_id", None)
        if request_id:
            fields["request_id"] = request_id

        fields.update(getattr(record, CONTEXT_ATTR, None) or {})

        line = " ".join(f"{key}={format_value(value)}" for key, value in fields.items())
        if record.exc_info:
            line = f"{line}\n{self.formatException(record.exc_info)}"
        return line


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger writing structured lines to stdout.

    DEBUG in the dev environment, INFO elsewhere or when settings cannot load.
    """
    logger = logging.getLogger(name)

    if not logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(StructuredFormatter())
        logger.addHandler(handler)

        try:
            from app.core.config import get_settings

            level = logging.DEBUG if get_settings().APP_ENV == "dev" else logging.INFO
        except Exception:
            # Settings unavailable (e.g. missing env during import)
            level = logging.INFO
        logger.setLevel(level)

    return logger


def log_with_context(
    logger: logging.Logger,
    level: int,
    msg: str,
    request_id: str | None = None,
    **context: Any,
) -> None:
    """
    Log with a correlation ID and extra context fields.

    Args:
        logger: Logger instance
        level: Log level (logging.INFO, etc.)
        msg: Log message
        request_id: Correlation ID for the scoring request, if any
        **context: Fields rendered as key=value; None values are omitted
    """
    fields = {key: value for key, value in context.items() if value is not None}
    logger.log(level, msg, extra={"request_id": request_id, CONTEXT_ATTR: fields})
