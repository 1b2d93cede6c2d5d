"""
Structured Logging Configuration: JSON formatting for production, colored for development.

Usage:
    from moniewave.utils.structured_logging import configure_logging
    configure_logging(settings)  # Call once at startup
"""
import logging
import re
import sys
import json
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, Optional

from moniewave.utils.config import BaseConfig, get_settings

# Fields a ContextLogger may bind that the JSON formatter copies through
CONTEXT_FIELDS = ("tool", "request_id", "duration_ms", "error_code", "status_code")

PAYSTACK_KEY_PATTERN = re.compile(r"\b(sk|pk)_(live|test)_[A-Za-z0-9]+")
REDACTED = "[REDACTED]"


def redact(text: str, secrets: Iterable[str] = ()) -> str:
    """Mask Paystack keys and any explicitly supplied secrets in ``text``."""
    for secret in secrets:
        if secret:
            text = text.replace(secret, REDACTED)
    return PAYSTACK_KEY_PATTERN.sub(REDACTED, text)


class SecretRedactingFilter(logging.Filter):
    """Rewrites records so the Paystack secret never reaches a handler.

    Tracebacks are rendered and redacted here, so formatters only ever see
    the cleaned ``exc_text``.
    """

    _traceback_formatter = logging.Formatter()

    def __init__(self, secrets: Iterable[str] = ()):
        super().__init__()
        self.secrets = [s for s in secrets if s]

    def filter(self, record: logging.LogRecord) -> bool:
        message = record.getMessage()
        cleaned = redact(message, self.secrets)
        if cleaned != message:
            record.msg = cleaned
            record.args = None

        if record.exc_info:
            record.exc_text = redact(self._traceback_formatter.formatException(record.exc_info), self.secrets)
            record.exc_info = None
        elif record.exc_text:
            record.exc_text = redact(record.exc_text, self.secrets)
        return True


class JSONFormatter(logging.Formatter):
    """JSON log formatter for production - machine-parseable logs."""

    def format(self, record: logging.LogRecord) -> str:
        log_entry: Dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        if record.exc_info:
            log_entry["exception"] = self.formatException(record.exc_info)
        elif record.exc_text:
            log_entry["exception"] = record.exc_text

        for field in CONTEXT_FIELDS:
            if hasattr(record, field):
                log_entry[field] = getattr(record, field)

        return json.dumps(log_entry, default=str)


class ColoredFormatter(logging.Formatter):
    """Colored log formatter for development - human-readable logs."""

    COLORS = {
        "DEBUG": "\033[36m",     # Cyan
        "INFO": "\033[32m",      # Green
        "WARNING": "\033[33m",   # Yellow
        "ERROR": "\033[31m",     # Red
        "CRITICAL": "\033[35m",  # Magenta
    }
    RESET = "\033[0m"

    def format(self, record: logging.LogRecord) -> str:
        color = self.COLORS.get(record.levelname, "")
        timestamp = datetime.now().strftime("%H:%M:%S")

        # Truncate long messages
        msg = record.getMessage()
        if len(msg) > 500:
            msg = msg[:497] + "..."

        context = " ".join(
            f"{field}={getattr(record, field)}" for field in CONTEXT_FIELDS if hasattr(record, field)
        )
        if context:
            msg = f"{msg} [{context}]"

        line = f"{color}[{timestamp}] {record.levelname:8} {record.name:30} | {msg}{self.RESET}"
        if record.exc_info:
            line += "\n" + self.formatException(record.exc_info)
        elif record.exc_text:
            line += "\n" + record.exc_text
        return line


def configure_logging(settings: Optional[BaseConfig] = None, stream=None):
    """Configure structured logging based on environment."""
    settings = settings or get_settings()

    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO))

    # Remove existing handlers
    root_logger.handlers = []

    # stdio MCP servers own stdout, so logs always go to stderr unless told otherwise
    console_handler = logging.StreamHandler(stream or sys.stderr)

    if settings.ENVIRONMENT == "production":
        console_handler.setFormatter(JSONFormatter())
    else:
        console_handler.setFormatter(ColoredFormatter())

    secrets = []
    if settings.PAYSTACK_SECRET_KEY is not None:
        # Same normalization as BaseConfig.paystack_secret()
        secrets.append(settings.PAYSTACK_SECRET_KEY.get_secret_value().strip())
    console_handler.addFilter(SecretRedactingFilter(secrets))

    root_logger.addHandler(console_handler)

    # Reduce noise from noisy libraries
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)

    root_logger.info(
        f"Logging configured: env={settings.ENVIRONMENT}, level={settings.LOG_LEVEL}"
    )
    return console_handler


class ContextLogger:
    """Logger that automatically includes context (tool, request_id)."""

    def __init__(self, name: str):
        self._logger = logging.getLogger(name)
        self._context: Dict[str, Any] = {}

    def bind(self, **context) -> "ContextLogger":
        """Bind context to logger."""
        new_logger = ContextLogger(self._logger.name)
        new_logger._context = {**self._context, **context}
        return new_logger

    def _log(self, level: int, msg: str, *args, **kwargs):
        extra = kwargs.pop("extra", {})
        extra.update(self._context)
        self._logger.log(level, msg, *args, extra=extra, **kwargs)

    def debug(self, msg: str, *args, **kwargs):
        self._log(logging.DEBUG, msg, *args, **kwargs)

    def info(self, msg: str, *args, **kwargs):
        self._log(logging.INFO, msg, *args, **kwargs)

    def warning(self, msg: str, *args, **kwargs):
        self._log(logging.WARNING, msg, *args, **kwargs)

    def error(self, msg: str, *args, **kwargs):
        self._log(logging.ERROR, msg, *args, **kwargs)

    def exception(self, msg: str, *args, **kwargs):
        kwargs.setdefault("exc_info", True)
        self._log(logging.ERROR, msg, *args, **kwargs)


def get_logger(name: str) -> ContextLogger:
    """Get a context-aware logger."""
    return ContextLogger(name)
