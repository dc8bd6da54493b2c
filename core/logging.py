"""
core/logging.py - Structured JSON logging.

All logs include:
- timestamp (ISO 8601)
- level
- logger
- message
- context (rpc_url, block_number, address, latency_ms, etc.)

Contextual fields are passed only via extra={"context": {...}}.
"""

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any

from core.exceptions import TxWatchError

# Global context that gets added to all log entries
_global_context: dict[str, Any] = {}

# Context fields shown inline by the console formatter
CONSOLE_CONTEXT_FIELDS = 3


def record_context(record: logging.LogRecord) -> dict[str, Any]:
    """
    Context for one record: global fields, then the record's own.

    A TxWatchError attached via exc_info contributes its error_code.
    """
    context = dict(_global_context)
    context.update(getattr(record, "context", None) or {})

    if record.exc_info and isinstance(record.exc_info[1], TxWatchError):
        context.setdefault("error_code", record.exc_info[1].code.value)

    return context


class JSONFormatter(logging.Formatter):
    """
    One JSON object per line:

    {"timestamp": "...", "level": "WARNING", "logger": "txwatch.service",
     "message": "Error getting transactions",
     "context": {"address": "0x...", "error_code": "INFRA_RPC_TIMEOUT"}}
    """

    def format(self, record: logging.LogRecord) -> str:
        log_entry = {
            "timestamp": datetime.now(timezone.utc).isoformat(timespec="milliseconds"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        context = record_context(record)
        if record.exc_info:
            context["exception"] = self.formatException(record.exc_info)
        if context:
            log_entry["context"] = context

        return json.dumps(log_entry, default=str)


class ConsoleFormatter(logging.Formatter):
    """Single-line format for local runs (--console-logs)."""

    def format(self, record: logging.LogRecord) -> str:
        line = " | ".join((
            self.formatTime(record, "%Y-%m-%d %H:%M:%S"),
            f"{record.levelname:<8}",
            record.name,
            record.getMessage(),
        ))

        context = record_context(record)
        if context:
            shown = list(context.items())[:CONSOLE_CONTEXT_FIELDS]
            line += " | " + ", ".join(f"{k}={v}" for k, v in shown)
            hidden = len(context) - len(shown)
            if hidden:
                line += f", ... (+{hidden} more)"

        if record.exc_info:
            line += "\n" + self.formatException(record.exc_info)
        return line


class ContextAdapter(logging.LoggerAdapter):
    """
    Attaches the logger's default context to every call.

    Call-site fields from extra={"context": {...}} override the defaults.
    """

    def process(
        self, msg: str, kwargs: dict[str, Any]
    ) -> tuple[str, dict[str, Any]]:
        call_context = kwargs.pop("extra", {}).get("context", {})
        kwargs["extra"] = {"context": {**self.extra, **call_context}}
        return msg, kwargs


def set_global_context(**kwargs: Any) -> None:
    """
    Set global context that gets added to all log entries.

    Example:
        set_global_context(rpc_url="https://...", version="0.1.0")
    """
    _global_context.update(kwargs)


def clear_global_context() -> None:
    """Clear global logging context."""
    _global_context.clear()


def get_logger(name: str, **context: Any) -> ContextAdapter:
    """
    Get a logger with optional default context.

    Args:
        name: Logger name (e.g., "txwatch.rpc")
        **context: Default context for all log entries from this logger

    Returns:
        ContextAdapter with structured logging

    Example:
        logger = get_logger("txwatch.rpc", rpc_url=url)
        logger.info("Block fetched", extra={"context": {"latency_ms": 50}})
    """
    logger = logging.getLogger(name)
    return ContextAdapter(logger, context)


def setup_logging(
    level: str = "INFO",
    json_output: bool = True,
    log_file: str | None = None,
) -> None:
    """
    Setup logging configuration.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR)
        json_output: Use JSON formatting (recommended for production)
        log_file: Optional file path for logging
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, level.upper()))

    # Clear existing handlers
    root_logger.handlers.clear()

    formatter = JSONFormatter() if json_output else ConsoleFormatter()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setFormatter(JSONFormatter())
        root_logger.addHandler(file_handler)

    # Suppress noisy loggers
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
