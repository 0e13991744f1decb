"""
Structured Logging Utilities

Provides utilities for adding structured context to log messages and the
logging setup shared by every entry point.
"""

import inspect
import logging
import sys
from contextvars import ContextVar
from functools import wraps
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any, Dict, Optional

from constants import LoggingDefaults
from exceptions import ValidationError


# Context variable for request-scoped logging context
_logging_context: ContextVar[Dict[str, Any]] = ContextVar('logging_context', default={})

_KEY_FIELDS = ("owner_id", "vehicle_id")

# Handlers installed by configure_logging, replaced on reconfiguration
_installed_handlers: list = []


class StructuredLogger:
    """
    Wrapper around standard logger that adds structured context.

    Usage:
        logger = StructuredLogger(__name__)
        logger.info("Ownership added", extra={
            "owner_id": 3,
            "vehicle_id": 7,
            "operation": "add",
        })
    """

    def __init__(self, name: str):
        self.logger = logging.getLogger(name)

    def _add_context(self, extra: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """Merge the ContextVar context with the given extra dict."""
        context = _logging_context.get().copy()
        if extra:
            context.update(extra)
        return context

    def debug(self, message: str, extra: Optional[Dict[str, Any]] = None):
        self.logger.debug(message, extra=self._add_context(extra))

    def info(self, message: str, extra: Optional[Dict[str, Any]] = None):
        self.logger.info(message, extra=self._add_context(extra))

    def warning(self, message: str, extra: Optional[Dict[str, Any]] = None):
        self.logger.warning(message, extra=self._add_context(extra))

    def error(self, message: str, extra: Optional[Dict[str, Any]] = None, exc_info: bool = False):
        self.logger.error(message, extra=self._add_context(extra), exc_info=exc_info)


def set_logging_context(**kwargs):
    """
    Set logging context for the current request/operation.

    Example:
        set_logging_context(request_id="abc-123", operation="reassign")
    """
    context = _logging_context.get().copy()
    context.update(kwargs)
    _logging_context.set(context)


def clear_logging_context():
    """Clear the logging context."""
    _logging_context.set({})


def _extract_key(func, args, kwargs) -> Dict[str, Any]:
    """Pull owner/vehicle identifiers out of the call arguments."""
    try:
        bound = inspect.signature(func).bind_partial(*args, **kwargs)
    except TypeError:
        return {}

    context = {}
    for field in _KEY_FIELDS:
        if field in bound.arguments:
            context[field] = bound.arguments[field]

    record = bound.arguments.get("record")
    if record is not None:
        for field in _KEY_FIELDS:
            context.setdefault(field, getattr(record, field, None))
    return context


def log_operation(operation_name: str):
    """
    Decorator to log operation start/end with structured context.

    Rejected input is logged as a warning without traceback, any other
    failure as an error with traceback. Exceptions are always re-raised.

    Args:
        operation_name: Name of the operation

    Example:
        @log_operation("delete_ownership")
        def delete(self, owner_id: int, vehicle_id: int) -> bool:
            ...
    """
    def decorator(func):
        @wraps(func)
        def wrapper(*args, **kwargs):
            logger = StructuredLogger(func.__module__)

            context = {"operation": operation_name}
            context.update(_extract_key(func, args, kwargs))

            logger.debug(f"Starting {operation_name}", extra=context)

            try:
                result = func(*args, **kwargs)
            except ValidationError as e:
                context["error"] = e.message
                logger.warning(f"Rejected {operation_name}: {e.message}", extra=context)
                raise
            except Exception as e:
                context["error"] = str(e)
                context["error_type"] = type(e).__name__
                logger.error(f"Failed {operation_name}", extra=context, exc_info=True)
                raise

            logger.debug(f"Completed {operation_name}", extra=context)
            return result

        return wrapper

    return decorator


def configure_logging(log_dir, level: str = "INFO") -> logging.Logger:
    """
    Configure the root logger with a rotating file handler and a console handler.

    Args:
        log_dir: Directory for the rotating log file (created if missing)
        level: Root log level name

    Returns:
        The configured root logger
    """
    log_dir = Path(log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)

    log_formatter = logging.Formatter(LoggingDefaults.FORMAT)

    # File handler with rotation (10MB per file, keep 5 backups)
    file_handler = RotatingFileHandler(
        log_dir / LoggingDefaults.FILE_NAME,
        maxBytes=LoggingDefaults.MAX_BYTES,
        backupCount=LoggingDefaults.BACKUP_COUNT,
        encoding='utf-8'
    )
    file_handler.setFormatter(log_formatter)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(log_formatter)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    while _installed_handlers:
        handler = _installed_handlers.pop()
        root_logger.removeHandler(handler)
        handler.close()
    for handler in (file_handler, console_handler):
        root_logger.addHandler(handler)
        _installed_handlers.append(handler)

    return root_logger
