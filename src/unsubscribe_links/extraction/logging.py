"""
Structured logging for the unsubscribe extraction pipeline.

Records are emitted as JSON through the standard logging module under
the ``unsubscribe`` logger tree. Unsubscribe URLs routinely carry
per-recipient tokens, so query values of sensitive parameters and the
local part of email addresses are masked before anything is written.
"""

import logging
import json
import time
import re
from typing import Dict, Any, Optional
from contextlib import contextmanager
from datetime import datetime, timezone


class SensitiveDataFilter:
    """Mask recipient tokens and mailbox names in log data."""

    SENSITIVE_PARAMS = ('token', 'key', 'sig', 'signature', 'auth', 'hash')

    def __init__(self):
        params = '|'.join(self.SENSITIVE_PARAMS)
        self.param_pattern = re.compile(rf'([?&;](?:{params})[A-Za-z_]*=)([^&#\s"\']+)', re.IGNORECASE)
        self.email_pattern = re.compile(r'\b([A-Za-z0-9._%+-]+)@([A-Za-z0-9.-]+\.[A-Za-z]{2,})\b')

    def filter_message(self, message: str) -> str:
        """Filter sensitive data from a message string."""
        filtered = self.param_pattern.sub(r'\1***', message)
        return self.email_pattern.sub(r'***@\2', filtered)

    def filter_value(self, value: Any) -> Any:
        if isinstance(value, str):
            return self.filter_message(value)
        if isinstance(value, dict):
            return self.filter_dict(value)
        if isinstance(value, (list, tuple)):
            return [self.filter_value(item) for item in value]
        return value

    def filter_dict(self, data: Dict[str, Any]) -> Dict[str, Any]:
        """Filter sensitive data from a dictionary."""
        return {key: self.filter_value(value) for key, value in data.items()}


class ExtractionLogger:
    """Structured logger for one pipeline component with context tracking."""

    def __init__(self, component: str):
        self.component = component
        self.logger = logging.getLogger(f"unsubscribe.{component}")
        self.context: Dict[str, Any] = {}
        self.filter = SensitiveDataFilter()

    def add_context(self, key: str, value: Any) -> None:
        """Add context information to all subsequent log messages."""
        self.context[key] = value

    def _prepare_log_data(self, message: str, extra: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        log_data = {
            'timestamp': datetime.now(timezone.utc).isoformat(),
            'component': self.component,
            'message': self.filter.filter_message(message),
            'context': self.filter.filter_dict(self.context.copy())
        }

        if extra:
            log_data['extra'] = self.filter.filter_dict(extra)

        return log_data

    def _emit(self, level: int, message: str, extra: Optional[Dict[str, Any]] = None, **kwargs):
        # JSON is only built for enabled levels
        if not self.logger.isEnabledFor(level):
            return
        log_data = self._prepare_log_data(message, extra)
        self.logger.log(level, json.dumps(log_data, ensure_ascii=False, default=str), **kwargs)

    def debug(self, message: str, extra: Optional[Dict[str, Any]] = None):
        self._emit(logging.DEBUG, message, extra)

    def info(self, message: str, extra: Optional[Dict[str, Any]] = None):
        self._emit(logging.INFO, message, extra)

    def warning(self, message: str, extra: Optional[Dict[str, Any]] = None):
        self._emit(logging.WARNING, message, extra)

    def error(self, message: str, extra: Optional[Dict[str, Any]] = None):
        self._emit(logging.ERROR, message, extra)

    def log_exception(self, exception: BaseException, extra: Optional[Dict[str, Any]] = None,
                      level: int = logging.ERROR):
        """Log exception with its context and traceback."""
        details = {
            'type': type(exception).__name__,
            'message': str(exception)
        }
        context = getattr(exception, 'context', None)
        if context:
            details['context'] = context
        cause = getattr(exception, 'cause', None)
        if cause is not None:
            details['cause'] = f"{type(cause).__name__}: {cause}"

        merged = dict(extra or {})
        merged['exception'] = details
        self._emit(level, f"Exception occurred: {exception}", merged,
                   exc_info=(type(exception), exception, exception.__traceback__))

    @contextmanager
    def time_operation(self, operation_name: str, failure_level: int = logging.ERROR):
        """Context manager to time operations and log performance.

        Callers that log the exception themselves pass a lower
        failure_level so the failure is not reported twice.
        """
        start_time = time.perf_counter()
        self.debug(f"Starting {operation_name}", {"operation": operation_name})

        try:
            yield
        except Exception as e:
            self._emit(failure_level, f"Operation {operation_name} failed", {
                "operation": operation_name,
                "duration_seconds": round(time.perf_counter() - start_time, 3),
                "status": "failure",
                "error": str(e)
            })
            raise
        self.debug(f"Operation {operation_name} completed", {
            "operation": operation_name,
            "duration_seconds": round(time.perf_counter() - start_time, 3),
            "status": "success"
        })


def configure_unsubscribe_logging(
    level: str = "WARNING",
    format: str = "json",
    output: str = "console",
    filename: Optional[str] = None
):
    """Configure the ``unsubscribe`` logger tree."""

    log_level = getattr(logging, level.upper(), logging.WARNING)

    logger = logging.getLogger("unsubscribe")
    logger.setLevel(log_level)
    logger.handlers.clear()

    if format == "json":
        formatter = logging.Formatter('%(message)s')
    else:  # standard format
        formatter = logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
        )

    if output in ["console", "both"]:
        console_handler = logging.StreamHandler()
        console_handler.setFormatter(formatter)
        logger.addHandler(console_handler)

    if output in ["file", "both"] and filename:
        file_handler = logging.FileHandler(filename, encoding='utf-8')
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger
