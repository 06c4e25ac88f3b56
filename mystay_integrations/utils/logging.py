"""
Secure Logging Utilities for Integration Connectors
Provides structured logging with automatic PII redaction and correlation IDs
"""

import json
import logging
import socket
import time
import uuid
from contextvars import ContextVar
from datetime import datetime, timezone
from functools import wraps
from typing import Any, Dict, Optional
from urllib.parse import parse_qs, urlencode, urlparse, urlunparse

from .pii_redactor import PIIRedactorFilter, get_default_redactor

# Context variable for correlation ID
correlation_id: ContextVar[Optional[str]] = ContextVar("correlation_id", default=None)

_RESERVED_RECORD_FIELDS = {
    "name", "msg", "args", "created", "msecs", "filename", "funcName",
    "levelname", "levelno", "lineno", "module", "exc_info", "exc_text",
    "stack_info", "pathname", "process", "processName", "relativeCreated",
    "thread", "threadName", "taskName", "getMessage",
}


class StructuredFormatter(logging.Formatter):
    """
    Structured JSON formatter for connector logs

    Outputs one JSON object per line for log shipping
    """

    def __init__(self, service_name: str = "mystay-integrations"):
        super().__init__()
        self.service_name = service_name
        self.hostname = self._get_hostname()

    def format(self, record: logging.LogRecord) -> str:
        log_obj = {
            "@timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "service": self.service_name,
            "hostname": self.hostname,
            "correlation_id": correlation_id.get(),
        }

        if record.exc_info:
            log_obj["exception"] = self.formatException(record.exc_info)

        for key, value in record.__dict__.items():
            if key not in _RESERVED_RECORD_FIELDS:
                log_obj[key] = value

        return json.dumps(log_obj, default=str)

    @staticmethod
    def _get_hostname() -> str:
        try:
            return socket.gethostname()
        except OSError:
            return "unknown"


class ConnectorLogger:
    """
    Logger for provider connectors

    Features:
    - Automatic PII and credential redaction
    - Correlation ID tracking
    - Per-call latency and status fields
    - JSON output
    """

    def __init__(self, name: str, vendor: str, hotel_id: Optional[str] = None):
        self.logger = logging.getLogger(name)
        self.vendor = vendor
        self.hotel_id = hotel_id

        if not any(isinstance(f, PIIRedactorFilter) for f in self.logger.filters):
            self.logger.addFilter(PIIRedactorFilter())

        if not self.logger.handlers:
            handler = logging.StreamHandler()
            handler.setFormatter(StructuredFormatter())
            self.logger.addHandler(handler)
            self.logger.setLevel(logging.INFO)

    def with_correlation_id(self, correlation_id_val: Optional[str] = None) -> str:
        """Set or generate correlation ID for request tracking"""
        correlation_id.set(correlation_id_val or str(uuid.uuid4()))
        return correlation_id.get()

    def log_api_call(
        self,
        operation: str,
        request_data: Optional[Dict[str, Any]] = None,
        response_data: Optional[Dict[str, Any]] = None,
        duration_ms: Optional[float] = None,
        status_code: Optional[int] = None,
        error: Optional[Exception] = None,
    ):
        """Log a provider call with standardized fields"""
        log_data = {
            "vendor": self.vendor,
            "hotel_id": self.hotel_id,
            "operation": operation,
            "duration_ms": duration_ms,
            "status_code": status_code,
            "correlation_id": correlation_id.get(),
        }

        redactor = get_default_redactor()
        if request_data:
            log_data["request"] = redactor.redact_dict(request_data)
        if response_data:
            log_data["response"] = redactor.redact_dict(response_data)

        if error:
            log_data["error"] = str(error)
            log_data["error_type"] = type(error).__name__
            self.logger.error(f"API call failed: {operation}", extra=log_data)
        else:
            self.logger.info(f"API call completed: {operation}", extra=log_data)

    def debug(self, msg: str, **kwargs):
        self.logger.debug(msg, extra={"vendor": self.vendor, "hotel_id": self.hotel_id, **kwargs})

    def info(self, msg: str, **kwargs):
        self.logger.info(msg, extra={"vendor": self.vendor, "hotel_id": self.hotel_id, **kwargs})

    def warning(self, msg: str, **kwargs):
        self.logger.warning(msg, extra={"vendor": self.vendor, "hotel_id": self.hotel_id, **kwargs})

    def error(self, msg: str, exc_info=None, **kwargs):
        self.logger.error(
            msg, exc_info=exc_info, extra={"vendor": self.vendor, "hotel_id": self.hotel_id, **kwargs}
        )


def log_performance(operation: str):
    """
    Decorator to log duration and outcome of async connector verbs

    Usage:
        @log_performance("get_reservation")
        async def get_reservation(self, ...):
            ...
    """

    def decorator(func):
        @wraps(func)
        async def wrapper(self, *args, **kwargs):
            logger = getattr(self, "logger", None)
            # Outermost verb opens a correlation ID; nested calls reuse it
            owns_correlation = isinstance(logger, ConnectorLogger) and correlation_id.get() is None
            if owns_correlation:
                logger.with_correlation_id()

            start_time = time.perf_counter()
            error = None

            try:
                return await func(self, *args, **kwargs)
            except Exception as e:
                error = e
                raise
            finally:
                duration_ms = (time.perf_counter() - start_time) * 1000

                if isinstance(logger, ConnectorLogger):
                    logger.log_api_call(operation=operation, duration_ms=duration_ms, error=error)
                    if owns_correlation:
                        correlation_id.set(None)
                elif logger is not None:
                    if error:
                        logger.error(f"{operation} failed in {duration_ms:.2f}ms: {error}")
                    else:
                        logger.info(f"{operation} completed in {duration_ms:.2f}ms")

        return wrapper

    return decorator


SENSITIVE_QUERY_PARAMS = {
    "api_key", "apikey", "key", "token", "secret", "password", "pwd",
    "auth", "authorization", "client_secret", "client_id", "access_token",
    "refresh_token", "session", "sid", "subscription-key",
}


def sanitize_url(url: str) -> str:
    """
    Sanitize URL for logging by redacting sensitive query parameters

    Args:
        url: URL to sanitize

    Returns:
        URL safe for logging
    """
    parsed = urlparse(url)
    query_params = parse_qs(parsed.query, keep_blank_values=True)

    sanitized_params = {
        param: ["<REDACTED>"] if param.lower() in SENSITIVE_QUERY_PARAMS else values
        for param, values in query_params.items()
    }

    return urlunparse(
        (
            parsed.scheme,
            parsed.netloc,
            parsed.path,
            parsed.params,
            urlencode(sanitized_params, doseq=True),
            parsed.fragment,
        )
    )
