"""Structured JSON logging with secret redaction.

Every module logs through ``logging.getLogger(__name__)``; this module only
decides how records leave the process. ``setup_logging`` installs a single
stdout handler on the root logger that renders records as JSON, adds service
metadata and, in production, redacts API keys and bearer tokens.
"""

import logging
import re
import sys
import traceback
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional
from contextvars import ContextVar
from pythonjsonlogger import jsonlogger

from .config import settings

# Context variable for request tracking
request_id_var: ContextVar[Optional[str]] = ContextVar('request_id', default=None)


class SecuritySanitizer:
    """Sanitize credentials out of log output."""

    SENSITIVE_PATTERNS = {
        'api_key': re.compile(r'(api[_-]?key["\s:=]+["\']?)([a-zA-Z0-9_-]{20,})', re.IGNORECASE),
        'bearer_token': re.compile(r'(bearer\s+)([a-zA-Z0-9_.-]{20,})', re.IGNORECASE),
        'openrouter_key': re.compile(r'()(sk-or-[a-zA-Z0-9_-]{10,})'),
    }

    SENSITIVE_KEYS = ('secret', 'token', 'api_key', 'authorization', 'password')

    @classmethod
    def sanitize_string(cls, text: str) -> str:
        if not isinstance(text, str):
            return str(text)

        sanitized = text
        for pattern in cls.SENSITIVE_PATTERNS.values():
            sanitized = pattern.sub(r'\1***REDACTED***', sanitized)
        return sanitized

    @classmethod
    def sanitize_dict(cls, data: Dict[str, Any], max_depth: int = 3) -> Dict[str, Any]:
        """Recursively sanitize a dictionary."""
        if max_depth <= 0:
            return {"...": "max_depth_reached"}

        sanitized = {}
        for key, value in data.items():
            if any(sensitive in key.lower() for sensitive in cls.SENSITIVE_KEYS):
                sanitized[key] = "***REDACTED***"
            elif isinstance(value, dict):
                sanitized[key] = cls.sanitize_dict(value, max_depth - 1)
            elif isinstance(value, list):
                sanitized[key] = cls.sanitize_list(value, max_depth - 1)
            elif isinstance(value, str):
                sanitized[key] = cls.sanitize_string(value)
            else:
                sanitized[key] = value
        return sanitized

    @classmethod
    def sanitize_list(cls, data: List[Any], max_depth: int = 3) -> List[Any]:
        if max_depth <= 0:
            return ["...max_depth_reached"]

        sanitized = []
        for item in data[:10]:  # Limit list length in logs
            if isinstance(item, dict):
                sanitized.append(cls.sanitize_dict(item, max_depth - 1))
            elif isinstance(item, list):
                sanitized.append(cls.sanitize_list(item, max_depth - 1))
            elif isinstance(item, str):
                sanitized.append(cls.sanitize_string(item))
            else:
                sanitized.append(item)

        if len(data) > 10:
            sanitized.append(f"...and {len(data) - 10} more items")
        return sanitized


class StructuredFormatter(jsonlogger.JsonFormatter):
    """JSON formatter adding service metadata to every record."""

    def add_fields(self, log_record: Dict[str, Any], record: logging.LogRecord, message_dict: Dict[str, Any]):
        super().add_fields(log_record, record, message_dict)

        log_record['timestamp'] = datetime.now(timezone.utc).isoformat()
        log_record['level'] = record.levelname
        log_record['module'] = record.module
        log_record['function'] = record.funcName
        log_record['line'] = record.lineno

        log_record['service'] = settings.service_name
        log_record['environment'] = settings.service_env

        if request_id := request_id_var.get():
            log_record['request_id'] = request_id

        if record.exc_info and record.exc_info[0] is not None:
            exception_info = {
                'type': record.exc_info[0].__name__,
                'message': SecuritySanitizer.sanitize_string(str(record.exc_info[1])),
            }
            # Tracebacks stay out of production output
            if not settings.is_production:
                exception_info['traceback'] = traceback.format_exception(*record.exc_info)
            log_record['exception'] = exception_info
            log_record.pop('exc_info', None)

        if settings.is_production:
            if isinstance(log_record.get('message'), str):
                log_record['message'] = SecuritySanitizer.sanitize_string(log_record['message'])
            for key, value in list(log_record.items()):
                if key in ('message', 'exception'):
                    continue
                if any(sensitive in key.lower() for sensitive in SecuritySanitizer.SENSITIVE_KEYS):
                    log_record[key] = "***REDACTED***"
                elif isinstance(value, dict):
                    log_record[key] = SecuritySanitizer.sanitize_dict(value)
                elif isinstance(value, list):
                    log_record[key] = SecuritySanitizer.sanitize_list(value)
                elif isinstance(value, str):
                    log_record[key] = SecuritySanitizer.sanitize_string(value)


def setup_logging(level: str = "INFO") -> None:
    """Install the structured stdout handler on the root logger."""
    root = logging.getLogger()
    root.handlers = []

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(StructuredFormatter(
        '%(timestamp)s %(level)s %(name)s %(message)s',
        datefmt='%Y-%m-%dT%H:%M:%S'
    ))
    root.addHandler(handler)
    root.setLevel(getattr(logging, level.upper(), logging.INFO))

    # Quiet chatty transport loggers outside debug sessions
    if level.upper() != "DEBUG":
        logging.getLogger('httpx').setLevel(logging.WARNING)
        logging.getLogger('httpcore').setLevel(logging.WARNING)


def log_external_call(logger: logging.Logger, service: str, operation: str, **kwargs):
    """Log an outbound call to an external service."""
    logger.info(
        f"External call to {service}: {operation}",
        extra={
            "external_service": service,
            "operation": operation,
            "event_type": "external_call",
            **kwargs,
        },
    )
