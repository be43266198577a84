"""Logging setup with JSON output and secret redaction.

Records are emitted through python-json-logger outside of development so they
can be shipped to a log aggregator as-is. Every record carries the current
request ID when one is bound, and bearer tokens or API keys that end up in a
message (for example inside a raw upstream error body) are redacted.
"""

from __future__ import annotations

import logging
import re
import sys
from contextvars import ContextVar
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from pythonjsonlogger import jsonlogger

request_id_var: ContextVar[Optional[str]] = ContextVar("request_id", default=None)


class SecuritySanitizer:
    """Sanitize sensitive information from logs."""

    SENSITIVE_PATTERNS = {
        "api_key": re.compile(r'(api[_-]?key["\s:=]+["\']?)([a-zA-Z0-9_-]{20,})', re.IGNORECASE),
        "bearer_token": re.compile(r"(bearer\s+)([a-zA-Z0-9_.-]{20,})", re.IGNORECASE),
        "openrouter_key": re.compile(r"(sk-or-)([a-zA-Z0-9_-]{10,})"),
    }

    @classmethod
    def sanitize_string(cls, text: str) -> str:
        if not isinstance(text, str):
            return str(text)

        sanitized = text
        for pattern in cls.SENSITIVE_PATTERNS.values():
            sanitized = pattern.sub(r"\1***REDACTED***", sanitized)
        return sanitized


class RequestContextFilter(logging.Filter):
    """Attach the bound request ID and redact secrets from the message."""

    def filter(self, record: logging.LogRecord) -> bool:
        if not hasattr(record, "request_id"):
            record.request_id = request_id_var.get()
        if isinstance(record.msg, str):
            record.msg = SecuritySanitizer.sanitize_string(record.msg)
        if isinstance(record.args, tuple):
            record.args = tuple(
                SecuritySanitizer.sanitize_string(a) if isinstance(a, str) else a
                for a in record.args
            )
        return True


class StructuredFormatter(jsonlogger.JsonFormatter):
    """JSON formatter adding timestamp, level and source location."""

    def add_fields(self, log_record: Dict[str, Any], record: logging.LogRecord, message_dict: Dict[str, Any]):
        super().add_fields(log_record, record, message_dict)
        log_record["timestamp"] = datetime.now(timezone.utc).isoformat()
        log_record["level"] = record.levelname
        log_record["module"] = record.module
        log_record["function"] = record.funcName
        log_record["line"] = record.lineno


PLAIN_FORMAT = "%(asctime)s %(levelname)s %(name)s [%(request_id)s] %(message)s"


def setup_logging(level: str = "INFO", json_output: bool = True) -> None:
    """Configure the root logger once for the whole service."""
    handler = logging.StreamHandler(sys.stdout)
    if json_output:
        handler.setFormatter(StructuredFormatter("%(timestamp)s %(level)s %(name)s %(message)s"))
    else:
        handler.setFormatter(logging.Formatter(PLAIN_FORMAT))
    handler.addFilter(RequestContextFilter())
    handler._palette_api = True

    root = logging.getLogger()
    for existing in list(root.handlers):
        if getattr(existing, "_palette_api", False):
            root.removeHandler(existing)
    root.addHandler(handler)
    root.setLevel(getattr(logging, level.upper(), logging.INFO))

    # httpx logs every request at INFO, including the full URL
    logging.getLogger("httpx").setLevel(logging.WARNING)
