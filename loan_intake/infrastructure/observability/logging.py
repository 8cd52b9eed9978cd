"""Structured JSON logging for production observability"""

import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict

from pythonjsonlogger.json import JsonFormatter

from loan_intake.config import settings


class ServiceJsonFormatter(JsonFormatter):
    """JSON formatter with timestamp and service metadata"""

    def add_fields(self, log_record: Dict[str, Any], record: logging.LogRecord, message_dict: Dict[str, Any]) -> None:
        super().add_fields(log_record, record, message_dict)
        log_record["timestamp"] = datetime.now(timezone.utc).isoformat()
        log_record["level"] = record.levelname
        log_record["service"] = settings.service_name


def setup_logging(level: str = "INFO") -> None:
    """Configure structured JSON logging"""
    logger = logging.getLogger()
    logger.setLevel(level)

    # Remove existing handlers
    logger.handlers.clear()

    # JSON handler for stdout
    handler = logging.StreamHandler(sys.stdout)
    formatter = ServiceJsonFormatter("%(timestamp)s %(level)s %(name)s %(message)s")
    handler.setFormatter(formatter)
    logger.addHandler(handler)


def log_request_outcome(request_id: str, method: str, path: str, status_code: int, duration_ms: float) -> None:
    """Log failed HTTP requests: 4xx as warning, 5xx as error"""
    if status_code < 400:
        return

    logging.getLogger("loan_intake.requests").log(
        logging.ERROR if status_code >= 500 else logging.WARNING,
        f"HTTP {method} {path} - {status_code} ({duration_ms:.0f}ms)",
        extra={
            "request_id": request_id,
            "method": method,
            "path": path,
            "status_code": status_code,
            "duration_ms": duration_ms,
        },
    )
