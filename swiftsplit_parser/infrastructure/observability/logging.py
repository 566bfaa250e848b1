"""Structured JSON logging for production observability"""

import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict, Optional
from pythonjsonlogger import jsonlogger

from swiftsplit_parser.config import settings


class CustomJsonFormatter(jsonlogger.JsonFormatter):
    """Custom JSON formatter with timestamp and service metadata"""

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
    formatter = CustomJsonFormatter(
        "%(timestamp)s %(level)s %(name)s %(message)s"
    )
    handler.setFormatter(formatter)
    logger.addHandler(handler)


def log_parse_outcome(
    request_id: str,
    source: str,
    success: bool,
    duration_ms: float,
    intent: Optional[str] = None,
    risk_score: Optional[int] = None,
    requires_review: Optional[bool] = None,
    error_code: Optional[str] = None,
) -> None:
    """Log structured parse outcome for analysis"""
    logging.getLogger("swiftsplit_parser.parse").info(
        "Parse completed",
        extra={
            "request_id": request_id,
            "source": source,
            "step": "parse_complete",
            "parse_outcome": "success" if success else "failure",
            "intent": intent,
            "risk_score": risk_score,
            "requires_review": requires_review,
            "error_code": error_code,
            "duration_ms": duration_ms,
        },
    )
