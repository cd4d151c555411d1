"""Structured JSON logging for production observability"""

import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict

from pythonjsonlogger import jsonlogger

from household_budget.domain.models import MonthKey


class CustomJsonFormatter(jsonlogger.JsonFormatter):
    """Custom JSON formatter with timestamp and service metadata"""

    def add_fields(self, log_record: Dict[str, Any], record: logging.LogRecord, message_dict: Dict[str, Any]) -> None:
        super().add_fields(log_record, record, message_dict)
        log_record["timestamp"] = datetime.now(timezone.utc).isoformat()
        log_record["level"] = record.levelname
        log_record["service"] = "household-budget"


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


def log_month_loaded(
    month_key: MonthKey,
    balance_left: int,
    balanced: bool,
    unavailable_estimates: int,
    duration_ms: float,
) -> None:
    """Log structured month-switch outcome"""
    logging.info(
        "Month loaded",
        extra={
            "month": str(month_key),
            "step": "month_loaded",
            "balance_left_ore": balance_left,
            "balanced": balanced,
            "unavailable_estimates": unavailable_estimates,
            "duration_ms": duration_ms,
        },
    )
