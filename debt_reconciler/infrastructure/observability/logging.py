"""Structured JSON logging for production observability"""

import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict
from pythonjsonlogger import jsonlogger

from debt_reconciler.config import settings
from debt_reconciler.domain.models import ReconciliationResult


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

    # stdout carries the reconciliation report, so logs go to stderr
    handler = logging.StreamHandler(sys.stderr)
    formatter = CustomJsonFormatter(
        "%(timestamp)s %(level)s %(name)s %(message)s"
    )
    handler.setFormatter(formatter)
    logger.addHandler(handler)


def log_reconciliation(result: ReconciliationResult, duration_ms: float) -> None:
    """Log structured reconciliation outcome for analysis"""
    logging.info(
        "Reconciliation completed",
        extra={
            "step": "reconciliation_complete",
            "debt_count": len(result.debts),
            "active_plan_count": sum(1 for d in result.debts if d.is_in_payment_plan),
            "scheduled_payment_count": result.scheduled_payment_count,
            "unscheduled_payment_count": result.unscheduled_payment_count,
            "orphaned_plan_count": len(result.orphaned_plans),
            "orphaned_payment_count": len(result.orphaned_payments),
            "plan_error_count": len(result.plan_errors),
            "duration_ms": duration_ms,
        },
    )
