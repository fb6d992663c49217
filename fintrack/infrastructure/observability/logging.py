"""Structured JSON logging for production observability"""

import logging
import sys
from datetime import date, datetime, timezone
from typing import Any, Dict, List
from pythonjsonlogger.json import JsonFormatter
from fintrack.config import settings
from fintrack.domain.models import BudgetProgress


class CustomJsonFormatter(JsonFormatter):
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


def log_budget_evaluation(
    request_id: str,
    reference_date: date,
    progress: List[BudgetProgress],
) -> None:
    """Log one record per evaluation pass with the tier breakdown"""
    tiers: Dict[str, int] = {}
    for item in progress:
        tiers[item.severity] = tiers.get(item.severity, 0) + 1

    logging.info(
        "Budget progress evaluated",
        extra={
            "request_id": request_id,
            "step": "budget_evaluation",
            "reference_date": reference_date.isoformat(),
            "budget_count": len(progress),
            "overspent_count": sum(1 for p in progress if p.overspent),
            "severity_counts": tiers,
        },
    )


def log_insight_request(
    request_id: str,
    kind: str,
    outcome: str,
    duration_ms: float,
) -> None:
    """Log structured outcome of an AI insight call"""
    logging.info(
        "Insight request completed",
        extra={
            "request_id": request_id,
            "step": "insight_request",
            "insight_kind": kind,
            "outcome": outcome,
            "duration_ms": duration_ms,
        },
    )
