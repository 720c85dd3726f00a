"""Structured JSON logging for production observability"""

import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict, List
from pythonjsonlogger import jsonlogger
from debt_advisor.domain.models import PayoffPlan, Recommendation


class CustomJsonFormatter(jsonlogger.JsonFormatter):
    """Custom JSON formatter with timestamp and service metadata"""

    def __init__(self, *args: Any, service_name: str = "debt-advisor", **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.service_name = service_name

    def add_fields(self, log_record: Dict[str, Any], record: logging.LogRecord, message_dict: Dict[str, Any]) -> None:
        super().add_fields(log_record, record, message_dict)
        log_record["timestamp"] = datetime.now(timezone.utc).isoformat()
        log_record["level"] = record.levelname
        log_record["service"] = self.service_name


def setup_logging(level: str = "INFO", service_name: str = "debt-advisor") -> None:
    """Configure structured JSON logging"""
    logger = logging.getLogger()
    logger.setLevel(level)

    # Remove existing handlers
    logger.handlers.clear()

    # JSON handler for stdout
    handler = logging.StreamHandler(sys.stdout)
    formatter = CustomJsonFormatter(
        "%(timestamp)s %(level)s %(name)s %(message)s",
        service_name=service_name,
    )
    handler.setFormatter(formatter)
    logger.addHandler(handler)


def log_payoff_plan(request_id: str, plan: PayoffPlan, duration_ms: float) -> None:
    """Log structured payoff projection outcome"""
    logging.info(
        "Payoff plan computed",
        extra={
            "request_id": request_id,
            "step": "payoff_plan",
            "mode": plan.mode,
            "strategy": plan.strategy,
            "account_count": len(plan.account_payoffs),
            "total_months": plan.total_months,
            "monthly_payment": plan.monthly_payment,
            "duration_ms": duration_ms,
        },
    )


def log_recommendations(
    request_id: str,
    recommendations: List[Recommendation],
    user_id: str | None = None,
) -> None:
    """Log which recommendation types fired for analysis"""
    logging.info(
        "Recommendations generated",
        extra={
            "request_id": request_id,
            "user_id": user_id,
            "step": "recommendations",
            "recommendation_types": [r.type for r in recommendations],
            "recommendation_count": len(recommendations),
        },
    )
