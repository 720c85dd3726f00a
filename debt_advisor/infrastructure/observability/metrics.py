"""Prometheus metrics for payoff projections and recommendation output"""

from typing import List
from prometheus_client import Counter, Histogram
from debt_advisor.domain.models import PayoffPlan, Recommendation

# Projection metrics
payoff_plan_counter = Counter(
    "debt_payoff_plans_total",
    "Payoff plans computed",
    ["mode"],  # parallel | waterfall
)

payoff_months_histogram = Histogram(
    "debt_payoff_months",
    "Projected months until all debt is cleared",
    buckets=[0, 6, 12, 24, 36, 60, 120, 240, 600],
)

rejected_budget_counter = Counter(
    "debt_payoff_rejected_budgets_total",
    "Payoff requests rejected for an unusable budget",
)

# Recommendation metrics
recommendation_counter = Counter(
    "debt_recommendations_total",
    "Recommendations generated",
    ["type"],
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_payoff_plan(plan: PayoffPlan) -> None:
    """Record projection mode and horizon"""
    payoff_plan_counter.labels(mode=plan.mode).inc()
    payoff_months_histogram.observe(plan.total_months)


def record_recommendations(recommendations: List[Recommendation]) -> None:
    for rec in recommendations:
        recommendation_counter.labels(type=rec.type).inc()
