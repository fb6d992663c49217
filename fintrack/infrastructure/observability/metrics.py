"""Prometheus metrics for budget health, insight calls and request latency"""

from typing import Iterable
from prometheus_client import Counter, Histogram
from fintrack.domain.models import BudgetProgress

# Budget metrics
budget_evaluation_counter = Counter(
    "fintrack_budget_evaluations_total",
    "Budgets evaluated, by severity tier",
    ["severity"],  # normal | warning | critical | manual
)

budget_overspent_counter = Counter(
    "fintrack_budget_overspent_total",
    "Evaluations where spend exceeded the budget amount",
)

# Insight metrics
insight_request_counter = Counter(
    "fintrack_insight_requests_total",
    "AI insight requests",
    ["kind", "outcome"],  # savings_opportunities | health_score ; ok | error | invalid | unconfigured
)

insight_latency_histogram = Histogram(
    "fintrack_insight_latency_seconds",
    "Language model response time",
    ["kind"],
    buckets=[0.5, 1.0, 2.5, 5.0, 10.0, 20.0, 30.0, 60.0],
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_budget_progress(progress: Iterable[BudgetProgress]) -> None:
    """Count severity tiers so dashboards can track how many budgets run hot"""
    for item in progress:
        budget_evaluation_counter.labels(severity=item.severity).inc()
        if item.overspent:
            budget_overspent_counter.inc()
