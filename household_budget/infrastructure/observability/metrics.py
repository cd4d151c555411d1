"""Prometheus metrics for month loads, budget balance and reconciliation"""

from prometheus_client import Counter, Histogram

# Month metrics
month_load_counter = Counter(
    "household_month_load_total",
    "Month switches processed",
    ["outcome"],  # balanced | unbalanced
)

month_load_histogram = Histogram(
    "household_month_load_seconds",
    "Time to reconcile, estimate and calculate a month",
    buckets=[0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0],
)

# Reconciliation metrics
reconciliation_write_counter = Counter(
    "household_reconciliation_writes_total",
    "Final balance recomputations persisted",
)

estimate_unavailable_counter = Counter(
    "household_estimate_unavailable_total",
    "Starting balance estimates with no prior-month data",
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_month_load(balanced: bool, unavailable_estimates: int) -> None:
    """Record month-load outcome and missing estimates"""
    outcome = "balanced" if balanced else "unbalanced"
    month_load_counter.labels(outcome=outcome).inc()
    if unavailable_estimates:
        estimate_unavailable_counter.inc(unavailable_estimates)
