"""Prometheus metrics for monitoring collection fetches, classification outcomes, and data integrity"""

from prometheus_client import Counter, Histogram

from debt_reconciler.domain.models import ReconciliationResult

# Fetch metrics
fetch_latency_histogram = Histogram(
    "debt_reconciler_fetch_seconds",
    "Collection endpoint response time",
    ["source"],  # debts | payment_plans | payments
    buckets=[0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0, 30.0],
)

fetch_failures_counter = Counter(
    "debt_reconciler_fetch_failures_total",
    "Failed collection fetches",
    ["source"],  # debts | payment_plans | payments | snapshot
)

# Reconciliation metrics
payments_classified_counter = Counter(
    "debt_reconciler_payments_classified_total",
    "Payments classified against generated schedules",
    ["outcome"],  # scheduled | unscheduled
)

orphaned_records_counter = Counter(
    "debt_reconciler_orphaned_records_total",
    "Records left without an owner after the join",
    ["kind"],  # payment_plan | payment
)

plan_errors_counter = Counter(
    "debt_reconciler_plan_errors_total",
    "Recoverable per-plan errors absorbed during reconciliation",
    ["reason"],
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_reconciliation(result: ReconciliationResult) -> None:
    """Record classification and integrity metrics for one reconciliation pass"""
    payments_classified_counter.labels(outcome="scheduled").inc(result.scheduled_payment_count)
    payments_classified_counter.labels(outcome="unscheduled").inc(result.unscheduled_payment_count)

    if result.orphaned_plans:
        orphaned_records_counter.labels(kind="payment_plan").inc(len(result.orphaned_plans))
    if result.orphaned_payments:
        orphaned_records_counter.labels(kind="payment").inc(len(result.orphaned_payments))

    if result.plan_errors:
        plan_errors_counter.labels(reason="unrecognized_cadence").inc(len(result.plan_errors))
