"""Concurrent snapshot fetch of all three collections, followed by reconciliation"""

import asyncio
import logging
import time
from dataclasses import dataclass
from typing import List

from debt_reconciler.config import Settings, settings as default_settings
from debt_reconciler.domain.exceptions import DataSourceError, OrphanedRecordsError, SnapshotTimeoutError
from debt_reconciler.domain.models import Debt, Payment, PaymentPlan, ReconciliationResult
from debt_reconciler.domain.next_due import NextDueFallback
from debt_reconciler.domain.reconciliation import reconcile
from debt_reconciler.infrastructure.clients.collections import (
    DEBTS,
    PAYMENT_PLANS,
    PAYMENTS,
    CollectionsClient,
)
from debt_reconciler.infrastructure.observability.logging import log_reconciliation
from debt_reconciler.infrastructure.observability.metrics import fetch_failures_counter, record_reconciliation

logger = logging.getLogger(__name__)


@dataclass
class Snapshot:
    """One complete, consistent fetch of every collection"""

    debts: List[Debt]
    plans: List[PaymentPlan]
    payments: List[Payment]


async def fetch_snapshot(client: CollectionsClient, timeout: float) -> Snapshot:
    """
    Fetch debts, payment plans and payments concurrently.

    All three must arrive within `timeout` seconds. The first failure
    cancels the fetches still in flight and propagates; on timeout every
    pending fetch is cancelled. A partial snapshot is never returned.

    Raises:
        DataSourceError: If any endpoint fails
        SnapshotTimeoutError: If not all collections arrived in time
    """
    tasks = {
        asyncio.create_task(client.get_debts(), name=DEBTS): DEBTS,
        asyncio.create_task(client.get_payment_plans(), name=PAYMENT_PLANS): PAYMENT_PLANS,
        asyncio.create_task(client.get_payments(), name=PAYMENTS): PAYMENTS,
    }

    try:
        done, pending = await asyncio.wait(tasks, timeout=timeout, return_when=asyncio.FIRST_EXCEPTION)
    finally:
        # Covers both our own early exits and cancellation of the caller
        for task in tasks:
            if not task.done():
                task.cancel()

    # Retrieve every exception so none is reported as never retrieved
    failures = [(tasks[task], task.exception()) for task in done if task.exception() is not None]
    for source, error in failures:
        fetch_failures_counter.labels(source=source).inc()
        logger.error(f"Error retrieving {source}: {error}", extra={"source": source})

    if failures:
        source, error = failures[0]
        if isinstance(error, DataSourceError):
            raise error
        raise DataSourceError(source, str(error)) from error

    if pending:
        fetch_failures_counter.labels(source="snapshot").inc()
        pending_sources = [tasks[task] for task in pending]
        logger.error(
            "Timed out waiting for one or more collections",
            extra={"pending": pending_sources, "timeout_seconds": timeout},
        )
        raise SnapshotTimeoutError(timeout, pending_sources)

    results = {tasks[task]: task.result() for task in done}
    return Snapshot(
        debts=results[DEBTS],
        plans=results[PAYMENT_PLANS],
        payments=results[PAYMENTS],
    )


async def run_reconciliation(
    client: CollectionsClient | None = None,
    config: Settings | None = None,
) -> ReconciliationResult:
    """
    Main entry point: fetch a snapshot and reconcile it.

    Returns the complete ReconciliationResult; fetch and timeout failures
    propagate without any partial result.
    """
    config = config or default_settings
    client = client or CollectionsClient()
    start_time = time.time()

    snapshot = await fetch_snapshot(client, config.snapshot_timeout_seconds)
    try:
        result = reconcile(
            snapshot.debts,
            snapshot.plans,
            snapshot.payments,
            grace_period_days=config.grace_period_days,
            fallback=NextDueFallback(config.next_due_fallback),
            strict_integrity=config.strict_integrity,
        )
    except OrphanedRecordsError as e:
        record_reconciliation(e.result)
        raise

    duration_ms = (time.time() - start_time) * 1000
    record_reconciliation(result)
    log_reconciliation(result, duration_ms)
    return result
