"""GET /v1/debts - Reconciled debts with remaining balance and next due date"""

import logging
from typing import List
from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.responses import JSONResponse

from debt_reconciler.api.dependencies import get_collections_client, get_request_id
from debt_reconciler.api.v1.schemas import (
    DebtResponse,
    ExactDecimalResponse,
    OrphanedRecordsResponse,
    debt_payload,
)
from debt_reconciler.domain.exceptions import DataSourceError, OrphanedRecordsError, SnapshotTimeoutError
from debt_reconciler.domain.models import ReconciliationResult
from debt_reconciler.infrastructure.clients.collections import CollectionsClient
from debt_reconciler.infrastructure.snapshot import run_reconciliation

router = APIRouter()


async def _reconcile_or_raise(request: Request, client: CollectionsClient) -> ReconciliationResult:
    request_id = get_request_id(request)
    try:
        return await run_reconciliation(client)

    except (DataSourceError, SnapshotTimeoutError) as e:
        logging.error(f"Snapshot fetch failed: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=503, detail="Collection service unavailable")


@router.get("/debts", response_model=List[DebtResponse], response_class=ExactDecimalResponse)
async def list_debts(request: Request, client: CollectionsClient = Depends(get_collections_client)):
    """
    Reconcile a fresh snapshot of all three collections.

    Returns:
        Every debt with remaining_amount and next_payment_due_date
    """
    result = await _reconcile_or_raise(request, client)
    return ExactDecimalResponse(content=debt_payload(result.debts))


@router.get("/debts/{debt_id}", response_model=DebtResponse, response_class=ExactDecimalResponse)
async def get_debt(debt_id: int, request: Request, client: CollectionsClient = Depends(get_collections_client)):
    """Reconcile a fresh snapshot and return a single debt"""
    result = await _reconcile_or_raise(request, client)
    for debt in result.debts:
        if debt.id == debt_id:
            return ExactDecimalResponse(content=DebtResponse.from_domain(debt).model_dump())
    raise HTTPException(status_code=404, detail="Debt not found")


async def orphaned_records_handler(request: Request, exc: OrphanedRecordsError) -> JSONResponse:
    """Strict integrity mode: report orphans instead of a partial debt list"""
    body = OrphanedRecordsResponse(
        detail=str(exc),
        orphaned_plan_ids=[plan.id for plan in exc.result.orphaned_plans],
        orphaned_payment_count=len(exc.result.orphaned_payments),
    )
    return JSONResponse(status_code=409, content=body.model_dump())
