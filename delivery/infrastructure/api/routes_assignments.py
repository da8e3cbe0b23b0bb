"""Assignment endpoints (attempt log, bulk run, metrics)."""

from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from delivery.adapters.persistence.database import get_session
from delivery.application.ports.assignment_repo import AssignmentRepository
from delivery.application.use_cases.bulk_assign import BulkAssignUseCase
from delivery.application.use_cases.compute_metrics import (
    ComputeMetricsUseCase,
    PartnerAvailabilityUseCase,
)
from delivery.infrastructure.api.dependencies import (
    get_assignment_repo,
    get_availability_uc,
    get_bulk_assign_uc,
    get_metrics_uc,
)
from delivery.infrastructure.api.serializers import (
    serialize_assignment,
    serialize_availability,
    serialize_metrics,
)

router = APIRouter(prefix="/assignments", tags=["assignments"])


@router.get("")
async def list_assignments(
    order_id: int | None = None,
    assignments: AssignmentRepository = Depends(get_assignment_repo),
):
    """Full attempt log, or the attempts for one order."""
    if order_id is not None:
        records = await assignments.get_by_order(order_id)
    else:
        records = await assignments.get_all()
    return [serialize_assignment(a) for a in records]


@router.get("/metrics")
async def assignment_metrics(uc: ComputeMetricsUseCase = Depends(get_metrics_uc)):
    return serialize_metrics(await uc.execute())


@router.get("/partners")
async def partner_availability(
    uc: PartnerAvailabilityUseCase = Depends(get_availability_uc),
):
    return serialize_availability(await uc.execute())


@router.post("/run")
async def run_assignments(
    uc: BulkAssignUseCase = Depends(get_bulk_assign_uc),
    session: AsyncSession = Depends(get_session),
):
    """Assign every pending order (successes and failures are both logged)."""
    outcome = await uc.execute()
    await session.commit()

    return {
        "message": f"{outcome.success_count} orders assigned successfully",
        "success_count": outcome.success_count,
        "total": len(outcome.results),
        "assignments": [serialize_assignment(a) for a in outcome.results],
    }
