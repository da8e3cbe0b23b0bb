"""FastAPI dependency injection — wires adapters into use cases."""

from __future__ import annotations

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from delivery.adapters.persistence.database import get_session
from delivery.adapters.persistence.repositories import (
    SqlAssignmentRepository,
    SqlOrderRepository,
    SqlPartnerRepository,
)
from delivery.application.ports.assignment_repo import AssignmentRepository
from delivery.application.ports.order_repo import OrderRepository
from delivery.application.ports.partner_repo import PartnerRepository
from delivery.application.use_cases.assign_order import AssignOrderUseCase
from delivery.application.use_cases.bulk_assign import BulkAssignUseCase
from delivery.application.use_cases.compute_metrics import (
    ComputeMetricsUseCase,
    PartnerAvailabilityUseCase,
)
from delivery.application.use_cases.update_order_status import UpdateOrderStatusUseCase
from delivery.config import settings


def get_order_repo(session: AsyncSession = Depends(get_session)) -> OrderRepository:
    return SqlOrderRepository(session)


def get_partner_repo(session: AsyncSession = Depends(get_session)) -> PartnerRepository:
    return SqlPartnerRepository(session)


def get_assignment_repo(session: AsyncSession = Depends(get_session)) -> AssignmentRepository:
    return SqlAssignmentRepository(session)


def get_assign_order_uc(
    orders: OrderRepository = Depends(get_order_repo),
    partners: PartnerRepository = Depends(get_partner_repo),
    assignments: AssignmentRepository = Depends(get_assignment_repo),
) -> AssignOrderUseCase:
    return AssignOrderUseCase(
        order_repo=orders,
        partner_repo=partners,
        assignment_repo=assignments,
        max_load=settings.max_partner_load,
    )


def get_bulk_assign_uc(
    orders: OrderRepository = Depends(get_order_repo),
    partners: PartnerRepository = Depends(get_partner_repo),
    assignments: AssignmentRepository = Depends(get_assignment_repo),
) -> BulkAssignUseCase:
    return BulkAssignUseCase(
        order_repo=orders,
        partner_repo=partners,
        assignment_repo=assignments,
        max_load=settings.max_partner_load,
    )


def get_metrics_uc(
    assignments: AssignmentRepository = Depends(get_assignment_repo),
) -> ComputeMetricsUseCase:
    return ComputeMetricsUseCase(assignment_repo=assignments)


def get_availability_uc(
    partners: PartnerRepository = Depends(get_partner_repo),
) -> PartnerAvailabilityUseCase:
    return PartnerAvailabilityUseCase(partner_repo=partners, max_load=settings.max_partner_load)


def get_update_order_status_uc(
    orders: OrderRepository = Depends(get_order_repo),
    partners: PartnerRepository = Depends(get_partner_repo),
) -> UpdateOrderStatusUseCase:
    return UpdateOrderStatusUseCase(order_repo=orders, partner_repo=partners)
