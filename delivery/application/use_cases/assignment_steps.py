"""Steps shared by the bulk and targeted assignment use cases."""

from __future__ import annotations

import logging

from delivery.application.ports.assignment_repo import AssignmentRepository
from delivery.application.ports.order_repo import OrderRepository
from delivery.application.ports.partner_repo import PartnerRepository
from delivery.domain.entities.assignment import Assignment

logger = logging.getLogger(__name__)


async def record_failure(
    assignments: AssignmentRepository, assignment: Assignment
) -> Assignment:
    """Append a failed attempt to the log.

    A store error here is logged and swallowed so that the caller can still
    surface the error that caused the failure. The unsaved record (id=None)
    is returned in that case.
    """
    try:
        return await assignments.save(assignment)
    except Exception:
        logger.exception(
            "Could not record failed assignment for order %s (%s)",
            assignment.order_id, assignment.reason,
        )
        return assignment


async def assign_reserved(
    orders: OrderRepository,
    partners: PartnerRepository,
    order_id: int,
    partner_id: int,
) -> bool:
    """Mark the order assigned to a partner whose slot is already reserved.

    The reservation is handed back when the order is no longer pending or
    the update raises.
    """
    try:
        assigned = await orders.mark_assigned(order_id, partner_id)
    except Exception:
        await _release(partners, partner_id)
        raise

    if not assigned:
        await _release(partners, partner_id)
    return assigned


async def record_success(
    assignments: AssignmentRepository,
    orders: OrderRepository,
    partners: PartnerRepository,
    order_id: int,
    partner_id: int,
) -> Assignment:
    """Append the success record for an order that is already assigned.

    If the record cannot be written, the order goes back to pending and the
    partner's slot is released before the store error is re-raised.
    """
    try:
        return await assignments.save(Assignment.succeeded(order_id, partner_id))
    except Exception:
        await _unassign(orders, order_id, partner_id)
        await _release(partners, partner_id)
        raise


async def _unassign(orders: OrderRepository, order_id: int, partner_id: int) -> None:
    try:
        if not await orders.unassign(order_id, partner_id):
            logger.warning("Order %s was no longer held by partner %s", order_id, partner_id)
    except Exception:
        logger.exception("Could not return order %s to pending", order_id)


async def _release(partners: PartnerRepository, partner_id: int) -> None:
    try:
        if not await partners.try_decrement_load(partner_id):
            logger.warning("Partner %s had no load to release", partner_id)
    except Exception:
        logger.exception("Could not release reserved slot on partner %s", partner_id)
