"""Hands one order to one partner chosen by an operator."""

from __future__ import annotations

import logging

from delivery.application.ports.assignment_repo import AssignmentRepository
from delivery.application.ports.order_repo import OrderRepository
from delivery.application.ports.partner_repo import PartnerRepository
from delivery.application.use_cases.assignment_steps import (
    assign_reserved,
    record_failure,
    record_success,
)
from delivery.domain.entities.assignment import Assignment
from delivery.domain.errors import (
    AssignmentError,
    ConflictError,
    InvalidStateError,
    NotFoundError,
    PersistenceError,
)
from delivery.domain.policies.assignment_rules import check_assignable
from delivery.domain.value_objects.enums import MAX_LOAD, FailureReason

logger = logging.getLogger(__name__)


class AssignOrderUseCase:
    """Validates and applies a targeted assignment.

    Every outcome, including each failure, is appended to the assignment log
    before this returns or raises.
    """

    def __init__(
        self,
        order_repo: OrderRepository,
        partner_repo: PartnerRepository,
        assignment_repo: AssignmentRepository,
        max_load: int = MAX_LOAD,
    ):
        self._orders = order_repo
        self._partners = partner_repo
        self._assignments = assignment_repo
        self._max_load = max_load

    async def execute(self, order_id: int, partner_id: int) -> Assignment:
        """Assign ``order_id`` to ``partner_id``.

        Returns:
            the success Assignment.

        Raises:
            NotFoundError: order or partner absent.
            InvalidStateError: partner full, area not covered, order not pending.
            ConflictError: a conditional update was rejected.
            PersistenceError: the store failed.
        """
        try:
            return await self._assign(order_id, partner_id)
        except AssignmentError:
            raise
        except Exception as e:
            logger.exception("Error assigning order %s to partner %s", order_id, partner_id)
            raise await self._fail(
                PersistenceError, order_id, partner_id, FailureReason.PERSISTENCE_FAILURE
            ) from e

    async def _assign(self, order_id: int, partner_id: int) -> Assignment:
        order = await self._orders.get_by_id(order_id)
        if order is None:
            raise await self._fail(NotFoundError, order_id, partner_id, FailureReason.ORDER_NOT_FOUND)

        partner = await self._partners.get_by_id(partner_id)
        if partner is None:
            raise await self._fail(NotFoundError, order_id, partner_id, FailureReason.PARTNER_NOT_FOUND)

        violation = check_assignable(order, partner, self._max_load)
        if violation is not None:
            raise await self._fail(InvalidStateError, order_id, partner_id, violation)

        if not await self._partners.try_increment_load(partner_id, self._max_load):
            raise await self._fail(
                ConflictError, order_id, partner_id, FailureReason.CONCURRENT_MODIFICATION
            )

        if not await assign_reserved(self._orders, self._partners, order_id, partner_id):
            raise await self._fail(
                ConflictError, order_id, partner_id, FailureReason.CONCURRENT_MODIFICATION
            )

        assignment = await record_success(
            self._assignments, self._orders, self._partners, order_id, partner_id
        )
        logger.info(
            "Order %s → Partner %s (load %d/%d)",
            order.order_number, partner.name, partner.current_load + 1, self._max_load,
        )
        return assignment

    async def _fail(
        self,
        error_cls: type[AssignmentError],
        order_id: int,
        partner_id: int,
        reason: FailureReason,
    ) -> AssignmentError:
        logger.info("Order %s → Partner %s failed: %s", order_id, partner_id, reason.value)
        recorded = await record_failure(
            self._assignments, Assignment.failed(order_id, reason, partner_id)
        )
        return error_cls(reason.value, recorded)
