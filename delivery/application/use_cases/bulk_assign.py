"""BulkAssignUseCase — match the whole pending backlog to available partners."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from delivery.application.ports.assignment_repo import AssignmentRepository
from delivery.application.ports.order_repo import OrderRepository
from delivery.application.ports.partner_repo import PartnerRepository
from delivery.application.use_cases.assignment_steps import (
    assign_reserved,
    record_failure,
    record_success,
)
from delivery.domain.entities.assignment import Assignment
from delivery.domain.entities.order import Order
from delivery.domain.entities.partner import Partner
from delivery.domain.policies.partner_selection import (
    partners_in_area,
    pick_least_loaded,
)
from delivery.domain.value_objects.enums import MAX_LOAD, FailureReason

logger = logging.getLogger(__name__)


@dataclass
class BulkAssignmentResult:
    """Outcome of one bulk run, in the order the backlog was processed."""

    results: list[Assignment]
    success_count: int


class BulkAssignUseCase:
    """Assigns every pending order to the least-loaded partner in its area."""

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

    async def execute(self) -> BulkAssignmentResult:
        """Run one pass over the backlog.

        Pipeline:
        1. Load pending orders (oldest first)
        2. Load active partners below capacity into a working set
        3. For each order: filter by area, pick least loaded, reserve, assign
        4. Drop partners from the working set as they fill up

        Orders are processed strictly one after another: the working set's
        loads change as the loop goes, so two orders must never observe the
        same free slot.
        """
        pending = await self._orders.get_pending()
        available = await self._partners.get_available(self._max_load)

        # Insertion-ordered, so iteration matches the load order (id ASC)
        pool: dict[int, Partner] = {p.id: p for p in available}
        logger.info(
            "Bulk assignment: %d pending orders, %d available partners",
            len(pending), len(pool),
        )

        results = []
        for order in pending:
            result = await self._assign_one(order, pool)
            results.append(result)

        success_count = sum(1 for r in results if r.is_success())
        logger.info("Bulk assignment complete: %d/%d successful", success_count, len(results))
        return BulkAssignmentResult(results=results, success_count=success_count)

    async def _assign_one(self, order: Order, pool: dict[int, Partner]) -> Assignment:
        candidates = partners_in_area(order.area, pool.values())
        if not candidates:
            logger.info("Order %s: no partners available in %s", order.order_number, order.area)
            return await record_failure(
                self._assignments,
                Assignment.failed(order.id, FailureReason.NO_PARTNER_IN_AREA),
            )

        partner = pick_least_loaded(candidates)

        try:
            if not await self._partners.try_increment_load(partner.id, self._max_load):
                # Someone else filled this partner since the snapshot was taken
                pool.pop(partner.id, None)
                logger.warning(
                    "Order %s: partner %s lost capacity concurrently",
                    order.order_number, partner.id,
                )
                return await record_failure(
                    self._assignments,
                    Assignment.failed(order.id, FailureReason.CONCURRENT_MODIFICATION, partner.id),
                )

            if not await assign_reserved(self._orders, self._partners, order.id, partner.id):
                logger.warning(
                    "Order %s: no longer pending, skipped", order.order_number,
                )
                return await record_failure(
                    self._assignments,
                    Assignment.failed(order.id, FailureReason.CONCURRENT_MODIFICATION, partner.id),
                )

            assignment = await record_success(
                self._assignments, self._orders, self._partners, order.id, partner.id
            )

            partner.current_load += 1
            if not partner.has_capacity(self._max_load):
                pool.pop(partner.id, None)

            logger.info(
                "Order %s → Partner %s (load %d/%d)",
                order.order_number, partner.name, partner.current_load, self._max_load,
            )
            return assignment

        except Exception:
            logger.exception("Error assigning order %s", order.order_number)
            return await record_failure(
                self._assignments,
                Assignment.failed(order.id, FailureReason.PERSISTENCE_FAILURE, partner.id),
            )
