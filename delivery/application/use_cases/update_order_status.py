"""Pickup and delivery reports for orders that are already assigned."""

from __future__ import annotations

import logging

from delivery.application.ports.order_repo import OrderRepository
from delivery.application.ports.partner_repo import PartnerRepository
from delivery.domain.entities.order import Order
from delivery.domain.errors import ConflictError, InvalidStateError, NotFoundError
from delivery.domain.policies.order_lifecycle import can_transition, releases_partner
from delivery.domain.value_objects.enums import FailureReason, OrderStatus

logger = logging.getLogger(__name__)


class UpdateOrderStatusUseCase:
    def __init__(self, order_repo: OrderRepository, partner_repo: PartnerRepository):
        self._orders = order_repo
        self._partners = partner_repo

    async def execute(self, order_id: int, new_status: OrderStatus) -> Order:
        """Move an assigned order forward; delivery frees a slot on its partner."""
        order = await self._orders.get_by_id(order_id)
        if order is None:
            raise NotFoundError(FailureReason.ORDER_NOT_FOUND.value)

        if not can_transition(order.status, new_status):
            raise InvalidStateError(
                f"Invalid status transition from {order.status.value} to {new_status.value}"
            )

        if not await self._orders.update_status(order_id, order.status, new_status):
            raise ConflictError(FailureReason.CONCURRENT_MODIFICATION.value)

        logger.info(
            "Order %s: %s → %s", order.order_number, order.status.value, new_status.value
        )
        order.status = new_status

        if releases_partner(new_status) and order.assigned_to is not None:
            if await self._partners.try_decrement_load(order.assigned_to):
                await self._partners.increment_completed(order.assigned_to)
            else:
                logger.warning(
                    "Order %s delivered but partner %s has no load to release",
                    order.order_number, order.assigned_to,
                )

        return order
