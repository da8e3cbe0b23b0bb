"""Port interface for order persistence."""

from abc import ABC, abstractmethod

from delivery.domain.entities.order import Order
from delivery.domain.value_objects.enums import OrderStatus


class OrderRepository(ABC):
    @abstractmethod
    async def save(self, order: Order) -> Order:
        ...

    @abstractmethod
    async def get_by_id(self, order_id: int) -> Order | None:
        ...

    @abstractmethod
    async def get_by_number(self, order_number: str) -> Order | None:
        ...

    @abstractmethod
    async def get_all(self, status: OrderStatus | None = None) -> list[Order]:
        ...

    @abstractmethod
    async def get_by_partner(self, partner_id: int) -> list[Order]:
        ...

    @abstractmethod
    async def get_pending(self) -> list[Order]:
        """Return pending orders in creation order (oldest first)."""
        ...

    @abstractmethod
    async def mark_assigned(self, order_id: int, partner_id: int) -> bool:
        """Set status=assigned and assigned_to=partner_id only if still pending.

        Returns False when the order is no longer pending (or is gone).
        """
        ...

    @abstractmethod
    async def unassign(self, order_id: int, partner_id: int) -> bool:
        """Put an assigned order back to pending, only if ``partner_id`` still holds it."""
        ...

    @abstractmethod
    async def update_status(
        self, order_id: int, expected: OrderStatus, new: OrderStatus
    ) -> bool:
        """Move the order from ``expected`` to ``new``; False if it was not ``expected``."""
        ...
