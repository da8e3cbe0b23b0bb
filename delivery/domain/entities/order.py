"""A customer delivery waiting for, or carried by, a partner."""

from dataclasses import dataclass, field
from datetime import datetime

from delivery.domain.value_objects.enums import OrderStatus


@dataclass(frozen=True)
class OrderItem:
    name: str
    quantity: int
    price: float

    @property
    def subtotal(self) -> float:
        return self.quantity * self.price


@dataclass
class Order:
    id: int | None
    order_number: str
    customer_name: str
    customer_phone: str
    customer_address: str
    area: str
    scheduled_for: str
    items: list[OrderItem] = field(default_factory=list)
    total_amount: float | None = None
    status: OrderStatus = OrderStatus.PENDING
    assigned_to: int | None = None
    created_at: datetime | None = None

    def __post_init__(self) -> None:
        if self.total_amount is None:
            self.total_amount = round(sum(i.subtotal for i in self.items), 2)

    def is_pending(self) -> bool:
        return self.status == OrderStatus.PENDING
