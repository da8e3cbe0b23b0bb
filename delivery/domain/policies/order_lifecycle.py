"""Order status transitions driven outside the assignment engine.

``pending -> assigned`` belongs to the engine alone; everything after that is
reported by the partner (picked up, delivered).
"""

from delivery.domain.value_objects.enums import OrderStatus

ALLOWED_TRANSITIONS: dict[OrderStatus, frozenset[OrderStatus]] = {
    OrderStatus.PENDING: frozenset(),
    OrderStatus.ASSIGNED: frozenset({OrderStatus.PICKED, OrderStatus.DELIVERED}),
    OrderStatus.PICKED: frozenset({OrderStatus.DELIVERED}),
    OrderStatus.DELIVERED: frozenset(),
}


def can_transition(current: OrderStatus, new: OrderStatus) -> bool:
    return new in ALLOWED_TRANSITIONS[current]


def releases_partner(new: OrderStatus) -> bool:
    """True when moving into ``new`` frees a slot on the carrying partner."""
    return new == OrderStatus.DELIVERED
