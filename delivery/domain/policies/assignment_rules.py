"""Can this partner take this order right now?"""

from delivery.domain.entities.order import Order
from delivery.domain.entities.partner import Partner
from delivery.domain.value_objects.enums import MAX_LOAD, FailureReason


def check_assignable(
    order: Order,
    partner: Partner,
    max_load: int = MAX_LOAD,
) -> FailureReason | None:
    """Return the first rule the pair violates, or None when it is assignable.

    Rules, in the order they are checked:
      1. partner load must be below ``max_load``
      2. partner must service the order's area
      3. order must still be pending

    Partner status is not checked: an operator may hand an order to any
    partner explicitly.
    """
    if not partner.has_capacity(max_load):
        return FailureReason.PARTNER_AT_CAPACITY

    if not partner.covers(order.area):
        return FailureReason.AREA_NOT_COVERED

    if not order.is_pending():
        return FailureReason.ORDER_NOT_PENDING

    return None
