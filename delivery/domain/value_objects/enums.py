"""Domain enums — pure Python, no external dependencies."""

from enum import Enum

# Maximum number of assigned, undelivered orders a partner may carry at once
MAX_LOAD = 3


class PartnerStatus(str, Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"


class OrderStatus(str, Enum):
    PENDING = "pending"
    ASSIGNED = "assigned"
    PICKED = "picked"
    DELIVERED = "delivered"


class AssignmentStatus(str, Enum):
    SUCCESS = "success"
    FAILED = "failed"


class FailureReason(str, Enum):
    """Human-readable causes written to the assignment log."""

    NO_PARTNER_IN_AREA = "No partners available in the area"
    ORDER_NOT_FOUND = "Order not found"
    PARTNER_NOT_FOUND = "Partner not found"
    PARTNER_AT_CAPACITY = "Partner is at maximum capacity"
    AREA_NOT_COVERED = "Partner does not cover this area"
    ORDER_NOT_PENDING = "Order is not pending"
    CONCURRENT_MODIFICATION = "Concurrent modification"
    PERSISTENCE_FAILURE = "Persistence failure"
