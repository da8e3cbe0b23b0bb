"""Domain entity → API response dict converters."""

from __future__ import annotations

from delivery.domain.entities.assignment import Assignment
from delivery.domain.entities.order import Order
from delivery.domain.entities.partner import Partner
from delivery.domain.errors import (
    AssignmentError,
    ConflictError,
    InvalidStateError,
    NotFoundError,
    PersistenceError,
)
from delivery.domain.policies.metrics import AssignmentMetrics, PartnerAvailability

ERROR_STATUS_CODES: dict[type[AssignmentError], int] = {
    NotFoundError: 404,
    InvalidStateError: 400,
    ConflictError: 409,
    PersistenceError: 503,
}


def status_code_for(error: AssignmentError) -> int:
    for error_cls, code in ERROR_STATUS_CODES.items():
        if isinstance(error, error_cls):
            return code
    return 500


def serialize_partner(p: Partner) -> dict:
    return {
        "id": p.id,
        "name": p.name,
        "email": p.email,
        "phone": p.phone,
        "status": p.status.value,
        "current_load": p.current_load,
        "areas": list(p.areas),
        "shift": {"start": p.shift_start, "end": p.shift_end},
        "metrics": {
            "rating": p.rating,
            "completed_orders": p.completed_orders,
            "cancelled_orders": p.cancelled_orders,
        },
    }


def serialize_order(o: Order) -> dict:
    return {
        "id": o.id,
        "order_number": o.order_number,
        "customer": {
            "name": o.customer_name,
            "phone": o.customer_phone,
            "address": o.customer_address,
        },
        "area": o.area,
        "items": [
            {"name": i.name, "quantity": i.quantity, "price": i.price} for i in o.items
        ],
        "status": o.status.value,
        "scheduled_for": o.scheduled_for,
        "assigned_to": o.assigned_to,
        "total_amount": o.total_amount,
        "created_at": o.created_at.isoformat() if o.created_at else None,
    }


def serialize_assignment(a: Assignment) -> dict:
    return {
        "id": a.id,
        "order_id": a.order_id,
        "partner_id": a.partner_id,
        "status": a.status.value,
        "reason": a.reason,
        "timestamp": a.timestamp.isoformat(),
    }


def serialize_metrics(m: AssignmentMetrics) -> dict:
    return {
        "total_assigned": m.total_assigned,
        "success_rate": m.success_rate,
        "failure_reasons": [
            {"reason": r.reason, "count": r.count} for r in m.failure_reasons
        ],
    }


def serialize_availability(a: PartnerAvailability) -> dict:
    return {"available": a.available, "busy": a.busy, "offline": a.offline}
