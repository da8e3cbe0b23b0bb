"""Tests for API serializers and error → status code mapping."""

from datetime import datetime, timezone

from delivery.domain.entities.assignment import Assignment
from delivery.domain.entities.order import Order, OrderItem
from delivery.domain.entities.partner import Partner
from delivery.domain.errors import (
    AssignmentError,
    ConflictError,
    InvalidStateError,
    NotFoundError,
    PersistenceError,
)
from delivery.domain.policies.metrics import AssignmentMetrics, FailureReasonCount
from delivery.domain.value_objects.enums import FailureReason
from delivery.infrastructure.api.serializers import (
    serialize_assignment,
    serialize_metrics,
    serialize_order,
    serialize_partner,
    status_code_for,
)


def test_status_codes():
    assert status_code_for(NotFoundError("x")) == 404
    assert status_code_for(InvalidStateError("x")) == 400
    assert status_code_for(ConflictError("x")) == 409
    assert status_code_for(PersistenceError("x")) == 503
    assert status_code_for(AssignmentError("x")) == 500


def test_serialize_partner_nests_shift_and_metrics():
    p = Partner(
        id=3, name="Ana", email="ana@example.com", phone="555",
        areas=["Downtown"], shift_start="09:00", shift_end="17:00",
        current_load=1, completed_orders=12,
    )
    data = serialize_partner(p)
    assert data["status"] == "active"
    assert data["shift"] == {"start": "09:00", "end": "17:00"}
    assert data["metrics"]["completed_orders"] == 12
    assert data["current_load"] == 1


def test_serialize_order():
    o = Order(
        id=1, order_number="ORD-1", customer_name="Jane", customer_phone="555",
        customer_address="1 Main St", area="Downtown", scheduled_for="12:30",
        items=[OrderItem("Pizza", 2, 9.5)],
        created_at=datetime(2026, 5, 1, 10, 0, tzinfo=timezone.utc),
    )
    data = serialize_order(o)
    assert data["customer"] == {"name": "Jane", "phone": "555", "address": "1 Main St"}
    assert data["items"] == [{"name": "Pizza", "quantity": 2, "price": 9.5}]
    assert data["total_amount"] == 19.0
    assert data["status"] == "pending"
    assert data["created_at"] == "2026-05-01T10:00:00+00:00"


def test_serialize_failed_assignment():
    a = Assignment.failed(4, FailureReason.AREA_NOT_COVERED, 2)
    data = serialize_assignment(a)
    assert data["status"] == "failed"
    assert data["reason"] == "Partner does not cover this area"
    assert data["partner_id"] == 2
    assert data["timestamp"].endswith("+00:00")


def test_serialize_metrics():
    m = AssignmentMetrics(
        total_assigned=3, success_rate=66.66666666666667,
        failure_reasons=[FailureReasonCount("Order not found", 1)],
    )
    assert serialize_metrics(m)["failure_reasons"] == [{"reason": "Order not found", "count": 1}]
