"""Pytest configuration, in-memory repositories and shared fixtures."""

from __future__ import annotations

import copy
from datetime import datetime, timedelta, timezone

import pytest

from delivery.application.ports.assignment_repo import AssignmentRepository
from delivery.application.ports.order_repo import OrderRepository
from delivery.application.ports.partner_repo import PartnerRepository
from delivery.domain.entities.assignment import Assignment
from delivery.domain.entities.order import Order, OrderItem
from delivery.domain.entities.partner import Partner
from delivery.domain.value_objects.enums import OrderStatus, PartnerStatus

# ─── In-memory fakes ────────────────────────────────────────────────
#
# Stored entities are copied on the way in and out, like rows in a real
# store: mutating a returned object never changes what the repo holds.

_EPOCH = datetime(2026, 1, 1, 9, 0, tzinfo=timezone.utc)


class InMemoryPartnerRepo(PartnerRepository):
    def __init__(self, partners: list[Partner] | None = None):
        self.partners: dict[int, Partner] = {}
        for p in partners or []:
            self.add(p)

    def add(self, partner: Partner) -> Partner:
        stored = copy.deepcopy(partner)
        if stored.id is None:
            stored.id = max(self.partners, default=0) + 1
        self.partners[stored.id] = stored
        return copy.deepcopy(stored)

    async def save(self, partner):
        saved = self.add(partner)
        partner.id = saved.id
        return saved

    async def get_by_id(self, partner_id):
        p = self.partners.get(partner_id)
        return copy.deepcopy(p) if p else None

    async def get_by_email(self, email):
        p = next((p for p in self.partners.values() if p.email == email), None)
        return copy.deepcopy(p) if p else None

    async def get_all(self):
        return [copy.deepcopy(self.partners[k]) for k in sorted(self.partners)]

    async def get_available(self, max_load):
        return [
            p for p in await self.get_all()
            if p.is_active() and p.current_load < max_load
        ]

    async def update(self, partner):
        stored = self.partners[partner.id]
        updated = copy.deepcopy(partner)
        updated.current_load = stored.current_load
        self.partners[partner.id] = updated
        return copy.deepcopy(updated)

    async def delete(self, partner_id):
        return self.partners.pop(partner_id, None) is not None

    async def try_increment_load(self, partner_id, max_load):
        p = self.partners.get(partner_id)
        if p is None or p.current_load >= max_load:
            return False
        p.current_load += 1
        return True

    async def try_decrement_load(self, partner_id):
        p = self.partners.get(partner_id)
        if p is None or p.current_load <= 0:
            return False
        p.current_load -= 1
        return True

    async def increment_completed(self, partner_id):
        if partner_id in self.partners:
            self.partners[partner_id].completed_orders += 1


class InMemoryOrderRepo(OrderRepository):
    def __init__(self, orders: list[Order] | None = None):
        self.orders: dict[int, Order] = {}
        for o in orders or []:
            self.add(o)

    def add(self, order: Order) -> Order:
        stored = copy.deepcopy(order)
        if stored.id is None:
            stored.id = max(self.orders, default=0) + 1
        if stored.created_at is None:
            stored.created_at = _EPOCH + timedelta(minutes=stored.id)
        self.orders[stored.id] = stored
        return copy.deepcopy(stored)

    async def save(self, order):
        saved = self.add(order)
        order.id = saved.id
        return saved

    async def get_by_id(self, order_id):
        o = self.orders.get(order_id)
        return copy.deepcopy(o) if o else None

    async def get_by_number(self, order_number):
        o = next((o for o in self.orders.values() if o.order_number == order_number), None)
        return copy.deepcopy(o) if o else None

    async def get_all(self, status=None):
        return [
            copy.deepcopy(self.orders[k]) for k in sorted(self.orders)
            if status is None or self.orders[k].status == status
        ]

    async def get_by_partner(self, partner_id):
        return [o for o in await self.get_all() if o.assigned_to == partner_id]

    async def get_pending(self):
        pending = [o for o in self.orders.values() if o.status == OrderStatus.PENDING]
        pending.sort(key=lambda o: (o.created_at, o.id))
        return [copy.deepcopy(o) for o in pending]

    async def mark_assigned(self, order_id, partner_id):
        o = self.orders.get(order_id)
        if o is None or o.status != OrderStatus.PENDING:
            return False
        o.status = OrderStatus.ASSIGNED
        o.assigned_to = partner_id
        return True

    async def unassign(self, order_id, partner_id):
        o = self.orders.get(order_id)
        if o is None or o.status != OrderStatus.ASSIGNED or o.assigned_to != partner_id:
            return False
        o.status = OrderStatus.PENDING
        o.assigned_to = None
        return True

    async def update_status(self, order_id, expected, new):
        o = self.orders.get(order_id)
        if o is None or o.status != expected:
            return False
        o.status = new
        return True


class InMemoryAssignmentRepo(AssignmentRepository):
    def __init__(self):
        self.assignments: list[Assignment] = []

    async def save(self, assignment):
        stored = copy.deepcopy(assignment)
        stored.id = len(self.assignments) + 1
        self.assignments.append(stored)
        return copy.deepcopy(stored)

    async def get_by_order(self, order_id):
        return [copy.deepcopy(a) for a in self.assignments if a.order_id == order_id]

    async def get_all(self):
        return [copy.deepcopy(a) for a in self.assignments]


# ─── Builders ───────────────────────────────────────────────────────


def make_partner(
    pid: int | None = None,
    areas=("Downtown",),
    load: int = 0,
    status: PartnerStatus = PartnerStatus.ACTIVE,
    name: str | None = None,
) -> Partner:
    return Partner(
        id=pid,
        name=name or f"Partner {pid}",
        email=f"partner{pid}@example.com",
        phone="555-0100",
        status=status,
        current_load=load,
        areas=list(areas),
    )


def make_order(
    oid: int | None = None,
    area: str = "Downtown",
    status: OrderStatus = OrderStatus.PENDING,
    assigned_to: int | None = None,
    created_at: datetime | None = None,
) -> Order:
    return Order(
        id=oid,
        order_number=f"ORD-{oid}",
        customer_name="Jane Doe",
        customer_phone="555-0199",
        customer_address="1 Main St",
        area=area,
        scheduled_for="12:30",
        items=[OrderItem(name="Pizza", quantity=2, price=9.5)],
        status=status,
        assigned_to=assigned_to,
        created_at=created_at,
    )


# ─── Fixtures ───────────────────────────────────────────────────────


@pytest.fixture
def partner_repo():
    return InMemoryPartnerRepo()


@pytest.fixture
def order_repo():
    return InMemoryOrderRepo()


@pytest.fixture
def assignment_repo():
    return InMemoryAssignmentRepo()


@pytest.fixture
def repo_set():
    """Build a fresh (orders, partners, assignments) trio from entity lists."""

    def _build(orders=(), partners=()):
        return (
            InMemoryOrderRepo(list(orders)),
            InMemoryPartnerRepo(list(partners)),
            InMemoryAssignmentRepo(),
        )

    return _build


@pytest.fixture
def partner_factory():
    return make_partner


@pytest.fixture
def order_factory():
    return make_order
