"""HTTP tests for the API routers, backed by in-memory repositories."""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from delivery.adapters.persistence.database import get_session
from delivery.config import settings
from delivery.domain.value_objects.enums import OrderStatus, PartnerStatus
from delivery.infrastructure.api.dependencies import (
    get_assignment_repo,
    get_order_repo,
    get_partner_repo,
)
from delivery.main import create_app


class FakeSession:
    def __init__(self):
        self.commits = 0
        self.rollbacks = 0

    async def commit(self):
        self.commits += 1

    async def rollback(self):
        self.rollbacks += 1

    async def execute(self, statement):
        return _ScalarResult(1)


class _ScalarResult:
    def __init__(self, value):
        self._value = value

    def scalar(self):
        return self._value


@pytest.fixture
def session():
    return FakeSession()


@pytest.fixture
def client(session, order_repo, partner_repo, assignment_repo):
    app = create_app()
    app.dependency_overrides[get_session] = lambda: session
    app.dependency_overrides[get_order_repo] = lambda: order_repo
    app.dependency_overrides[get_partner_repo] = lambda: partner_repo
    app.dependency_overrides[get_assignment_repo] = lambda: assignment_repo
    # No context manager: the lifespan (real database warm-up) is not run
    return TestClient(app)


# ─── Health ──────────────────────────────────────────────────────────


def test_health(client, order_repo, order_factory):
    order_repo.add(order_factory(1))
    order_repo.add(order_factory(2, status=OrderStatus.DELIVERED))

    resp = client.get("/api/health")

    assert resp.status_code == 200
    assert resp.json() == {
        "status": "ok",
        "database": "connected",
        "max_partner_load": settings.max_partner_load,
        "pending_orders": 1,
    }


def test_health_degraded_when_store_fails(client, order_repo, monkeypatch):
    async def broken():
        raise ConnectionError("connection refused")

    monkeypatch.setattr(order_repo, "get_pending", broken)

    body = client.get("/api/health").json()

    assert body["status"] == "degraded"
    assert body["database"] == "error: connection refused"
    assert body["pending_orders"] is None


def test_cors_allows_configured_origin(client):
    origin = settings.cors_origins[0]
    resp = client.get("/api/health", headers={"Origin": origin})
    assert resp.headers["access-control-allow-origin"] == origin


# ─── Partners ────────────────────────────────────────────────────────


def test_create_and_get_partner(client, session):
    resp = client.post("/api/partners", json={
        "name": "Ana", "email": "ana@example.com", "phone": "555",
        "areas": ["Downtown", "Harbor", "Downtown"], "shift_start": "09:00",
    })
    assert resp.status_code == 201
    body = resp.json()
    assert body["areas"] == ["Downtown", "Harbor"]
    assert body["current_load"] == 0
    assert session.commits == 1

    resp = client.get(f"/api/partners/{body['id']}")
    assert resp.status_code == 200
    assert resp.json()["shift"]["start"] == "09:00"


def test_duplicate_partner_email(client, partner_repo, partner_factory):
    partner_repo.add(partner_factory(1))
    resp = client.post("/api/partners", json={
        "name": "Copy", "email": "partner1@example.com", "phone": "555",
    })
    assert resp.status_code == 400


def test_partner_not_found(client):
    assert client.get("/api/partners/404").status_code == 404


def test_update_partner_never_touches_load(client, partner_repo, partner_factory):
    partner_repo.add(partner_factory(1, load=2))
    resp = client.put("/api/partners/1", json={"status": "inactive", "areas": ["Uptown"]})
    assert resp.status_code == 200
    stored = partner_repo.partners[1]
    assert stored.status == PartnerStatus.INACTIVE
    assert stored.areas == ["Uptown"]
    assert stored.current_load == 2


def test_delete_partner(client, partner_repo, partner_factory):
    partner_repo.add(partner_factory(1))
    assert client.delete("/api/partners/1").status_code == 200
    assert 1 not in partner_repo.partners


def test_delete_partner_with_orders_rejected(client, partner_repo, order_repo, partner_factory, order_factory):
    partner_repo.add(partner_factory(1))
    order_repo.add(order_factory(1, status=OrderStatus.DELIVERED, assigned_to=1))
    resp = client.delete("/api/partners/1")
    assert resp.status_code == 400
    assert 1 in partner_repo.partners


def test_partner_orders_active_only(client, partner_repo, order_repo, partner_factory, order_factory):
    partner_repo.add(partner_factory(1, load=1))
    order_repo.add(order_factory(1, status=OrderStatus.DELIVERED, assigned_to=1))
    order_repo.add(order_factory(2, status=OrderStatus.ASSIGNED, assigned_to=1))
    order_repo.add(order_factory(3))

    assert [o["id"] for o in client.get("/api/partners/1/orders").json()] == [1, 2]
    active = client.get("/api/partners/1/orders", params={"active_only": True}).json()
    assert [o["id"] for o in active] == [2]


# ─── Orders ──────────────────────────────────────────────────────────


def test_create_order_generates_number(client):
    resp = client.post("/api/orders", json={
        "customer_name": "Jane", "customer_phone": "555", "customer_address": "1 Main St",
        "area": "Downtown", "scheduled_for": "12:30",
        "items": [{"name": "Pizza", "quantity": 2, "price": 9.5}],
    })
    assert resp.status_code == 201
    body = resp.json()
    assert body["order_number"].startswith("ORD-")
    assert body["status"] == "pending"
    assert body["total_amount"] == 19.0


def test_create_order_rejects_bad_quantity(client):
    resp = client.post("/api/orders", json={
        "customer_name": "Jane", "customer_phone": "555", "customer_address": "1 Main St",
        "area": "Downtown", "scheduled_for": "12:30",
        "items": [{"name": "Pizza", "quantity": 0, "price": 9.5}],
    })
    assert resp.status_code == 422


def test_duplicate_order_number(client, order_repo, order_factory):
    order_repo.add(order_factory(1))
    resp = client.post("/api/orders", json={
        "order_number": "ORD-1", "customer_name": "Jane", "customer_phone": "555",
        "customer_address": "1 Main St", "area": "Downtown", "scheduled_for": "12:30",
    })
    assert resp.status_code == 400


def test_list_orders_by_status(client, order_repo, order_factory):
    order_repo.add(order_factory(1))
    order_repo.add(order_factory(2, status=OrderStatus.ASSIGNED, assigned_to=1))
    resp = client.get("/api/orders", params={"status": "pending"})
    assert [o["id"] for o in resp.json()] == [1]


def test_assign_order(client, session, order_repo, partner_repo, order_factory, partner_factory):
    partner_repo.add(partner_factory(1))
    order_repo.add(order_factory(1))

    resp = client.post("/api/orders/assign", json={"order_id": 1, "partner_id": 1})

    assert resp.status_code == 200
    body = resp.json()
    assert body["message"] == "Order assigned successfully"
    assert body["assignment"]["status"] == "success"
    assert session.commits == 1


def test_assign_order_failure_is_logged_and_committed(
    client, session, order_repo, partner_repo, assignment_repo, order_factory, partner_factory
):
    partner_repo.add(partner_factory(1, areas=["Harbor"]))
    order_repo.add(order_factory(1, area="Downtown"))

    resp = client.post("/api/orders/assign", json={"order_id": 1, "partner_id": 1})

    assert resp.status_code == 400
    detail = resp.json()["detail"]
    assert detail["message"] == "Partner does not cover this area"
    assert detail["assignment"]["status"] == "failed"
    assert session.commits == 1
    assert len(assignment_repo.assignments) == 1


def test_assign_order_unrecorded_success_leaves_order_pending(
    client, session, order_repo, partner_repo, assignment_repo, order_factory, partner_factory, monkeypatch
):
    partner_repo.add(partner_factory(1))
    order_repo.add(order_factory(1))
    real_save = assignment_repo.save

    async def success_save_fails(assignment):
        if assignment.is_success():
            raise ConnectionError("connection reset")
        return await real_save(assignment)

    monkeypatch.setattr(assignment_repo, "save", success_save_fails)

    resp = client.post("/api/orders/assign", json={"order_id": 1, "partner_id": 1})

    assert resp.status_code == 503
    assert resp.json()["detail"]["message"] == "Persistence failure"
    assert order_repo.orders[1].status == OrderStatus.PENDING
    assert partner_repo.partners[1].current_load == 0
    assert session.commits == 1


def test_assign_missing_order(client):
    resp = client.post("/api/orders/assign", json={"order_id": 9, "partner_id": 9})
    assert resp.status_code == 404
    assert resp.json()["detail"]["message"] == "Order not found"


def test_update_status_flow(client, order_repo, partner_repo, order_factory, partner_factory):
    partner_repo.add(partner_factory(1, load=1))
    order_repo.add(order_factory(1, status=OrderStatus.ASSIGNED, assigned_to=1))

    assert client.put("/api/orders/1/status", json={"status": "picked"}).status_code == 200
    resp = client.put("/api/orders/1/status", json={"status": "delivered"})

    assert resp.status_code == 200
    assert resp.json()["status"] == "delivered"
    assert partner_repo.partners[1].current_load == 0


def test_update_status_invalid_transition(client, session, order_repo, order_factory):
    order_repo.add(order_factory(1))
    resp = client.put("/api/orders/1/status", json={"status": "delivered"})
    assert resp.status_code == 400
    assert session.rollbacks == 1


# ─── Assignments ─────────────────────────────────────────────────────


def test_bulk_run_and_metrics(client, order_repo, partner_repo, order_factory, partner_factory):
    partner_repo.add(partner_factory(1, areas=["A"]))
    order_repo.add(order_factory(1, area="A"))
    order_repo.add(order_factory(2, area="Suburbs"))

    resp = client.post("/api/assignments/run")
    assert resp.status_code == 200
    body = resp.json()
    assert body["message"] == "1 orders assigned successfully"
    assert body["success_count"] == 1
    assert [a["status"] for a in body["assignments"]] == ["success", "failed"]

    metrics = client.get("/api/assignments/metrics").json()
    assert metrics["total_assigned"] == 2
    assert metrics["success_rate"] == 50.0
    assert metrics["failure_reasons"] == [
        {"reason": "No partners available in the area", "count": 1},
    ]

    log = client.get("/api/assignments", params={"order_id": 2}).json()
    assert len(log) == 1


def test_partner_availability(client, partner_repo, partner_factory):
    partner_repo.add(partner_factory(1))
    partner_repo.add(partner_factory(2, load=3))
    partner_repo.add(partner_factory(3, status=PartnerStatus.INACTIVE))

    resp = client.get("/api/assignments/partners")
    assert resp.json() == {"available": 1, "busy": 1, "offline": 1}
