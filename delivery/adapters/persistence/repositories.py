"""SQLAlchemy repository implementations.

Load and status changes are conditional UPDATEs: the WHERE clause restates
the state that was read, and the row count tells whether the write won.
Each one runs in its own SAVEPOINT so a failing statement leaves the
request transaction usable for the rest of a batch.
"""

from __future__ import annotations

from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from delivery.adapters.persistence.models import (
    AssignmentModel,
    OrderModel,
    PartnerModel,
)
from delivery.application.ports.assignment_repo import AssignmentRepository
from delivery.application.ports.order_repo import OrderRepository
from delivery.application.ports.partner_repo import PartnerRepository
from delivery.domain.entities.assignment import Assignment
from delivery.domain.entities.order import Order, OrderItem
from delivery.domain.entities.partner import Partner
from delivery.domain.value_objects.enums import (
    AssignmentStatus,
    OrderStatus,
    PartnerStatus,
)

# ─── Mappers ─────────────────────────────────────────────────────────


def _partner_to_domain(m: PartnerModel) -> Partner:
    return Partner(
        id=m.id,
        name=m.name,
        email=m.email,
        phone=m.phone,
        status=PartnerStatus(m.status),
        current_load=m.current_load,
        areas=list(m.areas) if m.areas else [],
        shift_start=m.shift_start,
        shift_end=m.shift_end,
        rating=m.rating,
        completed_orders=m.completed_orders,
        cancelled_orders=m.cancelled_orders,
    )


def _order_to_domain(m: OrderModel) -> Order:
    return Order(
        id=m.id,
        order_number=m.order_number,
        customer_name=m.customer_name,
        customer_phone=m.customer_phone,
        customer_address=m.customer_address,
        area=m.area,
        scheduled_for=m.scheduled_for,
        items=[
            OrderItem(name=i["name"], quantity=int(i["quantity"]), price=float(i["price"]))
            for i in (m.items or [])
        ],
        total_amount=m.total_amount,
        status=OrderStatus(m.status),
        assigned_to=m.assigned_to,
        created_at=m.created_at,
    )


def _assignment_to_domain(m: AssignmentModel) -> Assignment:
    return Assignment(
        id=m.id,
        order_id=m.order_id,
        partner_id=m.partner_id,
        status=AssignmentStatus(m.status),
        reason=m.reason,
        timestamp=m.timestamp,
    )


# ─── Repositories ────────────────────────────────────────────────────


class SqlPartnerRepository(PartnerRepository):
    def __init__(self, session: AsyncSession):
        self._s = session

    async def save(self, partner: Partner) -> Partner:
        m = PartnerModel(
            name=partner.name,
            email=partner.email,
            phone=partner.phone,
            status=partner.status.value,
            current_load=partner.current_load,
            areas=list(partner.areas),
            shift_start=partner.shift_start,
            shift_end=partner.shift_end,
            rating=partner.rating,
            completed_orders=partner.completed_orders,
            cancelled_orders=partner.cancelled_orders,
        )
        self._s.add(m)
        await self._s.flush()
        partner.id = m.id
        return partner

    async def get_by_id(self, partner_id: int) -> Partner | None:
        m = await self._s.get(PartnerModel, partner_id)
        return _partner_to_domain(m) if m else None

    async def get_by_email(self, email: str) -> Partner | None:
        result = await self._s.execute(select(PartnerModel).where(PartnerModel.email == email))
        m = result.scalar_one_or_none()
        return _partner_to_domain(m) if m else None

    async def get_all(self) -> list[Partner]:
        result = await self._s.execute(select(PartnerModel).order_by(PartnerModel.id))
        return [_partner_to_domain(m) for m in result.scalars()]

    async def get_available(self, max_load: int) -> list[Partner]:
        stmt = select(PartnerModel).where(
            PartnerModel.status == PartnerStatus.ACTIVE.value,
            PartnerModel.current_load < max_load,
        )
        result = await self._s.execute(stmt.order_by(PartnerModel.id))
        return [_partner_to_domain(m) for m in result.scalars()]

    async def update(self, partner: Partner) -> Partner:
        await self._s.execute(
            update(PartnerModel)
            .where(PartnerModel.id == partner.id)
            .values(
                name=partner.name,
                email=partner.email,
                phone=partner.phone,
                status=partner.status.value,
                areas=list(partner.areas),
                shift_start=partner.shift_start,
                shift_end=partner.shift_end,
                rating=partner.rating,
            )
        )
        await self._s.flush()
        return partner

    async def delete(self, partner_id: int) -> bool:
        result = await self._s.execute(delete(PartnerModel).where(PartnerModel.id == partner_id))
        await self._s.flush()
        return result.rowcount == 1

    async def try_increment_load(self, partner_id: int, max_load: int) -> bool:
        async with self._s.begin_nested():
            result = await self._s.execute(
                update(PartnerModel)
                .where(
                    PartnerModel.id == partner_id,
                    PartnerModel.current_load < max_load,
                )
                .values(current_load=PartnerModel.current_load + 1)
            )
        return result.rowcount == 1

    async def try_decrement_load(self, partner_id: int) -> bool:
        async with self._s.begin_nested():
            result = await self._s.execute(
                update(PartnerModel)
                .where(
                    PartnerModel.id == partner_id,
                    PartnerModel.current_load > 0,
                )
                .values(current_load=PartnerModel.current_load - 1)
            )
        return result.rowcount == 1

    async def increment_completed(self, partner_id: int) -> None:
        await self._s.execute(
            update(PartnerModel)
            .where(PartnerModel.id == partner_id)
            .values(completed_orders=PartnerModel.completed_orders + 1)
        )
        await self._s.flush()


class SqlOrderRepository(OrderRepository):
    def __init__(self, session: AsyncSession):
        self._s = session

    async def save(self, order: Order) -> Order:
        m = OrderModel(
            order_number=order.order_number,
            customer_name=order.customer_name,
            customer_phone=order.customer_phone,
            customer_address=order.customer_address,
            area=order.area,
            items=[
                {"name": i.name, "quantity": i.quantity, "price": i.price}
                for i in order.items
            ],
            status=order.status.value,
            scheduled_for=order.scheduled_for,
            assigned_to=order.assigned_to,
            total_amount=order.total_amount,
        )
        self._s.add(m)
        await self._s.flush()
        await self._s.refresh(m, ["created_at"])
        order.id = m.id
        order.created_at = m.created_at
        return order

    async def get_by_id(self, order_id: int) -> Order | None:
        m = await self._s.get(OrderModel, order_id)
        return _order_to_domain(m) if m else None

    async def get_by_number(self, order_number: str) -> Order | None:
        result = await self._s.execute(
            select(OrderModel).where(OrderModel.order_number == order_number)
        )
        m = result.scalar_one_or_none()
        return _order_to_domain(m) if m else None

    async def get_all(self, status: OrderStatus | None = None) -> list[Order]:
        stmt = select(OrderModel)
        if status is not None:
            stmt = stmt.where(OrderModel.status == status.value)
        result = await self._s.execute(stmt.order_by(OrderModel.id))
        return [_order_to_domain(m) for m in result.scalars()]

    async def get_by_partner(self, partner_id: int) -> list[Order]:
        result = await self._s.execute(
            select(OrderModel)
            .where(OrderModel.assigned_to == partner_id)
            .order_by(OrderModel.id)
        )
        return [_order_to_domain(m) for m in result.scalars()]

    async def get_pending(self) -> list[Order]:
        result = await self._s.execute(
            select(OrderModel)
            .where(OrderModel.status == OrderStatus.PENDING.value)
            .order_by(OrderModel.created_at, OrderModel.id)
        )
        return [_order_to_domain(m) for m in result.scalars()]

    async def mark_assigned(self, order_id: int, partner_id: int) -> bool:
        async with self._s.begin_nested():
            result = await self._s.execute(
                update(OrderModel)
                .where(
                    OrderModel.id == order_id,
                    OrderModel.status == OrderStatus.PENDING.value,
                )
                .values(status=OrderStatus.ASSIGNED.value, assigned_to=partner_id)
            )
        return result.rowcount == 1

    async def unassign(self, order_id: int, partner_id: int) -> bool:
        async with self._s.begin_nested():
            result = await self._s.execute(
                update(OrderModel)
                .where(
                    OrderModel.id == order_id,
                    OrderModel.assigned_to == partner_id,
                    OrderModel.status == OrderStatus.ASSIGNED.value,
                )
                .values(status=OrderStatus.PENDING.value, assigned_to=None)
            )
        return result.rowcount == 1

    async def update_status(
        self, order_id: int, expected: OrderStatus, new: OrderStatus
    ) -> bool:
        async with self._s.begin_nested():
            result = await self._s.execute(
                update(OrderModel)
                .where(
                    OrderModel.id == order_id,
                    OrderModel.status == expected.value,
                )
                .values(status=new.value)
            )
        return result.rowcount == 1


class SqlAssignmentRepository(AssignmentRepository):
    def __init__(self, session: AsyncSession):
        self._s = session

    async def save(self, assignment: Assignment) -> Assignment:
        m = AssignmentModel(
            order_id=assignment.order_id,
            partner_id=assignment.partner_id,
            status=assignment.status.value,
            reason=assignment.reason,
            timestamp=assignment.timestamp,
        )
        async with self._s.begin_nested():
            self._s.add(m)
        assignment.id = m.id
        return assignment

    async def get_by_order(self, order_id: int) -> list[Assignment]:
        result = await self._s.execute(
            select(AssignmentModel)
            .where(AssignmentModel.order_id == order_id)
            .order_by(AssignmentModel.id)
        )
        return [_assignment_to_domain(m) for m in result.scalars()]

    async def get_all(self) -> list[Assignment]:
        result = await self._s.execute(select(AssignmentModel).order_by(AssignmentModel.id))
        return [_assignment_to_domain(m) for m in result.scalars()]
