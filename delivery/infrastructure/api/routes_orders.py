"""Order endpoints: CRUD, status updates and targeted assignment."""

from __future__ import annotations

import logging
import random

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from delivery.adapters.persistence.database import get_session
from delivery.application.ports.order_repo import OrderRepository
from delivery.application.use_cases.assign_order import AssignOrderUseCase
from delivery.application.use_cases.update_order_status import UpdateOrderStatusUseCase
from delivery.domain.entities.order import Order, OrderItem
from delivery.domain.errors import AssignmentError
from delivery.domain.value_objects.enums import OrderStatus
from delivery.infrastructure.api.dependencies import (
    get_assign_order_uc,
    get_order_repo,
    get_update_order_status_uc,
)
from delivery.infrastructure.api.schemas import AssignRequest, OrderCreate, OrderStatusUpdate
from delivery.infrastructure.api.serializers import (
    serialize_assignment,
    serialize_order,
    status_code_for,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/orders", tags=["orders"])


def _generate_order_number() -> str:
    return f"ORD-{random.randint(100000, 999999)}"


@router.get("")
async def list_orders(
    status: OrderStatus | None = None,
    orders: OrderRepository = Depends(get_order_repo),
):
    return [serialize_order(o) for o in await orders.get_all(status)]


@router.get("/{order_id}")
async def get_order(order_id: int, orders: OrderRepository = Depends(get_order_repo)):
    order = await orders.get_by_id(order_id)
    if not order:
        raise HTTPException(status_code=404, detail="Order not found")
    return serialize_order(order)


@router.post("", status_code=201)
async def create_order(
    body: OrderCreate,
    orders: OrderRepository = Depends(get_order_repo),
    session: AsyncSession = Depends(get_session),
):
    """Create a pending order. A number is generated when none is given."""
    order_number = body.order_number or _generate_order_number()
    if await orders.get_by_number(order_number):
        raise HTTPException(status_code=400, detail="Order number already exists")

    order = await orders.save(
        Order(
            id=None,
            order_number=order_number,
            customer_name=body.customer_name,
            customer_phone=body.customer_phone,
            customer_address=body.customer_address,
            area=body.area,
            scheduled_for=body.scheduled_for,
            items=[OrderItem(name=i.name, quantity=i.quantity, price=i.price) for i in body.items],
            total_amount=body.total_amount,
        )
    )
    await session.commit()
    logger.info("Order %s created in %s", order.order_number, order.area)
    return serialize_order(order)


@router.put("/{order_id}/status")
async def update_order_status(
    order_id: int,
    body: OrderStatusUpdate,
    uc: UpdateOrderStatusUseCase = Depends(get_update_order_status_uc),
    session: AsyncSession = Depends(get_session),
):
    try:
        order = await uc.execute(order_id, body.status)
    except AssignmentError as e:
        await session.rollback()
        raise HTTPException(status_code=status_code_for(e), detail=e.reason)

    await session.commit()
    return serialize_order(order)


@router.post("/assign")
async def assign_order(
    body: AssignRequest,
    uc: AssignOrderUseCase = Depends(get_assign_order_uc),
    session: AsyncSession = Depends(get_session),
):
    """Assign one order to one partner chosen by the operator."""
    try:
        assignment = await uc.execute(body.order_id, body.partner_id)
    except AssignmentError as e:
        # Keep the failed attempt in the log
        try:
            await session.commit()
        except Exception:
            logger.exception("Could not commit failed assignment for order %s", body.order_id)
            await session.rollback()

        detail = {"message": e.reason}
        if e.assignment is not None:
            detail["assignment"] = serialize_assignment(e.assignment)
        raise HTTPException(status_code=status_code_for(e), detail=detail)

    await session.commit()
    return {
        "message": "Order assigned successfully",
        "assignment": serialize_assignment(assignment),
    }
