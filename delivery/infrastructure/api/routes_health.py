"""Health check endpoint."""

import logging

from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from delivery.adapters.persistence.database import get_session
from delivery.application.ports.order_repo import OrderRepository
from delivery.config import settings
from delivery.infrastructure.api.dependencies import get_order_repo

logger = logging.getLogger(__name__)

router = APIRouter(tags=["health"])


@router.get("/health")
async def health_check(
    session: AsyncSession = Depends(get_session),
    orders: OrderRepository = Depends(get_order_repo),
):
    """Database connectivity, the dispatch capacity limit and the pending backlog size."""
    pending_orders = None
    try:
        await session.execute(text("SELECT 1"))
        pending_orders = len(await orders.get_pending())
        db_status = "connected"
    except Exception as e:
        logger.warning("Health check failed: %s", e)
        db_status = f"error: {e}"

    return {
        "status": "ok" if db_status == "connected" else "degraded",
        "database": db_status,
        "max_partner_load": settings.max_partner_load,
        "pending_orders": pending_orders,
    }
