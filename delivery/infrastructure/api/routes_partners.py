"""Partner endpoints: CRUD plus the orders a partner carries."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from delivery.adapters.persistence.database import get_session
from delivery.application.ports.order_repo import OrderRepository
from delivery.application.ports.partner_repo import PartnerRepository
from delivery.domain.entities.partner import Partner
from delivery.domain.value_objects.enums import OrderStatus
from delivery.infrastructure.api.dependencies import get_order_repo, get_partner_repo
from delivery.infrastructure.api.schemas import PartnerCreate, PartnerUpdate
from delivery.infrastructure.api.serializers import serialize_order, serialize_partner

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/partners", tags=["partners"])


@router.get("")
async def list_partners(partners: PartnerRepository = Depends(get_partner_repo)):
    return [serialize_partner(p) for p in await partners.get_all()]


@router.get("/{partner_id}")
async def get_partner(partner_id: int, partners: PartnerRepository = Depends(get_partner_repo)):
    partner = await partners.get_by_id(partner_id)
    if not partner:
        raise HTTPException(status_code=404, detail="Partner not found")
    return serialize_partner(partner)


@router.get("/{partner_id}/orders")
async def get_partner_orders(
    partner_id: int,
    active_only: bool = False,
    partners: PartnerRepository = Depends(get_partner_repo),
    orders: OrderRepository = Depends(get_order_repo),
):
    """Orders assigned to a partner; ``active_only`` hides delivered ones."""
    if not await partners.get_by_id(partner_id):
        raise HTTPException(status_code=404, detail="Partner not found")

    result = await orders.get_by_partner(partner_id)
    if active_only:
        result = [o for o in result if o.status != OrderStatus.DELIVERED]
    return [serialize_order(o) for o in result]


@router.post("", status_code=201)
async def create_partner(
    body: PartnerCreate,
    partners: PartnerRepository = Depends(get_partner_repo),
    session: AsyncSession = Depends(get_session),
):
    if await partners.get_by_email(body.email):
        raise HTTPException(status_code=400, detail="Email already registered")

    partner = await partners.save(
        Partner(
            id=None,
            name=body.name,
            email=body.email,
            phone=body.phone,
            status=body.status,
            areas=list(dict.fromkeys(body.areas)),
            shift_start=body.shift_start,
            shift_end=body.shift_end,
            rating=body.rating,
        )
    )
    await session.commit()
    logger.info("Partner %s created (%s)", partner.id, partner.email)
    return serialize_partner(partner)


@router.put("/{partner_id}")
async def update_partner(
    partner_id: int,
    body: PartnerUpdate,
    partners: PartnerRepository = Depends(get_partner_repo),
    session: AsyncSession = Depends(get_session),
):
    partner = await partners.get_by_id(partner_id)
    if not partner:
        raise HTTPException(status_code=404, detail="Partner not found")

    changes = body.model_dump(exclude_unset=True)
    if "email" in changes and changes["email"] != partner.email:
        if await partners.get_by_email(changes["email"]):
            raise HTTPException(status_code=400, detail="Email already registered")
    if "areas" in changes and changes["areas"] is not None:
        changes["areas"] = list(dict.fromkeys(changes["areas"]))

    for field_name, value in changes.items():
        if value is not None:
            setattr(partner, field_name, value)

    await partners.update(partner)
    await session.commit()
    return serialize_partner(partner)


@router.delete("/{partner_id}")
async def delete_partner(
    partner_id: int,
    partners: PartnerRepository = Depends(get_partner_repo),
    orders: OrderRepository = Depends(get_order_repo),
    session: AsyncSession = Depends(get_session),
):
    """Delete a partner that has never carried an order."""
    partner = await partners.get_by_id(partner_id)
    if not partner:
        raise HTTPException(status_code=404, detail="Partner not found")

    # Orders keep a reference to their partner; deactivate instead
    if partner.current_load > 0 or await orders.get_by_partner(partner_id):
        raise HTTPException(status_code=400, detail="Partner has assigned orders")

    await partners.delete(partner_id)
    await session.commit()
    logger.info("Partner %s deleted", partner_id)
    return {"message": "Partner deleted successfully"}
