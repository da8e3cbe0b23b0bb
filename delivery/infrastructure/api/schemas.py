"""Request bodies accepted by the API."""

from __future__ import annotations

from pydantic import BaseModel, Field

from delivery.domain.value_objects.enums import OrderStatus, PartnerStatus


class PartnerCreate(BaseModel):
    name: str
    email: str
    phone: str
    status: PartnerStatus = PartnerStatus.ACTIVE
    areas: list[str] = Field(default_factory=list)
    shift_start: str | None = None  # HH:mm
    shift_end: str | None = None  # HH:mm
    rating: float = 5.0


class PartnerUpdate(BaseModel):
    """Partial update. current_load is not accepted here."""

    name: str | None = None
    email: str | None = None
    phone: str | None = None
    status: PartnerStatus | None = None
    areas: list[str] | None = None
    shift_start: str | None = None
    shift_end: str | None = None
    rating: float | None = None


class OrderItemIn(BaseModel):
    name: str
    quantity: int = Field(ge=1)
    price: float = Field(ge=0)


class OrderCreate(BaseModel):
    order_number: str | None = None
    customer_name: str
    customer_phone: str
    customer_address: str
    area: str
    scheduled_for: str  # HH:mm
    items: list[OrderItemIn] = Field(default_factory=list)
    total_amount: float | None = None


class OrderStatusUpdate(BaseModel):
    status: OrderStatus


class AssignRequest(BaseModel):
    order_id: int
    partner_id: int
