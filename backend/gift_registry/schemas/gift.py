"""Pydantic schemas for the Gift Catalog and reservations."""
from datetime import datetime
from decimal import Decimal
from typing import Optional
from pydantic import BaseModel


class GiftCreate(BaseModel):
    name: str
    description: Optional[str] = None
    suggested_price: Optional[Decimal] = None
    image_url: Optional[str] = None


class GiftOut(BaseModel):
    id: str
    name: str
    description: Optional[str] = None
    image_url: Optional[str] = None
    suggested_price: Optional[Decimal] = None
    is_selected: bool
    selected_by: Optional[str] = None
    selected_at: Optional[datetime] = None
    created_at: datetime

    model_config = {"from_attributes": True}


class SelectionOut(GiftOut):
    """Moderation view of a reserved gift, including who claimed it."""

    selected_by_name: Optional[str] = None
    selected_by_phone: Optional[str] = None


class ReserveRequest(BaseModel):
    # Default to the name/phone given at RSVP.
    guest_name: Optional[str] = None
    guest_phone: Optional[str] = None


class ReservationOut(BaseModel):
    gift_id: str
    result: str
