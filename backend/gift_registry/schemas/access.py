"""Pydantic schemas for the Access Gate and guest RSVP."""
from datetime import datetime
from pydantic import BaseModel


class AdmitRequest(BaseModel):
    code: str


class AccessTicketOut(BaseModel):
    access_ticket: str
    expires_at: datetime


class RSVPCreate(BaseModel):
    access_ticket: str
    full_name: str
    email: str
    phone: str


class GuestOut(BaseModel):
    id: str
    full_name: str
    email: str
    phone: str
    access_code_used: str
    created_at: datetime

    model_config = {"from_attributes": True}


class GuestSessionOut(BaseModel):
    guest_id: str
    full_name: str
    phone: str
    session_token: str
    expires_at: datetime
