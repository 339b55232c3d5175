"""Pydantic schemas for event configuration."""
from datetime import datetime
from typing import Optional
from pydantic import BaseModel


class EventConfigUpdate(BaseModel):
    event_date: datetime  # naive values are read in EVENT_TIMEZONE
    pix_key: str
    access_code: str
    welcome_message: Optional[str] = None


class EventConfigOut(BaseModel):
    id: str
    event_date: datetime
    pix_key: str
    access_code: str
    welcome_message: Optional[str] = None
    updated_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class PublicEventOut(BaseModel):
    event_date: datetime
    event_date_local: datetime
    timezone: str
    welcome_message: Optional[str] = None
    pix_key: str


class AccessCodeSuggestion(BaseModel):
    access_code: str
