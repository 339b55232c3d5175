"""Pydantic schemas for profiles and identity tokens."""
from datetime import datetime
from typing import Optional
from pydantic import BaseModel


class ProfileCreate(BaseModel):
    user_id: str
    full_name: str
    role: str = "guest"
    email: Optional[str] = None
    phone: Optional[str] = None
    password: Optional[str] = None


class ProfileOut(BaseModel):
    user_id: str
    full_name: str
    role: str
    email: Optional[str] = None
    phone: Optional[str] = None
    created_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class RoleChange(BaseModel):
    role: str


class TokenOut(BaseModel):
    access_token: str
    token_type: str = "bearer"
    expires_at: datetime
