"""Pydantic schemas for the Contribution Ledger and Verification Workflow."""
from datetime import datetime
from decimal import Decimal
from typing import Optional
from pydantic import BaseModel


class ContributionCreate(BaseModel):
    amount: Decimal
    contributor_name: str
    contributor_phone: Optional[str] = None
    receipt_ref: str


class ContributionCreated(BaseModel):
    id: str
    status: str


class ContributionOut(BaseModel):
    id: str
    contributor_name: str
    contributor_phone: Optional[str] = None
    amount: Decimal
    receipt_url: str
    receipt_link: Optional[str] = None
    status: str
    version: int
    decided_at: Optional[datetime] = None
    decided_by: Optional[str] = None
    created_at: datetime

    model_config = {"from_attributes": True}


class ReceiptOut(BaseModel):
    receipt_ref: str


class PixKeyOut(BaseModel):
    pix_key: str


class DecisionRequest(BaseModel):
    outcome: str  # verified, rejected
    version: Optional[int] = None  # optional optimistic-lock check


class DecisionOut(BaseModel):
    id: str
    contribution_id: str
    actor_user_id: str
    from_status: str
    to_status: str
    created_at: datetime

    model_config = {"from_attributes": True}
