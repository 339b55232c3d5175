"""GiftItem ORM model — the shared catalog."""
import uuid
from datetime import datetime, timezone
from sqlalchemy import Column, String, Boolean, DateTime, Numeric, Text, ForeignKey
from sqlalchemy.sql import func
from gift_registry.database import Base


class GiftItem(Base):
    __tablename__ = "gifts"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    name = Column(String(200), nullable=False)
    description = Column(Text, nullable=True)
    image_url = Column(String(500), nullable=True)
    suggested_price = Column(Numeric(10, 2), nullable=True)
    is_selected = Column(Boolean, nullable=False, default=False)
    # Weak back-reference: deleting a guest clears it, never deletes the gift.
    selected_by = Column(String(36), ForeignKey("guests.id", ondelete="SET NULL"), nullable=True)
    selected_by_name = Column(String(200), nullable=True)
    selected_by_phone = Column(String(50), nullable=True)
    selected_at = Column(DateTime(timezone=True), nullable=True)
    # Python-side timestamp so catalog order has sub-second resolution on SQLite too.
    created_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc), index=True)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
