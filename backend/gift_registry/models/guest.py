"""Guest ORM model — one row per RSVP, append-only."""
import uuid
from datetime import datetime, timezone
from sqlalchemy import Column, String, DateTime
from gift_registry.database import Base


class Guest(Base):
    __tablename__ = "guests"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    full_name = Column(String(200), nullable=False)
    email = Column(String(255), nullable=False)  # not unique: repeated RSVPs are allowed
    phone = Column(String(50), nullable=False)
    access_code_used = Column(String(64), nullable=False)
    session_id = Column(String(64), nullable=False, unique=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc))
