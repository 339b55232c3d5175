"""EventConfig ORM model — the singleton event settings row."""
import uuid
from sqlalchemy import Column, String, Boolean, DateTime, Text
from sqlalchemy.sql import func
from gift_registry.database import Base


class EventConfig(Base):
    __tablename__ = "event_config"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    # Unique and always true, so at most one row can exist.
    singleton = Column(Boolean, nullable=False, unique=True, default=True)
    event_date = Column(DateTime(timezone=True), nullable=False)
    pix_key = Column(String(255), nullable=False)
    access_code = Column(String(64), nullable=False)
    welcome_message = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
