"""Event configuration — the singleton EventConfig row."""
import secrets
import string
from datetime import datetime
from typing import Any, Optional

import pytz
from sqlalchemy.orm import Session

from gift_registry.config import settings
from gift_registry.database import commit
from gift_registry.errors import NotFoundError, ValidationError
from gift_registry.models.event_config import EventConfig

ACCESS_CODE_ALPHABET = string.ascii_uppercase + string.digits


def get_config(db: Session) -> Optional[EventConfig]:
    return db.query(EventConfig).first()


def require_config(db: Session) -> EventConfig:
    config = get_config(db)
    if not config:
        raise NotFoundError("Event has not been configured yet")
    return config


def to_utc(value: datetime) -> datetime:
    """Interpret naive datetimes in the event's timezone and convert to UTC."""
    if value.tzinfo is None:
        value = pytz.timezone(settings.EVENT_TIMEZONE).localize(value)
    return value.astimezone(pytz.utc)


def save_config(
    db: Session,
    event_date: datetime,
    pix_key: str,
    access_code: str,
    welcome_message: Optional[str] = None,
) -> EventConfig:
    """Create the singleton on first save, update it afterwards."""
    pix_key = (pix_key or "").strip()
    access_code = (access_code or "").strip()
    if not pix_key:
        raise ValidationError("pix_key is required")
    if not access_code:
        raise ValidationError("access_code is required")

    config = get_config(db)
    if config is None:
        config = EventConfig(singleton=True)
        db.add(config)
    config.event_date = to_utc(event_date)
    config.pix_key = pix_key
    config.access_code = access_code
    config.welcome_message = welcome_message
    commit(db)
    db.refresh(config)
    return config


def public_event_info(db: Session) -> dict[str, Any]:
    """Event details shown to admitted guests. Never includes the access code."""
    config = require_config(db)
    event_date = config.event_date
    if event_date.tzinfo is None:
        # SQLite hands back naive values; they were stored as UTC.
        event_date = pytz.utc.localize(event_date)
    return {
        "event_date": event_date,
        "event_date_local": event_date.astimezone(pytz.timezone(settings.EVENT_TIMEZONE)),
        "timezone": settings.EVENT_TIMEZONE,
        "welcome_message": config.welcome_message,
        "pix_key": config.pix_key,
    }


def generate_access_code(length: int = 8) -> str:
    return "".join(secrets.choice(ACCESS_CODE_ALPHABET) for _ in range(length))
