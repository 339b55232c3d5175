"""Guest Registry — RSVP records and the guest sessions bound to them."""
import secrets
import string
import time
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from sqlalchemy.orm import Session

from gift_registry.config import settings
from gift_registry.database import commit
from gift_registry.errors import AuthenticationError, ValidationError
from gift_registry.models.guest import Guest
from gift_registry.security import GUEST_SESSION, create_token, decode_token

_BASE36 = string.digits + string.ascii_lowercase


@dataclass
class GuestSession:
    guest: Guest
    token: str
    expires_at: datetime


def new_session_id() -> str:
    """``guest_<epoch millis>_<9 random base36 chars>``."""
    suffix = "".join(secrets.choice(_BASE36) for _ in range(9))
    return f"guest_{int(time.time() * 1000)}_{suffix}"


def _required(value: Optional[str], field: str) -> str:
    value = (value or "").strip()
    if not value:
        raise ValidationError(f"{field} is required")
    return value


def register_guest(db: Session, full_name: str, email: str, phone: str, access_code: str) -> GuestSession:
    guest = Guest(
        full_name=_required(full_name, "full_name"),
        email=_required(email, "email"),
        phone=_required(phone, "phone"),
        access_code_used=_required(access_code, "access_code"),
        session_id=new_session_id(),
    )
    db.add(guest)
    commit(db)
    db.refresh(guest)

    token, expires_at = create_token(
        subject=guest.session_id,
        token_type=GUEST_SESSION,
        expires_minutes=settings.GUEST_SESSION_EXPIRE_MINUTES,
        claims={"gid": guest.id},
    )
    return GuestSession(guest=guest, token=token, expires_at=expires_at)


def get_guest_by_session(db: Session, session_id: str) -> Optional[Guest]:
    return db.query(Guest).filter(Guest.session_id == session_id).first()


def authenticate_guest(db: Session, token: str) -> Guest:
    """Validate a guest session token and load the guest it was issued to."""
    payload = decode_token(token, GUEST_SESSION)
    guest = get_guest_by_session(db, payload["sub"])
    if guest is None or guest.id != payload.get("gid"):
        raise AuthenticationError("Unknown guest session")
    return guest


def list_guests(db: Session) -> list[Guest]:
    """All RSVPs, newest first."""
    return db.query(Guest).order_by(Guest.created_at.desc()).all()
