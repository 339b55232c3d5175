"""Access Gate — admits a guest into the RSVP flow via a shared access code.

Whether the presented code must equal ``EventConfig.access_code`` is an
``AccessPolicy`` decision, selected by ``settings.ACCESS_CODE_POLICY``:

- ``open``  (default): any non-empty code is admitted and recorded as-is.
- ``match``: the code must equal the configured one.
"""
from dataclasses import dataclass
from datetime import datetime

from sqlalchemy.orm import Session

from gift_registry.config import settings
from gift_registry.errors import AuthorizationError, ValidationError
from gift_registry.security import ACCESS_TICKET, create_token, decode_token
from gift_registry.services import event_config_service


@dataclass
class AccessTicket:
    token: str
    access_code: str
    expires_at: datetime


class AccessPolicy:
    name = "base"

    def check(self, db: Session, code: str) -> None:
        raise NotImplementedError


class OpenAccessPolicy(AccessPolicy):
    name = "open"

    def check(self, db: Session, code: str) -> None:
        return None


class MatchingAccessPolicy(AccessPolicy):
    name = "match"

    def check(self, db: Session, code: str) -> None:
        config = event_config_service.require_config(db)
        if code != config.access_code:
            raise AuthorizationError("Invalid access code")


POLICIES = {
    OpenAccessPolicy.name: OpenAccessPolicy,
    MatchingAccessPolicy.name: MatchingAccessPolicy,
}


def get_access_policy() -> AccessPolicy:
    """FastAPI dependency returning the configured policy."""
    try:
        return POLICIES[settings.ACCESS_CODE_POLICY.lower()]()
    except KeyError:
        raise ValueError(f"Unknown ACCESS_CODE_POLICY: {settings.ACCESS_CODE_POLICY}")


def normalize_code(code: str) -> str:
    code = (code or "").strip()
    if not code:
        raise ValidationError("Access code is required")
    return code


def admit(db: Session, code: str, policy: AccessPolicy) -> AccessTicket:
    """Validate ``code`` against the policy and hand out a signed ticket. Persists nothing."""
    code = normalize_code(code)
    policy.check(db, code)
    token, expires_at = create_token(
        subject=code,
        token_type=ACCESS_TICKET,
        expires_minutes=settings.ACCESS_TICKET_EXPIRE_MINUTES,
    )
    return AccessTicket(token=token, access_code=code, expires_at=expires_at)


def redeem_ticket(token: str) -> str:
    """Return the access code carried by a valid ticket."""
    return decode_token(token, ACCESS_TICKET)["sub"]
