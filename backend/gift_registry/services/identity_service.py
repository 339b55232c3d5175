"""Identity collaborator — sign-in, current identity and sign-out for profiles."""
from datetime import datetime
from typing import Optional

from sqlalchemy.orm import Session

from gift_registry.config import settings
from gift_registry.database import commit
from gift_registry.errors import AuthenticationError
from gift_registry.models.profile import RevokedToken
from gift_registry.security import IDENTITY, create_token, decode_token, verify_password
from gift_registry.services import role_service


def sign_in(db: Session, login: str, password: str) -> tuple[str, datetime]:
    profile = role_service.find_profile_by_login(db, login)
    if profile is None or not verify_password(password, profile.password_hash):
        raise AuthenticationError("Incorrect username or password")
    return create_token(
        subject=profile.user_id,
        token_type=IDENTITY,
        expires_minutes=settings.IDENTITY_TOKEN_EXPIRE_MINUTES,
        claims={"role": profile.role.value},
    )


def _decode_identity(db: Session, token: str) -> dict:
    payload = decode_token(token, IDENTITY)
    if db.get(RevokedToken, payload.get("jti", "")):
        raise AuthenticationError("Token has been revoked")
    return payload


def current_identity(db: Session, token: Optional[str]) -> Optional[str]:
    """The user id behind a valid identity token, or None when no token is presented."""
    if not token:
        return None
    return _decode_identity(db, token)["sub"]


def sign_out(db: Session, token: str) -> None:
    payload = _decode_identity(db, token)
    db.add(RevokedToken(jti=payload["jti"]))
    commit(db)
