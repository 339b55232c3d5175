"""Signed credentials: access tickets, guest sessions and identity tokens.

All three are HS256 JWTs distinguished by a ``typ`` claim so a token issued
for one purpose is never accepted for another.
"""
import uuid
from datetime import datetime, timedelta, timezone
from typing import Any, Optional

from jose import JWTError, jwt
from passlib.context import CryptContext

from gift_registry.config import settings
from gift_registry.errors import AuthenticationError

ACCESS_TICKET = "access"
GUEST_SESSION = "guest"
IDENTITY = "identity"

pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    if not hashed_password:
        return False
    return pwd_context.verify(plain_password, hashed_password)


def get_password_hash(password: str) -> str:
    return pwd_context.hash(password)


def create_token(
    subject: str,
    token_type: str,
    expires_minutes: int,
    claims: Optional[dict[str, Any]] = None,
) -> tuple[str, datetime]:
    """Sign a token for ``subject``; returns the encoded token and its expiry."""
    expire = datetime.now(timezone.utc) + timedelta(minutes=expires_minutes)
    to_encode = dict(claims or {})
    to_encode.update({
        "sub": subject,
        "typ": token_type,
        "exp": expire,
        "jti": uuid.uuid4().hex,
    })
    return jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.ALGORITHM), expire


def decode_token(token: str, token_type: str) -> dict[str, Any]:
    """Verify signature, expiry and purpose. Raises AuthenticationError otherwise."""
    try:
        payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
    except JWTError:
        raise AuthenticationError()
    if payload.get("typ") != token_type or not payload.get("sub"):
        raise AuthenticationError()
    return payload
