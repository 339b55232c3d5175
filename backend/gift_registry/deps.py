"""Request dependencies: bearer credentials, the guest session and role gates.

``require_admin`` and ``require_staff`` are the only role checks on the HTTP
surface. Routers attach them at router level so the check runs before any
handler body, and handlers that need the caller's Profile depend on the same
object so FastAPI resolves it once per request.
"""
from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from gift_registry.database import get_db
from gift_registry.errors import AuthenticationError
from gift_registry.models.guest import Guest
from gift_registry.models.profile import Profile, Role
from gift_registry.services import guest_service, identity_service, role_service

bearer_scheme = HTTPBearer(auto_error=False)


def get_bearer_token(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> Optional[str]:
    return credentials.credentials if credentials else None


def get_current_profile(
    token: Optional[str] = Depends(get_bearer_token),
    db: Session = Depends(get_db),
) -> Profile:
    user_id = identity_service.current_identity(db, token)
    if user_id is None:
        raise AuthenticationError()
    return role_service.resolve_profile(db, user_id)


def require_roles(*roles: Role):
    def _dependency(profile: Profile = Depends(get_current_profile)) -> Profile:
        return role_service.authorize(profile, *roles)
    return _dependency


require_admin = require_roles(Role.admin)
require_staff = require_roles(Role.admin, Role.moderator)


def get_current_guest(
    token: Optional[str] = Depends(get_bearer_token),
    db: Session = Depends(get_db),
) -> Guest:
    if not token:
        raise AuthenticationError("Guest session required")
    return guest_service.authenticate_guest(db, token)
