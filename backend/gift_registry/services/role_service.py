"""Role Registry — maps an authenticated identity to its Profile and role.

``authorize`` is the single role check used by every privileged path, both
the router dependency and the services that must refuse guests themselves.
"""
from typing import Optional

from sqlalchemy import or_
from sqlalchemy.orm import Session

from gift_registry.database import commit
from gift_registry.errors import AuthorizationError, NotFoundError, ValidationError
from gift_registry.models.profile import Profile, Role, ROLE_RANK
from gift_registry.security import get_password_hash


def get_profile(db: Session, user_id: str) -> Optional[Profile]:
    return db.query(Profile).filter(Profile.user_id == user_id).first()


def find_profile_by_login(db: Session, login: str) -> Optional[Profile]:
    """Look a profile up by user_id or email."""
    return db.query(Profile).filter(or_(Profile.user_id == login, Profile.email == login)).first()


def resolve_profile(db: Session, user_id: str) -> Profile:
    """The identity's Profile; identities never provisioned act as a transient guest."""
    profile = get_profile(db, user_id)
    if profile is None:
        return Profile(user_id=user_id, role=Role.guest, full_name="")
    return profile


def authorize(actor: Optional[Profile], *allowed: Role) -> Profile:
    if actor is None or Role(actor.role) not in allowed:
        raise AuthorizationError(
            f"Requires role: {', '.join(r.value for r in allowed)}"
        )
    return actor


def list_profiles(db: Session) -> list[Profile]:
    return db.query(Profile).order_by(Profile.created_at).all()


def provision_profile(
    db: Session,
    user_id: str,
    full_name: str,
    role: Role = Role.guest,
    email: Optional[str] = None,
    phone: Optional[str] = None,
    password: Optional[str] = None,
) -> Profile:
    """Create the Profile for a new privileged account."""
    user_id = (user_id or "").strip()
    full_name = (full_name or "").strip()
    if not user_id or not full_name:
        raise ValidationError("user_id and full_name are required")
    if get_profile(db, user_id):
        raise ValidationError(f"Profile for {user_id} already exists")
    if email and find_profile_by_login(db, email):
        raise ValidationError(f"Email {email} is already in use")

    profile = Profile(
        user_id=user_id,
        full_name=full_name,
        role=Role(role),
        email=email or None,
        phone=phone or None,
        password_hash=get_password_hash(password) if password else "",
    )
    db.add(profile)
    commit(db)
    db.refresh(profile)
    return profile


def change_role(db: Session, actor: Profile, user_id: str, new_role: Role) -> Profile:
    """Change a profile's role. The actor must outrank the target and may not grant above itself."""
    target = get_profile(db, user_id)
    if not target:
        raise NotFoundError("Profile not found")

    actor_rank = ROLE_RANK[Role(actor.role)]
    if actor_rank <= ROLE_RANK[Role(target.role)] or actor_rank < ROLE_RANK[Role(new_role)]:
        raise AuthorizationError("Role changes require higher privilege than the target")

    target.role = Role(new_role)
    commit(db)
    db.refresh(target)
    return target
