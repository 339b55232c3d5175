"""Profile provisioning and role changes."""
import logging
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from gift_registry.database import get_db
from gift_registry.deps import require_admin, require_staff
from gift_registry.errors import ValidationError
from gift_registry.models.profile import Profile, Role
from gift_registry.schemas.profile import ProfileCreate, ProfileOut, RoleChange
from gift_registry.services import role_service

logger = logging.getLogger(__name__)
router = APIRouter(dependencies=[Depends(require_staff)])


def _parse_role(value: str) -> Role:
    try:
        return Role(value)
    except ValueError:
        raise ValidationError(f"Invalid role: {value}")


@router.get("/", response_model=list[ProfileOut])
def list_profiles(db: Session = Depends(get_db)):
    return role_service.list_profiles(db)


@router.post("/", response_model=ProfileOut, status_code=status.HTTP_201_CREATED)
def create_profile(
    payload: ProfileCreate,
    db: Session = Depends(get_db),
    admin: Profile = Depends(require_admin),
):
    """Provision a privileged account (admin only)."""
    profile = role_service.provision_profile(
        db=db,
        user_id=payload.user_id,
        full_name=payload.full_name,
        role=_parse_role(payload.role),
        email=payload.email,
        phone=payload.phone,
        password=payload.password,
    )
    logger.info("Provisioned profile %s as %s (by %s)", profile.user_id, profile.role.value, admin.user_id)
    return profile


@router.patch("/{user_id}/role", response_model=ProfileOut)
def change_role(
    user_id: str,
    payload: RoleChange,
    db: Session = Depends(get_db),
    actor: Profile = Depends(require_staff),
):
    profile = role_service.change_role(db, actor, user_id, _parse_role(payload.role))
    logger.info("Profile %s role set to %s (by %s)", user_id, profile.role.value, actor.user_id)
    return profile
