"""Profile ORM model — privileged identities and their role."""
import uuid
import enum
from sqlalchemy import Column, String, DateTime, Enum as SAEnum
from sqlalchemy.sql import func
from gift_registry.database import Base


class Role(str, enum.Enum):
    admin = "admin"
    moderator = "moderator"
    guest = "guest"


ROLE_RANK = {Role.guest: 0, Role.moderator: 1, Role.admin: 2}


class Profile(Base):
    __tablename__ = "profiles"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    user_id = Column(String(64), nullable=False, unique=True)
    role = Column(SAEnum(Role), nullable=False, default=Role.guest)
    full_name = Column(String(200), nullable=False)
    email = Column(String(255), nullable=True, unique=True)
    phone = Column(String(50), nullable=True)
    password_hash = Column(String(255), nullable=False, default="")
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())


class RevokedToken(Base):
    """Identity tokens invalidated by sign-out, keyed by JWT id."""

    __tablename__ = "revoked_tokens"

    jti = Column(String(64), primary_key=True)
    revoked_at = Column(DateTime(timezone=True), server_default=func.now())
