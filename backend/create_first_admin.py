"""Provision the first admin profile from settings (FIRST_ADMIN_*)."""
import logging

from gift_registry.config import settings
from gift_registry.database import Base, SessionLocal, engine
from gift_registry.errors import StorageError
from gift_registry.logging_config import setup_logging
from gift_registry.models.profile import Role
from gift_registry.services import role_service

import gift_registry.models  # noqa: F401

logger = logging.getLogger(__name__)


def create_first_admin():
    if settings.DATABASE_URL.startswith("sqlite"):
        Base.metadata.create_all(bind=engine)

    db = SessionLocal()
    try:
        if role_service.get_profile(db, settings.FIRST_ADMIN_USER_ID):
            logger.info("Admin profile '%s' already exists", settings.FIRST_ADMIN_USER_ID)
            return
        role_service.provision_profile(
            db=db,
            user_id=settings.FIRST_ADMIN_USER_ID,
            full_name="Event Admin",
            role=Role.admin,
            email=settings.FIRST_ADMIN_EMAIL,
            password=settings.FIRST_ADMIN_PASSWORD,
        )
        logger.info("Created admin profile '%s'", settings.FIRST_ADMIN_USER_ID)
    except StorageError:
        logger.exception("Could not create admin profile")
        raise
    finally:
        db.close()


if __name__ == "__main__":
    setup_logging()
    create_first_admin()
