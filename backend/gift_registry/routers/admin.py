"""Admin API — event configuration and catalog maintenance (admin only)."""
import logging
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from gift_registry.database import get_db
from gift_registry.deps import require_admin
from gift_registry.models.profile import Profile
from gift_registry.schemas.event_config import AccessCodeSuggestion, EventConfigOut, EventConfigUpdate
from gift_registry.schemas.gift import GiftCreate, GiftOut
from gift_registry.services import catalog_service, event_config_service

logger = logging.getLogger(__name__)
router = APIRouter(dependencies=[Depends(require_admin)])


@router.get("/event-config", response_model=EventConfigOut)
def get_event_config(db: Session = Depends(get_db)):
    return event_config_service.require_config(db)


@router.put("/event-config", response_model=EventConfigOut)
def save_event_config(
    payload: EventConfigUpdate,
    db: Session = Depends(get_db),
    admin: Profile = Depends(require_admin),
):
    """Create or update the single event configuration."""
    config = event_config_service.save_config(
        db=db,
        event_date=payload.event_date,
        pix_key=payload.pix_key,
        access_code=payload.access_code,
        welcome_message=payload.welcome_message,
    )
    logger.info("Event config saved by %s", admin.user_id)
    return config


@router.get("/event-config/access-code-suggestion", response_model=AccessCodeSuggestion)
def suggest_access_code():
    return AccessCodeSuggestion(access_code=event_config_service.generate_access_code())


@router.get("/gifts", response_model=list[GiftOut])
def list_gifts(db: Session = Depends(get_db)):
    return catalog_service.list_gifts(db)


@router.post("/gifts", response_model=GiftOut, status_code=status.HTTP_201_CREATED)
def create_gift(payload: GiftCreate, db: Session = Depends(get_db)):
    gift = catalog_service.create_gift(
        db=db,
        name=payload.name,
        description=payload.description,
        suggested_price=payload.suggested_price,
        image_url=payload.image_url,
    )
    logger.info("Created gift '%s' (%s)", gift.name, gift.id)
    return gift


@router.delete("/gifts/{gift_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_gift(gift_id: str, db: Session = Depends(get_db)):
    catalog_service.delete_gift(db, gift_id)
    logger.info("Deleted gift %s", gift_id)
