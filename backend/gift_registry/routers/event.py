"""Public event details for admitted guests."""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from gift_registry.database import get_db
from gift_registry.deps import get_current_guest
from gift_registry.schemas.event_config import PublicEventOut
from gift_registry.services import event_config_service

router = APIRouter(dependencies=[Depends(get_current_guest)])


@router.get("/event", response_model=PublicEventOut)
def get_event(db: Session = Depends(get_db)):
    return event_config_service.public_event_info(db)
