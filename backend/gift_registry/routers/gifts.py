"""Gift Catalog reads and the reservation claim."""
import logging
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from gift_registry.database import get_db
from gift_registry.deps import get_current_guest
from gift_registry.errors import AlreadyReservedError
from gift_registry.models.guest import Guest
from gift_registry.schemas.gift import GiftOut, ReserveRequest, ReservationOut
from gift_registry.services import catalog_service, reservation_service
from gift_registry.services.reservation_service import ReservationResult

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("/", response_model=list[GiftOut])
def list_gifts(db: Session = Depends(get_db), guest: Guest = Depends(get_current_guest)):
    """The whole catalog in creation order, selected gifts included."""
    return catalog_service.list_gifts(db)


@router.post("/{gift_id}/reserve", response_model=ReservationOut)
def reserve_gift(
    gift_id: str,
    payload: ReserveRequest,
    db: Session = Depends(get_db),
    guest: Guest = Depends(get_current_guest),
):
    """Claim a gift. 409 means another guest got it first: re-fetch and pick again."""
    result = reservation_service.reserve(
        db=db,
        gift_id=gift_id,
        guest_name=payload.guest_name or guest.full_name,
        guest_phone=payload.guest_phone or guest.phone,
        guest_id=guest.id,
    )
    if result == ReservationResult.already_reserved:
        logger.warning("Guest %s lost the race for gift %s", guest.id, gift_id)
        raise AlreadyReservedError()
    logger.info("Gift %s reserved by guest %s", gift_id, guest.id)
    return ReservationOut(gift_id=gift_id, result=result.value)
