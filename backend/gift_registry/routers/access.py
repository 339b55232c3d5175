"""Access Gate and RSVP routes — the guest's way in."""
import logging
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from gift_registry.database import get_db
from gift_registry.schemas.access import AdmitRequest, AccessTicketOut, RSVPCreate, GuestSessionOut
from gift_registry.services import access_service, guest_service
from gift_registry.services.access_service import AccessPolicy, get_access_policy

logger = logging.getLogger(__name__)
router = APIRouter()


@router.post("/access/admit", response_model=AccessTicketOut)
def admit(
    payload: AdmitRequest,
    db: Session = Depends(get_db),
    policy: AccessPolicy = Depends(get_access_policy),
):
    """Exchange an access code for a short-lived ticket to the RSVP form."""
    ticket = access_service.admit(db, payload.code, policy)
    logger.info("Access code admitted under '%s' policy", policy.name)
    return AccessTicketOut(access_ticket=ticket.token, expires_at=ticket.expires_at)


@router.post("/rsvp", response_model=GuestSessionOut, status_code=status.HTTP_201_CREATED)
def register_guest(payload: RSVPCreate, db: Session = Depends(get_db)):
    """Record an RSVP and issue the guest's session token."""
    access_code = access_service.redeem_ticket(payload.access_ticket)
    session = guest_service.register_guest(
        db=db,
        full_name=payload.full_name,
        email=payload.email,
        phone=payload.phone,
        access_code=access_code,
    )
    logger.info("Registered guest %s (%s)", session.guest.id, session.guest.full_name)
    return GuestSessionOut(
        guest_id=session.guest.id,
        full_name=session.guest.full_name,
        phone=session.guest.phone,
        session_token=session.token,
        expires_at=session.expires_at,
    )
