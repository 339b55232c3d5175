"""Moderation routes — RSVP/selection/contribution reads and verification decisions."""
import logging
from typing import Optional
from fastapi import APIRouter, Depends, Query
from fastapi.responses import FileResponse
from sqlalchemy.orm import Session

from gift_registry.database import get_db
from gift_registry.deps import require_staff
from gift_registry.models.contribution import Contribution
from gift_registry.models.profile import Profile
from gift_registry.schemas.access import GuestOut
from gift_registry.schemas.contribution import ContributionOut, DecisionOut, DecisionRequest
from gift_registry.schemas.gift import SelectionOut
from gift_registry.services import catalog_service, contribution_service, guest_service, verification_service
from gift_registry.storage.blob_store import LocalBlobStore, get_blob_store

logger = logging.getLogger(__name__)
router = APIRouter(dependencies=[Depends(require_staff)])


def _contribution_out(contribution: Contribution, blob_store: LocalBlobStore) -> ContributionOut:
    out = ContributionOut.model_validate(contribution)
    return out.model_copy(update={"receipt_link": blob_store.resolve(contribution.receipt_url)})


@router.get("/rsvps", response_model=list[GuestOut])
def list_rsvps(db: Session = Depends(get_db)):
    return guest_service.list_guests(db)


@router.get("/selections", response_model=list[SelectionOut])
def list_selections(db: Session = Depends(get_db)):
    return catalog_service.list_selections(db)


@router.get("/contributions", response_model=list[ContributionOut])
def list_contributions(
    status_filter: Optional[str] = Query(None, alias="status"),
    db: Session = Depends(get_db),
    blob_store: LocalBlobStore = Depends(get_blob_store),
):
    return [
        _contribution_out(c, blob_store)
        for c in contribution_service.list_contributions(db, status_filter)
    ]


@router.get("/contributions/{contribution_id}", response_model=ContributionOut)
def get_contribution(
    contribution_id: str,
    db: Session = Depends(get_db),
    blob_store: LocalBlobStore = Depends(get_blob_store),
):
    return _contribution_out(contribution_service.get_contribution(db, contribution_id), blob_store)


@router.post("/contributions/{contribution_id}/decision", response_model=ContributionOut)
def decide_contribution(
    contribution_id: str,
    payload: DecisionRequest,
    db: Session = Depends(get_db),
    actor: Profile = Depends(require_staff),
    blob_store: LocalBlobStore = Depends(get_blob_store),
):
    """Mark a contribution verified or rejected."""
    contribution = verification_service.decide(
        db=db,
        contribution_id=contribution_id,
        outcome=payload.outcome,
        actor=actor,
        expected_version=payload.version,
    )
    logger.info("Contribution %s is now %s (by %s)", contribution_id, payload.outcome, actor.user_id)
    return _contribution_out(contribution, blob_store)


@router.get("/contributions/{contribution_id}/decisions", response_model=list[DecisionOut])
def list_decisions(contribution_id: str, db: Session = Depends(get_db)):
    return verification_service.list_decisions(db, contribution_id)


@router.get("/receipts/{reference}")
def get_receipt(reference: str, blob_store: LocalBlobStore = Depends(get_blob_store)):
    return FileResponse(blob_store.path_for(reference))
