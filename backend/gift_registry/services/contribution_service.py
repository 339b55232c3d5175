"""Contribution Ledger — off-band contributions with receipt evidence."""
from decimal import Decimal, InvalidOperation
from typing import Optional

from sqlalchemy.orm import Session

from gift_registry.database import commit
from gift_registry.errors import NotFoundError, ValidationError
from gift_registry.models.contribution import Contribution, VerificationStatus
from gift_registry.services import event_config_service
from gift_registry.storage.blob_store import LocalBlobStore


MAX_AMOUNT = Decimal("99999999.99")


def _to_amount(amount) -> Decimal:
    try:
        value = Decimal(str(amount))
    except (InvalidOperation, ValueError, TypeError):
        raise ValidationError("amount must be a number")
    if not value.is_finite() or value <= 0:
        raise ValidationError("amount must be greater than zero")
    # Stored as Numeric(10, 2): anything finer or larger would be rounded or overflow.
    if value.as_tuple().exponent < -2:
        raise ValidationError("amount must have at most two decimal places")
    if value > MAX_AMOUNT:
        raise ValidationError(f"amount must not exceed {MAX_AMOUNT}")
    return value


def submit(
    db: Session,
    blob_store: LocalBlobStore,
    amount,
    name: str,
    phone: Optional[str],
    receipt_ref: str,
) -> str:
    """Record a pending contribution and return its id."""
    value = _to_amount(amount)
    name = (name or "").strip()
    if not name:
        raise ValidationError("contributor name is required")
    receipt_ref = (receipt_ref or "").strip()
    if not receipt_ref:
        raise ValidationError("receipt reference is required")
    if not blob_store.exists(receipt_ref):
        raise ValidationError("receipt reference does not match an uploaded receipt")

    contribution = Contribution(
        contributor_name=name,
        contributor_phone=(phone or "").strip() or None,
        amount=value,
        receipt_url=receipt_ref,
        status=VerificationStatus.pending,
        version=1,
    )
    db.add(contribution)
    commit(db)
    return contribution.id


def get_contribution(db: Session, contribution_id: str) -> Contribution:
    contribution = db.query(Contribution).filter(Contribution.id == contribution_id).first()
    if not contribution:
        raise NotFoundError("Contribution not found")
    return contribution


def list_contributions(db: Session, status_filter: Optional[str] = None) -> list[Contribution]:
    query = db.query(Contribution)
    if status_filter:
        try:
            query = query.filter(Contribution.status == VerificationStatus(status_filter))
        except ValueError:
            raise ValidationError(f"Invalid status: {status_filter}")
    return query.order_by(Contribution.created_at.desc()).all()


def get_pix_key(db: Session) -> str:
    return event_config_service.require_config(db).pix_key
