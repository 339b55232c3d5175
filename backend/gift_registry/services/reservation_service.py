"""Reservation Coordinator — the exclusive gift claim.

A claim is one conditional UPDATE::

    UPDATE gifts SET is_selected = true, selected_at = now, ...
     WHERE id = :gift_id AND is_selected = false

The database serializes competing writers, so for any gift exactly one
statement matches a row. Everyone else sees zero affected rows and gets
``already_reserved``. There is no read-then-write and no automatic retry.
"""
import enum
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from gift_registry.errors import NotFoundError, StorageError, ValidationError
from gift_registry.models.gift import GiftItem


class ReservationResult(str, enum.Enum):
    reserved = "reserved"
    already_reserved = "already_reserved"


def reserve(
    db: Session,
    gift_id: str,
    guest_name: str,
    guest_phone: str,
    guest_id: Optional[str] = None,
) -> ReservationResult:
    guest_name = (guest_name or "").strip()
    guest_phone = (guest_phone or "").strip()
    if not guest_name or not guest_phone:
        raise ValidationError("guest_name and guest_phone are required")

    stmt = (
        update(GiftItem)
        .where(GiftItem.id == gift_id, GiftItem.is_selected.is_(False))
        .values(
            is_selected=True,
            selected_at=datetime.now(timezone.utc),
            selected_by=guest_id,
            selected_by_name=guest_name,
            selected_by_phone=guest_phone,
        )
        .execution_options(synchronize_session=False)
    )
    try:
        claimed = db.execute(stmt).rowcount == 1
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        raise StorageError() from exc

    if claimed:
        return ReservationResult.reserved

    # Zero rows: either somebody else holds it, or it never existed.
    if not db.query(GiftItem.id).filter(GiftItem.id == gift_id).first():
        raise NotFoundError("Gift not found")
    return ReservationResult.already_reserved
