"""Gift Catalog — storage-level operations on gift items.

The catalog executes, it never authorizes: callers (the Admin API) check
roles first. ``is_selected`` is only ever written by the reservation service.
"""
from decimal import Decimal
from typing import Optional

from sqlalchemy.orm import Session

from gift_registry.database import commit
from gift_registry.errors import NotFoundError, ValidationError
from gift_registry.models.gift import GiftItem


def list_gifts(db: Session) -> list[GiftItem]:
    """All gifts in creation order."""
    return db.query(GiftItem).order_by(GiftItem.created_at, GiftItem.id).all()


def get_gift(db: Session, gift_id: str) -> Optional[GiftItem]:
    return db.query(GiftItem).filter(GiftItem.id == gift_id).first()


def create_gift(
    db: Session,
    name: str,
    description: Optional[str] = None,
    suggested_price: Optional[Decimal] = None,
    image_url: Optional[str] = None,
) -> GiftItem:
    name = (name or "").strip()
    if not name:
        raise ValidationError("Gift name is required")
    if suggested_price is not None and suggested_price < 0:
        raise ValidationError("suggested_price cannot be negative")

    gift = GiftItem(
        name=name,
        description=description or None,
        suggested_price=suggested_price,
        image_url=image_url or None,
        is_selected=False,
    )
    db.add(gift)
    commit(db)
    db.refresh(gift)
    return gift


def delete_gift(db: Session, gift_id: str) -> None:
    gift = get_gift(db, gift_id)
    if not gift:
        raise NotFoundError("Gift not found")
    db.delete(gift)
    commit(db)


def list_selections(db: Session) -> list[GiftItem]:
    """Reserved gifts, most recently reserved first."""
    return (
        db.query(GiftItem)
        .filter(GiftItem.is_selected.is_(True))
        .order_by(GiftItem.selected_at.desc())
        .all()
    )
