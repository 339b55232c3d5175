"""Contribution and ContributionDecision ORM models — the off-band ledger."""
import uuid
import enum
from datetime import datetime, timezone
from sqlalchemy import Column, String, Integer, DateTime, Numeric, ForeignKey, CheckConstraint, Enum as SAEnum
from sqlalchemy.orm import relationship
from gift_registry.database import Base


class VerificationStatus(str, enum.Enum):
    pending = "pending"
    verified = "verified"
    rejected = "rejected"


class Contribution(Base):
    __tablename__ = "contributions"
    __table_args__ = (
        CheckConstraint("amount > 0", name="ck_contributions_amount_positive"),
        CheckConstraint("receipt_url <> ''", name="ck_contributions_receipt_present"),
    )

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    contributor_name = Column(String(200), nullable=False)
    contributor_phone = Column(String(50), nullable=True)
    amount = Column(Numeric(10, 2), nullable=False)
    receipt_url = Column(String(500), nullable=False)  # blob-store reference
    status = Column(SAEnum(VerificationStatus), nullable=False, default=VerificationStatus.pending)
    version = Column(Integer, nullable=False, default=1)
    decided_at = Column(DateTime(timezone=True), nullable=True)
    decided_by = Column(String(64), nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc))

    decisions = relationship(
        "ContributionDecision",
        back_populates="contribution",
        order_by="ContributionDecision.created_at",
    )


class ContributionDecision(Base):
    """Append-only log of verification transitions."""

    __tablename__ = "contribution_decisions"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    contribution_id = Column(String(36), ForeignKey("contributions.id"), nullable=False, index=True)
    actor_user_id = Column(String(64), nullable=False)
    from_status = Column(SAEnum(VerificationStatus), nullable=False)
    to_status = Column(SAEnum(VerificationStatus), nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc))

    contribution = relationship("Contribution", back_populates="decisions")
