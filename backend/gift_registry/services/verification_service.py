"""Verification Workflow — moderator decisions on contributions.

States are pending, verified and rejected. A decision moves a contribution
to verified or rejected; verified and rejected may be swapped later. Each
applied transition is a single conditional UPDATE on (id, version, status)
plus one row in the decision log, committed together.
"""
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from gift_registry.errors import ConflictError, StorageError, ValidationError
from gift_registry.models.contribution import Contribution, ContributionDecision, VerificationStatus
from gift_registry.models.profile import Profile, Role
from gift_registry.services.contribution_service import get_contribution
from gift_registry.services.role_service import authorize

ALLOWED_TRANSITIONS = {
    VerificationStatus.pending: {VerificationStatus.verified, VerificationStatus.rejected},
    VerificationStatus.verified: {VerificationStatus.rejected},
    VerificationStatus.rejected: {VerificationStatus.verified},
}


def _parse_outcome(outcome) -> VerificationStatus:
    try:
        value = VerificationStatus(outcome)
    except ValueError:
        raise ValidationError(f"Invalid outcome: {outcome}")
    if value == VerificationStatus.pending:
        raise ValidationError("Outcome must be 'verified' or 'rejected'")
    return value


def decide(
    db: Session,
    contribution_id: str,
    outcome,
    actor: Optional[Profile],
    expected_version: Optional[int] = None,
) -> Contribution:
    authorize(actor, Role.admin, Role.moderator)
    target = _parse_outcome(outcome)

    contribution = get_contribution(db, contribution_id)
    current = VerificationStatus(contribution.status)
    version = contribution.version
    if expected_version is not None and expected_version != version:
        raise ConflictError(f"Version mismatch: expected {version}, got {expected_version}. Re-fetch and retry.")

    if current == target:
        return contribution
    if target not in ALLOWED_TRANSITIONS[current]:
        raise ValidationError(f"Cannot move contribution from {current.value} to {target.value}")

    stmt = (
        update(Contribution)
        .where(
            Contribution.id == contribution_id,
            Contribution.version == version,
            Contribution.status == current,
        )
        .values(
            status=target,
            version=version + 1,
            decided_at=datetime.now(timezone.utc),
            decided_by=actor.user_id,
        )
        .execution_options(synchronize_session=False)
    )
    try:
        if db.execute(stmt).rowcount != 1:
            db.rollback()
            raise ConflictError()
        db.add(ContributionDecision(
            contribution_id=contribution_id,
            actor_user_id=actor.user_id,
            from_status=current,
            to_status=target,
        ))
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        raise StorageError() from exc

    db.refresh(contribution)
    return contribution


def list_decisions(db: Session, contribution_id: str) -> list[ContributionDecision]:
    get_contribution(db, contribution_id)
    return (
        db.query(ContributionDecision)
        .filter(ContributionDecision.contribution_id == contribution_id)
        .order_by(ContributionDecision.created_at)
        .all()
    )
