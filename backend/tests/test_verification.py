"""Tests for the Verification Workflow — role gate, transitions, decision log."""
import pytest

from gift_registry.errors import AuthorizationError, ConflictError, NotFoundError, ValidationError
from gift_registry.models.contribution import ContributionDecision, VerificationStatus
from gift_registry.models.profile import Profile, Role
from gift_registry.services import contribution_service, verification_service
from tests.conftest import auth_headers, create_profile


@pytest.fixture
def contribution_id(db, blob_store):
    ref = blob_store.put(b"receipt", "receipt.jpg")
    return contribution_service.submit(db, blob_store, "250.00", "Ana", "123", ref)


@pytest.fixture
def moderator(db):
    return create_profile(db, "mod", Role.moderator)


class TestAuthorizationGate:
    """A guest calling decide() always fails and changes nothing."""

    @pytest.mark.parametrize("outcome", ["verified", "rejected"])
    def test_guest_cannot_decide(self, db, contribution_id, outcome):
        guest = create_profile(db, "someone", Role.guest)
        with pytest.raises(AuthorizationError):
            verification_service.decide(db, contribution_id, outcome, guest)

        db.expire_all()
        stored = contribution_service.get_contribution(db, contribution_id)
        assert stored.status == VerificationStatus.pending
        assert stored.version == 1
        assert db.query(ContributionDecision).count() == 0

    def test_anonymous_cannot_decide(self, db, contribution_id):
        with pytest.raises(AuthorizationError):
            verification_service.decide(db, contribution_id, "verified", None)

    def test_unprovisioned_identity_is_guest(self, client, db, contribution_id):
        resp = client.post(
            f"/api/moderation/contributions/{contribution_id}/decision",
            json={"outcome": "verified"},
            headers=auth_headers("stranger"),
        )
        assert resp.status_code == 403

    def test_guest_profile_over_http(self, client, db, contribution_id):
        create_profile(db, "someone", Role.guest)
        resp = client.post(
            f"/api/moderation/contributions/{contribution_id}/decision",
            json={"outcome": "verified"},
            headers=auth_headers("someone"),
        )
        assert resp.status_code == 403
        db.expire_all()
        assert contribution_service.get_contribution(db, contribution_id).status == VerificationStatus.pending

    def test_missing_token(self, client, contribution_id):
        resp = client.post(
            f"/api/moderation/contributions/{contribution_id}/decision",
            json={"outcome": "verified"},
        )
        assert resp.status_code == 401


class TestTransitions:
    def test_pending_to_verified(self, db, contribution_id, moderator):
        result = verification_service.decide(db, contribution_id, "verified", moderator)
        assert result.status == VerificationStatus.verified
        assert result.version == 2
        assert result.decided_by == "mod"
        assert result.decided_at is not None

    def test_pending_to_rejected(self, db, contribution_id, moderator):
        result = verification_service.decide(db, contribution_id, "rejected", moderator)
        assert result.status == VerificationStatus.rejected

    def test_verified_and_rejected_swap(self, db, contribution_id, moderator):
        admin = create_profile(db, "admin", Role.admin)
        verification_service.decide(db, contribution_id, "verified", moderator)
        verification_service.decide(db, contribution_id, "rejected", admin)
        result = verification_service.decide(db, contribution_id, "verified", moderator)
        assert result.status == VerificationStatus.verified
        assert result.version == 4

    def test_same_outcome_is_noop(self, db, contribution_id, moderator):
        verification_service.decide(db, contribution_id, "verified", moderator)
        result = verification_service.decide(db, contribution_id, "verified", moderator)
        assert result.version == 2
        assert len(verification_service.list_decisions(db, contribution_id)) == 1

    @pytest.mark.parametrize("outcome", ["pending", "approved", ""])
    def test_invalid_outcome(self, db, contribution_id, moderator, outcome):
        with pytest.raises(ValidationError):
            verification_service.decide(db, contribution_id, outcome, moderator)

    def test_unknown_contribution(self, db, moderator):
        with pytest.raises(NotFoundError):
            verification_service.decide(db, "missing", "verified", moderator)

    def test_stale_version_conflicts(self, db, contribution_id, moderator):
        verification_service.decide(db, contribution_id, "verified", moderator)
        with pytest.raises(ConflictError):
            verification_service.decide(db, contribution_id, "rejected", moderator, expected_version=1)

    def test_concurrent_decision_loses(self, db, session_factory, contribution_id, moderator):
        """A decision whose snapshot was overtaken by another write is refused."""
        other = session_factory()
        try:
            verification_service.decide(other, contribution_id, "rejected", moderator)
        finally:
            other.close()

        # Simulate a caller that read version 1 before the other write landed.
        stale = Profile(user_id="admin2", role=Role.admin, full_name="Admin Two")
        with pytest.raises(ConflictError):
            verification_service.decide(db, contribution_id, "verified", stale, expected_version=1)


class TestDecisionLog:
    def test_each_transition_logged(self, db, contribution_id, moderator):
        verification_service.decide(db, contribution_id, "verified", moderator)
        verification_service.decide(db, contribution_id, "rejected", moderator)

        log = verification_service.list_decisions(db, contribution_id)
        assert [(d.from_status, d.to_status) for d in log] == [
            (VerificationStatus.pending, VerificationStatus.verified),
            (VerificationStatus.verified, VerificationStatus.rejected),
        ]
        assert all(d.actor_user_id == "mod" for d in log)

    def test_decide_and_log_over_http(self, client, db, contribution_id, moderator):
        headers = auth_headers("mod")
        resp = client.post(
            f"/api/moderation/contributions/{contribution_id}/decision",
            json={"outcome": "verified", "version": 1},
            headers=headers,
        )
        assert resp.status_code == 200
        assert resp.json()["status"] == "verified"
        assert resp.json()["version"] == 2

        resp = client.get(f"/api/moderation/contributions/{contribution_id}/decisions", headers=headers)
        assert resp.status_code == 200
        assert [(d["from_status"], d["to_status"]) for d in resp.json()] == [("pending", "verified")]

    def test_http_version_mismatch(self, client, db, contribution_id, moderator):
        resp = client.post(
            f"/api/moderation/contributions/{contribution_id}/decision",
            json={"outcome": "verified", "version": 7},
            headers=auth_headers("mod"),
        )
        assert resp.status_code == 409
