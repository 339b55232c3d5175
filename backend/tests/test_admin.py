"""Tests for the Admin API, moderation reads, profiles and sign-in."""
import pytest

from gift_registry.errors import AuthorizationError
from gift_registry.models.gift import GiftItem
from gift_registry.models.profile import Role
from gift_registry.services import role_service
from tests.conftest import (
    auth_headers, configure_event, create_profile, create_test_gift, guest_headers, register_test_guest,
)


@pytest.fixture
def staff(db):
    create_profile(db, "admin", Role.admin, email="admin@example.com")
    create_profile(db, "mod", Role.moderator)
    return {"admin": auth_headers("admin"), "mod": auth_headers("mod")}


class TestEventConfig:
    """Singleton event configuration, admin only."""

    def test_create_then_update_singleton(self, client, staff):
        first = configure_event(client, staff["admin"], access_code="WED2025")
        second = configure_event(client, staff["admin"], access_code="NEWCODE")
        assert first["id"] == second["id"]
        assert second["access_code"] == "NEWCODE"

        resp = client.get("/api/admin/event-config", headers=staff["admin"])
        assert resp.status_code == 200
        assert resp.json()["access_code"] == "NEWCODE"

    def test_naive_date_stored_as_utc(self, client, staff):
        data = configure_event(client, staff["admin"])
        # 16:00 in America/Sao_Paulo is 19:00 UTC
        assert data["event_date"].startswith("2025-11-22T19:00:00")

    def test_moderator_cannot_configure(self, client, staff):
        resp = client.put("/api/admin/event-config", json={
            "event_date": "2025-11-22T16:00:00",
            "pix_key": "k",
            "access_code": "c",
        }, headers=staff["mod"])
        assert resp.status_code == 403

    def test_blank_pix_key_rejected(self, client, staff):
        resp = client.put("/api/admin/event-config", json={
            "event_date": "2025-11-22T16:00:00",
            "pix_key": " ",
            "access_code": "c",
        }, headers=staff["admin"])
        assert resp.status_code == 400

    def test_unconfigured_event(self, client, staff):
        assert client.get("/api/admin/event-config", headers=staff["admin"]).status_code == 404

    def test_access_code_suggestion(self, client, staff):
        resp = client.get("/api/admin/event-config/access-code-suggestion", headers=staff["admin"])
        code = resp.json()["access_code"]
        assert len(code) == 8
        assert code.isalnum() and code == code.upper()


class TestGiftAdmin:
    def test_create_and_delete_gift(self, client, staff):
        gift = create_test_gift(client, staff["admin"], name="Blender", price="99.90")
        assert gift["is_selected"] is False

        resp = client.delete(f"/api/admin/gifts/{gift['id']}", headers=staff["admin"])
        assert resp.status_code == 204
        assert client.get("/api/admin/gifts", headers=staff["admin"]).json() == []

    def test_delete_unknown_gift(self, client, staff):
        assert client.delete("/api/admin/gifts/missing", headers=staff["admin"]).status_code == 404

    def test_negative_price_rejected(self, client, staff):
        resp = client.post("/api/admin/gifts", json={"name": "X", "suggested_price": "-1"},
                           headers=staff["admin"])
        assert resp.status_code == 400

    def test_moderator_cannot_mutate_catalog(self, client, staff, db):
        resp = client.post("/api/admin/gifts", json={"name": "Sneaky"}, headers=staff["mod"])
        assert resp.status_code == 403
        assert db.query(GiftItem).count() == 0

    def test_guest_session_cannot_mutate_catalog(self, client, staff):
        guest = register_test_guest(client)
        resp = client.post("/api/admin/gifts", json={"name": "Sneaky"},
                           headers=guest_headers(guest["session_token"]))
        assert resp.status_code == 401


class TestModerationReads:
    def test_rsvps_selections_contributions(self, client, staff, blob_store):
        gift = create_test_gift(client, staff["admin"], name="Kettle")
        guest = register_test_guest(client, name="Ana", phone="555")
        headers = guest_headers(guest["session_token"])
        client.post(f"/api/gifts/{gift['id']}/reserve", json={}, headers=headers)

        ref = client.post(
            "/api/contributions/receipts",
            files={"receipt": ("r.png", b"\x89PNG", "image/png")},
            headers=headers,
        ).json()["receipt_ref"]
        cid = client.post("/api/contributions/", json={
            "amount": "50", "contributor_name": "Ana", "receipt_ref": ref,
        }, headers=headers).json()["id"]

        rsvps = client.get("/api/moderation/rsvps", headers=staff["mod"]).json()
        assert [r["full_name"] for r in rsvps] == ["Ana"]

        selections = client.get("/api/moderation/selections", headers=staff["mod"]).json()
        assert selections[0]["name"] == "Kettle"
        assert selections[0]["selected_by_name"] == "Ana"
        assert selections[0]["selected_by_phone"] == "555"

        contributions = client.get("/api/moderation/contributions?status=pending", headers=staff["mod"]).json()
        assert [c["id"] for c in contributions] == [cid]
        link = contributions[0]["receipt_link"]
        assert link == f"/api/moderation/receipts/{ref}"

        receipt = client.get(link, headers=staff["mod"])
        assert receipt.status_code == 200
        assert receipt.content == b"\x89PNG"

    def test_moderation_requires_staff(self, client, db):
        create_profile(db, "plain", Role.guest)
        assert client.get("/api/moderation/rsvps", headers=auth_headers("plain")).status_code == 403
        assert client.get("/api/moderation/rsvps").status_code == 401

    def test_invalid_status_filter(self, client, staff):
        resp = client.get("/api/moderation/contributions?status=maybe", headers=staff["mod"])
        assert resp.status_code == 400

    def test_unknown_receipt(self, client, staff):
        resp = client.get("/api/moderation/receipts/nope.png", headers=staff["mod"])
        assert resp.status_code == 404

    def test_deleting_guest_keeps_reserved_gift(self, client, staff, db):
        from gift_registry.models.guest import Guest

        gift = create_test_gift(client, staff["admin"])
        guest = register_test_guest(client)
        client.post(f"/api/gifts/{gift['id']}/reserve", json={},
                    headers=guest_headers(guest["session_token"]))

        db.query(Guest).filter(Guest.id == guest["guest_id"]).delete()
        db.commit()
        row = db.query(GiftItem).filter(GiftItem.id == gift["id"]).one()
        assert row.is_selected is True


class TestProfiles:
    def test_admin_provisions_moderator(self, client, staff):
        resp = client.post("/api/profiles/", json={
            "user_id": "mod2", "full_name": "Second Mod", "role": "moderator", "password": "pw",
        }, headers=staff["admin"])
        assert resp.status_code == 201
        assert resp.json()["role"] == "moderator"

    def test_moderator_cannot_provision(self, client, staff):
        resp = client.post("/api/profiles/", json={
            "user_id": "x", "full_name": "X", "role": "guest",
        }, headers=staff["mod"])
        assert resp.status_code == 403

    def test_duplicate_profile_rejected(self, client, staff):
        resp = client.post("/api/profiles/", json={
            "user_id": "mod", "full_name": "Dup", "role": "guest",
        }, headers=staff["admin"])
        assert resp.status_code == 400

    def test_admin_promotes_guest(self, client, staff, db):
        create_profile(db, "helper", Role.guest)
        resp = client.patch("/api/profiles/helper/role", json={"role": "moderator"}, headers=staff["admin"])
        assert resp.status_code == 200
        assert resp.json()["role"] == "moderator"

    def test_moderator_cannot_demote_admin(self, client, staff):
        resp = client.patch("/api/profiles/admin/role", json={"role": "guest"}, headers=staff["mod"])
        assert resp.status_code == 403

    def test_moderator_cannot_grant_admin(self, db, staff):
        create_profile(db, "helper", Role.guest)
        mod = role_service.get_profile(db, "mod")
        with pytest.raises(AuthorizationError):
            role_service.change_role(db, mod, "helper", Role.admin)

    def test_invalid_role(self, client, staff):
        resp = client.patch("/api/profiles/mod/role", json={"role": "owner"}, headers=staff["admin"])
        assert resp.status_code == 400

    def test_resolve_profile(self, db, staff):
        assert role_service.resolve_profile(db, "admin").role == Role.admin

        unknown = role_service.resolve_profile(db, "nobody")
        assert unknown.role == Role.guest
        assert role_service.get_profile(db, "nobody") is None

    def test_unprovisioned_identity_cannot_list_profiles(self, client, staff):
        resp = client.get("/api/profiles/", headers=auth_headers("nobody"))
        assert resp.status_code == 403


class TestSignIn:
    def test_sign_in_by_email_and_sign_out(self, client, staff):
        resp = client.post("/api/auth/token", data={"username": "admin@example.com", "password": "secret"})
        assert resp.status_code == 200
        headers = {"Authorization": f"Bearer {resp.json()['access_token']}"}
        assert client.get("/api/admin/gifts", headers=headers).status_code == 200

        assert client.post("/api/auth/sign-out", headers=headers).status_code == 204
        assert client.get("/api/admin/gifts", headers=headers).status_code == 401

    def test_wrong_password(self, client, staff):
        resp = client.post("/api/auth/token", data={"username": "admin", "password": "nope"})
        assert resp.status_code == 401

    def test_health(self, client):
        assert client.get("/api/health").json() == {"status": "ok"}
