"""Tests for administrator approval, accommodation and card assignment"""

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.exc import OperationalError

from cartehandicap.errors.auth import AdminTokenInvalid
from cartehandicap.errors.common import NotFoundError
from cartehandicap.errors.user import DecisionAlreadyMade
from cartehandicap.repository.access_card import AccessCardRepository
from cartehandicap.repository.accommodation import AccommodationRepository


class TestAdminAccess:
    def test_admin_routes_require_token(self, test_app: TestClient):
        r = test_app.get("/admin/pending-users")
        assert r.status_code == 403
        assert r.json()["error_code"] == AdminTokenInvalid.error_code

        r = test_app.post("/admin/validate/1", json={"approve": True}, headers={"x-token": "wrong"})
        assert r.status_code == 403

    def test_user_projection_requires_token(self, test_app: TestClient):
        assert test_app.get("/user/1").status_code == 403


class TestPendingUsers:
    def test_pending_users_newest_first(
        self, test_app: TestClient, register_user, decide, admin_headers
    ):
        ids = [register_user().json()["userId"] for _ in range(3)]
        decide(ids[1], approve=False)

        r = test_app.get("/admin/pending-users", headers=admin_headers)
        assert r.status_code == 200, r.text
        pending = r.json()
        assert [u["id"] for u in pending] == [ids[2], ids[0]]
        assert set(pending[0]) == {
            "id",
            "firstName",
            "lastName",
            "email",
            "proofDocumentRef",
            "createdAt",
        }


class TestApproval:
    @pytest.fixture(scope="class")
    def cards(self, provision_card):
        return [provision_card("04A1B2C3"), provision_card("04A1B2C4")]

    def test_approve_assigns_first_free_card(
        self, test_app: TestClient, cards, register_user, decide, admin_headers
    ):
        user_id = register_user().json()["userId"]
        r = decide(user_id)
        assert r.status_code == 200, r.text
        data = r.json()
        assert data["status"] == "approved"
        assert data["cardUid"] == "04A1B2C3"
        assert data["message"] == "User approved, card assigned"

        r = test_app.get(f"/user/{user_id}", headers=admin_headers)
        assert r.json()["status"] == "approved"
        assert r.json()["cardUid"] == "04A1B2C3"
        assert r.json()["validatedAt"] is not None

    def test_second_approval_returns_same_card(
        self, test_app: TestClient, cards, register_user, decide, admin_headers
    ):
        user_id = register_user().json()["userId"]
        first = decide(user_id).json()
        second = decide(user_id).json()
        assert first["cardUid"] == second["cardUid"] == "04A1B2C4"

        bound = test_app.get(
            "/admin/cards", params={"assigned": True}, headers=admin_headers
        ).json()
        assert [c["uid"] for c in bound["items"] if c["userId"] == user_id] == ["04A1B2C4"]

    def test_approval_without_free_card(
        self, test_app: TestClient, cards, register_user, decide, admin_headers
    ):
        user_id = register_user().json()["userId"]
        r = decide(user_id)
        assert r.status_code == 200, r.text
        assert r.json()["status"] == "approved"
        assert r.json()["cardUid"] is None
        assert r.json()["message"] == "User approved, but no card available"

        r = test_app.get(f"/user/{user_id}", headers=admin_headers)
        assert r.json()["status"] == "approved"
        assert r.json()["cardUid"] is None

    def test_reject(self, test_app: TestClient, register_user, decide, admin_headers):
        user_id = register_user().json()["userId"]
        r = decide(user_id, approve=False)
        assert r.status_code == 200, r.text
        assert r.json()["status"] == "rejected"
        assert r.json()["cardUid"] is None
        # rejecting again is harmless
        assert decide(user_id, approve=False).status_code == 200

    def test_decisions_are_final(self, register_user, decide):
        rejected = register_user().json()["userId"]
        decide(rejected, approve=False)
        r = decide(rejected, approve=True)
        assert r.status_code == 409, r.text
        assert r.json()["error_code"] == DecisionAlreadyMade.error_code

        approved = register_user().json()["userId"]
        decide(approved, approve=True)
        assert decide(approved, approve=False).status_code == 409

    def test_unknown_user(self, decide):
        r = decide(987654)
        assert r.status_code == 404, r.text
        assert r.json()["error_code"] == NotFoundError.error_code

    def test_missing_decision(self, test_app: TestClient, admin_headers):
        r = test_app.post("/admin/validate/1", json={}, headers=admin_headers)
        assert r.status_code == 400


class TestAccommodations:
    def test_services_from_declared_types(
        self, test_app: TestClient, register_user, decide, admin_headers
    ):
        # 1 -> {10}, 3 -> {20, 21}
        user_id = register_user(disability_types=["1", "3"]).json()["userId"]
        r = decide(user_id)
        assert sorted(r.json()["accommodationIds"]) == [10, 20, 21]

        r = test_app.get(f"/user/{user_id}/services", headers=admin_headers)
        assert r.status_code == 200, r.text
        services = r.json()
        assert sorted(s["accommodationId"] for s in services) == [10, 20, 21]
        # ordered by service name
        names = [s["serviceName"] for s in services]
        assert names == sorted(names)
        assert {"serviceName", "serviceDescription", "province"} <= set(services[0])

    def test_repeated_approval_does_not_duplicate(
        self, test_app: TestClient, register_user, decide, admin_headers
    ):
        # 4 -> {11, 40}, 5 -> {40, 50}: 40 is shared
        user_id = register_user(disability_types=["4", "5"]).json()["userId"]
        decide(user_id)
        decide(user_id)
        services = test_app.get(f"/user/{user_id}/services", headers=admin_headers).json()
        assert sorted(s["accommodationId"] for s in services) == [11, 40, 50]

    def test_no_services_before_approval(
        self, test_app: TestClient, register_user, admin_headers
    ):
        user_id = register_user(disability_types=["2"]).json()["userId"]
        r = test_app.get(f"/user/{user_id}/services", headers=admin_headers)
        assert r.status_code == 200
        assert r.json() == []

    def test_services_of_unknown_user(self, test_app: TestClient, admin_headers):
        r = test_app.get("/user/424242/services", headers=admin_headers)
        assert r.status_code == 404


def _failing(exc_factory, original=None, when=lambda *args: True):
    """Replace a repository method with one that raises whenever `when` matches"""

    def f(self, *args, **kwargs):
        if when(*args):
            raise exc_factory()
        return original(self, *args, **kwargs)

    return f


def _storage_failure():
    return OperationalError("SELECT 1", {}, Exception("database is unavailable"))


class TestFollowOnFailures:
    """A failing follow-on step never undoes the approval"""

    def test_failed_lookup_and_card_keep_approval(
        self,
        test_app: TestClient,
        register_user,
        provision_card,
        decide,
        admin_headers,
        monkeypatch,
    ):
        provision_card("04FA1L01")
        user_id = register_user(disability_types=["1", "3"]).json()["userId"]
        monkeypatch.setattr(
            AccommodationRepository,
            "get_ids_for_disability_type",
            _failing(
                _storage_failure,
                original=AccommodationRepository.get_ids_for_disability_type,
                when=lambda disability_type_id: disability_type_id == 1,
            ),
        )
        monkeypatch.setattr(
            AccessCardRepository, "claim_free_card", _failing(_storage_failure)
        )

        r = decide(user_id)
        assert r.status_code == 200, r.text
        data = r.json()
        assert data["status"] == "approved"
        # type 1 lookup failed, type 3 still contributes
        assert data["accommodationIds"] == [20, 21]
        assert data["cardUid"] is None
        assert data["message"] == "User approved, but card assignment failed"

        user = test_app.get(f"/user/{user_id}", headers=admin_headers).json()
        assert user["status"] == "approved"
        assert user["cardUid"] is None
        services = test_app.get(f"/user/{user_id}/services", headers=admin_headers).json()
        assert sorted(s["accommodationId"] for s in services) == [20, 21]

    def test_failed_accommodations_keep_card(
        self, test_app: TestClient, register_user, decide, admin_headers, monkeypatch
    ):
        user_id = register_user(disability_types=["2"]).json()["userId"]
        monkeypatch.setattr(
            AccommodationRepository,
            "replace_user_accommodations",
            _failing(_storage_failure),
        )

        r = decide(user_id)
        assert r.status_code == 200, r.text
        assert r.json()["status"] == "approved"
        assert r.json()["accommodationIds"] == []
        # the card left over from the previous test is still free
        assert r.json()["cardUid"] == "04FA1L01"
        assert r.json()["message"] == "User approved, card assigned"

        services = test_app.get(f"/user/{user_id}/services", headers=admin_headers).json()
        assert services == []
