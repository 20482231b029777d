"""Tests for applicant registration"""

import re

import pytest
from fastapi.testclient import TestClient

from cartehandicap.errors.common import ValidationError
from cartehandicap.errors.user import (
    AccountNumberUnavailable,
    DocumentRejected,
    DocumentRequired,
    EmailAlreadyRegistered,
)
from cartehandicap.repository.user import UserRepository
from cartehandicap.services.registration import (
    RegistrationService,
    parse_disability_types,
)


class TestRegistrationEndpoints:
    """Test API endpoints for registration"""

    def test_register(self, test_app: TestClient, register_user, admin_headers):
        response = register_user(email="Jean.Roy@Example.org", disability_types=["1", "3"])
        assert response.status_code == 201, response.text
        data = response.json()
        assert re.fullmatch(r"ACC\d{12}", data["accountNumber"])
        assert isinstance(data["userId"], int)

        # stored as a pending applicant with a lower-cased email
        r = test_app.get(f"/user/{data['userId']}", headers=admin_headers)
        assert r.status_code == 200, r.text
        user = r.json()
        assert user["email"] == "jean.roy@example.org"
        assert user["status"] == "pending"
        assert user["accountNumber"] == data["accountNumber"]
        assert "passwordHash" not in user and "password" not in user

    def test_account_numbers_are_unique(self, register_user):
        numbers = set()
        for _ in range(5):
            response = register_user()
            assert response.status_code == 201, response.text
            numbers.add(response.json()["accountNumber"])
        assert len(numbers) == 5

    def test_duplicate_email_rejected(self, register_user):
        assert register_user(email="twice@example.org").status_code == 201
        # different disability types and document, same email
        response = register_user(
            email="TWICE@example.org",
            disability_types=["2"],
            document=("scan.png", b"\x89PNG....", "image/png"),
        )
        assert response.status_code == 409, response.text
        assert response.json()["error_code"] == EmailAlreadyRegistered.error_code

    @pytest.mark.parametrize("missing", ["firstName", "lastName", "email", "password"])
    def test_missing_field(self, register_user, missing):
        response = register_user(**{missing: ""})
        assert response.status_code == 400, response.text
        assert response.json()["error_code"] == ValidationError.error_code
        assert missing in response.json()["error"]

    def test_missing_disability_types(self, register_user):
        response = register_user(disability_types=())
        assert response.status_code == 400, response.text

    def test_missing_document(self, register_user):
        response = register_user(document=None)
        assert response.status_code == 400, response.text
        assert response.json()["error_code"] == DocumentRequired.error_code

    def test_unsupported_document(self, register_user):
        response = register_user(document=("notes.txt", b"hello", "text/plain"))
        assert response.status_code == 400, response.text
        assert response.json()["error_code"] == DocumentRejected.error_code

    def test_oversized_document(self, register_user):
        big = b"0" * (5 * 1024 * 1024 + 1)
        response = register_user(document=("big.pdf", big, "application/pdf"))
        assert response.status_code == 400, response.text
        assert response.json()["error_code"] == DocumentRejected.error_code

    def test_document_is_stored(self, register_user, test_app, admin_headers, test_config):
        response = register_user()
        assert response.status_code == 201
        pending = test_app.get("/admin/pending-users", headers=admin_headers).json()
        ref = next(u for u in pending if u["id"] == response.json()["userId"])[
            "proofDocumentRef"
        ]
        assert ref.endswith(".pdf")
        assert (test_config.documents_dir / ref).read_bytes() == b"%PDF-1.4 medical proof"

    @pytest.mark.parametrize(
        "disability_types",
        [["[1, 3]"], ["1,3"], ["1", "3"], ["1", "oops", "3"], ["1,abc,3,3"]],
    )
    def test_lenient_disability_types(self, register_user, disability_types):
        response = register_user(disability_types=disability_types)
        assert response.status_code == 201, response.text

    def test_no_valid_disability_type_still_registers(self, register_user):
        response = register_user(disability_types=["not-a-number", "999"])
        assert response.status_code == 201, response.text


class TestAccountNumbers:
    """Account number collisions while registering"""

    def test_collision_is_redrawn(self, test_app: TestClient, register_user, monkeypatch):
        taken = register_user().json()["accountNumber"]
        # skip the existence check so the duplicate reaches the unique constraint
        drawn = iter([taken, "ACC000000000001"])
        monkeypatch.setattr(
            RegistrationService, "generate_account_number", lambda self: next(drawn)
        )

        response = register_user()
        assert response.status_code == 201, response.text
        assert response.json()["accountNumber"] == "ACC000000000001"

    def test_email_race_still_reported(self, register_user, monkeypatch):
        assert register_user(email="race@example.org").status_code == 201
        # the pre-insert lookup misses the concurrent registration
        monkeypatch.setattr(
            UserRepository,
            "find_by_email",
            _missing_once(UserRepository.find_by_email),
        )
        response = register_user(email="race@example.org")
        assert response.status_code == 409, response.text
        assert response.json()["error_code"] == EmailAlreadyRegistered.error_code

    def test_no_account_number_left(self, test_app: TestClient, register_user, monkeypatch):
        monkeypatch.setattr(
            UserRepository, "account_number_exists", lambda self, number: True
        )
        response = register_user()
        assert response.status_code == 500, response.text
        assert response.json()["error_code"] == AccountNumberUnavailable.error_code


def _missing_once(find_by_email):
    """Wrap a lookup so that its first call finds nothing"""
    calls = []

    def f(self, email):
        calls.append(email)
        if len(calls) == 1:
            return None
        return find_by_email(self, email)

    return f


class TestParseDisabilityTypes:
    """Test the lenient parser on its own"""

    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("[1, 3]", [1, 3]),
            ("2", [2]),
            (4, [4]),
            ("1, 3 ,5", [1, 3, 5]),
            (["1", "3"], [1, 3]),
            (["[1,2]", "3"], [1, 2, 3]),
            ("[3, 1, 3]", [3, 1]),
            (None, []),
            ("", []),
        ],
    )
    def test_parses(self, raw, expected):
        result = parse_disability_types(raw)
        assert result.type_ids == expected
        assert result.warnings == []

    def test_drops_non_integers_with_warnings(self):
        result = parse_disability_types('[1, "x", 2.5, true, "4"]')
        assert result.type_ids == [1, 4]
        assert len(result.warnings) == 3

    def test_garbage_only(self):
        result = parse_disability_types("abc,def")
        assert result.type_ids == []
        assert len(result.warnings) == 2
