"""Test configuration and shared fixtures"""

import itertools
import os

import pytest
from fastapi.testclient import TestClient

from cartehandicap.app import app
from cartehandicap.config import Config, get_config
from cartehandicap.db import DatabaseConnection

ADMIN_TOKEN = "valid-admin-token"

_emails = itertools.count(1)


@pytest.fixture(scope="class")
def test_config(tmp_path_factory):
    return Config(
        # overwrite application name so it will use another database file
        app_name="cartehandicap-test",
        secret_key="test-secret-key",
        admin_tokens=[ADMIN_TOKEN],
        upload_dir=tmp_path_factory.mktemp("uploads"),
    )


# each test class have it's own empty database
@pytest.fixture(scope="class")
def test_app(test_config: Config):
    if os.path.exists(test_config.database_path):
        os.remove(test_config.database_path)
    app.dependency_overrides = {get_config: lambda: test_config}

    # trigger table creation and reference data seeding
    db_conn = DatabaseConnection(config=test_config)
    db_conn.create_tables()
    db_conn.seed_bootstrap_data()

    client = TestClient(app)
    yield client
    app.dependency_overrides = {}
    # clean up test database file after tests
    if os.path.exists(test_config.database_path):
        os.remove(test_config.database_path)


@pytest.fixture(scope="class")
def admin_headers():
    return {"x-token": ADMIN_TOKEN}


@pytest.fixture(scope="class")
def register_user(test_app: TestClient):
    """Register an applicant, return the response"""

    def f(
        email: str | None = None,
        password: str = "s3cret-password",
        disability_types=("1",),
        document=("proof.pdf", b"%PDF-1.4 medical proof", "application/pdf"),
        **fields,
    ):
        data = {
            "firstName": "Marie",
            "lastName": "Tremblay",
            "email": (
                email if email is not None else f"applicant{next(_emails)}@example.org"
            ),
            "address": "1 rue Sainte-Catherine, Montreal",
            "password": password,
            "disabilityTypes": list(disability_types),
            **fields,
        }
        files = {"proofDocument": document} if document is not None else None
        return test_app.post("/register", data=data, files=files)

    return f


@pytest.fixture(scope="class")
def decide(test_app: TestClient, admin_headers):
    """Approve or reject a user as an administrator, return the response"""

    def f(user_id: int, approve: bool = True):
        return test_app.post(
            f"/admin/validate/{user_id}", json={"approve": approve}, headers=admin_headers
        )

    return f


@pytest.fixture(scope="class")
def provision_card(test_app: TestClient, admin_headers):
    """Add a card to the registry, return its json"""

    def f(uid: str, **fields):
        r = test_app.post("/admin/cards", json={"uid": uid, **fields}, headers=admin_headers)
        assert r.status_code == 200, r.text
        return r.json()

    return f
