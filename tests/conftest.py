"""
Shared fixtures.

Every test runs against its own SQLite file in ``tmp_path``; the
setting is patched before the schema is created so the API, the
services and the fixtures all see the same database.
"""

import asyncio

import pytest
from fastapi.testclient import TestClient

from portfolio_api.app.core.config import settings
from portfolio_api.app.core.db import init_db
from portfolio_api.app.main import app
from portfolio_api.app.services.user_service import UserService

USER_EMAIL = "admin@example.com"
USER_PASSWORD = "secret-password"


@pytest.fixture(autouse=True)
def database(tmp_path, monkeypatch):
    monkeypatch.setattr(settings, "database_url", str(tmp_path / "portfolio.db"))
    monkeypatch.setattr(settings, "token_expire_minutes", 0)
    init_db()
    yield


@pytest.fixture
def user():
    return asyncio.run(UserService.create_user("Admin", USER_EMAIL, USER_PASSWORD))


@pytest.fixture
def client():
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def token(client, user):
    response = client.post("/auth/login", json={"email": USER_EMAIL, "password": USER_PASSWORD})
    assert response.status_code == 200
    return response.json()["token"]


@pytest.fixture
def auth_headers(token):
    return {"Authorization": f"Bearer {token}"}
