import pytest
from fastapi.testclient import TestClient

from userbase.api.deps import (
    Settings,
    get_clock,
    get_password_hasher,
    get_rules,
    get_settings,
)
from userbase.api.main import app
from userbase.rules.models import Rules


@pytest.fixture
def rules() -> Rules:
    return Rules()


@pytest.fixture
def client(db_path, user_repo, fast_hasher, clock, rules, signing_secret):
    # Lifespan is not run here (see test_lifespan.py); user_repo has already migrated db_path
    def _settings() -> Settings:
        s = Settings()
        s.db_path = db_path
        s.jwt_secret = signing_secret
        return s

    app.dependency_overrides[get_settings] = _settings
    app.dependency_overrides[get_rules] = lambda: rules
    app.dependency_overrides[get_password_hasher] = lambda: fast_hasher
    app.dependency_overrides[get_clock] = lambda: clock
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def registered(client) -> dict[str, str]:
    body = {
        "name": "A",
        "email": "a@x.com",
        "telephone": "+100",
        "password": "secret123",
    }
    resp = client.post("/auth/register", json=body)
    assert resp.status_code == 201
    return {**body, "id": resp.json()["id"]}


@pytest.fixture
def auth_headers(client, registered) -> dict[str, str]:
    resp = client.post(
        "/auth/login", json={"email": registered["email"], "password": registered["password"]}
    )
    assert resp.status_code == 200
    return {"Authorization": f"Bearer {resp.json()['token']}"}
