import pytest
from fastapi.testclient import TestClient

from userbase.adapters.sqlite.repos import SQLiteUserRepo
from userbase.api.deps import get_settings
from userbase.api.main import app
from userbase.domain.errors import ConfigurationError


@pytest.fixture
def env(monkeypatch, tmp_path):
    rules_path = tmp_path / "rules.yaml"
    rules_path.write_text("auth:\n  password_hashing:\n    rounds: 4\n")
    monkeypatch.setenv("USERBASE_DATA_DIR", str(tmp_path / "data"))
    monkeypatch.setenv("USERBASE_RULES_PATH", str(rules_path))
    monkeypatch.setenv("JWT_SECRET", "lifespan-secret")
    monkeypatch.delenv("APP_PORT", raising=False)
    get_settings.cache_clear()
    yield tmp_path
    get_settings.cache_clear()


def test_empty_secret_refuses_to_start(env, monkeypatch):
    monkeypatch.setenv("JWT_SECRET", "")

    with pytest.raises(ConfigurationError) as exc_info:
        with TestClient(app):
            pass

    assert exc_info.value.setting == "JWT_SECRET"


def test_invalid_rules_refuse_to_start(env):
    (env / "rules.yaml").write_text("auth:\n  tokens:\n    ttl_seconds: 0\n")

    with pytest.raises(ValueError, match="Rules validation failed"):
        with TestClient(app):
            pass


def test_startup_applies_migrations(env):
    db_path = env / "data" / "userbase.db"

    with TestClient(app) as client:
        assert client.get("/health").status_code == 200

    assert db_path.exists()
    assert SQLiteUserRepo(str(db_path)).list_all() == []
