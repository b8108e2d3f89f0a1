import os
from functools import lru_cache
from pathlib import Path
from typing import Annotated

from fastapi import Depends
from fastapi.security import OAuth2PasswordBearer

from userbase.adapters.auth.crypto import PasslibPasswordHasher
from userbase.adapters.auth.tokens import JWTTokenAuthority
from userbase.adapters.clock import SystemClock
from userbase.adapters.sqlite.repos import SQLiteUserRepo
from userbase.components.auth import run_authorize
from userbase.domain.entities import Claim
from userbase.domain.errors import ConfigurationError
from userbase.rules.loader import load_rules
from userbase.rules.models import Rules


# --- Settings ---
class Settings:
    def __init__(self) -> None:
        self.base_dir = Path(os.getcwd())
        self.data_dir = os.environ.get("USERBASE_DATA_DIR", "./data")
        self.db_path = f"{self.data_dir}/userbase.db"
        self.rules_path = Path(
            os.environ.get("USERBASE_RULES_PATH", str(self.base_dir / "rules.yaml"))
        )
        self.jwt_secret = os.environ.get("JWT_SECRET", "")
        self.host = os.environ.get("APP_HOST", "127.0.0.1")
        port = os.environ.get("APP_PORT", "3000")
        try:
            self.port = int(port)
        except ValueError:
            raise ConfigurationError("APP_PORT", f"{port!r} is not a port number") from None


@lru_cache
def get_settings() -> Settings:
    return Settings()


# --- Rules ---
@lru_cache
def get_rules(settings: Settings = Depends(get_settings)) -> Rules:
    return load_rules(settings.rules_path)


# --- Repos ---
def get_user_repo(settings: Settings = Depends(get_settings)) -> SQLiteUserRepo:
    return SQLiteUserRepo(settings.db_path)


# --- Adapters ---
_clock_instance: SystemClock | None = None


def get_clock() -> SystemClock:
    """Get clock singleton."""
    global _clock_instance
    if _clock_instance is None:
        _clock_instance = SystemClock()
    return _clock_instance


def get_password_hasher(rules: Rules = Depends(get_rules)) -> PasslibPasswordHasher:
    return PasslibPasswordHasher.from_rules(rules.auth.password_hashing)


def get_token_authority(
    settings: Settings = Depends(get_settings),
    rules: Rules = Depends(get_rules),
    clock: SystemClock = Depends(get_clock),
) -> JWTTokenAuthority:
    return JWTTokenAuthority.from_rules(settings.jwt_secret, rules.auth.tokens, clock)


# --- Auth gate ---
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/auth/token", auto_error=False)


def get_current_claim(
    token: Annotated[str | None, Depends(oauth2_scheme)],
    authority: JWTTokenAuthority = Depends(get_token_authority),
) -> Claim:
    """Reject the request unless it carries a valid bearer token.

    Purely local: the claim is trusted for the rest of the request without a
    database round trip.
    """
    return run_authorize(token, authority)
