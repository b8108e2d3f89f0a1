from datetime import UTC, datetime
from uuid import uuid4

from pydantic import BaseModel, Field


def _utcnow() -> datetime:
    return datetime.now(UTC)


# --- Users ---


class User(BaseModel):
    id: str = Field(default_factory=lambda: str(uuid4()))
    name: str
    email: str
    telephone: str = ""
    password_hash: str = Field(repr=False)
    created_at: datetime = Field(default_factory=_utcnow)
    updated_at: datetime = Field(default_factory=_utcnow)


# --- Tokens ---


class Claim(BaseModel):
    """Identity asserted by a verified bearer token."""

    email: str
    iat: int
    exp: int


class IssuedToken(BaseModel):
    token: str
    expires_at: datetime
