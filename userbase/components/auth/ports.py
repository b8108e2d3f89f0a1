from datetime import datetime
from typing import Protocol

from userbase.domain.entities import Claim, IssuedToken, User


class UserLookupPort(Protocol):
    """Exact-match lookup by email, returning zero or one record."""

    def get_by_email(self, email: str) -> User | None: ...


class PasswordHasherPort(Protocol):
    def verify_password(self, plain: str, hashed: str) -> bool: ...
    def hash_password(self, plain: str) -> str: ...

    def dummy_verify(self) -> None:
        """Burn one verification's worth of time without a real hash."""
        ...


class TokenAuthorityPort(Protocol):
    def issue(self, user: User) -> IssuedToken: ...
    def authorize(self, token: str) -> Claim: ...


class TimePort(Protocol):
    """Port for time operations - enables deterministic testing."""

    def now_utc(self) -> datetime:
        """Get current UTC time."""
        ...
