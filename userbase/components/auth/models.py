from dataclasses import dataclass
from datetime import datetime
from typing import Literal

AuthFailureKind = Literal["not_found", "mismatched_secret", "backend_unavailable"]
AuthzFailureKind = Literal["missing_token", "invalid_token"]

INVALID_CREDENTIALS = "Invalid email or password"


@dataclass
class LoginInput:
    email: str
    password: str


@dataclass
class TokenOutput:
    token: str
    expires_at: datetime
    token_type: str = "bearer"


# --- Error Types ---


class AuthFailure(Exception):
    """Credential verification failed.

    ``not_found`` and ``mismatched_secret`` share one public message so callers
    cannot tell which happened. ``backend_unavailable`` is a server fault that
    the enclosing system may retry.
    """

    _messages: dict[str, str] = {
        "not_found": INVALID_CREDENTIALS,
        "mismatched_secret": INVALID_CREDENTIALS,
        "backend_unavailable": "Login failed",
    }

    def __init__(self, kind: AuthFailureKind) -> None:
        self.kind = kind
        super().__init__(self.public_message)

    @property
    def public_message(self) -> str:
        return self._messages[self.kind]

    @property
    def retryable(self) -> bool:
        return self.kind == "backend_unavailable"


class AuthzFailure(Exception):
    """A protected request was rejected before reaching its handler."""

    _messages: dict[str, str] = {
        "missing_token": "Access denied. Token required.",
        "invalid_token": "Invalid token.",
    }

    def __init__(self, kind: AuthzFailureKind) -> None:
        self.kind = kind
        super().__init__(self.public_message)

    @property
    def public_message(self) -> str:
        return self._messages[self.kind]
