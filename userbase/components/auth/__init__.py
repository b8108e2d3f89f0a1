"""
Auth component - credential verification and bearer tokens.

Verifies email/password pairs, issues signed tokens for verified users and
gates protected requests on those tokens.
"""

from .component import run_authorize, run_issue_token, run_login
from .models import (
    INVALID_CREDENTIALS,
    AuthFailure,
    AuthzFailure,
    LoginInput,
    TokenOutput,
)
from .ports import PasswordHasherPort, TimePort, TokenAuthorityPort, UserLookupPort

__all__ = [
    # Entry points
    "run_authorize",
    "run_issue_token",
    "run_login",
    # Models
    "INVALID_CREDENTIALS",
    "AuthFailure",
    "AuthzFailure",
    "LoginInput",
    "TokenOutput",
    # Ports
    "PasswordHasherPort",
    "TimePort",
    "TokenAuthorityPort",
    "UserLookupPort",
]
