"""Signed bearer tokens (JWT) carrying the user's email."""

import logging
from datetime import timedelta
from typing import Any

from jose import JWTError, jwt

from userbase.components.auth.models import AuthzFailure
from userbase.components.auth.ports import TimePort
from userbase.domain.entities import Claim, IssuedToken, User
from userbase.domain.errors import ConfigurationError
from userbase.rules.models import TokenRules

logger = logging.getLogger(__name__)

DEFAULT_TTL_SECONDS = 3600


class JWTTokenAuthority:
    """Issues and verifies stateless, time-bounded tokens.

    The signing secret is injected at construction and is read-only afterwards.
    Expiry is checked against the injected clock rather than the wall clock so
    that issuance and verification agree on "now".
    """

    def __init__(
        self,
        secret: str,
        clock: TimePort,
        algorithm: str = "HS256",
        ttl_seconds: int = DEFAULT_TTL_SECONDS,
    ) -> None:
        if not secret:
            raise ConfigurationError("JWT_SECRET", "signing secret must be set and non-empty")
        if ttl_seconds <= 0:
            raise ConfigurationError("auth.tokens.ttl_seconds", "must be positive")
        self._secret = secret
        self._clock = clock
        self.algorithm = algorithm
        self.ttl_seconds = ttl_seconds

    @classmethod
    def from_rules(cls, secret: str, rules: TokenRules, clock: TimePort) -> "JWTTokenAuthority":
        return cls(
            secret=secret,
            clock=clock,
            algorithm=rules.algorithm,
            ttl_seconds=rules.ttl_seconds,
        )

    def issue(self, user: User) -> IssuedToken:
        now = self._clock.now_utc()
        expires_at = now + timedelta(seconds=self.ttl_seconds)
        claims: dict[str, Any] = {
            "email": user.email,
            "iat": int(now.timestamp()),
            "exp": int(expires_at.timestamp()),
        }
        token: str = jwt.encode(claims, self._secret, algorithm=self.algorithm)
        return IssuedToken(token=token, expires_at=expires_at)

    def authorize(self, token: str) -> Claim:
        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[self.algorithm],
                options={"verify_exp": False, "require_exp": True},
            )
        except JWTError as e:
            logger.debug("Token rejected: %s", e)
            raise AuthzFailure("invalid_token") from e

        email = payload.get("email")
        exp = payload.get("exp")
        iat = payload.get("iat", 0)
        if not isinstance(email, str) or not email:
            logger.debug("Token rejected: missing email claim")
            raise AuthzFailure("invalid_token")
        if not isinstance(exp, int) or not isinstance(iat, int):
            logger.debug("Token rejected: non-integer timestamps")
            raise AuthzFailure("invalid_token")

        now = int(self._clock.now_utc().timestamp())
        if now >= exp:
            logger.debug("Token rejected: expired at %s", exp)
            raise AuthzFailure("invalid_token")

        return Claim(email=email, iat=iat, exp=exp)
