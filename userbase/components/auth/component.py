import logging

from userbase.domain.entities import Claim, User
from userbase.domain.errors import StorageError

from .models import AuthFailure, AuthzFailure, LoginInput, TokenOutput
from .ports import PasswordHasherPort, TokenAuthorityPort, UserLookupPort

logger = logging.getLogger(__name__)


def run_login(
    inp: LoginInput, user_repo: UserLookupPort, hasher: PasswordHasherPort
) -> User:
    try:
        user = user_repo.get_by_email(inp.email)
    except StorageError as e:
        logger.error("Login lookup failed: %s", e)
        raise AuthFailure("backend_unavailable") from e

    if user is None:
        hasher.dummy_verify()
        logger.info("Invalid email or password")
        raise AuthFailure("not_found")

    if not hasher.verify_password(inp.password, user.password_hash):
        logger.info("Invalid email or password")
        raise AuthFailure("mismatched_secret")

    return user


def run_issue_token(user: User, authority: TokenAuthorityPort) -> TokenOutput:
    issued = authority.issue(user)
    return TokenOutput(token=issued.token, expires_at=issued.expires_at)


def run_authorize(token: str | None, authority: TokenAuthorityPort) -> Claim:
    if not token:
        raise AuthzFailure("missing_token")
    return authority.authorize(token)
