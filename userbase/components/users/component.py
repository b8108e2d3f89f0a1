import logging

from userbase.domain.entities import User
from userbase.domain.errors import DuplicateEmailError

from .models import (
    CreateUserInput,
    EmailInUseError,
    UpdateUserInput,
    UserNotFoundError,
    UserSearchInput,
)
from .ports import PasswordHasherPort, TimePort, UserRepoPort

logger = logging.getLogger(__name__)


def run_list_users(inp: UserSearchInput, user_repo: UserRepoPort) -> list[User]:
    filters = inp.filters()
    if not filters:
        return user_repo.list_all()
    return user_repo.search(
        filters,
        match_all=inp.match == "all",
        case_insensitive=inp.case_insensitive,
    )


def run_get_user(user_id: str, user_repo: UserRepoPort) -> User:
    user = user_repo.get_by_id(user_id)
    if user is None:
        raise UserNotFoundError(user_id)
    return user


def run_create_user(
    inp: CreateUserInput,
    user_repo: UserRepoPort,
    hasher: PasswordHasherPort,
    time: TimePort,
) -> User:
    if user_repo.get_by_email(inp.email):
        raise EmailInUseError(inp.email)

    now = time.now_utc()
    user = User(
        name=inp.name,
        email=inp.email,
        telephone=inp.telephone,
        password_hash=hasher.hash_password(inp.password),
        created_at=now,
        updated_at=now,
    )
    try:
        user_repo.save(user)
    except DuplicateEmailError as e:
        # Lost a race with a concurrent registration
        raise EmailInUseError(inp.email) from e

    logger.info("Created user %s", user.id)
    return user


def run_update_user(
    inp: UpdateUserInput,
    user_repo: UserRepoPort,
    hasher: PasswordHasherPort,
    time: TimePort,
) -> User:
    target = run_get_user(inp.user_id, user_repo)

    if inp.email is not None and inp.email != target.email:
        owner = user_repo.get_by_email(inp.email)
        if owner is not None and owner.id != target.id:
            raise EmailInUseError(inp.email)
        target.email = inp.email
    if inp.name is not None:
        target.name = inp.name
    if inp.telephone is not None:
        target.telephone = inp.telephone
    if inp.password is not None:
        target.password_hash = hasher.hash_password(inp.password)

    target.updated_at = time.now_utc()
    try:
        user_repo.save(target)
    except DuplicateEmailError as e:
        raise EmailInUseError(target.email) from e

    logger.info("Updated user %s", target.id)
    return target


def run_delete_user(user_id: str, user_repo: UserRepoPort) -> None:
    if not user_repo.delete(user_id):
        raise UserNotFoundError(user_id)
    logger.info("Deleted user %s", user_id)
