from datetime import datetime
from typing import Protocol

from userbase.domain.entities import User


class UserRepoPort(Protocol):
    def get_by_email(self, email: str) -> User | None: ...
    def get_by_id(self, user_id: str) -> User | None: ...
    def save(self, user: User) -> User: ...
    def delete(self, user_id: str) -> bool: ...
    def list_all(self) -> list[User]: ...

    def search(
        self, filters: dict[str, str], match_all: bool, case_insensitive: bool
    ) -> list[User]:
        """Substring search over the given columns, ordered by email."""
        ...


class PasswordHasherPort(Protocol):
    def hash_password(self, plain: str) -> str: ...


class TimePort(Protocol):
    def now_utc(self) -> datetime: ...
