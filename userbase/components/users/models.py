from dataclasses import dataclass
from typing import Literal

MatchMode = Literal["any", "all"]


@dataclass
class UserSearchInput:
    name: str | None = None
    email: str | None = None
    telephone: str | None = None
    match: MatchMode = "any"
    case_insensitive: bool = True

    def filters(self) -> dict[str, str]:
        """Non-empty filters keyed by column name."""
        candidates = {"name": self.name, "email": self.email, "telephone": self.telephone}
        return {field: value for field, value in candidates.items() if value}


@dataclass
class CreateUserInput:
    name: str
    email: str
    password: str
    telephone: str = ""


@dataclass
class UpdateUserInput:
    user_id: str
    name: str | None = None
    email: str | None = None
    telephone: str | None = None
    password: str | None = None


# --- Error Types ---


class UserError(Exception):
    """Base users error."""

    pass


class UserNotFoundError(UserError):
    def __init__(self, user_id: str) -> None:
        self.user_id = user_id
        super().__init__("User not found")


class EmailInUseError(UserError):
    def __init__(self, email: str) -> None:
        self.email = email
        super().__init__("Email already in use")
