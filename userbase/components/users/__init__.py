"""
Users component - user records CRUD and search.
"""

from .component import (
    run_create_user,
    run_delete_user,
    run_get_user,
    run_list_users,
    run_update_user,
)
from .models import (
    CreateUserInput,
    EmailInUseError,
    UpdateUserInput,
    UserError,
    UserNotFoundError,
    UserSearchInput,
)
from .ports import UserRepoPort

__all__ = [
    # Entry points
    "run_create_user",
    "run_delete_user",
    "run_get_user",
    "run_list_users",
    "run_update_user",
    # Models
    "CreateUserInput",
    "EmailInUseError",
    "UpdateUserInput",
    "UserError",
    "UserNotFoundError",
    "UserSearchInput",
    # Ports
    "UserRepoPort",
]
