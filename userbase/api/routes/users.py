from typing import Any

from fastapi import APIRouter, Depends, Response, status

from userbase.api.deps import (
    get_clock,
    get_current_claim,
    get_password_hasher,
    get_rules,
    get_user_repo,
)
from userbase.api.schemas import (
    ErrorResponse,
    UserCreateRequest,
    UserResponse,
    UserUpdateRequest,
)
from userbase.components.users import (
    CreateUserInput,
    UpdateUserInput,
    UserSearchInput,
    run_create_user,
    run_delete_user,
    run_get_user,
    run_list_users,
    run_update_user,
)
from userbase.rules.models import MatchMode, Rules

# Every route here sits behind the bearer token gate
router = APIRouter(
    dependencies=[Depends(get_current_claim)],
    responses={
        401: {"model": ErrorResponse, "description": "Token missing"},
        403: {"model": ErrorResponse, "description": "Token invalid or expired"},
    },
)

_not_found = {404: {"model": ErrorResponse, "description": "User not found"}}
_conflict = {409: {"model": ErrorResponse, "description": "Email already in use"}}


@router.get("", response_model=list[UserResponse])
def list_users(
    name: str | None = None,
    email: str | None = None,
    telephone: str | None = None,
    match: MatchMode | None = None,
    user_repo: Any = Depends(get_user_repo),
    rules: Rules = Depends(get_rules),
) -> Any:
    """List users, optionally filtered by partial name, email or telephone."""
    inp = UserSearchInput(
        name=name,
        email=email,
        telephone=telephone,
        match=match or rules.search.match,
        case_insensitive=rules.search.case_insensitive,
    )
    return run_list_users(inp, user_repo)


@router.get("/{user_id}", response_model=UserResponse, responses=_not_found)
def get_user(user_id: str, user_repo: Any = Depends(get_user_repo)) -> Any:
    return run_get_user(user_id, user_repo)


@router.post(
    "",
    response_model=UserResponse,
    status_code=status.HTTP_201_CREATED,
    responses=_conflict,
)
def create_user(
    req: UserCreateRequest,
    user_repo: Any = Depends(get_user_repo),
    hasher: Any = Depends(get_password_hasher),
    clock: Any = Depends(get_clock),
) -> Any:
    inp = CreateUserInput(
        name=req.name, email=req.email, telephone=req.telephone, password=req.password
    )
    return run_create_user(inp, user_repo=user_repo, hasher=hasher, time=clock)


@router.put("/{user_id}", response_model=UserResponse, responses={**_not_found, **_conflict})
def update_user(
    user_id: str,
    req: UserUpdateRequest,
    user_repo: Any = Depends(get_user_repo),
    hasher: Any = Depends(get_password_hasher),
    clock: Any = Depends(get_clock),
) -> Any:
    """Update the given fields; a new password is hashed before storage."""
    inp = UpdateUserInput(
        user_id=user_id,
        name=req.name,
        email=req.email,
        telephone=req.telephone,
        password=req.password,
    )
    return run_update_user(inp, user_repo=user_repo, hasher=hasher, time=clock)


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT, responses=_not_found)
def delete_user(user_id: str, user_repo: Any = Depends(get_user_repo)) -> Response:
    run_delete_user(user_id, user_repo)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
