from typing import Annotated, Any

from fastapi import APIRouter, Depends, status
from fastapi.security import OAuth2PasswordRequestForm

from userbase.api.deps import (
    get_clock,
    get_current_claim,
    get_password_hasher,
    get_token_authority,
    get_user_repo,
)
from userbase.api.schemas import (
    ErrorResponse,
    LoginRequest,
    LoginResponse,
    ProtectedResponse,
    Token,
    UserCreateRequest,
    UserResponse,
)
from userbase.components.auth import LoginInput, run_issue_token, run_login
from userbase.components.users import CreateUserInput, run_create_user
from userbase.domain.entities import Claim

router = APIRouter()

_login_errors: dict[int | str, dict[str, Any]] = {
    401: {"model": ErrorResponse, "description": "Invalid email or password"},
    500: {"model": ErrorResponse, "description": "Login failed"},
}


@router.post(
    "/register",
    response_model=UserResponse,
    status_code=status.HTTP_201_CREATED,
    responses={409: {"model": ErrorResponse, "description": "Email already in use"}},
)
def register(
    req: UserCreateRequest,
    user_repo: Any = Depends(get_user_repo),
    hasher: Any = Depends(get_password_hasher),
    clock: Any = Depends(get_clock),
) -> Any:
    """Register a new user with a hashed password."""
    inp = CreateUserInput(
        name=req.name, email=req.email, telephone=req.telephone, password=req.password
    )
    return run_create_user(inp, user_repo=user_repo, hasher=hasher, time=clock)


@router.post("/login", response_model=LoginResponse, responses=_login_errors)
def login(
    req: LoginRequest,
    user_repo: Any = Depends(get_user_repo),
    hasher: Any = Depends(get_password_hasher),
    authority: Any = Depends(get_token_authority),
) -> LoginResponse:
    """Exchange email and password for a bearer token valid for one hour."""
    user = run_login(LoginInput(email=req.email, password=req.password), user_repo, hasher)
    issued = run_issue_token(user, authority)
    return LoginResponse(token=issued.token)


@router.post("/token", response_model=Token, responses=_login_errors)
def login_for_access_token(
    form_data: Annotated[OAuth2PasswordRequestForm, Depends()],
    user_repo: Any = Depends(get_user_repo),
    hasher: Any = Depends(get_password_hasher),
    authority: Any = Depends(get_token_authority),
) -> Token:
    """OAuth2 password flow; the username field carries the email."""
    inp = LoginInput(email=form_data.username, password=form_data.password)
    user = run_login(inp, user_repo, hasher)
    issued = run_issue_token(user, authority)
    return Token(access_token=issued.token)


@router.get("/protected", response_model=ProtectedResponse)
def protected(claim: Claim = Depends(get_current_claim)) -> dict[str, Any]:
    return {"message": "Welcome to the protected route!", "user": claim.model_dump()}
