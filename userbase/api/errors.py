"""
Exception handlers that render every failure as ``{"error": "..."}``.
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from userbase.components.auth import AuthFailure, AuthzFailure
from userbase.components.users import EmailInUseError, UserNotFoundError
from userbase.domain.errors import StorageError

logger = logging.getLogger(__name__)


def _error(status_code: int, message: str, headers: dict[str, str] | None = None) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message}, headers=headers)


async def auth_failure_handler(request: Request, exc: AuthFailure) -> JSONResponse:
    if exc.retryable:
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, exc.public_message)
    return _error(
        status.HTTP_401_UNAUTHORIZED,
        exc.public_message,
        headers={"WWW-Authenticate": "Bearer"},
    )


async def authz_failure_handler(request: Request, exc: AuthzFailure) -> JSONResponse:
    if exc.kind == "missing_token":
        return _error(
            status.HTTP_401_UNAUTHORIZED,
            exc.public_message,
            headers={"WWW-Authenticate": "Bearer"},
        )
    return _error(status.HTTP_403_FORBIDDEN, exc.public_message)


async def user_not_found_handler(request: Request, exc: UserNotFoundError) -> JSONResponse:
    return _error(status.HTTP_404_NOT_FOUND, "User not found")


async def email_in_use_handler(request: Request, exc: EmailInUseError) -> JSONResponse:
    return _error(status.HTTP_409_CONFLICT, "Email already in use")


async def storage_error_handler(request: Request, exc: StorageError) -> JSONResponse:
    logger.error("Storage failure on %s %s: %s", request.method, request.url.path, exc)
    return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, "Storage unavailable")


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return JSONResponse(
        status_code=422,
        content={"error": "Invalid request.", "details": jsonable_encoder(exc.errors())},
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return _error(exc.status_code, str(exc.detail), headers=getattr(exc, "headers", None))


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AuthFailure, auth_failure_handler)
    app.add_exception_handler(AuthzFailure, authz_failure_handler)
    app.add_exception_handler(UserNotFoundError, user_not_found_handler)
    app.add_exception_handler(EmailInUseError, email_in_use_handler)
    app.add_exception_handler(StorageError, storage_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
