from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


# --- Users ---
class UserBase(BaseModel):
    name: str = Field(min_length=1)
    email: str = Field(min_length=1)
    telephone: str = ""


class UserCreateRequest(UserBase):
    password: str = Field(min_length=1)

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "name": "John Doe",
                "email": "john.doe@example.com",
                "telephone": "+1234567890",
                "password": "secret123",
            }
        }
    )


class UserUpdateRequest(BaseModel):
    name: str | None = Field(default=None, min_length=1)
    email: str | None = Field(default=None, min_length=1)
    telephone: str | None = None
    password: str | None = Field(default=None, min_length=1)


class UserResponse(UserBase):
    """Public view of a user. Never carries the password hash."""

    id: str
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


# --- Auth ---
class LoginRequest(BaseModel):
    email: str = Field(min_length=1)
    password: str = Field(min_length=1)


class LoginResponse(BaseModel):
    token: str


class Token(BaseModel):
    access_token: str
    token_type: Literal["bearer"] = "bearer"


class ClaimResponse(BaseModel):
    email: str
    iat: int
    exp: int


class ProtectedResponse(BaseModel):
    message: str
    user: ClaimResponse


# --- Errors ---
class ErrorResponse(BaseModel):
    error: str
