"""Auth and user-management request/response models with validation."""

import re
from typing import Optional

from pydantic import Field, field_validator

from src.models.base import CamelModel
from src.models.user import User

EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
USERNAME_PATTERN = re.compile(r"^[a-zA-Z0-9_-]+$")


def _validate_email(v: str) -> str:
    if not EMAIL_PATTERN.match(v):
        raise ValueError("Email format is incorrect")
    return v


def _validate_username(v: str) -> str:
    if not USERNAME_PATTERN.match(v):
        raise ValueError(
            "Username must contain only alphanumeric characters, "
            "underscores, or hyphens"
        )
    return v


def _validate_password(v: str) -> str:
    if not v.strip():
        raise ValueError("Password cannot be empty or whitespace only")
    return v


class LoginRequest(CamelModel):
    """Login credentials.

    Attributes:
        email: Registered email address
        password: Account password (min 8 chars)
    """

    email: str = Field(..., max_length=255)
    password: str = Field(..., min_length=8)

    @field_validator("email")
    @classmethod
    def email_format(cls, v: str) -> str:
        return _validate_email(v)

    @field_validator("password")
    @classmethod
    def password_not_empty(cls, v: str) -> str:
        return _validate_password(v)


class RegisterRequest(CamelModel):
    """Self-service account registration.

    Attributes:
        email: Unique email address
        username: Unique username (3-50 chars, alphanumeric + underscore/hyphen)
        password: Account password (min 8 chars)
    """

    email: str = Field(..., max_length=255)
    username: str = Field(..., min_length=3, max_length=50)
    password: str = Field(..., min_length=8)

    @field_validator("email")
    @classmethod
    def email_format(cls, v: str) -> str:
        return _validate_email(v)

    @field_validator("username")
    @classmethod
    def username_valid_chars(cls, v: str) -> str:
        return _validate_username(v)

    @field_validator("password")
    @classmethod
    def password_not_empty(cls, v: str) -> str:
        return _validate_password(v)


class RefreshRequest(CamelModel):
    """A refresh token presented for rotation or logout."""

    refresh_token: str


class TokenPair(CamelModel):
    """Access/refresh token pair issued on every successful authentication."""

    access_token: str
    refresh_token: str


class TokenPayload(CamelModel):
    """Claims carried by both access and refresh tokens."""

    sub: str
    email: str
    username: str
    iat: Optional[int] = None
    exp: Optional[int] = None
    jti: Optional[str] = None


class ChangePasswordRequest(CamelModel):
    """Change the authenticated user's password."""

    current_password: str = Field(..., min_length=1)
    new_password: str = Field(..., min_length=8)
    confirm_password: str = Field(..., min_length=8)

    @field_validator("new_password")
    @classmethod
    def password_not_empty(cls, v: str) -> str:
        return _validate_password(v)


class CreateUserRequest(CamelModel):
    """Create a user on behalf of someone else."""

    email: str = Field(..., max_length=255)
    username: str = Field(..., min_length=3, max_length=50)
    password: str = Field(..., min_length=8)
    is_active: bool = True

    @field_validator("email")
    @classmethod
    def email_format(cls, v: str) -> str:
        return _validate_email(v)

    @field_validator("username")
    @classmethod
    def username_valid_chars(cls, v: str) -> str:
        return _validate_username(v)

    @field_validator("password")
    @classmethod
    def password_not_empty(cls, v: str) -> str:
        return _validate_password(v)


class UpdateUserRequest(CamelModel):
    """Partial user update; only provided fields change."""

    email: Optional[str] = Field(default=None, max_length=255)
    username: Optional[str] = Field(default=None, min_length=3, max_length=50)
    password: Optional[str] = Field(default=None, min_length=8)
    is_active: Optional[bool] = None

    @field_validator("email")
    @classmethod
    def email_format(cls, v: Optional[str]) -> Optional[str]:
        return v if v is None else _validate_email(v)

    @field_validator("username")
    @classmethod
    def username_valid_chars(cls, v: Optional[str]) -> Optional[str]:
        return v if v is None else _validate_username(v)

    @field_validator("password")
    @classmethod
    def password_not_empty(cls, v: Optional[str]) -> Optional[str]:
        return v if v is None else _validate_password(v)


class UserListResponse(CamelModel):
    """One page of users plus the total count."""

    users: list[User]
    total: int


class MessageResponse(CamelModel):
    message: str
