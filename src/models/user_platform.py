"""Stored TOTP credentials for third-party platforms."""

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import Field

from src.models.base import CamelModel


class UserPlatform(CamelModel):
    """A TOTP credential owned by one user."""

    id: UUID
    user_id: UUID
    platform_name: str
    account_name: str
    secret: str
    issuer: Optional[str] = None
    digits: int = 6
    period: int = 30
    created_at: datetime
    updated_at: datetime


class CreateUserPlatformRequest(CamelModel):
    """Register a TOTP credential.

    Attributes:
        platform_name: Display name of the platform (e.g. "GitHub")
        account_name: Account identifier on that platform
        secret: Base32 TOTP shared secret
        issuer: Optional issuer label
        digits: Code length (6-8)
        period: Code lifetime in seconds
    """

    platform_name: str = Field(..., min_length=1, max_length=100)
    account_name: str = Field(..., min_length=1, max_length=255)
    secret: str = Field(..., min_length=1, max_length=255)
    issuer: Optional[str] = Field(default=None, max_length=100)
    digits: int = Field(default=6, ge=6, le=8)
    period: int = Field(default=30, ge=15, le=120)


class UpdateUserPlatformRequest(CamelModel):
    """Partial update of a stored credential."""

    platform_name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    account_name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    secret: Optional[str] = Field(default=None, min_length=1, max_length=255)
    issuer: Optional[str] = Field(default=None, max_length=100)
    digits: Optional[int] = Field(default=None, ge=6, le=8)
    period: Optional[int] = Field(default=None, ge=15, le=120)


class UserPlatformListResponse(CamelModel):
    platforms: list[UserPlatform]
    total: int


class OTPResponse(CamelModel):
    """A current one-time code and how long it stays valid."""

    code: str
    remaining_seconds: int
    period: int
