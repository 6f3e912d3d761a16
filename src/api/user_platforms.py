"""User platform (stored TOTP credential) API endpoints."""

from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status

from src.api.dependencies import get_current_user, get_language, get_user_platform_service
from src.models.user import User
from src.models.user_platform import (
    CreateUserPlatformRequest,
    OTPResponse,
    UpdateUserPlatformRequest,
    UserPlatform,
    UserPlatformListResponse,
)
from src.services.user_platform_service import UserPlatformService

router = APIRouter(prefix="/user-platforms", tags=["User Platforms"])


@router.get("")
async def list_platforms(
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=20, ge=1, le=100),
    current_user: User = Depends(get_current_user),
    service: UserPlatformService = Depends(get_user_platform_service),
) -> UserPlatformListResponse:
    platforms, total = await service.list_platforms(current_user.id, page, limit)
    return UserPlatformListResponse(platforms=platforms, total=total)


@router.get("/{platform_id}")
async def get_platform(
    platform_id: UUID,
    current_user: User = Depends(get_current_user),
    language: Optional[str] = Depends(get_language),
    service: UserPlatformService = Depends(get_user_platform_service),
) -> UserPlatform:
    return await service.get_platform(platform_id, current_user.id, language)


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_platform(
    request: CreateUserPlatformRequest,
    current_user: User = Depends(get_current_user),
    language: Optional[str] = Depends(get_language),
    service: UserPlatformService = Depends(get_user_platform_service),
) -> UserPlatform:
    """Store a TOTP credential for the authenticated user.

    Raises:
        BadRequest 400: Secret is not valid base32
        Conflict 409: Platform/account pair already stored
    """
    return await service.create_platform(
        current_user.id,
        platform_name=request.platform_name,
        account_name=request.account_name,
        secret=request.secret,
        issuer=request.issuer,
        digits=request.digits,
        period=request.period,
        language=language,
    )


@router.put("/{platform_id}")
async def update_platform(
    platform_id: UUID,
    request: UpdateUserPlatformRequest,
    current_user: User = Depends(get_current_user),
    language: Optional[str] = Depends(get_language),
    service: UserPlatformService = Depends(get_user_platform_service),
) -> UserPlatform:
    return await service.update_platform(
        platform_id,
        current_user.id,
        platform_name=request.platform_name,
        account_name=request.account_name,
        secret=request.secret,
        issuer=request.issuer,
        digits=request.digits,
        period=request.period,
        language=language,
    )


@router.delete("/{platform_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_platform(
    platform_id: UUID,
    current_user: User = Depends(get_current_user),
    language: Optional[str] = Depends(get_language),
    service: UserPlatformService = Depends(get_user_platform_service),
) -> None:
    await service.delete_platform(platform_id, current_user.id, language)


@router.post("/{platform_id}/otp")
async def generate_otp(
    platform_id: UUID,
    current_user: User = Depends(get_current_user),
    language: Optional[str] = Depends(get_language),
    service: UserPlatformService = Depends(get_user_platform_service),
) -> OTPResponse:
    """Return the current one-time code for a stored credential."""
    return await service.generate_otp(platform_id, current_user.id, language)
