"""User management API endpoints (authenticated)."""

from typing import Optional
from uuid import UUID

import structlog
from fastapi import APIRouter, Depends, Query, status

from src.api.dependencies import get_current_user, get_language, get_user_service
from src.models.auth import (
    ChangePasswordRequest,
    CreateUserRequest,
    MessageResponse,
    UpdateUserRequest,
    UserListResponse,
)
from src.models.user import User
from src.services.i18n_service import Translator, get_translator
from src.services.user_service import UserService

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/users", tags=["Users"])


@router.get("")
async def list_users(
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=10, ge=1, le=100),
    current_user: User = Depends(get_current_user),
    user_service: UserService = Depends(get_user_service),
) -> UserListResponse:
    """List users, newest first."""
    users, total = await user_service.list_users(page, limit)
    return UserListResponse(users=users, total=total)


@router.get("/me")
async def get_me(current_user: User = Depends(get_current_user)) -> User:
    """Get the authenticated user."""
    return current_user


@router.patch("/change-password")
async def change_password(
    request: ChangePasswordRequest,
    current_user: User = Depends(get_current_user),
    language: Optional[str] = Depends(get_language),
    user_service: UserService = Depends(get_user_service),
    translator: Translator = Depends(get_translator),
) -> MessageResponse:
    """Change the authenticated user's password.

    Raises:
        BadRequest 400: Confirmation mismatch or unchanged password
        Unauthenticated 401: Wrong current password
        NotFound 404: User vanished
    """
    await user_service.change_password(
        current_user.id,
        request.current_password,
        request.new_password,
        request.confirm_password,
        language,
    )
    return MessageResponse(message=translator.translate("users.password_changed", language))


@router.get("/{user_id}")
async def get_user(
    user_id: UUID,
    current_user: User = Depends(get_current_user),
    language: Optional[str] = Depends(get_language),
    user_service: UserService = Depends(get_user_service),
) -> User:
    return await user_service.get_by_id(user_id, language)


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_user(
    request: CreateUserRequest,
    current_user: User = Depends(get_current_user),
    language: Optional[str] = Depends(get_language),
    user_service: UserService = Depends(get_user_service),
) -> User:
    """Create a user.

    Raises:
        Conflict 409: Email or username already registered
    """
    user = await user_service.create_user(
        email=request.email,
        username=request.username,
        password=request.password,
        is_active=request.is_active,
        language=language,
    )
    logger.info("user_created_by", actor_id=str(current_user.id), user_id=str(user.id))
    return user


@router.put("/{user_id}")
async def update_user(
    user_id: UUID,
    request: UpdateUserRequest,
    current_user: User = Depends(get_current_user),
    language: Optional[str] = Depends(get_language),
    user_service: UserService = Depends(get_user_service),
) -> User:
    return await user_service.update_user(
        user_id,
        email=request.email,
        username=request.username,
        password=request.password,
        is_active=request.is_active,
        language=language,
    )


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_user(
    user_id: UUID,
    current_user: User = Depends(get_current_user),
    language: Optional[str] = Depends(get_language),
    user_service: UserService = Depends(get_user_service),
) -> None:
    await user_service.delete_user(user_id, language)
    logger.info("user_deleted_by", actor_id=str(current_user.id), user_id=str(user_id))


@router.patch("/{user_id}/activate")
async def activate_user(
    user_id: UUID,
    current_user: User = Depends(get_current_user),
    language: Optional[str] = Depends(get_language),
    user_service: UserService = Depends(get_user_service),
) -> User:
    return await user_service.set_active(user_id, True, language)


@router.patch("/{user_id}/deactivate")
async def deactivate_user(
    user_id: UUID,
    current_user: User = Depends(get_current_user),
    language: Optional[str] = Depends(get_language),
    user_service: UserService = Depends(get_user_service),
) -> User:
    return await user_service.set_active(user_id, False, language)
