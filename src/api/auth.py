"""Authentication API endpoints."""

from typing import Optional

import structlog
from fastapi import APIRouter, Depends, status

from src.api.dependencies import get_auth_service, get_language
from src.models.auth import (
    LoginRequest,
    MessageResponse,
    RefreshRequest,
    RegisterRequest,
    TokenPair,
)
from src.services.auth_service import AuthService
from src.services.i18n_service import Translator, get_translator

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/auth", tags=["Auth"])


@router.post("/login")
async def login(
    request: LoginRequest,
    language: Optional[str] = Depends(get_language),
    auth_service: AuthService = Depends(get_auth_service),
) -> TokenPair:
    """Login with email and password.

    Raises:
        Unauthenticated 401: Unknown email or wrong password
    """
    return await auth_service.login(request.email, request.password, language)


@router.post("/register", status_code=status.HTTP_201_CREATED)
async def register(
    request: RegisterRequest,
    language: Optional[str] = Depends(get_language),
    auth_service: AuthService = Depends(get_auth_service),
) -> TokenPair:
    """Create an account and return its first token pair.

    Raises:
        Conflict 409: Email or username already registered
    """
    return await auth_service.register(
        request.email, request.username, request.password, language
    )


@router.post("/refresh")
async def refresh(
    request: RefreshRequest,
    language: Optional[str] = Depends(get_language),
    auth_service: AuthService = Depends(get_auth_service),
) -> TokenPair:
    """Rotate a refresh token into a new pair.

    Raises:
        Unauthenticated 401: Invalid, expired, or superseded refresh token
    """
    return await auth_service.refresh_token(request.refresh_token, language)


@router.post("/logout")
async def logout(
    request: RefreshRequest,
    language: Optional[str] = Depends(get_language),
    auth_service: AuthService = Depends(get_auth_service),
    translator: Translator = Depends(get_translator),
) -> MessageResponse:
    """End the session for a refresh token. Always returns 200."""
    await auth_service.logout(request.refresh_token)
    return MessageResponse(message=translator.translate("auth.logged_out", language))
