"""FastAPI dependencies for authentication, language and service wiring."""

from typing import Optional
from uuid import UUID

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from src.errors import Unauthenticated
from src.models.user import User
from src.services.auth_service import AuthService
from src.services.i18n_service import Translator, get_translator
from src.services.user_platform_service import UserPlatformService
from src.services.user_service import UserService

bearer_scheme = HTTPBearer(auto_error=False)


def get_language(request: Request) -> Optional[str]:
    """Language requested via Accept-Language (set by the middleware)."""
    return getattr(request.state, "language", None)


def get_auth_service(translator: Translator = Depends(get_translator)) -> AuthService:
    return AuthService(translator=translator)


def get_user_service(translator: Translator = Depends(get_translator)) -> UserService:
    return UserService(translator=translator)


def get_user_platform_service(
    translator: Translator = Depends(get_translator),
) -> UserPlatformService:
    return UserPlatformService(translator=translator)


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    language: Optional[str] = Depends(get_language),
    auth_service: AuthService = Depends(get_auth_service),
    translator: Translator = Depends(get_translator),
) -> User:
    """Resolve the user behind a Bearer access token.

    Raises:
        Unauthenticated: Missing/invalid/expired token, unknown or inactive user
    """
    unauthorized = Unauthenticated(
        "common.unauthorized",
        translator.translate("common.unauthorized", language),
    )

    if credentials is None:
        raise unauthorized

    try:
        payload = auth_service.decode_access_token(credentials.credentials)
        user_id = UUID(payload.sub)
    except ValueError:
        raise unauthorized

    record = await auth_service.repository.find_by_id(user_id)
    if record is None or not record.is_active:
        raise unauthorized

    return record.to_user()
