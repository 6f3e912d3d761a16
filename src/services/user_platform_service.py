"""Per-user TOTP credentials and one-time code generation."""

import time
from typing import Optional
from uuid import UUID

import pyotp
import structlog

from src.errors import BadRequest, Conflict, NotFound
from src.models.user_platform import OTPResponse, UserPlatform
from src.repositories.user_platform_repository import UserPlatformRepository
from src.services.i18n_service import Translator, get_translator

logger = structlog.get_logger(__name__)


def normalize_secret(secret: str) -> str:
    """Strip the spaces and lower case that authenticator apps often display."""
    return secret.replace(" ", "").upper()


class UserPlatformService:
    """CRUD over a user's stored platform credentials.

    A platform owned by another user is reported exactly like a missing one.
    """

    def __init__(
        self,
        repository: Optional[UserPlatformRepository] = None,
        translator: Optional[Translator] = None,
    ):
        self.repository = repository or UserPlatformRepository()
        self.translator = translator or get_translator()

    def _error(self, cls, key: str, language: Optional[str]):
        return cls(key, self.translator.translate(key, language))

    def _check_secret(self, secret: str, digits: int, period: int, language: Optional[str]) -> None:
        try:
            pyotp.TOTP(secret, digits=digits, interval=period).now()
        except ValueError:
            # binascii.Error is a ValueError
            raise self._error(BadRequest, "user_platforms.invalid_otp", language)

    async def list_platforms(
        self, user_id: UUID, page: int = 1, limit: int = 20
    ) -> tuple[list[UserPlatform], int]:
        page = max(page, 1)
        limit = max(limit, 1)
        platforms = await self.repository.list_by_user(user_id, offset=(page - 1) * limit, limit=limit)
        total = await self.repository.count_by_user(user_id)
        return platforms, total

    async def get_platform(
        self, platform_id: UUID, user_id: UUID, language: Optional[str] = None
    ) -> UserPlatform:
        platform = await self.repository.find_by_id(platform_id, user_id)
        if platform is None:
            raise self._error(NotFound, "user_platforms.not_found", language)
        return platform

    async def create_platform(
        self,
        user_id: UUID,
        platform_name: str,
        account_name: str,
        secret: str,
        issuer: Optional[str] = None,
        digits: int = 6,
        period: int = 30,
        language: Optional[str] = None,
    ) -> UserPlatform:
        """Store a new credential.

        Raises:
            BadRequest: If the secret is not valid base32
            Conflict: If the user already stores this platform/account pair
        """
        secret = normalize_secret(secret)
        self._check_secret(secret, digits, period, language)

        if await self.repository.find_by_account(user_id, platform_name, account_name) is not None:
            raise self._error(Conflict, "user_platforms.already_exists", language)

        return await self.repository.create(
            user_id=user_id,
            platform_name=platform_name,
            account_name=account_name,
            secret=secret,
            issuer=issuer,
            digits=digits,
            period=period,
        )

    async def update_platform(
        self,
        platform_id: UUID,
        user_id: UUID,
        platform_name: Optional[str] = None,
        account_name: Optional[str] = None,
        secret: Optional[str] = None,
        issuer: Optional[str] = None,
        digits: Optional[int] = None,
        period: Optional[int] = None,
        language: Optional[str] = None,
    ) -> UserPlatform:
        """Update the provided fields of a credential.

        Raises:
            NotFound: If the credential does not exist for this user
            BadRequest: If the resulting secret/digits/period are unusable
            Conflict: If the new platform/account pair is already stored
        """
        current = await self.get_platform(platform_id, user_id, language)

        if secret is not None:
            secret = normalize_secret(secret)
        if secret is not None or digits is not None or period is not None:
            self._check_secret(
                secret or current.secret,
                digits or current.digits,
                period or current.period,
                language,
            )

        new_name = platform_name or current.platform_name
        new_account = account_name or current.account_name
        if (new_name, new_account) != (current.platform_name, current.account_name):
            existing = await self.repository.find_by_account(user_id, new_name, new_account)
            if existing is not None and existing.id != platform_id:
                raise self._error(Conflict, "user_platforms.already_exists", language)

        updated = await self.repository.update(
            platform_id,
            user_id,
            platform_name=platform_name,
            account_name=account_name,
            secret=secret,
            issuer=issuer,
            digits=digits,
            period=period,
        )
        if updated is None:
            raise self._error(NotFound, "user_platforms.not_found", language)
        return updated

    async def delete_platform(
        self, platform_id: UUID, user_id: UUID, language: Optional[str] = None
    ) -> None:
        if not await self.repository.delete(platform_id, user_id):
            raise self._error(NotFound, "user_platforms.not_found", language)

    async def generate_otp(
        self,
        platform_id: UUID,
        user_id: UUID,
        language: Optional[str] = None,
        at: Optional[float] = None,
    ) -> OTPResponse:
        """Compute the current TOTP code for a stored credential.

        Args:
            at: Unix time to compute for (defaults to now)
        """
        platform = await self.get_platform(platform_id, user_id, language)
        now = time.time() if at is None else at
        totp = pyotp.TOTP(platform.secret, digits=platform.digits, interval=platform.period)
        try:
            code = totp.at(now)
        except ValueError:
            raise self._error(BadRequest, "user_platforms.invalid_otp", language)

        logger.info("otp_generated", platform_id=str(platform_id), user_id=str(user_id))
        return OTPResponse(
            code=code,
            remaining_seconds=platform.period - int(now) % platform.period,
            period=platform.period,
        )
