"""User management service."""

from typing import Optional
from uuid import UUID

import asyncpg
import structlog

from src.errors import BadRequest, Conflict, NotFound, Unauthenticated
from src.models.user import User, UserRecord
from src.repositories.user_repository import UserRepository
from src.services.auth_service import AuthService
from src.services.i18n_service import Translator, get_translator

logger = structlog.get_logger(__name__)


class UserService:
    """Service for user CRUD operations and password changes."""

    def __init__(
        self,
        repository: Optional[UserRepository] = None,
        auth_service: Optional[AuthService] = None,
        translator: Optional[Translator] = None,
    ):
        self.repository = repository or UserRepository()
        self.translator = translator or get_translator()
        self.auth_service = auth_service or AuthService(
            repository=self.repository,
            translator=self.translator,
        )

    def _not_found(self, language: Optional[str]) -> NotFound:
        return NotFound("users.not_found", self.translator.translate("users.not_found", language))

    def _conflict(self, language: Optional[str]) -> Conflict:
        return Conflict(
            "auth.email_already_exists",
            self.translator.translate("auth.email_already_exists", language),
        )

    async def _get_record(self, user_id: UUID, language: Optional[str]) -> UserRecord:
        record = await self.repository.find_by_id(user_id)
        if record is None:
            raise self._not_found(language)
        return record

    async def list_users(self, page: int = 1, limit: int = 10) -> tuple[list[User], int]:
        """Return one page of users (newest first) and the total count.

        Args:
            page: 1-based page number
            limit: Page size
        """
        page = max(page, 1)
        limit = max(limit, 1)
        records = await self.repository.list(offset=(page - 1) * limit, limit=limit)
        total = await self.repository.count()
        return [r.to_user() for r in records], total

    async def get_by_id(self, user_id: UUID, language: Optional[str] = None) -> User:
        """Get a user by id.

        Raises:
            NotFound: If the user does not exist
        """
        return (await self._get_record(user_id, language)).to_user()

    async def create_user(
        self,
        email: str,
        username: str,
        password: str,
        is_active: bool = True,
        language: Optional[str] = None,
    ) -> User:
        """Create a user with a hashed password.

        Raises:
            Conflict: If the email or username is taken
        """
        if await self.repository.find_by_email(email) is not None:
            raise self._conflict(language)
        if await self.repository.find_by_username(username) is not None:
            raise self._conflict(language)

        password_hash = await self.auth_service.hash_password(password)
        try:
            record = await self.repository.create(
                email=email,
                username=username,
                password_hash=password_hash,
                is_active=is_active,
            )
        except asyncpg.UniqueViolationError:
            raise self._conflict(language)
        return record.to_user()

    async def update_user(
        self,
        user_id: UUID,
        email: Optional[str] = None,
        username: Optional[str] = None,
        password: Optional[str] = None,
        is_active: Optional[bool] = None,
        language: Optional[str] = None,
    ) -> User:
        """Update the provided fields of a user.

        Uniqueness is only checked for values that actually change.

        Raises:
            NotFound: If the user does not exist
            Conflict: If the new email or username is taken
        """
        current = await self._get_record(user_id, language)

        if email is not None and email != current.email:
            if await self.repository.find_by_email(email) is not None:
                raise self._conflict(language)

        if username is not None and username != current.username:
            if await self.repository.find_by_username(username) is not None:
                raise self._conflict(language)

        password_hash = None
        if password is not None:
            password_hash = await self.auth_service.hash_password(password)

        try:
            updated = await self.repository.update(
                user_id,
                email=email,
                username=username,
                password_hash=password_hash,
                is_active=is_active,
            )
        except asyncpg.UniqueViolationError:
            raise self._conflict(language)
        if updated is None:
            raise self._not_found(language)
        return updated.to_user()

    async def delete_user(self, user_id: UUID, language: Optional[str] = None) -> None:
        """Delete a user.

        Raises:
            NotFound: If the user does not exist
        """
        await self._get_record(user_id, language)
        await self.repository.delete(user_id)

    async def set_active(self, user_id: UUID, is_active: bool, language: Optional[str] = None) -> User:
        await self._get_record(user_id, language)
        updated = await self.repository.set_active(user_id, is_active)
        if updated is None:
            raise self._not_found(language)
        logger.info("user_active_changed", user_id=str(user_id), is_active=is_active)
        return updated.to_user()

    async def change_password(
        self,
        user_id: UUID,
        current_password: str,
        new_password: str,
        confirm_password: str,
        language: Optional[str] = None,
    ) -> None:
        """Replace a user's password after checking the current one.

        The stored refresh token is left alone, so existing sessions stay valid.

        Raises:
            BadRequest: Confirmation mismatch, or new password equals the old one
                (both ``auth.password_too_weak``)
            NotFound: Unknown user
            Unauthenticated: Wrong current password
        """
        if new_password != confirm_password:
            raise BadRequest(
                "auth.password_too_weak",
                self.translator.translate("auth.password_too_weak", language),
            )

        record = await self._get_record(user_id, language)

        if not await self.auth_service.verify_password(current_password, record.password_hash):
            raise Unauthenticated(
                "auth.invalid_current_password",
                self.translator.translate("auth.invalid_current_password", language),
            )

        if await self.auth_service.verify_password(new_password, record.password_hash):
            raise BadRequest(
                "auth.password_too_weak",
                self.translator.translate("auth.password_too_weak", language),
            )

        password_hash = await self.auth_service.hash_password(new_password)
        await self.repository.update_password(user_id, password_hash)
        logger.info("password_changed", user_id=str(user_id))
