"""Authentication service: credential checks, JWT issue/verify and refresh rotation."""

import asyncio
from datetime import datetime, timedelta, timezone
from typing import Optional
from uuid import UUID, uuid4

import asyncpg
import bcrypt
import jwt
import structlog
from pydantic import ValidationError

from src.config import Settings, get_settings
from src.errors import Conflict, Unauthenticated
from src.models.auth import TokenPair, TokenPayload
from src.models.user import UserRecord
from src.repositories.user_repository import UserRepository
from src.services.i18n_service import Translator, get_translator

logger = structlog.get_logger(__name__)

# Constants
JWT_ALGORITHM = "HS256"
BCRYPT_MAX_PASSWORD_BYTES = 72


def _password_bytes(password: str) -> bytes:
    # bcrypt only uses the first 72 bytes
    return password.encode("utf-8")[:BCRYPT_MAX_PASSWORD_BYTES]


class AuthService:
    """Session lifecycle over the user store.

    Every failure of login is ``auth.invalid_credentials`` and every failure
    of refresh is ``auth.invalid_token``, whatever the underlying cause, so
    callers cannot tell a missing account from a wrong password or a forged
    token from an expired one.
    """

    def __init__(
        self,
        repository: Optional[UserRepository] = None,
        translator: Optional[Translator] = None,
        settings: Optional[Settings] = None,
    ):
        self.settings = settings or get_settings()
        self.repository = repository or UserRepository()
        self.translator = translator or get_translator()

    # ------------------------------------------------------------------
    # Passwords
    # ------------------------------------------------------------------

    async def hash_password(self, password: str) -> str:
        """Hash a password with bcrypt in a worker thread.

        Args:
            password: Plain-text password to hash

        Returns:
            Bcrypt hash string
        """
        salt = bcrypt.gensalt(rounds=self.settings.bcrypt_rounds)
        hashed = await asyncio.to_thread(bcrypt.hashpw, _password_bytes(password), salt)
        return hashed.decode("utf-8")

    async def verify_password(self, password: str, password_hash: str) -> bool:
        """Check a password against a bcrypt hash in a worker thread."""
        return await asyncio.to_thread(
            bcrypt.checkpw,
            _password_bytes(password),
            password_hash.encode("utf-8"),
        )

    # ------------------------------------------------------------------
    # Tokens
    # ------------------------------------------------------------------

    def _claims(self, user: UserRecord, lifetime: timedelta) -> dict:
        now = datetime.now(timezone.utc)
        return {
            "sub": str(user.id),
            "email": user.email,
            "username": user.username,
            "iat": now,
            "exp": now + lifetime,
            "jti": uuid4().hex,
        }

    def create_access_token(self, user: UserRecord) -> str:
        """Sign a short-lived access token with the access secret."""
        claims = self._claims(user, timedelta(minutes=self.settings.access_token_expire_minutes))
        return jwt.encode(claims, self.settings.jwt_secret, algorithm=JWT_ALGORITHM)

    def create_refresh_token(self, user: UserRecord) -> str:
        """Sign a refresh token with the refresh secret and a fixed validity window."""
        claims = self._claims(user, timedelta(days=self.settings.refresh_token_expire_days))
        return jwt.encode(claims, self.settings.jwt_refresh_secret, algorithm=JWT_ALGORITHM)

    def create_token_pair(self, user: UserRecord) -> TokenPair:
        return TokenPair(
            access_token=self.create_access_token(user),
            refresh_token=self.create_refresh_token(user),
        )

    def decode_access_token(self, token: str) -> TokenPayload:
        """Decode and validate an access token.

        Raises:
            ValueError: If the token is invalid, expired, or malformed
        """
        try:
            claims = jwt.decode(
                token,
                self.settings.jwt_secret,
                algorithms=[JWT_ALGORITHM],
                options={"require": ["exp", "sub"]},
            )
            return TokenPayload.model_validate(claims)
        except jwt.ExpiredSignatureError:
            raise ValueError("Access token has expired")
        except jwt.InvalidTokenError as e:
            raise ValueError(f"Invalid access token: {e}")
        except ValidationError as e:
            raise ValueError(f"Invalid access token payload: {e}")

    def decode_refresh_token(self, token: str) -> Optional[TokenPayload]:
        """Verify a refresh token's signature and expiry.

        Returns:
            The payload, or None for any malformed, expired or foreign token
        """
        try:
            claims = jwt.decode(
                token,
                self.settings.jwt_refresh_secret,
                algorithms=[JWT_ALGORITHM],
                options={"require": ["exp", "sub"]},
            )
            return TokenPayload.model_validate(claims)
        except jwt.InvalidTokenError as e:
            logger.debug("refresh_token_invalid", reason=type(e).__name__)
            return None
        except ValidationError:
            logger.debug("refresh_token_invalid", reason="payload")
            return None

    async def _issue(self, user: UserRecord) -> TokenPair:
        """Issue a pair and make its refresh token the user's only valid one."""
        tokens = self.create_token_pair(user)
        await self.repository.update_refresh_token(user.id, tokens.refresh_token)
        return tokens

    # ------------------------------------------------------------------
    # Flows
    # ------------------------------------------------------------------

    async def login(self, email: str, password: str, language: Optional[str] = None) -> TokenPair:
        """Authenticate by email and password.

        Raises:
            Unauthenticated: Unknown email or wrong password (same message)
        """
        user = await self.repository.find_by_email(email)
        if user is None or not await self.verify_password(password, user.password_hash):
            logger.info("login_failed")
            raise Unauthenticated(
                "auth.invalid_credentials",
                self.translator.translate("auth.invalid_credentials", language),
            )

        tokens = await self._issue(user)
        logger.info("user_logged_in", user_id=str(user.id), username=user.username)
        return tokens

    async def register(
        self,
        email: str,
        username: str,
        password: str,
        language: Optional[str] = None,
    ) -> TokenPair:
        """Create an account and sign it in.

        Raises:
            Conflict: Email or username already taken (both report
                ``auth.email_already_exists``)
        """
        if await self.repository.find_by_email(email) is not None:
            raise Conflict(
                "auth.email_already_exists",
                self.translator.translate("auth.email_already_exists", language),
            )

        if await self.repository.find_by_username(username) is not None:
            raise Conflict(
                "auth.email_already_exists",
                self.translator.translate("auth.email_already_exists", language),
            )

        password_hash = await self.hash_password(password)
        try:
            user = await self.repository.create(
                email=email,
                username=username,
                password_hash=password_hash,
            )
        except asyncpg.UniqueViolationError:
            # lost a race with a concurrent registration
            raise Conflict(
                "auth.email_already_exists",
                self.translator.translate("auth.email_already_exists", language),
            )

        tokens = await self._issue(user)
        logger.info("user_registered", user_id=str(user.id), username=user.username)
        return tokens

    async def refresh_token(self, presented: str, language: Optional[str] = None) -> TokenPair:
        """Exchange a refresh token for a new pair, invalidating the presented one.

        Raises:
            Unauthenticated: Bad signature, expired, unknown subject, or not the
                subject's current refresh token
        """
        invalid = Unauthenticated(
            "auth.invalid_token",
            self.translator.translate("auth.invalid_token", language),
        )

        payload = self.decode_refresh_token(presented)
        if payload is None:
            raise invalid

        try:
            user_id = UUID(payload.sub)
        except ValueError:
            raise invalid

        user = await self.repository.find_by_id(user_id)
        if user is None or user.refresh_token != presented:
            logger.warning("refresh_token_rejected", user_id=str(user_id))
            raise invalid

        tokens = await self._issue(user)
        logger.info("refresh_token_rotated", user_id=str(user.id))
        return tokens

    async def logout(self, presented: str) -> None:
        """End the session named by a refresh token.

        Tokens that fail verification are ignored and a failed store write is
        only logged; the call always succeeds.
        """
        payload = self.decode_refresh_token(presented)
        if payload is None:
            return

        try:
            user_id = UUID(payload.sub)
        except ValueError:
            return

        try:
            await self.repository.update_refresh_token(user_id, None)
        except Exception as e:
            logger.warning("logout_store_failed", user_id=str(user_id), error=str(e))
            return

        logger.info("user_logged_out", user_id=str(user_id))
