"""Data access for the users table."""

from datetime import datetime, timezone
from typing import Any, Optional
from uuid import UUID, uuid4

import structlog

from src.database import get_pool
from src.models.user import UserRecord

logger = structlog.get_logger(__name__)

USER_COLUMNS = (
    "id, email, username, password_hash, refresh_token, is_active, created_at, updated_at"
)


def _row_to_record(row: Any) -> UserRecord:
    return UserRecord(
        id=row["id"],
        email=row["email"],
        username=row["username"],
        password_hash=row["password_hash"],
        refresh_token=row["refresh_token"],
        is_active=row["is_active"],
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


class UserRepository:
    """asyncpg-backed store of user records.

    Lookups by email and username are exact (case-sensitive) matches,
    backed by the UNIQUE constraints on those columns.
    """

    async def _fetch_one(self, where: str, value: Any) -> Optional[UserRecord]:
        pool = await get_pool()

        async with pool.acquire() as conn:
            row = await conn.fetchrow(
                f"SELECT {USER_COLUMNS} FROM users WHERE {where} = $1",
                value,
            )

        return _row_to_record(row) if row is not None else None

    async def find_by_email(self, email: str) -> Optional[UserRecord]:
        return await self._fetch_one("email", email)

    async def find_by_username(self, username: str) -> Optional[UserRecord]:
        return await self._fetch_one("username", username)

    async def find_by_id(self, user_id: UUID) -> Optional[UserRecord]:
        return await self._fetch_one("id", user_id)

    async def create(
        self,
        email: str,
        username: str,
        password_hash: str,
        is_active: bool = True,
    ) -> UserRecord:
        """Insert a new user row.

        Args:
            email: Unique email address
            username: Unique username
            password_hash: Bcrypt hash of the password
            is_active: Initial active flag

        Returns:
            The stored UserRecord
        """
        user_id = uuid4()
        now = datetime.now(timezone.utc)

        pool = await get_pool()

        async with pool.acquire() as conn:
            await conn.execute(
                """
                INSERT INTO users (id, email, username, password_hash, refresh_token, is_active, created_at, updated_at)
                VALUES ($1, $2, $3, $4, NULL, $5, $6, $7)
                """,
                user_id,
                email,
                username,
                password_hash,
                is_active,
                now,
                now,
            )

        logger.info("user_created", user_id=str(user_id), username=username)

        return UserRecord(
            id=user_id,
            email=email,
            username=username,
            password_hash=password_hash,
            refresh_token=None,
            is_active=is_active,
            created_at=now,
            updated_at=now,
        )

    async def update(
        self,
        user_id: UUID,
        email: Optional[str] = None,
        username: Optional[str] = None,
        password_hash: Optional[str] = None,
        is_active: Optional[bool] = None,
    ) -> Optional[UserRecord]:
        """Update the columns that are not None.

        Returns:
            Updated UserRecord, or None if the user does not exist
        """
        # Build SET clause dynamically for non-None fields
        set_clauses = []
        params: list[Any] = []
        param_idx = 1

        for column, value in (
            ("email", email),
            ("username", username),
            ("password_hash", password_hash),
            ("is_active", is_active),
        ):
            if value is not None:
                set_clauses.append(f"{column} = ${param_idx}")
                params.append(value)
                param_idx += 1

        if not set_clauses:
            return await self.find_by_id(user_id)

        set_clauses.append(f"updated_at = ${param_idx}")
        params.append(datetime.now(timezone.utc))
        param_idx += 1

        params.append(user_id)

        query = f"""
            UPDATE users
            SET {', '.join(set_clauses)}
            WHERE id = ${param_idx}
            RETURNING {USER_COLUMNS}
        """

        pool = await get_pool()

        async with pool.acquire() as conn:
            row = await conn.fetchrow(query, *params)

        if row is None:
            return None

        logger.info(
            "user_updated",
            user_id=str(user_id),
            fields_updated=[c.split(" = ")[0] for c in set_clauses if "updated_at" not in c],
        )

        return _row_to_record(row)

    async def update_password(self, user_id: UUID, password_hash: str) -> Optional[UserRecord]:
        return await self.update(user_id, password_hash=password_hash)

    async def set_active(self, user_id: UUID, is_active: bool) -> Optional[UserRecord]:
        return await self.update(user_id, is_active=is_active)

    async def update_refresh_token(self, user_id: UUID, refresh_token: Optional[str]) -> None:
        """Overwrite the stored refresh token; None ends the session.

        Last write wins when two requests race for the same user.
        """
        pool = await get_pool()

        async with pool.acquire() as conn:
            await conn.execute(
                """
                UPDATE users
                SET refresh_token = $1, updated_at = $2
                WHERE id = $3
                """,
                refresh_token,
                datetime.now(timezone.utc),
                user_id,
            )

    async def delete(self, user_id: UUID) -> bool:
        """Hard-delete a user.

        Returns:
            True if a row was deleted, False if not found
        """
        pool = await get_pool()

        async with pool.acquire() as conn:
            result = await conn.execute("DELETE FROM users WHERE id = $1", user_id)

        deleted = result == "DELETE 1"

        if deleted:
            logger.info("user_deleted", user_id=str(user_id))
        else:
            logger.warning("user_delete_not_found", user_id=str(user_id))

        return deleted

    async def list(self, offset: int = 0, limit: int = 10) -> list[UserRecord]:
        """Return a page of users, newest first."""
        pool = await get_pool()

        async with pool.acquire() as conn:
            rows = await conn.fetch(
                f"""
                SELECT {USER_COLUMNS}
                FROM users
                ORDER BY created_at DESC
                OFFSET $1 LIMIT $2
                """,
                offset,
                limit,
            )

        return [_row_to_record(row) for row in rows]

    async def count(self) -> int:
        pool = await get_pool()

        async with pool.acquire() as conn:
            count = await conn.fetchval("SELECT COUNT(*) FROM users")

        return count
