"""Data access for the user_platforms table."""

from datetime import datetime, timezone
from typing import Any, Optional
from uuid import UUID, uuid4

import structlog

from src.database import get_pool
from src.models.user_platform import UserPlatform

logger = structlog.get_logger(__name__)

PLATFORM_COLUMNS = (
    "id, user_id, platform_name, account_name, secret, issuer, digits, period, created_at, updated_at"
)


def _row_to_platform(row: Any) -> UserPlatform:
    return UserPlatform(
        id=row["id"],
        user_id=row["user_id"],
        platform_name=row["platform_name"],
        account_name=row["account_name"],
        secret=row["secret"],
        issuer=row["issuer"],
        digits=row["digits"],
        period=row["period"],
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


class UserPlatformRepository:
    """asyncpg-backed store of per-user TOTP credentials.

    Every query is scoped by user_id so one user never sees another's rows.
    """

    async def find_by_id(self, platform_id: UUID, user_id: UUID) -> Optional[UserPlatform]:
        pool = await get_pool()

        async with pool.acquire() as conn:
            row = await conn.fetchrow(
                f"SELECT {PLATFORM_COLUMNS} FROM user_platforms WHERE id = $1 AND user_id = $2",
                platform_id,
                user_id,
            )

        return _row_to_platform(row) if row is not None else None

    async def find_by_account(
        self, user_id: UUID, platform_name: str, account_name: str
    ) -> Optional[UserPlatform]:
        pool = await get_pool()

        async with pool.acquire() as conn:
            row = await conn.fetchrow(
                f"""
                SELECT {PLATFORM_COLUMNS}
                FROM user_platforms
                WHERE user_id = $1 AND platform_name = $2 AND account_name = $3
                """,
                user_id,
                platform_name,
                account_name,
            )

        return _row_to_platform(row) if row is not None else None

    async def list_by_user(self, user_id: UUID, offset: int = 0, limit: int = 20) -> list[UserPlatform]:
        pool = await get_pool()

        async with pool.acquire() as conn:
            rows = await conn.fetch(
                f"""
                SELECT {PLATFORM_COLUMNS}
                FROM user_platforms
                WHERE user_id = $1
                ORDER BY created_at DESC
                OFFSET $2 LIMIT $3
                """,
                user_id,
                offset,
                limit,
            )

        return [_row_to_platform(row) for row in rows]

    async def count_by_user(self, user_id: UUID) -> int:
        pool = await get_pool()

        async with pool.acquire() as conn:
            return await conn.fetchval(
                "SELECT COUNT(*) FROM user_platforms WHERE user_id = $1",
                user_id,
            )

    async def create(
        self,
        user_id: UUID,
        platform_name: str,
        account_name: str,
        secret: str,
        issuer: Optional[str] = None,
        digits: int = 6,
        period: int = 30,
    ) -> UserPlatform:
        platform_id = uuid4()
        now = datetime.now(timezone.utc)

        pool = await get_pool()

        async with pool.acquire() as conn:
            await conn.execute(
                """
                INSERT INTO user_platforms
                    (id, user_id, platform_name, account_name, secret, issuer, digits, period, created_at, updated_at)
                VALUES ($1, $2, $3, $4, $5, $6, $7, $8, $9, $10)
                """,
                platform_id,
                user_id,
                platform_name,
                account_name,
                secret,
                issuer,
                digits,
                period,
                now,
                now,
            )

        logger.info(
            "user_platform_created",
            platform_id=str(platform_id),
            user_id=str(user_id),
            platform_name=platform_name,
        )

        return UserPlatform(
            id=platform_id,
            user_id=user_id,
            platform_name=platform_name,
            account_name=account_name,
            secret=secret,
            issuer=issuer,
            digits=digits,
            period=period,
            created_at=now,
            updated_at=now,
        )

    async def update(self, platform_id: UUID, user_id: UUID, **fields: Any) -> Optional[UserPlatform]:
        """Update the given columns; None values are skipped.

        Returns:
            Updated UserPlatform, or None if it does not exist for this user
        """
        set_clauses = []
        params: list[Any] = []
        param_idx = 1

        for column in ("platform_name", "account_name", "secret", "issuer", "digits", "period"):
            value = fields.get(column)
            if value is not None:
                set_clauses.append(f"{column} = ${param_idx}")
                params.append(value)
                param_idx += 1

        if not set_clauses:
            return await self.find_by_id(platform_id, user_id)

        set_clauses.append(f"updated_at = ${param_idx}")
        params.append(datetime.now(timezone.utc))
        param_idx += 1

        params.extend([platform_id, user_id])

        query = f"""
            UPDATE user_platforms
            SET {', '.join(set_clauses)}
            WHERE id = ${param_idx} AND user_id = ${param_idx + 1}
            RETURNING {PLATFORM_COLUMNS}
        """

        pool = await get_pool()

        async with pool.acquire() as conn:
            row = await conn.fetchrow(query, *params)

        if row is None:
            return None

        logger.info("user_platform_updated", platform_id=str(platform_id), user_id=str(user_id))
        return _row_to_platform(row)

    async def delete(self, platform_id: UUID, user_id: UUID) -> bool:
        pool = await get_pool()

        async with pool.acquire() as conn:
            result = await conn.execute(
                "DELETE FROM user_platforms WHERE id = $1 AND user_id = $2",
                platform_id,
                user_id,
            )

        deleted = result == "DELETE 1"
        if deleted:
            logger.info("user_platform_deleted", platform_id=str(platform_id), user_id=str(user_id))
        return deleted
