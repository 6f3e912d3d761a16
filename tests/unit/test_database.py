"""Unit tests for pool lifecycle and migration bookkeeping with a mocked asyncpg pool."""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest

import src.database as database


class _Transaction:
    async def __aenter__(self):
        return self

    async def __aexit__(self, *args):
        return False


class _Acquire:
    def __init__(self, conn):
        self._conn = conn

    async def __aenter__(self):
        return self._conn

    async def __aexit__(self, *args):
        pass


@pytest.fixture
def conn():
    conn = MagicMock()
    conn.execute = AsyncMock()
    conn.fetch = AsyncMock(return_value=[])
    conn.fetchval = AsyncMock(return_value=1)
    conn.transaction = MagicMock(side_effect=lambda: _Transaction())
    return conn


@pytest.fixture
def pool(conn):
    pool = MagicMock()
    pool.acquire = MagicMock(side_effect=lambda: _Acquire(conn))
    with patch.object(database, "_pool", pool):
        yield pool


@pytest.fixture
def migrations_dir(tmp_path):
    (tmp_path / "001_users.sql").write_text("CREATE TABLE users ();")
    (tmp_path / "002_user_platforms.sql").write_text("CREATE TABLE user_platforms ();")
    return tmp_path


class TestRunMigrations:

    async def test_applies_in_name_order(self, pool, conn, migrations_dir):
        applied = await database.run_migrations(migrations_dir)

        assert applied == ["001_users.sql", "002_user_platforms.sql"]
        recorded = [
            c.args[1] for c in conn.execute.call_args_list
            if "INSERT INTO schema_migrations" in c.args[0]
        ]
        assert recorded == applied

    async def test_skips_already_applied(self, pool, conn, migrations_dir):
        conn.fetch.return_value = [{"name": "001_users.sql"}]

        applied = await database.run_migrations(migrations_dir)

        assert applied == ["002_user_platforms.sql"]
        executed = [c.args[0] for c in conn.execute.call_args_list]
        assert "CREATE TABLE users ();" not in executed

    async def test_missing_directory(self, pool, tmp_path):
        assert await database.run_migrations(tmp_path / "nope") == []

    async def test_bundled_migrations_are_found(self, pool):
        applied = await database.run_migrations()
        assert applied[:2] == ["001_users.sql", "002_user_platforms.sql"]


class TestPool:

    async def test_get_pool_requires_init(self):
        with patch.object(database, "_pool", None):
            with pytest.raises(RuntimeError):
                await database.get_pool()

    async def test_health_check(self, pool, conn):
        assert await database.health_check() is True
        conn.fetchval.return_value = 0
        assert await database.health_check() is False

    async def test_health_check_without_pool(self):
        with patch.object(database, "_pool", None):
            assert await database.health_check() is False

    async def test_close_resets_pool(self):
        pool = MagicMock()
        pool.close = AsyncMock()
        with patch.object(database, "_pool", pool):
            await database.close_database()
            assert database._pool is None
        pool.close.assert_awaited_once()
