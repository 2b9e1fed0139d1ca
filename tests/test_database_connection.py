"""
Database pool lifecycle and schema bootstrap tests
asyncpg.create_pool is patched; no database server is needed.
"""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from user_registry.app import create_app
from user_registry.database import connection
from user_registry.database.connection import SCHEMA_SQL, close_database, get_db_pool, init_database


def make_pool():
    executed = []
    conn = MagicMock()
    conn.fetchval = AsyncMock(side_effect=lambda query: executed.append(query) or 1)
    conn.execute = AsyncMock(side_effect=lambda query: executed.append(query) or "CREATE TABLE")

    pool = MagicMock()
    pool.acquire.return_value.__aenter__.return_value = conn
    pool.close = AsyncMock()
    return pool, executed


@pytest.fixture(autouse=True)
def reset_pool():
    connection.db_pool = None
    yield
    connection.db_pool = None


class TestInitDatabase:

    @pytest.mark.asyncio
    async def test_probes_then_creates_user_table(self):
        pool, executed = make_pool()

        with patch("user_registry.database.connection.asyncpg.create_pool", AsyncMock(return_value=pool)) as create_pool:
            await init_database()

        assert get_db_pool() is pool
        assert executed == ["SELECT 1", SCHEMA_SQL]
        assert "CREATE TABLE IF NOT EXISTS user_table" in SCHEMA_SQL
        kwargs = create_pool.call_args.kwargs
        assert kwargs["min_size"] <= kwargs["max_size"]
        assert kwargs["statement_cache_size"] == 0


class TestCloseDatabase:

    @pytest.mark.asyncio
    async def test_closes_and_clears_pool(self):
        pool, _ = make_pool()
        connection.db_pool = pool

        await close_database()

        pool.close.assert_awaited_once()
        assert get_db_pool() is None

    @pytest.mark.asyncio
    async def test_close_without_pool_is_noop(self):
        await close_database()

        assert get_db_pool() is None


class TestLifespan:

    @pytest.mark.asyncio
    async def test_default_app_opens_and_closes_pool(self):
        pool, executed = make_pool()
        app = create_app()

        with patch("user_registry.database.connection.asyncpg.create_pool", AsyncMock(return_value=pool)):
            async with app.router.lifespan_context(app):
                assert get_db_pool() is pool
                assert executed == ["SELECT 1", SCHEMA_SQL]

        pool.close.assert_awaited_once()
        assert get_db_pool() is None

    @pytest.mark.asyncio
    async def test_app_with_explicit_store_leaves_database_alone(self, user_store):
        app = create_app(store=user_store)

        with patch("user_registry.database.connection.asyncpg.create_pool", AsyncMock()) as create_pool:
            async with app.router.lifespan_context(app):
                pass

        create_pool.assert_not_called()
        assert get_db_pool() is None
