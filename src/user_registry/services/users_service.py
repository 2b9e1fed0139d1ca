"""
User store - persistence of User records

The store is the only component that talks to the database. Routes receive
an instance at application startup and never touch the pool directly.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, List, Mapping, Optional

import asyncpg

from user_registry.database.connection import get_db_pool, USER_TABLE
from user_registry.models.user import User, UserLookup, UserPayload

logger = logging.getLogger(__name__)

USER_COLUMNS = "id, first_name, last_name"


class UserStore(ABC):
    """Persistence interface for User records"""

    @abstractmethod
    async def list_all(self) -> List[User]:
        """Return every stored user in insertion order"""

    @abstractmethod
    async def get(self, user_id: int) -> UserLookup:
        """Look up a single user by id"""

    @abstractmethod
    async def create(self, payload: UserPayload) -> User:
        """Insert a new user and return it with its generated id"""

    @abstractmethod
    async def update(self, user_id: int, payload: UserPayload) -> bool:
        """
        Overwrite first and last name of an existing user

        Returns:
            True if the user existed and was updated, False otherwise
        """


class PostgresUserStore(UserStore):
    """UserStore backed by the asyncpg connection pool"""

    def __init__(self, pool: Optional[asyncpg.Pool] = None):
        self._pool = pool
        logger.info(f"PostgresUserStore initialized for table: {USER_TABLE}")

    def _get_pool(self):
        pool = self._pool if self._pool is not None else get_db_pool()
        if not pool:
            raise RuntimeError("Database pool not initialized")
        return pool

    @staticmethod
    def _row_to_user(row: Mapping[str, Any]) -> User:
        return User(
            id=row["id"],
            first_name=row["first_name"],
            last_name=row["last_name"],
        )

    async def list_all(self) -> List[User]:
        query = f"SELECT {USER_COLUMNS} FROM {USER_TABLE} ORDER BY id"

        async with self._get_pool().acquire() as conn:
            logger.info(f"Executing READ query: {query}")
            try:
                rows = await conn.fetch(query)
            except asyncpg.PostgresError as e:
                logger.error(f"Database error: {e}")
                raise RuntimeError(f"Database query failed: {str(e)}")

        return [self._row_to_user(row) for row in rows]

    async def get(self, user_id: int) -> UserLookup:
        query = f"SELECT {USER_COLUMNS} FROM {USER_TABLE} WHERE id = $1"

        async with self._get_pool().acquire() as conn:
            logger.info(f"Executing READ query: {query}")
            logger.info(f"Parameters: {[user_id]}")
            try:
                row = await conn.fetchrow(query, user_id)
            except asyncpg.PostgresError as e:
                logger.error(f"Database error: {e}")
                raise RuntimeError(f"Database query failed: {str(e)}")

        if row is None:
            return UserLookup.miss()
        return UserLookup.hit(self._row_to_user(row))

    async def create(self, payload: UserPayload) -> User:
        # The id column is generated; a client supplied id never reaches the INSERT
        query = (
            f"INSERT INTO {USER_TABLE} (first_name, last_name) "
            f"VALUES ($1, $2) RETURNING {USER_COLUMNS}"
        )
        params = [payload.first_name, payload.last_name]

        async with self._get_pool().acquire() as conn:
            async with conn.transaction():
                logger.info(f"Executing INSERT: {query}")
                logger.info(f"Parameters: {params}")
                try:
                    row = await conn.fetchrow(query, *params)
                except asyncpg.PostgresError as e:
                    logger.error(f"Database error during INSERT: {e}")
                    raise RuntimeError(f"Database INSERT failed: {str(e)}")

                if not row:
                    raise RuntimeError("Insert operation failed - no data returned")

        user = self._row_to_user(row)
        logger.info(f"Created user {user.id}")
        return user

    async def update(self, user_id: int, payload: UserPayload) -> bool:
        select_query = f"SELECT {USER_COLUMNS} FROM {USER_TABLE} WHERE id = $1 FOR UPDATE"
        update_query = f"UPDATE {USER_TABLE} SET first_name = $2, last_name = $3 WHERE id = $1"

        async with self._get_pool().acquire() as conn:
            async with conn.transaction():
                try:
                    existing = await conn.fetchrow(select_query, user_id)
                    if existing is None:
                        logger.info(f"Update skipped, user {user_id} not found")
                        return False

                    user = self._row_to_user(existing)
                    user.first_name = payload.first_name
                    user.last_name = payload.last_name

                    logger.info(f"Executing UPDATE: {update_query}")
                    await conn.execute(update_query, user.id, user.first_name, user.last_name)
                except asyncpg.PostgresError as e:
                    logger.error(f"Database error during UPDATE: {e}")
                    raise RuntimeError(f"Database UPDATE failed: {str(e)}")

        logger.info(f"Updated user {user_id}")
        return True
