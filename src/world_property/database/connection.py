"""
Database handle and connection pool management
"""

import asyncpg
import json
import logging
from contextlib import asynccontextmanager
from contextvars import ContextVar
from typing import Optional

from world_property.config.settings import (
    DATABASE_URL,
    DB_COMMAND_TIMEOUT,
    DB_POOL_MAX_SIZE,
    DB_POOL_MIN_SIZE,
)
from world_property.database.schema import SCHEMA_STATEMENTS

logger = logging.getLogger(__name__)


async def _init_connection(conn):
    """Decode JSONB columns to Python objects"""
    await conn.set_type_codec(
        "jsonb", encoder=json.dumps, decoder=json.loads, schema="pg_catalog"
    )


class Database:
    """Owned asyncpg pool; opened and closed by the application lifespan."""

    def __init__(
        self,
        dsn: Optional[str] = None,
        min_size: int = DB_POOL_MIN_SIZE,
        max_size: int = DB_POOL_MAX_SIZE,
        command_timeout: float = DB_COMMAND_TIMEOUT,
    ):
        self.dsn = dsn or DATABASE_URL
        self.min_size = min_size
        self.max_size = max_size
        self.command_timeout = command_timeout
        self._pool: Optional[asyncpg.Pool] = None
        # Connection of the transaction the current task is inside, if any
        self._transaction_conn: ContextVar[Optional[asyncpg.Connection]] = ContextVar(
            f"database_transaction_{id(self)}", default=None
        )

    @property
    def is_open(self) -> bool:
        return self._pool is not None

    async def open(self):
        """Initialize database connection pool"""
        if self._pool is not None:
            return
        if not self.dsn:
            raise RuntimeError("Database DSN is not configured")

        self._pool = await asyncpg.create_pool(
            self.dsn,
            min_size=self.min_size,
            max_size=self.max_size,
            command_timeout=self.command_timeout,
            statement_cache_size=0,  # pgbouncer compatibility
            init=_init_connection
        )

        # Test connection
        async with self._pool.acquire() as conn:
            await conn.fetchval("SELECT 1")

        logger.info("Database initialized successfully")

    async def close(self):
        """Close database connection pool"""
        if self._pool:
            await self._pool.close()
            self._pool = None
        logger.info("Database connections closed")

    @asynccontextmanager
    async def acquire(self):
        """Pool connection, or the open transaction's connection inside transaction()"""
        current = self._transaction_conn.get()
        if current is not None:
            yield current
            return

        if self._pool is None:
            raise RuntimeError("Database pool not initialized")
        async with self._pool.acquire() as conn:
            yield conn

    @asynccontextmanager
    async def transaction(self):
        """
        Run every acquire() in the current task on one connection and transaction

        Commits when the block exits normally and rolls back if it raises.
        Nested calls join the outer transaction.
        """
        current = self._transaction_conn.get()
        if current is not None:
            yield current
            return

        async with self.acquire() as conn:
            async with conn.transaction():
                token = self._transaction_conn.set(conn)
                try:
                    yield conn
                finally:
                    self._transaction_conn.reset(token)

    async def ensure_schema(self):
        """Create tables and indexes that do not exist yet"""
        async with self.acquire() as conn:
            async with conn.transaction():
                for statement in SCHEMA_STATEMENTS:
                    await conn.execute(statement)
        logger.info(f"Database schema ensured ({len(SCHEMA_STATEMENTS)} statements)")

    async def ping(self) -> bool:
        async with self.acquire() as conn:
            return await conn.fetchval("SELECT 1") == 1
