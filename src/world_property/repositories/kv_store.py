"""
Key/value storage abstraction

Small per-principal state (preferences and the like) goes through this
interface so the medium can change without touching callers.
"""

import copy
import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional

from world_property.database.connection import Database
from world_property.utils.helpers import utcnow

logger = logging.getLogger(__name__)


class KeyValueStore(ABC):

    @abstractmethod
    async def get(self, key: str) -> Optional[Any]:
        ...

    @abstractmethod
    async def set(self, key: str, value: Any):
        ...

    @abstractmethod
    async def delete(self, key: str) -> bool:
        """Remove a key; returns whether it existed"""


class InMemoryKeyValueStore(KeyValueStore):

    def __init__(self):
        self._values: Dict[str, Any] = {}

    async def get(self, key: str) -> Optional[Any]:
        # Copies stop callers mutating stored state in place
        return copy.deepcopy(self._values.get(key))

    async def set(self, key: str, value: Any):
        self._values[key] = copy.deepcopy(value)

    async def delete(self, key: str) -> bool:
        return self._values.pop(key, None) is not None


class PostgresKeyValueStore(KeyValueStore):

    def __init__(self, database: Database):
        self.database = database

    async def get(self, key: str) -> Optional[Any]:
        async with self.database.acquire() as conn:
            return await conn.fetchval("SELECT value FROM kv_store WHERE key = $1", key)

    async def set(self, key: str, value: Any):
        async with self.database.acquire() as conn:
            await conn.execute(
                """
                INSERT INTO kv_store (key, value, updated_at)
                VALUES ($1, $2, $3)
                ON CONFLICT (key) DO UPDATE SET value = EXCLUDED.value, updated_at = EXCLUDED.updated_at
                """,
                key, value, utcnow(),
            )

    async def delete(self, key: str) -> bool:
        async with self.database.acquire() as conn:
            result = await conn.execute("DELETE FROM kv_store WHERE key = $1", key)
        # asyncpg returns "DELETE N" where N is the number of rows
        return int(result.split()[-1]) > 0
