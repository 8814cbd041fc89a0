"""
Saved listings and saved searches, keyed by principal
"""

import logging
from abc import ABC, abstractmethod
from collections import defaultdict
from datetime import datetime
from typing import Any, Dict, List, Tuple

from world_property.database.connection import Database
from world_property.models.user import Principal

logger = logging.getLogger(__name__)


class SavedRepository(ABC):

    @abstractmethod
    async def list_listing_ids(self, principal: Principal) -> List[str]:
        """Saved listing ids, most recently saved first"""

    @abstractmethod
    async def is_listing_saved(self, principal: Principal, listing_id: str) -> bool:
        ...

    @abstractmethod
    async def add_listing(self, principal: Principal, listing_id: str, now: datetime):
        ...

    @abstractmethod
    async def remove_listing(self, principal: Principal, listing_id: str):
        ...

    @abstractmethod
    async def list_search_payloads(self, principal: Principal, limit: int) -> List[Any]:
        """Raw stored search payloads, newest first"""

    @abstractmethod
    async def add_search(self, principal: Principal, payload: Dict[str, Any], now: datetime, keep: int):
        """Store a search and prune all but the newest `keep` for the principal"""


class InMemorySavedRepository(SavedRepository):

    def __init__(self):
        self._listings: Dict[Tuple[str, str], Dict[str, datetime]] = defaultdict(dict)
        self._searches: Dict[Tuple[str, str], List[Any]] = defaultdict(list)

    @staticmethod
    def _key(principal: Principal) -> Tuple[str, str]:
        return principal.type.value, principal.id

    async def list_listing_ids(self, principal: Principal) -> List[str]:
        # Insertion order is save order
        return list(reversed(self._listings[self._key(principal)]))

    async def is_listing_saved(self, principal: Principal, listing_id: str) -> bool:
        return listing_id in self._listings[self._key(principal)]

    async def add_listing(self, principal: Principal, listing_id: str, now: datetime):
        self._listings[self._key(principal)][listing_id] = now

    async def remove_listing(self, principal: Principal, listing_id: str):
        self._listings[self._key(principal)].pop(listing_id, None)

    async def list_search_payloads(self, principal: Principal, limit: int) -> List[Any]:
        return list(reversed(self._searches[self._key(principal)]))[:limit]

    async def add_search(self, principal: Principal, payload: Dict[str, Any], now: datetime, keep: int):
        searches = self._searches[self._key(principal)]
        searches.append(payload)
        del searches[:-keep]


class PostgresSavedRepository(SavedRepository):

    def __init__(self, database: Database):
        self.database = database

    async def list_listing_ids(self, principal: Principal) -> List[str]:
        async with self.database.acquire() as conn:
            rows = await conn.fetch(
                """
                SELECT listing_id FROM saved_listings
                WHERE principal_type = $1 AND principal_id = $2
                ORDER BY created_at DESC
                """,
                principal.type.value, principal.id,
            )
        return [row["listing_id"] for row in rows]

    async def is_listing_saved(self, principal: Principal, listing_id: str) -> bool:
        async with self.database.acquire() as conn:
            present = await conn.fetchval(
                """
                SELECT 1 FROM saved_listings
                WHERE principal_type = $1 AND principal_id = $2 AND listing_id = $3
                """,
                principal.type.value, principal.id, listing_id,
            )
        return present is not None

    async def add_listing(self, principal: Principal, listing_id: str, now: datetime):
        async with self.database.acquire() as conn:
            await conn.execute(
                """
                INSERT INTO saved_listings (principal_type, principal_id, listing_id, created_at)
                VALUES ($1, $2, $3, $4)
                ON CONFLICT DO NOTHING
                """,
                principal.type.value, principal.id, listing_id, now,
            )

    async def remove_listing(self, principal: Principal, listing_id: str):
        async with self.database.acquire() as conn:
            await conn.execute(
                """
                DELETE FROM saved_listings
                WHERE principal_type = $1 AND principal_id = $2 AND listing_id = $3
                """,
                principal.type.value, principal.id, listing_id,
            )

    async def list_search_payloads(self, principal: Principal, limit: int) -> List[Any]:
        async with self.database.acquire() as conn:
            rows = await conn.fetch(
                """
                SELECT query FROM saved_searches
                WHERE principal_type = $1 AND principal_id = $2
                ORDER BY id DESC
                LIMIT $3
                """,
                principal.type.value, principal.id, limit,
            )
        return [row["query"] for row in rows]

    async def add_search(self, principal: Principal, payload: Dict[str, Any], now: datetime, keep: int):
        async with self.database.acquire() as conn:
            async with conn.transaction():
                await conn.execute(
                    """
                    INSERT INTO saved_searches (principal_type, principal_id, query, created_at)
                    VALUES ($1, $2, $3, $4)
                    """,
                    principal.type.value, principal.id, payload, now,
                )
                await conn.execute(
                    """
                    DELETE FROM saved_searches
                    WHERE id IN (
                        SELECT id FROM saved_searches
                        WHERE principal_type = $1 AND principal_id = $2
                        ORDER BY id DESC
                        OFFSET $3
                    )
                    """,
                    principal.type.value, principal.id, keep,
                )
