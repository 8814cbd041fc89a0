"""
Offer persistence
"""

import logging
from abc import ABC, abstractmethod
from typing import Dict, List, Optional

from world_property.database.connection import Database
from world_property.models.offer import OfferData

logger = logging.getLogger(__name__)

OFFER_COLUMNS = (
    "offer_id, listing_id, amount_minor, currency_code, status, "
    "principal_type, principal_id, created_at"
)


class OfferRepository(ABC):

    @abstractmethod
    async def create(self, offer: OfferData) -> OfferData:
        ...

    @abstractmethod
    async def get(self, offer_id: str) -> Optional[OfferData]:
        ...

    @abstractmethod
    async def list_for_listing(self, listing_id: str) -> List[OfferData]:
        """Offers on a listing, newest first"""

    @abstractmethod
    async def delete(self, offer_id: str) -> bool:
        ...


class InMemoryOfferRepository(OfferRepository):

    def __init__(self):
        self._offers: Dict[str, OfferData] = {}

    async def create(self, offer: OfferData) -> OfferData:
        self._offers[offer.offer_id] = offer
        return offer

    async def get(self, offer_id: str) -> Optional[OfferData]:
        return self._offers.get(offer_id)

    async def list_for_listing(self, listing_id: str) -> List[OfferData]:
        offers = [offer for offer in self._offers.values() if offer.listing_id == listing_id]
        return sorted(offers, key=lambda offer: offer.created_at, reverse=True)

    async def delete(self, offer_id: str) -> bool:
        return self._offers.pop(offer_id, None) is not None


class PostgresOfferRepository(OfferRepository):

    def __init__(self, database: Database):
        self.database = database

    async def create(self, offer: OfferData) -> OfferData:
        async with self.database.acquire() as conn:
            await conn.execute(
                f"""
                INSERT INTO offers ({OFFER_COLUMNS})
                VALUES ($1, $2, $3, $4, $5, $6, $7, $8)
                """,
                offer.offer_id, offer.listing_id, offer.amount_minor, offer.currency_code,
                offer.status.value, offer.principal_type.value, offer.principal_id, offer.created_at,
            )
        return offer

    async def get(self, offer_id: str) -> Optional[OfferData]:
        async with self.database.acquire() as conn:
            row = await conn.fetchrow(f"SELECT {OFFER_COLUMNS} FROM offers WHERE offer_id = $1", offer_id)
        return OfferData(**dict(row)) if row else None

    async def list_for_listing(self, listing_id: str) -> List[OfferData]:
        async with self.database.acquire() as conn:
            rows = await conn.fetch(
                f"SELECT {OFFER_COLUMNS} FROM offers WHERE listing_id = $1 ORDER BY created_at DESC",
                listing_id,
            )
        return [OfferData(**dict(row)) for row in rows]

    async def delete(self, offer_id: str) -> bool:
        async with self.database.acquire() as conn:
            result = await conn.execute("DELETE FROM offers WHERE offer_id = $1", offer_id)
        return int(result.split()[-1]) > 0
