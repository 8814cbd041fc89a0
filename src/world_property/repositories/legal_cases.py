"""
Legal case links (case id to offer and listing)

Stage and version live in the legal workflow store; this repository only
records which offer opened which case.
"""

import logging
from abc import ABC, abstractmethod
from typing import Dict, Optional

import asyncpg

from world_property.database.connection import Database
from world_property.models.legal import LegalCaseLink
from world_property.utils.errors import ConflictError

logger = logging.getLogger(__name__)


class LegalCaseRepository(ABC):

    @abstractmethod
    async def create(self, link: LegalCaseLink) -> LegalCaseLink:
        """Record a new case; raises ConflictError if the offer already has one"""

    @abstractmethod
    async def get(self, case_id: str) -> Optional[LegalCaseLink]:
        ...

    @abstractmethod
    async def get_by_offer(self, offer_id: str) -> Optional[LegalCaseLink]:
        ...

    @abstractmethod
    async def delete(self, case_id: str) -> bool:
        ...


class InMemoryLegalCaseRepository(LegalCaseRepository):

    def __init__(self):
        self._cases: Dict[str, LegalCaseLink] = {}
        self._by_offer: Dict[str, str] = {}

    async def create(self, link: LegalCaseLink) -> LegalCaseLink:
        if link.offer_id in self._by_offer or link.case_id in self._cases:
            raise ConflictError(f"Offer {link.offer_id} already has a legal case")
        self._cases[link.case_id] = link
        self._by_offer[link.offer_id] = link.case_id
        return link

    async def get(self, case_id: str) -> Optional[LegalCaseLink]:
        return self._cases.get(case_id)

    async def get_by_offer(self, offer_id: str) -> Optional[LegalCaseLink]:
        case_id = self._by_offer.get(offer_id)
        return self._cases.get(case_id) if case_id else None

    async def delete(self, case_id: str) -> bool:
        link = self._cases.pop(case_id, None)
        if link is None:
            return False
        self._by_offer.pop(link.offer_id, None)
        return True


class PostgresLegalCaseRepository(LegalCaseRepository):

    def __init__(self, database: Database):
        self.database = database

    async def create(self, link: LegalCaseLink) -> LegalCaseLink:
        try:
            async with self.database.acquire() as conn:
                await conn.execute(
                    """
                    INSERT INTO legal_cases (case_id, offer_id, listing_id, created_at)
                    VALUES ($1, $2, $3, $4)
                    """,
                    link.case_id, link.offer_id, link.listing_id, link.created_at,
                )
        except asyncpg.UniqueViolationError:
            logger.warning(f"Unique constraint violation creating case for offer {link.offer_id}")
            raise ConflictError(f"Offer {link.offer_id} already has a legal case")
        return link

    async def get(self, case_id: str) -> Optional[LegalCaseLink]:
        async with self.database.acquire() as conn:
            row = await conn.fetchrow(
                "SELECT case_id, offer_id, listing_id, created_at FROM legal_cases WHERE case_id = $1",
                case_id,
            )
        return LegalCaseLink(**dict(row)) if row else None

    async def get_by_offer(self, offer_id: str) -> Optional[LegalCaseLink]:
        async with self.database.acquire() as conn:
            row = await conn.fetchrow(
                "SELECT case_id, offer_id, listing_id, created_at FROM legal_cases WHERE offer_id = $1",
                offer_id,
            )
        return LegalCaseLink(**dict(row)) if row else None

    async def delete(self, case_id: str) -> bool:
        async with self.database.acquire() as conn:
            result = await conn.execute("DELETE FROM legal_cases WHERE case_id = $1", case_id)
        return int(result.split()[-1]) > 0
