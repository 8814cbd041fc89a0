"""
Repository bundle handed to services

Two factories build the bundle: one backed by PostgreSQL through an open
Database handle, one held entirely in process memory for local runs and
tests.
"""

import logging
from contextlib import asynccontextmanager
from dataclasses import dataclass
from typing import Awaitable, Callable, List, Optional

from world_property.database.connection import Database
from world_property.repositories.audit import AuditLog, InMemoryAuditLog, PostgresAuditLog
from world_property.repositories.kv_store import InMemoryKeyValueStore, KeyValueStore, PostgresKeyValueStore
from world_property.repositories.legal_cases import (
    InMemoryLegalCaseRepository,
    LegalCaseRepository,
    PostgresLegalCaseRepository,
)
from world_property.repositories.listings import (
    InMemoryListingRepository,
    ListingRepository,
    PostgresListingRepository,
)
from world_property.repositories.offers import InMemoryOfferRepository, OfferRepository, PostgresOfferRepository
from world_property.repositories.saved import InMemorySavedRepository, PostgresSavedRepository, SavedRepository
from world_property.repositories.users import InMemoryUserRepository, PostgresUserRepository, UserRepository
from world_property.workflows.legal.store import (
    InMemoryLegalWorkflowStore,
    LegalWorkflowStore,
    PostgresLegalWorkflowStore,
)

logger = logging.getLogger(__name__)


class Rollback:
    """Undo steps for writes that have no database transaction behind them"""

    def __init__(self):
        self._steps: List[Callable[[], Awaitable]] = []

    def on_failure(self, step: Callable[[], Awaitable]):
        self._steps.append(step)

    async def run(self):
        """Undo newest first; a failing step is logged and the rest still run"""
        for step in reversed(self._steps):
            try:
                await step()
            except Exception as e:
                logger.error(f"Rollback step failed: {e}")
        self._steps.clear()


@dataclass
class Repositories:
    listings: ListingRepository
    users: UserRepository
    saved: SavedRepository
    offers: OfferRepository
    legal_cases: LegalCaseRepository
    workflow_store: LegalWorkflowStore
    audit_log: AuditLog
    kv_store: KeyValueStore
    database: Optional[Database] = None

    @asynccontextmanager
    async def transaction(self):
        """
        Make the writes in the block land together or not at all

        With a database they share one transaction. In memory the yielded
        Rollback runs the undo steps registered with it if the block raises.
        """
        rollback = Rollback()
        if self.database is not None:
            async with self.database.transaction():
                yield rollback
            return

        try:
            yield rollback
        except Exception:
            await rollback.run()
            raise


def in_memory_repositories() -> Repositories:
    return Repositories(
        listings=InMemoryListingRepository(),
        users=InMemoryUserRepository(),
        saved=InMemorySavedRepository(),
        offers=InMemoryOfferRepository(),
        legal_cases=InMemoryLegalCaseRepository(),
        workflow_store=InMemoryLegalWorkflowStore(),
        audit_log=InMemoryAuditLog(),
        kv_store=InMemoryKeyValueStore(),
    )


def postgres_repositories(database: Database) -> Repositories:
    return Repositories(
        listings=PostgresListingRepository(database),
        users=PostgresUserRepository(database),
        saved=PostgresSavedRepository(database),
        offers=PostgresOfferRepository(database),
        legal_cases=PostgresLegalCaseRepository(database),
        workflow_store=PostgresLegalWorkflowStore(database),
        audit_log=PostgresAuditLog(database),
        kv_store=PostgresKeyValueStore(database),
        database=database,
    )
