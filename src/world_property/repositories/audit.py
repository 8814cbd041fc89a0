"""
Append-only audit log for legal workflow activity
"""

import logging
from abc import ABC, abstractmethod
from typing import List

from world_property.database.connection import Database
from world_property.models.legal import AuditEvent

logger = logging.getLogger(__name__)


class AuditLog(ABC):

    @abstractmethod
    async def append(self, event: AuditEvent) -> AuditEvent:
        ...

    @abstractmethod
    async def list_for_case(self, case_id: str) -> List[AuditEvent]:
        """Events recorded against a case, oldest first"""


class InMemoryAuditLog(AuditLog):

    def __init__(self):
        self._events: List[AuditEvent] = []

    async def append(self, event: AuditEvent) -> AuditEvent:
        self._events.append(event)
        return event

    async def list_for_case(self, case_id: str) -> List[AuditEvent]:
        return [event for event in self._events if event.case_id == case_id]


class PostgresAuditLog(AuditLog):

    def __init__(self, database: Database):
        self.database = database

    async def append(self, event: AuditEvent) -> AuditEvent:
        async with self.database.acquire() as conn:
            await conn.execute(
                """
                INSERT INTO audit_events (event_id, event_type, occurred_at, actor_id, case_id, metadata)
                VALUES ($1, $2, $3, $4, $5, $6)
                """,
                event.event_id, event.event_type, event.occurred_at,
                event.actor_id, event.case_id, event.metadata,
            )
        return event

    async def list_for_case(self, case_id: str) -> List[AuditEvent]:
        async with self.database.acquire() as conn:
            rows = await conn.fetch(
                """
                SELECT event_id, event_type, occurred_at, actor_id, case_id, metadata
                FROM audit_events
                WHERE case_id = $1
                ORDER BY occurred_at, event_id
                """,
                case_id,
            )
        return [AuditEvent(**dict(row)) for row in rows]
