"""
Persistence for legal workflow case state

Every store serialises saves per case id. A save without an expected
version overwrites whatever is stored (last writer wins); a save with one
is rejected with ConcurrencyConflictError unless the stored version still
matches. Version 0 stands for "not stored yet", so a save expecting
version 0 only succeeds for a brand new case.
"""

import asyncio
import logging
import weakref
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import Dict, Optional

from world_property.database.connection import Database
from world_property.models.enums import WorkflowStage
from world_property.models.legal import LegalCaseState, SaveAck
from world_property.utils.errors import ConcurrencyConflictError

logger = logging.getLogger(__name__)


class LegalWorkflowStore(ABC):

    @abstractmethod
    async def load(self, case_id: str) -> Optional[LegalCaseState]:
        ...

    @abstractmethod
    async def save(self, state: LegalCaseState, expected_version: Optional[int] = None) -> SaveAck:
        ...

    @abstractmethod
    async def delete(self, case_id: str) -> bool:
        ...


class InMemoryLegalWorkflowStore(LegalWorkflowStore):
    """Process-local store with one asyncio lock per case"""

    def __init__(self):
        self._states: Dict[str, LegalCaseState] = {}
        # Locks live only while a save holds or waits on them
        self._locks: "weakref.WeakValueDictionary[str, asyncio.Lock]" = weakref.WeakValueDictionary()

    def _lock_for(self, case_id: str) -> asyncio.Lock:
        lock = self._locks.get(case_id)
        if lock is None:
            lock = asyncio.Lock()
            self._locks[case_id] = lock
        return lock

    async def load(self, case_id: str) -> Optional[LegalCaseState]:
        return self._states.get(case_id)

    async def save(self, state: LegalCaseState, expected_version: Optional[int] = None) -> SaveAck:
        async with self._lock_for(state.case_id):
            current = self._states.get(state.case_id)
            current_version = current.version if current else 0

            if expected_version is not None and expected_version != current_version:
                raise ConcurrencyConflictError(state.case_id, expected_version, current_version)

            stored = state.model_copy(update={"version": current_version + 1})
            self._states[state.case_id] = stored

        logger.debug(f"Saved case {stored.case_id} at {stored.stage.value} v{stored.version}")
        return SaveAck(case_id=stored.case_id, version=stored.version)

    async def delete(self, case_id: str) -> bool:
        async with self._lock_for(case_id):
            return self._states.pop(case_id, None) is not None


class PostgresLegalWorkflowStore(LegalWorkflowStore):
    """Store backed by the legal_workflow_states table"""

    def __init__(self, database: Database):
        self.database = database

    async def load(self, case_id: str) -> Optional[LegalCaseState]:
        async with self.database.acquire() as conn:
            row = await conn.fetchrow(
                "SELECT case_id, stage, version FROM legal_workflow_states WHERE case_id = $1",
                case_id,
            )
        if not row:
            return None
        return LegalCaseState(case_id=row["case_id"], stage=WorkflowStage(row["stage"]), version=row["version"])

    async def save(self, state: LegalCaseState, expected_version: Optional[int] = None) -> SaveAck:
        now = datetime.now(timezone.utc)

        async with self.database.acquire() as conn:
            async with conn.transaction():
                # Row lock serialises concurrent saves for an existing case
                current_version = await conn.fetchval(
                    "SELECT version FROM legal_workflow_states WHERE case_id = $1 FOR UPDATE",
                    state.case_id,
                )
                current_version = current_version or 0

                if expected_version is not None and expected_version != current_version:
                    raise ConcurrencyConflictError(state.case_id, expected_version, current_version)

                if expected_version == 0:
                    # No row to lock yet; let the primary key arbitrate between creators
                    version = await conn.fetchval(
                        """
                        INSERT INTO legal_workflow_states (case_id, stage, version, updated_at)
                        VALUES ($1, $2, 1, $3)
                        ON CONFLICT (case_id) DO NOTHING
                        RETURNING version
                        """,
                        state.case_id, state.stage.value, now,
                    )
                    if version is None:
                        raise ConcurrencyConflictError(state.case_id, 0, 1)
                else:
                    version = await conn.fetchval(
                        """
                        INSERT INTO legal_workflow_states (case_id, stage, version, updated_at)
                        VALUES ($1, $2, 1, $3)
                        ON CONFLICT (case_id) DO UPDATE SET
                            stage = EXCLUDED.stage,
                            version = legal_workflow_states.version + 1,
                            updated_at = EXCLUDED.updated_at
                        RETURNING version
                        """,
                        state.case_id, state.stage.value, now,
                    )

        logger.info(f"Saved case {state.case_id} at {state.stage.value} v{version}")
        return SaveAck(case_id=state.case_id, version=version)

    async def delete(self, case_id: str) -> bool:
        async with self.database.acquire() as conn:
            result = await conn.execute("DELETE FROM legal_workflow_states WHERE case_id = $1", case_id)
        return int(result.split()[-1]) > 0
