"""
In-memory legal workflow store: versions, read-your-writes and conflicts
"""

import asyncio
import gc

import pytest

from world_property.models.enums import WorkflowStage
from world_property.models.legal import LegalCaseState
from world_property.utils.errors import ConcurrencyConflictError
from world_property.workflows.legal import InMemoryLegalWorkflowStore


@pytest.fixture
def store():
    return InMemoryLegalWorkflowStore()


def state_at(stage: WorkflowStage, case_id: str = "case-1") -> LegalCaseState:
    return LegalCaseState(case_id=case_id, stage=stage)


class TestInMemoryLegalWorkflowStore:

    @pytest.mark.asyncio
    async def test_load_unknown_case_returns_none(self, store):
        assert await store.load("case-missing") is None

    @pytest.mark.asyncio
    async def test_first_save_stores_version_one(self, store):
        ack = await store.save(state_at(WorkflowStage.OFFER_CREATED))
        assert ack.case_id == "case-1"
        assert ack.version == 1

        loaded = await store.load("case-1")
        assert loaded.stage == WorkflowStage.OFFER_CREATED
        assert loaded.version == 1

    @pytest.mark.asyncio
    async def test_read_your_writes(self, store):
        await store.save(state_at(WorkflowStage.OFFER_CREATED))
        await store.save(state_at(WorkflowStage.AI_CONSULTATION))

        loaded = await store.load("case-1")
        assert loaded.stage == WorkflowStage.AI_CONSULTATION
        assert loaded.version == 2

    @pytest.mark.asyncio
    async def test_matching_expected_version_is_saved(self, store):
        await store.save(state_at(WorkflowStage.OFFER_CREATED), expected_version=0)
        ack = await store.save(state_at(WorkflowStage.AI_CONSULTATION), expected_version=1)
        assert ack.version == 2

    @pytest.mark.asyncio
    async def test_stale_expected_version_raises(self, store):
        await store.save(state_at(WorkflowStage.OFFER_CREATED))
        await store.save(state_at(WorkflowStage.AI_CONSULTATION))

        with pytest.raises(ConcurrencyConflictError) as exc_info:
            await store.save(state_at(WorkflowStage.LEGAL_PACK_REQUESTED), expected_version=1)

        assert exc_info.value.expected_version == 1
        assert exc_info.value.actual_version == 2
        assert exc_info.value.status_code == 409

        loaded = await store.load("case-1")
        assert loaded.stage == WorkflowStage.AI_CONSULTATION
        assert loaded.version == 2

    @pytest.mark.asyncio
    async def test_expecting_version_zero_on_existing_case_raises(self, store):
        await store.save(state_at(WorkflowStage.OFFER_CREATED), expected_version=0)
        with pytest.raises(ConcurrencyConflictError):
            await store.save(state_at(WorkflowStage.OFFER_CREATED), expected_version=0)

    @pytest.mark.asyncio
    async def test_last_writer_wins_without_expected_version(self, store):
        await store.save(state_at(WorkflowStage.OFFER_CREATED))
        await store.save(state_at(WorkflowStage.CONTRACTS))

        loaded = await store.load("case-1")
        assert loaded.stage == WorkflowStage.CONTRACTS

    @pytest.mark.asyncio
    async def test_cases_are_independent(self, store):
        await store.save(state_at(WorkflowStage.OFFER_CREATED, "case-a"))
        await store.save(state_at(WorkflowStage.DUE_DILIGENCE, "case-b"))

        assert (await store.load("case-a")).stage == WorkflowStage.OFFER_CREATED
        assert (await store.load("case-b")).stage == WorkflowStage.DUE_DILIGENCE
        assert (await store.load("case-b")).version == 1

    @pytest.mark.asyncio
    async def test_concurrent_saves_with_same_expected_version(self, store):
        await store.save(state_at(WorkflowStage.OFFER_CREATED))

        results = await asyncio.gather(
            *(store.save(state_at(WorkflowStage.AI_CONSULTATION), expected_version=1) for _ in range(5)),
            return_exceptions=True,
        )

        successes = [r for r in results if not isinstance(r, Exception)]
        conflicts = [r for r in results if isinstance(r, ConcurrencyConflictError)]
        assert len(successes) == 1
        assert len(conflicts) == 4
        assert (await store.load("case-1")).version == 2

    @pytest.mark.asyncio
    async def test_concurrent_unconditional_saves_are_serialised(self, store):
        acks = await asyncio.gather(
            *(store.save(state_at(WorkflowStage.OFFER_CREATED)) for _ in range(10))
        )
        assert sorted(ack.version for ack in acks) == list(range(1, 11))
        assert (await store.load("case-1")).version == 10

    @pytest.mark.asyncio
    async def test_delete(self, store):
        await store.save(state_at(WorkflowStage.OFFER_CREATED))

        assert await store.delete("case-1") is True
        assert await store.delete("case-1") is False
        assert await store.load("case-1") is None

    @pytest.mark.asyncio
    async def test_idle_case_locks_are_released(self, store):
        for index in range(50):
            await store.save(state_at(WorkflowStage.OFFER_CREATED, f"case-{index}"))
        gc.collect()

        assert len(store._locks) == 0
        assert (await store.load("case-49")).version == 1
