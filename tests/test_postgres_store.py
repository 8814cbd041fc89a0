"""
PostgreSQL legal workflow store: row locks, create races and version bumps
"""

import asyncio

import pytest

from world_property.models.enums import WorkflowStage
from world_property.models.legal import LegalCaseState, SaveAck
from world_property.utils.errors import ConcurrencyConflictError
from world_property.workflows.legal import PostgresLegalWorkflowStore


@pytest.fixture
def store(fake_database):
    return PostgresLegalWorkflowStore(fake_database)


def state_at(stage: WorkflowStage, case_id: str = "case-1") -> LegalCaseState:
    return LegalCaseState(case_id=case_id, stage=stage)


def stored_row(fake_server, case_id: str = "case-1"):
    return fake_server.tables["legal_workflow_states"].get(case_id)


class TestLoadAndSave:

    @pytest.mark.asyncio
    async def test_load_unknown_case_returns_none(self, store):
        assert await store.load("case-missing") is None

    @pytest.mark.asyncio
    async def test_create_stores_version_one(self, store, fake_server):
        ack = await store.save(state_at(WorkflowStage.OFFER_CREATED), expected_version=0)

        assert ack == SaveAck(case_id="case-1", version=1)
        assert stored_row(fake_server)["stage"] == "OfferCreated"

        loaded = await store.load("case-1")
        assert loaded == LegalCaseState(case_id="case-1", stage=WorkflowStage.OFFER_CREATED, version=1)

    @pytest.mark.asyncio
    async def test_each_save_bumps_version(self, store):
        await store.save(state_at(WorkflowStage.OFFER_CREATED), expected_version=0)
        await store.save(state_at(WorkflowStage.AI_CONSULTATION), expected_version=1)
        ack = await store.save(state_at(WorkflowStage.LEGAL_PACK_REQUESTED))

        assert ack.version == 3
        loaded = await store.load("case-1")
        assert loaded.stage == WorkflowStage.LEGAL_PACK_REQUESTED
        assert loaded.version == 3

    @pytest.mark.asyncio
    async def test_save_locks_row_inside_transaction(self, store, fake_server):
        await store.save(state_at(WorkflowStage.OFFER_CREATED), expected_version=0)
        fake_server.log.clear()

        await store.save(state_at(WorkflowStage.AI_CONSULTATION), expected_version=1)

        assert fake_server.log[0] == "BEGIN"
        assert fake_server.log[1].endswith("FOR UPDATE")
        assert "DO UPDATE SET" in fake_server.log[2]
        assert fake_server.log[-1] == "COMMIT"

    @pytest.mark.asyncio
    async def test_stale_version_is_rejected_and_rolled_back(self, store, fake_server):
        await store.save(state_at(WorkflowStage.OFFER_CREATED), expected_version=0)
        await store.save(state_at(WorkflowStage.AI_CONSULTATION), expected_version=1)

        with pytest.raises(ConcurrencyConflictError) as exc_info:
            await store.save(state_at(WorkflowStage.LEGAL_PACK_REQUESTED), expected_version=1)

        assert exc_info.value.expected_version == 1
        assert exc_info.value.actual_version == 2
        assert fake_server.log[-1] == "ROLLBACK"
        assert stored_row(fake_server)["stage"] == "AIConsultation"
        assert stored_row(fake_server)["version"] == 2

    @pytest.mark.asyncio
    async def test_expected_version_for_missing_case(self, store, fake_server):
        with pytest.raises(ConcurrencyConflictError) as exc_info:
            await store.save(state_at(WorkflowStage.AI_CONSULTATION), expected_version=3)

        assert exc_info.value.actual_version == 0
        assert stored_row(fake_server) is None

    @pytest.mark.asyncio
    async def test_second_create_conflicts(self, store):
        await store.save(state_at(WorkflowStage.OFFER_CREATED), expected_version=0)

        with pytest.raises(ConcurrencyConflictError) as exc_info:
            await store.save(state_at(WorkflowStage.OFFER_CREATED), expected_version=0)

        assert exc_info.value.actual_version == 1
        assert (await store.load("case-1")).version == 1

    @pytest.mark.asyncio
    async def test_delete(self, store, fake_server):
        await store.save(state_at(WorkflowStage.OFFER_CREATED), expected_version=0)

        assert await store.delete("case-1") is True
        assert await store.delete("case-1") is False
        assert stored_row(fake_server) is None


class TestConcurrentSaves:

    @pytest.mark.asyncio
    async def test_concurrent_creates_have_one_winner(self, store):
        results = await asyncio.gather(
            *(store.save(state_at(WorkflowStage.OFFER_CREATED), expected_version=0) for _ in range(3)),
            return_exceptions=True,
        )

        acks = [result for result in results if isinstance(result, SaveAck)]
        conflicts = [result for result in results if isinstance(result, ConcurrencyConflictError)]
        assert [ack.version for ack in acks] == [1]
        assert len(conflicts) == 2
        assert (await store.load("case-1")).version == 1

    @pytest.mark.asyncio
    async def test_concurrent_advances_from_same_version(self, store):
        await store.save(state_at(WorkflowStage.OFFER_CREATED), expected_version=0)

        results = await asyncio.gather(
            store.save(state_at(WorkflowStage.AI_CONSULTATION), expected_version=1),
            store.save(state_at(WorkflowStage.AI_CONSULTATION), expected_version=1),
            return_exceptions=True,
        )

        assert sum(isinstance(result, SaveAck) for result in results) == 1
        conflict = next(result for result in results if isinstance(result, ConcurrencyConflictError))
        assert conflict.actual_version == 2
        assert (await store.load("case-1")).version == 2

    @pytest.mark.asyncio
    async def test_unversioned_saves_serialise(self, store):
        await store.save(state_at(WorkflowStage.OFFER_CREATED), expected_version=0)

        acks = await asyncio.gather(
            store.save(state_at(WorkflowStage.AI_CONSULTATION)),
            store.save(state_at(WorkflowStage.LEGAL_PACK_REQUESTED)),
        )

        assert sorted(ack.version for ack in acks) == [2, 3]
        assert (await store.load("case-1")).version == 3

    @pytest.mark.asyncio
    async def test_other_cases_are_not_blocked(self, store):
        acks = await asyncio.gather(
            store.save(state_at(WorkflowStage.OFFER_CREATED, "case-a"), expected_version=0),
            store.save(state_at(WorkflowStage.OFFER_CREATED, "case-b"), expected_version=0),
        )
        assert [ack.version for ack in acks] == [1, 1]
