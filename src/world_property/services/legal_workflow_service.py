"""
Legal workflow service - opens cases for offers and advances their stages

The transition function decides; this service loads and saves state,
and records every applied or rejected request in the audit log.
"""

import logging
import uuid
from typing import Any, Dict, List, Optional

from world_property.models.legal import (
    AuditEvent,
    LegalCase,
    LegalCaseLink,
    LegalCaseState,
    LegalPlaybook,
    TransitionResult,
)
from world_property.models.offer import OfferData
from world_property.repositories import Rollback
from world_property.services.base_service import BaseService
from world_property.utils.errors import ApiError, ConcurrencyConflictError, NotFoundError, ValidationFailedError
from world_property.utils.helpers import utcnow
from world_property.validation.validators import validate_legal_case, validate_legal_playbook
from world_property.workflows.legal.machine import StageRequest, evaluate_transition, open_case_for_offer
from world_property.workflows.legal.playbooks import LEGAL_PLAYBOOKS

logger = logging.getLogger(__name__)

CASE_OPENED = "legal.case.opened"
STAGE_ADVANCED = "legal.stage.advanced"
STAGE_REJECTED = "legal.stage.rejected"


class LegalWorkflowService(BaseService):

    async def _record(
        self,
        event_type: str,
        case_id: str,
        actor_id: Optional[str] = None,
        metadata: Optional[Dict[str, Any]] = None,
    ) -> AuditEvent:
        event = AuditEvent(
            event_id=uuid.uuid4().hex,
            event_type=event_type,
            occurred_at=utcnow(),
            actor_id=actor_id,
            case_id=case_id,
            metadata=metadata or {},
        )
        return await self.repositories.audit_log.append(event)

    async def _load_state(self, case_id: str) -> Optional[LegalCaseState]:
        state = await self.repositories.workflow_store.load(case_id)
        if state is None:
            return None

        validation = validate_legal_case(state, is_stored=True)
        if not validation.success:
            logger.error(f"Stored legal case {case_id} is invalid: {validation.as_dicts()}")
            raise ApiError(f"Stored legal case {case_id} is invalid", 500)
        return state

    async def open_case(
        self,
        offer: OfferData,
        actor_id: Optional[str] = None,
        rollback: Optional[Rollback] = None,
    ) -> LegalCase:
        """
        Open the legal case for a newly created offer

        Args:
            offer: Persisted offer that triggers the case
            actor_id: Who made the offer, for the audit trail
            rollback: Collects undo steps when the caller groups this with other writes

        Returns:
            LegalCase at the OfferCreated stage
        """
        state = open_case_for_offer(offer)
        now = utcnow()

        link = await self.repositories.legal_cases.create(
            LegalCaseLink(case_id=state.case_id, offer_id=offer.offer_id, listing_id=offer.listing_id, created_at=now)
        )
        if rollback is not None:
            rollback.on_failure(lambda: self.repositories.legal_cases.delete(link.case_id))

        ack = await self.repositories.workflow_store.save(state, expected_version=0)
        if rollback is not None:
            rollback.on_failure(lambda: self.repositories.workflow_store.delete(state.case_id))

        await self._record(
            CASE_OPENED, state.case_id, actor_id,
            {"offer_id": offer.offer_id, "listing_id": offer.listing_id, "stage": state.stage.value},
        )
        logger.info(f"Opened legal case {state.case_id} for offer {offer.offer_id}")

        return LegalCase(
            case_id=link.case_id,
            offer_id=link.offer_id,
            listing_id=link.listing_id,
            stage=state.stage,
            version=ack.version,
            created_at=link.created_at,
            updated_at=now,
        )

    async def get_case(self, case_id: str) -> LegalCase:
        link = await self.repositories.legal_cases.get(case_id)
        state = await self._load_state(case_id)
        if not link or not state:
            raise NotFoundError(f"Legal case not found: {case_id}")

        return LegalCase(
            case_id=link.case_id,
            offer_id=link.offer_id,
            listing_id=link.listing_id,
            stage=state.stage,
            version=state.version,
            created_at=link.created_at,
        )

    async def get_case_for_offer(self, offer_id: str) -> Optional[LegalCase]:
        link = await self.repositories.legal_cases.get_by_offer(offer_id)
        return await self.get_case(link.case_id) if link else None

    async def advance(
        self,
        case_id: str,
        target: StageRequest,
        expected_version: Optional[int] = None,
        actor_id: Optional[str] = None,
    ) -> TransitionResult:
        """
        Request a move to another stage

        Applied moves that change the stage are saved; staying put is applied
        without a write. Rejections leave the case untouched and are returned
        to the caller rather than raised. A stale expected_version raises
        ConcurrencyConflictError.
        """
        state = await self._load_state(case_id)
        if state is None:
            raise NotFoundError(f"Legal case not found: {case_id}")

        result = evaluate_transition(state, target)

        if not result.applied:
            logger.info(f"Rejected transition for {case_id}: {result.reason}")
            await self._record(
                STAGE_REJECTED, case_id, actor_id,
                {"from": state.stage.value, "requested": result.requested, "outcome": result.outcome.value},
            )
            return result

        if not result.changed:
            if expected_version is not None and expected_version != state.version:
                raise ConcurrencyConflictError(case_id, expected_version, state.version)
            return result

        ack = await self.repositories.workflow_store.save(
            result.state,
            expected_version=state.version if expected_version is None else expected_version,
        )
        saved_state = result.state.model_copy(update={"version": ack.version})

        await self._record(
            STAGE_ADVANCED, case_id, actor_id,
            {"from": state.stage.value, "to": saved_state.stage.value, "version": ack.version},
        )
        logger.info(f"Advanced case {case_id} from {state.stage.value} to {saved_state.stage.value}")

        return result.model_copy(update={"state": saved_state})

    async def history(self, case_id: str) -> List[AuditEvent]:
        if not await self.repositories.legal_cases.get(case_id):
            raise NotFoundError(f"Legal case not found: {case_id}")
        return await self.repositories.audit_log.list_for_case(case_id)

    def get_playbook(self, country_code: str) -> LegalPlaybook:
        playbook = LEGAL_PLAYBOOKS.get(country_code.strip().upper())
        if playbook is None:
            raise NotFoundError(f"No legal playbook for country: {country_code}")

        validation = validate_legal_playbook(playbook)
        if not validation.success:
            raise ValidationFailedError(f"Legal playbook for {playbook.country_code} is invalid", validation.as_dicts())
        return playbook

