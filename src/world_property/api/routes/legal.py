"""
Legal workflow API routes

Transitions that the workflow rejects are reported as 409 with the
reason; stale expected_version values surface as 409 through the
ConcurrencyConflictError handler.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException

from world_property.api.dependencies import get_legal_workflow_service
from world_property.models.legal import TransitionRequest, TransitionResponse
from world_property.services.legal_workflow_service import LegalWorkflowService
from world_property.workflows.legal.steps import LEGAL_WORKFLOW_EVENT_SEQUENCE, get_stage_catalog

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("/stages")
async def list_stages():
    """Ordered stage catalog"""
    return {
        "stages": get_stage_catalog(),
        "sequence": [stage.value for stage in LEGAL_WORKFLOW_EVENT_SEQUENCE],
    }


@router.get("/playbooks/{country_code}")
async def get_playbook(
    country_code: str,
    service: LegalWorkflowService = Depends(get_legal_workflow_service),
):
    return service.get_playbook(country_code)


@router.get("/cases/{case_id}")
async def get_case(
    case_id: str,
    service: LegalWorkflowService = Depends(get_legal_workflow_service),
):
    return await service.get_case(case_id)


@router.post("/cases/{case_id}/transitions", response_model=TransitionResponse)
async def request_transition(
    case_id: str,
    request: TransitionRequest,
    service: LegalWorkflowService = Depends(get_legal_workflow_service),
):
    """Move a case to the next stage, or confirm the stage it is already at"""
    result = await service.advance(case_id, request.target_stage, expected_version=request.expected_version)

    response = TransitionResponse(
        outcome=result.outcome,
        case_id=result.state.case_id,
        stage=result.state.stage,
        previous_stage=result.previous_stage,
        version=result.state.version,
        reason=result.reason,
    )

    if not result.applied:
        raise HTTPException(status_code=409, detail=response.model_dump(mode="json"))

    return response


@router.get("/cases/{case_id}/history")
async def get_case_history(
    case_id: str,
    service: LegalWorkflowService = Depends(get_legal_workflow_service),
):
    events = await service.history(case_id)
    return {"case_id": case_id, "events": events, "count": len(events)}
