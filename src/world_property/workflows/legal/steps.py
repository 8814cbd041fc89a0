"""
Legal workflow stage catalog.

LEGAL_WORKFLOW_EVENT_SEQUENCE is the only ordering consulted when deciding
whether a case may move; LEGAL_WORKFLOW_STEPS carries the same stages with
descriptions for progress displays.
"""

from typing import List, Optional, Tuple, Union

from world_property.models.enums import WorkflowStage
from world_property.models.legal import WorkflowStep

LEGAL_WORKFLOW_EVENT_SEQUENCE: Tuple[WorkflowStage, ...] = (
    WorkflowStage.OFFER_CREATED,
    WorkflowStage.AI_CONSULTATION,
    WorkflowStage.LEGAL_PACK_REQUESTED,
    WorkflowStage.DUE_DILIGENCE,
    WorkflowStage.CONTRACTS,
    WorkflowStage.COMPLETION,
)

LEGAL_WORKFLOW_STEPS: Tuple[WorkflowStep, ...] = (
    WorkflowStep(stage=WorkflowStage.OFFER_CREATED, description="Offer has been created."),
    WorkflowStep(stage=WorkflowStage.AI_CONSULTATION, description="AI legal consultation is pending."),
    WorkflowStep(stage=WorkflowStage.LEGAL_PACK_REQUESTED, description="Legal document pack requested."),
    WorkflowStep(stage=WorkflowStage.DUE_DILIGENCE, description="Due diligence in progress."),
    WorkflowStep(stage=WorkflowStage.CONTRACTS, description="Contracts being prepared and reviewed."),
    WorkflowStep(stage=WorkflowStage.COMPLETION, description="Transaction completion."),
)

# ------------------------------------------------------------------
# GUARDRAILS
# ------------------------------------------------------------------

assert LEGAL_WORKFLOW_EVENT_SEQUENCE, "Legal workflow sequence must not be empty"
assert len(set(LEGAL_WORKFLOW_EVENT_SEQUENCE)) == len(LEGAL_WORKFLOW_EVENT_SEQUENCE), (
    "Legal workflow sequence contains duplicate stages"
)
assert tuple(WorkflowStage) == LEGAL_WORKFLOW_EVENT_SEQUENCE, (
    "Legal workflow sequence is out of sync with WorkflowStage"
)
assert tuple(step.stage for step in LEGAL_WORKFLOW_STEPS) == LEGAL_WORKFLOW_EVENT_SEQUENCE, (
    "Legal workflow steps are out of sync with the event sequence"
)

_STAGE_INDEX = {stage: index for index, stage in enumerate(LEGAL_WORKFLOW_EVENT_SEQUENCE)}


def get_stage_catalog() -> List[WorkflowStep]:
    return list(LEGAL_WORKFLOW_STEPS)


def parse_stage(value: Union[WorkflowStage, str, None]) -> Optional[WorkflowStage]:
    """Return the stage a raw value names, or None if it names no stage"""
    if isinstance(value, WorkflowStage):
        return value
    if not isinstance(value, str):
        return None
    try:
        return WorkflowStage(value)
    except ValueError:
        return None


def stage_index(stage: WorkflowStage) -> int:
    return _STAGE_INDEX[stage]


def next_stage(stage: WorkflowStage) -> Optional[WorkflowStage]:
    index = stage_index(stage) + 1
    if index >= len(LEGAL_WORKFLOW_EVENT_SEQUENCE):
        return None
    return LEGAL_WORKFLOW_EVENT_SEQUENCE[index]


def is_terminal(stage: WorkflowStage) -> bool:
    return next_stage(stage) is None
