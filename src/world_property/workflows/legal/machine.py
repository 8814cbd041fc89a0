"""
Legal workflow transition function

Pure functions only: nothing here persists state or records audit events.
"""

import uuid
from typing import Union

from world_property.models.enums import TransitionOutcome, WorkflowStage
from world_property.models.legal import LegalCaseState, TransitionResult
from world_property.models.offer import OfferData
from world_property.workflows.legal.steps import parse_stage, stage_index

StageRequest = Union[WorkflowStage, str]


def new_case_id() -> str:
    return f"case-{uuid.uuid4().hex}"


def open_case_for_offer(offer: OfferData) -> LegalCaseState:
    """Initial state for the case an offer opens"""
    return LegalCaseState(case_id=new_case_id(), stage=WorkflowStage.OFFER_CREATED)


def evaluate_transition(state: LegalCaseState, target: StageRequest) -> TransitionResult:
    """
    Decide whether a case may move to the requested stage.

    The target may be the current stage (a no-op that still counts as
    applied) or the stage immediately after it. Unknown targets, backward
    moves and skips are rejected and the input state is returned as-is.
    """
    requested = target.value if isinstance(target, WorkflowStage) else str(target)
    target_stage = parse_stage(target)

    if target_stage is None:
        return TransitionResult(
            outcome=TransitionOutcome.REJECTED_INVALID_TARGET,
            state=state,
            previous_stage=state.stage,
            requested=requested,
            reason=f"Unknown workflow stage: {requested}",
        )

    current_index = stage_index(state.stage)
    target_index = stage_index(target_stage)

    if target_index == current_index:
        return TransitionResult(
            outcome=TransitionOutcome.APPLIED,
            state=state,
            previous_stage=state.stage,
            requested=requested,
        )

    if target_index == current_index + 1:
        return TransitionResult(
            outcome=TransitionOutcome.APPLIED,
            state=state.model_copy(update={"stage": target_stage}),
            previous_stage=state.stage,
            requested=requested,
        )

    direction = "backward" if target_index < current_index else "forward skip"
    return TransitionResult(
        outcome=TransitionOutcome.REJECTED_NOT_ADJACENT,
        state=state,
        previous_stage=state.stage,
        requested=requested,
        reason=f"Cannot move {direction} from {state.stage.value} to {target_stage.value}",
    )


def transition_legal_workflow(state: LegalCaseState, target: StageRequest) -> LegalCaseState:
    """Apply a transition, ignoring invalid requests"""
    return evaluate_transition(state, target).state
