"""
Legal workflow: stage catalog, transition function and state stores
"""

from world_property.workflows.legal.steps import (
    LEGAL_WORKFLOW_EVENT_SEQUENCE,
    LEGAL_WORKFLOW_STEPS,
    get_stage_catalog,
    is_terminal,
    next_stage,
    parse_stage,
    stage_index,
)
from world_property.workflows.legal.machine import (
    evaluate_transition,
    open_case_for_offer,
    transition_legal_workflow,
)
from world_property.workflows.legal.store import (
    InMemoryLegalWorkflowStore,
    LegalWorkflowStore,
    PostgresLegalWorkflowStore,
)

__all__ = [
    "LEGAL_WORKFLOW_EVENT_SEQUENCE",
    "LEGAL_WORKFLOW_STEPS",
    "get_stage_catalog",
    "is_terminal",
    "next_stage",
    "parse_stage",
    "stage_index",
    "evaluate_transition",
    "open_case_for_offer",
    "transition_legal_workflow",
    "InMemoryLegalWorkflowStore",
    "LegalWorkflowStore",
    "PostgresLegalWorkflowStore",
]
