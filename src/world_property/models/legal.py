"""
Legal workflow Pydantic models
"""

from typing import Any, Dict, List, Optional
from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field
from world_property.models.enums import TransitionOutcome, WorkflowStage


class LegalCaseState(BaseModel):
    """Minimal state the transition function operates on"""
    model_config = ConfigDict(frozen=True)

    case_id: str
    stage: WorkflowStage
    version: int = Field(0, ge=0, description="Store version; 0 means never saved")


class WorkflowStep(BaseModel):
    model_config = ConfigDict(frozen=True)

    stage: WorkflowStage
    description: str


class TransitionResult(BaseModel):
    """Outcome of evaluating a requested stage transition"""
    outcome: TransitionOutcome
    state: LegalCaseState
    previous_stage: WorkflowStage
    requested: str
    reason: Optional[str] = None

    @property
    def applied(self) -> bool:
        return self.outcome == TransitionOutcome.APPLIED

    @property
    def changed(self) -> bool:
        return self.applied and self.state.stage != self.previous_stage


class SaveAck(BaseModel):
    case_id: str
    version: int


class LegalCase(BaseModel):
    """A legal case together with the offer that opened it"""
    case_id: str
    offer_id: str
    listing_id: str
    stage: WorkflowStage
    version: int
    created_at: datetime
    updated_at: Optional[datetime] = None


class LegalCaseLink(BaseModel):
    case_id: str
    offer_id: str
    listing_id: str
    created_at: datetime


class TransitionRequest(BaseModel):
    target_stage: str = Field(..., description="Stage identifier to move the case to")
    expected_version: Optional[int] = Field(None, ge=0, description="Reject if the stored version differs")


class TransitionResponse(BaseModel):
    outcome: TransitionOutcome
    case_id: str
    stage: WorkflowStage
    previous_stage: WorkflowStage
    version: int
    reason: Optional[str] = None


class LegalPlaybook(BaseModel):
    """Country-specific description of how a purchase moves through the workflow"""
    country_code: str
    stages: List[str]
    required_documents: List[str] = []
    standard_checks: List[str] = []
    risk_flags: List[str] = []
    typical_timeline_days: int = 0
    fee_categories: List[str] = []


class AuditEvent(BaseModel):
    event_id: str
    event_type: str
    occurred_at: datetime
    actor_id: Optional[str] = None
    case_id: Optional[str] = None
    metadata: Dict[str, Any] = {}
