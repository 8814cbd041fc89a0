"""
Explicit validation passes for offers, money, legal cases and playbooks

Pydantic models cover field shapes at the HTTP boundary. The checks here
cover rules that span fields or depend on reference data, and report every
problem found instead of stopping at the first one.
"""

import re
from dataclasses import dataclass, field
from typing import Dict, List

from world_property.models.enums import OfferStatus
from world_property.models.legal import LegalCaseState, LegalPlaybook
from world_property.models.offer import Money, OfferData
from world_property.services.fx_service import is_supported_currency
from world_property.workflows.legal.steps import (
    LEGAL_WORKFLOW_EVENT_SEQUENCE,
    parse_stage,
    stage_index,
)

CURRENCY_CODE_PATTERN = re.compile(r"^[A-Z]{3}$")
COUNTRY_CODE_PATTERN = re.compile(r"^[A-Z]{2}$")


@dataclass
class ValidationIssue:
    field: str
    message: str


@dataclass
class ValidationResult:
    issues: List[ValidationIssue] = field(default_factory=list)

    @property
    def success(self) -> bool:
        return not self.issues

    def add(self, field_name: str, message: str):
        self.issues.append(ValidationIssue(field_name, message))

    def extend(self, other: "ValidationResult"):
        self.issues.extend(other.issues)

    def as_dicts(self) -> List[Dict[str, str]]:
        return [{"field": issue.field, "message": issue.message} for issue in self.issues]


def validate_money(money: Money, prefix: str = "") -> ValidationResult:
    result = ValidationResult()

    if isinstance(money.amount_minor, bool) or not isinstance(money.amount_minor, int):
        result.add(f"{prefix}amount_minor", "Amount must be a whole number of minor units")
    elif money.amount_minor <= 0:
        result.add(f"{prefix}amount_minor", "Amount must be positive")

    if not CURRENCY_CODE_PATTERN.match(money.currency_code or ""):
        result.add(f"{prefix}currency_code", "Currency code must be three upper-case letters")
    elif not is_supported_currency(money.currency_code):
        result.add(f"{prefix}currency_code", f"Unsupported currency: {money.currency_code}")

    return result


def validate_offer(offer: OfferData, is_new: bool = True) -> ValidationResult:
    result = validate_money(offer.money)

    if not offer.listing_id.strip():
        result.add("listing_id", "Listing id is required")
    if not offer.principal_id.strip():
        result.add("principal_id", "Offer must belong to a principal")
    if is_new and offer.status != OfferStatus.CREATED:
        result.add("status", "New offers must start in the created status")

    return result


def validate_legal_case(state: LegalCaseState, is_stored: bool = False) -> ValidationResult:
    result = ValidationResult()

    if not state.case_id.strip():
        result.add("case_id", "Case id is required")
    if parse_stage(state.stage) is None:
        result.add("stage", f"Unknown workflow stage: {state.stage}")
    if state.version < 0:
        result.add("version", "Version cannot be negative")
    elif is_stored and state.version == 0:
        result.add("version", "Stored cases start at version 1")

    return result


def validate_legal_playbook(playbook: LegalPlaybook) -> ValidationResult:
    """Check a country playbook walks the workflow from start to finish in order"""
    result = ValidationResult()

    if not COUNTRY_CODE_PATTERN.match(playbook.country_code or ""):
        result.add("country_code", "Country code must be two upper-case letters")
    if playbook.typical_timeline_days < 0:
        result.add("typical_timeline_days", "Timeline cannot be negative")

    if not playbook.stages:
        result.add("stages", "Playbook must list at least one stage")
        return result

    stages = []
    for position, raw in enumerate(playbook.stages):
        stage = parse_stage(raw)
        if stage is None:
            result.add(f"stages.{position}", f"Unknown workflow stage: {raw}")
        else:
            stages.append(stage)

    for previous, current in zip(stages, stages[1:]):
        if stage_index(current) <= stage_index(previous):
            result.add("stages", f"{current.value} must come after {previous.value}")

    if stages and stages[0] != LEGAL_WORKFLOW_EVENT_SEQUENCE[0]:
        result.add("stages", f"Playbook must start at {LEGAL_WORKFLOW_EVENT_SEQUENCE[0].value}")
    if stages and stages[-1] != LEGAL_WORKFLOW_EVENT_SEQUENCE[-1]:
        result.add("stages", f"Playbook must end at {LEGAL_WORKFLOW_EVENT_SEQUENCE[-1].value}")

    return result
