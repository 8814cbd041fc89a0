"""
Enum definitions for the World Property backend
"""

from enum import Enum


# Listing-related enums
class ListingMode(str, Enum):
    BUY = "buy"
    RENT = "rent"
    STAY = "stay"


class PropertyType(str, Enum):
    APARTMENT = "apartment"
    HOUSE = "house"
    VILLA = "villa"
    CONDO = "condo"
    CABIN = "cabin"
    LOFT = "loft"
    TOWNHOUSE = "townhouse"


class HostType(str, Enum):
    AGENT = "agent"
    OWNER = "owner"


# Account-related enums
class UserRole(str, Enum):
    USER = "user"
    AGENT = "agent"


class PrincipalType(str, Enum):
    """Who owns saved data: a signed-in user or an anonymous device."""
    USER = "user"
    DEVICE = "device"


class OfferStatus(str, Enum):
    CREATED = "created"
    ACCEPTED = "accepted"
    REJECTED = "rejected"
    WITHDRAWN = "withdrawn"


# Legal workflow enums
class WorkflowStage(str, Enum):
    """
    Stages of the legal workflow, declared in workflow order.

    A case starts at OFFER_CREATED and can only ever move to its current
    stage or the one immediately after it.
    """
    OFFER_CREATED = "OfferCreated"
    AI_CONSULTATION = "AIConsultation"
    LEGAL_PACK_REQUESTED = "LegalPackRequested"
    DUE_DILIGENCE = "DueDiligence"
    CONTRACTS = "Contracts"
    COMPLETION = "Completion"


class TransitionOutcome(str, Enum):
    APPLIED = "APPLIED"
    REJECTED_INVALID_TARGET = "REJECTED_INVALID_TARGET"
    REJECTED_NOT_ADJACENT = "REJECTED_NOT_ADJACENT"
