"""
Country playbooks describing how a purchase moves through the legal workflow
"""

from typing import Dict

from world_property.models.legal import LegalPlaybook

LEGAL_PLAYBOOKS: Dict[str, LegalPlaybook] = {
    "GB": LegalPlaybook(
        country_code="GB",
        stages=[
            "OfferCreated", "AIConsultation", "LegalPackRequested",
            "DueDiligence", "Contracts", "Completion",
        ],
        required_documents=[
            "Memorandum of sale",
            "TA6 property information form",
            "TA10 fittings and contents form",
            "Official copy of the register",
            "Energy performance certificate",
        ],
        standard_checks=["Local authority search", "Environmental search", "Drainage and water search"],
        risk_flags=["Short lease", "Unregistered title", "Flood zone"],
        typical_timeline_days=112,
        fee_categories=["Conveyancing", "Searches", "Stamp duty land tax", "Land registry"],
    ),
    "ES": LegalPlaybook(
        country_code="ES",
        stages=["OfferCreated", "AIConsultation", "DueDiligence", "Contracts", "Completion"],
        required_documents=["Nota simple", "NIE certificate", "Certificate of habitability", "IBI receipt"],
        standard_checks=["Land registry extract", "Outstanding debts on the property", "Community fees"],
        risk_flags=["Illegal build", "Pending community debts"],
        typical_timeline_days=60,
        fee_categories=["Notary", "Transfer tax", "Land registry", "Legal fees"],
    ),
    "AE": LegalPlaybook(
        country_code="AE",
        stages=["OfferCreated", "LegalPackRequested", "Contracts", "Completion"],
        required_documents=["Form F (MOU)", "No objection certificate", "Title deed"],
        standard_checks=["Developer clearance", "Mortgage release"],
        risk_flags=["Off-plan handover delay"],
        typical_timeline_days=30,
        fee_categories=["Land department fee", "Trustee fee", "Agency commission"],
    ),
}
