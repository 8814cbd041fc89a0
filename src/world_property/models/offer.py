"""
Offer and money Pydantic models
"""

from typing import Optional
from datetime import datetime
from pydantic import BaseModel, Field
from world_property.models.enums import OfferStatus, PrincipalType
from world_property.models.legal import LegalCase


class Money(BaseModel):
    amount_minor: int = Field(..., description="Amount in the currency's minor unit (pence, cents)")
    currency_code: str


class OfferData(BaseModel):
    offer_id: str
    listing_id: str
    amount_minor: int
    currency_code: str
    status: OfferStatus = OfferStatus.CREATED
    principal_type: PrincipalType
    principal_id: str
    created_at: datetime

    @property
    def money(self) -> Money:
        return Money(amount_minor=self.amount_minor, currency_code=self.currency_code)


class OfferCreateRequest(BaseModel):
    listing_id: str = Field(..., min_length=1)
    amount_minor: int
    currency_code: str


class OfferResponse(BaseModel):
    offer: OfferData
    legal_case: Optional[LegalCase] = None
