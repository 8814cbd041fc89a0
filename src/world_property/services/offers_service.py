"""
Offers service - records offers and opens their legal cases
"""

import logging
import uuid
from typing import List, Optional

from world_property.models.enums import OfferStatus
from world_property.models.offer import OfferCreateRequest, OfferData, OfferResponse
from world_property.models.user import Principal
from world_property.services.base_service import BaseService
from world_property.services.legal_workflow_service import LegalWorkflowService
from world_property.utils.errors import NotFoundError, ValidationFailedError
from world_property.utils.helpers import utcnow
from world_property.validation.validators import validate_offer

logger = logging.getLogger(__name__)


class OffersService(BaseService):

    def __init__(self, repositories, legal_workflow: Optional[LegalWorkflowService] = None):
        super().__init__(repositories)
        self.legal_workflow = legal_workflow or LegalWorkflowService(repositories)

    async def create_offer(self, principal: Principal, request: OfferCreateRequest) -> OfferResponse:
        """
        Create an offer on a listing and open its legal case

        Args:
            principal: Who is making the offer
            request: Listing, amount and currency

        Returns:
            OfferResponse with the stored offer and its case at OfferCreated
        """
        listing = await self.repositories.listings.get(request.listing_id)
        if not listing:
            raise NotFoundError("Listing not found.")

        offer = OfferData(
            offer_id=f"offer-{uuid.uuid4().hex}",
            listing_id=request.listing_id,
            amount_minor=request.amount_minor,
            currency_code=request.currency_code.strip(),
            status=OfferStatus.CREATED,
            principal_type=principal.type,
            principal_id=principal.id,
            created_at=utcnow(),
        )

        validation = validate_offer(offer)
        if not validation.success:
            logger.info(f"Rejected offer on {request.listing_id}: {validation.as_dicts()}")
            raise ValidationFailedError("Invalid offer", validation.as_dicts())

        try:
            async with self.repositories.transaction() as rollback:
                await self.repositories.offers.create(offer)
                rollback.on_failure(lambda: self.repositories.offers.delete(offer.offer_id))
                legal_case = await self.legal_workflow.open_case(offer, actor_id=principal.key, rollback=rollback)
        except Exception as e:
            logger.error(f"Offer {offer.offer_id} on {offer.listing_id} was not created: {e}")
            raise

        logger.info(f"Created offer {offer.offer_id} on listing {offer.listing_id}")

        return OfferResponse(offer=offer, legal_case=legal_case)

    async def get_offer(self, offer_id: str) -> OfferResponse:
        offer = await self.repositories.offers.get(offer_id)
        if not offer:
            raise NotFoundError(f"Offer not found: {offer_id}")
        legal_case = await self.legal_workflow.get_case_for_offer(offer_id)
        return OfferResponse(offer=offer, legal_case=legal_case)

    async def list_offers_for_listing(self, listing_id: str) -> List[OfferData]:
        if not await self.repositories.listings.get(listing_id):
            raise NotFoundError("Listing not found.")
        return await self.repositories.offers.list_for_listing(listing_id)
