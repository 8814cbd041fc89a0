"""
Offer API routes
"""

from fastapi import APIRouter, Depends

from world_property.api.dependencies import get_offers_service, get_principal
from world_property.models.offer import OfferCreateRequest, OfferResponse
from world_property.models.user import Principal
from world_property.services.offers_service import OffersService

router = APIRouter()


@router.post("", status_code=201, response_model=OfferResponse)
async def create_offer(
    request: OfferCreateRequest,
    principal: Principal = Depends(get_principal),
    service: OffersService = Depends(get_offers_service),
):
    """Make an offer on a listing; opens the legal case at OfferCreated"""
    return await service.create_offer(principal, request)


@router.get("/{offer_id}", response_model=OfferResponse)
async def get_offer(
    offer_id: str,
    service: OffersService = Depends(get_offers_service),
):
    return await service.get_offer(offer_id)


@router.get("/by-listing/{listing_id}")
async def list_offers_for_listing(
    listing_id: str,
    service: OffersService = Depends(get_offers_service),
):
    offers = await service.list_offers_for_listing(listing_id)
    return {"offers": offers, "count": len(offers)}
