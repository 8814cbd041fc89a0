"""
Saved listings and saved searches, keyed by the calling principal
"""

from fastapi import APIRouter, Depends

from world_property.api.dependencies import get_principal, get_saved_service
from world_property.models.listing import SavedListingToggleRequest, SaveSearchRequest
from world_property.models.user import Principal
from world_property.services.saved_service import SavedService

router = APIRouter()


@router.get("/listings")
async def list_saved_listings(
    principal: Principal = Depends(get_principal),
    service: SavedService = Depends(get_saved_service),
):
    return {"listing_ids": await service.list_saved_listing_ids(principal)}


@router.post("/listings")
async def toggle_saved_listing(
    request: SavedListingToggleRequest,
    principal: Principal = Depends(get_principal),
    service: SavedService = Depends(get_saved_service),
):
    """Save or unsave a listing; returns the saved ids newest first"""
    listing_ids = await service.toggle_saved_listing(principal, request.listing_id)
    return {"listing_ids": listing_ids, "saved": request.listing_id in listing_ids}


@router.get("/searches")
async def list_saved_searches(
    principal: Principal = Depends(get_principal),
    service: SavedService = Depends(get_saved_service),
):
    return {"searches": await service.list_saved_searches(principal)}


@router.post("/searches", status_code=201)
async def save_search(
    request: SaveSearchRequest,
    principal: Principal = Depends(get_principal),
    service: SavedService = Depends(get_saved_service),
):
    return {"searches": await service.save_search(principal, request.query)}
