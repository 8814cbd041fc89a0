"""
Listing API routes - browse, search, lookup and publish
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Header

from world_property.api.dependencies import get_listings_service, raise_for_result
from world_property.models.listing import HostListingForm, ListingQuery
from world_property.services.listings_service import ListingsService

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("")
async def list_listings(service: ListingsService = Depends(get_listings_service)):
    """All listings, newest first"""
    result = await service.list_listings()
    raise_for_result(result)
    return {"listings": result.data, "count": result.count}


@router.post("/search")
async def search_listings(
    query: ListingQuery,
    service: ListingsService = Depends(get_listings_service),
):
    """Listings matching every supplied filter"""
    result = await service.search_listings(query)
    raise_for_result(result)
    return {"listings": result.data, "count": result.count}


@router.get("/{listing_id}")
async def get_listing(
    listing_id: str,
    service: ListingsService = Depends(get_listings_service),
):
    result = await service.get_listing(listing_id)
    raise_for_result(result)
    return {"listing": result.data}


@router.post("", status_code=201)
async def create_listing(
    form: HostListingForm,
    x_user_email: Optional[str] = Header(None),
    service: ListingsService = Depends(get_listings_service),
):
    """Publish a listing from the host wizard; the caller must be a known user"""
    result = await service.create_listing(form, x_user_email)
    raise_for_result(result)
    logger.info(f"Published listing {result.data.id}")
    return {"listing": result.data}
