"""
Listings service - browse, search and publish listings
"""

import logging
import uuid
from typing import Optional

from world_property.models.listing import HostListingForm, ListingQuery
from world_property.services.base_service import BaseService, ServiceResult
from world_property.utils.helpers import normalise_email, utcnow

logger = logging.getLogger(__name__)


class ListingsService(BaseService):
    """Service for listing operations"""

    async def list_listings(self) -> ServiceResult:
        return await self._guard("List listings", self.repositories.listings.list_all())

    async def search_listings(self, query: ListingQuery) -> ServiceResult:
        """
        Search listings

        Args:
            query: Filters to apply; all of them must match

        Returns:
            ServiceResult with matching listings, newest first
        """
        if query.min_price is not None and query.max_price is not None and query.min_price > query.max_price:
            return ServiceResult.fail("min_price cannot exceed max_price", "INVALID_REQUEST")
        if query.bounds and query.bounds.south > query.bounds.north:
            return ServiceResult.fail("bounds.south cannot exceed bounds.north", "INVALID_REQUEST")

        logger.info(f"Searching listings: {query.model_dump(exclude_none=True)}")
        return await self._guard("Search listings", self.repositories.listings.search(query))

    async def get_listing(self, listing_id: str) -> ServiceResult:
        result = await self._guard("Get listing", self.repositories.listings.get(listing_id))
        if result.success and result.data is None:
            return ServiceResult.fail("Listing not found.", "NOT_FOUND")
        return result

    async def create_listing(self, form: HostListingForm, owner_email: Optional[str]) -> ServiceResult:
        """
        Publish a listing from the creation wizard

        Args:
            form: Validated wizard payload
            owner_email: Email of the signed-in publisher

        Returns:
            ServiceResult with the stored listing
        """
        if not owner_email or not owner_email.strip():
            return ServiceResult.fail("Sign in before publishing a listing.", "UNAUTHORIZED")

        owner = await self.repositories.users.find_by_email(normalise_email(owner_email))
        if not owner:
            return ServiceResult.fail("Sign in before publishing a listing.", "UNAUTHORIZED")

        listing = form.to_listing(form.id or f"listing-{uuid.uuid4().hex[:12]}", utcnow())
        logger.info(f"Creating listing {listing.id} for user {owner.id}")
        return await self._guard("Create listing", self.repositories.listings.create(listing, owner.id))
