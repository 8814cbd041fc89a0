"""
Saved listings and saved searches
"""

import logging
from typing import List

from pydantic import ValidationError

from world_property.config.settings import SAVED_SEARCH_LIMIT
from world_property.models.listing import ListingQuery
from world_property.models.user import Principal
from world_property.services.base_service import BaseService
from world_property.utils.errors import NotFoundError
from world_property.utils.helpers import utcnow

logger = logging.getLogger(__name__)


class SavedService(BaseService):

    def __init__(self, repositories, search_limit: int = SAVED_SEARCH_LIMIT):
        super().__init__(repositories)
        self.search_limit = search_limit

    async def list_saved_listing_ids(self, principal: Principal) -> List[str]:
        return await self.repositories.saved.list_listing_ids(principal)

    async def toggle_saved_listing(self, principal: Principal, listing_id: str) -> List[str]:
        """Save the listing if it is not saved, unsave it otherwise"""
        if not await self.repositories.listings.get(listing_id):
            raise NotFoundError("Listing not found.")

        saved = self.repositories.saved
        if await saved.is_listing_saved(principal, listing_id):
            await saved.remove_listing(principal, listing_id)
            logger.info(f"Unsaved listing {listing_id} for {principal.key}")
        else:
            await saved.add_listing(principal, listing_id, utcnow())
            logger.info(f"Saved listing {listing_id} for {principal.key}")

        return await saved.list_listing_ids(principal)

    async def list_saved_searches(self, principal: Principal) -> List[ListingQuery]:
        payloads = await self.repositories.saved.list_search_payloads(principal, self.search_limit)

        queries = []
        for payload in payloads:
            try:
                queries.append(ListingQuery.model_validate(payload))
            except ValidationError:
                # Corrupt rows are skipped so valid ones still load
                logger.warning(f"Skipping unreadable saved search for {principal.key}")
        return queries

    async def save_search(self, principal: Principal, query: ListingQuery) -> List[ListingQuery]:
        payload = query.model_dump(mode="json", exclude_none=True)
        await self.repositories.saved.add_search(principal, payload, utcnow(), self.search_limit)
        return await self.list_saved_searches(principal)
