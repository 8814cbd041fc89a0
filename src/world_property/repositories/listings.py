"""
Listing persistence and search
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional, Tuple

import asyncpg

from world_property.database.connection import Database
from world_property.models.enums import ListingMode
from world_property.models.listing import Listing, ListingPrice, ListingQuery
from world_property.utils.errors import ConflictError

logger = logging.getLogger(__name__)

LISTING_COLUMNS = (
    "id, mode, title, description, country, city, address, lat, lng, "
    "sale_price, rent_per_month, night_rate, currency, beds, baths, area_sqm, "
    "property_type, images, amenities, host_type, created_at, owner_user_id"
)

_PRICE_COLUMN = {
    ListingMode.BUY: "sale_price",
    ListingMode.RENT: "rent_per_month",
    ListingMode.STAY: "night_rate",
}


def listing_matches(listing: Listing, query: ListingQuery) -> bool:
    """In-process equivalent of the SQL built by build_listing_search_sql"""
    if listing.mode != query.mode:
        return False

    text = query.normalised_text()
    if text and not any(text in value.lower() for value in (listing.city, listing.country, listing.title)):
        return False

    if query.min_beds is not None and listing.beds < query.min_beds:
        return False

    price = listing.price.for_mode(query.mode)
    if query.min_price is not None and price < query.min_price:
        return False
    if query.max_price is not None and price > query.max_price:
        return False

    if query.property_types and listing.property_type not in query.property_types:
        return False

    if query.bounds:
        bounds = query.bounds
        if not (bounds.south <= listing.lat <= bounds.north and bounds.west <= listing.lng <= bounds.east):
            return False

    return True


def build_listing_search_sql(query: ListingQuery) -> Tuple[str, List[Any]]:
    clauses = []
    params: List[Any] = []

    def param(value: Any) -> str:
        params.append(value)
        return f"${len(params)}"

    clauses.append(f"mode = {param(query.mode.value)}")

    text = query.normalised_text()
    if text:
        like = param(f"%{text}%")
        clauses.append(f"(LOWER(city) LIKE {like} OR LOWER(country) LIKE {like} OR LOWER(title) LIKE {like})")

    if query.min_beds is not None:
        clauses.append(f"beds >= {param(query.min_beds)}")

    price_column = _PRICE_COLUMN[query.mode]
    if query.min_price is not None:
        clauses.append(f"COALESCE({price_column}, 0) >= {param(query.min_price)}")
    if query.max_price is not None:
        clauses.append(f"COALESCE({price_column}, 0) <= {param(query.max_price)}")

    if query.property_types:
        clauses.append(f"property_type = ANY({param([p.value for p in query.property_types])}::text[])")

    if query.bounds:
        bounds = query.bounds
        clauses.append(
            f"lat <= {param(bounds.north)} AND lat >= {param(bounds.south)} "
            f"AND lng <= {param(bounds.east)} AND lng >= {param(bounds.west)}"
        )

    sql = f"SELECT {LISTING_COLUMNS} FROM listings WHERE {' AND '.join(clauses)} ORDER BY created_at DESC"
    return sql, params


def row_to_listing(row: Dict[str, Any]) -> Listing:
    return Listing(
        id=row["id"],
        mode=row["mode"],
        title=row["title"],
        description=row["description"],
        country=row["country"],
        city=row["city"],
        address=row["address"],
        lat=row["lat"],
        lng=row["lng"],
        price=ListingPrice(
            sale_price=row["sale_price"],
            rent_per_month=row["rent_per_month"],
            night_rate=row["night_rate"],
        ),
        currency=row["currency"],
        beds=row["beds"],
        baths=row["baths"],
        area_sqm=row["area_sqm"],
        property_type=row["property_type"],
        images=row["images"],
        amenities=row["amenities"],
        host_type=row["host_type"],
        created_at=row["created_at"],
    )


class ListingRepository(ABC):

    @abstractmethod
    async def list_all(self) -> List[Listing]:
        ...

    @abstractmethod
    async def search(self, query: ListingQuery) -> List[Listing]:
        ...

    @abstractmethod
    async def get(self, listing_id: str) -> Optional[Listing]:
        ...

    @abstractmethod
    async def create(self, listing: Listing, owner_user_id: str) -> Listing:
        """Insert a listing; raises ConflictError if the id is taken"""

    @abstractmethod
    async def count(self) -> int:
        ...


class InMemoryListingRepository(ListingRepository):

    def __init__(self):
        self._listings: Dict[str, Listing] = {}
        self._owners: Dict[str, str] = {}

    def _newest_first(self, listings: List[Listing]) -> List[Listing]:
        return sorted(listings, key=lambda listing: listing.created_at, reverse=True)

    async def list_all(self) -> List[Listing]:
        return self._newest_first(list(self._listings.values()))

    async def search(self, query: ListingQuery) -> List[Listing]:
        return self._newest_first([l for l in self._listings.values() if listing_matches(l, query)])

    async def get(self, listing_id: str) -> Optional[Listing]:
        return self._listings.get(listing_id)

    async def create(self, listing: Listing, owner_user_id: str) -> Listing:
        if listing.id in self._listings:
            raise ConflictError("A listing with this ID already exists.")
        self._listings[listing.id] = listing
        self._owners[listing.id] = owner_user_id
        return listing

    async def count(self) -> int:
        return len(self._listings)


class PostgresListingRepository(ListingRepository):

    def __init__(self, database: Database):
        self.database = database

    async def list_all(self) -> List[Listing]:
        async with self.database.acquire() as conn:
            rows = await conn.fetch(f"SELECT {LISTING_COLUMNS} FROM listings ORDER BY created_at DESC")
        return [row_to_listing(dict(row)) for row in rows]

    async def search(self, query: ListingQuery) -> List[Listing]:
        sql, params = build_listing_search_sql(query)
        logger.info(f"Executing listing search: {sql}")
        logger.info(f"Parameters: {params}")
        async with self.database.acquire() as conn:
            rows = await conn.fetch(sql, *params)
        return [row_to_listing(dict(row)) for row in rows]

    async def get(self, listing_id: str) -> Optional[Listing]:
        async with self.database.acquire() as conn:
            row = await conn.fetchrow(f"SELECT {LISTING_COLUMNS} FROM listings WHERE id = $1", listing_id)
        return row_to_listing(dict(row)) if row else None

    async def create(self, listing: Listing, owner_user_id: str) -> Listing:
        try:
            async with self.database.acquire() as conn:
                await conn.execute(
                    f"""
                    INSERT INTO listings ({LISTING_COLUMNS})
                    VALUES ($1, $2, $3, $4, $5, $6, $7, $8, $9, $10, $11,
                            $12, $13, $14, $15, $16, $17, $18, $19, $20, $21, $22)
                    """,
                    listing.id, listing.mode.value, listing.title, listing.description,
                    listing.country, listing.city, listing.address, listing.lat, listing.lng,
                    listing.price.sale_price, listing.price.rent_per_month, listing.price.night_rate,
                    listing.currency, listing.beds, listing.baths, listing.area_sqm,
                    listing.property_type.value, listing.images, listing.amenities,
                    listing.host_type.value, listing.created_at, owner_user_id,
                )
        except asyncpg.UniqueViolationError:
            logger.warning(f"Listing id already exists: {listing.id}")
            raise ConflictError("A listing with this ID already exists.")
        return listing

    async def count(self) -> int:
        async with self.database.acquire() as conn:
            return await conn.fetchval("SELECT COUNT(*) FROM listings")
