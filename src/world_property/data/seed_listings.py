"""
Listings inserted into an empty database so search has something to show
"""

import logging
from datetime import datetime, timezone
from typing import List

from world_property.models.enums import HostType, ListingMode, PropertyType, UserRole
from world_property.models.listing import Listing, ListingPrice
from world_property.repositories import Repositories
from world_property.utils.helpers import utcnow

logger = logging.getLogger(__name__)

SYSTEM_EMAIL = "seed@world-property.local"
SYSTEM_NAME = "Seed Data"


def _listing(listing_id: str, created: str, **fields) -> Listing:
    return Listing(
        id=listing_id,
        created_at=datetime.fromisoformat(created).replace(tzinfo=timezone.utc),
        **fields,
    )


SEED_LISTINGS: List[Listing] = [
    _listing(
        "lst-london-001", "2024-05-02T09:00:00",
        mode=ListingMode.BUY,
        title="Canal-side loft in Hackney",
        description="Bright warehouse conversion with exposed brick, tall windows and a private balcony over the canal.",
        country="United Kingdom", city="London", address="12 Regent's Row, London E8",
        lat=51.5362, lng=-0.0640,
        price=ListingPrice(sale_price=725000), currency="GBP",
        beds=2, baths=1, area_sqm=84, property_type=PropertyType.LOFT,
        images=["https://images.example.com/listings/lst-london-001/1.jpg"],
        amenities=["Balcony", "Bike storage", "Concierge"],
        host_type=HostType.AGENT,
    ),
    _listing(
        "lst-lisbon-002", "2024-04-18T12:30:00",
        mode=ListingMode.BUY,
        title="Renovated apartment in Alfama",
        description="Top-floor apartment with river views, restored tiles and a roof terrace in the old town.",
        country="Portugal", city="Lisbon", address="Rua de São Miguel 21, Lisbon",
        lat=38.7115, lng=-9.1301,
        price=ListingPrice(sale_price=540000), currency="EUR",
        beds=2, baths=2, area_sqm=96, property_type=PropertyType.APARTMENT,
        images=["https://images.example.com/listings/lst-lisbon-002/1.jpg"],
        amenities=["Roof terrace", "River view"],
        host_type=HostType.OWNER,
    ),
    _listing(
        "lst-marbella-003", "2024-03-11T08:15:00",
        mode=ListingMode.BUY,
        title="Hillside villa above Marbella",
        description="Five-bedroom villa with infinity pool, sea views and landscaped gardens close to the golf valley.",
        country="Spain", city="Marbella", address="Calle Sierra Blanca 4, Marbella",
        lat=36.5250, lng=-4.9110,
        price=ListingPrice(sale_price=3250000), currency="EUR",
        beds=5, baths=5, area_sqm=480, property_type=PropertyType.VILLA,
        images=["https://images.example.com/listings/lst-marbella-003/1.jpg"],
        amenities=["Pool", "Garden", "Sea view", "Garage"],
        host_type=HostType.AGENT,
    ),
    _listing(
        "lst-dubai-004", "2024-05-20T15:45:00",
        mode=ListingMode.BUY,
        title="Marina condo with skyline views",
        description="High-floor condo in Dubai Marina with floor-to-ceiling glass, gym and pool access.",
        country="United Arab Emirates", city="Dubai", address="Marina Gate Tower 2, Dubai Marina",
        lat=25.0860, lng=55.1470,
        price=ListingPrice(sale_price=2100000), currency="AED",
        beds=1, baths=2, area_sqm=78, property_type=PropertyType.CONDO,
        images=["https://images.example.com/listings/lst-dubai-004/1.jpg"],
        amenities=["Gym", "Pool", "Parking"],
        host_type=HostType.AGENT,
    ),
    _listing(
        "lst-capetown-005", "2024-02-27T10:00:00",
        mode=ListingMode.BUY,
        title="Family house in Constantia",
        description="Four-bedroom family home on a leafy plot with a pool, solar power and mountain views.",
        country="South Africa", city="Cape Town", address="8 Willow Road, Constantia, Cape Town",
        lat=-34.0260, lng=18.4400,
        price=ListingPrice(sale_price=9800000), currency="ZAR",
        beds=4, baths=3, area_sqm=310, property_type=PropertyType.HOUSE,
        images=["https://images.example.com/listings/lst-capetown-005/1.jpg"],
        amenities=["Pool", "Solar", "Garden"],
        host_type=HostType.OWNER,
    ),
    _listing(
        "lst-queenstown-006", "2024-01-15T07:20:00",
        mode=ListingMode.BUY,
        title="Lakeside cabin near Queenstown",
        description="Timber cabin with a wood burner and lake frontage, ten minutes from the ski fields.",
        country="New Zealand", city="Queenstown", address="3 Lakeview Terrace, Queenstown",
        lat=-45.0312, lng=168.6626,
        price=ListingPrice(sale_price=1450000), currency="NZD",
        beds=3, baths=1, area_sqm=120, property_type=PropertyType.CABIN,
        images=["https://images.example.com/listings/lst-queenstown-006/1.jpg"],
        amenities=["Wood burner", "Lake access"],
        host_type=HostType.OWNER,
    ),
]


async def seed_listings(repositories: Repositories) -> int:
    """Insert seed listings when there are none; returns how many were added"""
    if await repositories.listings.count() > 0:
        return 0

    users = repositories.users
    owner = await users.find_by_email(SYSTEM_EMAIL)
    if not owner:
        owner = await users.insert(SYSTEM_EMAIL, SYSTEM_NAME, UserRole.AGENT, utcnow())

    for listing in SEED_LISTINGS:
        await repositories.listings.create(listing, owner.id)

    logger.info(f"Seeded {len(SEED_LISTINGS)} listings")
    return len(SEED_LISTINGS)
