"""
Listing-related Pydantic models
"""

from typing import List, Optional
from datetime import datetime
from urllib.parse import urlparse
from pydantic import BaseModel, Field, field_validator, model_validator
from world_property.models.enums import HostType, ListingMode, PropertyType


def _check_image_urls(urls: List[str]) -> List[str]:
    for url in urls:
        parsed = urlparse(url)
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            raise ValueError(f"Enter a valid URL: {url}")
    return urls


class ListingPrice(BaseModel):
    sale_price: Optional[float] = Field(None, gt=0)
    rent_per_month: Optional[float] = Field(None, gt=0)
    night_rate: Optional[float] = Field(None, gt=0)

    def for_mode(self, mode: ListingMode) -> float:
        """Price that applies to a listing mode; missing prices count as 0"""
        if mode == ListingMode.RENT:
            return self.rent_per_month or 0
        if mode == ListingMode.STAY:
            return self.night_rate or 0
        return self.sale_price or 0


class Listing(BaseModel):
    id: str = Field(..., min_length=1)
    mode: ListingMode = ListingMode.BUY
    title: str = Field(..., min_length=5)
    description: str = Field(..., min_length=20)
    country: str = Field(..., min_length=2)
    city: str = Field(..., min_length=2)
    address: str = Field(..., min_length=5)
    lat: float = Field(..., ge=-90, le=90)
    lng: float = Field(..., ge=-180, le=180)
    price: ListingPrice
    currency: str = Field(..., min_length=3, max_length=3)
    beds: int = Field(..., ge=0)
    baths: int = Field(..., ge=0)
    area_sqm: float = Field(..., gt=0)
    property_type: PropertyType
    images: List[str] = Field(..., min_length=1)
    amenities: List[str] = Field(..., min_length=1)
    host_type: HostType
    created_at: datetime

    @field_validator("images")
    @classmethod
    def check_images(cls, value: List[str]) -> List[str]:
        return _check_image_urls(value)


class HostListingForm(BaseModel):
    """Payload produced by the listing creation wizard"""
    id: Optional[str] = Field(None, min_length=1, description="Client-chosen id; generated when omitted")
    mode: ListingMode = ListingMode.BUY
    host_type: HostType
    title: str = Field(..., min_length=5)
    description: str = Field(..., min_length=20)
    country: str = Field(..., min_length=2)
    city: str = Field(..., min_length=2)
    address: str = Field(..., min_length=5)
    lat: float = Field(..., ge=-90, le=90)
    lng: float = Field(..., ge=-180, le=180)
    beds: int = Field(..., ge=0)
    baths: int = Field(..., ge=0)
    area_sqm: float = Field(..., gt=0)
    property_type: PropertyType
    sale_price: Optional[float] = Field(None, gt=0)
    rent_per_month: Optional[float] = Field(None, gt=0)
    night_rate: Optional[float] = Field(None, gt=0)
    currency: str = Field("GBP", min_length=3, max_length=3)
    amenities: List[str] = Field(..., min_length=1)
    images: List[str] = Field(..., min_length=1)

    @field_validator("images")
    @classmethod
    def check_images(cls, value: List[str]) -> List[str]:
        return _check_image_urls(value)

    @model_validator(mode="after")
    def require_price_for_mode(self):
        if self.mode == ListingMode.BUY and not self.sale_price:
            raise ValueError("Sale price is required for buy listings")
        if self.mode == ListingMode.RENT and not self.rent_per_month:
            raise ValueError("Monthly rent is required for rent listings")
        if self.mode == ListingMode.STAY and not self.night_rate:
            raise ValueError("Nightly rate is required for stay listings")
        return self

    def to_listing(self, listing_id: str, created_at: datetime) -> Listing:
        return Listing(
            id=listing_id,
            mode=self.mode,
            title=self.title.strip(),
            description=self.description.strip(),
            country=self.country.strip(),
            city=self.city.strip(),
            address=self.address.strip(),
            lat=self.lat,
            lng=self.lng,
            price=ListingPrice(
                sale_price=self.sale_price,
                rent_per_month=self.rent_per_month,
                night_rate=self.night_rate,
            ),
            currency=self.currency.upper(),
            beds=self.beds,
            baths=self.baths,
            area_sqm=self.area_sqm,
            property_type=self.property_type,
            images=self.images,
            amenities=self.amenities,
            host_type=self.host_type,
            created_at=created_at,
        )


class Bounds(BaseModel):
    north: float = Field(..., ge=-90, le=90)
    south: float = Field(..., ge=-90, le=90)
    east: float = Field(..., ge=-180, le=180)
    west: float = Field(..., ge=-180, le=180)


class ListingQuery(BaseModel):
    """Search filters; every supplied filter must match"""
    mode: ListingMode = ListingMode.BUY
    text: Optional[str] = None
    min_price: Optional[float] = Field(None, ge=0)
    max_price: Optional[float] = Field(None, ge=0)
    min_beds: Optional[int] = Field(None, ge=0)
    property_types: Optional[List[PropertyType]] = None
    bounds: Optional[Bounds] = None

    def normalised_text(self) -> Optional[str]:
        if self.text is None:
            return None
        text = self.text.strip().lower()
        return text or None


class SavedListingToggleRequest(BaseModel):
    listing_id: str = Field(..., min_length=1)


class SaveSearchRequest(BaseModel):
    query: ListingQuery
