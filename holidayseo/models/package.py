from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class ItineraryDay(BaseModel):
    day: int
    title: str = ""
    description: str = ""


class Accommodation(BaseModel):
    name: str
    images: List[str] = []
    description: str = ""


class FlightPackage(BaseModel):
    """A flight-inclusive holiday package as stored by the booking backend.

    Field names follow the backend's camelCase JSON (``whatsIncluded``,
    ``isPublished``…); snake_case names are accepted too.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: int
    title: str
    slug: str
    category: str = ""
    countries: List[str] = []
    tags: List[str] = []

    price: Optional[float] = None
    single_price: Optional[float] = None
    currency: str = "GBP"
    price_label: str = "per adult"

    description: str = ""  # HTML
    excerpt: Optional[str] = None

    whats_included: List[str] = []
    highlights: List[str] = []
    itinerary: List[ItineraryDay] = []
    accommodations: List[Accommodation] = []

    excluded: Optional[str] = None  # HTML
    requirements: Optional[str] = None  # HTML
    attention: Optional[str] = None  # HTML
    other_info: Optional[str] = None  # HTML

    featured_image: Optional[str] = None
    duration: Optional[str] = None  # e.g. "7 Nights / 8 Days"

    meta_title: Optional[str] = None
    meta_description: Optional[str] = None

    is_published: bool = False
    is_special_offer: bool = False
    display_order: Optional[int] = Field(default=None)

    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
