from datetime import datetime
from typing import List, Literal, Optional, Union

from pydantic import BaseModel

from holidayseo.models.package import FlightPackage, ItineraryDay

ContentKind = Literal["tour", "package", "destination", "blog", "static"]


class ContentViewModel(BaseModel):
    """Normalized, read-only projection of one page's content.

    Built by the resolver from whichever backing source answered. Text fields
    are already stripped of markup and trimmed to their display caps
    (``meta_description`` 160, ``description`` 300, ``schema_description`` 500).
    """

    kind: ContentKind
    id: Union[int, str]
    slug: str
    title: str
    meta_title: Optional[str] = None
    meta_description: str = ""
    description: str = ""
    schema_description: str = ""
    destination_name: Optional[str] = None
    duration_days: Optional[int] = None
    duration_text: Optional[str] = None
    price_from: Optional[float] = None
    currency: str = "GBP"
    image_url: Optional[str] = None
    published_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    highlights: List[str] = []
    itinerary: List[ItineraryDay] = []
    package: Optional[FlightPackage] = None
    """Backing package record, present when a package-store lookup answered."""


class FaqItem(BaseModel):
    question: str
    answer: str


class DurationBucket(BaseModel):
    label: str
    min: int
    max: Optional[int]
    count: int = 0


class InclusionStat(BaseModel):
    name: str
    frequency: int
    percentage: float


class DestinationAggregate(BaseModel):
    """Destination-level summary computed from its packages (request-scoped)."""

    destination_name: str
    destination_slug: str
    package_count: int = 0
    price_min: Optional[float] = None
    price_median: Optional[float] = None
    price_max: Optional[float] = None
    top_tags: List[str] = []
    duration_buckets: List[DurationBucket] = []
    top_duration_buckets: List[str] = []
    top_inclusions: List[InclusionStat] = []
    top_hotels: List[str] = []
    featured_packages: List[FlightPackage] = []
    all_packages: List[FlightPackage] = []

    @property
    def image_url(self) -> Optional[str]:
        for pkg in self.featured_packages:
            if pkg.featured_image:
                return pkg.featured_image
        return None
