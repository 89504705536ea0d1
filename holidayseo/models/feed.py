from typing import List, Optional, Union

from pydantic import BaseModel


class TourFeedItem(BaseModel):
    id: Union[int, str]
    slug: str
    title: str
    summary: str
    destination: str
    duration: Optional[int]
    price_from: Optional[float]
    currency: str
    image_url: Optional[str]
    page_url: str
    last_updated: str


class DestinationFeedItem(BaseModel):
    id: str
    slug: str
    name: str
    package_count: int
    page_url: str
    last_updated: str


class JsonFeed(BaseModel):
    version: str = "1.0"
    title: str
    home_page_url: str
    feed_url: str
    items: List[Union[TourFeedItem, DestinationFeedItem]]
