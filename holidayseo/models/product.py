from typing import Optional, Union

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class _Upstream(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")


class Photo(_Upstream):
    original_url: Optional[str] = None


class Place(_Upstream):
    country: Optional[str] = None
    city: Optional[str] = None


class Product(_Upstream):
    """A tour product from the third-party inventory, as cached or fetched live.

    The upstream shape is loose: ``keyPhoto`` is either a URL or an object,
    ``title`` is sometimes sent as ``name`` and the country can live in
    ``googlePlace`` or ``locationCode``.
    """

    id: Union[int, str]
    title: Optional[str] = None
    name: Optional[str] = None
    excerpt: Optional[str] = None
    description: Optional[str] = None
    key_photo: Union[Photo, str, None] = None
    price: Optional[float] = None
    duration_text: Optional[str] = None
    duration_days: Optional[int] = None
    google_place: Optional[Place] = None
    location_code: Optional[Place] = None

    @property
    def display_title(self) -> str:
        return self.title or self.name or ""

    @property
    def key_photo_url(self) -> Optional[str]:
        if isinstance(self.key_photo, Photo):
            return self.key_photo.original_url
        return self.key_photo

    @property
    def country(self) -> Optional[str]:
        for place in (self.google_place, self.location_code):
            if place and place.country:
                return place.country
        return None
