from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class BlogPost(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: int
    title: str
    slug: str
    content: str = ""  # HTML
    excerpt: str = ""
    meta_title: Optional[str] = None
    meta_description: Optional[str] = None
    featured_image: Optional[str] = None
    author: str = "Flights and Packages"
    destination: Optional[str] = None
    is_published: bool = False
    published_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class Faq(BaseModel):
    """An editorial FAQ entry (site-wide, not generated)."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: int
    question: str
    answer: str
    display_order: int = 0
    is_published: bool = True
