"""Read-only access to the booking backend's content.

The persistent store itself lives outside this service.  :class:`ContentStore`
is the interface the SEO pipeline consumes; :class:`JsonFileStore` answers it
from JSON exports in ``DATA_DIR`` so the service can run on its own:

* ``packages.json`` – list of flight packages
* ``products.json`` – ``{"GBP": [...], "USD": [...]}`` cached tour products
* ``blog_posts.json`` – list of blog posts
* ``faqs.json`` – list of editorial FAQs
"""

import json
import logging
from pathlib import Path
from typing import Any, List, Optional, Protocol, Union

from pydantic import ValidationError

from holidayseo.errors import UpstreamError
from holidayseo.models.blog import BlogPost, Faq
from holidayseo.models.package import FlightPackage
from holidayseo.models.product import Product

logger = logging.getLogger(__name__)


class ContentStore(Protocol):
    async def get_cached_product(self, product_id: str, currency: str) -> Optional[Product]: ...

    async def get_cached_products(self, currency: str) -> List[Product]: ...

    async def get_all_flight_packages(self) -> List[FlightPackage]: ...

    async def get_flight_package_by_slug(self, slug: str) -> Optional[FlightPackage]: ...

    async def get_published_blog_posts(self) -> List[BlogPost]: ...

    async def get_blog_post_by_slug(self, slug: str) -> Optional[BlogPost]: ...

    async def get_published_faqs(self) -> List[Faq]: ...


class JsonFileStore:
    """:class:`ContentStore` backed by JSON files in *data_dir*.

    A missing file is an empty collection; an unreadable or malformed file
    raises :class:`~holidayseo.errors.UpstreamError`.
    """

    def __init__(self, data_dir: Union[str, Path]):
        self.data_dir = Path(data_dir)

    def _load(self, filename: str, default: Any) -> Any:
        path = self.data_dir / filename
        if not path.exists():
            return default
        try:
            return json.loads(path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            raise UpstreamError(f"Could not read {path}: {exc}") from exc

    def _parse(self, model, items: List[dict], source: str) -> list:
        parsed = []
        for raw in items:
            try:
                parsed.append(model.model_validate(raw))
            except ValidationError as exc:
                logger.warning("Store: skipping invalid record in %s – %s", source, exc.errors()[:1])
        return parsed

    async def get_cached_products(self, currency: str) -> List[Product]:
        by_currency = self._load("products.json", {})
        return self._parse(Product, by_currency.get(currency.upper(), []), "products.json")

    async def get_cached_product(self, product_id: str, currency: str) -> Optional[Product]:
        for product in await self.get_cached_products(currency):
            if str(product.id) == str(product_id):
                return product
        return None

    async def get_all_flight_packages(self) -> List[FlightPackage]:
        return self._parse(FlightPackage, self._load("packages.json", []), "packages.json")

    async def get_flight_package_by_slug(self, slug: str) -> Optional[FlightPackage]:
        for pkg in await self.get_all_flight_packages():
            if pkg.slug == slug:
                return pkg
        return None

    async def get_published_blog_posts(self) -> List[BlogPost]:
        posts = self._parse(BlogPost, self._load("blog_posts.json", []), "blog_posts.json")
        return [p for p in posts if p.is_published]

    async def get_blog_post_by_slug(self, slug: str) -> Optional[BlogPost]:
        posts = self._parse(BlogPost, self._load("blog_posts.json", []), "blog_posts.json")
        for post in posts:
            if post.slug == slug:
                return post
        return None

    async def get_published_faqs(self) -> List[Faq]:
        faqs = self._parse(Faq, self._load("faqs.json", []), "faqs.json")
        return sorted((f for f in faqs if f.is_published), key=lambda f: f.display_order)
