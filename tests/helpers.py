"""Shared builders and in-memory fakes for the test suite."""

import asyncio
from typing import Dict, List, Optional

from holidayseo.config import Settings
from holidayseo.models.blog import BlogPost, Faq
from holidayseo.models.package import FlightPackage
from holidayseo.models.product import Product

TEMPLATE = """<!DOCTYPE html>
<html lang="en">
  <head>
    <meta charset="UTF-8" />
    <title>Shell Title</title>
    <meta name="description" content="Shell description" />
    <link rel="canonical" href="https://example.com/" />
    <meta property="og:title" content="Shell OG" />
    <meta name="twitter:card" content="summary" />
  </head>
  <body>
    <div id="root"></div>
    <script type="module" src="/src/main.tsx"></script>
  </body>
</html>
"""


def run(coro):
    return asyncio.run(coro)


def make_package(**overrides) -> FlightPackage:
    data = {
        "id": 1,
        "title": "Amalfi Coast Escape",
        "slug": "amalfi-coast-escape",
        "category": "Italy",
        "is_published": True,
        "price": 1200,
        "duration": "7 nights",
    }
    data.update(overrides)
    return FlightPackage(**data)


def make_settings(tmp_path, **overrides) -> Settings:
    template = tmp_path / "index.html"
    if not template.exists():
        template.write_text(TEMPLATE, encoding="utf-8")
    data = {
        "app_env": "production",
        "canonical_host": "https://holidays.example.com",
        "template_path": template,
        "prerendered_dir": tmp_path / "prerendered",
        "data_dir": tmp_path / "data",
    }
    data.update(overrides)
    return Settings(**data)


class FakeStore:
    """In-memory :class:`~holidayseo.services.store.ContentStore`.

    *failures* maps a method name to the exception it should raise.
    """

    def __init__(
        self,
        packages: Optional[List[FlightPackage]] = None,
        products: Optional[Dict[str, List[Product]]] = None,
        posts: Optional[List[BlogPost]] = None,
        faqs: Optional[List[Faq]] = None,
        failures: Optional[Dict[str, Exception]] = None,
    ):
        self.packages = packages or []
        self.products = products or {}
        self.posts = posts or []
        self.faqs = faqs or []
        self.failures = failures or {}
        self.calls: List[str] = []

    def _check(self, name: str) -> None:
        self.calls.append(name)
        if name in self.failures:
            raise self.failures[name]

    async def get_cached_product(self, product_id, currency):
        self._check("get_cached_product")
        for product in self.products.get(currency, []):
            if str(product.id) == str(product_id):
                return product
        return None

    async def get_cached_products(self, currency):
        self._check("get_cached_products")
        return list(self.products.get(currency, []))

    async def get_all_flight_packages(self):
        self._check("get_all_flight_packages")
        return list(self.packages)

    async def get_flight_package_by_slug(self, slug):
        self._check("get_flight_package_by_slug")
        return next((p for p in self.packages if p.slug == slug), None)

    async def get_published_blog_posts(self):
        self._check("get_published_blog_posts")
        return [p for p in self.posts if p.is_published]

    async def get_blog_post_by_slug(self, slug):
        self._check("get_blog_post_by_slug")
        return next((p for p in self.posts if p.slug == slug), None)

    async def get_published_faqs(self):
        self._check("get_published_faqs")
        return [f for f in self.faqs if f.is_published]
