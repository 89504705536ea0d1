"""Content resolution across the backing sources.

Each content type has an ordered fallback chain in :data:`FALLBACK_CHAINS`.
Steps are tried in order; the first one that answers wins.  A step that
raises is logged and skipped, so one flaky source never hides content that a
later source can supply.

Whatever answered is normalized into a :class:`ContentViewModel` (or, for
destinations, a :class:`DestinationAggregate`) so the builders downstream
never see the upstream shapes.
"""

import logging
from typing import Any, Awaitable, Callable, Dict, List, Literal, NamedTuple, Optional, Tuple

import httpx

from holidayseo.models.blog import BlogPost
from holidayseo.models.package import FlightPackage
from holidayseo.models.product import Product
from holidayseo.models.view import ContentKind, ContentViewModel, FaqItem
from holidayseo.services.aggregate import build_destination_aggregate
from holidayseo.services.store import ContentStore
from holidayseo.services.text import parse_duration, strip_html
from holidayseo.services.tour_api import TourApiClient

logger = logging.getLogger(__name__)

# Bump when a chain's order or members change
CHAIN_VERSION = 2

FALLBACK_CHAINS: Dict[str, Tuple[str, ...]] = {
    "tour": ("cached_product:primary", "cached_product:secondary", "tour_api", "package_store"),
    "package": ("package_by_slug",),
    "destination": ("destination_packages",),
    "blog": ("blog_by_slug",),
}

META_DESCRIPTION_LIMIT = 160
DESCRIPTION_LIMIT = 300
SCHEMA_DESCRIPTION_LIMIT = 500
RELATED_LIMIT = 3

ResolutionStatus = Literal["found", "not_found", "error"]


class Resolution(NamedTuple):
    status: ResolutionStatus
    value: Any = None
    source: Optional[str] = None
    error: Optional[str] = None

    @property
    def found(self) -> bool:
        return self.status == "found"


# ── Normalization ────────────────────────────────────────────────────────────

def _texts(*candidates: Optional[str]) -> Tuple[str, str, str]:
    """(meta description, description, schema description) from the first non-empty candidate."""
    text = ""
    for candidate in candidates:
        text = strip_html(candidate)
        if text:
            break
    return text[:META_DESCRIPTION_LIMIT], text[:DESCRIPTION_LIMIT], text[:SCHEMA_DESCRIPTION_LIMIT]


def product_view(product: Product) -> ContentViewModel:
    meta_description, description, schema_description = _texts(product.excerpt, product.description)
    return ContentViewModel(
        kind="tour",
        id=product.id,
        slug=str(product.id),
        title=product.display_title,
        meta_description=meta_description,
        description=description,
        schema_description=schema_description,
        destination_name=product.country,
        duration_days=product.duration_days or parse_duration(product.duration_text),
        duration_text=product.duration_text,
        price_from=product.price,
        image_url=product.key_photo_url,
    )


def package_view(pkg: FlightPackage, kind: ContentKind = "package") -> ContentViewModel:
    meta_description, _, _ = _texts(pkg.meta_description, pkg.excerpt, pkg.description)
    _, description, schema_description = _texts(pkg.excerpt, pkg.description)
    return ContentViewModel(
        kind=kind,
        id=pkg.id,
        slug=pkg.slug,
        title=pkg.title,
        meta_title=pkg.meta_title,
        meta_description=meta_description,
        description=description,
        schema_description=schema_description,
        destination_name=pkg.category or None,
        duration_days=parse_duration(pkg.duration),
        duration_text=pkg.duration,
        price_from=pkg.price,
        currency=pkg.currency,
        image_url=pkg.featured_image,
        updated_at=pkg.updated_at,
        highlights=pkg.highlights,
        itinerary=pkg.itinerary,
        package=pkg,
    )


def blog_view(post: BlogPost) -> ContentViewModel:
    meta_description, description, schema_description = _texts(post.excerpt, post.content)
    return ContentViewModel(
        kind="blog",
        id=post.id,
        slug=post.slug,
        title=post.title,
        meta_title=post.meta_title,
        meta_description=strip_html(post.meta_description)[:META_DESCRIPTION_LIMIT] or meta_description,
        description=description,
        schema_description=schema_description,
        destination_name=post.destination,
        image_url=post.featured_image,
        published_at=post.published_at,
        updated_at=post.updated_at,
    )


# ── Resolver ─────────────────────────────────────────────────────────────────

Step = Callable[[str], Awaitable[Any]]


class ContentResolver:
    """Walks the fallback chains against a store and the tour API."""

    def __init__(
        self,
        store: ContentStore,
        tour_api: Optional[TourApiClient] = None,
        primary_currency: str = "GBP",
        secondary_currency: str = "USD",
    ):
        self.store = store
        self.tour_api = tour_api
        self.primary_currency = primary_currency
        self.secondary_currency = secondary_currency
        self._steps: Dict[str, Step] = {
            "cached_product:primary": lambda tour_id: self._cached_product(tour_id, self.primary_currency),
            "cached_product:secondary": lambda tour_id: self._cached_product(tour_id, self.secondary_currency),
            "tour_api": self._live_product,
            "package_store": self._package_as_tour,
            "package_by_slug": self._package_by_slug,
            "destination_packages": self._destination_packages,
            "blog_by_slug": self._blog_by_slug,
        }

    async def _run_chain(self, kind: str, identifier: str) -> Resolution:
        errors: List[str] = []
        for step_name in FALLBACK_CHAINS[kind]:
            try:
                value = await self._steps[step_name](identifier)
            except Exception as exc:
                logger.warning(
                    "Resolver: step %s failed for %s %s – %s",
                    step_name,
                    kind,
                    identifier,
                    exc,
                    extra={"kind": kind, "step": step_name, "chain_version": CHAIN_VERSION},
                )
                errors.append(f"{step_name}: {exc}")
                continue
            if value is not None:
                logger.debug("Resolver: %s %s answered by %s", kind, identifier, step_name)
                return Resolution("found", value=value, source=step_name)

        if errors:
            return Resolution("error", error="; ".join(errors))
        return Resolution("not_found", error=f"{kind} '{identifier}' not found")

    # ── Steps (each returns None on a miss) ──────────────────────────────────

    async def _cached_product(self, tour_id: str, currency: str) -> Optional[ContentViewModel]:
        product = await self.store.get_cached_product(tour_id, currency)
        return product_view(product) if product else None

    async def _live_product(self, tour_id: str) -> Optional[ContentViewModel]:
        if self.tour_api is None or not self.tour_api.configured:
            return None
        try:
            product = await self.tour_api.get_product_details(tour_id, self.primary_currency)
        except httpx.HTTPStatusError as exc:
            if exc.response.status_code == 404:
                return None
            raise
        return product_view(product)

    async def _package_as_tour(self, tour_id: str) -> Optional[ContentViewModel]:
        for pkg in await self.store.get_all_flight_packages():
            if pkg.slug == tour_id or str(pkg.id) == tour_id:
                return package_view(pkg, kind="tour")
        return None

    async def _package_by_slug(self, slug: str) -> Optional[ContentViewModel]:
        pkg = await self.store.get_flight_package_by_slug(slug)
        return package_view(pkg) if pkg else None

    async def _destination_packages(self, slug: str):
        agg = build_destination_aggregate(await self.store.get_all_flight_packages(), slug)
        return agg if agg.package_count else None

    async def _blog_by_slug(self, slug: str) -> Optional[ContentViewModel]:
        post = await self.store.get_blog_post_by_slug(slug)
        if post is None or not post.is_published:
            return None
        return blog_view(post)

    # ── Public API ───────────────────────────────────────────────────────────

    async def resolve_tour(self, tour_id: str) -> Resolution:
        return await self._run_chain("tour", tour_id)

    async def resolve_package(self, slug: str) -> Resolution:
        return await self._run_chain("package", slug)

    async def resolve_destination(self, slug: str) -> Resolution:
        """Resolution whose value is a :class:`DestinationAggregate`."""
        return await self._run_chain("destination", slug)

    async def resolve_blog(self, slug: str) -> Resolution:
        return await self._run_chain("blog", slug)

    async def related_packages(self, pkg: FlightPackage) -> List[FlightPackage]:
        """Published packages in the same category, best-effort (errors give ``[]``)."""
        category = (pkg.category or "").lower()
        if not category:
            return []
        try:
            packages = await self.store.get_all_flight_packages()
        except Exception as exc:
            logger.warning("Resolver: related packages unavailable for %s – %s", pkg.slug, exc)
            return []
        related = [
            p
            for p in packages
            if (p.category or "").lower() == category and p.is_published and p.slug != pkg.slug
        ]
        return related[:RELATED_LIMIT]

    async def site_faqs(self) -> List[FaqItem]:
        """Published editorial FAQs in display order, best-effort (errors give ``[]``)."""
        try:
            faqs = await self.store.get_published_faqs()
        except Exception as exc:
            logger.warning("Resolver: editorial FAQs unavailable – %s", exc)
            return []
        return [FaqItem(question=faq.question, answer=faq.answer) for faq in faqs]
