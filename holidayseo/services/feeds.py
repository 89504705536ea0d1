"""JSON feeds of tours, packages and destinations for machine consumers."""

import logging
from collections import Counter
from datetime import datetime, timezone
from typing import List, Optional

from holidayseo.models.feed import DestinationFeedItem, JsonFeed, TourFeedItem
from holidayseo.models.package import FlightPackage
from holidayseo.services.store import ContentStore
from holidayseo.services.text import normalize_slug, parse_duration, strip_html

logger = logging.getLogger(__name__)

SUMMARY_LIMIT = 300


def _iso(value: Optional[datetime], now: datetime) -> str:
    return (value or now).isoformat()


def _package_item(pkg: FlightPackage, host: str, now: datetime) -> TourFeedItem:
    return TourFeedItem(
        id=pkg.id,
        slug=pkg.slug,
        title=pkg.title,
        summary=strip_html(pkg.excerpt or pkg.description)[:SUMMARY_LIMIT],
        destination=pkg.category or "",
        duration=parse_duration(pkg.duration),
        price_from=pkg.price or None,
        currency=pkg.currency or "GBP",
        image_url=pkg.featured_image,
        page_url=f"{host}/packages/{pkg.slug}",
        last_updated=_iso(pkg.updated_at, now),
    )


async def _published_packages(store: ContentStore) -> List[FlightPackage]:
    return [p for p in await store.get_all_flight_packages() if p.is_published]


async def package_items(store: ContentStore, host: str, now: Optional[datetime] = None) -> List[TourFeedItem]:
    now = now or datetime.now(timezone.utc)
    try:
        return [_package_item(pkg, host, now) for pkg in await _published_packages(store)]
    except Exception as exc:
        logger.error("Feeds: packages unavailable – %s", exc)
        return []


async def tour_items(
    store: ContentStore,
    host: str,
    currency: str = "GBP",
    now: Optional[datetime] = None,
) -> List[TourFeedItem]:
    """Published packages followed by cached tour products in *currency*."""
    now = now or datetime.now(timezone.utc)
    items = await package_items(store, host, now)
    try:
        products = await store.get_cached_products(currency)
    except Exception as exc:
        logger.error("Feeds: cached products unavailable – %s", exc)
        return items

    for product in products:
        items.append(
            TourFeedItem(
                id=product.id,
                slug=str(product.id),
                title=product.display_title,
                summary=strip_html(product.excerpt)[:SUMMARY_LIMIT],
                destination=product.country or "",
                duration=product.duration_days,
                price_from=product.price or None,
                currency=currency,
                image_url=product.key_photo_url,
                page_url=f"{host}/tour/{product.id}",
                last_updated=now.isoformat(),
            )
        )
    return items


async def destination_items(
    store: ContentStore, host: str, now: Optional[datetime] = None
) -> List[DestinationFeedItem]:
    now = now or datetime.now(timezone.utc)
    try:
        packages = await _published_packages(store)
    except Exception as exc:
        logger.error("Feeds: destinations unavailable – %s", exc)
        return []

    counts = Counter(pkg.category for pkg in packages if pkg.category)
    items = []
    for name, count in counts.items():
        slug = normalize_slug(name)
        items.append(
            DestinationFeedItem(
                id=slug,
                slug=slug,
                name=name,
                package_count=count,
                page_url=f"{host}/destinations/{slug}",
                last_updated=now.isoformat(),
            )
        )
    return items


def build_feed(kind: str, site_name: str, host: str, items: list) -> JsonFeed:
    """Wrap *items* in the feed envelope; *kind* is ``tours``, ``packages`` or ``destinations``."""
    return JsonFeed(
        title=f"{site_name} - {kind.capitalize()}",
        home_page_url=host,
        feed_url=f"{host}/feed/{kind}.json",
        items=items,
    )
