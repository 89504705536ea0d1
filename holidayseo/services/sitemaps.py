"""sitemaps.org XML generation: one index and five url sets.

Every generator catches upstream failures from its own source, logs them and
still returns a valid (possibly empty) document.
"""

import logging
from datetime import date, datetime
from typing import Iterable, List, Optional, Tuple
from xml.etree import ElementTree

from holidayseo.services.static_pages import static_pages
from holidayseo.services.store import ContentStore
from holidayseo.services.text import normalize_slug

logger = logging.getLogger(__name__)

SITEMAP_NS = "http://www.sitemaps.org/schemas/sitemap/0.9"
SITEMAP_NAMES = ("pages", "tours", "packages", "destinations", "blog")

# (loc, lastmod, changefreq, priority)
UrlEntry = Tuple[str, str, str, str]


def _lastmod(value: Optional[datetime], today: date) -> str:
    return (value.date() if value else today).isoformat()


def _serialize(root: ElementTree.Element) -> str:
    body = ElementTree.tostring(root, encoding="unicode")
    return f'<?xml version="1.0" encoding="UTF-8"?>\n{body}'


def render_urlset(entries: Iterable[UrlEntry]) -> str:
    root = ElementTree.Element("urlset", xmlns=SITEMAP_NS)
    for loc, lastmod, changefreq, priority in entries:
        url = ElementTree.SubElement(root, "url")
        ElementTree.SubElement(url, "loc").text = loc
        ElementTree.SubElement(url, "lastmod").text = lastmod
        ElementTree.SubElement(url, "changefreq").text = changefreq
        ElementTree.SubElement(url, "priority").text = priority
    return _serialize(root)


def sitemap_index(host: str, today: Optional[date] = None) -> str:
    today = today or date.today()
    root = ElementTree.Element("sitemapindex", xmlns=SITEMAP_NS)
    for name in SITEMAP_NAMES:
        sitemap = ElementTree.SubElement(root, "sitemap")
        ElementTree.SubElement(sitemap, "loc").text = f"{host}/sitemaps/{name}.xml"
        ElementTree.SubElement(sitemap, "lastmod").text = today.isoformat()
    return _serialize(root)


def pages_sitemap(host: str, site_name: str, today: Optional[date] = None) -> str:
    today = today or date.today()
    return render_urlset(
        (f"{host}{path}", today.isoformat(), page.changefreq, page.priority)
        for path, page in static_pages(site_name).items()
    )


async def tours_sitemap(
    store: ContentStore,
    host: str,
    primary_currency: str = "GBP",
    secondary_currency: str = "USD",
    today: Optional[date] = None,
) -> str:
    """Cached tour products; the secondary currency is used when the primary cache is empty."""
    today = today or date.today()
    entries: List[UrlEntry] = []
    try:
        products = await store.get_cached_products(primary_currency)
        if not products:
            products = await store.get_cached_products(secondary_currency)
        seen = set()
        for product in products:
            key = str(product.id)
            if key in seen:
                continue
            seen.add(key)
            entries.append((f"{host}/tour/{key}", today.isoformat(), "weekly", "0.8"))
    except Exception as exc:
        logger.error("Sitemap: tours unavailable – %s", exc)
    return render_urlset(entries)


async def packages_sitemap(store: ContentStore, host: str, today: Optional[date] = None) -> str:
    """Each published package under ``/packages/`` and under its ``/Holidays/`` country path."""
    today = today or date.today()
    entries: List[UrlEntry] = []
    try:
        for pkg in await store.get_all_flight_packages():
            if not pkg.is_published:
                continue
            lastmod = _lastmod(pkg.updated_at, today)
            entries.append((f"{host}/packages/{pkg.slug}", lastmod, "weekly", "0.9"))
            if pkg.category:
                country_url = f"{host}/Holidays/{normalize_slug(pkg.category)}/{pkg.slug}"
                entries.append((country_url, lastmod, "weekly", "0.9"))
    except Exception as exc:
        logger.error("Sitemap: packages unavailable – %s", exc)
    return render_urlset(entries)


async def destinations_sitemap(store: ContentStore, host: str, today: Optional[date] = None) -> str:
    today = today or date.today()
    entries: List[UrlEntry] = []
    try:
        slugs: List[str] = []
        for pkg in await store.get_all_flight_packages():
            slug = normalize_slug(pkg.category or "")
            if pkg.is_published and slug and slug not in slugs:
                slugs.append(slug)
        for slug in slugs:
            entries.append((f"{host}/destinations/{slug}", today.isoformat(), "weekly", "0.8"))
            entries.append((f"{host}/Holidays/{slug}", today.isoformat(), "weekly", "0.8"))
    except Exception as exc:
        logger.error("Sitemap: destinations unavailable – %s", exc)
    return render_urlset(entries)


async def blog_sitemap(store: ContentStore, host: str, today: Optional[date] = None) -> str:
    today = today or date.today()
    entries: List[UrlEntry] = []
    try:
        for post in await store.get_published_blog_posts():
            entries.append((f"{host}/blog/{post.slug}", _lastmod(post.updated_at, today), "monthly", "0.7"))
    except Exception as exc:
        logger.error("Sitemap: blog posts unavailable – %s", exc)
    return render_urlset(entries)
