"""Machine-readable routes: sitemaps, JSON feeds and crawler discovery files."""

import logging

from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.responses import PlainTextResponse, Response
from slowapi import Limiter
from slowapi.util import get_remote_address

from holidayseo.config import Settings
from holidayseo.dependencies import get_settings_dep, get_store
from holidayseo.models.feed import JsonFeed
from holidayseo.services import discovery, feeds, sitemaps
from holidayseo.services.store import ContentStore

logger = logging.getLogger(__name__)

limiter = Limiter(key_func=get_remote_address)
router = APIRouter()

XML_MEDIA_TYPE = "application/xml"
DISCOVERY_CACHE_CONTROL = "public, max-age=86400"


def _require(enabled: bool) -> None:
    if not enabled:
        raise HTTPException(status_code=404, detail="Not Found")


# ---------------------------------------------------------------------------
# Sitemaps
# ---------------------------------------------------------------------------

@router.get("/sitemap.xml", summary="Sitemap index")
@limiter.limit("60/minute")
async def sitemap_index(request: Request, settings: Settings = Depends(get_settings_dep)) -> Response:
    _require(settings.sitemap_enabled)
    return Response(sitemaps.sitemap_index(settings.canonical_host), media_type=XML_MEDIA_TYPE)


@router.get("/sitemaps/{name}.xml", summary="Sitemap url set")
@limiter.limit("60/minute")
async def sitemap_urlset(
    name: str,
    request: Request,
    settings: Settings = Depends(get_settings_dep),
    store: ContentStore = Depends(get_store),
) -> Response:
    _require(settings.sitemap_enabled)
    host = settings.canonical_host

    if name == "pages":
        xml = sitemaps.pages_sitemap(host, settings.site_name)
    elif name == "tours":
        xml = await sitemaps.tours_sitemap(
            store, host, settings.primary_currency, settings.secondary_currency
        )
    elif name == "packages":
        xml = await sitemaps.packages_sitemap(store, host)
    elif name == "destinations":
        xml = await sitemaps.destinations_sitemap(store, host)
    elif name == "blog":
        xml = await sitemaps.blog_sitemap(store, host)
    else:
        raise HTTPException(status_code=404, detail="Unknown sitemap")

    return Response(xml, media_type=XML_MEDIA_TYPE)


# ---------------------------------------------------------------------------
# JSON feeds
# ---------------------------------------------------------------------------

@router.get("/feed/{kind}.json", response_model=JsonFeed, summary="JSON feed")
@limiter.limit("30/minute")
async def json_feed(
    kind: str,
    request: Request,
    settings: Settings = Depends(get_settings_dep),
    store: ContentStore = Depends(get_store),
) -> JsonFeed:
    _require(settings.feeds_enabled)
    host = settings.canonical_host

    if kind == "tours":
        items = await feeds.tour_items(store, host, settings.primary_currency)
    elif kind == "packages":
        items = await feeds.package_items(store, host)
    elif kind == "destinations":
        items = await feeds.destination_items(store, host)
    else:
        raise HTTPException(status_code=404, detail="Unknown feed")

    return feeds.build_feed(kind, settings.site_name, host, items)


# ---------------------------------------------------------------------------
# Discovery files
# ---------------------------------------------------------------------------

@router.get("/robots.txt", response_class=PlainTextResponse, include_in_schema=False)
@limiter.limit("60/minute")
async def robots(request: Request, settings: Settings = Depends(get_settings_dep)) -> PlainTextResponse:
    return PlainTextResponse(discovery.robots_txt(settings.canonical_host))


@router.get("/llm.txt", response_class=PlainTextResponse, include_in_schema=False)
@limiter.limit("60/minute")
async def llm(request: Request, settings: Settings = Depends(get_settings_dep)) -> PlainTextResponse:
    return PlainTextResponse(
        discovery.llm_txt(settings.canonical_host, settings.site_name),
        headers={"Cache-Control": DISCOVERY_CACHE_CONTROL},
    )


@router.get("/ai.txt", response_class=PlainTextResponse, include_in_schema=False)
@limiter.limit("60/minute")
async def ai(request: Request, settings: Settings = Depends(get_settings_dep)) -> PlainTextResponse:
    return PlainTextResponse(
        discovery.ai_txt(settings.canonical_host, settings.site_name),
        headers={"Cache-Control": DISCOVERY_CACHE_CONTROL},
    )
