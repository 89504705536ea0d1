"""Service wiring and the FastAPI dependencies that hand it to routers.

Collaborators are built once at start-up and kept on ``app.state``; routers
reach them through the ``get_*`` dependencies below, which tests override or
replace by assigning to ``app.state``.
"""

from typing import Optional

from fastapi import Request

from holidayseo.config import Settings
from holidayseo.services.cache import InMemoryResponseCache
from holidayseo.services.injector import SeoInjector
from holidayseo.services.resolver import ContentResolver
from holidayseo.services.store import ContentStore, JsonFileStore
from holidayseo.services.tour_api import TourApiClient


def build_injector(
    settings: Settings,
    store: Optional[ContentStore] = None,
    tour_api: Optional[TourApiClient] = None,
    cache: Optional[InMemoryResponseCache] = None,
) -> SeoInjector:
    """Assemble the injection pipeline from *settings*, filling in any collaborator not given."""
    store = store if store is not None else JsonFileStore(settings.data_dir)
    if tour_api is None:
        tour_api = TourApiClient(settings.tour_api_base_url, settings.tour_api_key)
    resolver = ContentResolver(
        store,
        tour_api,
        primary_currency=settings.primary_currency,
        secondary_currency=settings.secondary_currency,
    )
    cache = cache if cache is not None else InMemoryResponseCache(ttl_seconds=settings.cache_ttl_seconds)
    return SeoInjector(settings, resolver, cache)


def get_settings_dep(request: Request) -> Settings:
    return request.app.state.settings


def get_store(request: Request) -> ContentStore:
    return request.app.state.store


def get_injector(request: Request) -> SeoInjector:
    return request.app.state.injector
