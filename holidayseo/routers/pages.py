import logging
from typing import Awaitable, Callable, Optional, Tuple

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse

from holidayseo.config import Settings
from holidayseo.dependencies import get_injector, get_settings_dep
from holidayseo.services.bot import is_bot
from holidayseo.services.canonical import noindex_section
from holidayseo.services.injector import InjectionResult, SeoInjector
from holidayseo.services.prerender import read_prerendered
from holidayseo.services.static_pages import static_pages

logger = logging.getLogger(__name__)

router = APIRouter()

# Title and description per private section, keyed by its path prefix
NOINDEX_PAGES = {
    "/ai-search": ("AI-Powered Holiday Search | {site_name}", "Find your perfect holiday with our AI-powered search."),
    "/checkout": ("Checkout | {site_name}", "Complete your holiday booking."),
    "/admin": ("Admin | {site_name}", "Site administration."),
    "/2fa-setup": (
        "Two-Factor Authentication Setup | {site_name}",
        "Secure your account with two-factor authentication.",
    ),
}


def should_inject(request: Request, settings: Settings) -> bool:
    """Production enriches every request; development only enriches crawler requests."""
    if not settings.seo_enabled:
        return False
    if settings.is_production:
        return True
    return is_bot(request.headers.get("user-agent"))


def spa_shell(injector: SeoInjector) -> HTMLResponse:
    """The unmodified client template."""
    return HTMLResponse(injector.load_template())


async def _serve(
    request: Request,
    injector: SeoInjector,
    settings: Settings,
    render: Callable[[], Awaitable[InjectionResult]],
    prerendered: Optional[Tuple[str, str]] = None,
) -> HTMLResponse:
    # ── Step 1: bot gate ──────────────────────────────────────────────────────
    if not should_inject(request, settings):
        return spa_shell(injector)

    # ── Step 2: prerendered file ──────────────────────────────────────────────
    if prerendered is not None:
        html = read_prerendered(settings, *prerendered)
        if html is not None:
            return HTMLResponse(html, headers={"X-Prerendered": "true"})

    # ── Step 3: cache / resolve / inject ──────────────────────────────────────
    result = await render()
    if not result.injected:
        logger.info("Serving SPA shell for %s (%s)", request.url.path, result.error)
        return HTMLResponse(result.html)
    return HTMLResponse(result.html, headers={"X-SEO-Injected": "true"})


def noindex_response(path: str, injector: SeoInjector, settings: Settings) -> HTMLResponse:
    """``noindex, follow`` shell for a private section, for crawlers and browsers alike.

    *path* must fall under one of :data:`NOINDEX_PAGES`.
    """
    if not settings.seo_enabled:
        return spa_shell(injector)
    title, description = NOINDEX_PAGES[noindex_section(path)]
    result = injector.render_noindex(title.format(site_name=settings.site_name), description, path)
    return HTMLResponse(
        result.html, headers={"X-Robots-Tag": "noindex, follow", "X-SEO-Injected": "true"}
    )


@router.get("/ai-search", response_class=HTMLResponse, include_in_schema=False)
async def ai_search(
    request: Request,
    injector: SeoInjector = Depends(get_injector),
    settings: Settings = Depends(get_settings_dep),
) -> HTMLResponse:
    return noindex_response(request.url.path, injector, settings)


@router.get("/tour/{tour_id}", response_class=HTMLResponse, include_in_schema=False)
async def tour_page(
    tour_id: str,
    request: Request,
    injector: SeoInjector = Depends(get_injector),
    settings: Settings = Depends(get_settings_dep),
) -> HTMLResponse:
    return await _serve(
        request,
        injector,
        settings,
        lambda: injector.render_tour(tour_id, request.url.query),
        prerendered=("tours", tour_id),
    )


@router.get("/packages/{slug}", response_class=HTMLResponse, include_in_schema=False)
async def package_page(
    slug: str,
    request: Request,
    injector: SeoInjector = Depends(get_injector),
    settings: Settings = Depends(get_settings_dep),
) -> HTMLResponse:
    return await _serve(
        request,
        injector,
        settings,
        lambda: injector.render_package(slug, request.url.query),
        prerendered=("packages", slug),
    )


@router.get("/destinations/{slug}", response_class=HTMLResponse, include_in_schema=False)
async def destination_page(
    slug: str,
    request: Request,
    injector: SeoInjector = Depends(get_injector),
    settings: Settings = Depends(get_settings_dep),
) -> HTMLResponse:
    return await _serve(
        request,
        injector,
        settings,
        lambda: injector.render_destination(slug, request.url.query),
        prerendered=("destinations", slug),
    )


@router.get("/destinations/{slug}/holiday-deals", response_class=HTMLResponse, include_in_schema=False)
async def holiday_deals_page(
    slug: str,
    request: Request,
    injector: SeoInjector = Depends(get_injector),
    settings: Settings = Depends(get_settings_dep),
) -> HTMLResponse:
    return await _serve(
        request,
        injector,
        settings,
        lambda: injector.render_holiday_deals(slug, request.url.query),
    )


@router.get("/Holidays/{country}", response_class=HTMLResponse, include_in_schema=False)
async def holidays_country_page(
    country: str,
    request: Request,
    injector: SeoInjector = Depends(get_injector),
    settings: Settings = Depends(get_settings_dep),
) -> HTMLResponse:
    return await _serve(
        request,
        injector,
        settings,
        lambda: injector.render_destination(country, request.url.query),
        prerendered=("destinations", country),
    )


@router.get("/Holidays/{country}/{slug}", response_class=HTMLResponse, include_in_schema=False)
async def holidays_package_page(
    country: str,
    slug: str,
    request: Request,
    injector: SeoInjector = Depends(get_injector),
    settings: Settings = Depends(get_settings_dep),
) -> HTMLResponse:
    return await _serve(
        request,
        injector,
        settings,
        lambda: injector.render_package(slug, request.url.query),
        prerendered=("packages", slug),
    )


@router.get("/blog/{slug}", response_class=HTMLResponse, include_in_schema=False)
async def blog_post_page(
    slug: str,
    request: Request,
    injector: SeoInjector = Depends(get_injector),
    settings: Settings = Depends(get_settings_dep),
) -> HTMLResponse:
    return await _serve(
        request,
        injector,
        settings,
        lambda: injector.render_blog_post(slug, request.url.query),
    )


async def static_page(
    request: Request,
    injector: SeoInjector = Depends(get_injector),
    settings: Settings = Depends(get_settings_dep),
) -> HTMLResponse:
    path = request.url.path
    return await _serve(request, injector, settings, lambda: injector.render_static_page(path))


# The static table's paths do not depend on the site name
for _path in static_pages(""):
    router.add_api_route(
        _path, static_page, methods=["GET"], response_class=HTMLResponse, include_in_schema=False
    )
