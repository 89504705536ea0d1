import logging
import logging.config

from fastapi import Depends, FastAPI, Request
from fastapi.responses import HTMLResponse, JSONResponse
from fastapi.staticfiles import StaticFiles
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from holidayseo.config import Settings, get_settings
from holidayseo.dependencies import build_injector, get_injector, get_settings_dep
from holidayseo.routers.machine import limiter, router as machine_router
from holidayseo.routers.pages import noindex_response, router as pages_router, spa_shell
from holidayseo.services.canonical import should_noindex
from holidayseo.services.injector import SeoInjector

logging.config.dictConfig(
    {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "json": {
                "format": '{"time": "%(asctime)s", "level": "%(levelname)s", "logger": "%(name)s", "message": "%(message)s"}',
            },
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "formatter": "json",
            },
        },
        "root": {"level": "INFO", "handlers": ["console"]},
    }
)

logger = logging.getLogger(__name__)

app = FastAPI(
    title="Holiday SEO – Crawler-ready SPA pages",
    description="Serves the travel SPA shell with injected meta tags, structured data and crawlable content.",
    version="1.0.0",
)


def configure_state(application: FastAPI, settings: Settings) -> None:
    """Build the shared collaborators and attach them to *application*.state."""
    injector = build_injector(settings)
    application.state.settings = settings
    application.state.store = injector.resolver.store
    application.state.tour_api = injector.resolver.tour_api
    application.state.cache = injector.cache
    application.state.injector = injector


settings = get_settings()
configure_state(app, settings)
logger.info(
    "SEO configured",
    extra={
        "app_env": settings.app_env,
        "seo_enabled": settings.seo_enabled,
        "prerender_enabled": settings.prerender_enabled,
        "sitemap_enabled": settings.sitemap_enabled,
        "feeds_enabled": settings.feeds_enabled,
        "canonical_host": settings.canonical_host,
    },
)

# Rate-limiting state
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)


@app.exception_handler(Exception)
async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled exception for %s", request.url)
    return JSONResponse(status_code=500, content={"detail": "An unexpected error occurred."})


@app.get("/health", summary="Health check")
async def health(request: Request) -> dict:
    return {"status": "ok", "cache": request.app.state.cache.stats()["size"]}


app.include_router(machine_router)
app.include_router(pages_router)

_assets_dir = settings.template_path.parent / "assets"
if _assets_dir.is_dir():
    app.mount("/assets", StaticFiles(directory=_assets_dir), name="assets")


# Registered last so every explicit route wins
@app.get("/{full_path:path}", response_class=HTMLResponse, include_in_schema=False)
async def spa_fallback(
    full_path: str,
    injector: SeoInjector = Depends(get_injector),
    settings: Settings = Depends(get_settings_dep),
) -> HTMLResponse:
    path = "/" + full_path
    if should_noindex(path):
        return noindex_response(path, injector, settings)
    return spa_shell(injector)
