"""Runtime configuration read from the environment (and an optional ``.env``)."""

import os
from functools import lru_cache
from pathlib import Path
from typing import Literal

from dotenv import load_dotenv
from pydantic import BaseModel, Field

load_dotenv()


def _flag(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


class Settings(BaseModel):
    app_env: Literal["production", "development"] = "development"

    # ── Feature switches ─────────────────────────────────────────
    seo_enabled: bool = True
    prerender_enabled: bool = False
    sitemap_enabled: bool = True
    feeds_enabled: bool = True

    # ── Site identity ────────────────────────────────────────────
    canonical_host: str = "https://holidays.flightsandpackages.com"
    site_name: str = "Flights and Packages"
    contact_email: str = "holidayenq@flightsandpackages.com"

    # ── Files ────────────────────────────────────────────────────
    template_path: Path = Path("client/index.html")
    prerendered_dir: Path = Path("prerendered")
    data_dir: Path = Path("data")
    mount_element_id: str = "root"

    # ── Cache ────────────────────────────────────────────────────
    cache_ttl_seconds: int = Field(default=300, ge=0)

    # ── Tour inventory API ───────────────────────────────────────
    primary_currency: str = "GBP"
    secondary_currency: str = "USD"
    tour_api_base_url: str = ""
    tour_api_key: str = ""

    @property
    def is_production(self) -> bool:
        return self.app_env == "production"


@lru_cache
def get_settings() -> Settings:
    """Build :class:`Settings` from the process environment (once per process)."""
    app_env = os.getenv("APP_ENV", "development").strip().lower()
    return Settings(
        app_env="production" if app_env == "production" else "development",
        seo_enabled=_flag("SEO_ENABLED", True),
        prerender_enabled=_flag("PRERENDER_ENABLED", False),
        sitemap_enabled=_flag("SITEMAP_ENABLED", True),
        feeds_enabled=_flag("FEEDS_ENABLED", True),
        canonical_host=os.getenv("CANONICAL_HOST", Settings.model_fields["canonical_host"].default).rstrip("/"),
        site_name=os.getenv("SITE_NAME", Settings.model_fields["site_name"].default),
        contact_email=os.getenv("CONTACT_EMAIL", Settings.model_fields["contact_email"].default),
        template_path=Path(os.getenv("TEMPLATE_PATH", "client/index.html")),
        prerendered_dir=Path(os.getenv("PRERENDERED_DIR", "prerendered")),
        data_dir=Path(os.getenv("DATA_DIR", "data")),
        mount_element_id=os.getenv("MOUNT_ELEMENT_ID", "root"),
        cache_ttl_seconds=int(os.getenv("SEO_CACHE_TTL_SECONDS", "300")),
        primary_currency=os.getenv("PRIMARY_CURRENCY", "GBP"),
        secondary_currency=os.getenv("SECONDARY_CURRENCY", "USD"),
        tour_api_base_url=os.getenv("TOUR_API_BASE_URL", ""),
        tour_api_key=os.getenv("TOUR_API_KEY", ""),
    )
