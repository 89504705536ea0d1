"""Prerendered pages: lookup at request time and an offline generator.

Files live at ``PRERENDERED_DIR/<type>/<slug>.html`` where *type* is
``packages``, ``destinations`` or ``tours``.  The generator writes package
and destination pages through the same :class:`SeoInjector` pipeline the
live routes use::

    python -m holidayseo.services.prerender --out prerendered
"""

import argparse
import asyncio
import logging
import sys
from pathlib import Path
from typing import Dict, List, Optional, Union

from holidayseo.config import Settings, get_settings
from holidayseo.dependencies import build_injector
from holidayseo.services.injector import SeoInjector
from holidayseo.services.store import ContentStore, JsonFileStore
from holidayseo.services.text import normalize_slug

logger = logging.getLogger(__name__)

PRERENDER_TYPES = ("packages", "destinations", "tours")


def prerendered_path(base_dir: Union[str, Path], page_type: str, slug: str) -> Optional[Path]:
    """Path for one prerendered page, or ``None`` for an unknown type or unsafe slug."""
    if page_type not in PRERENDER_TYPES:
        return None
    if not slug or "/" in slug or "\\" in slug or slug.startswith("."):
        return None
    return Path(base_dir) / page_type / f"{slug}.html"


def read_prerendered(settings: Settings, page_type: str, slug: str) -> Optional[str]:
    """Return the prerendered page when prerendering is enabled and the file exists."""
    if not settings.prerender_enabled:
        return None
    path = prerendered_path(settings.prerendered_dir, page_type, slug)
    if path is None or not path.is_file():
        return None
    try:
        return path.read_text(encoding="utf-8")
    except OSError as exc:
        logger.warning("Prerender: could not read %s – %s", path, exc)
        return None


def _write(path: Path, html: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(html, encoding="utf-8")
    logger.info("Prerender: generated %s", path)


async def generate(injector: SeoInjector, store: ContentStore, out_dir: Union[str, Path]) -> Dict[str, int]:
    """Write every published package and destination page; return counts per type.

    Pages that fail to render are logged and skipped.
    """
    out_dir = Path(out_dir)

    packages = [p for p in await store.get_all_flight_packages() if p.is_published]
    logger.info("Prerender: %d published packages", len(packages))

    counts = {"packages": 0, "destinations": 0}
    for pkg in packages:
        result = await injector.render_package(pkg.slug)
        if not result.injected:
            logger.warning("Prerender: skipped package %s – %s", pkg.slug, result.error)
            continue
        _write(out_dir / "packages" / f"{pkg.slug}.html", result.html)
        counts["packages"] += 1

    destinations: List[str] = []
    for pkg in packages:
        slug = normalize_slug(pkg.category or "")
        if slug and slug not in destinations:
            destinations.append(slug)
    logger.info("Prerender: %d destinations", len(destinations))

    for slug in destinations:
        result = await injector.render_destination(slug)
        if not result.injected:
            logger.warning("Prerender: skipped destination %s – %s", slug, result.error)
            continue
        _write(out_dir / "destinations" / f"{slug}.html", result.html)
        counts["destinations"] += 1

    return counts


def main(argv: Optional[List[str]] = None) -> int:
    settings = get_settings()
    parser = argparse.ArgumentParser(description="Write prerendered package and destination pages.")
    parser.add_argument("--out", type=Path, default=settings.prerendered_dir, help="output directory")
    parser.add_argument("--data-dir", type=Path, default=settings.data_dir, help="JSON data directory")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    store = JsonFileStore(args.data_dir)
    injector = build_injector(settings, store=store)
    counts = asyncio.run(generate(injector, store, args.out))
    logger.info("Prerender: complete (%s)", counts)
    return 0


if __name__ == "__main__":
    sys.exit(main())
