"""Per-page SEO injection: cache → resolve → build → mutate → cache.

:class:`SeoInjector` owns one ``render_*`` coroutine per content kind.  Each
returns an :class:`InjectionResult`; ``error`` is set whenever the page could
not be enriched, and ``html`` is then the unmodified SPA shell.  Only a missing
or unreadable shell raises (:class:`~holidayseo.errors.TemplateReadError`).
Canonical URLs are built from the content id, never from the request path.
"""

import logging
from pathlib import Path
from typing import Callable, NamedTuple, Optional

from holidayseo.config import Settings
from holidayseo.errors import TemplateReadError
from holidayseo.services import fragments, jsonld, meta
from holidayseo.services.cache import ResponseCache, cache_key
from holidayseo.services.canonical import canonical_url, has_tracking_params
from holidayseo.services.faqs import generate_destination_faqs, generate_package_faqs
from holidayseo.services.mutator import inject, parse_document, replace_head_tags
from holidayseo.services.resolver import ContentResolver, Resolution
from holidayseo.services.static_pages import static_pages
from holidayseo.services.text import normalize_slug

logger = logging.getLogger(__name__)

HOLIDAY_DEALS_FAQ_LIMIT = 8
NOINDEX_ROBOTS = "noindex, follow"


class InjectionResult(NamedTuple):
    html: str
    from_cache: bool = False
    error: Optional[str] = None

    @property
    def injected(self) -> bool:
        return self.error is None


class _Page(NamedTuple):
    head: str
    body: str
    noscript: Optional[str] = None


class SeoInjector:
    def __init__(self, settings: Settings, resolver: ContentResolver, cache: ResponseCache):
        self.settings = settings
        self.resolver = resolver
        self.cache = cache
        self.host = settings.canonical_host.rstrip("/")
        self.site_name = settings.site_name
        self.pages = static_pages(settings.site_name)

    @property
    def default_image(self) -> str:
        return f"{self.host}/og-image.jpg"

    def load_template(self) -> str:
        """Read the SPA shell.

        Raises:
            TemplateReadError: when the file is missing or unreadable.
        """
        path = Path(self.settings.template_path)
        try:
            return path.read_text(encoding="utf-8")
        except OSError as exc:
            raise TemplateReadError(f"Could not read template {path}: {exc}") from exc

    def _url(self, path: str) -> str:
        return canonical_url(self.host, path)

    def _jsonld(self, *blocks: Optional[dict]) -> str:
        return "\n".join(jsonld.render_jsonld(block) for block in blocks if block)

    # ── Pipeline ─────────────────────────────────────────────────────────────

    async def _render(
        self,
        key: str,
        resolve: Callable,
        build: Callable,
        query: Optional[str] = None,
    ) -> InjectionResult:
        """Shared pipeline: *resolve* is awaited, *build* turns its value into a :class:`_Page`."""
        # Tracking-parameter variants get a robots tag and so are never cached
        cacheable = not has_tracking_params(query)

        if cacheable:
            cached = self.cache.get(key)
            if cached is not None:
                return InjectionResult(cached, from_cache=True)

        template = self.load_template()
        resolution: Resolution = await resolve()
        if not resolution.found:
            logger.info("SEO: %s not injected (%s)", key, resolution.status, extra={"error": resolution.error})
            return InjectionResult(template, error=resolution.error or resolution.status)

        try:
            page: _Page = await build(resolution.value)
            head = page.head
            if not cacheable:
                head += f'\n<meta name="robots" content="{NOINDEX_ROBOTS}" />'
            html = inject(template, head, page.body, page.noscript, self.settings.mount_element_id)
        except Exception as exc:
            logger.exception("SEO: failed to build %s", key)
            return InjectionResult(template, error=str(exc))

        if cacheable:
            self.cache.set(key, html)
        return InjectionResult(html)

    # ── Tours ────────────────────────────────────────────────────────────────

    async def render_tour(self, tour_id: str, query: Optional[str] = None) -> InjectionResult:
        url = self._url(f"/tour/{tour_id}")

        async def build(view) -> _Page:
            head = "\n".join(
                [
                    meta.tour_meta(view, url, self.site_name),
                    self._jsonld(
                        jsonld.tourist_trip(view, url, site_name=self.site_name, host=self.host),
                        jsonld.breadcrumb_list(
                            [("Home", self.host), ("Tours", f"{self.host}/tours"), (view.title, url)]
                        ),
                        jsonld.organization(self.site_name, self.host),
                    ),
                ]
            )
            return _Page(head, fragments.tour_article(view, self.host))

        return await self._render(
            cache_key("tour", tour_id), lambda: self.resolver.resolve_tour(tour_id), build, query
        )

    # ── Packages ─────────────────────────────────────────────────────────────

    async def render_package(self, slug: str, query: Optional[str] = None) -> InjectionResult:
        url = self._url(f"/packages/{slug}")

        async def build(view) -> _Page:
            pkg = view.package
            faqs = generate_package_faqs(pkg)
            related = await self.resolver.related_packages(pkg)

            head = "\n".join(
                [
                    meta.package_meta(view, url, self.site_name),
                    self._jsonld(
                        jsonld.tourist_trip(view, url, site_name=self.site_name, host=self.host),
                        jsonld.breadcrumb_list(
                            [("Home", self.host), ("Packages", f"{self.host}/packages"), (view.title, url)]
                        ),
                        jsonld.faq_page(faqs),
                    ),
                ]
            )
            body = fragments.package_article(
                view, fragments.build_all_fragments(pkg, faqs, related, self.host), self.host
            )
            return _Page(head, body)

        return await self._render(
            cache_key("package", slug), lambda: self.resolver.resolve_package(slug), build, query
        )

    # ── Destinations ─────────────────────────────────────────────────────────

    async def render_destination(self, slug: str, query: Optional[str] = None) -> InjectionResult:
        url = self._url(f"/destinations/{normalize_slug(slug)}")

        async def build(agg) -> _Page:
            faqs = generate_destination_faqs(agg, self.settings.contact_email)
            head = "\n".join(
                [
                    meta.destination_meta(agg, url, self.site_name),
                    self._jsonld(
                        jsonld.tourist_destination(agg, url),
                        jsonld.breadcrumb_list(
                            [
                                ("Home", self.host),
                                ("Destinations", f"{self.host}/destinations"),
                                (agg.destination_name, url),
                            ]
                        ),
                        jsonld.faq_page(faqs),
                        jsonld.package_item_list(agg, self.host),
                    ),
                ]
            )
            return _Page(
                head,
                fragments.destination_article(agg, faqs, self.host),
                fragments.destination_noscript_html(agg, self.host),
            )

        return await self._render(
            cache_key("destination", slug), lambda: self.resolver.resolve_destination(slug), build, query
        )

    async def render_holiday_deals(self, slug: str, query: Optional[str] = None) -> InjectionResult:
        destination_url = f"{self.host}/destinations/{normalize_slug(slug)}"
        url = f"{destination_url}/holiday-deals"

        async def build(agg) -> _Page:
            faqs = generate_destination_faqs(agg, self.settings.contact_email)[:HOLIDAY_DEALS_FAQ_LIMIT]
            head = "\n".join(
                [
                    meta.holiday_deals_meta(agg, url, self.site_name, self.settings.contact_email),
                    self._jsonld(
                        jsonld.collection_page(
                            f"{agg.destination_name} Holiday Deals",
                            f"{agg.destination_name} holiday deals from the UK.",
                            url,
                            agg.destination_name,
                        ),
                        jsonld.breadcrumb_list(
                            [
                                ("Home", self.host),
                                ("Destinations", f"{self.host}/destinations"),
                                (f"{agg.destination_name} Holidays", destination_url),
                                ("Holiday Deals", url),
                            ]
                        ),
                        jsonld.faq_page(faqs),
                        jsonld.package_item_list(agg, self.host),
                    ),
                ]
            )
            body = fragments.holiday_deals_article(agg, faqs, self.host, self.settings.contact_email)
            return _Page(head, body)

        return await self._render(
            cache_key("holiday-deals", slug), lambda: self.resolver.resolve_destination(slug), build, query
        )

    # ── Blog ─────────────────────────────────────────────────────────────────

    async def render_blog_post(self, slug: str, query: Optional[str] = None) -> InjectionResult:
        url = self._url(f"/blog/{slug}")

        async def build(view) -> _Page:
            image = view.image_url or self.default_image
            head = "\n".join(
                [
                    meta.blog_meta(view, url, self.site_name, self.default_image),
                    self._jsonld(
                        jsonld.article(view, url, image, site_name=self.site_name, host=self.host),
                        jsonld.breadcrumb_list(
                            [("Home", self.host), ("Blog", f"{self.host}/blog"), (view.title, url)]
                        ),
                        jsonld.organization(self.site_name, self.host),
                    ),
                ]
            )
            return _Page(head, fragments.blog_article(view, self.host))

        return await self._render(
            cache_key("blog", slug), lambda: self.resolver.resolve_blog(slug), build, query
        )

    # ── Static and noindex pages ─────────────────────────────────────────────

    async def render_static_page(self, path: str) -> InjectionResult:
        key = cache_key("static", path)
        cached = self.cache.get(key)
        if cached is not None:
            return InjectionResult(cached, from_cache=True)

        template = self.load_template()
        page = self.pages.get(path)
        if page is None:
            return InjectionResult(template, error=f"Unknown static page {path}")

        # Only the FAQ page carries editorial questions
        faqs = await self.resolver.site_faqs() if path == "/faq" else []

        head = "\n".join(
            [
                meta.static_meta(page, self._url(path), self.site_name, self.default_image),
                self._jsonld(jsonld.organization(self.site_name, self.host), jsonld.faq_page(faqs)),
            ]
        )
        body = fragments.static_article(page, self.host, faqs)
        html = inject(template, head, body, mount_id=self.settings.mount_element_id)
        self.cache.set(key, html)
        return InjectionResult(html)

    def render_noindex(self, title: str, description: str, path: str) -> InjectionResult:
        """Shell with a ``noindex, follow`` head and no body content."""
        template = self.load_template()
        soup = parse_document(template)
        replace_head_tags(soup, meta.noindex_meta(title, description, self._url(path)))
        return InjectionResult(str(soup))
