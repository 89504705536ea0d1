"""End-to-end tests for the HTML, sitemap, feed and discovery routes.

``app.state`` is rebuilt for every test from an in-memory store and a
template written to ``tmp_path``, so no data files or network are needed.
"""

import xml.etree.ElementTree as ElementTree

import pytest
from bs4 import BeautifulSoup
from fastapi.testclient import TestClient

from holidayseo.dependencies import build_injector
from holidayseo.main import app
from holidayseo.models.blog import BlogPost
from holidayseo.models.product import Product
from helpers import TEMPLATE, FakeStore, make_package, make_settings

HOST = "https://holidays.example.com"
GOOGLEBOT = "Mozilla/5.0 (compatible; Googlebot/2.1; +http://www.google.com/bot.html)"
BROWSER = "Mozilla/5.0 (X11; Linux x86_64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/120.0 Safari/537.36"
SITEMAP_NS = {"sm": "http://www.sitemaps.org/schemas/sitemap/0.9"}


def _canonical(html):
    return BeautifulSoup(html, "html.parser").find("link", rel="canonical")["href"]


def _store():
    return FakeStore(
        packages=[
            make_package(),
            make_package(id=2, slug="lake-como", title="Lake Como", price=950),
            make_package(id=3, slug="draft", is_published=False),
        ],
        products={"GBP": [Product(id=9, title="Petra by Night", price=45)]},
        posts=[BlogPost(id=1, title="Packing Tips", slug="packing-tips", is_published=True)],
    )


@pytest.fixture
def configure(tmp_path):
    """Install fresh settings, store and injector on ``app.state``; restored afterwards."""
    saved = {name: getattr(app.state, name) for name in ("settings", "store", "injector", "cache")}

    def _configure(store=None, **overrides):
        settings = make_settings(tmp_path, **overrides)
        store = store if store is not None else _store()
        injector = build_injector(settings, store=store)
        app.state.settings = settings
        app.state.store = store
        app.state.injector = injector
        app.state.cache = injector.cache
        return injector

    app.state.limiter._storage.reset()
    yield _configure
    for name, value in saved.items():
        setattr(app.state, name, value)


@pytest.fixture
def client():
    return TestClient(app)


# ---------------------------------------------------------------------------
# HTML pages
# ---------------------------------------------------------------------------

class TestPackagePages:
    def test_injected_in_production(self, configure, client):
        configure()
        response = client.get("/packages/amalfi-coast-escape", headers={"User-Agent": BROWSER})

        assert response.status_code == 200
        assert response.headers["X-SEO-Injected"] == "true"
        assert 'id="seo-content"' in response.text
        assert "Amalfi Coast Escape" in response.text

    def test_unknown_slug_serves_template(self, configure, client):
        configure()
        response = client.get("/packages/unknown-slug")

        assert response.status_code == 200
        assert "X-SEO-Injected" not in response.headers
        assert response.text == TEMPLATE

    def test_holidays_country_path(self, configure, client):
        configure()
        response = client.get("/Holidays/italy/lake-como")
        assert response.headers["X-SEO-Injected"] == "true"
        assert "Lake Como" in response.text

    def test_tracking_query_is_noindex(self, configure, client):
        configure()
        response = client.get("/packages/amalfi-coast-escape?utm_source=newsletter")
        assert 'content="noindex, follow"' in response.text

    @pytest.mark.parametrize(
        "paths",
        [
            ("/Holidays/italy/amalfi-coast-escape", "/packages/amalfi-coast-escape"),
            ("/packages/amalfi-coast-escape", "/Holidays/italy/amalfi-coast-escape"),
        ],
    )
    def test_canonical_independent_of_route_order(self, configure, client, paths):
        configure()
        for path in paths:
            response = client.get(path)
            assert response.headers["X-SEO-Injected"] == "true", path
            assert _canonical(response.text) == f"{HOST}/packages/amalfi-coast-escape", path


class TestBotGate:
    def test_browser_in_development_gets_shell(self, configure, client):
        configure(app_env="development")
        response = client.get("/packages/amalfi-coast-escape", headers={"User-Agent": BROWSER})
        assert "X-SEO-Injected" not in response.headers
        assert response.text == TEMPLATE

    def test_crawler_in_development_is_injected(self, configure, client):
        configure(app_env="development")
        response = client.get("/packages/amalfi-coast-escape", headers={"User-Agent": GOOGLEBOT})
        assert response.headers["X-SEO-Injected"] == "true"

    def test_seo_disabled(self, configure, client):
        configure(seo_enabled=False)
        response = client.get("/packages/amalfi-coast-escape", headers={"User-Agent": GOOGLEBOT})
        assert "X-SEO-Injected" not in response.headers
        assert response.text == TEMPLATE


class TestPrerendered:
    def test_prerendered_file_wins(self, configure, client, tmp_path):
        page = tmp_path / "prerendered" / "packages" / "amalfi-coast-escape.html"
        page.parent.mkdir(parents=True)
        page.write_text("<html><body>prerendered</body></html>", encoding="utf-8")
        configure(prerender_enabled=True)

        response = client.get("/packages/amalfi-coast-escape")
        assert response.headers["X-Prerendered"] == "true"
        assert "prerendered" in response.text

    def test_missing_file_falls_through(self, configure, client):
        configure(prerender_enabled=True)
        response = client.get("/packages/amalfi-coast-escape")
        assert "X-Prerendered" not in response.headers
        assert response.headers["X-SEO-Injected"] == "true"

    def test_ignored_when_disabled(self, configure, client, tmp_path):
        page = tmp_path / "prerendered" / "packages" / "amalfi-coast-escape.html"
        page.parent.mkdir(parents=True)
        page.write_text("stale", encoding="utf-8")
        configure()
        assert "X-Prerendered" not in client.get("/packages/amalfi-coast-escape").headers


class TestOtherPages:
    def test_tour(self, configure, client):
        configure()
        response = client.get("/tour/9")
        assert response.headers["X-SEO-Injected"] == "true"
        assert "Petra by Night" in response.text

    def test_destination_routes(self, configure, client):
        configure()
        for path in ("/destinations/italy", "/Holidays/italy", "/destinations/italy/holiday-deals"):
            response = client.get(path)
            assert response.headers["X-SEO-Injected"] == "true", path

    @pytest.mark.parametrize(
        "paths",
        [
            ("/Holidays/italy", "/destinations/italy"),
            ("/destinations/italy", "/Holidays/italy"),
            ("/Holidays/Italy", "/destinations/italy"),
        ],
    )
    def test_destination_canonical_independent_of_route_order(self, configure, client, paths):
        configure()
        for path in paths:
            assert _canonical(client.get(path).text) == f"{HOST}/destinations/italy", path

    def test_holiday_deals_canonical(self, configure, client):
        configure()
        response = client.get("/destinations/italy/holiday-deals")
        assert _canonical(response.text) == f"{HOST}/destinations/italy/holiday-deals"

    def test_blog_post(self, configure, client):
        configure()
        response = client.get("/blog/packing-tips")
        assert response.headers["X-SEO-Injected"] == "true"

    def test_static_page(self, configure, client):
        configure()
        response = client.get("/contact")
        assert response.headers["X-SEO-Injected"] == "true"
        assert "Contact Us | Flights and Packages" in response.text

    def test_ai_search_is_noindex(self, configure, client):
        configure()
        response = client.get("/ai-search", headers={"User-Agent": BROWSER})
        assert response.headers["X-Robots-Tag"] == "noindex, follow"
        assert response.headers["X-SEO-Injected"] == "true"
        assert 'content="noindex, follow"' in response.text
        assert 'id="seo-content"' not in response.text

    @pytest.mark.parametrize(
        "path, title",
        [
            ("/checkout", "Checkout | Flights and Packages"),
            ("/checkout/payment", "Checkout | Flights and Packages"),
            ("/admin/users", "Admin | Flights and Packages"),
            ("/2fa-setup", "Two-Factor Authentication Setup | Flights and Packages"),
        ],
    )
    def test_private_sections_are_noindex(self, configure, client, path, title):
        configure()
        response = client.get(path, headers={"User-Agent": BROWSER})
        assert response.status_code == 200
        assert response.headers["X-Robots-Tag"] == "noindex, follow"
        soup = BeautifulSoup(response.text, "html.parser")
        assert soup.find("meta", attrs={"name": "robots"})["content"] == "noindex, follow"
        assert soup.title.get_text() == title
        assert soup.find(id="seo-content") is None

    def test_private_section_with_seo_disabled(self, configure, client):
        configure(seo_enabled=False)
        response = client.get("/checkout")
        assert "X-Robots-Tag" not in response.headers
        assert response.text == TEMPLATE

    def test_lookalike_path_is_not_private(self, configure, client):
        configure()
        response = client.get("/administration")
        assert "X-Robots-Tag" not in response.headers
        assert response.text == TEMPLATE

    def test_unmatched_path_serves_shell(self, configure, client):
        configure()
        response = client.get("/account/bookings")
        assert response.status_code == 200
        assert response.text == TEMPLATE

    def test_missing_template_is_server_error(self, configure, tmp_path):
        configure(template_path=tmp_path / "gone.html")
        response = TestClient(app, raise_server_exceptions=False).get("/packages/amalfi-coast-escape")
        assert response.status_code == 500

    def test_health(self, configure, client):
        configure()
        client.get("/packages/amalfi-coast-escape")
        assert client.get("/health").json() == {"status": "ok", "cache": 1}


# ---------------------------------------------------------------------------
# Machine-readable routes
# ---------------------------------------------------------------------------

class TestSitemapRoutes:
    def test_index(self, configure, client):
        configure()
        response = client.get("/sitemap.xml")
        assert response.headers["content-type"].startswith("application/xml")
        locs = [el.text for el in ElementTree.fromstring(response.content).iterfind(".//sm:loc", SITEMAP_NS)]
        assert locs[0] == f"{HOST}/sitemaps/pages.xml"
        assert len(locs) == 5

    def test_packages_urlset(self, configure, client):
        configure()
        root = ElementTree.fromstring(client.get("/sitemaps/packages.xml").content)
        locs = [el.text for el in root.iterfind(".//sm:loc", SITEMAP_NS)]
        assert f"{HOST}/packages/amalfi-coast-escape" in locs
        assert f"{HOST}/Holidays/italy/lake-como" in locs
        assert not any("draft" in loc for loc in locs)

    def test_unknown_sitemap(self, configure, client):
        configure()
        assert client.get("/sitemaps/widgets.xml").status_code == 404

    def test_disabled(self, configure, client):
        configure(sitemap_enabled=False)
        assert client.get("/sitemap.xml").status_code == 404
        assert client.get("/sitemaps/pages.xml").status_code == 404

    def test_store_failure_still_valid_xml(self, configure, client):
        configure(store=FakeStore(failures={"get_all_flight_packages": RuntimeError("db down")}))
        response = client.get("/sitemaps/packages.xml")
        assert response.status_code == 200
        assert ElementTree.fromstring(response.content).findall("sm:url", SITEMAP_NS) == []


class TestFeedRoutes:
    def test_packages_feed(self, configure, client):
        configure()
        data = client.get("/feed/packages.json").json()
        assert data["version"] == "1.0"
        assert data["title"] == "Flights and Packages - Packages"
        assert [item["slug"] for item in data["items"]] == ["amalfi-coast-escape", "lake-como"]

    def test_tours_feed_includes_products(self, configure, client):
        configure()
        slugs = [item["slug"] for item in client.get("/feed/tours.json").json()["items"]]
        assert slugs == ["amalfi-coast-escape", "lake-como", "9"]

    def test_destinations_feed(self, configure, client):
        configure()
        items = client.get("/feed/destinations.json").json()["items"]
        assert items == [
            {
                "id": "italy",
                "slug": "italy",
                "name": "Italy",
                "package_count": 2,
                "page_url": f"{HOST}/destinations/italy",
                "last_updated": items[0]["last_updated"],
            }
        ]

    def test_unknown_and_disabled(self, configure, client):
        configure(feeds_enabled=False)
        assert client.get("/feed/packages.json").status_code == 404
        configure()
        assert client.get("/feed/widgets.json").status_code == 404


class TestDiscoveryRoutes:
    def test_robots(self, configure, client):
        configure()
        text = client.get("/robots.txt").text
        assert "Disallow: /checkout" in text
        assert f"Sitemap: {HOST}/sitemap.xml" in text

    @pytest.mark.parametrize("path", ["/llm.txt", "/ai.txt"])
    def test_ai_discovery_files(self, configure, client, path):
        configure()
        response = client.get(path)
        assert response.status_code == 200
        assert response.headers["Cache-Control"] == "public, max-age=86400"
        assert HOST in response.text
