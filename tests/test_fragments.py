"""Tests for the crawlable HTML fragment builders."""

from bs4 import BeautifulSoup

from holidayseo.models.view import ContentViewModel, FaqItem
from holidayseo.services.aggregate import build_destination_aggregate
from holidayseo.services.fragments import (
    attention_html,
    build_all_fragments,
    destination_article,
    destination_noscript_html,
    exclusions_html,
    faq_html,
    highlights_html,
    holiday_deals_article,
    inclusions_html,
    itinerary_summary_html,
    package_article,
    related_html,
    static_article,
    suitability_html,
)
from holidayseo.services.static_pages import static_pages
from helpers import make_package

HOST = "https://holidays.example.com"


def _items(html):
    return [li.get_text() for li in BeautifulSoup(html, "html.parser").find_all("li")]


class TestPackageSections:
    def test_empty_sections_render_nothing(self):
        pkg = make_package()
        assert inclusions_html(pkg) == ""
        assert exclusions_html(pkg) == ""
        assert highlights_html(pkg) == ""
        assert itinerary_summary_html(pkg) == ""
        assert suitability_html(pkg) == ""
        assert attention_html(pkg) == ""
        assert faq_html([]) == ""
        assert related_html([], "x", HOST) == ""

    def test_inclusions_capped_and_escaped(self):
        pkg = make_package(whats_included=[f"Item <{i}>" for i in range(10)])
        html = inclusions_html(pkg)
        assert "&lt;0&gt;" in html
        assert "<0>" not in html
        assert len(_items(html)) == 7

    def test_exclusions_from_list_markup(self):
        pkg = make_package(excluded="<ul><li>Travel insurance</li><li>Visa fees</li></ul>")
        assert _items(exclusions_html(pkg)) == ["Travel insurance", "Visa fees"]

    def test_itinerary_summary_mentions_remaining_days(self):
        days = [{"day": i, "title": f"Stop {i}", "description": "<p>Sightseeing</p>"} for i in range(1, 9)]
        html = itinerary_summary_html(make_package(itinerary=days))
        items = _items(html)
        assert len(items) == 6
        assert items[0] == "Day 1: Stop 1 - Sightseeing..."
        assert items[-1] == "...and 3 more days"

    def test_suitability_merges_tags(self):
        html = suitability_html(make_package(tags=["Safari", "Wildlife", "Unknown"]))
        assert "Wildlife enthusiasts" in html
        assert html.count("Nature lovers") == 1
        assert "May Not Be Suitable For" in html
        assert "Young children under 5" in html

    def test_faq_section_capped_at_five(self):
        faqs = [FaqItem(question=f"Q{i}?", answer=f"A{i}") for i in range(8)]
        soup = BeautifulSoup(faq_html(faqs), "html.parser")
        assert len(soup.find_all("h3")) == 5

    def test_related_excludes_current_and_unpublished(self):
        related = [
            make_package(id=2, slug="current"),
            make_package(id=3, slug="draft", is_published=False),
            make_package(id=4, slug="lakes", title="Italian Lakes", price=950),
            make_package(id=5, slug="rome", title="Rome", price=None),
        ]
        html = related_html(related, "current", HOST)
        assert _items(html) == ["Italian Lakes - From £950", "Rome - From TBC"]
        assert f'href="{HOST}/packages/lakes"' in html

    def test_attention_length_window(self):
        assert attention_html(make_package(attention="<p>Short</p>")) == ""
        html = attention_html(make_package(attention="x" * 600))
        assert "x" * 500 in html
        assert "x" * 501 not in html

    def test_build_all_in_page_order(self):
        pkg = make_package(
            whats_included=["Return flights"],
            highlights=["Boat trip to Capri"],
            attention="<p>Passports must be valid for six months.</p>",
        )
        html = build_all_fragments(pkg, [FaqItem(question="Q?", answer="A")], [], HOST)
        labels = [s["aria-label"] for s in BeautifulSoup(html, "html.parser").find_all("section")]
        assert labels == ["What is included", "Tour Highlights", "Frequently Asked Questions", "Important Information"]


class TestArticles:
    def test_package_article_breadcrumb_and_offer(self):
        view = ContentViewModel(
            kind="package",
            id=1,
            slug="amalfi",
            title="Amalfi & Capri",
            description="Coastal escape",
            destination_name="Italy",
            duration_text="7 nights",
            price_from=1200,
        )
        html = package_article(view, "", HOST)
        soup = BeautifulSoup(html, "html.parser")
        assert soup.h1.get_text() == "Amalfi & Capri"
        assert soup.find(itemprop="price").get_text() == "1,200"
        links = [a["href"] for a in soup.nav.find_all("a")]
        assert links == [f"{HOST}/", f"{HOST}/packages", f"{HOST}/destinations/italy"]

    def test_multi_word_destination_breadcrumb(self):
        view = ContentViewModel(kind="package", id=2, slug="tea-trails", title="Tea Trails", destination_name="Sri Lanka")
        soup = BeautifulSoup(package_article(view, "", HOST), "html.parser")
        assert soup.nav.find_all("a")[-1]["href"] == f"{HOST}/destinations/sri-lanka"

    def test_no_offer_without_price(self):
        view = ContentViewModel(kind="package", id=1, slug="a", title="A")
        assert 'itemprop="offers"' not in package_article(view, "", HOST)

    def test_static_article_lists_faqs_and_nav(self):
        page = static_pages("Holidays")["/faq"]
        html = static_article(page, HOST, [FaqItem(question="Can I pay in instalments?", answer="<p>Yes</p>")])
        soup = BeautifulSoup(html, "html.parser")
        assert soup.details.summary.get_text() == "Can I pay in instalments?"
        assert soup.details.p.get_text() == "Yes"
        assert len(soup.nav.find_all("a")) == 6


class TestDestinationArticles:
    def _aggregate(self, count=7):
        packages = [make_package(id=i, slug=f"p{i}", title=f"Trip {i}", tags=["Beach"]) for i in range(count)]
        return build_destination_aggregate(packages, "italy")

    def test_full_article(self):
        faqs = [FaqItem(question="When to go?", answer="Any time")]
        html = destination_article(self._aggregate(), faqs, HOST)
        soup = BeautifulSoup(html, "html.parser")
        assert soup.h1.get_text() == "Italy Holidays"
        assert "5–7 nights: 7 packages" in html
        assert f'href="{HOST}/Holidays/italy/p0"' in html
        assert soup.details.summary.get_text() == "When to go?"

    def test_noscript_lists_five_packages(self):
        html = destination_noscript_html(self._aggregate(), HOST)
        soup = BeautifulSoup(html, "html.parser")
        package_links = [a for a in soup.find_all("a") if "/Holidays/" in a["href"]]
        assert len(package_links) == 5

    def test_holiday_deals_article(self):
        html = holiday_deals_article(self._aggregate(2), [], HOST, "sales@example.com")
        assert "Italy Holiday Deals &amp; Offers from the UK" in html
        assert 'href="mailto:sales@example.com"' in html
        assert f'href="{HOST}/destinations/italy"' in html
        assert "Trip 1</a> - From £1,200" in html

    def test_multi_word_destination_package_links(self):
        packages = [make_package(slug="tea-trails", category="Sri Lanka")]
        html = destination_article(build_destination_aggregate(packages, "Sri Lanka"), [], HOST)
        assert f'href="{HOST}/Holidays/sri-lanka/tea-trails"' in html
        assert f'href="{HOST}/Holidays/Sri Lanka/tea-trails"' not in html
