"""Tests for the two-phase shell mutation."""

from bs4 import BeautifulSoup

from holidayseo.services.mutator import (
    NOSCRIPT_CONTAINER_ID,
    OFFSCREEN_STYLE,
    SEO_CONTAINER_ID,
    inject,
    insert_before_element,
    parse_document,
    replace_head_tags,
)
from helpers import TEMPLATE

HEAD = "\n".join(
    [
        "<title>Amalfi Coast Escape | Holidays</title>",
        '<meta name="description" content="Seven nights on the coast" />',
        '<link rel="canonical" href="https://holidays.example.com/packages/amalfi" />',
        '<meta property="og:title" content="Amalfi Coast Escape" />',
    ]
)
BODY = "<article><h1>Amalfi Coast Escape</h1></article>"


def _parse(html):
    return BeautifulSoup(html, "html.parser")


class TestReplaceHeadTags:
    def test_shell_tags_replaced(self):
        soup = parse_document(TEMPLATE)
        replace_head_tags(soup, HEAD)

        assert [t.get_text() for t in soup.find_all("title")] == ["Amalfi Coast Escape | Holidays"]
        canonicals = soup.find_all("link", rel="canonical")
        assert [c["href"] for c in canonicals] == ["https://holidays.example.com/packages/amalfi"]
        assert soup.find("meta", attrs={"name": "twitter:card"}) is None
        assert len(soup.find_all("meta", attrs={"name": "description"})) == 1

    def test_unrelated_head_tags_kept(self):
        soup = parse_document(TEMPLATE)
        replace_head_tags(soup, HEAD)
        assert soup.find("meta", attrs={"charset": "UTF-8"}) is not None

    def test_block_appended_at_end_of_head(self):
        soup = parse_document(TEMPLATE)
        replace_head_tags(soup, HEAD + '\n<script type="application/ld+json">{}</script>')
        last = [child for child in soup.head.children if getattr(child, "name", None)][-1]
        assert last.name == "script"


class TestInsertBeforeElement:
    def test_missing_target(self):
        soup = parse_document(TEMPLATE)
        assert insert_before_element(soup, "nope", soup.new_tag("div")) is False

    def test_inserted_as_sibling(self):
        soup = parse_document(TEMPLATE)
        marker = soup.new_tag("span", attrs={"id": "marker"})
        assert insert_before_element(soup, "root", marker) is True
        assert soup.find(id="root").find_previous_sibling("span")["id"] == "marker"


class TestInject:
    def test_container_is_sibling_of_mount(self):
        soup = _parse(inject(TEMPLATE, HEAD, BODY))
        root = soup.find(id="root")
        container = soup.find(id=SEO_CONTAINER_ID)

        assert container.parent is root.parent
        assert root.find(id=SEO_CONTAINER_ID) is None
        assert root.contents == []
        assert container.h1.get_text() == "Amalfi Coast Escape"

    def test_container_hidden_off_screen(self):
        container = _parse(inject(TEMPLATE, HEAD, BODY)).find(id=SEO_CONTAINER_ID)
        assert container["style"] == OFFSCREEN_STYLE
        assert container["aria-hidden"] == "true"
        assert "display:none" not in container["style"]

    def test_noscript_repeats_body_by_default(self):
        soup = _parse(inject(TEMPLATE, HEAD, BODY))
        noscript = soup.find("noscript")
        assert noscript is not None
        assert noscript.find_next_sibling(id="root") is not None
        assert "Amalfi Coast Escape" in str(noscript)
        assert NOSCRIPT_CONTAINER_ID in str(noscript)

    def test_noscript_override(self):
        soup = _parse(inject(TEMPLATE, HEAD, BODY, noscript="<p>Short version</p>"))
        assert "Short version" in str(soup.find("noscript"))
        assert "Short version" not in str(soup.find(id=SEO_CONTAINER_ID))

    def test_order_is_container_noscript_mount(self):
        soup = _parse(inject(TEMPLATE, HEAD, BODY))
        order = [
            child.get("id") or child.name
            for child in soup.body.children
            if getattr(child, "name", None)
        ]
        assert order[:3] == [SEO_CONTAINER_ID, "noscript", "root"]

    def test_missing_mount_applies_head_only(self, caplog):
        template = TEMPLATE.replace('<div id="root"></div>', '<div id="app"></div>')
        with caplog.at_level("WARNING"):
            html = inject(template, HEAD, BODY)
        soup = _parse(html)
        assert soup.title.get_text() == "Amalfi Coast Escape | Holidays"
        assert soup.find(id=SEO_CONTAINER_ID) is None
        assert "Mount element #root not found" in caplog.text

    def test_custom_mount_id(self):
        template = TEMPLATE.replace('<div id="root"></div>', '<div id="app"></div>')
        soup = _parse(inject(template, HEAD, BODY, mount_id="app"))
        assert soup.find(id=SEO_CONTAINER_ID).find_next_sibling(id="app") is not None

    def test_scripts_after_mount_untouched(self):
        soup = _parse(inject(TEMPLATE, HEAD, BODY))
        assert soup.find("script", src="/src/main.tsx") is not None
