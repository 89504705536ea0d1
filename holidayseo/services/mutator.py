"""Parsed-tree edits on the SPA shell.

The shell is parsed with BeautifulSoup and changed in two phases:

1. :func:`replace_head_tags` drops the shell's own title, description,
   canonical and social tags and appends the generated block to ``<head>``.
2. :func:`insert_before_element` places the hidden ``#seo-content`` container
   and its ``<noscript>`` copy *before* the client mount element.  The client
   framework replaces everything inside its mount node on hydration, so the
   crawler content must be a sibling, never a child.
"""

import logging
from typing import List, Optional

from bs4 import BeautifulSoup, PageElement, Tag

logger = logging.getLogger(__name__)

SEO_CONTAINER_ID = "seo-content"
NOSCRIPT_CONTAINER_ID = "noscript-content"

# Positioned off-screen; never display:none
OFFSCREEN_STYLE = "position:absolute;left:-9999px;top:-9999px;width:1px;height:1px;overflow:hidden;"

_REPLACED_PREFIXES = ("og:", "twitter:", "article:")


def parse_document(html: str) -> BeautifulSoup:
    return BeautifulSoup(html, "lxml")


def parse_fragment(html: str) -> List[PageElement]:
    """Top-level nodes of an HTML fragment, detached and ready to insert."""
    fragment = BeautifulSoup(html, "html.parser")
    return [node.extract() for node in list(fragment.contents)]


def _is_replaced_meta(tag: Tag) -> bool:
    if tag.name != "meta":
        return False
    name = (tag.get("name") or "").lower()
    prop = (tag.get("property") or "").lower()
    if name == "description":
        return True
    return any(value.startswith(_REPLACED_PREFIXES) for value in (name, prop))


def _ensure_head(soup: BeautifulSoup) -> Tag:
    if soup.head is not None:
        return soup.head
    head = soup.new_tag("head")
    if soup.html is not None:
        soup.html.insert(0, head)
    else:
        soup.insert(0, head)
    return head


def replace_head_tags(soup: BeautifulSoup, block: str) -> None:
    """Remove the shell's SEO tags from ``<head>`` and append *block* at its end."""
    head = _ensure_head(soup)

    for tag in head.find_all("title"):
        tag.decompose()
    for tag in head.find_all("link", rel="canonical"):
        tag.decompose()
    for tag in head.find_all(_is_replaced_meta):
        tag.decompose()

    for node in parse_fragment(block):
        head.append(node)


def insert_before_element(soup: BeautifulSoup, element_id: str, node: PageElement) -> bool:
    """Insert *node* as the preceding sibling of ``#element_id``; False when it is absent."""
    target = soup.find(id=element_id)
    if target is None:
        return False
    target.insert_before(node)
    return True


def build_seo_container(soup: BeautifulSoup, body: str, noscript: Optional[str] = None) -> List[Tag]:
    """The hidden ``div#seo-content`` and its ``<noscript>`` twin.

    The ``<noscript>`` copy repeats *body* unless a shorter *noscript* body is given.
    """
    container = soup.new_tag(
        "div", attrs={"id": SEO_CONTAINER_ID, "style": OFFSCREEN_STYLE, "aria-hidden": "true"}
    )
    for node in parse_fragment(body):
        container.append(node)

    fallback = soup.new_tag("noscript")
    inner = soup.new_tag("div", attrs={"id": NOSCRIPT_CONTAINER_ID})
    for node in parse_fragment(noscript if noscript is not None else body):
        inner.append(node)
    fallback.append(inner)

    return [container, fallback]


def inject(
    template: str,
    head: str,
    body: str,
    noscript: Optional[str] = None,
    mount_id: str = "root",
) -> str:
    """Run both phases on *template* and return the serialized document.

    When the mount element is missing only the head phase is applied.
    """
    soup = parse_document(template)
    replace_head_tags(soup, head)

    if soup.find(id=mount_id) is None:
        logger.warning("Mount element #%s not found in template – skipping body injection", mount_id)
        return str(soup)

    for node in build_seo_container(soup, body, noscript):
        insert_before_element(soup, mount_id, node)

    return str(soup)
