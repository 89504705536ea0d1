"""Text helpers shared by the resolver, aggregate, FAQ and fragment builders."""

import re
from typing import List, Optional

from bs4 import BeautifulSoup

_WHITESPACE_RE = re.compile(r"\s+")
_DURATION_RE = re.compile(r"(\d+)\s*(?:nights?|days?)", re.IGNORECASE)
_BULLET_SPLIT_RE = re.compile(r"[•\-\n]")
_SENTENCE_SPLIT_RE = re.compile(r"(?<=[.!?])\s+")


def collapse_whitespace(text: str) -> str:
    return _WHITESPACE_RE.sub(" ", text.replace("\xa0", " ")).strip()


def strip_html(html: Optional[str]) -> str:
    """Return the visible text of *html* with whitespace collapsed."""
    if not html:
        return ""
    if "<" not in html and "&" not in html:
        return collapse_whitespace(html)
    return collapse_whitespace(BeautifulSoup(html, "lxml").get_text(" "))


def truncate(text: Optional[str], limit: int) -> str:
    """Hard substring cap; callers pre-trim so builders never truncate."""
    if not text:
        return ""
    return text[:limit]


def extract_bullet_points(html: Optional[str], max_items: int = 7) -> List[str]:
    """Return list items from *html*, or bullet/line-split text when it has no ``<li>``."""
    if not html:
        return []

    soup = BeautifulSoup(html, "lxml")
    items = soup.find_all("li")
    if items:
        texts = [collapse_whitespace(li.get_text(" ")) for li in items[:max_items]]
        return [t for t in texts if t]

    raw = soup.get_text("\n").replace("\xa0", " ")
    lines = [collapse_whitespace(line) for line in _BULLET_SPLIT_RE.split(raw)]
    return [line for line in lines if len(line) > 5][:max_items]


def parse_duration(duration: Optional[str]) -> Optional[int]:
    """First number followed by *night(s)* or *day(s)* (``"7 Nights / 8 Days"`` → 7)."""
    if not duration:
        return None
    match = _DURATION_RE.search(duration)
    return int(match.group(1)) if match else None


def parse_nights(duration: Optional[str]) -> Optional[int]:
    """Night count of a duration string.

    ``"N nights"`` gives N; a string that only mentions days gives N − 1.
    """
    number = parse_duration(duration)
    if number is None:
        return None
    lowered = duration.lower()
    if "day" in lowered and "night" not in lowered:
        return number - 1
    return number


def sentence_mentioning(text: Optional[str], *keywords: str, limit: int = 300) -> Optional[str]:
    """First sentence of plain-text *text* containing any of *keywords* (case-insensitive)."""
    if not text:
        return None
    for sentence in _SENTENCE_SPLIT_RE.split(text):
        lowered = sentence.lower()
        if any(keyword in lowered for keyword in keywords):
            return sentence.strip()[:limit]
    return None


def normalize_slug(value: str) -> str:
    return _WHITESPACE_RE.sub("-", value.strip().lower())


def format_price(amount: float) -> str:
    """``1234.0`` → ``"1,234"``; keeps pence when present (``99.5`` → ``"99.50"``)."""
    if float(amount).is_integer():
        return f"{int(amount):,}"
    return f"{amount:,.2f}"
