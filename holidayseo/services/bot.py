"""Crawler detection from the ``User-Agent`` header.

:func:`is_bot` decides whether a request comes from a search engine, a
social link-preview fetcher or an AI content fetcher.  In development the
result gates SEO injection so that human traffic keeps the untouched SPA
shell (and the dev server's live reload); in production injection always
runs and this check is informational only.
"""

from typing import Optional, Tuple

# Lower-case substrings; a User-Agent containing any of them is a crawler.
BOT_PATTERNS: Tuple[str, ...] = (
    # Search engines
    "googlebot",
    "bingbot",
    "yandex",
    "baiduspider",
    "duckduckbot",
    "slurp",
    "applebot",
    "petalbot",
    # Social / link-preview fetchers
    "facebookexternalhit",
    "linkedinbot",
    "twitterbot",
    # SEO tooling
    "semrushbot",
    "ahrefsbot",
    "mj12bot",
    "dotbot",
    "ia_archiver",
    # AI content fetchers
    "gptbot",
    "claudebot",
    "perplexitybot",
    "chatgpt",
    "anthropic",
    "cohere-ai",
    "you.com",
    "bytespider",
)


def is_bot(user_agent: Optional[str]) -> bool:
    """Return True when *user_agent* matches a known crawler pattern.

    An absent or empty header is never a bot.
    """
    if not user_agent:
        return False
    ua = user_agent.lower()
    return any(pattern in ua for pattern in BOT_PATTERNS)
