from typing import Optional
from urllib.parse import parse_qsl

# Sections that must never be indexed even though they render the SPA shell
NOINDEX_PATH_PREFIXES = ("/ai-search", "/checkout", "/admin", "/2fa-setup")

# Query keys that mark tracking / campaign variants of a page
_TRACKING_KEY_PREFIX = "utm_"
_TRACKING_KEYS = frozenset({"fbclid", "gclid", "ref", "source", "campaign"})


def canonical_url(host: str, path: str) -> str:
    """Absolute canonical URL for *path* on *host*, query string removed."""
    clean_path = path.split("?", 1)[0].split("#", 1)[0]
    if clean_path in ("", "/"):
        return host.rstrip("/")
    return f"{host.rstrip('/')}{clean_path}"


def has_tracking_params(query: Optional[str]) -> bool:
    if not query:
        return False
    for key, _ in parse_qsl(query, keep_blank_values=True):
        key = key.lower()
        if key.startswith(_TRACKING_KEY_PREFIX) or key in _TRACKING_KEYS:
            return True
    return False


def noindex_section(path: str) -> Optional[str]:
    """The private-section prefix *path* falls under, matched on whole segments."""
    for prefix in NOINDEX_PATH_PREFIXES:
        if path == prefix or path.startswith(prefix + "/"):
            return prefix
    return None


def should_noindex(path: str, query: Optional[str] = None) -> bool:
    """Return True for private sections and tracking-parameter variants."""
    if noindex_section(path) is not None:
        return True
    return has_tracking_params(query)
