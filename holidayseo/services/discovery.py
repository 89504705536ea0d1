"""Crawler discovery files: ``robots.txt``, ``llm.txt`` and ``ai.txt``."""

from datetime import date
from typing import Optional

from holidayseo.services.canonical import NOINDEX_PATH_PREFIXES

PARTNERSHIP_EMAIL = "info@flightsandpackages.com"


def robots_txt(host: str) -> str:
    disallowed = list(NOINDEX_PATH_PREFIXES) + ["/admin/*", "/api/"]
    lines = ["User-agent: *", "Allow: /"]
    lines += [f"Disallow: {path}" for path in disallowed]
    lines += [
        "",
        f"Sitemap: {host}/sitemap.xml",
        "",
        "# AI crawler discovery",
        "# See /llm.txt and /ai.txt for AI-specific crawl guidance",
        "",
        "# Crawl delay",
        "Crawl-delay: 1",
    ]
    return "\n".join(lines) + "\n"


def llm_txt(host: str, site_name: str, today: Optional[date] = None) -> str:
    today = today or date.today()
    return f"""# {site_name} - AI Crawler Information
# Last updated: {today.isoformat()}

# Site Information
name: {site_name}
url: {host}
description: Luxury travel booking platform featuring curated tours, flight packages, and holiday experiences worldwide.

# Crawl Permissions
User-agent: *
Allow: /

# Allowed AI Operations
summarization: allowed
indexing: allowed
training: disallowed
caching: allowed

# Attribution Required
Please attribute content to "{site_name}" with a link to {host}

# Machine-Readable Content Sources
sitemap: {host}/sitemap.xml
feed-tours: {host}/feed/tours.json
feed-packages: {host}/feed/packages.json
feed-destinations: {host}/feed/destinations.json

# Content Structure
- /packages - All holiday packages listing
- /destinations/:slug - Destination-specific packages
- /Holidays/:country - Country-specific holidays
- /Holidays/:country/:slug - Individual package details
- /tour/:id - Individual tour details

# Preferred Citation Format
"[Package/Tour Name] - {site_name} ({host})"

# Contact
For API access or partnerships: {PARTNERSHIP_EMAIL}
"""


def ai_txt(host: str, site_name: str) -> str:
    return f"""# AI Crawler Guidance for {site_name}
# {host}

## Purpose
This file provides guidance for AI systems crawling our travel booking platform.

## Permissions
- Summarization: ALLOWED
- Indexing: ALLOWED
- Content extraction: ALLOWED
- Training on content: NOT ALLOWED without permission
- Commercial use: Requires attribution

## Structured Data Sources
Our content is available in multiple formats:

### Sitemaps
{host}/sitemap.xml (index)
{host}/sitemaps/packages.xml
{host}/sitemaps/tours.xml
{host}/sitemaps/destinations.xml

### JSON Feeds (AI-Optimized)
{host}/feed/tours.json
{host}/feed/packages.json
{host}/feed/destinations.json

## Content Types
- Holiday packages with flights included
- Multi-day guided tours
- Destination guides
- Travel itineraries

## Attribution
When citing our content, please include:
- Source: {site_name}
- URL: {host}
- Access date

## Rate Limiting
Please respect a crawl delay of 1 second between requests.

## Contact
For AI/LLM partnerships: {PARTNERSHIP_EMAIL}
"""
