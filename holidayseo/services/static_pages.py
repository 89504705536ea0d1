"""Fixed marketing pages: their SEO copy and their sitemap settings."""

from typing import Dict, NamedTuple


class StaticPage(NamedTuple):
    title: str
    description: str
    h1: str
    changefreq: str
    priority: str


def static_pages(site_name: str) -> Dict[str, StaticPage]:
    """Return the static page table keyed by path, branded with *site_name*."""
    return {
        "/": StaticPage(
            title=f"{site_name} - Book 700+ Tours Worldwide",
            description=(
                f"Discover and book 700+ unique tours worldwide with {site_name}. "
                "Explore destinations, compare prices, and find your perfect adventure."
            ),
            h1=f"{site_name} - Your Gateway to World Tours",
            changefreq="daily",
            priority="1.0",
        ),
        "/packages": StaticPage(
            title=f"Holiday Packages | {site_name}",
            description=(
                "Browse our collection of flight-inclusive holiday packages to destinations "
                f"worldwide. Find your perfect getaway with {site_name}."
            ),
            h1="Holiday Packages Worldwide",
            changefreq="daily",
            priority="0.9",
        ),
        "/tours": StaticPage(
            title=f"Tours | {site_name}",
            description=(
                "Explore 700+ unique tours worldwide. From cultural experiences to adventure "
                f"tours, find your perfect trip with {site_name}."
            ),
            h1="Tours Worldwide",
            changefreq="daily",
            priority="0.9",
        ),
        "/destinations": StaticPage(
            title=f"Destinations | {site_name}",
            description=(
                "Discover holiday destinations worldwide. Browse packages by destination "
                "and find your perfect getaway."
            ),
            h1="Explore Our Destinations",
            changefreq="weekly",
            priority="0.8",
        ),
        "/holidays": StaticPage(
            title=f"Holidays | {site_name}",
            description=(
                "Browse our holiday packages by destination. Find flight-inclusive holidays "
                "to destinations worldwide."
            ),
            h1="Holiday Destinations",
            changefreq="weekly",
            priority="0.8",
        ),
        "/collections": StaticPage(
            title=f"Holiday Collections | {site_name}",
            description="Browse curated holiday collections, from river cruises to city breaks.",
            h1="Holiday Collections",
            changefreq="weekly",
            priority="0.7",
        ),
        "/blog": StaticPage(
            title=f"Travel Blog | {site_name}",
            description=(
                "Read our travel blog for destination guides, travel tips, and holiday "
                f"inspiration from {site_name}."
            ),
            h1="Travel Blog",
            changefreq="weekly",
            priority="0.7",
        ),
        "/contact": StaticPage(
            title=f"Contact Us | {site_name}",
            description=f"Get in touch with {site_name}. We're here to help you plan your perfect holiday.",
            h1="Contact Us",
            changefreq="monthly",
            priority="0.6",
        ),
        "/faq": StaticPage(
            title=f"FAQ | {site_name}",
            description=f"Frequently asked questions about booking tours and holidays with {site_name}.",
            h1="Frequently Asked Questions",
            changefreq="monthly",
            priority="0.5",
        ),
        "/special-offers": StaticPage(
            title=f"Special Offers | {site_name}",
            description="Browse our special offers and deals on holiday packages and tours worldwide.",
            h1="Special Offers",
            changefreq="daily",
            priority="0.8",
        ),
        "/terms": StaticPage(
            title=f"Terms and Conditions | {site_name}",
            description=f"Terms and conditions for booking with {site_name}.",
            h1="Terms and Conditions",
            changefreq="monthly",
            priority="0.3",
        ),
    }
