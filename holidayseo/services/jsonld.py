"""schema.org JSON-LD builders.

Builders return plain dicts; :func:`render_jsonld` serializes one into a
``<script type="application/ld+json">`` element.  Prices are only emitted as
an ``Offer`` when positive, never as a zero price.
"""

import json
from typing import Dict, Iterable, List, Optional, Tuple

from holidayseo.models.view import ContentViewModel, DestinationAggregate, FaqItem
from holidayseo.services.text import format_price, normalize_slug, strip_html

SCHEMA_CONTEXT = "https://schema.org"

# Characters that could close the <script> element or start an entity
_SCRIPT_SAFE = str.maketrans({"<": "\\u003c", ">": "\\u003e", "&": "\\u0026", "'": "\\u0027"})


def render_jsonld(data: Dict) -> str:
    payload = json.dumps(data, ensure_ascii=False, separators=(",", ":")).translate(_SCRIPT_SAFE)
    return f'<script type="application/ld+json">{payload}</script>'


def _offer(price: Optional[float], currency: str) -> Optional[Dict]:
    if price is None or price <= 0:
        return None
    return {
        "@type": "Offer",
        "price": price,
        "priceCurrency": currency,
        "availability": "https://schema.org/InStock",
    }


def _provider(site_name: str, host: str) -> Dict:
    return {"@type": "TravelAgency", "name": site_name, "url": host}


def tourist_trip(view: ContentViewModel, url: str, *, site_name: str, host: str) -> Dict:
    data: Dict = {
        "@context": SCHEMA_CONTEXT,
        "@type": "TouristTrip",
        "name": view.title,
        "description": view.schema_description,
        "url": url,
        "provider": _provider(site_name, host),
    }
    if view.destination_name:
        data["touristType"] = view.destination_name
        data["itinerary"] = {
            "@type": "ItemList",
            "name": f"{view.title} Itinerary",
            "itemListElement": [
                {
                    "@type": "ListItem",
                    "position": index,
                    "name": day.title or f"Day {index}",
                    "description": strip_html(day.description),
                }
                for index, day in enumerate(view.itinerary, start=1)
            ],
        }
    if view.image_url:
        data["image"] = view.image_url
    offer = _offer(view.price_from, view.currency)
    if offer:
        data["offers"] = offer
    if view.duration_days:
        data["duration"] = f"P{view.duration_days}D"
    return data


def tourist_destination(agg: DestinationAggregate, url: str) -> Dict:
    name = agg.destination_name
    tag_text = f" including {', '.join(agg.top_tags[:3])}" if agg.top_tags else ""
    duration_text = (
        f" Trips commonly last {' or '.join(agg.top_duration_buckets)}."
        if agg.top_duration_buckets
        else ""
    )
    price_text = (
        f" Prices start from £{format_price(agg.price_min)} per person." if agg.price_min is not None else ""
    )
    return {
        "@context": SCHEMA_CONTEXT,
        "@type": "TouristDestination",
        "name": name,
        "description": f"Explore {agg.package_count} {name} holiday packages{tag_text}.{duration_text}{price_text}",
        "url": url,
        "containedInPlace": {"@type": "Country", "name": name},
    }


def breadcrumb_list(items: Iterable[Tuple[str, str]]) -> Dict:
    """*items* are ``(name, url)`` pairs from the home page down."""
    return {
        "@context": SCHEMA_CONTEXT,
        "@type": "BreadcrumbList",
        "itemListElement": [
            {"@type": "ListItem", "position": index, "name": name, "item": url}
            for index, (name, url) in enumerate(items, start=1)
        ],
    }


def faq_page(faqs: List[FaqItem]) -> Optional[Dict]:
    if not faqs:
        return None
    return {
        "@context": SCHEMA_CONTEXT,
        "@type": "FAQPage",
        "mainEntity": [
            {
                "@type": "Question",
                "name": faq.question,
                "acceptedAnswer": {"@type": "Answer", "text": strip_html(faq.answer)},
            }
            for faq in faqs
        ],
    }


def package_item_list(agg: DestinationAggregate, host: str) -> Dict:
    elements = []
    for position, pkg in enumerate(agg.featured_packages, start=1):
        item: Dict = {
            "@type": "TouristTrip",
            "name": pkg.title,
            "url": f"{host}/Holidays/{normalize_slug(agg.destination_slug)}/{pkg.slug}",
            "touristType": "Leisure",
        }
        offer = _offer(pkg.price, pkg.currency)
        if offer:
            item["offers"] = offer
        elements.append({"@type": "ListItem", "position": position, "item": item})

    return {
        "@context": SCHEMA_CONTEXT,
        "@type": "ItemList",
        "name": f"{agg.destination_name} Holiday Packages",
        "numberOfItems": len(elements),
        "itemListElement": elements,
    }


def collection_page(name: str, description: str, url: str, destination_name: str) -> Dict:
    return {
        "@context": SCHEMA_CONTEXT,
        "@type": "CollectionPage",
        "name": name,
        "description": description,
        "url": url,
        "mainEntity": {"@type": "TouristDestination", "name": destination_name},
    }


def organization(site_name: str, host: str) -> Dict:
    return {
        "@context": SCHEMA_CONTEXT,
        "@type": "TravelAgency",
        "name": site_name,
        "url": host,
        "logo": f"{host}/favicon.png",
        "sameAs": [],
    }


def article(view: ContentViewModel, url: str, image: str, *, site_name: str, host: str) -> Dict:
    data: Dict = {
        "@context": SCHEMA_CONTEXT,
        "@type": "Article",
        "headline": view.title,
        "description": view.meta_description,
        "image": image,
        "url": url,
        "author": {"@type": "Organization", "name": site_name},
        "publisher": {"@type": "Organization", "name": site_name, "url": host},
    }
    if view.published_at:
        data["datePublished"] = view.published_at.isoformat()
    modified = view.updated_at or view.published_at
    if modified:
        data["dateModified"] = modified.isoformat()
    return data
