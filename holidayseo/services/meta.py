"""``<head>`` tag builders: title, description, canonical, Open Graph, Twitter.

All functions are pure.  Every interpolated value goes through :func:`escape`;
lengths are not enforced here because the resolver already trimmed the text.
"""

import html
from datetime import datetime
from typing import List, Optional, Tuple

from holidayseo.models.view import ContentViewModel, DestinationAggregate
from holidayseo.services.static_pages import StaticPage
from holidayseo.services.text import format_price


def escape(value: Optional[object]) -> str:
    """Escape ``& < > " '`` for use in element text or a quoted attribute."""
    if value is None:
        return ""
    return html.escape(str(value), quote=True)


def build_meta_tags(
    title: str,
    description: str,
    url: str,
    *,
    site_name: str,
    image: Optional[str] = None,
    og_type: str = "website",
    robots: Optional[str] = None,
    published_time: Optional[datetime] = None,
    modified_time: Optional[datetime] = None,
) -> str:
    safe_title = escape(title)
    safe_description = escape(description)
    safe_url = escape(url)

    tags: List[str] = [
        f"<title>{safe_title}</title>",
        f'<meta name="description" content="{safe_description}" />',
        f'<link rel="canonical" href="{safe_url}" />',
    ]
    if robots:
        tags.append(f'<meta name="robots" content="{escape(robots)}" />')

    tags += [
        f'<meta property="og:title" content="{safe_title}" />',
        f'<meta property="og:description" content="{safe_description}" />',
        f'<meta property="og:url" content="{safe_url}" />',
        f'<meta property="og:type" content="{escape(og_type)}" />',
        f'<meta property="og:site_name" content="{escape(site_name)}" />',
    ]
    if image:
        tags.append(f'<meta property="og:image" content="{escape(image)}" />')
    if published_time:
        tags.append(f'<meta property="article:published_time" content="{published_time.isoformat()}" />')
    if modified_time:
        tags.append(f'<meta property="article:modified_time" content="{modified_time.isoformat()}" />')

    tags += [
        '<meta name="twitter:card" content="summary_large_image" />',
        f'<meta name="twitter:title" content="{safe_title}" />',
        f'<meta name="twitter:description" content="{safe_description}" />',
    ]
    if image:
        tags.append(f'<meta name="twitter:image" content="{escape(image)}" />')

    return "\n".join(tags)


def tour_meta(view: ContentViewModel, url: str, site_name: str) -> str:
    description = view.meta_description
    if not description:
        where = f" in {view.destination_name}" if view.destination_name else ""
        days = f" - {view.duration_days} days" if view.duration_days else ""
        description = f"Discover {view.title}{where}{days}."
    return build_meta_tags(
        f"{view.title} | {site_name}",
        description,
        url,
        site_name=site_name,
        image=view.image_url,
        og_type="product",
    )


def package_meta(view: ContentViewModel, url: str, site_name: str) -> str:
    title = view.meta_title or (
        f"{view.title} | {view.destination_name} Holidays | {site_name}"
        if view.destination_name
        else f"{view.title} | {site_name}"
    )
    description = view.meta_description or f"Book {view.title} with {site_name}."
    return build_meta_tags(title, description, url, site_name=site_name, image=view.image_url, og_type="product")


def destination_meta_text(agg: DestinationAggregate, site_name: str) -> Tuple[str, str]:
    """Title and description for a destination page, built from its aggregate."""
    name = agg.destination_name
    title = f"{name} Holidays & Packages | {site_name}"

    tag_text = f" including {' and '.join(agg.top_tags[:2])}" if agg.top_tags else ""
    duration_text = f" Trips last {agg.top_duration_buckets[0]}." if agg.top_duration_buckets else ""
    price_text = f" From £{format_price(agg.price_min)}." if agg.price_min is not None else ""
    description = (
        f"Explore {agg.package_count} {name} holiday packages{tag_text}."
        f"{duration_text}{price_text} Book with {site_name}."
    )
    return title, description


def destination_meta(agg: DestinationAggregate, url: str, site_name: str) -> str:
    title, description = destination_meta_text(agg, site_name)
    return build_meta_tags(title, description, url, site_name=site_name, image=agg.image_url)


def holiday_deals_meta(agg: DestinationAggregate, url: str, site_name: str, contact_email: str) -> str:
    name = agg.destination_name
    price = f"£{format_price(agg.price_min)}" if agg.price_min is not None else "TBC"
    styles = f" Popular styles: {', '.join(agg.top_tags[:3])}." if agg.top_tags else ""
    description = (
        f"Find the best {name} holiday deals from the UK. {agg.package_count} packages available."
        f"{styles} Prices from {price}. Enquire at {contact_email}."
    )
    return build_meta_tags(
        f"{name} Holiday Deals & Offers from the UK | {site_name}",
        description,
        url,
        site_name=site_name,
        image=agg.image_url,
    )


def blog_meta(view: ContentViewModel, url: str, site_name: str, default_image: str) -> str:
    return build_meta_tags(
        view.meta_title or f"{view.title} | {site_name} Blog",
        view.meta_description,
        url,
        site_name=site_name,
        image=view.image_url or default_image,
        og_type="article",
        published_time=view.published_at,
        modified_time=view.updated_at,
    )


def static_meta(page: StaticPage, url: str, site_name: str, default_image: str) -> str:
    return build_meta_tags(page.title, page.description, url, site_name=site_name, image=default_image)


def noindex_meta(title: str, description: str, url: str) -> str:
    return "\n".join(
        [
            f"<title>{escape(title)}</title>",
            f'<meta name="description" content="{escape(description)}" />',
            f'<link rel="canonical" href="{escape(url)}" />',
            '<meta name="robots" content="noindex, follow" />',
        ]
    )
