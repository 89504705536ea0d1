"""Crawlable HTML fragments placed in the hidden ``#seo-content`` container.

Every builder returns a string and returns ``""`` when it has nothing to say,
so callers can concatenate sections without checking each one.  All record
text is escaped here; only fixed markup is emitted raw.
"""

from typing import Dict, Iterable, List, Sequence, Tuple

from holidayseo.models.package import FlightPackage
from holidayseo.models.view import ContentViewModel, DestinationAggregate, FaqItem
from holidayseo.services.meta import escape
from holidayseo.services.static_pages import StaticPage
from holidayseo.services.text import extract_bullet_points, format_price, normalize_slug, strip_html

INCLUSIONS_LIMIT = 7
EXCLUSIONS_LIMIT = 7
HIGHLIGHTS_LIMIT = 7
ITINERARY_LIMIT = 5
REQUIREMENTS_LIMIT = 6
BEST_FOR_LIMIT = 6
NOT_SUITABLE_LIMIT = 4
FAQ_LIMIT = 5
RELATED_LIMIT = 3
ATTENTION_MIN_LENGTH = 10
ATTENTION_MAX_LENGTH = 500
NOSCRIPT_PACKAGES_LIMIT = 5

# tag -> (suitable for, may not suit)
SUITABILITY: Dict[str, Tuple[Tuple[str, ...], Tuple[str, ...]]] = {
    "Beach": (("Beach lovers", "Relaxation seekers"), ()),
    "Adventure": (("Active travelers", "Outdoor enthusiasts"), ("Those with mobility issues",)),
    "Cultural": (("History buffs", "Cultural explorers"), ()),
    "City Break": (("Urban explorers", "Couples"), ()),
    "Safari": (
        ("Wildlife enthusiasts", "Nature lovers", "Photography enthusiasts"),
        ("Young children under 5",),
    ),
    "Wildlife": (("Nature lovers", "Photography enthusiasts"), ()),
    "Luxury": (("Couples", "Special occasions", "Honeymoons"), ()),
    "Family": (("Families with children", "Multi-generational groups"), ()),
    "Cruise": (("Those who enjoy water travel", "Scenic route lovers"), ("Those prone to seasickness",)),
    "River Cruise": (("Relaxed pace travelers", "Scenic route lovers"), ()),
    "Solo Travellers": (("Solo travelers", "Independent explorers"), ()),
    "Honeymoon": (("Couples", "Newlyweds", "Romantic getaways"), ()),
}

MAIN_NAV: Tuple[Tuple[str, str], ...] = (
    ("Home", "/"),
    ("Packages", "/packages"),
    ("Tours", "/tours"),
    ("Destinations", "/destinations"),
    ("Blog", "/blog"),
    ("Contact", "/contact"),
)


def _list_section(label: str, heading: str, items: Iterable[str]) -> str:
    items = list(items)
    if not items:
        return ""
    lines = [f'<section aria-label="{escape(label)}">', f"  <h2>{escape(heading)}</h2>", "  <ul>"]
    lines += [f"    <li>{escape(item)}</li>" for item in items]
    lines += ["  </ul>", "</section>"]
    return "\n".join(lines) + "\n"


def _price_text(price) -> str:
    return f"From £{format_price(price)}" if price else "Price on request"


def _unique(values: Iterable[str]) -> List[str]:
    seen: List[str] = []
    for value in values:
        if value not in seen:
            seen.append(value)
    return seen


def breadcrumb_nav(crumbs: Sequence[Tuple[str, str]], current: str) -> str:
    """``<nav>`` breadcrumb: linked *crumbs* (name, absolute URL) then *current* as text."""
    lines = ['<nav aria-label="Breadcrumb">', "  <ol>"]
    lines += [f'    <li><a href="{escape(url)}">{escape(name)}</a></li>' for name, url in crumbs]
    lines += [f"    <li>{escape(current)}</li>", "  </ol>", "</nav>"]
    return "\n".join(lines) + "\n"


# ── Package sections ─────────────────────────────────────────────────────────

def inclusions_html(pkg: FlightPackage) -> str:
    items = [item for item in pkg.whats_included if item.strip()][:INCLUSIONS_LIMIT]
    return _list_section("What is included", "What's Included", items)


def exclusions_html(pkg: FlightPackage) -> str:
    return _list_section(
        "What is not included", "What's Not Included", extract_bullet_points(pkg.excluded, EXCLUSIONS_LIMIT)
    )


def highlights_html(pkg: FlightPackage) -> str:
    items = [item for item in pkg.highlights if item.strip()][:HIGHLIGHTS_LIMIT]
    return _list_section("Tour Highlights", "Tour Highlights", items)


def itinerary_summary_html(pkg: FlightPackage) -> str:
    if not pkg.itinerary:
        return ""
    lines = ['<section aria-label="Itinerary">', "  <h2>Itinerary Overview</h2>", "  <ol>"]
    for day in pkg.itinerary[:ITINERARY_LIMIT]:
        summary = strip_html(day.description)[:150]
        lines.append(f"    <li><strong>Day {day.day}: {escape(day.title)}</strong> - {escape(summary)}...</li>")
    remaining = len(pkg.itinerary) - ITINERARY_LIMIT
    if remaining > 0:
        lines.append(f"    <li>...and {remaining} more days</li>")
    lines += ["  </ol>", "</section>"]
    return "\n".join(lines) + "\n"


def requirements_html(pkg: FlightPackage) -> str:
    return _list_section(
        "What to bring", "What to Bring", extract_bullet_points(pkg.requirements, REQUIREMENTS_LIMIT)
    )


def suitability_html(pkg: FlightPackage) -> str:
    suitable: List[str] = []
    not_suitable: List[str] = []
    for tag in pkg.tags:
        if tag in SUITABILITY:
            best_for, may_not_suit = SUITABILITY[tag]
            suitable.extend(best_for)
            not_suitable.extend(may_not_suit)

    suitable = _unique(suitable)[:BEST_FOR_LIMIT]
    not_suitable = _unique(not_suitable)[:NOT_SUITABLE_LIMIT]
    if not suitable and not not_suitable:
        return ""

    lines = ['<section aria-label="Who this tour is for">']
    if suitable:
        lines += ["  <h2>Best For</h2>", "  <ul>"]
        lines += [f"    <li>{escape(item)}</li>" for item in suitable]
        lines.append("  </ul>")
    if not_suitable:
        lines += ["  <h3>May Not Be Suitable For</h3>", "  <ul>"]
        lines += [f"    <li>{escape(item)}</li>" for item in not_suitable]
        lines.append("  </ul>")
    lines.append("</section>")
    return "\n".join(lines) + "\n"


def faq_html(faqs: Sequence[FaqItem]) -> str:
    if not faqs:
        return ""
    lines = ['<section aria-label="Frequently Asked Questions">', "  <h2>Frequently Asked Questions</h2>"]
    for faq in faqs[:FAQ_LIMIT]:
        lines += [
            "  <div>",
            f"    <h3>{escape(faq.question)}</h3>",
            f"    <p>{escape(strip_html(faq.answer))}</p>",
            "  </div>",
        ]
    lines.append("</section>")
    return "\n".join(lines) + "\n"


def related_html(related: Iterable[FlightPackage], current_slug: str, host: str) -> str:
    picked = [p for p in related if p.slug != current_slug and p.is_published][:RELATED_LIMIT]
    if not picked:
        return ""
    lines = ['<section aria-label="Related Tours">', "  <h2>Related Tours</h2>", "  <ul>"]
    for pkg in picked:
        price = f"£{format_price(pkg.price)}" if pkg.price else "TBC"
        lines.append(
            f'    <li><a href="{escape(host)}/packages/{escape(pkg.slug)}">{escape(pkg.title)}</a> - From {price}</li>'
        )
    lines += ["  </ul>", "</section>"]
    return "\n".join(lines) + "\n"


def attention_html(pkg: FlightPackage) -> str:
    text = strip_html(pkg.attention)
    if len(text) < ATTENTION_MIN_LENGTH:
        return ""
    return (
        '<section aria-label="Important Information">\n'
        "  <h2>Important Information</h2>\n"
        f"  <p>{escape(text[:ATTENTION_MAX_LENGTH])}</p>\n"
        "</section>\n"
    )


def build_all_fragments(
    pkg: FlightPackage,
    faqs: Sequence[FaqItem],
    related: Iterable[FlightPackage],
    host: str,
) -> str:
    """All package sections in page order; empty sections are omitted."""
    return "".join(
        [
            inclusions_html(pkg),
            exclusions_html(pkg),
            highlights_html(pkg),
            itinerary_summary_html(pkg),
            requirements_html(pkg),
            suitability_html(pkg),
            faq_html(faqs),
            related_html(related, pkg.slug, host),
            attention_html(pkg),
        ]
    )


# ── Article wrappers ─────────────────────────────────────────────────────────

def _offer_line(view: ContentViewModel) -> str:
    if not view.price_from or view.price_from <= 0:
        return ""
    return (
        '  <p>Price: From <span itemprop="offers" itemscope itemtype="https://schema.org/Offer">'
        f'<span itemprop="priceCurrency">{escape(view.currency)}</span> '
        f'<span itemprop="price">{format_price(view.price_from)}</span></span></p>\n'
    )


def tour_article(view: ContentViewModel, host: str) -> str:
    parts = [
        '<article itemscope itemtype="https://schema.org/TouristTrip">\n',
        f'  <h1 itemprop="name">{escape(view.title)}</h1>\n',
        f'  <p itemprop="description">{escape(view.description)}</p>\n',
    ]
    if view.destination_name:
        parts.append(f'  <p>Destination: <span itemprop="touristType">{escape(view.destination_name)}</span></p>\n')
    if view.duration_days:
        parts.append(f"  <p>Duration: {view.duration_days} days</p>\n")
    parts.append(_offer_line(view))
    parts.append(breadcrumb_nav([("Home", f"{host}/"), ("Tours", f"{host}/tours")], view.title))
    parts.append("</article>\n")
    return "".join(parts)


def package_article(view: ContentViewModel, fragments: str, host: str) -> str:
    """Package article; *fragments* is the already-escaped output of :func:`build_all_fragments`."""
    parts = [
        '<article itemscope itemtype="https://schema.org/TouristTrip">\n',
        f'  <h1 itemprop="name">{escape(view.title)}</h1>\n',
        f'  <p itemprop="description">{escape(view.description)}</p>\n',
    ]
    if view.destination_name:
        parts.append(f'  <p>Destination: <span itemprop="touristType">{escape(view.destination_name)}</span></p>\n')
    if view.duration_text:
        parts.append(f"  <p>Duration: {escape(view.duration_text)}</p>\n")
    parts.append(_offer_line(view))
    parts.append(fragments)

    crumbs = [("Home", f"{host}/"), ("Packages", f"{host}/packages")]
    if view.destination_name:
        crumbs.append(
            (f"{view.destination_name} Holidays", f"{host}/destinations/{normalize_slug(view.destination_name)}")
        )
    parts.append(breadcrumb_nav(crumbs, view.title))
    parts.append("</article>\n")
    return "".join(parts)


def blog_article(view: ContentViewModel, host: str) -> str:
    parts = [
        '<article itemscope itemtype="https://schema.org/Article">\n',
        f'  <h1 itemprop="headline">{escape(view.title)}</h1>\n',
        f'  <p itemprop="description">{escape(view.meta_description)}</p>\n',
    ]
    if view.destination_name:
        parts.append(f"  <p>Destination: {escape(view.destination_name)}</p>\n")
    if view.published_at:
        stamp = view.published_at.isoformat()
        parts.append(
            f'  <time itemprop="datePublished" datetime="{stamp}">'
            f"Published: {view.published_at.strftime('%d %B %Y')}</time>\n"
        )
    parts.append(breadcrumb_nav([("Home", f"{host}/"), ("Blog", f"{host}/blog")], view.title))
    parts.append("</article>\n")
    return "".join(parts)


def static_article(page: StaticPage, host: str, faqs: Sequence[FaqItem] = ()) -> str:
    lines = [
        "<article>",
        f"  <h1>{escape(page.h1)}</h1>",
        f"  <p>{escape(page.description)}</p>",
    ]
    for faq in faqs:
        lines += [
            "  <details>",
            f"    <summary>{escape(faq.question)}</summary>",
            f"    <p>{escape(strip_html(faq.answer))}</p>",
            "  </details>",
        ]
    lines += ['  <nav aria-label="Main Navigation">', "    <ul>"]
    lines += [f'      <li><a href="{escape(host)}{path}">{name}</a></li>' for name, path in MAIN_NAV]
    lines += ["    </ul>", "  </nav>", "</article>"]
    return "\n".join(lines) + "\n"


# ── Destination pages ────────────────────────────────────────────────────────

def _package_url(host: str, agg: DestinationAggregate, pkg: FlightPackage) -> str:
    return f"{host}/Holidays/{normalize_slug(agg.destination_slug)}/{pkg.slug}"


def destination_guide_html(agg: DestinationAggregate, faqs: Sequence[FaqItem]) -> str:
    name = agg.destination_name
    durations = " or ".join(agg.top_duration_buckets) or "various durations"
    styles = ", ".join(agg.top_tags[:4]) or "diverse travel experiences"
    price = f" Prices start from £{format_price(agg.price_min)} (GBP)." if agg.price_min is not None else ""

    parts = [
        '<section aria-label="Destination Overview">\n'
        f"  <p>Explore {agg.package_count} {escape(name)} holiday packages, with trips commonly lasting "
        f"{escape(durations)}. Popular styles in our {escape(name)} collection include {escape(styles)}.{price}</p>\n"
        "</section>\n",
        _list_section("Popular Styles", "Popular Holiday Styles", agg.top_tags),
        _list_section(
            "Trip Lengths",
            "Typical Trip Lengths",
            [
                f"{b.label}: {b.count} package{'s' if b.count > 1 else ''}"
                for b in agg.duration_buckets
                if b.count > 0
            ],
        ),
        _list_section(
            "Common Inclusions",
            "What's Commonly Included",
            [
                f"{'Many' if inc.percentage >= 60 else 'Some'} packages include {inc.name.lower()}"
                for inc in agg.top_inclusions
            ],
        ),
        _list_section("Featured Accommodations", "Where You'll Stay", agg.top_hotels),
    ]

    if faqs:
        parts.append(
            '<section aria-label="Frequently Asked Questions">\n'
            f"  <h2>Frequently Asked Questions About {escape(name)} Holidays</h2>\n"
        )
        for faq in faqs:
            parts.append(
                "  <details>\n"
                f"    <summary>{escape(faq.question)}</summary>\n"
                f"    <p>{escape(faq.answer)}</p>\n"
                "  </details>\n"
            )
        parts.append("</section>\n")

    return "".join(parts)


def destination_package_list_html(agg: DestinationAggregate, host: str) -> str:
    if not agg.featured_packages:
        return ""
    lines = [
        '<section aria-label="Available Packages">',
        f"  <h2>Holiday Packages to {escape(agg.destination_name)}</h2>",
        "  <ul>",
    ]
    lines += [
        f'    <li><a href="{escape(_package_url(host, agg, pkg))}">{escape(pkg.title)}</a> - {_price_text(pkg.price)}</li>'
        for pkg in agg.featured_packages
    ]
    lines += ["  </ul>", "</section>"]
    return "\n".join(lines) + "\n"


def destination_breadcrumb_html(agg: DestinationAggregate, host: str) -> str:
    return breadcrumb_nav([("Home", f"{host}/"), ("Destinations", f"{host}/destinations")], agg.destination_name)


def destination_article(agg: DestinationAggregate, faqs: Sequence[FaqItem], host: str) -> str:
    return (
        '<article itemscope itemtype="https://schema.org/TouristDestination">\n'
        f'  <h1 itemprop="name">{escape(agg.destination_name)} Holidays</h1>\n'
        f"{destination_guide_html(agg, faqs)}"
        f"{destination_package_list_html(agg, host)}"
        f"{destination_breadcrumb_html(agg, host)}"
        "</article>\n"
    )


def destination_noscript_html(agg: DestinationAggregate, host: str) -> str:
    """Shorter destination body for ``<noscript>``: summary, five packages, breadcrumb."""
    name = escape(agg.destination_name)
    durations = " or ".join(agg.top_duration_buckets) or "various durations"
    styles = ", ".join(agg.top_tags[:3])
    styles_text = f" including {escape(styles)}" if styles else ""
    price = f" Prices start from £{format_price(agg.price_min)}." if agg.price_min is not None else ""

    parts = [
        '<article itemscope itemtype="https://schema.org/TouristDestination">\n',
        f'  <h1 itemprop="name">{name} Holidays</h1>\n',
        f'  <p itemprop="description">Explore {agg.package_count} {name} packages{styles_text}, '
        f"with trips lasting {escape(durations)}.{price}</p>\n",
    ]
    if agg.featured_packages:
        parts.append("  <h2>Featured Packages</h2>\n  <ul>\n")
        for pkg in agg.featured_packages[:NOSCRIPT_PACKAGES_LIMIT]:
            parts.append(f'    <li><a href="{escape(_package_url(host, agg, pkg))}">{escape(pkg.title)}</a></li>\n')
        parts.append("  </ul>\n")
    parts.append(destination_breadcrumb_html(agg, host))
    parts.append("</article>\n")
    return "".join(parts)


def holiday_deals_article(
    agg: DestinationAggregate,
    faqs: Sequence[FaqItem],
    host: str,
    contact_email: str,
) -> str:
    name = escape(agg.destination_name)
    slug = escape(agg.destination_slug)
    durations = " or ".join(agg.top_duration_buckets) or "various durations"
    price = f" with prices starting from £{format_price(agg.price_min)}" if agg.price_min is not None else ""
    styles = ", ".join(agg.top_tags[:3])
    styles_text = f" Popular trip styles include {escape(styles)}." if styles else ""

    parts = [
        '<article itemscope itemtype="https://schema.org/CollectionPage">\n',
        f'  <h1 itemprop="name">{name} Holiday Deals &amp; Offers from the UK</h1>\n',
        f'  <section aria-label="Best {name} Deals">\n',
        f"    <p>Looking for the best {name} holiday deals? Browse {agg.package_count} {name} holiday packages "
        f"from the UK{price}.{styles_text} Typical durations are {escape(durations)}.</p>\n",
        "  </section>\n",
        f'  <section aria-label="Featured {name} Holiday Deals">\n',
        f"    <h2>Featured {name} Deals</h2>\n",
        "    <ul>\n",
    ]
    for pkg in agg.featured_packages:
        parts.append(
            f'      <li><a href="{escape(_package_url(host, agg, pkg))}">{escape(pkg.title)}</a>'
            f" - {_price_text(pkg.price)}</li>\n"
        )
    parts.append("    </ul>\n  </section>\n")

    if faqs:
        parts.append(f'  <section aria-label="{name} Holiday FAQs">\n    <h2>Frequently Asked Questions</h2>\n')
        for faq in faqs:
            parts.append(
                "    <details>\n"
                f"      <summary>{escape(faq.question)}</summary>\n"
                f"      <p>{escape(faq.answer)}</p>\n"
                "    </details>\n"
            )
        parts.append("  </section>\n")

    email = escape(contact_email)
    parts.append(
        '  <section aria-label="Browse More">\n'
        f'    <p><a href="{escape(host)}/destinations/{slug}">See all {name} holidays and packages</a></p>\n'
        f'    <p>For enquiries: <a href="mailto:{email}">{email}</a></p>\n'
        "  </section>\n"
    )
    parts.append(
        breadcrumb_nav(
            [
                ("Home", f"{host}/"),
                ("Destinations", f"{host}/destinations"),
                (f"{agg.destination_name} Holidays", f"{host}/destinations/{agg.destination_slug}"),
            ],
            "Holiday Deals",
        )
    )
    parts.append("</article>\n")
    return "".join(parts)
