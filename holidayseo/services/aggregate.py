"""Destination aggregate: rolls a destination's packages into one summary.

:func:`build_destination_aggregate` filters the full package list down to one
destination and derives the numbers that destination pages, FAQs and
structured data are written from:

* price min / median / max over positive prices
* the eight most frequent tags
* a night-count histogram over five fixed buckets, and the "typical" buckets
* inclusions shared by at least 20 % of packages
* the five most common hotels
* up to ten featured packages
"""

from collections import Counter
from datetime import datetime, timezone
from typing import Iterable, List, Optional, Tuple

from holidayseo.models.package import FlightPackage
from holidayseo.models.view import DestinationAggregate, DurationBucket, InclusionStat
from holidayseo.services.text import collapse_whitespace, normalize_slug, parse_nights

TOP_TAGS_LIMIT = 8
TOP_DURATION_BUCKETS_LIMIT = 2
TOP_INCLUSIONS_LIMIT = 10
TOP_HOTELS_LIMIT = 5
FEATURED_LIMIT = 10

# An inclusion must appear in at least this share of packages (percent)
INCLUSION_MIN_PERCENT = 20

# (label, min nights, max nights); the last bucket is open-ended
DURATION_BUCKETS: Tuple[Tuple[str, int, Optional[int]], ...] = (
    ("1–4 nights", 1, 4),
    ("5–7 nights", 5, 7),
    ("8–10 nights", 8, 10),
    ("11–14 nights", 11, 14),
    ("15+ nights", 15, None),
)

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def matches_destination(pkg: FlightPackage, destination_slug: str) -> bool:
    """Category equals the slug case-insensitively, or its slugified form equals it."""
    slug = destination_slug.lower()
    category = pkg.category or ""
    return category.lower() == slug or normalize_slug(category) == slug


def median(values: Iterable[float]) -> Optional[float]:
    """Standard median; an even count takes the midpoint rounded half-up to an integer."""
    ordered = sorted(values)
    if not ordered:
        return None
    mid = len(ordered) // 2
    if len(ordered) % 2:
        return ordered[mid]
    lower, upper = ordered[mid - 1], ordered[mid]
    rounded = float(int((lower + upper) / 2 + 0.5))
    # Rounding must not push the median outside the two middle prices
    return min(max(rounded, lower), upper)


def bucket_index(nights: int) -> int:
    """Index into :data:`DURATION_BUCKETS`; anything up to 4 nights is the first bucket."""
    for index, (_label, _low, high) in enumerate(DURATION_BUCKETS):
        if high is None or nights <= high:
            return index
    return len(DURATION_BUCKETS) - 1


def normalize_inclusion(text: str) -> str:
    return collapse_whitespace(text).lower()


def _timestamp(value: Optional[datetime]) -> float:
    if value is None:
        return 0.0
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return (value - _EPOCH).total_seconds()


def featured_order(packages: Iterable[FlightPackage]) -> List[FlightPackage]:
    """Explicit display order first (ascending), then most recently updated."""
    return sorted(
        packages,
        key=lambda p: (
            p.display_order is None,
            p.display_order if p.display_order is not None else 0,
            -_timestamp(p.updated_at),
        ),
    )


def _duration_histogram(packages: List[FlightPackage]) -> List[DurationBucket]:
    buckets = [DurationBucket(label=label, min=low, max=high) for label, low, high in DURATION_BUCKETS]
    for pkg in packages:
        nights = parse_nights(pkg.duration)
        if nights is not None:
            buckets[bucket_index(nights)].count += 1
    return buckets


def _typical_durations(buckets: List[DurationBucket]) -> List[str]:
    # Stable sort keeps shorter buckets first on equal counts
    ranked = sorted((b for b in buckets if b.count > 0), key=lambda b: b.count, reverse=True)
    typical: List[str] = []
    for position, bucket in enumerate(ranked[:TOP_DURATION_BUCKETS_LIMIT]):
        # A runner-up bucket backed by a single package is not "typical"
        if position > 0 and bucket.count < 2:
            break
        typical.append(bucket.label)
    return typical


def _top_inclusions(packages: List[FlightPackage]) -> List[InclusionStat]:
    total = len(packages)
    counts: Counter = Counter()
    for pkg in packages:
        for item in pkg.whats_included:
            normalized = normalize_inclusion(item)
            if len(normalized) > 3:
                counts[normalized] += 1

    stats = [
        InclusionStat(
            name=name[:1].upper() + name[1:],
            frequency=count,
            percentage=count * 100 / total,
        )
        for name, count in counts.items()
        if count * 100 >= INCLUSION_MIN_PERCENT * total
    ]
    stats.sort(key=lambda s: s.frequency, reverse=True)
    return stats[:TOP_INCLUSIONS_LIMIT]


def _top_hotels(packages: List[FlightPackage]) -> List[str]:
    counts: Counter = Counter(
        pkg.accommodations[0].name for pkg in packages if pkg.accommodations and pkg.accommodations[0].name
    )
    return [name for name, _count in counts.most_common(TOP_HOTELS_LIMIT)]


def destination_display_name(destination_slug: str) -> str:
    """``"sri-lanka"`` → ``"Sri lanka"``; used only when no package names the destination."""
    text = destination_slug.replace("-", " ")
    return text[:1].upper() + text[1:]


def build_destination_aggregate(
    packages: Iterable[FlightPackage],
    destination_slug: str,
    featured_limit: int = FEATURED_LIMIT,
) -> DestinationAggregate:
    """Summarize the published packages of one destination.

    Zero qualifying packages gives ``package_count == 0`` with every derived
    field empty; callers treat that the same as not found.
    """
    selected = [p for p in packages if p.is_published and matches_destination(p, destination_slug)]

    if not selected:
        return DestinationAggregate(
            destination_name=destination_display_name(destination_slug),
            destination_slug=destination_slug,
        )

    prices = [p.price for p in selected if p.price is not None and p.price > 0]
    tag_counts: Counter = Counter(tag for p in selected for tag in p.tags)
    buckets = _duration_histogram(selected)

    return DestinationAggregate(
        destination_name=selected[0].category or destination_display_name(destination_slug),
        destination_slug=destination_slug,
        package_count=len(selected),
        price_min=min(prices) if prices else None,
        price_median=median(prices),
        price_max=max(prices) if prices else None,
        top_tags=[tag for tag, _count in tag_counts.most_common(TOP_TAGS_LIMIT)],
        duration_buckets=buckets,
        top_duration_buckets=_typical_durations(buckets),
        top_inclusions=_top_inclusions(selected),
        top_hotels=_top_hotels(selected),
        featured_packages=featured_order(selected)[:featured_limit],
        all_packages=selected,
    )
