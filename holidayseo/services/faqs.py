"""Rule-based FAQ generation.

Each rule emits one question only when the field it is about is present, and
its answer quotes that field, so generated FAQs never state anything the
record does not.  Rule order is fixed and the output is capped, which makes
generation deterministic for a given record.
"""

from typing import Callable, List, Optional

from holidayseo.models.package import FlightPackage
from holidayseo.models.view import DestinationAggregate, FaqItem
from holidayseo.services.text import extract_bullet_points, format_price, sentence_mentioning, strip_html

PACKAGE_FAQ_LIMIT = 10
DESTINATION_FAQ_LIMIT = 12

PackageRule = Callable[[FlightPackage], Optional[FaqItem]]


# ---------------------------------------------------------------------------
# Package-level rules
# ---------------------------------------------------------------------------

def _duration(pkg: FlightPackage) -> Optional[FaqItem]:
    if not pkg.duration:
        return None
    return FaqItem(
        question=f"How long is the {pkg.title} holiday?",
        answer=f"This holiday lasts {pkg.duration}.",
    )


def _price(pkg: FlightPackage) -> Optional[FaqItem]:
    if pkg.price is None or pkg.price <= 0:
        return None
    return FaqItem(
        question=f"How much does the {pkg.title} holiday cost?",
        answer=f"Prices start from £{format_price(pkg.price)} {pkg.price_label}, based on the lowest available fare.",
    )


def _accommodation(pkg: FlightPackage) -> Optional[FaqItem]:
    names = [a.name for a in pkg.accommodations if a.name]
    if not names:
        return None
    return FaqItem(
        question="Where will I stay on this holiday?",
        answer=f"Accommodation on this holiday includes {', '.join(names[:3])}.",
    )


def _inclusions(pkg: FlightPackage) -> Optional[FaqItem]:
    items = [item.strip() for item in pkg.whats_included if item.strip()]
    if not items:
        return None
    return FaqItem(
        question="What is included in the price?",
        answer=f"The price includes: {'; '.join(items[:5])}.",
    )


def _other_info_faq(question: str, *keywords: str) -> PackageRule:
    """Rule quoting the first sentence of ``other_info`` that mentions a keyword."""

    def rule(pkg: FlightPackage) -> Optional[FaqItem]:
        sentence = sentence_mentioning(strip_html(pkg.other_info), *keywords)
        if not sentence:
            return None
        return FaqItem(question=question, answer=sentence)

    return rule


def _exclusions(pkg: FlightPackage) -> Optional[FaqItem]:
    items = extract_bullet_points(pkg.excluded, 5)
    if not items:
        return None
    return FaqItem(
        question="What is not included in the price?",
        answer=f"Not included: {'; '.join(items)}.",
    )


def _taxes(pkg: FlightPackage) -> Optional[FaqItem]:
    sentence = sentence_mentioning(strip_html(pkg.other_info), "tax") or sentence_mentioning(
        " ".join(extract_bullet_points(pkg.excluded, 20)), "tax"
    )
    if not sentence:
        return None
    return FaqItem(question="Are there any local taxes to pay?", answer=sentence)


def _destination(pkg: FlightPackage) -> Optional[FaqItem]:
    if not pkg.category:
        return None
    places = [c for c in pkg.countries if c] or [pkg.category]
    return FaqItem(
        question="Which destination does this holiday visit?",
        answer=f"This is a {pkg.category} holiday visiting {', '.join(places)}.",
    )


def _single_price(pkg: FlightPackage) -> Optional[FaqItem]:
    if pkg.single_price is None or pkg.single_price <= 0:
        return None
    return FaqItem(
        question="Is there a price for solo travellers?",
        answer=f"Yes, solo travellers can book from £{format_price(pkg.single_price)} per person.",
    )


def _itinerary(pkg: FlightPackage) -> Optional[FaqItem]:
    if not pkg.itinerary:
        return None
    first = pkg.itinerary[0]
    return FaqItem(
        question="What does the itinerary look like?",
        answer=(
            f"The itinerary covers {len(pkg.itinerary)} days, starting with "
            f"Day {first.day}: {first.title or 'arrival'}."
        ),
    )


PACKAGE_RULES: List[PackageRule] = [
    _duration,
    _price,
    _accommodation,
    _inclusions,
    _other_info_faq("Is travel insurance included?", "insurance"),
    _exclusions,
    _taxes,
    _other_info_faq("What are the hotel check-in and check-out times?", "check-in", "check in", "check-out", "check out"),
    _other_info_faq("How do I receive my booking confirmation?", "confirm"),
    _destination,
    _single_price,
    _itinerary,
]


def generate_package_faqs(pkg: FlightPackage, limit: int = PACKAGE_FAQ_LIMIT) -> List[FaqItem]:
    """FAQs for one package, in rule order, capped at *limit*."""
    faqs: List[FaqItem] = []
    for rule in PACKAGE_RULES:
        item = rule(pkg)
        if item is not None:
            faqs.append(item)
        if len(faqs) >= limit:
            break
    return faqs


# ---------------------------------------------------------------------------
# Destination-level rules
# ---------------------------------------------------------------------------

def _inclusion_share(agg: DestinationAggregate, *keywords: str) -> float:
    for inclusion in agg.top_inclusions:
        name = inclusion.name.lower()
        if any(keyword in name for keyword in keywords):
            return inclusion.percentage
    return 0.0


def generate_destination_faqs(
    agg: DestinationAggregate,
    contact_email: str,
    limit: int = DESTINATION_FAQ_LIMIT,
) -> List[FaqItem]:
    """FAQs for a destination page, derived from its aggregate."""
    if agg.package_count == 0:
        return []

    name = agg.destination_name
    faqs: List[FaqItem] = [
        FaqItem(
            question=f"How many holiday packages are available to {name}?",
            answer=(
                f"We currently have {agg.package_count} holiday packages to {name} in our collection, "
                "with options for different travel styles and budgets."
            ),
        )
    ]

    if agg.top_duration_buckets:
        faqs.append(
            FaqItem(
                question=f"How long are typical holidays to {name}?",
                answer=(
                    f"Most of our {name} holidays last {' or '.join(agg.top_duration_buckets)}. "
                    "We offer trips ranging from short breaks to extended tours to suit your schedule."
                ),
            )
        )

    if agg.price_min is not None:
        faqs.append(
            FaqItem(
                question=f"What is the starting price for {name} holidays?",
                answer=(
                    f"{name} holiday packages start from £{format_price(agg.price_min)} per person. "
                    "Prices vary based on departure dates, accommodation, and inclusions."
                ),
            )
        )

    if agg.top_tags:
        faqs.append(
            FaqItem(
                question=f"What types of holidays to {name} do you offer?",
                answer=(
                    f"Our {name} collection includes {', '.join(agg.top_tags[:4])} holidays. "
                    "Browse our packages to find your ideal trip."
                ),
            )
        )

    if _inclusion_share(agg, "flight") >= 50:
        flights_answer = (
            f"Many of our {name} packages include return flights from the UK. "
            "Check individual package details for specific inclusions."
        )
    else:
        flights_answer = (
            "Some packages include flights while others are land-only arrangements. "
            "Each package clearly states what's included."
        )
    faqs.append(FaqItem(question=f"Are flights included in {name} holiday packages?", answer=flights_answer))

    if _inclusion_share(agg, "transfer", "airport") >= 40:
        faqs.append(
            FaqItem(
                question="Are airport transfers included?",
                answer=(
                    f"Many of our {name} packages include airport transfers. "
                    "This is noted in the \"What's Included\" section of each package."
                ),
            )
        )

    faqs += [
        FaqItem(
            question=f"Is travel insurance included in {name} holidays?",
            answer=(
                "Travel insurance is not included in our packages. We strongly recommend arranging "
                "comprehensive travel insurance before departure to cover cancellations, medical "
                "emergencies, and baggage."
            ),
        ),
        FaqItem(
            question=f"Are there any local taxes to pay in {name}?",
            answer=(
                "Local city or tourist taxes may apply and are usually payable directly to your hotel "
                "upon check-in or check-out. These are not included in our package prices."
            ),
        ),
        FaqItem(
            question="How do I receive my booking confirmation?",
            answer=(
                "Once your booking is processed and payment confirmed, you will receive a confirmation "
                "email with all your travel documents and vouchers."
            ),
        ),
        FaqItem(
            question=f"Can I customise my {name} holiday package?",
            answer=(
                f"Yes. Contact us at {contact_email} to tailor your holiday. We can adjust dates, "
                "upgrade accommodation, add excursions, or combine destinations."
            ),
        ),
    ]

    if agg.top_hotels:
        faqs.append(
            FaqItem(
                question=f"Which hotels are featured in {name} packages?",
                answer=(
                    f"Popular accommodations in our {name} collection include {', '.join(agg.top_hotels[:3])}. "
                    "Browse packages for full hotel details and options."
                ),
            )
        )

    faqs.append(
        FaqItem(
            question=f"What is the best time to visit {name}?",
            answer=(
                f"Our {name} packages are available throughout the year with departures to suit "
                "different seasons. Check individual package availability for specific dates."
            ),
        )
    )

    return faqs[:limit]
