"""
Lexical classifiers for organic results and ad landing pages.

Pure functions over fixed term lists, case-insensitive. The brand-domain list
and e-commerce detector are shared by `classify_organic_result` and
`is_brand_or_ecommerce` so both always agree.
"""

import re
from typing import Iterable, Literal

from app.serp.schemas import OrganicResult, SerpFormat

OrganicType = Literal["forum", "blogAffiliate", "brand", "ecommerce", "other"]
LandingType = Literal["pricing", "demo_leadgen", "signup", "product", "generic"]

ORGANIC_TYPES: tuple[OrganicType, ...] = ("forum", "blogAffiliate", "brand", "ecommerce", "other")

FORUM_DOMAIN_MARKERS = ("reddit.com", "forum")

# Superlative / review / guide words (sv, no, da, en)
BLOG_GUIDE_PATTERN = re.compile(
    r"\b(bästa|beste|bedste|best|top|test|guide|recension|anmeldelse|review|reviews)\b",
    re.IGNORECASE,
)

KNOWN_BRAND_DOMAINS = (
    "amazon.",
    "ikea.",
    "apple.",
    "samsung.",
    "elgiganten.",
    "mediamarkt.",
    "hm.",
    "adidas.",
    "nike.",
    "zalando.",
    "netonnet.",
    "xxl.",
    "apotea.",
)

ECOMMERCE_PATH_MARKERS = ("/shop", "/product")
# Nordic purchase words match inside compounds (köpa, priser); "buy" only as a word.
ECOMMERCE_TITLE_PATTERN = re.compile(r"köp|kjøp|køb|pris|\bbuy\b", re.IGNORECASE)

# Checked in order; first match wins.
LANDING_MARKERS: tuple[tuple[LandingType, tuple[str, ...]], ...] = (
    ("pricing", ("pricing", "pris", "priser", "price")),
    ("demo_leadgen", ("demo", "boka", "meeting", "contact", "kontakt")),
    ("signup", ("signup", "sign-up", "register", "trial")),
    ("product", ("product", "produkt", "/p/")),
)

YEAR_PATTERN = re.compile(r"\b20(2[0-9]|3[0-9])\b")
LIST_SIGNAL_PATTERN = re.compile(r"\b(bästa|beste|bedste|best|top|test)\b", re.IGNORECASE)
GUIDE_SIGNAL_PATTERN = re.compile(r"\bguide\b", re.IGNORECASE)


def _contains_any(text: str, markers: Iterable[str]) -> bool:
    return any(marker in text for marker in markers)


def is_forum_domain(domain: str) -> bool:
    return _contains_any((domain or "").lower(), FORUM_DOMAIN_MARKERS)


def is_blog_or_guide_title(title: str) -> bool:
    return bool(BLOG_GUIDE_PATTERN.search(title or ""))


def is_known_brand_domain(domain: str) -> bool:
    return _contains_any((domain or "").lower(), KNOWN_BRAND_DOMAINS)


def is_ecommerce_result(result: OrganicResult) -> bool:
    return _contains_any(result.link.lower(), ECOMMERCE_PATH_MARKERS) or bool(
        ECOMMERCE_TITLE_PATTERN.search(result.title)
    )


def is_brand_or_ecommerce(result: OrganicResult) -> bool:
    return is_known_brand_domain(result.domain) or is_ecommerce_result(result)


def classify_organic_result(result: OrganicResult) -> OrganicType:
    """Forum → blog/affiliate → brand → e-commerce → other."""
    if is_forum_domain(result.domain):
        return "forum"
    if is_blog_or_guide_title(result.title):
        return "blogAffiliate"
    if is_known_brand_domain(result.domain):
        return "brand"
    if is_ecommerce_result(result):
        return "ecommerce"
    return "other"


def summarize_result_types(results: Iterable[OrganicResult]) -> dict[str, int]:
    counts = {t: 0 for t in ORGANIC_TYPES}
    for result in results:
        counts[classify_organic_result(result)] += 1
    return counts


def classify_landing_type(url: str) -> LandingType:
    """Pricing → demo/leadgen → signup → product → generic, by URL markers."""
    value = (url or "").lower()
    for landing_type, markers in LANDING_MARKERS:
        if _contains_any(value, markers):
            return landing_type
    return "generic"


def detect_matched_labels(text: str, buckets: dict[str, Iterable[str]]) -> frozenset[str]:
    """Labels whose terms occur in *text* (substring, case-insensitive)."""
    lowered = (text or "").lower()
    return frozenset(label for label, terms in buckets.items() if _contains_any(lowered, terms))


def detect_serp_format(titles: Iterable[str]) -> SerpFormat:
    """Count year / list / guide title signals and pick the dominant content format."""
    year_count = keyword_pattern_count = list_signals = guide_signals = 0
    for title in titles:
        title = title or ""
        if YEAR_PATTERN.search(title):
            year_count += 1
        has_list = bool(LIST_SIGNAL_PATTERN.search(title))
        has_guide = bool(GUIDE_SIGNAL_PATTERN.search(title))
        if has_list or has_guide:
            keyword_pattern_count += 1
        list_signals += has_list
        guide_signals += has_guide

    recommended = "mixed"
    if list_signals > guide_signals and list_signals > 0:
        recommended = "list"
    elif guide_signals > list_signals and guide_signals > 0:
        recommended = "guide"

    return SerpFormat(
        year_count=year_count,
        keyword_pattern_count=keyword_pattern_count,
        list_signals=list_signals,
        guide_signals=guide_signals,
        recommended_format=recommended,
    )
