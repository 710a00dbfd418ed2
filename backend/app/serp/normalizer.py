"""
Raw SerpApi payload → typed SERP items.

Every access on the raw payload tolerates absence: missing arrays are empty,
missing strings are "", non-dict items are skipped.
"""

import math
from typing import Any, Iterable
from urllib.parse import urlparse

from app.serp.classifier import classify_landing_type
from app.serp.schemas import AdResult, FeaturedSnippet, OrganicResult, PeopleAlsoAsk

UNKNOWN_ADVERTISER = "Unknown advertiser"


def extract_domain(url: str) -> str:
    """Return the hostname from *url* without a leading ``www.``; "" if unparseable."""
    try:
        host = urlparse(url or "").hostname or ""
    except ValueError:
        return ""
    return host.removeprefix("www.")


def _list_field(payload: Any, key: str) -> list[Any]:
    if not isinstance(payload, dict):
        return []
    value = payload.get(key)
    return value if isinstance(value, list) else []


def _dict_items(items: Iterable[Any]) -> list[dict[str, Any]]:
    return [item for item in items if isinstance(item, dict)]


def _text(item: dict[str, Any], key: str) -> str:
    value = item.get(key)
    if value is None:
        return ""
    return value if isinstance(value, str) else str(value)


def normalize_organic_results(payload: Any) -> list[OrganicResult]:
    results = []
    for item in _dict_items(_list_field(payload, "organic_results")):
        link = _text(item, "link")
        results.append(
            OrganicResult(
                title=_text(item, "title"),
                link=link,
                domain=extract_domain(link),
                snippet=_text(item, "snippet"),
            )
        )
    return results


def normalize_paa(payload: Any) -> list[PeopleAlsoAsk]:
    return [
        PeopleAlsoAsk(question=_text(item, "question"), snippet=_text(item, "snippet"))
        for item in _dict_items(_list_field(payload, "related_questions"))
    ]


def normalize_featured_snippet(payload: Any) -> FeaturedSnippet:
    box = payload.get("answer_box") if isinstance(payload, dict) else None
    # An empty box is still a box.
    if box is None:
        return FeaturedSnippet(exists=False, type=None)
    box_type = None
    if isinstance(box, dict):
        box_type = box.get("type") or box.get("answer_type")
    return FeaturedSnippet(exists=True, type=str(box_type) if box_type else "unknown")


def _position(value: Any, index: int) -> int:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return index
    if not math.isfinite(value):
        return index
    return int(value)


def normalize_ad_results(raw_ads: Iterable[Any]) -> list[AdResult]:
    """Map provider ad dicts to AdResult, assigning a landing type to each."""
    ads = []
    for index, ad in enumerate(_dict_items(raw_ads or []), start=1):
        extra_headlines = ad.get("headlines") if isinstance(ad.get("headlines"), list) else []
        headlines = [str(h) for h in [ad.get("title"), *extra_headlines] if h]

        link = _text(ad, "link") or _text(ad, "url")
        link_domain = extract_domain(link)
        advertiser = (
            _text(ad, "source")
            or _text(ad, "displayed_link")
            or _text(ad, "domain")
            or link_domain
            or UNKNOWN_ADVERTISER
        )
        ads.append(
            AdResult(
                advertiser=advertiser,
                domain=link_domain or advertiser,
                headline=headlines[0] if headlines else "",
                headlines=headlines,
                description=_text(ad, "description"),
                url=link,
                position=_position(ad.get("position"), index),
                landing_type=classify_landing_type(link),
            )
        )
    return ads
