"""
Fetch-with-fallback: run ad fetch plans one by one until a SERP yields ads.

Plans run sequentially and stop at the first non-empty ad list. Each plan
costs one rate-limited provider call and most return no ads, so the scan is
not parallelized.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Optional

from app.ads.query_planner import build_ad_fetch_plans
from app.ads.schemas import AdFetchResult
from app.serp.clients import SerpApiClient

logger = logging.getLogger(__name__)

# Payload fields carrying paid ads, in priority order.
AD_FIELDS = ("ads_results", "top_ads", "bottom_ads", "inline_ads", "ads")
SHOPPING_FIELDS = ("shopping_results", "inline_shopping_results")
SHOPPING_SOURCE = "shopping_results_fallback"
NO_ADS_SOURCE = "none"

MAX_ADS = 20
MAX_SHOPPING_ADS = 12
DEFAULT_AD_FETCH_NUM = 20


@dataclass(frozen=True)
class ExtractedAds:
    ads: list[dict[str, Any]] = field(default_factory=list)
    source: str = NO_ADS_SOURCE


def _list_field(payload: dict[str, Any], key: str) -> list[Any]:
    value = payload.get(key)
    return value if isinstance(value, list) else []


def shopping_item_to_ad(item: dict[str, Any]) -> dict[str, Any]:
    """Shape a shopping result like a text ad so the normalizer can read it."""
    merchant = item.get("source") or item.get("merchant") or ""
    price = item.get("price")
    return {
        "source": merchant or "Unknown advertiser",
        "title": item.get("title") or "",
        "description": f"Price: {price}" if price else "",
        "link": item.get("link") or "",
        "displayed_link": merchant,
    }


def extract_ads(payload: Any) -> ExtractedAds:
    """
    First non-empty ad field wins; otherwise synthesize ads from shopping results.
    """
    if not isinstance(payload, dict):
        return ExtractedAds()

    for key in AD_FIELDS:
        values = [v for v in _list_field(payload, key) if isinstance(v, dict)]
        if values:
            return ExtractedAds(ads=values[:MAX_ADS], source=key)

    shopping = [
        item for key in SHOPPING_FIELDS for item in _list_field(payload, key) if isinstance(item, dict)
    ][:MAX_SHOPPING_ADS]
    if shopping:
        return ExtractedAds(ads=[shopping_item_to_ad(item) for item in shopping], source=SHOPPING_SOURCE)

    return ExtractedAds()


def fetch_ads_with_fallback(
    keyword: str,
    market: str,
    client: SerpApiClient,
    num: int = DEFAULT_AD_FETCH_NUM,
) -> AdFetchResult:
    """
    Execute ad fetch plans in order and return the first plan's non-empty ads.

    No ads anywhere is a valid outcome (`ads_source == "none"`). Provider
    errors are not caught here: a failing provider fails the request.
    """
    attempted: list[str] = []
    for plan in build_ad_fetch_plans(keyword, market):
        attempted.append(f"{plan.market}: {plan.keyword_variant}")
        serp_data = client.search(plan.keyword_variant, plan.market, num=num)
        extracted = extract_ads(serp_data)
        logger.debug(
            "Ad fetch plan tried",
            extra={"query": plan.keyword_variant, "market": plan.market, "ads": len(extracted.ads)},
        )
        if extracted.ads:
            logger.info(
                "Ads found",
                extra={
                    "query": plan.keyword_variant,
                    "market": plan.market,
                    "source": extracted.source,
                    "attempts": len(attempted),
                },
            )
            return AdFetchResult(
                ads=extracted.ads,
                ads_source=extracted.source,
                query_used=plan.keyword_variant,
                market_used=plan.market,
                attempted_queries=attempted,
            )

    logger.info("No ads found for any plan", extra={"keyword": keyword, "attempts": len(attempted)})
    return AdFetchResult(
        ads=[],
        ads_source=NO_ADS_SOURCE,
        query_used=keyword,
        market_used=market,
        attempted_queries=attempted,
    )
