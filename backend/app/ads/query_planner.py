"""
Ad fetch planning: which (keyword variant, market) searches to try, in order.

Direct ad placements are sparse, so the bare keyword is followed by
commercial-intent variants, first in the requested market and then in US.
"""

from app.serp.markets import FALLBACK_AD_MARKET, ad_suffixes_for, normalize_market_code
from app.serp.schemas import SearchQueryPlan

MAX_PLANS = 10


def plan_markets(market: str) -> list[str]:
    market = normalize_market_code(market)
    if market == FALLBACK_AD_MARKET:
        return [FALLBACK_AD_MARKET]
    return [market, FALLBACK_AD_MARKET]


def build_ad_intent_keyword(keyword: str, suffix: str) -> str:
    """Append *suffix* unless the keyword already contains it (case-insensitive)."""
    if suffix.lower() in keyword.lower():
        return keyword
    return f"{keyword} {suffix}"


def build_ad_fetch_plans(keyword: str, market: str, max_plans: int = MAX_PLANS) -> list[SearchQueryPlan]:
    """
    Ordered, deduplicated search plans; at most `max_plans`.

    Per market: bare keyword first, then each localized suffix variant.
    Plans are unique on (market, lowercased keyword). Blank keyword → [].
    """
    base = (keyword or "").strip()
    if not base:
        return []

    plans: list[SearchQueryPlan] = []
    seen: set[str] = set()
    for selected_market in plan_markets(market):
        variants = [base] + [build_ad_intent_keyword(base, s) for s in ad_suffixes_for(selected_market)]
        for variant in variants:
            plan = SearchQueryPlan(keyword_variant=variant, market=selected_market)
            if plan.dedup_key in seen:
                continue
            seen.add(plan.dedup_key)
            plans.append(plan)

    return plans[:max_plans]
