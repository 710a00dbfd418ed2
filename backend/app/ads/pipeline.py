"""
Ad intel pipeline: planned ad fetch → normalize → classify landings → aggregate → score → insights.

Single entry point: run_ad_intel(keyword, market).
"""

import logging
from typing import Optional

from app.ads.ad_fetch import fetch_ads_with_fallback
from app.ads.insights import (
    build_rule_based_insights,
    extract_recurring_messages,
    generate_ad_insights,
    merge_ad_insights,
)
from app.ads.schemas import AdIntelResult, AdTotals
from app.config import Settings, get_settings
from app.serp.clients import SerpApiClient
from app.serp.markets import normalize_market_code
from app.serp.normalizer import normalize_ad_results
from app.serp.pipeline import require_keyword
from app.serp.scoring import (
    calculate_ad_opportunity,
    count_unique_advertisers,
    summarize_ads_for_score,
    summarize_advertisers,
    summarize_cta_terms,
    summarize_landing_types,
)

logger = logging.getLogger(__name__)


def run_ad_intel(
    keyword: str,
    market: Optional[str] = None,
    *,
    client: Optional[SerpApiClient] = None,
    settings: Optional[Settings] = None,
) -> AdIntelResult:
    """
    Summarize the paid-search landscape for a keyword in a market.

    Returns the winning plan, aggregated advertiser / CTA / landing-type
    counts, a rule-based ad opportunity score, and insights (LLM overlay
    when configured, rule-based otherwise). A client built here from
    settings is closed before returning.

    Raises:
        InputValidationError: empty keyword (no upstream call is made).
        UpstreamProviderError: the SERP provider failed on any attempted plan.
    """
    settings = settings or get_settings()
    keyword = require_keyword(keyword)
    market = normalize_market_code(market, settings.default_market)
    if client is not None:
        return _analyze_ads(keyword, market, client, settings)
    with SerpApiClient.from_settings(settings) as owned_client:
        return _analyze_ads(keyword, market, owned_client, settings)


def _analyze_ads(keyword: str, market: str, client: SerpApiClient, settings: Settings) -> AdIntelResult:
    fetched = fetch_ads_with_fallback(keyword, market, client, num=settings.ad_results_num)
    ads = normalize_ad_results(fetched.ads)

    advertisers = summarize_advertisers(ads)
    cta_counts = summarize_cta_terms(ads)
    landing_types = summarize_landing_types(ads)
    score = calculate_ad_opportunity(summarize_ads_for_score(ads))

    fallback = build_rule_based_insights(advertisers, cta_counts, landing_types)
    ai_response = generate_ad_insights(keyword, market, ads, settings=settings) if ads else None
    insights = merge_ad_insights(ai_response, fallback)
    logger.info(
        "Ad intel computed",
        extra={
            "keyword": keyword,
            "market": market,
            "ads": len(ads),
            "ads_source": fetched.ads_source,
            "insights_source": insights.source,
        },
    )

    return AdIntelResult(
        keyword=keyword,
        market=market,
        query_used=fetched.query_used,
        market_used=fetched.market_used,
        ads_source=fetched.ads_source,
        attempted_queries=fetched.attempted_queries,
        totals=AdTotals(ad_count=len(ads), unique_advertisers=count_unique_advertisers(ads)),
        advertisers=advertisers,
        cta_counts=cta_counts,
        landing_type_distribution=landing_types,
        recurring_messages=extract_recurring_messages(ads),
        ads=ads,
        opportunity_score=score.opportunity_score,
        score_reasons=score.reasons,
        insights=insights,
    )
