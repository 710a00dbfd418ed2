"""
SEO opportunity pipeline: fetch SERP → normalize → classify → score → LLM overlay.

Single entry point: run_seo_opportunity(keyword, market).
"""

import logging
from typing import Optional

from app.config import Settings, get_settings
from app.exceptions import InputValidationError
from app.serp.classifier import detect_serp_format, summarize_result_types
from app.serp.clients import SerpApiClient
from app.serp.content_analysis import (
    build_fallback_content,
    generate_seo_content_analysis,
    merge_content_analysis,
)
from app.serp.markets import normalize_market_code
from app.serp.normalizer import (
    normalize_featured_snippet,
    normalize_organic_results,
    normalize_paa,
)
from app.serp.schemas import SeoOpportunityResult, SerpSummary
from app.serp.scoring import calculate_seo_opportunity, summarize_serp_for_score

logger = logging.getLogger(__name__)

TOP_RESULTS_LIMIT = 10
PAA_LIMIT = 10


def require_keyword(keyword: Optional[str]) -> str:
    """Strip the keyword; raise InputValidationError if nothing is left."""
    value = (keyword or "").strip()
    if not value:
        raise InputValidationError("keyword is required")
    return value


def run_seo_opportunity(
    keyword: str,
    market: Optional[str] = None,
    *,
    client: Optional[SerpApiClient] = None,
    settings: Optional[Settings] = None,
) -> SeoOpportunityResult:
    """
    Score how favorable a keyword is for new content in a market.

    The rule-based score and fallback brief are computed before the optional
    LLM call, so an LLM outage only loses the narrative overlay. A client
    built here from settings is closed before returning.

    Raises:
        InputValidationError: empty keyword (no upstream call is made).
        UpstreamProviderError: the SERP provider failed.
    """
    settings = settings or get_settings()
    keyword = require_keyword(keyword)
    market = normalize_market_code(market, settings.default_market)
    if client is not None:
        return _analyze_serp(keyword, market, client, settings)
    with SerpApiClient.from_settings(settings) as owned_client:
        return _analyze_serp(keyword, market, owned_client, settings)


def _analyze_serp(keyword: str, market: str, client: SerpApiClient, settings: Settings) -> SeoOpportunityResult:
    serp_data = client.search(keyword, market, num=settings.organic_results_num)
    top_results = normalize_organic_results(serp_data)[:TOP_RESULTS_LIMIT]
    paa = normalize_paa(serp_data)[:PAA_LIMIT]
    featured_snippet = normalize_featured_snippet(serp_data)
    ads = serp_data.get("ads_results")
    ads_count = len(ads) if isinstance(ads, list) else 0

    score_input = summarize_serp_for_score(top_results, len(paa), featured_snippet.exists, ads_count)
    score = calculate_seo_opportunity(score_input)
    fallback = build_fallback_content(keyword, paa)

    ai_response = generate_seo_content_analysis(
        keyword, market, top_results, paa, featured_snippet, ads_count, settings=settings
    )
    content = merge_content_analysis(ai_response, fallback)
    logger.info(
        "SEO opportunity scored",
        extra={"keyword": keyword, "market": market, "score": score.opportunity_score, "source": content.source},
    )

    return SeoOpportunityResult(
        keyword=keyword,
        market=market,
        opportunity_score=score.opportunity_score,
        score_reasons=score.reasons,
        featured_snippet=featured_snippet,
        people_also_ask_count=len(paa),
        people_also_ask=paa,
        ads_count=ads_count,
        top_results=top_results,
        content_gaps=content.content_gaps,
        content_brief=content.content_brief,
        serp_summary=SerpSummary(
            blog_guide_count=score_input.blog_guide_count,
            brand_or_ecommerce_count=score_input.brand_or_ecommerce_count,
            result_types=summarize_result_types(top_results),
            format=detect_serp_format(r.title for r in top_results),
        ),
        analysis_source=content.source,
    )
