"""
Ad insights: rule-based copy clusters / market summary, with an optional LLM overlay.

The LLM is asked for copyClusters (3-5), marketSummary (3-6),
differentiationSuggestions (2-3) and abTestIdea. Malformed fields fall back
to the rule-based value one by one; the rest of the LLM answer is kept.
"""

import json
from typing import Any, Optional

from app.ads.schemas import CopyCluster, Insights
from app.config import Settings
from app.llm_utils import request_json_object
from app.serp.classifier import detect_matched_labels
from app.serp.merge_guard import clean_string, clean_string_list, pick
from app.serp.schemas import AdResult, AdvertiserCount, CtaCount, LandingTypeCount
from app.serp.scoring import ad_copy_corpus

COPY_CLUSTERS_MIN, COPY_CLUSTERS_MAX = 3, 5
CLUSTER_EXAMPLES_MAX = 3
MARKET_SUMMARY_MIN, MARKET_SUMMARY_MAX = 3, 6
DIFFERENTIATION_MIN, DIFFERENTIATION_MAX = 2, 3

RECURRING_MESSAGE_BUCKETS: dict[str, tuple[str, ...]] = {
    "Discount": ("rabatt", "%", "spara", "kampanj", "deal", "discount", "save"),
    "Free demo": ("gratis demo", "demo", "book demo"),
    "Free trial": ("gratis test", "free trial", "prova gratis"),
    "Fast setup": ("snabb", "kom igång", "på minuter", "direkt", "in minutes"),
    "No lock-in": ("ingen bindning", "utan bindning", "cancel anytime"),
}

AD_INSIGHTS_PROMPT = """You are a paid search analyst.
Use ONLY the input data. No outside knowledge and nothing made up.
Return ONLY valid JSON with this schema:
{{
  "copyClusters": [
    {{ "name": "...", "summary": "...", "examples": ["..."] }}
  ],
  "marketSummary": ["..."],
  "differentiationSuggestions": ["..."],
  "abTestIdea": "..."
}}
Rules:
- 3 to 5 copyClusters
- marketSummary: 3 to 6 bullets
- differentiationSuggestions: 2 to 3 bullets
- abTestIdea: 1 concrete idea
- plain language, match the market ({market})

Input:
{payload}"""


def extract_recurring_messages(ads: list[AdResult]) -> list[str]:
    """Recurring value propositions found in the ad copy, in bucket order."""
    if not ads:
        return []
    matched = detect_matched_labels(ad_copy_corpus(ads), RECURRING_MESSAGE_BUCKETS)
    return [label for label in RECURRING_MESSAGE_BUCKETS if label in matched]


def build_rule_based_insights(
    advertisers: list[AdvertiserCount],
    cta_counts: list[CtaCount],
    landing_types: list[LandingTypeCount],
) -> Insights:
    top_advertiser = advertisers[0] if advertisers else None
    top_cta = cta_counts[0] if cta_counts else None
    top_landing = landing_types[0] if landing_types else None

    clusters = []
    if top_cta:
        clusters.append(
            CopyCluster(
                name="CTA-focused messaging",
                examples=[top_cta.term],
                summary=f"Many ads push '{top_cta.term}' in headline or description.",
            )
        )
    if top_landing:
        clusters.append(
            CopyCluster(
                name="Landing pattern",
                examples=[top_landing.type],
                summary=f"The most common landing page type is {top_landing.type}.",
            )
        )

    summary = []
    if top_advertiser:
        summary.append(f"{top_advertiser.advertiser} is the most active with {top_advertiser.count} ads.")
    if top_cta:
        summary.append(f'The most common CTA term is "{top_cta.term}".')
    if top_landing:
        summary.append(f"Most ads lead to landing pages of type {top_landing.type}.")

    return Insights(
        source="rule_based",
        copy_clusters=clusters[:COPY_CLUSTERS_MAX],
        market_summary=summary[:MARKET_SUMMARY_MAX],
        differentiation_suggestions=[
            "Test a clearer value proposition than the market's standard message.",
            "Differentiate with concrete proof (customer case or number) in headline or description.",
            "Use a landing page with a sharper next step than competitors.",
        ],
        ab_test_idea='A/B test the CTA: "Book a demo" vs "Try for free" and compare CTR and conversion.',
    )


def generate_ad_insights(
    keyword: str,
    market: str,
    ads: list[AdResult],
    settings: Optional[Settings] = None,
) -> Optional[dict[str, Any]]:
    """Best-effort LLM call; None when unconfigured or on any failure."""
    fields = {"advertiser", "domain", "headline", "headlines", "description", "landing_type"}
    payload = {
        "keyword": keyword,
        "market": market,
        "ads": [ad.model_dump(by_alias=True, include=fields) for ad in ads],
    }
    prompt = AD_INSIGHTS_PROMPT.format(market=market, payload=json.dumps(payload, ensure_ascii=False))
    return request_json_object(prompt, settings)


def _clean_copy_clusters(value: Any) -> Optional[list[CopyCluster]]:
    if not isinstance(value, list):
        return None
    clusters = []
    for item in value:
        if not isinstance(item, dict):
            continue
        name = clean_string(item.get("name"))
        if not name:
            continue
        clusters.append(
            CopyCluster(
                name=name,
                summary=clean_string(item.get("summary")) or "",
                examples=clean_string_list(item.get("examples"), 1, CLUSTER_EXAMPLES_MAX) or [],
            )
        )
    if len(clusters) < COPY_CLUSTERS_MIN:
        return None
    return clusters[:COPY_CLUSTERS_MAX]


def merge_ad_insights(candidate: Optional[Any], fallback: Insights) -> Insights:
    """
    Field-level merge of LLM insights over the rule-based fallback.

    A non-object candidate returns the fallback unchanged. Otherwise the result
    is tagged "ai" and each malformed field borrows the fallback value.
    """
    if not isinstance(candidate, dict):
        return fallback
    return Insights(
        source="ai",
        copy_clusters=pick(_clean_copy_clusters(candidate.get("copyClusters")), fallback.copy_clusters),
        market_summary=pick(
            clean_string_list(candidate.get("marketSummary"), MARKET_SUMMARY_MIN, MARKET_SUMMARY_MAX),
            fallback.market_summary,
        ),
        differentiation_suggestions=pick(
            clean_string_list(
                candidate.get("differentiationSuggestions"), DIFFERENTIATION_MIN, DIFFERENTIATION_MAX
            ),
            fallback.differentiation_suggestions,
        ),
        ab_test_idea=pick(clean_string(candidate.get("abTestIdea")), fallback.ab_test_idea),
    )
