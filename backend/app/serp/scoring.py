"""
Rule-based opportunity scoring for the SEO and ad-intel flows.

Both scorers start from a baseline, apply fixed adjustments in a fixed order,
record one reason per triggered adjustment, and clamp the result to [0, 100].
"""

import re
from collections import Counter
from typing import Iterable

from app.serp.classifier import is_blog_or_guide_title, is_brand_or_ecommerce
from app.serp.schemas import (
    AdResult,
    AdScoreInput,
    AdvertiserCount,
    CtaCount,
    LandingTypeCount,
    OrganicResult,
    ScoreInput,
    ScoreOutput,
)

BASELINE_SCORE = 50
MIN_SCORE = 0
MAX_SCORE = 100

# SEO thresholds
MIN_PAA_FOR_BONUS = 4
MIN_BLOG_GUIDE_FOR_BONUS = 3
MAX_BRAND_OR_ECOMMERCE_BEFORE_PENALTY = 4
MIN_ADS_FOR_PENALTY = 3

# Ad-intel thresholds
MAX_ADVERTISERS_FOR_BONUS = 2
MIN_ADVERTISERS_FOR_PENALTY = 5
MIN_TOP_ADVERTISER_ADS_FOR_PENALTY = 3
MIN_CTA_MENTIONS_FOR_PENALTY = 5

CTA_TERMS = (
    "demo",
    "gratis",
    "rabatt",
    "offert",
    "boka",
    "prova",
    "tilbud",
    "free",
    "trial",
    "discount",
    "quote",
)


def clamp_score(score: int) -> int:
    return max(MIN_SCORE, min(MAX_SCORE, score))


def _signed(points: int) -> str:
    return f"+{points}" if points > 0 else str(points)


class _ScoreSheet:
    """Accumulates adjustments and their human-readable reasons."""

    def __init__(self, baseline: int = BASELINE_SCORE):
        self.score = baseline
        self.reasons: list[str] = []

    def adjust(self, points: int, label: str) -> None:
        self.score += points
        self.reasons.append(f"{label} ({_signed(points)})")

    def result(self) -> ScoreOutput:
        return ScoreOutput(opportunity_score=clamp_score(self.score), reasons=list(self.reasons))


# ----- SEO opportunity -----


def summarize_serp_for_score(
    top_results: list[OrganicResult],
    paa_count: int,
    has_featured_snippet: bool,
    ads_count: int,
) -> ScoreInput:
    return ScoreInput(
        blog_guide_count=sum(1 for r in top_results if is_blog_or_guide_title(r.title)),
        brand_or_ecommerce_count=sum(1 for r in top_results if is_brand_or_ecommerce(r)),
        paa_count=paa_count,
        has_featured_snippet=has_featured_snippet,
        ads_count=ads_count,
    )


def calculate_seo_opportunity(data: ScoreInput) -> ScoreOutput:
    sheet = _ScoreSheet()
    if not data.has_featured_snippet:
        sheet.adjust(10, "no featured snippet")
    if data.paa_count >= MIN_PAA_FOR_BONUS:
        sheet.adjust(10, f"{data.paa_count} PAA questions")
    if data.blog_guide_count >= MIN_BLOG_GUIDE_FOR_BONUS:
        sheet.adjust(10, f"{data.blog_guide_count} blog/guide results")
    if data.brand_or_ecommerce_count > MAX_BRAND_OR_ECOMMERCE_BEFORE_PENALTY:
        sheet.adjust(-15, f"{data.brand_or_ecommerce_count} brand/e-commerce results in top 10")
    if data.ads_count >= MIN_ADS_FOR_PENALTY:
        sheet.adjust(-10, f"{data.ads_count} ads shown")
    return sheet.result()


# ----- Ad landscape aggregation -----


def count_term_occurrences(text: str, term: str) -> int:
    """Whole-word, case-insensitive occurrences of *term* in *text*."""
    if not text or not term:
        return 0
    return len(re.findall(rf"\b{re.escape(term)}\b", text, flags=re.IGNORECASE))


def ad_copy_corpus(ads: Iterable[AdResult]) -> str:
    """Headlines and description of every ad, one ad per line.

    `headlines` already starts with the primary headline when present, so the
    headline is only used on its own for ads built without a headline list.
    """
    return " \n".join(
        " ".join(part for part in [*(ad.headlines or [ad.headline]), ad.description] if part) for ad in ads
    ).lower()


def count_unique_advertisers(ads: Iterable[AdResult]) -> int:
    return len({ad.advertiser for ad in ads})


def summarize_advertisers(ads: Iterable[AdResult]) -> list[AdvertiserCount]:
    """Advertisers by ad count, most active first (ties keep first-seen order)."""
    counts = Counter(ad.advertiser for ad in ads)
    return [AdvertiserCount(advertiser=name, count=count) for name, count in counts.most_common()]


def summarize_cta_terms(ads: Iterable[AdResult], terms: Iterable[str] = CTA_TERMS) -> list[CtaCount]:
    corpus = ad_copy_corpus(ads)
    counted = [CtaCount(term=term, count=count_term_occurrences(corpus, term)) for term in terms]
    return sorted((c for c in counted if c.count > 0), key=lambda c: -c.count)


def summarize_landing_types(ads: Iterable[AdResult]) -> list[LandingTypeCount]:
    counts = Counter(ad.landing_type for ad in ads)
    return [LandingTypeCount(type=landing_type, count=count) for landing_type, count in counts.most_common()]


def summarize_ads_for_score(ads: list[AdResult]) -> AdScoreInput:
    advertiser_counts = Counter(ad.advertiser for ad in ads)
    return AdScoreInput(
        ad_count=len(ads),
        unique_advertisers=len(advertiser_counts),
        top_advertiser_count=max(advertiser_counts.values(), default=0),
        cta_mentions=sum(c.count for c in summarize_cta_terms(ads)),
        generic_landing_count=sum(1 for ad in ads if ad.landing_type == "generic"),
    )


# ----- Ad opportunity -----


def calculate_ad_opportunity(data: AdScoreInput) -> ScoreOutput:
    sheet = _ScoreSheet()
    if data.ad_count == 0:
        sheet.adjust(25, "no paid ads found")
        return sheet.result()

    if data.unique_advertisers <= MAX_ADVERTISERS_FOR_BONUS:
        sheet.adjust(10, f"only {data.unique_advertisers} advertisers")
    if data.unique_advertisers >= MIN_ADVERTISERS_FOR_PENALTY:
        sheet.adjust(-15, f"{data.unique_advertisers} advertisers competing")
    if data.top_advertiser_count >= MIN_TOP_ADVERTISER_ADS_FOR_PENALTY:
        sheet.adjust(-10, f"top advertiser runs {data.top_advertiser_count} ads")
    if data.cta_mentions >= MIN_CTA_MENTIONS_FOR_PENALTY:
        sheet.adjust(-10, f"{data.cta_mentions} CTA mentions in ad copy")
    if data.generic_landing_count * 2 > data.ad_count:
        sheet.adjust(10, f"{data.generic_landing_count} of {data.ad_count} ads use generic landing pages")
    return sheet.result()
