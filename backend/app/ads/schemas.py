"""
Ad intel: pydantic schemas for the ad fetch result, insights and the final response.
"""

from typing import Any

from pydantic import Field

from app.serp.schemas import (
    AdResult,
    AdvertiserCount,
    CamelModel,
    CtaCount,
    InsightsSource,
    LandingTypeCount,
)


class AdFetchResult(CamelModel):
    """Outcome of the sequential ad fetch: raw ads plus which plan produced them."""

    ads: list[dict[str, Any]] = Field(default_factory=list, description="Raw provider ad dicts")
    ads_source: str = Field(default="none", description="Payload field the ads came from, or 'none'")
    query_used: str
    market_used: str
    attempted_queries: list[str] = Field(default_factory=list, description="'<MARKET>: <keyword>' per plan tried")


class CopyCluster(CamelModel):
    name: str
    summary: str = ""
    examples: list[str] = Field(default_factory=list)


class Insights(CamelModel):
    source: InsightsSource = "rule_based"
    copy_clusters: list[CopyCluster] = Field(default_factory=list)
    market_summary: list[str] = Field(default_factory=list)
    differentiation_suggestions: list[str] = Field(default_factory=list)
    ab_test_idea: str = ""


class AdTotals(CamelModel):
    ad_count: int = 0
    unique_advertisers: int = 0


class AdIntelResult(CamelModel):
    keyword: str
    market: str
    query_used: str
    market_used: str
    ads_source: str
    attempted_queries: list[str] = Field(default_factory=list)
    totals: AdTotals
    advertisers: list[AdvertiserCount] = Field(default_factory=list)
    cta_counts: list[CtaCount] = Field(default_factory=list)
    landing_type_distribution: list[LandingTypeCount] = Field(default_factory=list)
    recurring_messages: list[str] = Field(default_factory=list)
    ads: list[AdResult] = Field(default_factory=list)
    opportunity_score: int = Field(..., ge=0, le=100)
    score_reasons: list[str] = Field(default_factory=list)
    insights: Insights
