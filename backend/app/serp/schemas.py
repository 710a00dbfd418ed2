"""
SERP intel: pydantic schemas shared by the SEO-opportunity and ad-intel flows.

Attributes are snake_case; serialized output uses camelCase aliases.
"""

from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

InsightsSource = Literal["rule_based", "ai"]


class CamelModel(BaseModel):
    """Base model serializing to camelCase keys."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ----- Query planning -----


class SearchQueryPlan(CamelModel):
    """One (keyword variant, market) search to try when hunting for ads."""

    model_config = ConfigDict(frozen=True)

    keyword_variant: str
    market: str

    @property
    def dedup_key(self) -> str:
        return f"{self.market}|{self.keyword_variant.lower()}"


# ----- Normalized SERP items -----


class OrganicResult(CamelModel):
    title: str = ""
    link: str = ""
    domain: str = Field(default="", description="Host of link without www., empty if unparseable")
    snippet: str = ""


class PeopleAlsoAsk(CamelModel):
    question: str = ""
    snippet: str = ""


class FeaturedSnippet(CamelModel):
    exists: bool = False
    type: Optional[str] = None


class AdResult(CamelModel):
    advertiser: str
    domain: str = ""
    headline: str = ""
    headlines: list[str] = Field(default_factory=list)
    description: str = ""
    url: str = ""
    position: int
    landing_type: str = "generic"


# ----- Scoring -----


class ScoreInput(CamelModel):
    """Aggregated SERP counts feeding the SEO opportunity score."""

    model_config = ConfigDict(frozen=True)

    blog_guide_count: int = 0
    brand_or_ecommerce_count: int = 0
    paa_count: int = 0
    has_featured_snippet: bool = False
    ads_count: int = 0


class AdScoreInput(CamelModel):
    """Aggregated ad-landscape counts feeding the ad opportunity score."""

    model_config = ConfigDict(frozen=True)

    ad_count: int = 0
    unique_advertisers: int = 0
    top_advertiser_count: int = 0
    cta_mentions: int = 0
    generic_landing_count: int = 0


class ScoreOutput(CamelModel):
    opportunity_score: int = Field(..., ge=0, le=100)
    reasons: list[str] = Field(default_factory=list)


# ----- SERP format signals -----


class SerpFormat(CamelModel):
    year_count: int = 0
    keyword_pattern_count: int = 0
    list_signals: int = 0
    guide_signals: int = 0
    recommended_format: Literal["list", "guide", "mixed"] = "mixed"


# ----- SEO opportunity output -----


class ContentBrief(CamelModel):
    h1: str
    h2: list[str] = Field(default_factory=list)
    faq: list[str] = Field(default_factory=list)
    cta: str


class SerpSummary(CamelModel):
    blog_guide_count: int = 0
    brand_or_ecommerce_count: int = 0
    result_types: dict[str, int] = Field(default_factory=dict)
    format: SerpFormat = Field(default_factory=SerpFormat)


class SeoOpportunityResult(CamelModel):
    keyword: str
    market: str
    opportunity_score: int = Field(..., ge=0, le=100)
    score_reasons: list[str] = Field(default_factory=list)
    featured_snippet: FeaturedSnippet
    people_also_ask_count: int = 0
    people_also_ask: list[PeopleAlsoAsk] = Field(default_factory=list)
    ads_count: int = 0
    top_results: list[OrganicResult] = Field(default_factory=list)
    content_gaps: list[str] = Field(default_factory=list)
    content_brief: ContentBrief
    serp_summary: SerpSummary
    analysis_source: InsightsSource = "rule_based"


# ----- Ad landscape aggregates -----


class AdvertiserCount(CamelModel):
    advertiser: str
    count: int


class CtaCount(CamelModel):
    term: str
    count: int


class LandingTypeCount(CamelModel):
    type: str
    count: int
