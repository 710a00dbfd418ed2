"""SERP normalization, classification, scoring and the SEO opportunity flow."""

from .classifier import classify_landing_type, classify_organic_result, is_brand_or_ecommerce
from .clients import SerpApiClient
from .normalizer import (
    extract_domain,
    normalize_ad_results,
    normalize_featured_snippet,
    normalize_organic_results,
    normalize_paa,
)
from .pipeline import run_seo_opportunity
from .schemas import (
    AdResult,
    FeaturedSnippet,
    OrganicResult,
    ScoreInput,
    ScoreOutput,
    SearchQueryPlan,
    SeoOpportunityResult,
)
from .scoring import calculate_ad_opportunity, calculate_seo_opportunity

__all__ = [
    "classify_landing_type",
    "classify_organic_result",
    "is_brand_or_ecommerce",
    "SerpApiClient",
    "extract_domain",
    "normalize_ad_results",
    "normalize_featured_snippet",
    "normalize_organic_results",
    "normalize_paa",
    "run_seo_opportunity",
    "calculate_ad_opportunity",
    "calculate_seo_opportunity",
    "AdResult",
    "FeaturedSnippet",
    "OrganicResult",
    "ScoreInput",
    "ScoreOutput",
    "SearchQueryPlan",
    "SeoOpportunityResult",
]
