"""Ad intel: ad fetch planning, fetch-with-fallback, insights and the ad intel flow."""

from .ad_fetch import extract_ads, fetch_ads_with_fallback
from .insights import build_rule_based_insights, merge_ad_insights
from .pipeline import run_ad_intel
from .query_planner import build_ad_fetch_plans
from .schemas import AdFetchResult, AdIntelResult, CopyCluster, Insights

__all__ = [
    "extract_ads",
    "fetch_ads_with_fallback",
    "build_rule_based_insights",
    "merge_ad_insights",
    "run_ad_intel",
    "build_ad_fetch_plans",
    "AdFetchResult",
    "AdIntelResult",
    "CopyCluster",
    "Insights",
]
