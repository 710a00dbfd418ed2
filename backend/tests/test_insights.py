"""Tests for rule-based ad insights, recurring messages and the LLM merge."""

from unittest.mock import patch

from app.ads.insights import (
    build_rule_based_insights,
    extract_recurring_messages,
    generate_ad_insights,
    merge_ad_insights,
)
from app.serp.normalizer import normalize_ad_results
from app.serp.schemas import AdResult, AdvertiserCount, CtaCount, LandingTypeCount


def rule_based():
    return build_rule_based_insights(
        [AdvertiserCount(advertiser="acme.se", count=2)],
        [CtaCount(term="demo", count=3)],
        [LandingTypeCount(type="demo_leadgen", count=1)],
    )


def cluster(name):
    return {"name": name, "summary": f"{name} summary", "examples": [f"{name} ex"]}


class TestRecurringMessages:
    def test_sample_ads_hit_every_bucket(self, raw_ads):
        ads = normalize_ad_results(raw_ads)
        assert extract_recurring_messages(ads) == ["Discount", "Free demo", "Free trial", "Fast setup", "No lock-in"]

    def test_subset_in_bucket_order(self):
        ads = [AdResult(advertiser="A", position=1, headline="Cancel anytime", description="Save 20%")]
        assert extract_recurring_messages(ads) == ["Discount", "No lock-in"]

    def test_no_ads(self):
        assert extract_recurring_messages([]) == []


class TestRuleBasedInsights:
    def test_full_aggregates(self):
        insights = rule_based()
        assert insights.source == "rule_based"
        assert [c.name for c in insights.copy_clusters] == ["CTA-focused messaging", "Landing pattern"]
        assert insights.copy_clusters[0].examples == ["demo"]
        assert insights.market_summary == [
            "acme.se is the most active with 2 ads.",
            'The most common CTA term is "demo".',
            "Most ads lead to landing pages of type demo_leadgen.",
        ]
        assert len(insights.differentiation_suggestions) == 3
        assert insights.ab_test_idea

    def test_no_aggregates(self):
        insights = build_rule_based_insights([], [], [])
        assert insights.copy_clusters == []
        assert insights.market_summary == []
        assert insights.ab_test_idea


class TestMergeAdInsights:
    def test_non_object_keeps_fallback(self):
        fb = rule_based()
        assert merge_ad_insights(None, fb) is fb
        assert merge_ad_insights(["x"], fb) is fb

    def test_valid_candidate(self):
        candidate = {
            "copyClusters": [cluster("Price"), cluster("Speed"), cluster("Trust")],
            "marketSummary": ["a", "b", "c"],
            "differentiationSuggestions": ["d", "e"],
            "abTestIdea": "Test X vs Y",
        }
        merged = merge_ad_insights(candidate, rule_based())
        assert merged.source == "ai"
        assert [c.name for c in merged.copy_clusters] == ["Price", "Speed", "Trust"]
        assert merged.copy_clusters[0].summary == "Price summary"
        assert merged.market_summary == ["a", "b", "c"]
        assert merged.differentiation_suggestions == ["d", "e"]
        assert merged.ab_test_idea == "Test X vs Y"

    def test_too_few_clusters_fall_back(self):
        fb = rule_based()
        candidate = {
            "copyClusters": [cluster("Price"), {"summary": "no name"}, "junk"],
            "marketSummary": ["a", "b", "c", "d", "e", "f", "g"],
            "differentiationSuggestions": ["only one"],
        }
        merged = merge_ad_insights(candidate, fb)
        assert merged.source == "ai"
        assert merged.copy_clusters == fb.copy_clusters
        assert merged.market_summary == ["a", "b", "c", "d", "e", "f"]
        assert merged.differentiation_suggestions == fb.differentiation_suggestions
        assert merged.ab_test_idea == fb.ab_test_idea

    def test_clusters_truncated_and_examples_cleaned(self):
        clusters = [cluster(f"C{i}") for i in range(7)]
        clusters[0]["examples"] = ["a", " ", "b", "c", "d"]
        merged = merge_ad_insights({"copyClusters": clusters}, rule_based())
        assert len(merged.copy_clusters) == 5
        assert merged.copy_clusters[0].examples == ["a", "b", "c"]


class TestGenerateAdInsights:
    def test_prompt_contains_ads_without_urls(self, raw_ads, settings_with_ai):
        ads = normalize_ad_results(raw_ads)
        with patch("app.ads.insights.request_json_object", return_value=None) as mock_req:
            assert generate_ad_insights("crm", "SE", ads, settings=settings_with_ai) is None

        prompt = mock_req.call_args.args[0]
        assert "Boka demo av vårt CRM" in prompt
        assert '"landingType": "demo_leadgen"' in prompt
        assert "https://www.acme.se/boka-demo" not in prompt
