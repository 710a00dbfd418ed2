"""HTTP surface tests: request shape, camelCase responses and error mapping."""

from unittest.mock import patch

import pytest
from fastapi.testclient import TestClient

from app.ads.schemas import AdIntelResult, AdTotals, Insights
from app.exceptions import InputValidationError, ProviderConfigurationError, UpstreamProviderError
from app.main import app
from app.serp.schemas import ContentBrief, FeaturedSnippet, SeoOpportunityResult, SerpSummary


@pytest.fixture
def client():
    return TestClient(app)


def seo_result():
    return SeoOpportunityResult(
        keyword="crm",
        market="SE",
        opportunity_score=70,
        score_reasons=["no featured snippet (+10)", "5 PAA questions (+10)"],
        featured_snippet=FeaturedSnippet(),
        content_brief=ContentBrief(h1="crm", cta="Next step"),
        serp_summary=SerpSummary(),
    )


def ad_result():
    return AdIntelResult(
        keyword="crm",
        market="SE",
        query_used="crm",
        market_used="SE",
        ads_source="none",
        attempted_queries=["SE: crm"],
        totals=AdTotals(),
        opportunity_score=75,
        score_reasons=["no paid ads found (+25)"],
        insights=Insights(),
    )


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


class TestSeoOpportunityRoute:
    def test_success_is_camel_case(self, client):
        with patch("app.main.run_seo_opportunity", return_value=seo_result()) as mock_run:
            response = client.post("/api/v1/seo/opportunity", json={"keyword": "crm", "market": "se"})

        mock_run.assert_called_once_with("crm", "se")
        assert response.status_code == 200
        body = response.json()
        assert body["opportunityScore"] == 70
        assert body["scoreReasons"][0] == "no featured snippet (+10)"
        assert body["featuredSnippet"] == {"exists": False, "type": None}
        assert body["contentBrief"]["h1"] == "crm"
        assert body["analysisSource"] == "rule_based"

    def test_market_optional(self, client):
        with patch("app.main.run_seo_opportunity", return_value=seo_result()) as mock_run:
            client.post("/api/v1/seo/opportunity", json={"keyword": "crm"})
        mock_run.assert_called_once_with("crm", None)

    @pytest.mark.parametrize(
        "error,status",
        [
            (InputValidationError("keyword is required"), 400),
            (ProviderConfigurationError("Missing SERPAPI_API_KEY (or SERPAPI_KEY)"), 503),
            (UpstreamProviderError("SERP API request failed with status 500", status_code=500), 502),
        ],
    )
    def test_error_mapping(self, client, error, status):
        with patch("app.main.run_seo_opportunity", side_effect=error):
            response = client.post("/api/v1/seo/opportunity", json={"keyword": "crm"})
        assert response.status_code == status
        assert response.json() == {"detail": error.message}

    def test_empty_keyword_rejected_by_pipeline(self, client):
        response = client.post("/api/v1/seo/opportunity", json={"keyword": "   "})
        assert response.status_code == 400
        assert response.json() == {"detail": "keyword is required"}


class TestAdIntelRoute:
    def test_success_is_camel_case(self, client):
        with patch("app.main.run_ad_intel", return_value=ad_result()) as mock_run:
            response = client.post("/api/v1/ads/intel", json={"keyword": "crm", "market": "SE"})

        mock_run.assert_called_once_with("crm", "SE")
        assert response.status_code == 200
        body = response.json()
        assert body["queryUsed"] == "crm"
        assert body["marketUsed"] == "SE"
        assert body["adsSource"] == "none"
        assert body["attemptedQueries"] == ["SE: crm"]
        assert body["totals"] == {"adCount": 0, "uniqueAdvertisers": 0}
        assert body["recurringMessages"] == []
        assert body["insights"]["source"] == "rule_based"

    @pytest.mark.parametrize(
        "error,status",
        [
            (InputValidationError("keyword is required"), 400),
            (ProviderConfigurationError("Missing SERPAPI_API_KEY (or SERPAPI_KEY)"), 503),
            (UpstreamProviderError("SERP API error: Invalid API key."), 502),
        ],
    )
    def test_error_mapping(self, client, error, status):
        with patch("app.main.run_ad_intel", side_effect=error):
            response = client.post("/api/v1/ads/intel", json={"keyword": "crm"})
        assert response.status_code == status
        assert response.json() == {"detail": error.message}

    def test_missing_keyword_rejected_by_pipeline(self, client):
        response = client.post("/api/v1/ads/intel", json={})
        assert response.status_code == 400
