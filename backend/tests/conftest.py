"""Pytest fixtures: settings, SERP payloads and a scripted search client."""

from unittest.mock import MagicMock

import pytest

from app.config import Settings


class ScriptedSerpClient:
    """Stands in for SerpApiClient; returns canned payloads and records every call."""

    def __init__(self, responses=None, default=None):
        self.responses = responses or {}
        self.default = default if default is not None else {}
        self.calls = []

    def search(self, keyword, market, num=10):
        self.calls.append((keyword, market, num))
        result = self.responses.get((market, keyword), self.default)
        if isinstance(result, Exception):
            raise result
        return result


@pytest.fixture
def settings_no_ai():
    return Settings(serpapi_api_key="serp-test-key", openai_api_key="", _env_file=None)


@pytest.fixture
def settings_with_ai():
    return Settings(serpapi_api_key="serp-test-key", openai_api_key="sk-test", _env_file=None)


@pytest.fixture
def make_client():
    return ScriptedSerpClient


@pytest.fixture
def plain_organic_results():
    """Five organic results matching no blog, brand or e-commerce pattern."""
    return [
        {
            "title": f"CRM mjukvara för företag del {i}",
            "link": f"https://www.example{i}.se/crm",
            "snippet": "Information om CRM.",
        }
        for i in range(1, 6)
    ]


@pytest.fixture
def paa_five():
    return [{"question": f"Vad kostar CRM {i}?", "snippet": "Det beror på."} for i in range(1, 6)]


@pytest.fixture
def crm_serp_payload(plain_organic_results, paa_five):
    return {
        "organic_results": plain_organic_results,
        "related_questions": paa_five,
        "ads_results": [],
    }


@pytest.fixture
def raw_ads():
    return [
        {
            "position": 1,
            "title": "Boka demo av vårt CRM",
            "link": "https://www.acme.se/boka-demo",
            "displayed_link": "acme.se",
            "description": "Gratis demo idag. Prova gratis i 30 dagar.",
        },
        {
            "position": 2,
            "title": "CRM priser 2025",
            "link": "https://crmco.se/priser",
            "source": "CRMCo",
            "description": "Se våra priser. Rabatt för nya kunder.",
        },
        {
            "title": "Acme CRM för säljteam",
            "headlines": ["Snabb uppstart", "Kom igång direkt"],
            "link": "https://www.acme.se/",
            "displayed_link": "acme.se",
            "description": "Ingen bindningstid.",
        },
    ]


@pytest.fixture
def openai_response():
    """Build a MagicMock chat completion returning *content*."""

    def _make(content):
        choice = MagicMock()
        choice.message.content = content
        choice.message.role = "assistant"
        resp = MagicMock()
        resp.choices = [choice]
        return resp

    return _make
