"""
SerpApi Google Search client. Uses SERPAPI_API_KEY (or SERPAPI_KEY).

Reuses a single requests.Session per client; every call carries an explicit timeout.
"""

import logging
from typing import Any, Optional

import requests

from app.config import Settings, get_settings
from app.exceptions import ProviderConfigurationError, UpstreamProviderError
from app.serp.markets import resolve_market

logger = logging.getLogger(__name__)

SERPAPI_SEARCH_URL = "https://serpapi.com/search.json"


class SerpApiClient:
    """Fetches raw Google SERP payloads for a keyword in a given market."""

    def __init__(
        self,
        api_key: str,
        timeout: float = 15.0,
        session: Optional[requests.Session] = None,
    ):
        if not api_key:
            raise ProviderConfigurationError("Missing SERPAPI_API_KEY (or SERPAPI_KEY)")
        self.api_key = api_key
        self.timeout = timeout
        self._owns_session = session is None
        self._session = session or requests.Session()

    def close(self) -> None:
        """Close the HTTP session if this client created it."""
        if self._owns_session:
            self._session.close()

    def __enter__(self) -> "SerpApiClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None) -> "SerpApiClient":
        settings = settings or get_settings()
        return cls(api_key=settings.serpapi_api_key, timeout=settings.serpapi_timeout_seconds)

    def build_params(self, keyword: str, market: str, num: int) -> dict[str, str]:
        config = resolve_market(market)
        return {
            "engine": "google",
            "q": keyword,
            "gl": config.gl,
            "hl": config.hl,
            "google_domain": config.google_domain,
            "location": config.location,
            "device": "desktop",
            "no_cache": "true",
            "safe": "off",
            "num": str(num),
            "api_key": self.api_key,
        }

    def search(self, keyword: str, market: str, num: int = 10) -> dict[str, Any]:
        """
        Run one SERP query and return the raw JSON payload.

        Raises UpstreamProviderError on transport failure, timeout, non-2xx
        status, a non-JSON body, or a provider-reported `error` field.
        """
        params = self.build_params(keyword, market, num)
        try:
            response = self._session.get(SERPAPI_SEARCH_URL, params=params, timeout=self.timeout)
            response.raise_for_status()
            data = response.json()
        except requests.exceptions.HTTPError as e:
            status = e.response.status_code if e.response is not None else None
            logger.error("SerpApi request failed", extra={"status": status, "query": keyword, "market": market})
            raise UpstreamProviderError(
                f"SERP API request failed with status {status}", status_code=status
            ) from e
        except ValueError as e:
            raise UpstreamProviderError("SERP API returned a non-JSON body") from e
        except requests.exceptions.RequestException as e:
            logger.error("SerpApi transport error", extra={"error": str(e), "query": keyword, "market": market})
            raise UpstreamProviderError(f"SERP API request failed: {e}") from e

        if not isinstance(data, dict):
            raise UpstreamProviderError("SERP API returned an unexpected payload")
        if data.get("error"):
            raise UpstreamProviderError(f"SERP API error: {data['error']}", details={"query": keyword, "market": market})
        return data
