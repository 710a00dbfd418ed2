"""Search provider clients."""

from .serpapi import SERPAPI_SEARCH_URL, SerpApiClient

__all__ = ["SERPAPI_SEARCH_URL", "SerpApiClient"]
