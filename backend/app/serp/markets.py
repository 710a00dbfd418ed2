"""Market codes and their SerpApi localization / ad-intent modifiers."""

from dataclasses import dataclass
from typing import Optional

DEFAULT_MARKET = "SE"
# Near-universal ad inventory; always tried after the requested market.
FALLBACK_AD_MARKET = "US"


@dataclass(frozen=True)
class MarketConfig:
    gl: str
    hl: str
    google_domain: str
    location: str
    ad_suffixes: tuple[str, ...]


MARKETS: dict[str, MarketConfig] = {
    "SE": MarketConfig(
        gl="se",
        hl="sv",
        google_domain="google.se",
        location="Stockholm,Stockholm,Sweden",
        ad_suffixes=("pris", "erbjudande", "boka demo", "gratis test"),
    ),
    "NO": MarketConfig(
        gl="no",
        hl="no",
        google_domain="google.no",
        location="Oslo,Oslo,Norway",
        ad_suffixes=("pris", "tilbud", "book demo", "gratis prøve"),
    ),
    "DK": MarketConfig(
        gl="dk",
        hl="da",
        google_domain="google.dk",
        location="Copenhagen,Capital Region of Denmark,Denmark",
        ad_suffixes=("pris", "tilbud", "book demo", "gratis prøve"),
    ),
    "US": MarketConfig(
        gl="us",
        hl="en",
        google_domain="google.com",
        location="United States",
        ad_suffixes=("price", "pricing", "demo", "free trial"),
    ),
}


def normalize_market_code(market: Optional[str], default: str = DEFAULT_MARKET) -> str:
    """Uppercase and strip a market code; blank input becomes the default."""
    code = (market or "").strip().upper()
    return code or default


def resolve_market(market: str) -> MarketConfig:
    """Config for a market code; unknown codes get the default market's config."""
    return MARKETS.get(normalize_market_code(market), MARKETS[DEFAULT_MARKET])


def ad_suffixes_for(market: str) -> tuple[str, ...]:
    """Commercial-intent suffixes; unknown markets use the US (English) set."""
    config = MARKETS.get(normalize_market_code(market))
    return (config or MARKETS[FALLBACK_AD_MARKET]).ad_suffixes
