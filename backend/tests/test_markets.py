"""Tests for market codes and their localization."""

import pytest

from app.serp.markets import MARKETS, ad_suffixes_for, normalize_market_code, resolve_market


@pytest.mark.parametrize(
    "raw,expected",
    [("se", "SE"), (" dk ", "DK"), ("US", "US"), ("", "SE"), (None, "SE"), ("   ", "SE")],
)
def test_normalize_market_code(raw, expected):
    assert normalize_market_code(raw) == expected


def test_normalize_market_code_custom_default():
    assert normalize_market_code(None, "NO") == "NO"


def test_every_market_has_localization_and_suffixes():
    for code, config in MARKETS.items():
        assert config.gl and config.hl and config.google_domain and config.location, code
        assert len(config.ad_suffixes) == 4, code


def test_resolve_market_case_insensitive():
    assert resolve_market("dk").google_domain == "google.dk"


def test_unknown_market_searched_with_default_config():
    assert resolve_market("FI") is MARKETS["SE"]


def test_unknown_market_uses_english_suffixes():
    assert ad_suffixes_for("FI") == ("price", "pricing", "demo", "free trial")


def test_localized_suffixes():
    assert ad_suffixes_for("se") == ("pris", "erbjudande", "boka demo", "gratis test")
