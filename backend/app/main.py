"""
SERP Intel API: SEO opportunity scoring and paid-search ad intelligence.
"""

import logging
from typing import Optional

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel

from app.ads import run_ad_intel
from app.ads.schemas import AdIntelResult
from app.config import get_settings
from app.exceptions import InputValidationError, ProviderConfigurationError, UpstreamProviderError
from app.logging_config import setup_logging
from app.serp import run_seo_opportunity
from app.serp.schemas import SeoOpportunityResult

setup_logging(get_settings().log_level)
logger = logging.getLogger(__name__)

app = FastAPI(title="SERP Intel", version="0.1.0")


class KeywordRequest(BaseModel):
    keyword: str = ""
    market: Optional[str] = None


@app.get("/health")
def health():
    return {"status": "ok"}


@app.post("/api/v1/seo/opportunity", response_model=SeoOpportunityResult)
def seo_opportunity(body: KeywordRequest):
    """
    Opportunity score, reasons, SERP summary and content brief for a keyword/market.
    """
    try:
        return run_seo_opportunity(body.keyword, body.market)
    except InputValidationError as e:
        raise HTTPException(status_code=400, detail=e.message)
    except ProviderConfigurationError as e:
        raise HTTPException(status_code=503, detail=e.message)
    except UpstreamProviderError as e:
        logger.error("SEO opportunity failed", extra={"error": e.message, "status": e.status_code})
        raise HTTPException(status_code=502, detail=e.message)


@app.post("/api/v1/ads/intel", response_model=AdIntelResult)
def ads_intel(body: KeywordRequest):
    """
    Advertisers, CTA terms, landing types and insights for the paid ads on a keyword/market.

    Returns which query/market produced the ads and every query attempted.
    """
    try:
        return run_ad_intel(body.keyword, body.market)
    except InputValidationError as e:
        raise HTTPException(status_code=400, detail=e.message)
    except ProviderConfigurationError as e:
        raise HTTPException(status_code=503, detail=e.message)
    except UpstreamProviderError as e:
        logger.error("Ad intel failed", extra={"error": e.message, "status": e.status_code})
        raise HTTPException(status_code=502, detail=e.message)
