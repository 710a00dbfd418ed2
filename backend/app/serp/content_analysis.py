"""
SEO content analysis: rule-based content gaps / brief, with an optional LLM overlay.

The LLM is asked for `contentGaps` (2-4) and a `contentBrief` (h1, 4-7 h2,
up to 6 faq, cta). Each field is validated on its own and falls back to the
rule-based value when malformed.
"""

import json
from dataclasses import dataclass
from typing import Any, Optional

from app.config import Settings
from app.llm_utils import request_json_object
from app.serp.merge_guard import clean_string, clean_string_list, pick
from app.serp.schemas import ContentBrief, FeaturedSnippet, InsightsSource, OrganicResult, PeopleAlsoAsk

CONTENT_GAPS_MIN, CONTENT_GAPS_MAX = 2, 4
H2_MIN, H2_MAX = 4, 7
FAQ_MAX = 6

SEO_CONTENT_PROMPT = """You are an SEO strategist.
Use ONLY the data in the input. No outside knowledge.
Return ONLY valid JSON with exactly this schema:
{{
  "contentGaps": ["..."],
  "contentBrief": {{
    "h1": "...",
    "h2": ["..."],
    "faq": ["..."],
    "cta": "..."
  }}
}}
Requirements:
- contentGaps: 2 to 4 points
- h2: 4 to 7 headings
- faq: at most 6 questions (prioritize PAA)
- cta: neutral
- language: match the market ({market})

Input:
{payload}"""


@dataclass
class ContentAnalysis:
    content_gaps: list[str]
    content_brief: ContentBrief
    source: InsightsSource = "rule_based"


def build_fallback_content(keyword: str, paa: list[PeopleAlsoAsk]) -> ContentAnalysis:
    faq = [item.question for item in paa if item.question][:FAQ_MAX]
    return ContentAnalysis(
        content_gaps=[
            "Clearer comparison between the alternatives in the top results",
            "More concrete structure with steps and decision criteria",
            "Better coverage of common questions from People Also Ask",
        ],
        content_brief=ContentBrief(
            h1=keyword,
            h2=[
                f"What does {keyword} mean in practice?",
                "How do you choose the right option?",
                "Common mistakes and how to avoid them",
                "Comparison of the most common alternatives",
            ],
            faq=faq,
            cta="Continue to the next step in your decision process.",
        ),
    )


def generate_seo_content_analysis(
    keyword: str,
    market: str,
    top_results: list[OrganicResult],
    paa: list[PeopleAlsoAsk],
    featured_snippet: FeaturedSnippet,
    ads_count: int,
    settings: Optional[Settings] = None,
) -> Optional[dict[str, Any]]:
    """Best-effort LLM call; None when unconfigured or on any failure."""
    payload = {
        "keyword": keyword,
        "market": market,
        "topResults": [r.model_dump(by_alias=True) for r in top_results],
        "peopleAlsoAsk": [p.model_dump(by_alias=True) for p in paa],
        "featuredSnippet": featured_snippet.model_dump(by_alias=True),
        "adsCount": ads_count,
    }
    prompt = SEO_CONTENT_PROMPT.format(market=market, payload=json.dumps(payload, ensure_ascii=False))
    return request_json_object(prompt, settings)


def merge_content_brief(candidate: Any, fallback: ContentBrief) -> ContentBrief:
    if not isinstance(candidate, dict):
        return fallback
    return ContentBrief(
        h1=pick(clean_string(candidate.get("h1")), fallback.h1),
        h2=pick(clean_string_list(candidate.get("h2"), H2_MIN, H2_MAX), fallback.h2),
        faq=pick(clean_string_list(candidate.get("faq"), 1, FAQ_MAX), fallback.faq),
        cta=pick(clean_string(candidate.get("cta")), fallback.cta),
    )


def merge_content_analysis(candidate: Optional[Any], fallback: ContentAnalysis) -> ContentAnalysis:
    """Overlay well-formed LLM fields on the fallback; malformed fields keep the fallback."""
    if not isinstance(candidate, dict):
        return fallback
    return ContentAnalysis(
        content_gaps=pick(
            clean_string_list(candidate.get("contentGaps"), CONTENT_GAPS_MIN, CONTENT_GAPS_MAX),
            fallback.content_gaps,
        ),
        content_brief=merge_content_brief(candidate.get("contentBrief"), fallback.content_brief),
        source="ai",
    )
