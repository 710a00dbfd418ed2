"""Shared LLM helpers (OpenAI client, JSON parsing, best-effort structured call)."""

import json
import logging
from typing import Any, Optional

from openai import OpenAI, OpenAIError

from app.config import Settings, get_settings

logger = logging.getLogger(__name__)

JSON_ONLY_SYSTEM = "Return only JSON."


def get_client(settings: Optional[Settings] = None) -> Optional[OpenAI]:
    """Return an OpenAI client, or None when no API key is configured."""
    settings = settings or get_settings()
    if not settings.openai_api_key:
        return None
    # One attempt per request: the rule-based fallback replaces retries.
    return OpenAI(
        api_key=settings.openai_api_key,
        timeout=settings.openai_timeout_seconds,
        max_retries=0,
    )


def get_model(settings: Optional[Settings] = None) -> str:
    return (settings or get_settings()).openai_model


def parse_llm_response(content: str) -> Any:
    """Parse JSON from LLM response, stripping markdown code blocks if present."""
    text = content.strip()
    if text.startswith("```"):
        lines = text.split("\n")
        if lines[0].startswith("```"):
            lines = lines[1:]
        if lines and lines[-1].strip() == "```":
            lines = lines[:-1]
        text = "\n".join(lines)
    return json.loads(text)


def request_json_object(prompt: str, settings: Optional[Settings] = None) -> Optional[dict[str, Any]]:
    """
    Send one JSON-mode chat completion and return the parsed object.

    Never raises: a missing key, transport error, timeout, API error,
    unparseable body or non-object JSON all yield None.
    """
    settings = settings or get_settings()
    client = get_client(settings)
    if client is None:
        logger.debug("OpenAI key not configured; skipping AI overlay")
        return None

    try:
        response = client.chat.completions.create(
            model=get_model(settings),
            temperature=0.2,
            response_format={"type": "json_object"},
            messages=[
                {"role": "system", "content": JSON_ONLY_SYSTEM},
                {"role": "user", "content": prompt},
            ],
        )
        content = response.choices[0].message.content or "{}"
        data = parse_llm_response(content)
    except (OpenAIError, json.JSONDecodeError, RecursionError, IndexError, AttributeError, TypeError) as e:
        logger.warning("AI overlay failed, using rule-based fallback", extra={"error": str(e)})
        return None

    if not isinstance(data, dict):
        logger.warning("AI overlay returned non-object JSON", extra={"json_type": type(data).__name__})
        return None
    return data
