"""
Field validators for merging untrusted LLM JSON over rule-based fallbacks.

Each helper returns the cleaned value, or None when the field is unusable
(wrong type, blank, or too few entries). Callers substitute the fallback for
None, field by field.
"""

from typing import Any, Optional


def clean_string(value: Any) -> Optional[str]:
    if not isinstance(value, str):
        return None
    text = value.strip()
    return text or None


def clean_string_list(value: Any, min_items: int = 1, max_items: Optional[int] = None) -> Optional[list[str]]:
    """Strip and drop blank/non-string entries; None if fewer than *min_items* remain."""
    if not isinstance(value, list):
        return None
    items = [s for s in (clean_string(v) for v in value) if s]
    if len(items) < max(min_items, 1):
        return None
    return items[:max_items] if max_items is not None else items


def pick(candidate: Optional[Any], fallback: Any) -> Any:
    return fallback if candidate is None else candidate
