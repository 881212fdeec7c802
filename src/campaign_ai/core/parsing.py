# src/campaign_ai/core/parsing.py
"""Normalization of raw model text before it is parsed."""
import re

_LEADING_JSON_FENCE = re.compile(r"^```json\s*")
_LEADING_FENCE = re.compile(r"^```\s*")
_TRAILING_FENCE = re.compile(r"\s*```$")


def strip_code_fences(text: str) -> str:
    """Removes a leading ```json / ``` marker and a trailing ``` marker.

    Text without fences only gets trimmed, so calling this twice is the
    same as calling it once.
    """
    if not text:
        return ""
    text = text.strip()
    text = _LEADING_JSON_FENCE.sub("", text)
    text = _LEADING_FENCE.sub("", text)
    text = _TRAILING_FENCE.sub("", text)
    return text.strip()


def looks_like_json_array(text: str) -> bool:
    return text.startswith("[") and text.endswith("]")
