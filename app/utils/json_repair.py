"""Helpers for reading JSON out of language model output."""

import json
import re
from typing import Any, List

_FENCED_RE = re.compile(r"```(?:json)?\s*([\s\S]*?)\s*```", re.IGNORECASE)


def strip_code_fences(text: str) -> str:
    """Remove markdown code fences from text."""
    s = text.strip()
    m = _FENCED_RE.search(s)
    if m:
        return m.group(1).strip()
    # Unterminated fence
    if s.startswith("```"):
        s = s[3:]
        if s.lower().startswith("json"):
            s = s[4:]
    if s.endswith("```"):
        s = s[:-3]
    return s.strip()


def remove_trailing_commas(s: str) -> str:
    """Remove trailing commas before closing braces/brackets."""
    return re.sub(r",(\s*[}\]])", r"\1", s)


def parse_json_array(output: str) -> List[Any]:
    """
    Parse a JSON array from model output.

    Raises:
        ValueError: If the output is not valid JSON or not an array
            (``json.JSONDecodeError`` is a ``ValueError``)
    """
    s = strip_code_fences(output or "[]")
    try:
        data = json.loads(s)
    except json.JSONDecodeError:
        data = json.loads(remove_trailing_commas(s))

    if not isinstance(data, list):
        raise ValueError("Expected a JSON array")
    return data
