"""Utility helpers for the Desi Cinephile service."""

from __future__ import annotations

import json
import re
import unicodedata
from typing import Any
from urllib.parse import quote_plus


JSON_BLOCK_RE = re.compile(r"```(?:json)?\s*(\{.*?\})\s*```", re.DOTALL)
BARE_JSON_RE = re.compile(r"\{.*\}", re.DOTALL)

TRAILER_SEARCH_URL = "https://www.youtube.com/results?search_query={query}"


def slugify(value: str) -> str:
    """Return a URL-friendly slug."""

    value = unicodedata.normalize("NFKD", value)
    value = value.encode("ascii", "ignore").decode("ascii")
    value = re.sub(r"[^a-zA-Z0-9]+", "-", value)
    value = value.strip("-")
    value = re.sub(r"-+", "-", value)
    return value.lower() or "untitled"


def extract_json_object(content: str) -> dict[str, Any]:
    """Extract and parse the first JSON object from the model response."""

    match = JSON_BLOCK_RE.search(content)
    if match:
        payload = match.group(1)
    else:
        match = BARE_JSON_RE.search(content)
        if not match:
            raise ValueError("No JSON object found in response")
        payload = match.group(0)

    try:
        parsed = json.loads(payload)
    except json.JSONDecodeError as exc:
        raise ValueError("Invalid JSON payload produced by the model") from exc
    if not isinstance(parsed, dict):
        raise ValueError("Model response was not a JSON object")
    return parsed


def trailer_search_url(title: str, year: str) -> str:
    """Return a YouTube search URL for the movie's trailer."""

    return TRAILER_SEARCH_URL.format(query=quote_plus(f"{title} {year} trailer"))
