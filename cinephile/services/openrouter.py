"""Integration helpers for the OpenRouter API."""

from __future__ import annotations

import logging
from typing import Any

import httpx
from pydantic import ValidationError

from ..config import Settings
from ..models import ExtraKind, Movie
from ..utils import extract_json_object

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = (
    "You are Desi Cinephile, a movie recommendation expert specialising in Indian "
    "cinema: Bollywood, Tollywood, Kollywood, Mollywood, Sandalwood and beyond. "
    "You only ever talk about real, released Indian films."
)

RECOMMENDATION_TEMPLATE = """
I am feeling: "{mood}".
Recommend ONE INDIAN movie that fits this mood perfectly.

Respond strictly with a single JSON object and nothing else:
{{
  "title": "Title",
  "year": "1999",
  "desc": "one sentence synopsis",
  "emoji": "a single emoji that captures the film",
  "reason": "one or two sentences on why it fits the mood"
}}
"""

QUOTE_TEMPLATE = (
    'For the Indian movie "{title}" ({year}), give me one ICONIC dialogue. '
    'Format: "Dialogue in original language (or transliteration)" - Character Name. '
    "Then a brief English translation. Keep it under 2 sentences."
)

TRIVIA_TEMPLATE = (
    "Tell me one fascinating, obscure behind-the-scenes fact about the Indian movie "
    '"{title}" ({year}). Keep it under 2 sentences.'
)


class RecommendationUnavailableError(RuntimeError):
    """Raised when the model could not produce a usable recommendation."""


class ContentUnavailableError(RuntimeError):
    """Raised when quote or trivia content could not be fetched."""


class OpenRouterClient:
    """Client responsible for talking to OpenRouter."""

    def __init__(self, settings: Settings, http_client: httpx.AsyncClient):
        self._settings = settings
        self._client = http_client

    async def recommend(self, mood: str) -> Movie:
        """Return one Indian movie matching the user's mood."""

        cleaned = (mood or "").strip()
        if not cleaned:
            raise RecommendationUnavailableError("Mood text is required")

        payload = {
            "model": self._settings.openrouter_model,
            "temperature": 0.9,
            "response_format": {"type": "json_object"},
            "messages": [
                {"role": "system", "content": SYSTEM_PROMPT},
                {
                    "role": "user",
                    "content": RECOMMENDATION_TEMPLATE.format(mood=cleaned),
                },
            ],
        }
        try:
            content = await self._complete(payload)
            parsed = extract_json_object(content)
            return Movie.from_ai_payload(parsed)
        except (RuntimeError, ValueError, ValidationError, httpx.HTTPError) as exc:
            logger.warning("AI recommendation failed for mood %r: %s", cleaned, exc)
            raise RecommendationUnavailableError(str(exc)) from exc

    async def fetch_content(self, title: str, year: str, kind: ExtraKind) -> str:
        """Return a short quote or trivia text for the given movie."""

        if kind == "quote":
            prompt = QUOTE_TEMPLATE.format(title=title, year=year)
        elif kind == "trivia":
            prompt = TRIVIA_TEMPLATE.format(title=title, year=year)
        else:
            raise ValueError(f"Unsupported extra kind: {kind}")

        payload = {
            "model": self._settings.openrouter_model,
            "temperature": 0.7,
            "messages": [
                {"role": "system", "content": SYSTEM_PROMPT},
                {"role": "user", "content": prompt},
            ],
        }
        try:
            content = await self._complete(payload)
        except (RuntimeError, httpx.HTTPError) as exc:
            logger.warning(
                "AI %s lookup failed for %s (%s): %s", kind, title, year, exc
            )
            raise ContentUnavailableError(str(exc)) from exc
        return content.strip()

    async def _complete(self, payload: dict[str, Any]) -> str:
        """Send a chat completion request and return the message content."""

        api_key = self._settings.openrouter_api_key
        if not api_key:
            raise RuntimeError("OpenRouter API key is not configured")

        headers = {
            "Authorization": f"Bearer {api_key}",
            "Content-Type": "application/json",
            "HTTP-Referer": "https://github.com/desi-cinephile/desi-cinephile",
            "X-Title": "Desi Cinephile",
        }
        response = await self._client.post(
            "/chat/completions", json=payload, headers=headers
        )
        if response.status_code >= 400:
            raise RuntimeError(
                f"OpenRouter returned {response.status_code}: {response.text}"
            )

        try:
            data = response.json()
        except ValueError as exc:
            raise RuntimeError("OpenRouter returned a non-JSON body") from exc
        choices = data.get("choices", []) if isinstance(data, dict) else []
        if not choices:
            raise RuntimeError("Model returned no choices")
        message = choices[0].get("message", {})
        content = message.get("content")
        if not isinstance(content, str):
            raise RuntimeError("Model response missing content")
        return content
