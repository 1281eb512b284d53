"""Thin REST client for the Generative Language generateContent endpoint."""

from __future__ import annotations

import logging
from typing import Any

import httpx

from core.config import Settings
from core.models import ExtractedText, ExtractionResult, ShapeError
from prompts.templates import render_prompt

logger = logging.getLogger(__name__)


class UpstreamError(Exception):
    """The upstream API answered with a non-2xx status."""

    def __init__(self, status_code: int, reason_phrase: str, body_text: str) -> None:
        self.status_code = status_code
        self.reason_phrase = reason_phrase
        self.body_text = body_text
        super().__init__(f"API error: {status_code} {reason_phrase}")


def build_payload(user_prompt: str) -> dict[str, Any]:
    """Single-turn conversation carrying the templated prompt."""
    return {
        "contents": [
            {
                "role": "user",
                "parts": [{"text": render_prompt(user_prompt)}],
            }
        ]
    }


def extract_text(result: Any) -> ExtractionResult:
    """Pull ``candidates[0].content.parts[0].text`` out of a decoded reply."""
    if not isinstance(result, dict):
        return ShapeError("response is not an object")

    candidates = result.get("candidates")
    if not isinstance(candidates, list) or not candidates:
        return ShapeError("missing candidates")

    content = candidates[0].get("content") if isinstance(candidates[0], dict) else None
    if not isinstance(content, dict):
        return ShapeError("missing candidates[0].content")

    parts = content.get("parts")
    if not isinstance(parts, list) or not parts:
        return ShapeError("missing candidates[0].content.parts")

    text = parts[0].get("text") if isinstance(parts[0], dict) else None
    if not isinstance(text, str):
        return ShapeError("missing candidates[0].content.parts[0].text")

    return ExtractedText(text)


class GeminiClient:
    """Issues one generateContent call per prompt."""

    def __init__(self, settings: Settings, http: httpx.Client | None = None) -> None:
        self.settings = settings
        self._http = http

    def generate(self, user_prompt: str) -> Any:
        """POST the templated prompt and return the decoded JSON reply.

        Raises UpstreamError on non-2xx replies; transport and JSON decode
        errors propagate unchanged.
        """
        payload = build_payload(user_prompt)
        logger.info(
            "Forwarding prompt to %s (%d chars)", self.settings.endpoint, len(user_prompt)
        )

        if self._http is not None:
            response = self._post(self._http, payload)
        else:
            with httpx.Client(timeout=self.settings.timeout) as http:
                response = self._post(http, payload)

        if not response.is_success:
            raise UpstreamError(response.status_code, response.reason_phrase, response.text)

        return response.json()

    def _post(self, http: httpx.Client, payload: dict[str, Any]) -> httpx.Response:
        return http.post(
            self.settings.endpoint,
            params={"key": self.settings.api_key},
            headers={"Content-Type": "application/json"},
            json=payload,
        )
