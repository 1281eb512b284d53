"""Prompt relay: one inbound request in, one JSON response out."""

from __future__ import annotations

import logging
from typing import Any

import httpx

from core.config import Settings
from core.gemini_client import GeminiClient, UpstreamError, extract_text
from core.models import (
    INTERNAL_SERVER_ERROR,
    INVALID_RESPONSE_STRUCTURE,
    METHOD_NOT_ALLOWED,
    MISSING_API_KEY,
    ExtractedText,
    Method,
    RelayRequest,
    RelayResponse,
)

logger = logging.getLogger(__name__)


def _coerce_prompt(value: Any) -> str:
    if value is None:
        return ""
    if not isinstance(value, str):
        logger.warning("userPrompt is %s, not str; stringifying", type(value).__name__)
        return str(value)
    return value


def handle_request(
    method: str,
    body: Any = None,
    *,
    settings: Settings | None = None,
    http: httpx.Client | None = None,
) -> RelayResponse:
    """Handle a single relay request.

    ``body`` may be a decoded dict, raw JSON bytes/str, or None. Every path,
    failures included, returns a RelayResponse carrying the CORS headers.
    """
    request = RelayRequest(method, body)

    if request.method == Method.OPTIONS.value:
        return RelayResponse(200)

    if request.method != Method.POST.value:
        return RelayResponse.error(405, METHOD_NOT_ALLOWED)

    try:
        user_prompt = _coerce_prompt(request.user_prompt)

        settings = settings or Settings.from_env()
        if not settings.available:
            logger.warning("Rejecting request: no API key configured")
            return RelayResponse.error(500, MISSING_API_KEY)

        client = GeminiClient(settings, http=http)
        try:
            result = client.generate(user_prompt)
        except UpstreamError as e:
            logger.warning("Upstream returned %d %s", e.status_code, e.reason_phrase)
            return RelayResponse.error(e.status_code, str(e), details=e.body_text)

        extracted = extract_text(result)
        if isinstance(extracted, ExtractedText):
            return RelayResponse(200, {"text": extracted.text})

        logger.warning("Unexpected upstream response shape: %s", extracted.reason)
        return RelayResponse.error(500, INVALID_RESPONSE_STRUCTURE)

    except Exception as e:
        logger.exception("Error while relaying prompt")
        return RelayResponse.error(500, INTERNAL_SERVER_ERROR, details=str(e))
