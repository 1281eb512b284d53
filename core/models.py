"""Data models for the prompt relay."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class Method(str, Enum):
    POST = "POST"
    OPTIONS = "OPTIONS"


CORS_HEADERS: dict[str, str] = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "POST, GET, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type",
}

# --- Fixed error messages ---

METHOD_NOT_ALLOWED = "Method Not Allowed"
MISSING_API_KEY = "Server-side API key is not configured."
INVALID_RESPONSE_STRUCTURE = "Invalid API response structure."
INTERNAL_SERVER_ERROR = "Internal Server Error"


@dataclass
class RelayRequest:
    method: str
    raw_body: Any = None

    def __post_init__(self) -> None:
        self.method = (self.method or "").upper()

    def json_body(self) -> dict[str, Any]:
        """Decode the raw body (dict, JSON bytes/str, or None).

        Bodies that are not JSON objects carry no fields. Malformed JSON raises
        ``json.JSONDecodeError``.
        """
        body = self.raw_body
        if isinstance(body, (bytes, bytearray)):
            body = body.decode("utf-8")
        if isinstance(body, str):
            body = json.loads(body) if body.strip() else {}
        return body if isinstance(body, dict) else {}

    @property
    def user_prompt(self) -> Any:
        return self.json_body().get("userPrompt")


@dataclass
class RelayResponse:
    status_code: int
    body: dict[str, Any] | None = None
    headers: dict[str, str] = field(default_factory=lambda: dict(CORS_HEADERS))

    def __post_init__(self) -> None:
        if self.body is not None:
            self.headers.setdefault("Content-Type", "application/json")

    @classmethod
    def error(cls, status_code: int, message: str, details: str | None = None) -> RelayResponse:
        body: dict[str, Any] = {"error": message}
        if details is not None:
            body["details"] = details
        return cls(status_code, body)

    def encoded_body(self) -> bytes:
        if self.body is None:
            return b""
        return json.dumps(self.body).encode("utf-8")


@dataclass(frozen=True)
class ExtractedText:
    text: str


@dataclass(frozen=True)
class ShapeError:
    reason: str


ExtractionResult = ExtractedText | ShapeError
