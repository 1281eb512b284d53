"""Environment-backed settings for the relay."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass

logger = logging.getLogger(__name__)

API_KEY_ENV_VARS = ("GEMINI_API_KEY", "GOOGLE_API_KEY")

DEFAULT_API_BASE = "https://generativelanguage.googleapis.com"
DEFAULT_API_VERSION = "v1beta"
DEFAULT_MODEL = "gemini-2.5-flash-preview-05-20"


def resolve_api_key(explicit: str | None, *env_names: str) -> str:
    """Return the explicit key if non-blank, else the first non-blank env var."""
    if explicit and explicit.strip():
        return explicit.strip()
    for name in env_names:
        value = os.environ.get(name, "")
        if value.strip():
            return value.strip()
    return ""


def _parse_timeout(raw: str | None) -> float | None:
    if raw is None or not raw.strip():
        return None
    try:
        return float(raw)
    except ValueError:
        logger.warning("Ignoring non-numeric GEMINI_TIMEOUT=%r", raw)
        return None


@dataclass(frozen=True)
class Settings:
    api_key: str = ""
    model: str = DEFAULT_MODEL
    api_base: str = DEFAULT_API_BASE
    api_version: str = DEFAULT_API_VERSION
    timeout: float | None = None

    @classmethod
    def from_env(cls, api_key: str | None = None) -> Settings:
        """Read settings from the process environment.

        Read on every call so a key configured after import is still picked up.
        """
        return cls(
            api_key=resolve_api_key(api_key, *API_KEY_ENV_VARS),
            model=os.environ.get("GEMINI_MODEL", "").strip() or DEFAULT_MODEL,
            api_base=(os.environ.get("GEMINI_API_BASE", "").strip() or DEFAULT_API_BASE).rstrip("/"),
            api_version=os.environ.get("GEMINI_API_VERSION", "").strip() or DEFAULT_API_VERSION,
            timeout=_parse_timeout(os.environ.get("GEMINI_TIMEOUT")),
        )

    @property
    def available(self) -> bool:
        return bool(self.api_key)

    @property
    def endpoint(self) -> str:
        """generateContent URL without the key query parameter."""
        return f"{self.api_base}/{self.api_version}/models/{self.model}:generateContent"
