from __future__ import annotations

import os
from dataclasses import dataclass, field

DEFAULT_MODEL = "gemini-pro"
DEFAULT_API_BASE = "https://generativelanguage.googleapis.com"
DEFAULT_TIMEOUT = 30.0
DEFAULT_CORS_ORIGINS = ["http://localhost:3000", "http://127.0.0.1:3000"]


def _parse_timeout(value: str | None) -> float:
    if not value:
        return DEFAULT_TIMEOUT
    try:
        timeout = float(value)
    except ValueError:
        return DEFAULT_TIMEOUT
    if timeout <= 0 or timeout != timeout:  # NaN
        return DEFAULT_TIMEOUT
    return timeout


def _parse_origins(value: str | None) -> list[str]:
    origins = [origin.strip() for origin in (value or "").split(",") if origin.strip()]
    return origins or list(DEFAULT_CORS_ORIGINS)


@dataclass(slots=True)
class Settings:
    api_key: str | None = None
    model: str = DEFAULT_MODEL
    api_base: str = DEFAULT_API_BASE
    timeout: float = DEFAULT_TIMEOUT
    cors_origins: list[str] = field(default_factory=lambda: list(DEFAULT_CORS_ORIGINS))
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "Settings":
        """Read settings from the process environment.

        A missing API key is not an error here; the transform client reports
        it on the first submit so the UI can show it per result slot.
        """

        return cls(
            api_key=os.getenv("GEMINI_API_KEY") or None,
            model=os.getenv("GEMINI_MODEL") or DEFAULT_MODEL,
            api_base=os.getenv("GEMINI_API_BASE") or DEFAULT_API_BASE,
            timeout=_parse_timeout(os.getenv("GEMINI_TIMEOUT")),
            cors_origins=_parse_origins(os.getenv("API_CORS_ORIGINS")),
            log_level=(os.getenv("LOG_LEVEL") or "INFO").upper(),
        )
