"""Environment-backed settings for the TTS client and CLIs."""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Optional


def _env_int(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        return default


def _env_float(name: str, default: float) -> float:
    value = os.getenv(name)
    if value is None:
        return default
    try:
        return float(value)
    except ValueError:
        return default


@dataclass(frozen=True)
class Settings:
    gemini_api_key: Optional[str]
    gemini_tts_model: str
    gemini_api_base: str
    request_timeout_seconds: float
    target_sample_rate: int
    peak_ceiling: float
    workers: int

    @property
    def tts_url(self) -> str:
        return f"{self.gemini_api_base.rstrip('/')}/models/{self.gemini_tts_model}:generateContent"


def _from_env() -> Settings:
    return Settings(
        gemini_api_key=os.getenv("GEMINI_API_KEY") or None,
        gemini_tts_model=os.getenv("GEMINI_TTS_MODEL", "gemini-2.5-flash-preview-tts"),
        gemini_api_base=os.getenv("GEMINI_API_BASE", "https://generativelanguage.googleapis.com/v1beta"),
        request_timeout_seconds=_env_float("GEMINI_TTS_TIMEOUT_SECONDS", 120.0),
        target_sample_rate=_env_int("TTS_TARGET_SAMPLE_RATE", 48000),
        peak_ceiling=_env_float("TTS_PEAK_CEILING", 0.6),
        workers=max(1, _env_int("TTS_WORKERS", 4)),
    )


@lru_cache(maxsize=1)
def load_settings() -> Settings:
    """Return settings read once from the environment."""
    return _from_env()
