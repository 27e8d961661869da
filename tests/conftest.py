from __future__ import annotations

import base64

import numpy as np
import pytest

from speech_pipeline.config import Settings


def _to_pcm(values: np.ndarray, little_endian: bool = True) -> bytes:
    ints = np.clip(np.round(np.asarray(values) * 32768.0), -32768, 32767)
    return ints.astype("<i2" if little_endian else ">i2").tobytes()


@pytest.fixture
def sine_pcm():
    """Factory: mono 16-bit PCM sine bytes."""

    def make(count: int = 2400, amplitude: float = 0.3, freq: float = 440.0,
             rate: int = 24000, little_endian: bool = True) -> bytes:
        t = np.arange(count) / rate
        return _to_pcm(amplitude * np.sin(2 * np.pi * freq * t), little_endian)

    return make


@pytest.fixture
def pcm_from():
    return _to_pcm


@pytest.fixture
def b64():
    return lambda raw: base64.b64encode(raw).decode("ascii")


@pytest.fixture
def settings() -> Settings:
    return Settings(
        gemini_api_key="test-key",
        gemini_tts_model="gemini-2.5-flash-preview-tts",
        gemini_api_base="https://example.invalid/v1beta",
        request_timeout_seconds=5.0,
        target_sample_rate=48000,
        peak_ceiling=0.6,
        workers=2,
    )
