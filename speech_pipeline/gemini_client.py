from __future__ import annotations

import base64
import binascii
from typing import Dict, List, Optional

import requests

from speech_pipeline.audio import is_raw_pcm_mime, parse_sample_rate, process_pcm_payload
from speech_pipeline.config import Settings, load_settings
from speech_pipeline.errors import (
    ContentBlockedError,
    GeminiApiError,
    GeminiTransportError,
    MissingApiKeyError,
    NoAudioDataError,
)
from speech_pipeline.logging_utils import get_logger
from speech_pipeline.types import TtsAudio, TtsVoiceConfig

from apis.gemini_tts import build_request_body, generate_content

log = get_logger(__name__)

_HINT_TOLERANCE = 0.05


def build_prompt(text: str, config: TtsVoiceConfig) -> str:
    """Prefix ``text`` with a natural-language style line when needed.

    Speed and volume hints are only added when they deviate from 1.0 by more
    than 5%.
    """
    hints: List[str] = []
    if config.acting_direction:
        hints.append(config.acting_direction)
    if config.rate and abs(config.rate - 1.0) > _HINT_TOLERANCE:
        term = "fast" if config.rate > 1.0 else "slow"
        hints.append(f"Speak {term} (speed: {config.rate}x)")
    if config.volume and abs(config.volume - 1.0) > _HINT_TOLERANCE:
        term = "loud" if config.volume > 1.0 else "soft"
        hints.append(f"Speak {term} (volume: {config.volume}x)")
    if not hints:
        return text
    return f"[Style: {', '.join(hints)}]\n\n\"{text}\""


def _extract_audio(data: Dict) -> TtsAudio:
    if not isinstance(data, dict):
        raise GeminiApiError(f"unexpected Gemini response body ({type(data).__name__})")
    if data.get("error"):
        message = data["error"].get("message") if isinstance(data["error"], dict) else data["error"]
        raise GeminiApiError(f"Gemini API error: {message}")

    feedback = data.get("promptFeedback") or {}
    if feedback.get("blockReason"):
        raise ContentBlockedError(f"prompt blocked by policy ({feedback['blockReason']})")

    candidates = data.get("candidates") or []
    candidate = candidates[0] if candidates else {}
    if candidate.get("finishReason") == "SAFETY":
        raise ContentBlockedError("content blocked by safety policy")

    for part in (candidate.get("content") or {}).get("parts") or []:
        inline = part.get("inlineData") or {}
        mime_type = inline.get("mimeType") or ""
        if mime_type.startswith("audio/") and inline.get("data"):
            return TtsAudio(data=inline["data"], mime_type=mime_type)
    raise NoAudioDataError("Gemini TTS response has no audio data")


def synthesize_speech(text: str, api_key: Optional[str], config: TtsVoiceConfig,
                      settings: Optional[Settings] = None) -> TtsAudio:
    """Call Gemini TTS and return the inline audio part or raise GeminiTtsError."""
    if not api_key:
        raise MissingApiKeyError("Gemini API key is not configured")
    if not text or not text.strip():
        raise ValueError("Text is required for speech generation")

    settings = settings or load_settings()
    body = build_request_body(build_prompt(text, config), config.voice_name, config.language_code)
    log.debug("gemini.tts POST", extra={
        "voice": config.voice_name, "lang": config.language_code, "text_len": len(text)
    })
    try:
        data = generate_content(settings.tts_url, api_key, body, timeout=settings.request_timeout_seconds)
    except (requests.exceptions.RequestException, ValueError) as e:
        log.error("gemini.tts request failed", extra={"voice": config.voice_name, "error": str(e)})
        raise GeminiTransportError(f"Gemini TTS request failed (voice={config.voice_name}): {e}")
    return _extract_audio(data)


def generate_voice_wav(text: str, api_key: Optional[str], config: TtsVoiceConfig,
                       settings: Optional[Settings] = None) -> bytes:
    """Synthesize ``text`` and return playable audio bytes.

    Raw PCM (``L16``/``pcm`` MIME types) goes through the WAV pipeline at the
    rate named in the MIME string; other audio types are returned decoded.
    """
    settings = settings or load_settings()
    audio = synthesize_speech(text, api_key, config, settings=settings)
    if is_raw_pcm_mime(audio.mime_type):
        container = process_pcm_payload(
            audio.data,
            sample_rate=parse_sample_rate(audio.mime_type),
            volume_multiplier=config.volume,
            target_rate=settings.target_sample_rate,
            peak_ceiling=settings.peak_ceiling,
        )
        return container.data
    log.info("non-PCM audio returned unchanged", extra={"mime_type": audio.mime_type})
    try:
        return base64.b64decode(audio.data)
    except (binascii.Error, ValueError) as e:
        raise NoAudioDataError(f"audio part is not valid base64: {e}")
