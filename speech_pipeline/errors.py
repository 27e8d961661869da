from __future__ import annotations

class PipelineError(Exception):
    """Base error for the speech audio pipeline."""


class EmptyPayloadError(PipelineError):
    """Raised when a PCM payload holds no decodable 16-bit samples."""


class MalformedHeaderAssumptionError(PipelineError):
    """Raised when a WAV header disagrees with the payload it describes."""


class InvalidSampleRateError(PipelineError, ValueError):
    """Raised when a source or target sample rate is not positive."""


class AudioSynthesisError(PipelineError):
    """Raised when WAV handling (e.g. concatenation) fails."""


class GeminiTtsError(PipelineError):
    """Base error for Gemini TTS calls."""


class MissingApiKeyError(GeminiTtsError):
    """Raised when no Gemini API key is configured."""


class ContentBlockedError(GeminiTtsError):
    """Raised when the provider refuses the text on safety grounds."""


class GeminiTransportError(GeminiTtsError):
    """Raised when the HTTP request fails or returns an error status."""


class GeminiApiError(GeminiTtsError):
    """Raised when the response body carries an API error object."""


class NoAudioDataError(GeminiTtsError):
    """Raised when the response has no inline audio part."""
