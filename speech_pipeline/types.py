from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, TypedDict, NotRequired


class Cut(TypedDict, total=False):
    id: str | int
    dialogue: str
    voice: NotRequired[str]
    gender: NotRequired[str]
    age: NotRequired[str]
    acting_direction: NotRequired[str]
    volume: NotRequired[float]
    rate: NotRequired[float]


@dataclass(frozen=True)
class ByteOrder:
    little_endian: bool
    mav_le: float = 0.0
    mav_be: float = 0.0
    scanned: int = 0

    @property
    def dtype(self) -> str:
        """numpy dtype string for a signed 16-bit sample in this order."""
        return "<i2" if self.little_endian else ">i2"


@dataclass(frozen=True)
class GainPlan:
    gain: float
    fade_samples: int
    ceiling_applied: bool = False


@dataclass(frozen=True)
class WavHeader:
    riff_size: int
    audio_format: int
    channels: int
    sample_rate: int
    byte_rate: int
    block_align: int
    bits_per_sample: int
    data_length: int


@dataclass(frozen=True)
class WavContainer:
    """Encoded stereo 16-bit WAV plus the numbers that produced it."""

    data: bytes
    sample_rate: int
    sample_count: int
    peak: float

    @property
    def byte_length(self) -> int:
        return len(self.data)

    @property
    def duration_seconds(self) -> float:
        return self.sample_count / float(self.sample_rate) if self.sample_rate else 0.0

    def __bytes__(self) -> bytes:
        return self.data


@dataclass
class TtsVoiceConfig:
    voice_name: str
    language_code: str
    acting_direction: Optional[str] = None
    volume: Optional[float] = None
    rate: Optional[float] = None


@dataclass(frozen=True)
class TtsAudio:
    """Inline audio part returned by Gemini: base64 data and its MIME type."""

    data: str
    mime_type: str
