"""Stereo 16-bit PCM WAV serialization.

Layout (44-byte header, little-endian fields)::

    0  "RIFF"   4  36 + data_length   8  "WAVE"
    12 "fmt "   16 16   20 1 (PCM)   22 channels   24 sample_rate
    28 byte_rate   32 block_align   34 bits_per_sample
    36 "data"   40 data_length
"""

from __future__ import annotations

import struct

import numpy as np

from speech_pipeline.errors import MalformedHeaderAssumptionError
from speech_pipeline.resampler import TARGET_SAMPLE_RATE
from speech_pipeline.types import WavHeader

HEADER_SIZE = 44
CHANNELS = 2
BITS_PER_SAMPLE = 16
BLOCK_ALIGN = CHANNELS * BITS_PER_SAMPLE // 8

_HEADER = struct.Struct("<4sI4s4sIHHIIHH4sI")


def quantize(samples: np.ndarray) -> np.ndarray:
    """Scale by 32767, round half up and clamp to the int16 range."""
    scaled = np.floor(np.asarray(samples, dtype=np.float64) * 32767.0 + 0.5)
    return np.clip(scaled, -32768, 32767).astype("<i2")


def build_header(data_length: int, sample_rate: int = TARGET_SAMPLE_RATE) -> bytes:
    return _HEADER.pack(
        b"RIFF", 36 + data_length, b"WAVE",
        b"fmt ", 16,
        1,  # PCM format
        CHANNELS,
        sample_rate,
        sample_rate * BLOCK_ALIGN,
        BLOCK_ALIGN,
        BITS_PER_SAMPLE,
        b"data", data_length,
    )


def read_wav_header(data: bytes) -> WavHeader:
    """Parse and check a canonical 44-byte PCM header against ``data``."""
    if len(data) < HEADER_SIZE:
        raise MalformedHeaderAssumptionError(f"WAV shorter than header ({len(data)} bytes)")
    (riff, riff_size, wave_id, fmt_id, fmt_size, audio_format, channels, sample_rate,
     byte_rate, block_align, bits, data_id, data_length) = _HEADER.unpack_from(data)
    if (riff, wave_id, fmt_id, data_id) != (b"RIFF", b"WAVE", b"fmt ", b"data") or fmt_size != 16:
        raise MalformedHeaderAssumptionError("unexpected WAV chunk markers")
    if data_length != len(data) - HEADER_SIZE or riff_size != 36 + data_length:
        raise MalformedHeaderAssumptionError(
            f"declared data length {data_length} != actual {len(data) - HEADER_SIZE}")
    return WavHeader(
        riff_size=riff_size, audio_format=audio_format, channels=channels,
        sample_rate=sample_rate, byte_rate=byte_rate, block_align=block_align,
        bits_per_sample=bits, data_length=data_length,
    )


def encode_wav(samples: np.ndarray, sample_rate: int = TARGET_SAMPLE_RATE) -> bytes:
    """Encode mono float samples as interleaved stereo 16-bit WAV bytes.

    Each sample is written twice (left, right). The header is re-read and
    checked against the payload before returning.
    """
    mono = quantize(samples)
    stereo = np.repeat(mono, CHANNELS)
    payload = stereo.tobytes()
    data = build_header(len(payload), sample_rate) + payload

    expected = HEADER_SIZE + mono.size * BLOCK_ALIGN
    if len(data) != expected:
        raise MalformedHeaderAssumptionError(f"encoded {len(data)} bytes, expected {expected}")
    read_wav_header(data)
    return data


def wav_samples(data: bytes) -> np.ndarray:
    """Return the interleaved int16 samples following the header."""
    read_wav_header(data)
    return np.frombuffer(data[HEADER_SIZE:], dtype="<i2")
