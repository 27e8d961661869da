"""Decode -> resample -> normalize -> encode for raw TTS PCM payloads."""

from __future__ import annotations

import base64
import binascii
import os
import re
import wave
from typing import List, Optional

import numpy as np

from speech_pipeline.errors import AudioSynthesisError, EmptyPayloadError
from speech_pipeline.format_resolver import resolve_byte_order
from speech_pipeline.logging_utils import get_logger
from speech_pipeline.normalizer import PEAK_CEILING, apply_gain, compute_gain_plan
from speech_pipeline.resampler import TARGET_SAMPLE_RATE, resample
from speech_pipeline.types import WavContainer
from speech_pipeline.wav_encoder import encode_wav

log = get_logger(__name__)

DEFAULT_SOURCE_RATE = 24000

_RATE_RE = re.compile(r"rate=(\d+)")


def parse_sample_rate(mime_type: Optional[str], default: int = DEFAULT_SOURCE_RATE) -> int:
    """Read ``rate=N`` from a MIME string such as ``audio/L16;codec=pcm;rate=24000``."""
    if not mime_type:
        return default
    m = _RATE_RE.search(mime_type)
    if not m:
        return default
    rate = int(m.group(1))
    return rate if rate > 0 else default


def is_raw_pcm_mime(mime_type: Optional[str]) -> bool:
    return bool(mime_type) and ("L16" in mime_type or "pcm" in mime_type)


def decode_payload(data_b64: str) -> bytes:
    """Decode a base64 payload or raise EmptyPayloadError."""
    try:
        raw = base64.b64decode(data_b64, validate=False)
    except (binascii.Error, ValueError) as e:
        raise EmptyPayloadError(f"payload is not valid base64: {e}")
    if len(raw) < 2:
        raise EmptyPayloadError(f"payload holds no 16-bit samples ({len(raw)} bytes)")
    return raw


def pcm_to_wav(
    raw: bytes,
    source_rate: int = DEFAULT_SOURCE_RATE,
    volume_multiplier: float = 1.0,
    target_rate: int = TARGET_SAMPLE_RATE,
    peak_ceiling: float = PEAK_CEILING,
) -> WavContainer:
    """Run the full pipeline over raw mono 16-bit PCM bytes."""
    if len(raw) < 2:
        raise EmptyPayloadError(f"payload holds no 16-bit samples ({len(raw)} bytes)")

    byte_order = resolve_byte_order(raw)
    samples, peak = resample(raw, byte_order, source_rate, target_rate)
    plan = compute_gain_plan(samples, peak, target_peak_ceiling=peak_ceiling,
                             volume_multiplier=volume_multiplier, target_rate=target_rate)
    processed = apply_gain(samples, plan)
    data = encode_wav(processed, target_rate)

    final_peak = float(np.max(np.abs(processed))) if processed.size else 0.0
    log.info("pcm wrapped as wav", extra={
        "source_rate": source_rate, "little_endian": byte_order.little_endian,
        "final_peak_pct": round(final_peak * 100), "samples": processed.size, "bytes": len(data),
    })
    return WavContainer(data=data, sample_rate=target_rate, sample_count=int(processed.size), peak=final_peak)


def process_pcm_payload(
    data_b64: str,
    sample_rate: Optional[int] = None,
    volume_multiplier: Optional[float] = None,
    target_rate: int = TARGET_SAMPLE_RATE,
    peak_ceiling: float = PEAK_CEILING,
) -> WavContainer:
    """Base64 PCM from the TTS provider to a 48 kHz stereo WAV container.

    Missing ``sample_rate`` means 24000 Hz; missing ``volume_multiplier``
    means 1.0.
    """
    raw = decode_payload(data_b64)
    return pcm_to_wav(
        raw,
        source_rate=sample_rate or DEFAULT_SOURCE_RATE,
        volume_multiplier=1.0 if volume_multiplier is None else volume_multiplier,
        target_rate=target_rate,
        peak_ceiling=peak_ceiling,
    )


def combine_wav_files(input_files: List[str], output_file: str, silence_duration: float = 0.5) -> bool:
    """Combine multiple WAV files inserting silence between them."""
    if not input_files:
        log.warning("combine_wav_files: no inputs")
        return False
    try:
        with wave.open(input_files[0], 'rb') as first_wav:
            params = first_wav.getparams()
            sample_rate = params.framerate
            sample_width = params.sampwidth
            channels = params.nchannels

        silence_frames = int(sample_rate * silence_duration)
        silence_data = b'\x00' * (silence_frames * sample_width * channels)

        with wave.open(output_file, 'wb') as output_wav:
            output_wav.setparams(params)
            for i, input_file in enumerate(input_files):
                if not os.path.exists(input_file):
                    log.warning("combine_wav_files: missing file", extra={"file": input_file})
                    continue
                with wave.open(input_file, 'rb') as iw:
                    if (iw.getframerate(), iw.getnchannels(), iw.getsampwidth()) != (
                            sample_rate, channels, sample_width):
                        raise AudioSynthesisError(f"format mismatch in {input_file}")
                    output_wav.writeframes(iw.readframes(iw.getnframes()))
                if i < len(input_files) - 1:
                    output_wav.writeframes(silence_data)
        log.info("combined WAV created", extra={"output": output_file, "count": len(input_files)})
        return True
    except AudioSynthesisError:
        raise
    except (OSError, EOFError, wave.Error) as e:
        log.exception("combine_wav_files failed")
        raise AudioSynthesisError(str(e))
