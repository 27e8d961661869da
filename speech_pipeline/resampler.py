from __future__ import annotations

from typing import Tuple

import numpy as np

from speech_pipeline.errors import InvalidSampleRateError
from speech_pipeline.types import ByteOrder

TARGET_SAMPLE_RATE = 48000
FULL_SCALE = 32768.0


def decode_samples(raw: bytes, byte_order: ByteOrder) -> np.ndarray:
    """Interpret ``raw`` as signed 16-bit PCM and scale to [-1.0, 1.0).

    An odd trailing byte is dropped.
    """
    count = len(raw) // 2
    ints = np.frombuffer(raw[: count * 2], dtype=byte_order.dtype)
    return ints.astype(np.float64) / FULL_SCALE


def resample(raw: bytes, byte_order: ByteOrder, source_rate: int,
             target_rate: int = TARGET_SAMPLE_RATE) -> Tuple[np.ndarray, float]:
    """Linearly interpolate mono PCM from ``source_rate`` to ``target_rate``.

    Output index ``i`` reads source position ``i / ratio``; the right-hand
    neighbour is clamped to the last sample. Returns the resampled signal and
    its peak absolute amplitude.
    """
    if source_rate <= 0 or target_rate <= 0:
        raise InvalidSampleRateError(
            f"sample rates must be > 0 (source={source_rate}, target={target_rate})")

    source = decode_samples(raw, byte_order)
    source_count = source.size
    ratio = target_rate / source_rate
    target_count = int(np.floor(source_count * ratio))
    if target_count == 0:
        return np.zeros(0, dtype=np.float64), 0.0

    pos = np.arange(target_count, dtype=np.float64) / ratio
    idx = np.floor(pos).astype(np.int64)
    # float error near the end may push idx one past the last sample
    np.minimum(idx, source_count - 1, out=idx)
    frac = pos - idx
    nxt = np.minimum(idx + 1, source_count - 1)

    left = source[idx]
    samples = left + (source[nxt] - left) * frac
    peak = float(np.max(np.abs(samples)))
    return samples, peak
