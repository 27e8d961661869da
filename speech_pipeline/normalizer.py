from __future__ import annotations

from typing import Optional

import numpy as np

from speech_pipeline.logging_utils import get_logger
from speech_pipeline.resampler import TARGET_SAMPLE_RATE
from speech_pipeline.types import GainPlan

log = get_logger(__name__)

PEAK_CEILING = 0.6
FADE_SECONDS = 0.005
MAX_FADE_SAMPLES = 120


def fade_length(sample_rate: int = TARGET_SAMPLE_RATE) -> int:
    """About 5 ms of samples, never more than 120."""
    return min(int(np.floor(sample_rate * FADE_SECONDS)), MAX_FADE_SAMPLES)


def compute_gain_plan(
    samples: np.ndarray,
    peak: Optional[float] = None,
    target_peak_ceiling: float = PEAK_CEILING,
    volume_multiplier: float = 1.0,
    target_rate: int = TARGET_SAMPLE_RATE,
) -> GainPlan:
    """Choose the gain that keeps ``peak * gain`` at or under the ceiling.

    The caller's multiplier is used as-is unless it would push the peak past
    ``target_peak_ceiling``, in which case it is replaced by
    ``target_peak_ceiling / peak``. A silent signal keeps the multiplier.
    ``peak`` is measured from ``samples`` when not given.
    """
    if peak is None:
        peak = float(np.max(np.abs(samples))) if len(samples) else 0.0

    gain = volume_multiplier
    ceiling_applied = False
    candidate = peak * volume_multiplier
    if peak > 0 and candidate > target_peak_ceiling:
        gain = target_peak_ceiling / peak
        ceiling_applied = True
        log.info("normalization applied", extra={
            "peak_pct": round(candidate * 100), "ceiling_pct": round(target_peak_ceiling * 100),
        })
    return GainPlan(gain=gain, fade_samples=fade_length(target_rate), ceiling_applied=ceiling_applied)


def fade_envelope(count: int, fade_samples: int) -> np.ndarray:
    """Linear ramp-in over the head and ramp-out over the tail.

    The head ramp wins where the two overlap.
    """
    envelope = np.ones(count, dtype=np.float64)
    if fade_samples <= 0 or count == 0:
        return envelope
    idx = np.arange(count)
    tail = idx > count - fade_samples
    envelope[tail] = (count - idx[tail]) / fade_samples
    head = idx < fade_samples
    envelope[head] = idx[head] / fade_samples
    return envelope


def apply_gain(samples: np.ndarray, plan: GainPlan) -> np.ndarray:
    """Return a new array scaled by ``plan.gain`` and the fade envelope."""
    samples = np.asarray(samples, dtype=np.float64)
    return samples * plan.gain * fade_envelope(samples.size, plan.fade_samples)
