from __future__ import annotations

import json
import os
import re
from concurrent.futures import ThreadPoolExecutor
from typing import Dict, List, Optional, Set, Tuple

from speech_pipeline.audio import combine_wav_files
from speech_pipeline.config import Settings, load_settings
from speech_pipeline.errors import GeminiTtsError, PipelineError
from speech_pipeline.gemini_client import generate_voice_wav
from speech_pipeline.logging_utils import get_logger
from speech_pipeline.types import Cut, TtsVoiceConfig
from speech_pipeline.voices import get_default_voice, is_gemini_voice

log = get_logger(__name__)


def load_cuts(json_path: str) -> List[Cut]:
    """Read a cut list; a ``{"cuts": [...]}`` wrapper is also accepted."""
    with open(json_path, 'r', encoding='utf-8') as f:
        data = json.load(f)
    if isinstance(data, dict):
        data = data.get("cuts") or []
    if not isinstance(data, list):
        raise ValueError(f"{json_path}: expected a list of cuts")
    return data


def voice_config_for_cut(cut: Cut, language_code: str) -> TtsVoiceConfig:
    voice = cut.get("voice")
    if not voice or not is_gemini_voice(voice):
        if voice:
            log.warning("unknown voice; using default", extra={"cut": cut.get("id"), "voice": voice})
        voice = get_default_voice(cut.get("gender"), cut.get("age"))
    return TtsVoiceConfig(
        voice_name=voice,
        language_code=language_code,
        acting_direction=cut.get("acting_direction"),
        volume=cut.get("volume"),
        rate=cut.get("rate"),
    )


_UNSAFE_CHARS = re.compile(r"[^\w.-]")


def _cut_filename(cut: Cut, position: int, taken: Set[str]) -> str:
    """``cut_<id>.wav`` with the id made path-safe; repeated ids get the position appended."""
    cut_id = _UNSAFE_CHARS.sub("_", str(cut.get("id", position + 1))).lstrip(".") or str(position + 1)
    name = f"cut_{cut_id}.wav"
    suffix = position + 1
    while name in taken:
        name = f"cut_{cut_id}_{suffix}.wav"
        suffix += 1
    taken.add(name)
    return name


def _render_cut(cut: Cut, out_path: str, api_key: Optional[str], language_code: str,
                settings: Settings) -> Optional[str]:
    config = voice_config_for_cut(cut, language_code)
    try:
        wav_bytes = generate_voice_wav(cut["dialogue"], api_key, config, settings=settings)
    except GeminiTtsError as e:
        log.error("cut synthesis failed", extra={
            "cut": cut.get("id"), "kind": type(e).__name__, "error": str(e)
        })
        return None
    except PipelineError as e:
        log.error("cut audio processing failed", extra={
            "cut": cut.get("id"), "kind": type(e).__name__, "error": str(e)
        })
        return None
    try:
        with open(out_path, 'wb') as f:
            f.write(wav_bytes)
    except OSError as e:
        log.error("cut write failed", extra={
            "cut": cut.get("id"), "kind": type(e).__name__, "file": out_path, "error": str(e)
        })
        return None
    log.info("cut voice written", extra={"cut": cut.get("id"), "file": out_path, "voice": config.voice_name})
    return out_path


def generate_cut_voices(
    json_path: str,
    output_dir: str,
    api_key: Optional[str] = None,
    language_code: str = "ko-KR",
    workers: Optional[int] = None,
    combine_audio: bool = True,
    silence_duration: float = 0.5,
    settings: Optional[Settings] = None,
) -> Tuple[bool, List[str]]:
    """Generate one WAV per cut with dialogue and optionally combine them.

    Cuts are synthesized concurrently; each pipeline invocation is
    independent. Writes ``cut_<id>.wav`` per cut (id made path-safe,
    position appended on repeats) and, when combining,
    ``combined_all_cuts.wav`` in cut order. Returns (ok, written_files).
    """
    settings = settings or load_settings()
    api_key = api_key or settings.gemini_api_key
    workers = workers or settings.workers
    cuts = load_cuts(json_path)

    log.info("start cut voice generation", extra={
        "json_path": json_path, "output_dir": output_dir, "cuts": len(cuts), "workers": workers,
    })
    os.makedirs(output_dir, exist_ok=True)

    jobs: List[Tuple[Cut, str]] = []
    taken: Set[str] = set()
    for i, cut in enumerate(cuts):
        if not str(cut.get("dialogue") or "").strip():
            log.warning("empty dialogue; skip", extra={"cut": cut.get("id")})
            continue
        jobs.append((cut, os.path.join(output_dir, _cut_filename(cut, i, taken))))

    with ThreadPoolExecutor(max_workers=max(1, workers)) as pool:
        futures = [pool.submit(_render_cut, cut, path, api_key, language_code, settings)
                   for cut, path in jobs]
        results = [f.result() for f in futures]

    generated = [p for p in results if p]
    all_ok = len(generated) == len(jobs)
    log.info("cut voice generation done", extra={"written": len(generated), "requested": len(jobs)})

    if combine_audio and len(generated) > 1:
        combined = os.path.join(output_dir, "combined_all_cuts.wav")
        ok = combine_wav_files(generated, combined, silence_duration)
        if ok:
            generated.append(combined)
        return ok and all_ok, generated
    return all_ok, generated


def summarize_cuts(json_path: str) -> Dict[str, object]:
    cuts = load_cuts(json_path)
    spoken = [c for c in cuts if str(c.get("dialogue") or "").strip()]
    return {"cuts": len(cuts), "with_dialogue": len(spoken), "first_ids": [c.get("id") for c in cuts[:5]]}
