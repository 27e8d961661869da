"""Prebuilt Gemini TTS voices."""

from __future__ import annotations

from typing import Dict, List, Optional

GEMINI_TTS_VOICES: List[Dict[str, str]] = [
    # female
    {"id": "Aoede", "gender": "female", "style": "Warm, clear, conversational, engaging"},
    {"id": "Kore", "gender": "female", "style": "Energetic, youthful, confident, bright"},
    {"id": "Leda", "gender": "female", "style": "Vibrant, high-energy, positive, friendly"},
    {"id": "Zephyr", "gender": "female", "style": "Energetic, bright, warm, modern"},
    {"id": "Callirrhoe", "gender": "female", "style": "Crisp, confident, professional, upbeat"},
    {"id": "Autonoe", "gender": "female", "style": "High-energy, friendly, vibrant, approachable"},
    {"id": "Despina", "gender": "female", "style": "High-energy, youthful, warm, inviting"},
    {"id": "Erinome", "gender": "female", "style": "Bright, polished, helpful, professional"},
    {"id": "Laomedeia", "gender": "female", "style": "High-energy, friendly, clear, upbeat"},
    {"id": "Achernar", "gender": "female", "style": "Soft, bubbly, modern, youthful"},
    {"id": "Gacrux", "gender": "female", "style": "Mature, warm, engaging, conversational"},
    {"id": "Pulcherrima", "gender": "female", "style": "Bright, energetic, youthful, polished"},
    {"id": "Vindemiatrix", "gender": "female", "style": "Lively, dynamic, engaging, upbeat"},
    {"id": "Sulafat", "gender": "female", "style": "Warm, confident, articulate, clear"},
    # male
    {"id": "Puck", "gender": "male", "style": "Energetic, expressive, upbeat, enthusiastic"},
    {"id": "Charon", "gender": "male", "style": "Rich, deep, mature, reassuring, informative"},
    {"id": "Fenrir", "gender": "male", "style": "Bright, youthful, eager, conversational"},
    {"id": "Orus", "gender": "male", "style": "Lively, energetic, professional, clear"},
    {"id": "Enceladus", "gender": "male", "style": "Clear, confident, mature, professional"},
    {"id": "Iapetus", "gender": "male", "style": "Polished, approachable, warm, friendly"},
    {"id": "Umbriel", "gender": "male", "style": "Smooth, authoritative, friendly, engaging"},
    {"id": "Algieba", "gender": "male", "style": "Warm, conversational, crisp, confident"},
    {"id": "Algenib", "gender": "male", "style": "Warm, velvety, helpful, professional"},
    {"id": "Rasalgethi", "gender": "male", "style": "Energetic, youthful, enthusiastic, bouncy"},
    {"id": "Alnilam", "gender": "male", "style": "Energetic, firm, fast-paced, modern"},
    {"id": "Schedar", "gender": "male", "style": "Even, mature, crisp, confident, versatile"},
    {"id": "Achird", "gender": "male", "style": "Friendly, high-energy, approachable"},
    {"id": "Zubenelgenubi", "gender": "male", "style": "Crisp, energetic, confident, engaging"},
    {"id": "Sadachbia", "gender": "male", "style": "High-energy, friendly, confident, warm"},
    {"id": "Sadaltager", "gender": "male", "style": "Warm, relaxed, natural, conversational"},
]

_VOICE_IDS = {v["id"] for v in GEMINI_TTS_VOICES}


def is_gemini_voice(voice_id: str) -> bool:
    return voice_id in _VOICE_IDS


def get_default_voice(gender: Optional[str] = None, age: Optional[str] = None) -> str:
    """Pick a voice for a speaker with no explicit voice assignment."""
    young = age in ("child", "young")
    if gender == "female":
        return "Leda" if young else "Aoede"
    if gender == "male":
        if young:
            return "Puck"
        if age == "senior":
            return "Charon"
        return "Fenrir"
    return "Zephyr"
