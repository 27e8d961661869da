import pytest

from speech_pipeline.voices import GEMINI_TTS_VOICES, get_default_voice, is_gemini_voice


def test_catalog_has_thirty_unique_voices():
    ids = [v["id"] for v in GEMINI_TTS_VOICES]
    assert len(ids) == 30
    assert len(set(ids)) == 30


@pytest.mark.parametrize("gender, age, expected", [
    ("female", "child", "Leda"),
    ("female", "young", "Leda"),
    ("female", "adult", "Aoede"),
    ("male", "young", "Puck"),
    ("male", "senior", "Charon"),
    ("male", None, "Fenrir"),
    (None, None, "Zephyr"),
])
def test_default_voice(gender, age, expected):
    assert get_default_voice(gender, age) == expected


def test_is_gemini_voice():
    assert is_gemini_voice("Kore")
    assert not is_gemini_voice("ko-KR-Standard-A")
