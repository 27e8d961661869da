import wave
from concurrent.futures import ThreadPoolExecutor

import numpy as np
import pytest

from speech_pipeline.audio import (
    combine_wav_files,
    decode_payload,
    is_raw_pcm_mime,
    parse_sample_rate,
    pcm_to_wav,
    process_pcm_payload,
)
from speech_pipeline.errors import EmptyPayloadError
from speech_pipeline.wav_encoder import read_wav_header, wav_samples

STEP = 1 / 32768


def _left(container):
    return wav_samples(container.data)[0::2].astype(np.int64)


def test_end_to_end_sine_at_24k(sine_pcm):
    container = pcm_to_wav(sine_pcm(count=2400, amplitude=0.3), source_rate=24000, volume_multiplier=1.0)
    assert container.sample_count == 4800
    assert container.byte_length == 19244
    assert read_wav_header(container.data).data_length == 4800 * 4
    left = _left(container)
    assert np.abs(left).max() / 32767 == pytest.approx(0.3, abs=1e-3)
    assert left[0] == 0
    ramp = np.abs(left[:120]) / 32767
    assert (ramp <= 0.3 * np.arange(120) / 120 + STEP).all()


def test_channels_are_identical(sine_pcm):
    stereo = wav_samples(pcm_to_wav(sine_pcm()).data)
    assert (stereo[0::2] == stereo[1::2]).all()


@pytest.mark.parametrize("count", [1, 2, 37, 4800])
def test_silence_is_preserved(count):
    container = pcm_to_wav(b"\x00\x00" * count, volume_multiplier=1.4)
    assert not wav_samples(container.data).any()
    assert container.peak == 0.0


def test_loud_input_is_capped_at_ceiling(sine_pcm):
    container = pcm_to_wav(sine_pcm(amplitude=0.9))
    assert np.abs(_left(container)).max() / 32768 == pytest.approx(0.6, abs=STEP)
    assert container.peak == pytest.approx(0.6)


def test_multiplier_that_would_exceed_ceiling_is_capped(sine_pcm):
    container = pcm_to_wav(sine_pcm(amplitude=0.5), volume_multiplier=1.5)
    assert np.abs(_left(container)).max() / 32768 == pytest.approx(0.6, abs=STEP)


def test_sub_ceiling_input_passes_through_scaled(sine_pcm):
    raw = sine_pcm(amplitude=0.3)
    input_peak = np.abs(np.frombuffer(raw, dtype="<i2").astype(np.int64)).max() / 32768
    container = pcm_to_wav(raw, volume_multiplier=1.5)
    assert np.abs(_left(container)).max() / 32767 == pytest.approx(input_peak * 1.5, abs=STEP)


def test_byte_swapped_input_decodes_to_same_wav(sine_pcm):
    le = pcm_to_wav(sine_pcm(little_endian=True))
    be = pcm_to_wav(sine_pcm(little_endian=False))
    assert le.data == be.data


def test_base64_payload_defaults(sine_pcm, b64):
    raw = sine_pcm(count=1200)
    container = process_pcm_payload(b64(raw))
    assert container.sample_rate == 48000
    assert container.sample_count == 2400
    assert container.data == pcm_to_wav(raw, source_rate=24000, volume_multiplier=1.0).data


def test_explicit_sample_rate_hint(sine_pcm, b64):
    container = process_pcm_payload(b64(sine_pcm(count=1600, rate=16000)), sample_rate=16000)
    assert container.sample_count == 4800


@pytest.mark.parametrize("payload", ["", "AA==", "!!!!"])
def test_empty_payload_fails_fast(payload):
    with pytest.raises(EmptyPayloadError):
        process_pcm_payload(payload)


def test_bad_padding_is_empty_payload():
    with pytest.raises(EmptyPayloadError):
        decode_payload("AAA")


def test_raw_empty_bytes_rejected():
    with pytest.raises(EmptyPayloadError):
        pcm_to_wav(b"")
    with pytest.raises(EmptyPayloadError):
        pcm_to_wav(b"\x01")


def test_odd_length_payload_drops_last_byte(sine_pcm):
    raw = sine_pcm(count=100)
    assert pcm_to_wav(raw + b"\x55").data == pcm_to_wav(raw).data


@pytest.mark.parametrize("mime, expected", [
    ("audio/L16;codec=pcm;rate=24000", 24000),
    ("audio/L16;rate=16000", 16000),
    ("audio/pcm", 24000),
    ("audio/L16;rate=0", 24000),
    ("", 24000),
    (None, 24000),
])
def test_parse_sample_rate(mime, expected):
    assert parse_sample_rate(mime) == expected


def test_is_raw_pcm_mime():
    assert is_raw_pcm_mime("audio/L16;codec=pcm;rate=24000")
    assert is_raw_pcm_mime("audio/pcm")
    assert not is_raw_pcm_mime("audio/mpeg")
    assert not is_raw_pcm_mime(None)


def test_parallel_invocations_match_serial(sine_pcm):
    payloads = [sine_pcm(amplitude=a) for a in (0.1, 0.3, 0.5, 0.9)]
    serial = [pcm_to_wav(p).data for p in payloads]
    with ThreadPoolExecutor(max_workers=4) as pool:
        parallel = [c.data for c in pool.map(pcm_to_wav, payloads)]
    assert parallel == serial


def test_combine_wav_files_inserts_silence(tmp_path, sine_pcm):
    paths = []
    for i, count in enumerate((1200, 600)):
        path = tmp_path / f"cut_{i}.wav"
        path.write_bytes(pcm_to_wav(sine_pcm(count=count)).data)
        paths.append(str(path))
    out = tmp_path / "combined.wav"

    assert combine_wav_files(paths, str(out), silence_duration=0.01) is True
    with wave.open(str(out), "rb") as w:
        assert w.getnchannels() == 2
        assert w.getframerate() == 48000
        assert w.getnframes() == 2400 + 480 + 1200


def test_combine_wav_files_without_inputs(tmp_path):
    assert combine_wav_files([], str(tmp_path / "x.wav")) is False
