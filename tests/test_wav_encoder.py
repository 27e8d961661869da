import struct

import numpy as np
import pytest

from speech_pipeline.errors import MalformedHeaderAssumptionError
from speech_pipeline.wav_encoder import encode_wav, quantize, read_wav_header, wav_samples


def test_header_layout_and_size():
    data = encode_wav(np.zeros(10), 48000)
    assert len(data) == 44 + 10 * 4
    assert data[0:4] == b"RIFF"
    assert data[8:12] == b"WAVE"
    assert data[12:16] == b"fmt "
    assert data[36:40] == b"data"
    riff_size, = struct.unpack_from("<I", data, 4)
    fmt = struct.unpack_from("<IHHIIHH", data, 16)
    data_len, = struct.unpack_from("<I", data, 40)
    assert riff_size == 36 + 40
    assert fmt == (16, 1, 2, 48000, 48000 * 4, 4, 16)
    assert data_len == 40


def test_read_wav_header_matches_payload():
    header = read_wav_header(encode_wav(np.zeros(7), 44100))
    assert header.sample_rate == 44100
    assert header.channels == 2
    assert header.data_length == 28


def test_empty_signal_is_header_only():
    data = encode_wav(np.zeros(0))
    assert len(data) == 44
    assert read_wav_header(data).data_length == 0


def test_quantize_rounds_and_clamps():
    values = quantize(np.array([1.0, -1.0, 2.0, -2.0, 0.5, -0.25, 0.0]))
    assert values.tolist() == [32767, -32767, 32767, -32768, 16384, -8192, 0]


def test_samples_are_duplicated_to_both_channels():
    stereo = wav_samples(encode_wav(np.array([0.5, -0.25])))
    assert stereo.tolist() == [16384, 16384, -8192, -8192]


def test_truncated_wav_is_rejected():
    data = encode_wav(np.zeros(10))
    with pytest.raises(MalformedHeaderAssumptionError):
        read_wav_header(data[:-4])
    with pytest.raises(MalformedHeaderAssumptionError):
        read_wav_header(data[:20])


def test_bad_marker_is_rejected():
    data = bytearray(encode_wav(np.zeros(2)))
    data[8:12] = b"AVI "
    with pytest.raises(MalformedHeaderAssumptionError):
        read_wav_header(bytes(data))
