"""Tests for signal framing."""

import numpy as np
import pytest

from beatlanes.analysis.framing import Framer, hamming_window


def test_hamming_window_formula():
    window = hamming_window(2048)
    k = np.arange(2048)
    expected = 0.54 - 0.46 * np.cos(2 * np.pi * k / 2047)
    np.testing.assert_allclose(window, expected, atol=1e-12)
    assert window[0] == pytest.approx(0.08)
    assert window[-1] == pytest.approx(0.08)


def test_frame_offsets_and_times():
    sr = 22050
    audio = np.ones(10000)
    framer = Framer(audio, sr, frame_size=2048, hop_size=441)

    frames = list(framer)
    # (10000 - 2048) // 441 + 1
    assert len(frames) == 19 == len(framer)
    assert [f.offset for f in frames[:3]] == [0, 441, 882]
    assert frames[-1].offset + 2048 <= len(audio)
    assert frames[1].time == pytest.approx(441 / sr)


def test_frames_are_windowed():
    audio = np.ones(4096)
    frame = next(iter(Framer(audio, 44100, frame_size=2048, hop_size=882)))
    np.testing.assert_allclose(frame.samples, hamming_window(2048))


def test_framer_is_restartable():
    rng = np.random.default_rng(0)
    framer = Framer(rng.standard_normal(8000), 22050, frame_size=1024, hop_size=441)
    first = [f.samples for f in framer]
    second = [f.samples for f in framer]
    assert len(first) == len(second) > 0
    for a, b in zip(first, second):
        np.testing.assert_array_equal(a, b)


def test_signal_shorter_than_frame_yields_nothing():
    assert list(Framer(np.zeros(2047), 44100, 2048, 882)) == []
    assert list(Framer(np.zeros(0), 44100, 2048, 882)) == []


def test_exactly_one_frame():
    assert len(list(Framer(np.zeros(2048), 44100, 2048, 882))) == 1


def test_zero_hop_rejected():
    with pytest.raises(ValueError):
        Framer(np.zeros(4096), 10, 2048, 0)


def test_input_not_modified():
    audio = np.ones(4096)
    list(Framer(audio, 44100, 2048, 882))
    assert np.all(audio == 1.0)
