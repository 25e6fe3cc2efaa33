"""Integration tests for the analysis engine."""

import threading

import numpy as np
import pytest

from beatlanes.analysis.arbiter import spacing_rules
from beatlanes.analysis.engine import AnalysisEngine
from beatlanes.analysis.models import AnalysisResult, EngineConfig, rate_difficulty
from beatlanes.errors import AnalysisCancelled
from tests.conftest import generate_click_track, write_wav


def test_analyze_audio_returns_result(click_120):
    """Engine should return a successful AnalysisResult for a click track."""
    result = AnalysisEngine().analyze_audio(click_120, sr=22050)

    assert isinstance(result, AnalysisResult)
    assert result.success
    assert result.error is None
    assert len(result.beats) > 0
    assert result.duration == pytest.approx(10.0)
    assert result.difficulty == rate_difficulty(len(result.beats))


def test_deterministic(click_120):
    engine = AnalysisEngine()
    first = engine.analyze_audio(click_120, sr=22050)
    second = AnalysisEngine().analyze_audio(click_120, sr=22050)
    assert first.beats == second.beats


def test_beats_ordered_with_sequential_ids(click_120):
    beats = AnalysisEngine().analyze_audio(click_120, sr=22050).beats

    times = [b.time for b in beats]
    assert times == sorted(times)
    assert [b.id for b in beats] == list(range(len(beats)))
    assert all(b.hit is False for b in beats)


def test_lanes_valid(click_120):
    beats = AnalysisEngine().analyze_audio(click_120, sr=22050).beats
    assert all(0 <= b.lane < 4 for b in beats)


def test_lane_spacing_and_simultaneous_cap():
    rng = np.random.default_rng(7)
    audio = generate_click_track(bpm=180, duration_seconds=12) + 0.05 * rng.standard_normal(12 * 22050)
    beats = AnalysisEngine().analyze_audio(audio.astype(np.float32), sr=22050).beats
    assert beats

    last_in_lane = {}
    for beat in beats:
        max_simultaneous, min_gap = spacing_rules(beat.intensity)
        if beat.lane in last_in_lane:
            assert beat.time - last_in_lane[beat.lane] > min_gap
        last_in_lane[beat.lane] = beat.time

        near = [b for b in beats[:beat.id + 1] if abs(b.time - beat.time) < 0.15]
        assert len(near) <= max_simultaneous


def test_no_beats_during_warmup(click_120):
    """Nothing is committed before every band has a full history."""
    config = EngineConfig()
    beats = AnalysisEngine(config).analyze_audio(click_120, sr=22050).beats
    hop = config.hop_size(22050)
    assert min(b.time for b in beats) >= (config.history_size - 1) * hop / 22050


def test_silent_input_produces_no_beats():
    result = AnalysisEngine().analyze_audio(np.zeros(3 * 22050, dtype=np.float32), sr=22050)
    assert result.success
    assert result.beats == []
    assert result.difficulty == "Easy"


def test_input_shorter_than_a_frame():
    percents = []
    result = AnalysisEngine().analyze_audio(np.zeros(1000), sr=22050, on_progress=percents.append)
    assert result.success
    assert result.beats == []
    assert percents == [100]


def test_progress_monotonic_and_complete(click_120):
    percents = []
    AnalysisEngine().analyze_audio(click_120, sr=22050, on_progress=percents.append)

    assert percents[0] == 0
    assert percents[-1] == 100
    assert percents == sorted(percents)
    assert all(0 <= p <= 100 for p in percents)
    # roughly one notice per 5% of the frames
    assert 15 <= len(percents) <= 25


def test_cancel_before_start(click_120):
    cancel = threading.Event()
    cancel.set()
    with pytest.raises(AnalysisCancelled):
        AnalysisEngine().analyze_audio(click_120, sr=22050, cancel_event=cancel)


def test_cancel_mid_run(click_120):
    cancel = threading.Event()
    percents = []

    def on_progress(percent):
        percents.append(percent)
        if percent >= 50:
            cancel.set()

    with pytest.raises(AnalysisCancelled):
        AnalysisEngine().analyze_audio(click_120, sr=22050, on_progress=on_progress, cancel_event=cancel)
    assert 100 not in percents


def test_stereo_input_rejected():
    with pytest.raises(ValueError, match="mono"):
        AnalysisEngine().analyze_audio(np.zeros((2, 4096)), sr=22050)


def test_analyze_file(tmp_path, click_120):
    """Engine should analyze a WAV file at its native sample rate."""
    wav_path = write_wav(tmp_path / "click.wav", click_120)
    result = AnalysisEngine().analyze_file(str(wav_path))

    assert result.success
    assert result.duration == pytest.approx(10.0)
    assert len(result.beats) > 0


def test_engine_config_validation():
    with pytest.raises(ValueError):
        EngineConfig(frame_size=1000)
    with pytest.raises(ValueError):
        EngineConfig(history_size=1)
    assert EngineConfig().hop_size(44100) == 882
    assert EngineConfig().hop_size(22050) == 441


def test_rate_difficulty():
    assert rate_difficulty(0) == "Easy"
    assert rate_difficulty(49) == "Easy"
    assert rate_difficulty(50) == "Medium"
    assert rate_difficulty(99) == "Medium"
    assert rate_difficulty(100) == "Hard"
