"""Shared test fixtures for beat chart analysis tests."""

import numpy as np
import pytest
import soundfile as sf
from fastapi.testclient import TestClient

from beatlanes.main import app


@pytest.fixture
def client():
    """FastAPI test client."""
    return TestClient(app)


def generate_click_track(
    bpm: float = 120,
    duration_seconds: float = 10.0,
    sr: int = 22050,
    freq: float = 1000.0,
) -> np.ndarray:
    """Generate a synthetic click track: decaying sine bursts on every beat.

    Returns mono audio at the given sample rate, peak-normalized.
    """
    n_samples = int(duration_seconds * sr)
    audio = np.zeros(n_samples, dtype=np.float32)

    beat_interval = 60.0 / bpm  # seconds per beat
    click_duration = 0.02  # 20ms click
    click_samples = int(click_duration * sr)

    # Create click sound (short sine burst with envelope)
    t_click = np.arange(click_samples) / sr
    click = np.sin(2 * np.pi * freq * t_click) * np.exp(-t_click * 100)

    time = 0.0
    while time < duration_seconds:
        sample_pos = int(time * sr)
        end = min(sample_pos + click_samples, n_samples)
        length = end - sample_pos
        if length > 0:
            audio[sample_pos:end] += click[:length]
        time += beat_interval

    # Normalize
    peak = np.max(np.abs(audio))
    if peak > 0:
        audio = audio / peak

    return audio


@pytest.fixture
def click_120():
    """10s click track at 120 BPM, 22050 Hz."""
    return generate_click_track(bpm=120, duration_seconds=10)


@pytest.fixture
def song_dir(tmp_path, monkeypatch):
    """Empty song directory wired into the settings."""
    from beatlanes.config import settings

    directory = tmp_path / "songs"
    directory.mkdir()
    monkeypatch.setattr(settings, "song_dir", str(directory))
    return directory


def write_wav(path, audio: np.ndarray, sr: int = 22050):
    sf.write(str(path), audio, sr)
    return path
