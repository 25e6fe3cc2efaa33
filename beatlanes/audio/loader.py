"""Audio decoding utilities."""

from __future__ import annotations

from io import BytesIO
from pathlib import Path
from typing import Union

import librosa
import numpy as np

from beatlanes.errors import DecodeError


def load_audio(
    file_path_or_buffer: Union[str, Path, BytesIO],
    sr: int | None = None,
) -> tuple[np.ndarray, int]:
    """Decode an audio file or buffer to mono.

    Parameters
    ----------
    file_path_or_buffer:
        Path to an audio file or a BytesIO buffer containing audio data.
    sr:
        Target sample rate. ``None`` (the default) keeps the native rate.

    Returns
    -------
    tuple[np.ndarray, int]
        A tuple of (audio_array, sample_rate).

    Raises
    ------
    DecodeError
        If the data cannot be decoded or contains no samples.
    """
    try:
        audio, sample_rate = librosa.load(file_path_or_buffer, sr=sr, mono=True)
    except Exception as e:
        raise DecodeError(f"Could not decode audio: {e}") from e
    if audio.size == 0:
        raise DecodeError("Could not decode audio: no samples")
    return audio, int(sample_rate)


def decode_bytes(data: bytes, sr: int | None = None) -> tuple[np.ndarray, int]:
    """Decode raw file bytes (any format libsndfile understands)."""
    if not data:
        raise DecodeError("Could not decode audio: empty input")
    return load_audio(BytesIO(data), sr=sr)
