"""Slicing a signal into overlapping Hamming-windowed analysis frames."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator

import numpy as np
from scipy.signal import get_window


@dataclass
class Frame:
    """One hop step of the signal, filled in as it moves down the pipeline."""
    index: int
    offset: int  # start sample
    time: float  # seconds
    samples: np.ndarray  # windowed
    spectrum: np.ndarray | None = None
    band_energies: np.ndarray | None = field(default=None, repr=False)


def hamming_window(frame_size: int) -> np.ndarray:
    """Symmetric Hamming window, ``0.54 - 0.46*cos(2*pi*k/(F-1))``."""
    return get_window("hamming", frame_size, fftbins=False)


class Framer:
    """Restartable iterable of windowed frames over a signal.

    Frames start at 0, hop, 2*hop, ... up to the last offset where a full
    frame fits; a signal shorter than one frame yields nothing.

    Parameters
    ----------
    audio:
        Mono samples. Read, never modified.
    sr:
        Sample rate in Hz.
    frame_size:
        Samples per frame.
    hop_size:
        Samples between consecutive frame starts.
    """

    def __init__(self, audio: np.ndarray, sr: int, frame_size: int, hop_size: int) -> None:
        if hop_size < 1:
            raise ValueError(f"hop size must be at least one sample (sr={sr})")
        self._audio = np.asarray(audio, dtype=np.float64).ravel()
        self._sr = sr
        self._frame_size = frame_size
        self._hop_size = hop_size
        self._window = hamming_window(frame_size)

    def __len__(self) -> int:
        n = len(self._audio)
        if n < self._frame_size:
            return 0
        return (n - self._frame_size) // self._hop_size + 1

    def __iter__(self) -> Iterator[Frame]:
        for index in range(len(self)):
            offset = index * self._hop_size
            raw = self._audio[offset:offset + self._frame_size]
            yield Frame(
                index=index,
                offset=offset,
                time=offset / self._sr,
                samples=raw * self._window,
            )
