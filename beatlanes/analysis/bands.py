"""Frequency bands and per-band energy aggregation."""

from __future__ import annotations

import logging
from dataclasses import dataclass

import numpy as np

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Band:
    """A frequency range routed to one lane."""
    name: str
    min_hz: float
    max_hz: float
    lane: int

    def bin_range(self, frame_size: int, sr: int) -> tuple[int, int]:
        """Nominal ``[min_bin, max_bin)`` for this band, not clamped to the spectrum."""
        return (
            int(np.floor(self.min_hz * frame_size / sr)),
            int(np.floor(self.max_hz * frame_size / sr)),
        )


DEFAULT_BANDS: tuple[Band, ...] = (
    Band("bass", 20.0, 250.0, 0),
    Band("low", 250.0, 500.0, 1),
    Band("mid", 500.0, 2000.0, 2),
    Band("high", 2000.0, 6000.0, 3),
)


def validate_bands(bands: tuple[Band, ...] | list[Band]) -> None:
    """Check that lane indices are a permutation of 0..len(bands)-1."""
    if not bands:
        raise ValueError("at least one band is required")
    lanes = sorted(b.lane for b in bands)
    if lanes != list(range(len(bands))):
        raise ValueError(f"band lanes must be a permutation of 0..{len(bands) - 1}, got {lanes}")
    for b in bands:
        if not 0 <= b.min_hz < b.max_hz:
            raise ValueError(f"band {b.name!r} has an invalid range {b.min_hz}-{b.max_hz} Hz")


class BandAggregator:
    """Reduce a spectrum to one mean-energy value per band.

    Bin ranges are fixed for a given frame size and sample rate, so they are
    computed once. A band reaching past the spectrum is summed only up to
    the last bin but still divided by its full nominal width.
    """

    def __init__(self, bands: tuple[Band, ...] | list[Band], frame_size: int, sr: int) -> None:
        validate_bands(bands)
        self.bands = tuple(bands)
        self._n_bins = frame_size // 2
        self._ranges: list[tuple[int, int, int]] = []

        for band in self.bands:
            min_bin, max_bin = band.bin_range(frame_size, sr)
            width = max_bin - min_bin
            if width <= 0:
                raise ValueError(
                    f"band {band.name!r} spans no spectrum bins at {sr}Hz "
                    f"with frame size {frame_size}"
                )
            stop = min(max_bin, self._n_bins)
            if stop < max_bin:
                logger.debug(f"Band {band.name}: bins {min_bin}-{max_bin} truncated at {stop}")
            else:
                logger.debug(f"Band {band.name}: bins {min_bin}-{max_bin}")
            self._ranges.append((min_bin, stop, width))

    def aggregate(self, spectrum: np.ndarray) -> np.ndarray:
        """Return band energies in band configuration order."""
        energies = np.empty(len(self._ranges), dtype=np.float64)
        for i, (start, stop, width) in enumerate(self._ranges):
            total = float(np.sum(spectrum[start:stop])) if stop > start else 0.0
            energies[i] = total / width
        return energies

    @property
    def bin_ranges(self) -> list[tuple[int, int]]:
        """Summed ``[start, stop)`` bins per band."""
        return [(start, stop) for start, stop, _ in self._ranges]
