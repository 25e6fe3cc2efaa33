"""Per-band adaptive onset detection."""

from __future__ import annotations

import enum
import math

from beatlanes.analysis.history import RollingHistory

# Threshold multiplier (in standard deviations above the mean)
_BASE_MULTIPLIER = 2.5
_LOUD_INTENSITY = 1.3  # above this the bar starts to drop
_LOUD_MULTIPLIER = 2.0
_MIN_MULTIPLIER = 1.5

# Flux must exceed this fraction of the band's mean energy
_FLUX_RATIO = 0.5


class DetectorState(enum.Enum):
    WARMING = "warming"
    ACTIVE = "active"


def threshold_multiplier(intensity: float) -> float:
    """Standard deviations an energy must clear at the given intensity.

    Loud passages get a lower bar so they keep registering, never below 1.5.
    """
    if intensity > _LOUD_INTENSITY:
        slack = _LOUD_MULTIPLIER - (intensity - _LOUD_INTENSITY)
    else:
        slack = _BASE_MULTIPLIER
    return max(_MIN_MULTIPLIER, slack)


class BandOnsetDetector:
    """Onset state machine for one band.

    ``WARMING`` until the history holds ``window`` energies, then ``ACTIVE``
    for the rest of the run. Only active detectors flag onsets.
    """

    def __init__(self, window: int = 43) -> None:
        self.history = RollingHistory(window)
        self.state = DetectorState.WARMING
        self.previous_energy: float | None = None
        self.flux = 0.0

    def update(self, energy: float, intensity: float) -> bool:
        """Feed one frame's band energy; return True if it is an onset."""
        self.history.push(energy)
        if self.previous_energy is not None:
            self.flux = max(0.0, energy - self.previous_energy)
        self.previous_energy = energy

        if self.state is DetectorState.WARMING:
            if not self.history.is_full:
                return False
            self.state = DetectorState.ACTIVE

        mean = self.history.mean()
        threshold = mean + math.sqrt(self.history.variance()) * threshold_multiplier(intensity)
        return energy > threshold and self.flux > mean * _FLUX_RATIO
