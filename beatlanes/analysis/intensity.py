"""Global intensity: how energetic recent audio is relative to the track so far."""

from beatlanes.analysis.history import RollingHistory

MIN_INTENSITY = 0.5
MAX_INTENSITY = 3.0
NEUTRAL_INTENSITY = 1.0


class IntensityTracker:
    """Rolling whole-frame energy history and the intensity derived from it.

    Holds ``2 * window`` frame energies. Until ``window`` frames have been
    seen the intensity is neutral (1.0); afterwards it is the mean of the
    last ``window`` frames over the mean of everything held, clamped to
    [0.5, 3.0].
    """

    def __init__(self, window: int = 43) -> None:
        self.window = window
        self.history = RollingHistory(window * 2)
        self.intensity = NEUTRAL_INTENSITY

    def update(self, total_energy: float) -> float:
        """Push one frame's total spectrum energy and return the new intensity."""
        self.history.push(total_energy)

        if len(self.history) < self.window:
            self.intensity = NEUTRAL_INTENSITY
            return self.intensity

        overall = self.history.mean()
        if overall <= 0.0:
            # Silence so far: nothing to compare against.
            self.intensity = NEUTRAL_INTENSITY
            return self.intensity

        recent = self.history.mean(last_n=self.window)
        self.intensity = min(MAX_INTENSITY, max(MIN_INTENSITY, recent / overall))
        return self.intensity
