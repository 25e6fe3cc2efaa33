"""Progress notices at a fixed frame cadence."""

from __future__ import annotations

from typing import Callable

ProgressCallback = Callable[[int], None]


class ProgressReporter:
    """Call ``callback(percent)`` every ``total // steps`` frames, then 100 at the end.

    Percents are non-decreasing within a run.
    """

    def __init__(self, total_frames: int, callback: ProgressCallback | None, steps: int = 20) -> None:
        self.total_frames = total_frames
        self.callback = callback
        self.interval = max(1, total_frames // steps)
        self.last_percent = -1

    def _emit(self, percent: int) -> None:
        if self.callback is None or percent <= self.last_percent:
            return
        self.last_percent = percent
        self.callback(percent)

    def frame(self, index: int) -> None:
        """Report progress before processing frame *index*."""
        if index % self.interval == 0:
            self._emit(int(100 * index / self.total_frames + 0.5))

    def finish(self) -> None:
        self._emit(100)
