"""Turning onsets into committed, playable beat events."""

from __future__ import annotations

from beatlanes.analysis.models import BeatEvent

# Above this intensity charts get denser
_DENSE_INTENSITY = 1.5
_SIMULTANEOUS_WINDOW = 0.15  # seconds, either side, any lane
_MIN_GAP_DENSE = 0.2  # seconds between events on one lane
_MIN_GAP_NORMAL = 0.3


def spacing_rules(intensity: float) -> tuple[int, float]:
    """Return ``(max_simultaneous, min_gap)`` in force at the given intensity."""
    if intensity > _DENSE_INTENSITY:
        return 2, _MIN_GAP_DENSE
    return 1, _MIN_GAP_NORMAL


class EventArbiter:
    """Gate onsets by lane spacing and a cap on near-simultaneous events.

    Offers must arrive in non-decreasing time order; committed events get
    ids equal to their position in :attr:`events`.
    """

    def __init__(self, lane_count: int) -> None:
        self.lane_count = lane_count
        self.events: list[BeatEvent] = []
        self._last_in_lane: dict[int, float] = {}

    def _count_near(self, time: float) -> int:
        count = 0
        for event in reversed(self.events):
            if time - event.time >= _SIMULTANEOUS_WINDOW:
                break
            if abs(event.time - time) < _SIMULTANEOUS_WINDOW:
                count += 1
        return count

    def offer(self, time: float, lane: int, energy: float, intensity: float) -> BeatEvent | None:
        """Commit an onset as a beat event, or return None if it is rejected."""
        if not 0 <= lane < self.lane_count:
            raise ValueError(f"lane {lane} out of range for {self.lane_count} lanes")
        if self.events and time < self.events[-1].time:
            raise ValueError(f"onset at {time}s arrived after {self.events[-1].time}s")

        max_simultaneous, min_gap = spacing_rules(intensity)

        if self._count_near(time) >= max_simultaneous:
            return None

        last = self._last_in_lane.get(lane)
        if last is not None and time - last <= min_gap:
            return None

        event = BeatEvent(
            time=time,
            lane=lane,
            id=len(self.events),
            energy=energy,
            intensity=intensity,
        )
        self.events.append(event)
        self._last_in_lane[lane] = time
        return event
