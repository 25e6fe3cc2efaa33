"""Core data models for beat chart analysis."""

from __future__ import annotations

from dataclasses import dataclass, field

# Difficulty by chart density (note count per track)
_EASY_MAX_BEATS = 50
_MEDIUM_MAX_BEATS = 100


@dataclass
class BeatEvent:
    """A single committed beat routed to a lane."""
    time: float  # seconds
    lane: int
    id: int  # position in the chart, 0..N-1
    energy: float  # band energy that triggered the onset
    intensity: float  # global intensity at detection time
    hit: bool = False  # gameplay flag, always False when produced


@dataclass(frozen=True)
class EngineConfig:
    """Analysis constants for one run."""
    frame_size: int = 2048
    hop_seconds: float = 0.02
    history_size: int = 43
    bin_stride: int = 8
    time_stride: int = 8
    progress_steps: int = 20

    def __post_init__(self) -> None:
        if self.frame_size < 16 or self.frame_size & (self.frame_size - 1):
            raise ValueError(f"frame_size must be a power of two >= 16, got {self.frame_size}")
        if self.history_size < 2:
            raise ValueError(f"history_size must be at least 2, got {self.history_size}")
        if self.bin_stride < 1 or self.time_stride < 1:
            raise ValueError("bin_stride and time_stride must be positive")
        if self.frame_size % self.time_stride:
            raise ValueError("time_stride must divide frame_size")
        if self.hop_seconds <= 0:
            raise ValueError(f"hop_seconds must be positive, got {self.hop_seconds}")

    @classmethod
    def from_settings(cls, settings) -> EngineConfig:
        return cls(
            frame_size=settings.frame_size,
            hop_seconds=settings.hop_seconds,
            history_size=settings.history_size,
            bin_stride=settings.bin_stride,
            time_stride=settings.time_stride,
            progress_steps=settings.progress_steps,
        )

    def hop_size(self, sr: int) -> int:
        """Hop in samples, rounded down."""
        return int(sr * self.hop_seconds)


@dataclass
class AnalysisResult:
    """Terminal outcome of one analysis run."""
    success: bool
    beats: list[BeatEvent] = field(default_factory=list)
    error: str | None = None
    duration: float = 0.0
    difficulty: str | None = None
    error_kind: str | None = None  # "source", "decode", "request", "cancelled" or "internal"

    @classmethod
    def ok(cls, beats: list[BeatEvent], duration: float) -> AnalysisResult:
        return cls(
            success=True,
            beats=beats,
            duration=duration,
            difficulty=rate_difficulty(len(beats)),
        )

    @classmethod
    def failed(cls, error: str, kind: str = "internal") -> AnalysisResult:
        return cls(success=False, error=error, error_kind=kind)


def rate_difficulty(beat_count: int) -> str:
    """Classify a chart as Easy, Medium or Hard by its note count."""
    if beat_count < _EASY_MAX_BEATS:
        return "Easy"
    if beat_count < _MEDIUM_MAX_BEATS:
        return "Medium"
    return "Hard"
