"""Per-run analysis state."""

from __future__ import annotations

from beatlanes.analysis.arbiter import EventArbiter
from beatlanes.analysis.bands import DEFAULT_BANDS, Band, BandAggregator
from beatlanes.analysis.framing import Frame
from beatlanes.analysis.intensity import IntensityTracker
from beatlanes.analysis.models import BeatEvent, EngineConfig
from beatlanes.analysis.onset import BandOnsetDetector
from beatlanes.analysis.spectrum import SpectralEstimator


class AnalysisSession:
    """Everything one run accumulates, owned by that run alone.

    Frames must be fed in time order: the rolling statistics of each frame
    depend on all earlier ones.
    """

    def __init__(
        self,
        sr: int,
        config: EngineConfig,
        bands: tuple[Band, ...] = DEFAULT_BANDS,
    ) -> None:
        self.sr = sr
        self.config = config
        self.estimator = SpectralEstimator(config.frame_size, config.bin_stride, config.time_stride)
        self.aggregator = BandAggregator(bands, config.frame_size, sr)
        self.bands = self.aggregator.bands
        self.intensity = IntensityTracker(config.history_size)
        self.detectors = [BandOnsetDetector(config.history_size) for _ in self.bands]
        self.arbiter = EventArbiter(lane_count=len(self.bands))

    def process(self, frame: Frame) -> list[BeatEvent]:
        """Run one frame through the pipeline; return the events it committed."""
        frame.spectrum = self.estimator.estimate(frame.samples)
        frame.band_energies = self.aggregator.aggregate(frame.spectrum)
        intensity = self.intensity.update(float(frame.spectrum.sum()))

        committed = []
        for band, detector, energy in zip(self.bands, self.detectors, frame.band_energies):
            energy = float(energy)
            if not detector.update(energy, intensity):
                continue
            event = self.arbiter.offer(frame.time, band.lane, energy, intensity)
            if event is not None:
                committed.append(event)
        return committed

    @property
    def events(self) -> list[BeatEvent]:
        return self.arbiter.events
