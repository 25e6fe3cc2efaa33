"""Beat chart analysis pipeline, one stage per module."""

from beatlanes.analysis.arbiter import EventArbiter
from beatlanes.analysis.bands import DEFAULT_BANDS, Band, BandAggregator
from beatlanes.analysis.engine import AnalysisEngine
from beatlanes.analysis.framing import Frame, Framer
from beatlanes.analysis.intensity import IntensityTracker
from beatlanes.analysis.models import AnalysisResult, BeatEvent, EngineConfig
from beatlanes.analysis.onset import BandOnsetDetector
from beatlanes.analysis.session import AnalysisSession
from beatlanes.analysis.spectrum import SpectralEstimator

__all__ = [
    "AnalysisEngine",
    "AnalysisResult",
    "AnalysisSession",
    "Band",
    "BandAggregator",
    "BandOnsetDetector",
    "BeatEvent",
    "DEFAULT_BANDS",
    "EngineConfig",
    "EventArbiter",
    "Frame",
    "Framer",
    "IntensityTracker",
    "SpectralEstimator",
]
