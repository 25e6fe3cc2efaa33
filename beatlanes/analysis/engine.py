"""Analysis orchestrator - turns a decoded signal into a lane chart."""

import logging
import threading
from collections import Counter

import numpy as np

from beatlanes.analysis.bands import DEFAULT_BANDS, Band
from beatlanes.analysis.framing import Framer
from beatlanes.analysis.models import AnalysisResult, EngineConfig
from beatlanes.analysis.progress import ProgressCallback, ProgressReporter
from beatlanes.analysis.session import AnalysisSession
from beatlanes.audio.loader import load_audio
from beatlanes.config import settings
from beatlanes.errors import AnalysisCancelled

logger = logging.getLogger(__name__)


class AnalysisEngine:
    """Orchestrates the framing -> spectrum -> bands -> onsets -> arbiter pass.

    The engine holds configuration only; every call builds a fresh
    :class:`AnalysisSession`, so one engine can serve several runs.
    """

    def __init__(self, config: EngineConfig | None = None, bands: tuple[Band, ...] = DEFAULT_BANDS):
        self.config = config or EngineConfig.from_settings(settings)
        self.bands = tuple(bands)

    def analyze_file(
        self,
        file_path: str,
        on_progress: ProgressCallback | None = None,
        cancel_event: threading.Event | None = None,
    ) -> AnalysisResult:
        """Analyze an audio file at its native sample rate."""
        audio, sr = load_audio(file_path)
        return self.analyze_audio(audio, sr, on_progress=on_progress, cancel_event=cancel_event)

    def analyze_audio(
        self,
        audio: np.ndarray,
        sr: int,
        on_progress: ProgressCallback | None = None,
        cancel_event: threading.Event | None = None,
    ) -> AnalysisResult:
        """Analyze pre-loaded mono audio.

        *on_progress* receives integer percents as frames are processed.
        If *cancel_event* is set, the run stops before the next frame with
        :class:`AnalysisCancelled`.
        """
        audio = np.asarray(audio)
        if audio.ndim != 1:
            raise ValueError(f"expected mono audio, got shape {audio.shape}")
        if sr <= 0:
            raise ValueError(f"invalid sample rate {sr}")

        duration = len(audio) / sr
        hop_size = self.config.hop_size(sr)
        logger.info(f"Analyzing {duration:.1f}s of audio at {sr}Hz")

        session = AnalysisSession(sr, self.config, self.bands)
        framer = Framer(audio, sr, self.config.frame_size, hop_size)
        total = len(framer)
        logger.info(f"  {total} frames (frame={self.config.frame_size}, hop={hop_size})")

        reporter = ProgressReporter(total, on_progress, self.config.progress_steps)
        for frame in framer:
            if cancel_event is not None and cancel_event.is_set():
                logger.info(f"  Cancelled at frame {frame.index}/{total}")
                raise AnalysisCancelled("Analysis cancelled")
            reporter.frame(frame.index)
            session.process(frame)
        reporter.finish()

        beats = session.events
        per_lane = Counter(b.lane for b in beats)
        logger.info(f"  {len(beats)} beats: " + ", ".join(
            f"{band.name}={per_lane.get(band.lane, 0)}" for band in session.bands
        ))
        return AnalysisResult.ok(beats, duration)
