"""One analysis run behind a message boundary.

A run takes a request, emits zero or more progress notices and always ends
with exactly one result message. Every failure, expected or not, becomes a
failure result here; nothing below this layer catches errors.
"""

import logging
import threading
from typing import Callable

from beatlanes.analysis.engine import AnalysisEngine
from beatlanes.analysis.models import AnalysisResult
from beatlanes.api.schemas import BeatEventResponse, ProgressMessage, ResultMessage
from beatlanes.audio.loader import decode_bytes
from beatlanes.audio.source import read_source
from beatlanes.errors import AnalysisCancelled, DecodeError, SourceError

logger = logging.getLogger(__name__)

Emit = Callable[[dict], None]


def result_to_message(result: AnalysisResult) -> dict:
    """Convert AnalysisResult to a result message dict for JSON serialization."""
    return ResultMessage(
        success=result.success,
        beats=[
            BeatEventResponse(
                time=b.time,
                lane=b.lane,
                id=b.id,
                hit=b.hit,
                energy=b.energy,
                intensity=b.intensity,
            )
            for b in result.beats
        ],
        error=result.error,
        duration=result.duration,
        difficulty=result.difficulty,
    ).model_dump()


def _progress_emitter(emit: Emit | None) -> Callable[[int], None] | None:
    if emit is None:
        return None
    return lambda percent: emit(ProgressMessage(percent=percent).model_dump())


def _run(
    load: Callable[[], bytes],
    label: str,
    emit: Emit | None,
    cancel_event: threading.Event | None,
    engine: AnalysisEngine | None,
) -> AnalysisResult:
    try:
        audio, sr = decode_bytes(load())
        result = (engine or AnalysisEngine()).analyze_audio(
            audio, sr,
            on_progress=_progress_emitter(emit),
            cancel_event=cancel_event,
        )
    except AnalysisCancelled as e:
        logger.info(f"Analysis of {label} cancelled")
        result = AnalysisResult.failed(str(e), kind="cancelled")
    except SourceError as e:
        logger.warning(f"Analysis of {label} failed: {e}")
        result = AnalysisResult.failed(str(e), kind="source")
    except DecodeError as e:
        logger.warning(f"Analysis of {label} failed: {e}")
        result = AnalysisResult.failed(str(e), kind="decode")
    except Exception as e:
        logger.exception(f"Analysis of {label} failed unexpectedly")
        result = AnalysisResult.failed(f"Internal analysis error: {e}")

    if emit is not None:
        emit(result_to_message(result))
    return result


def run_analysis(
    audio_source: str,
    emit: Emit | None = None,
    cancel_event: threading.Event | None = None,
    engine: AnalysisEngine | None = None,
) -> AnalysisResult:
    """Fetch, decode and analyze *audio_source*; never raises."""
    return _run(lambda: read_source(audio_source), audio_source, emit, cancel_event, engine)


def analyze_bytes(
    data: bytes,
    emit: Emit | None = None,
    cancel_event: threading.Event | None = None,
    engine: AnalysisEngine | None = None,
    label: str = "upload",
) -> AnalysisResult:
    """Decode and analyze raw audio bytes already in memory; never raises."""
    return _run(lambda: data, label, emit, cancel_event, engine)
