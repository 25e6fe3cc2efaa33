"""WebSocket endpoint streaming analysis progress and results."""

import asyncio
import logging
import threading
from collections import deque

from fastapi import APIRouter, WebSocket, WebSocketDisconnect
from pydantic import ValidationError

from beatlanes.analysis.models import AnalysisResult
from beatlanes.api.schemas import AnalyzeRequest
from beatlanes.worker import result_to_message, run_analysis

logger = logging.getLogger(__name__)

router = APIRouter()

_MALFORMED_REQUEST = "Malformed request: expected {\"audio_source\": ...} as a text frame"


def _parse_request(message: dict) -> AnalyzeRequest | None:
    raw = message.get("text")
    if raw is None:
        logger.warning("Rejected non-text request frame")
        return None
    try:
        return AnalyzeRequest.model_validate_json(raw)
    except ValidationError as e:
        logger.warning(f"Rejected malformed request: {e.error_count()} error(s)")
        return None


async def _watch_client(websocket: WebSocket, backlog: deque, cancel_event: threading.Event) -> dict:
    """Queue requests sent mid-run; cancel the run if the client leaves."""
    while True:
        message = await websocket.receive()
        if message["type"] == "websocket.disconnect":
            cancel_event.set()
            return message
        backlog.append(message)


async def _stream_run(websocket: WebSocket, audio_source: str, backlog: deque) -> None:
    """Run one analysis in the thread pool, forwarding its messages in order."""
    loop = asyncio.get_running_loop()
    queue: asyncio.Queue = asyncio.Queue()
    cancel_event = threading.Event()

    def emit(message: dict) -> None:
        loop.call_soon_threadsafe(queue.put_nowait, message)

    task = loop.run_in_executor(None, run_analysis, audio_source, emit, cancel_event)
    watcher = asyncio.ensure_future(_watch_client(websocket, backlog, cancel_event))
    waiting = {watcher, task}
    getter = None
    try:
        while True:
            getter = asyncio.ensure_future(queue.get())
            while not getter.done():
                await asyncio.wait({getter} | waiting, return_when=asyncio.FIRST_COMPLETED)
                if watcher.done():
                    raise WebSocketDisconnect(watcher.result().get("code", 1000))
                if task.done() and task in waiting:
                    task.result()
                    waiting.discard(task)
            message = getter.result()
            await websocket.send_json(message)
            if message["type"] == "result":
                break
        await task
    finally:
        if getter is not None and not getter.done():
            getter.cancel()
        watcher.cancel()
        if not task.done():
            # Client went away mid-run.
            cancel_event.set()


@router.websocket("/ws/analyze")
async def analyze_stream(websocket: WebSocket):
    """Beat chart analysis via WebSocket.

    Protocol:
    - Client sends JSON text frames: {"audio_source": "<url or song file>"}
    - For each request the server sends:
      - {"type": "progress", "percent": N} zero or more times
      - {"type": "result", "success": true, "beats": [...], ...} or
        {"type": "result", "success": false, "error": "..."} exactly once
    Requests sent while a run is in flight are answered after it, in order.
    """
    await websocket.accept()
    backlog: deque = deque()

    try:
        while True:
            message = backlog.popleft() if backlog else await websocket.receive()
            if message["type"] == "websocket.disconnect":
                break

            request = _parse_request(message)
            if request is None:
                failure = AnalysisResult.failed(_MALFORMED_REQUEST, kind="request")
                await websocket.send_json(result_to_message(failure))
                continue

            await _stream_run(websocket, request.audio_source, backlog)
    except WebSocketDisconnect:
        pass
    except Exception:
        logger.exception("WebSocket analysis session failed")
        try:
            failure = AnalysisResult.failed("Internal server error")
            await websocket.send_json(result_to_message(failure))
        except Exception:
            pass
