"""File upload endpoint for beat chart analysis."""

import asyncio
import logging

from fastapi import APIRouter, File, HTTPException, UploadFile

from beatlanes.api.schemas import ResultMessage
from beatlanes.audio.source import AUDIO_EXTENSIONS
from beatlanes.config import settings
from beatlanes.worker import analyze_bytes, result_to_message

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/analyze", response_model=ResultMessage)
async def analyze_file(file: UploadFile = File(...)):
    """Analyze an uploaded audio file into a lane chart."""
    # Validate file
    if file.filename:
        ext = "." + file.filename.rsplit(".", 1)[-1].lower() if "." in file.filename else ""
        if ext and ext not in AUDIO_EXTENSIONS:
            raise HTTPException(400, f"Unsupported format. Use: {', '.join(sorted(AUDIO_EXTENSIONS))}")

    # Read file content
    content = await file.read()
    if len(content) > settings.max_upload_mb * 1024 * 1024:
        raise HTTPException(400, f"File too large (max {settings.max_upload_mb} MB)")

    # Run analysis in thread pool to avoid blocking
    loop = asyncio.get_running_loop()
    result = await loop.run_in_executor(
        None,
        lambda: analyze_bytes(content, label=file.filename or "upload"),
    )

    if not result.success:
        if result.error_kind == "decode":
            raise HTTPException(400, result.error)
        raise HTTPException(500, "Analysis failed")
    return result_to_message(result)
