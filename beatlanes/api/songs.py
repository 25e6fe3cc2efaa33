"""Song catalog endpoint."""

from fastapi import APIRouter

from beatlanes.api.schemas import SongResponse
from beatlanes.audio.source import list_songs

router = APIRouter()


@router.get("/songs", response_model=list[SongResponse])
async def songs():
    """List audio files that can be requested by name."""
    return [
        SongResponse(name=path.stem.replace("_", " ").title(), file=path.name)
        for path in list_songs()
    ]
