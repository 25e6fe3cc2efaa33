"""Pydantic models for the analysis message boundary."""

from typing import Literal

from pydantic import BaseModel


class BeatEventResponse(BaseModel):
    time: float
    lane: int
    id: int
    hit: bool = False
    energy: float
    intensity: float


class AnalyzeRequest(BaseModel):
    audio_source: str  # http(s) URL or file name inside the song directory


class SongResponse(BaseModel):
    name: str
    file: str


# Messages sent back for a run: zero or more progress notices, then one result

class ProgressMessage(BaseModel):
    type: Literal["progress"] = "progress"
    percent: int


class ResultMessage(BaseModel):
    type: Literal["result"] = "result"
    success: bool
    beats: list[BeatEventResponse] = []
    error: str | None = None
    duration: float = 0.0
    difficulty: str | None = None
