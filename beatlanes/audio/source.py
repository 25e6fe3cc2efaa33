"""Fetching raw audio bytes from a locator."""

from __future__ import annotations

import logging
import urllib.request
from pathlib import Path

from beatlanes.config import settings
from beatlanes.errors import SourceError

logger = logging.getLogger(__name__)

AUDIO_EXTENSIONS = {".wav", ".mp3", ".flac", ".ogg", ".oga", ".opus", ".aiff", ".aif"}


def is_remote(locator: str) -> bool:
    return locator.startswith(("http://", "https://"))


def resolve_song_path(name: str, song_dir: str | Path | None = None) -> Path:
    """Resolve *name* inside the song directory, refusing anything outside it."""
    root = Path(song_dir if song_dir is not None else settings.song_dir).resolve()
    candidate = (root / name.lstrip("/")).resolve()
    if candidate == root or root not in candidate.parents:
        raise SourceError(f"Audio source outside the song directory: {name}")
    if not candidate.is_file():
        raise SourceError(f"Audio source not found: {name}")
    return candidate


def fetch_bytes(url: str, timeout: float | None = None) -> bytes:
    """Download a remote audio file."""
    req = urllib.request.Request(url, headers={"User-Agent": settings.user_agent})
    try:
        with urllib.request.urlopen(req, timeout=timeout or settings.fetch_timeout_seconds) as resp:
            return resp.read()
    except (OSError, ValueError) as e:
        raise SourceError(f"Could not fetch {url}: {e}") from e


def read_source(locator: str, song_dir: str | Path | None = None) -> bytes:
    """Return the raw bytes behind *locator* (URL or song file name)."""
    if not locator:
        raise SourceError("Empty audio source")
    if is_remote(locator):
        logger.info(f"Fetching {locator}")
        return fetch_bytes(locator)

    path = resolve_song_path(locator, song_dir)
    logger.info(f"Reading {path}")
    try:
        return path.read_bytes()
    except OSError as e:
        raise SourceError(f"Could not read {locator}: {e}") from e


def list_songs(song_dir: str | Path | None = None) -> list[Path]:
    """Audio files directly inside the song directory, sorted by name."""
    root = Path(song_dir if song_dir is not None else settings.song_dir)
    if not root.is_dir():
        return []
    return sorted(
        p for p in root.iterdir()
        if p.is_file() and p.suffix.lower() in AUDIO_EXTENSIONS
    )
