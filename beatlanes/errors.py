"""Failure categories surfaced by an analysis run."""


class BeatlanesError(Exception):
    """Base class for expected analysis failures."""


class SourceError(BeatlanesError):
    """Raw audio bytes could not be obtained."""


class DecodeError(BeatlanesError):
    """Bytes could not be interpreted as audio."""


class AnalysisCancelled(BeatlanesError):
    """The run was cancelled between frames."""
