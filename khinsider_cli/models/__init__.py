"""
Data Models Layer.

This package contains the models that define the core data structures
used throughout the application, such as albums, configuration, events
and statistics.
"""

from .album import Album, Track
from .config import DownloadConfig
from .events import DownloadObserver, ItemEvent, ItemOutcome, StepKind, StepResult
from .stats import DownloadStats

__all__ = [
    "Album",
    "DownloadConfig",
    "DownloadObserver",
    "DownloadStats",
    "ItemEvent",
    "ItemOutcome",
    "StepKind",
    "StepResult",
    "Track",
]
