"""
Outcome and event types passed from the download steps to an observer.
"""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Protocol


class ItemOutcome(str, Enum):
    """Result of attempting a single image or track."""

    SUCCESS = "success"
    SKIPPED = "skipped"
    FAILED = "failed"


class StepKind(str, Enum):
    """The stage of an album run an event belongs to."""

    DIRECTORY = "directory"
    IMAGES = "images"
    TRACK = "track"


@dataclass(frozen=True)
class StepResult:
    """What a fetch step did with one resource."""

    outcome: ItemOutcome
    path: Path | None = None
    size: int = 0
    detail: str | None = None


@dataclass(frozen=True)
class ItemEvent:
    """A success, skip or failure notification for one step of an album run."""

    step: StepKind
    label: str
    outcome: ItemOutcome
    detail: str | None = None
    size: int = 0


class DownloadObserver(Protocol):
    """Receives one event per directory, image phase and track."""

    def report(self, event: ItemEvent) -> None: ...
