"""
Dataclass for tracking download session statistics.
"""

import time
from dataclasses import dataclass, field

from khinsider_cli.models.events import ItemEvent, ItemOutcome, StepKind


@dataclass
class DownloadStats:
    """Tallies the outcome of every image phase and track in a session."""

    images_downloaded: int = 0
    images_skipped: int = 0
    images_failed: int = 0
    tracks_downloaded: int = 0
    tracks_skipped: int = 0
    tracks_failed: int = 0
    total_size_downloaded: int = 0
    albums_processed: list[str] = field(default_factory=list)
    started_at: float = field(default_factory=time.monotonic, repr=False)

    def record(self, event: ItemEvent) -> None:
        """Updates the counters from an observer event."""
        if event.step is StepKind.DIRECTORY:
            if event.outcome is ItemOutcome.SUCCESS:
                self.albums_processed.append(event.label)
            return

        prefix = "images" if event.step is StepKind.IMAGES else "tracks"
        suffix = {
            ItemOutcome.SUCCESS: "downloaded",
            ItemOutcome.SKIPPED: "skipped",
            ItemOutcome.FAILED: "failed",
        }[event.outcome]
        name = f"{prefix}_{suffix}"
        setattr(self, name, getattr(self, name) + 1)
        self.total_size_downloaded += event.size

    @property
    def elapsed(self) -> float:
        return time.monotonic() - self.started_at
