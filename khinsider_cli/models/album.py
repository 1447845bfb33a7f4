"""
Pydantic models for album metadata.
Albums are parsed elsewhere and handed to the downloader as immutable input.
"""

from pathlib import Path
from typing import Any

from pydantic import BaseModel, ValidationError, model_validator

from khinsider_cli.exceptions import AlbumMetadataError


class Track(BaseModel):
    """A single audio track. A disc number of 0 means the album has no discs."""

    title: str
    disc_number: int = 0
    track_number: int
    source_url: str

    class Config:
        """Pydantic model configuration."""

        frozen = True


class Album(BaseModel):
    """
    An album's artwork and tracks. Tracks are expected to be ordered by disc
    and then by track number; they are never re-sorted.
    """

    title: str
    images: tuple[str, ...] = ()
    tracks: tuple[Track, ...] = ()
    total_track_count: int

    class Config:
        """Pydantic model configuration."""

        frozen = True

    @model_validator(mode="before")
    @classmethod
    def default_total_track_count(cls, data: Any) -> Any:
        """Falls back to the number of listed tracks when no total is given."""
        if isinstance(data, dict) and data.get("total_track_count") is None:
            data = {**data, "total_track_count": len(data.get("tracks") or ())}
        return data

    @classmethod
    def from_json_file(cls, path: Path) -> "Album":
        """
        Loads album metadata from a JSON file.

        Raises:
            AlbumMetadataError: If the file is unreadable or its content is invalid.
        """
        try:
            raw = path.read_text(encoding="utf-8")
        except OSError as e:
            raise AlbumMetadataError(f"Could not read album file '{path}': {e}") from e

        try:
            return cls.model_validate_json(raw)
        except ValidationError as e:
            raise AlbumMetadataError(f"Invalid album metadata in '{path}':\n{e}") from e
