"""
Core Logic Layer.

Contains the album download orchestration and track numbering.
"""

from .album_downloader import AlbumDownloader, prepare_destination
from .numbering import NumberingState, plan_track_label

__all__ = ["AlbumDownloader", "NumberingState", "plan_track_label", "prepare_destination"]
