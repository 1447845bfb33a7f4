"""
Utilities.

Path, URL and formatting helpers shared across the application.
"""

from .formatting import format_duration, format_size
from .path import album_directory, normalise_filename, safe_filename, url_filename
from .url import rewrite_mirror_url

__all__ = [
    "album_directory",
    "format_duration",
    "format_size",
    "normalise_filename",
    "rewrite_mirror_url",
    "safe_filename",
    "url_filename",
]
