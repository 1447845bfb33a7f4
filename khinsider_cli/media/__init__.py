"""
Media Layer.

This package is responsible for fetching artwork and audio over HTTP and
writing it into an album's folder.
"""

from .downloader import Downloader
from .fetcher import FetchResponse, HttpResourceFetcher, ResourceFetcher

__all__ = ["Downloader", "FetchResponse", "HttpResourceFetcher", "ResourceFetcher"]
