"""Test configuration and fixtures"""

import pytest

from khinsider_cli.models.album import Album
from khinsider_cli.models.config import DownloadConfig
from tests.fakes import FakeFetcher, RecordingObserver, make_track


@pytest.fixture
def config(tmp_path):
    """Config that downloads into a temporary folder"""
    return DownloadConfig(downloads_root=tmp_path)


@pytest.fixture
def fetcher():
    return FakeFetcher()


@pytest.fixture
def observer():
    return RecordingObserver()


@pytest.fixture
def demo_album():
    """Two undisced tracks and no artwork"""
    return Album(
        title="Demo",
        tracks=(
            make_track(1, "A", url="https://vgmsite.com/demo/a.flac"),
            make_track(2, "B", url="https://vgmsite.com/demo/b.flac"),
        ),
        total_track_count=2,
    )
