"""Tests for album, config and statistics models"""

import json

import pytest
from pydantic import ValidationError

from khinsider_cli.exceptions import AlbumMetadataError
from khinsider_cli.models.album import Album
from khinsider_cli.models.config import DownloadConfig
from khinsider_cli.models.events import ItemEvent, ItemOutcome, StepKind
from khinsider_cli.models.stats import DownloadStats
from tests.fakes import make_track


class TestAlbum:
    def test_from_json_file(self, tmp_path):
        path = tmp_path / "album.json"
        path.write_text(
            json.dumps(
                {
                    "title": "Demo",
                    "images": ["https://vgmsite.com/demo/cover.jpg"],
                    "tracks": [
                        {
                            "title": "A",
                            "disc_number": 1,
                            "track_number": 1,
                            "source_url": "https://vgmsite.com/demo/a.flac",
                        },
                        {
                            "title": "B",
                            "track_number": 2,
                            "source_url": "https://vgmsite.com/demo/b.flac",
                        },
                    ],
                }
            ),
            encoding="utf-8",
        )

        album = Album.from_json_file(path)

        assert album.title == "Demo"
        assert album.images == ("https://vgmsite.com/demo/cover.jpg",)
        assert album.total_track_count == 2
        assert album.tracks[0].disc_number == 1
        assert album.tracks[1].disc_number == 0

    def test_explicit_total_track_count(self):
        album = Album(title="X", tracks=(make_track(1),), total_track_count=30)
        assert album.total_track_count == 30

    def test_missing_file(self, tmp_path):
        with pytest.raises(AlbumMetadataError):
            Album.from_json_file(tmp_path / "missing.json")

    def test_invalid_metadata(self, tmp_path):
        path = tmp_path / "album.json"
        path.write_text('{"tracks": [{"title": "A"}]}', encoding="utf-8")
        with pytest.raises(AlbumMetadataError):
            Album.from_json_file(path)

    def test_album_is_immutable(self):
        album = Album(title="X")
        with pytest.raises(ValidationError):
            album.title = "Y"


class TestDownloadConfig:
    def test_extension_without_dot(self):
        assert DownloadConfig(audio_extension=".flac").audio_extension == "flac"

    def test_rejects_bad_extension(self):
        with pytest.raises(ValidationError):
            DownloadConfig(audio_extension="a/b")

    def test_rejects_non_http_prefix(self):
        with pytest.raises(ValidationError):
            DownloadConfig(mirror_prefix="ftp://delta.vgmsite.com/")

    def test_rejects_identical_prefixes(self):
        with pytest.raises(ValidationError):
            DownloadConfig(
                mirror_prefix="https://vgmsite.com/",
                canonical_prefix="https://vgmsite.com/",
            )

    def test_rejects_attempts_out_of_range(self):
        with pytest.raises(ValidationError):
            DownloadConfig(max_attempts=0)

    def test_expands_user(self):
        config = DownloadConfig(downloads_root="~/Music")
        assert "~" not in str(config.downloads_root)


def test_stats_record():
    stats = DownloadStats()
    stats.record(ItemEvent(StepKind.DIRECTORY, "/music/Demo", ItemOutcome.SUCCESS))
    stats.record(ItemEvent(StepKind.IMAGES, "Covers", ItemOutcome.SKIPPED))
    stats.record(ItemEvent(StepKind.TRACK, "1 A", ItemOutcome.SUCCESS, size=10))
    stats.record(ItemEvent(StepKind.TRACK, "2 B", ItemOutcome.FAILED, detail="x"))
    stats.record(ItemEvent(StepKind.TRACK, "3 C", ItemOutcome.SKIPPED))

    assert stats.albums_processed == ["/music/Demo"]
    assert stats.images_skipped == 1
    assert stats.tracks_downloaded == 1
    assert stats.tracks_failed == 1
    assert stats.tracks_skipped == 1
    assert stats.total_size_downloaded == 10
