"""Tests for file and folder naming helpers"""

from pathlib import Path

import pytest

from khinsider_cli.exceptions import DirectoryPreparationError
from khinsider_cli.utils.path import (
    album_directory,
    normalise_filename,
    safe_filename,
    url_filename,
)


class TestNormaliseFilename:
    """Invalid UTF-8 is dropped, everything else is left alone"""

    def test_valid_text_is_unchanged(self):
        for title in ["Demo", "Café del Mar", "ファイナルファンタジー", "AC/DC: Live?", ""]:
            assert normalise_filename(title) == title

    def test_valid_bytes_are_decoded(self):
        assert normalise_filename("Café".encode("utf-8")) == "Café"

    def test_invalid_bytes_are_dropped(self):
        assert normalise_filename(b"Caf\xc3\xa9 \xff\xfeRemix") == "Café Remix"

    def test_truncated_sequence_is_dropped(self):
        assert normalise_filename(b"Theme\xe2\x82") == "Theme"
        assert normalise_filename(b"\xe2\x82Theme") == "Theme"

    def test_escaped_bytes_in_str_are_dropped(self):
        # As produced by os.fsdecode(b"Track \xff01")
        assert normalise_filename("Track \udcff01") == "Track 01"

    def test_lone_surrogate_is_dropped(self):
        assert normalise_filename("Boss\ud800 Battle") == "Boss Battle"

    def test_idempotent(self):
        once = normalise_filename(b"\x80Stage \xc0\xafOne\xf5")
        assert once == "Stage One"
        assert normalise_filename(once) == once


class TestSafeFilename:
    def test_no_sanitizing_by_default(self):
        assert safe_filename("01 AC/DC") == "01 AC/DC"

    def test_sanitize_removes_separators(self):
        result = safe_filename("01 AC/DC", sanitize=True)
        assert "/" not in result
        assert result.startswith("01 AC")

    def test_sanitize_also_normalises(self):
        assert safe_filename(b"Intro\xff", sanitize=True) == "Intro"


class TestNames:
    def test_album_directory(self, tmp_path):
        assert album_directory(tmp_path, "Demo") == tmp_path / "Demo"

    def test_album_directory_normalises_title(self):
        assert album_directory(Path("/music"), "Demo\udcff") == Path("/music/Demo")

    def test_url_filename(self):
        assert url_filename("https://vgmsite.com/soundtracks/demo/cover.jpg") == "cover.jpg"

    def test_url_filename_decodes_and_drops_query(self):
        url = "https://vgmsite.com/soundtracks/demo/Front%20Cover.png?v=2"
        assert url_filename(url) == "Front Cover.png"

    def test_url_filename_empty_for_directory_url(self):
        assert url_filename("https://vgmsite.com/soundtracks/demo/") == ""

    def test_url_filename_splits_on_encoded_separators(self):
        assert url_filename("https://vgmsite.com/x/..%2F..%2Fcover.jpg") == "cover.jpg"
        assert url_filename("https://vgmsite.com/x/..%5C..%5Ccover.jpg") == "cover.jpg"

    def test_url_filename_rejects_dot_segments(self):
        assert url_filename("https://vgmsite.com/x/%2E%2E") == ""
        assert url_filename("https://vgmsite.com/x/.") == ""

    def test_absolute_title_stays_under_root(self, tmp_path):
        root = tmp_path / "root"
        directory = album_directory(root, str(tmp_path / "outside"))
        assert root in directory.parents

    def test_backslash_rooted_title_stays_under_root(self):
        assert album_directory(Path("/music"), "\\\\Demo") == Path("/music/Demo")

    def test_parent_reference_in_title_is_rejected(self):
        with pytest.raises(DirectoryPreparationError):
            album_directory(Path("/music"), "../../etc")
        with pytest.raises(DirectoryPreparationError):
            album_directory(Path("/music"), "..")
