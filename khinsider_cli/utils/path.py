"""
Utilities for turning album metadata into file and folder names.
"""

import logging
import posixpath
from pathlib import Path, PurePath, PureWindowsPath
from urllib.parse import unquote, urlsplit

from pathvalidate import sanitize_filename

from khinsider_cli.exceptions import DirectoryPreparationError

log = logging.getLogger(__name__)


def normalise_filename(title: str | bytes) -> str:
    """
    Repairs a title so that it is valid UTF-8 text.

    Valid text is returned unchanged. Otherwise every byte that does not start
    a decodable code point is dropped and decoding resumes at the next byte.
    Path separators and other reserved characters are left alone; see
    `safe_filename` for that.
    """
    if isinstance(title, str):
        try:
            title.encode("utf-8")
            return title
        except UnicodeEncodeError:
            # Lone surrogates, e.g. from os.fsdecode() of undecodable bytes.
            raw = title.encode("utf-8", "surrogatepass")
    else:
        try:
            return title.decode("utf-8")
        except UnicodeDecodeError:
            raw = title

    log.debug(f"Invalid title: {raw!r}")
    normalised = raw.decode("utf-8", "ignore")
    log.debug(f"Normalised title: {normalised}")
    return normalised


def safe_filename(title: str | bytes, sanitize: bool = False) -> str:
    """
    Normalises a title and, if requested, also strips characters that are not
    allowed in file names on the current platform.
    """
    name = normalise_filename(title)
    if sanitize:
        name = sanitize_filename(name, platform="auto")
    return name


def album_directory(downloads_root: Path, album_title: str, sanitize: bool = False) -> Path:
    """
    The folder an album is downloaded into, always inside `downloads_root`.

    Leading separators are stripped so an absolute title cannot replace the
    root.

    Raises:
        DirectoryPreparationError: If the title climbs out of the root with "..".
    """
    name = safe_filename(album_title, sanitize).lstrip("/\\")
    directory = downloads_root / name
    if ".." in PurePath(name).parts or ".." in PureWindowsPath(name).parts:
        raise DirectoryPreparationError(
            f"Album title '{album_title}' would leave {downloads_root}"
        )
    return directory


def url_filename(url: str) -> str:
    """
    Returns the last path segment of a URL, percent-decoded. Separators that
    only appear after decoding are treated as separators, and "." or ".."
    yield an empty name.
    """
    decoded = unquote(urlsplit(url).path).replace("\\", "/")
    name = posixpath.basename(decoded)
    if name in (".", ".."):
        return ""
    return name
