"""
Fetches album artwork and audio tracks and writes them into the album folder.
"""

import logging
from pathlib import Path

import aiofiles

from khinsider_cli.exceptions import FetchError, ResourceCloseError
from khinsider_cli.media.fetcher import FetchResponse, ResourceFetcher
from khinsider_cli.models.album import Album, Track
from khinsider_cli.models.config import DownloadConfig
from khinsider_cli.models.events import ItemOutcome, StepResult
from khinsider_cli.utils.path import safe_filename, url_filename
from khinsider_cli.utils.url import rewrite_mirror_url

log = logging.getLogger(__name__)

HTTP_OK = 200


class Downloader:
    """
    Runs the per-item fetch steps. Each step opens, writes and closes its own
    file, and reports a `StepResult` instead of raising for network or write
    failures.
    """

    def __init__(self, fetcher: ResourceFetcher, config: DownloadConfig):
        self.fetcher = fetcher
        self.config = config

    def _rewrite(self, url: str) -> str:
        rewritten = rewrite_mirror_url(
            url, self.config.mirror_prefix, self.config.canonical_prefix
        )
        if rewritten != url:
            log.debug(f"Rewrote mirror URL {url} -> {rewritten}")
        return rewritten

    async def save_images(self, album: Album, directory: Path) -> StepResult:
        """
        Downloads album artwork named after each URL's last path segment.

        Unless `all_images` is set, only the first image is attempted, whatever
        its outcome.
        """
        if not album.images:
            return StepResult(ItemOutcome.SKIPPED, detail="album has no images")

        image_urls = album.images if self.config.all_images else album.images[:1]
        results = []
        for image_url in image_urls:
            file_name = url_filename(image_url)
            if not file_name:
                log.debug(f"No file name in image URL {image_url}")
                results.append(
                    StepResult(ItemOutcome.FAILED, detail=f"no file name in {image_url}")
                )
                continue

            image_path = directory / safe_filename(file_name, self.config.sanitize_paths)
            result = await self._fetch_to_file(self._rewrite(image_url), image_path)
            if result.outcome is ItemOutcome.SUCCESS:
                log.debug(f"Successfully downloaded cover {image_url} to {image_path}")
            results.append(result)

        return _combine(results)

    async def save_audio_file(
        self, track: Track, label: str, directory: Path
    ) -> StepResult:
        """Downloads one track to '<directory>/<label>.<ext>'."""
        file_name = safe_filename(label, self.config.sanitize_paths)
        track_path = directory / f"{file_name}.{self.config.audio_extension}"
        url = self._rewrite(track.source_url)
        log.debug(f"Downloading {url}")
        return await self._fetch_to_file(url, track_path)

    async def _fetch_to_file(self, url: str, destination: Path) -> StepResult:
        """
        Streams a resource into a file. A non-200 response writes nothing and
        is reported as skipped.
        """
        try:
            async with self.fetcher.fetch(url) as response:
                if response.status != HTTP_OK:
                    log.debug(
                        f"Received a non-200 status code for {url}: {response.status}"
                    )
                    return StepResult(
                        ItemOutcome.SKIPPED, detail=f"HTTP {response.status}"
                    )
                size = await self._write_body(response, destination)
        except FetchError as e:
            log.debug(f"There was an error downloading {url}: {e}")
            return StepResult(ItemOutcome.FAILED, detail=str(e))
        except OSError as e:
            log.debug(f"There was an error writing {destination}: {e}")
            return StepResult(ItemOutcome.FAILED, detail=str(e))

        return StepResult(ItemOutcome.SUCCESS, path=destination, size=size)

    async def _write_body(self, response: FetchResponse, destination: Path) -> int:
        """
        Copies the whole body into `destination`. A partially written file is
        removed before the error is re-raised.
        """
        f = await aiofiles.open(destination, "wb")
        bytes_written = 0
        completed = False
        try:
            async for chunk in response.body:
                await f.write(chunk)
                bytes_written += len(chunk)
            completed = True
        finally:
            await _close(f, destination)
            if not completed:
                destination.unlink(missing_ok=True)
        return bytes_written


async def _close(f, destination: Path) -> None:
    try:
        await f.close()
    except OSError as e:
        raise ResourceCloseError(f"Failed to close {destination}: {e}") from e


def _combine(results: list[StepResult]) -> StepResult:
    """Folds per-image results into a single outcome for the image phase."""
    if len(results) == 1:
        return results[0]

    failures = [r for r in results if r.outcome is ItemOutcome.FAILED]
    size = sum(r.size for r in results)
    if failures:
        detail = "; ".join(r.detail or "unknown error" for r in failures)
        return StepResult(ItemOutcome.FAILED, size=size, detail=detail)
    if any(r.outcome is ItemOutcome.SUCCESS for r in results):
        return StepResult(ItemOutcome.SUCCESS, size=size)
    return StepResult(ItemOutcome.SKIPPED, detail="no image returned HTTP 200")
