"""
Drives the download of a whole album into its own folder.
"""

import logging
import os
from pathlib import Path

from khinsider_cli.core.numbering import NumberingState, plan_track_label
from khinsider_cli.exceptions import DestinationExistsError, DirectoryPreparationError
from khinsider_cli.media.downloader import Downloader
from khinsider_cli.media.fetcher import ResourceFetcher
from khinsider_cli.models.album import Album
from khinsider_cli.models.config import DownloadConfig
from khinsider_cli.models.events import (
    DownloadObserver,
    ItemEvent,
    ItemOutcome,
    StepKind,
    StepResult,
)
from khinsider_cli.utils.path import album_directory

log = logging.getLogger(__name__)

DIRECTORY_MODE = 0o755


def prepare_destination(directory: Path) -> None:
    """
    Creates the album folder. An existing entry at that path is never reused.

    Raises:
        DestinationExistsError: If anything already exists at `directory`.
        DirectoryPreparationError: If the path cannot be checked or created.
    """
    try:
        os.lstat(directory)
    except FileNotFoundError:
        pass
    except OSError as e:
        raise DirectoryPreparationError(f"Could not check {directory}: {e}") from e
    else:
        raise DestinationExistsError(
            f"A folder already exists at {directory}. Please remove it to continue."
        )

    try:
        directory.mkdir(mode=DIRECTORY_MODE)
    except FileExistsError as e:
        raise DestinationExistsError(
            f"A folder already exists at {directory}. Please remove it to continue."
        ) from e
    except OSError as e:
        raise DirectoryPreparationError(f"Could not create {directory}: {e}") from e


class AlbumDownloader:
    """
    Downloads an album's artwork and then its tracks, one item at a time.

    Only folder preparation can abort a run. Every image phase and track
    produces exactly one event for the observer and the run carries on
    regardless of its outcome.
    """

    def __init__(
        self,
        config: DownloadConfig,
        fetcher: ResourceFetcher,
        observer: DownloadObserver,
    ):
        self.config = config
        self.observer = observer
        self.downloader = Downloader(fetcher, config)

    def _emit(self, step: StepKind, label: str, result: StepResult) -> None:
        self.observer.report(
            ItemEvent(
                step=step,
                label=label,
                outcome=result.outcome,
                detail=result.detail,
                size=result.size,
            )
        )

    async def download(self, album: Album) -> Path:
        """
        Downloads `album` into '<downloads_root>/<album title>'.

        Returns:
            The album folder.

        Raises:
            DestinationExistsError: If the album folder already exists.
            DirectoryPreparationError: If the album folder cannot be created.
        """
        directory = None
        try:
            directory = album_directory(
                self.config.downloads_root, album.title, self.config.sanitize_paths
            )
            prepare_destination(directory)
        except (DestinationExistsError, DirectoryPreparationError) as e:
            self._emit(
                StepKind.DIRECTORY,
                str(directory or album.title),
                StepResult(ItemOutcome.FAILED, detail=str(e)),
            )
            raise
        self._emit(StepKind.DIRECTORY, str(directory), StepResult(ItemOutcome.SUCCESS))
        log.debug(
            f"Downloading '{album.title}': {len(album.images)} image(s), "
            f"{len(album.tracks)} track(s)"
        )

        state = NumberingState.for_album(album)

        images = await self.downloader.save_images(album, directory)
        self._emit(StepKind.IMAGES, "Covers", images)

        for track in album.tracks:
            label, state = plan_track_label(state, track, album.tracks)
            result = await self.downloader.save_audio_file(track, label, directory)
            self._emit(StepKind.TRACK, label, result)

        return directory
