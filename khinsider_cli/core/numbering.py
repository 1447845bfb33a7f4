"""
Computes the zero-padded "<disc>x<track> <title>" labels used as file names.

Pad widths are carried in an immutable `NumberingState` which the caller
threads from one track to the next.
"""

from collections.abc import Sequence
from dataclasses import dataclass, replace

from khinsider_cli.models.album import Album, Track


def digit_count(value: int) -> int:
    """Number of characters needed to print an integer."""
    return len(str(value))


@dataclass(frozen=True)
class NumberingState:
    """Pad widths in effect for the next track, and the highest disc seen so far."""

    track_pad_len: int
    disc_pad_len: int
    highest_disc: int = 0

    @classmethod
    def for_album(cls, album: Album) -> "NumberingState":
        """
        Initial widths: the track width comes from the album's total track
        count, the disc width from the last track's disc number. The disc
        width is never recomputed.
        """
        last_disc = album.tracks[-1].disc_number if album.tracks else 0
        return cls(
            track_pad_len=digit_count(album.total_track_count),
            disc_pad_len=digit_count(last_disc),
        )


def highest_track_number(tracks: Sequence[Track], disc_number: int) -> int:
    """The largest track number on the given disc, or 0 if the disc is empty."""
    return max(
        (t.track_number for t in tracks if t.disc_number == disc_number), default=0
    )


def plan_track_label(
    state: NumberingState, track: Track, tracks: Sequence[Track]
) -> tuple[str, NumberingState]:
    """
    Builds the display label for a track and returns the state for the next one.

    The track width is recomputed only when the track starts a disc numbered
    higher than any disc seen before, so each disc can have its own width.
    """
    disc = track.disc_number
    if disc != 0 and disc > state.highest_disc:
        state = replace(
            state,
            track_pad_len=digit_count(highest_track_number(tracks, disc)),
            highest_disc=disc,
        )

    label = f"{track.track_number:0{state.track_pad_len}d} {track.title}"
    if disc != 0:
        label = f"{disc:0{state.disc_pad_len}d}x{label}"
    return label, state
