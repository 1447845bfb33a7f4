"""
Functions for formatting and displaying data in the console using Rich.
"""

from pathlib import Path
from typing import Any

from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from khinsider_cli.models.stats import DownloadStats
from khinsider_cli.utils.formatting import format_duration, format_size


def format_error_with_suggestions(
    error: Exception, context: dict | None = None
) -> Panel:
    """Formats an error with actionable suggestions into a Rich Panel."""
    error_type = type(error).__name__
    error_msg = str(error)

    suggestions_map = {
        "DestinationExistsError": [
            "• Remove or rename the existing folder and run again.",
            "• Use `--output` to download into a different folder.",
        ],
        "DirectoryPreparationError": [
            "• Check that the downloads folder exists and is writable.",
            "• Set `downloads_root` in the config file or pass `--output`.",
        ],
        "ConfigurationError": [
            "• Run `khinsider-cli init --force` to write a fresh config file.",
            "• Run `khinsider-cli --show-config` to inspect current values.",
        ],
        "AlbumMetadataError": [
            "• Check that the album file is valid JSON.",
            "• Each track needs `title`, `track_number` and `source_url`.",
        ],
        "ResourceCloseError": [
            "• The disk may be full or disconnected.",
            "• Check free space in the downloads folder.",
        ],
    }

    suggestions = suggestions_map.get(
        error_type, ["• Run the command with -v for detailed logs."]
    )

    error_text = Text()
    error_text.append(f"{error_type}: ", style="bold red")
    error_text.append(error_msg)

    suggestion_text = Text("\n".join(suggestions))

    content = Table.grid(padding=(1, 0))
    content.add_row(error_text)
    content.add_row()
    content.add_row(Text("Suggestions", style="bold yellow"))
    content.add_row(suggestion_text)

    if context:
        content.add_row()
        content.add_row(Text(f"Context: {context}", style="dim"))

    return Panel(
        content,
        title="[bold red]An Error Occurred[/bold red]",
        border_style="red",
        expand=False,
    )


def print_config(config_path: Path, config_data: dict[str, Any]):
    """Displays the current configuration."""
    console = Console()
    content = ""
    for key, value in sorted(config_data.items()):
        content += f"{key} = {value}\n"

    console.print(
        Panel(
            content.strip(),
            title=f"Configuration ([dim]{config_path}[/dim])",
            border_style="cyan",
        )
    )


def print_summary_panel(stats: DownloadStats, duration_s: float):
    """Displays a final summary of the download session."""
    console = Console()

    stats_table = Table(show_header=False, box=None, padding=(0, 2))
    stats_table.add_column(style="bold cyan", justify="right", width=20)
    stats_table.add_column(style="white", justify="left")

    stats_table.add_row("Albums:", f"[bold]{len(stats.albums_processed)}[/bold]")
    stats_table.add_row(
        "✓ Tracks:", f"[bold green]{stats.tracks_downloaded}[/bold green]"
    )
    if stats.tracks_skipped > 0:
        stats_table.add_row("○ Skipped:", f"[yellow]{stats.tracks_skipped}[/yellow]")
    if stats.tracks_failed > 0:
        stats_table.add_row("✗ Failed:", f"[bold red]{stats.tracks_failed}[/bold red]")

    cover_parts = [f"[green]{stats.images_downloaded} downloaded[/green]"]
    if stats.images_skipped > 0:
        cover_parts.append(f"[yellow]{stats.images_skipped} skipped[/yellow]")
    if stats.images_failed > 0:
        cover_parts.append(f"[red]{stats.images_failed} failed[/red]")
    stats_table.add_row("Covers:", ", ".join(cover_parts))

    stats_table.add_row("", "")  # Spacer

    stats_table.add_row(
        "Total Size:", f"[cyan]{format_size(stats.total_size_downloaded)}[/cyan]"
    )
    avg_speed = stats.total_size_downloaded / duration_s if duration_s > 0 else 0
    stats_table.add_row(
        "Avg. Speed:", f"[magenta]{format_size(int(avg_speed))}/s[/magenta]"
    )
    stats_table.add_row("Time Elapsed:", f"[blue]{format_duration(duration_s)}[/blue]")

    if stats.tracks_failed > 0:
        title = "⚠ [bold]Finished With Failures[/bold]"
        border_color = "yellow"
    else:
        title = "🎵 [bold]Download Complete![/bold]"
        border_color = "green"

    console.print()
    console.print(
        Panel(
            stats_table,
            title=title,
            border_style=border_color,
            box=box.DOUBLE,
            expand=False,
            padding=(1, 2),
        )
    )
    console.print()
