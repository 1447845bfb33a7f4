"""
Defines the command-line interface for the application using Typer.
"""

import asyncio
import logging
import os
from pathlib import Path

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from khinsider_cli import __version__
from khinsider_cli.core.album_downloader import AlbumDownloader
from khinsider_cli.exceptions import KhinsiderCliError
from khinsider_cli.media.fetcher import HttpResourceFetcher
from khinsider_cli.models.album import Album
from khinsider_cli.storage.config_manager import ConfigManager

from .formatters import (
    format_error_with_suggestions,
    print_config,
    print_summary_panel,
)
from .reporter import ConsoleReporter

console = Console()

logging.basicConfig(
    level="INFO",
    format="%(message)s",
    datefmt="[%X]",
    handlers=[
        RichHandler(
            console=console,
            rich_tracebacks=True,
            show_path=False,
            show_level=False,
            markup=True,
        )
    ],
)
log = logging.getLogger("khinsider_cli")

app = typer.Typer(
    name="khinsider-cli",
    help=(
        "Downloads an album's covers and tracks into a folder of its own. Use"
        " 'khinsider-cli <command> --help' for more info."
    ),
    rich_markup_mode="rich",
    pretty_exceptions_show_locals=False,
    add_completion=False,
)


def get_config_dir() -> Path:
    if os.name == "nt":
        base_dir = Path(os.getenv("APPDATA", "~\\AppData\\Roaming"))
    else:
        base_dir = Path(os.getenv("XDG_CONFIG_HOME", "~/.config"))
    return base_dir.expanduser() / "khinsider-cli"


CONFIG_DIR = get_config_dir()
CONFIG_FILE = CONFIG_DIR / "config.ini"


@app.callback(invoke_without_command=True)
def main_callback(
    ctx: typer.Context,
    verbose: int = typer.Option(
        0,
        "--verbose",
        "-v",
        count=True,
        help="Increase logging verbosity (-v for debug).",
    ),
    version: bool = typer.Option(
        False, "--version", help="Show version and exit.", is_eager=True
    ),
    show_config: bool = typer.Option(
        False, "--show-config", help="Display the current configuration."
    ),
):
    """khinsider album downloader"""
    if version:
        console.print(f"[bold]khinsider-cli[/bold] version [cyan]{__version__}[/cyan]")
        raise typer.Exit()

    log_level = "DEBUG" if verbose >= 1 else "INFO"
    logging.getLogger("khinsider_cli").setLevel(log_level)

    if show_config:
        if not CONFIG_FILE.is_file():
            console.print(
                "[red]✗ Config file not found.[/] Run [cyan]khinsider-cli init[/cyan]"
                " first."
            )
            raise typer.Exit(code=1)
        config_manager = ConfigManager(CONFIG_FILE)
        print_config(CONFIG_FILE, config_manager.get_config_as_dict())
        raise typer.Exit()

    if ctx.invoked_subcommand is None:
        console.print(ctx.get_help())


@app.command()
def init(
    output: Path | None = typer.Option(
        None,
        "-o",
        "--output",
        help="Folder that album folders are created in (default ~/Downloads).",
    ),
    force: bool = typer.Option(
        False, "--force", "-f", help="Overwrite an existing config file without asking."
    ),
):
    """Write a configuration file with default settings."""
    if (
        CONFIG_FILE.exists()
        and not force
        and not typer.confirm("Configuration file already exists. Overwrite it?")
    ):
        raise typer.Abort()

    settings = {}
    if output is not None:
        settings["downloads_root"] = output.expanduser()

    try:
        ConfigManager(CONFIG_FILE).save_new_config(settings)
    except KhinsiderCliError as e:
        console.print(format_error_with_suggestions(e))
        raise typer.Exit(code=1) from e

    console.print(f"\n[bold green]✓ Configuration saved to '{CONFIG_FILE}'[/bold green]")


@app.command(name="download")
def download_command(
    album_files: list[Path] = typer.Argument(  # noqa: B008
        ...,
        help="One or more album metadata JSON files.",
        dir_okay=False,
    ),
    output: Path | None = typer.Option(
        None,
        "-o",
        "--output",
        help="Folder to create the album folders in (overrides the config file).",
    ),
    all_images: bool | None = typer.Option(
        None,
        "--all-images/--cover-only",
        help="Download every listed image instead of only the first one.",
    ),
    sanitize: bool | None = typer.Option(
        None,
        "--sanitize/--no-sanitize",
        help="Strip characters that are not allowed in file names.",
    ),
    ext: str | None = typer.Option(
        None, "--ext", help="File extension for audio files (default 'flac')."
    ),
):
    """Download albums described by metadata files."""
    cli_options = {
        key: value
        for key, value in {
            "downloads_root": output,
            "all_images": all_images,
            "sanitize_paths": sanitize,
            "audio_extension": ext,
        }.items()
        if value is not None
    }

    try:
        config = ConfigManager(CONFIG_FILE).load_config(cli_options, required=False)
        albums = [Album.from_json_file(path) for path in album_files]
    except KhinsiderCliError as e:
        console.print(format_error_with_suggestions(e))
        raise typer.Exit(code=1) from e

    reporter = ConsoleReporter(console)

    async def _download_async():
        async with HttpResourceFetcher.from_config(config) as fetcher:
            album_downloader = AlbumDownloader(config, fetcher, reporter)
            for album in albums:
                console.print(f"\n[bold cyan]🎵 {escape(album.title)}[/bold cyan]")
                await album_downloader.download(album)

    try:
        asyncio.run(_download_async())
    except KhinsiderCliError as e:
        console.print(format_error_with_suggestions(e))
        raise typer.Exit(code=1) from e

    print_summary_panel(reporter.stats, reporter.stats.elapsed)
