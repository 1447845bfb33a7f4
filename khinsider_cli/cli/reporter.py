"""
Console observer that prints one line per album step and keeps session totals.
"""

from rich.console import Console
from rich.markup import escape

from khinsider_cli.models.events import ItemEvent, ItemOutcome, StepKind
from khinsider_cli.models.stats import DownloadStats
from khinsider_cli.utils.formatting import format_size


class ConsoleReporter:
    """Prints album progress with Rich and records it in a `DownloadStats`."""

    def __init__(self, console: Console, stats: DownloadStats | None = None):
        self.console = console
        self.stats = stats or DownloadStats()

    def report(self, event: ItemEvent) -> None:
        self.stats.record(event)
        self.console.print(self._render(event))

    def _render(self, event: ItemEvent) -> str:
        label = escape(event.label)
        detail = f" [dim]({escape(event.detail)})[/dim]" if event.detail else ""

        if event.step is StepKind.DIRECTORY:
            if event.outcome is ItemOutcome.SUCCESS:
                return f"[green]✓ Successfully created[/] [dim]{label}[/dim]"
            return f"[red]✗ Could not prepare[/] [dim]{label}[/dim]{detail}"

        if event.outcome is ItemOutcome.SUCCESS:
            return f"  [green]✓[/] {label} [dim]{format_size(event.size)}[/dim]"
        if event.outcome is ItemOutcome.SKIPPED:
            return f"  [yellow]○ Skipped:[/] {label}{detail}"
        return f"  [red]✗ Failed:[/] {label}{detail}"
