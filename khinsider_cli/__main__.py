"""
Entry point for `khinsider-cli` and `python -m khinsider_cli`.

Errors that escape a command are shown as a Rich panel and mapped to an
exit status: 0 for a user cancel, 1 for anything else.
"""

import asyncio
import logging
import sys

from rich.console import Console

from khinsider_cli.cli.app import app
from khinsider_cli.cli.formatters import format_error_with_suggestions
from khinsider_cli.exceptions import KhinsiderCliError

log = logging.getLogger("khinsider_cli")


def _fail(console: Console, error: Exception, context: dict | None = None) -> int:
    console.print()
    console.print(format_error_with_suggestions(error, context))
    return 1


def main() -> None:
    console = Console(stderr=True)

    try:
        app()
    except (KeyboardInterrupt, asyncio.CancelledError):
        console.print("\n[yellow]⚠️  Download cancelled. Finished files are kept.[/yellow]")
        sys.exit(0)
    except KhinsiderCliError as e:
        sys.exit(_fail(console, e))
    except Exception as e:
        log.debug("Full traceback:", exc_info=True)
        sys.exit(_fail(console, e, {"type": "Unexpected"}))


if __name__ == "__main__":
    main()
