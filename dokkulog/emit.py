"""CLI: print a line in one of the standard console styles.

Shell plugins call this to get the same prefixes as the Python code:

    dokkulog emit info1 "Building app"
    dokkulog emit verbose-quiet "step 1 of 3"
    dokkulog emit --list
"""

from __future__ import annotations

from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from ._cli_common import get_logger
from .log import STYLES


def emit(
    ctx: typer.Context,
    style: Optional[str] = typer.Argument(None, help="Style name, see --list"),
    text: Optional[list[str]] = typer.Argument(None, help="Text to print (words are joined by spaces)"),
    list_styles: bool = typer.Option(False, "--list", help="List available styles and exit"),
):
    """Print TEXT with the prefix and stream of STYLE.

    The fail styles terminate with status 1 after printing.
    """
    if list_styles:
        _print_styles()
        return

    if not style:
        raise typer.BadParameter("STYLE is required unless --list is given.")
    if style not in STYLES:
        raise typer.BadParameter(f"Unknown style '{style}'. Use --list to see available styles.")

    get_logger(ctx).emit(style, " ".join(text or []))


def _print_styles() -> None:
    """Render the style table with Rich."""
    table = Table(title="Console styles")
    table.add_column("style", style="cyan", no_wrap=True)
    table.add_column("prefix", no_wrap=True)
    table.add_column("stream")
    table.add_column("description")
    for name, (prefix, stream, description) in STYLES.items():
        # Show the prefix width explicitly; trailing spaces vanish otherwise.
        table.add_row(name, repr(prefix), stream, description)
    Console().print(table)
