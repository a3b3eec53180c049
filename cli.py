#!/usr/bin/env python3
"""dokkulog CLI entry point.

This aggregates subcommands from the dokkulog/ package using Typer.

Subcommands:
    - emit: print a line in a standard console style
    - logs: show container logs through the console formatter
    - run:  run a command with its output shown as log lines

Examples:
    dokkulog emit info1 "Building app"      # -----> Building app
    dokkulog emit --list                    # table of styles
    dokkulog logs web.1 -n 50               # last 50 lines, indented
    dokkulog logs web.1 worker.1 -f         # follow both, tagged per container
    dokkulog --quiet run make build         # only failures are printed
    DOKKU_TRACE=1 dokkulog run ls -la       # with debug lines
"""

import typer

from dokkulog import TOOL_COMMANDS
from dokkulog._cli_common import new_typer_app
from dokkulog.log import Logger
from dokkulog.settings import OutputSettings


# Root Typer app; expose -h/--help on all levels
app = new_typer_app(no_args_is_help=True)


@app.callback()
def main(
    ctx: typer.Context,
    quiet: bool = typer.Option(False, "-q", "--quiet", help="Hide informational output (same as DOKKU_QUIET_OUTPUT=1)"),
    trace: bool = typer.Option(False, "--trace", help="Print debug lines (same as DOKKU_TRACE=1)"),
):
    """Console output helpers for plugin commands."""
    # Settings are resolved once here and shared by every subcommand.
    settings = OutputSettings.from_env().with_flags(quiet=quiet, trace=trace)
    ctx.obj = Logger(settings)


# Register every subcommand declared by the package
for tool in TOOL_COMMANDS:
    app.command(tool.name, context_settings=tool.context_settings or None)(tool.callback)


if __name__ == '__main__':
    # Delegate to Typer's CLI runner
    app()
