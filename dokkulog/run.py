"""CLI: run a command with its output shown as verbose log lines."""

from __future__ import annotations

from typing import Optional

import typer

from ._cli_common import get_logger
from .errors import ExitCodeError
from .process import exec_command
from .writers import paired_writers

# Let options meant for the child (e.g. `run ls -la`) pass through untouched.
CONTEXT_SETTINGS = {"allow_extra_args": True, "ignore_unknown_options": True}


def run(
    ctx: typer.Context,
    command: str = typer.Argument(..., help="Executable to run"),
    args: Optional[list[str]] = typer.Argument(None, help="Arguments passed to the command"),
):
    """Run COMMAND, printing its stdout indented and its stderr flagged.

    Exits with the command's own status when it fails.
    """
    logger = get_logger(ctx)
    argv = list(args or []) + list(ctx.args)
    stdout_writer, stderr_writer = paired_writers(logger)

    logger.debug(f"running {command} {' '.join(argv)}".rstrip())
    try:
        result = exec_command(command, argv, stdout=stdout_writer, stderr=stderr_writer)
    except OSError as exc:
        logger.fail_with_error(ExitCodeError(f"Unable to run {command}: {exc.strerror or exc}", 127))
        return

    if result.exit_code != 0:
        logger.fail_with_error_quiet(
            ExitCodeError(f"{command} exited with status {result.exit_code}", result.exit_code)
        )
