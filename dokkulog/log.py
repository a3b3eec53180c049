"""Prefixed console output for plugin commands.

Every line printed by the tool goes through a Logger so that prefixes,
stream routing and quiet/trace handling stay consistent:

    -----> Building app          info1
    =====> Deploy summary        info2
           step output           verbose
     !     something is off      warn / exclaim / fail*
     ?     internal detail       debug (trace only)
"""

from __future__ import annotations

from typing import IO, NoReturn, Optional

import click
import typer

from .errors import DEFAULT_EXIT_CODE, exit_code_for, flatten_errors
from .settings import OutputSettings

PREFIX_INFO1 = "-----> "
PREFIX_INFO2 = "=====> "
PREFIX_VERBOSE = "       "
PREFIX_ALERT = " !     "
PREFIX_DEBUG = " ?     "

# style name -> (prefix, stream, description); used by `emit` and `emit --list`
STYLES: dict[str, tuple[str, str, str]] = {
    "log": ("", "stdout", "plain line"),
    "log-quiet": ("", "stdout", "plain line, hidden in quiet mode"),
    "info1": (PREFIX_INFO1, "stdout", "section header"),
    "info1-quiet": (PREFIX_INFO1, "stdout", "section header, hidden in quiet mode"),
    "info2": (PREFIX_INFO2, "stdout", "sub-header"),
    "info2-quiet": (PREFIX_INFO2, "stdout", "sub-header, hidden in quiet mode"),
    "verbose": (PREFIX_VERBOSE, "stdout", "indented detail"),
    "verbose-quiet": (PREFIX_VERBOSE, "stdout", "indented detail, hidden in quiet mode"),
    "verbose-stderr": (PREFIX_ALERT, "stderr", "detail on stderr"),
    "verbose-stderr-quiet": (PREFIX_ALERT, "stderr", "detail on stderr, hidden in quiet mode"),
    "warn": (PREFIX_ALERT, "stderr", "warning"),
    "exclaim": (PREFIX_ALERT, "stdout", "notice on stdout"),
    "stderr": ("", "stderr", "plain line on stderr"),
    "debug": (PREFIX_DEBUG, "stderr", "trace line, only with DOKKU_TRACE=1"),
    "fail": (PREFIX_ALERT, "stderr", "failure, exits with status 1"),
    "fail-quiet": (PREFIX_ALERT, "stderr", "failure, message hidden in quiet mode"),
}


def _terminate(code: int) -> NoReturn:
    """End the command with `code`.

    Inside a Typer/Click command the context turns typer.Exit into the exit
    status; plain scripts get SystemExit so the interpreter does the same.
    """
    if click.get_current_context(silent=True) is not None:
        raise typer.Exit(code=code)
    raise SystemExit(code)


class Logger:
    """Console writer bound to one set of OutputSettings.

    `out` and `err` default to the process stdout/stderr, resolved at each
    call so test runners that swap sys.stdout still capture output.
    """

    def __init__(
        self,
        settings: Optional[OutputSettings] = None,
        *,
        out: Optional[IO[str]] = None,
        err: Optional[IO[str]] = None,
    ) -> None:
        self.settings = settings if settings is not None else OutputSettings()
        self._out = out
        self._err = err

    @property
    def quiet(self) -> bool:
        return self.settings.quiet

    # --- plumbing ---------------------------------------------------------

    def _echo(self, text: str, *, err: bool = False, fg: Optional[str] = None) -> None:
        file = self._err if err else self._out
        if fg is None:
            typer.echo(text, file=file, err=err)
        else:
            typer.secho(text, file=file, err=err, fg=fg)

    # --- plain ------------------------------------------------------------

    def log(self, text: str) -> None:
        self._echo(text)

    def log_quiet(self, text: str) -> None:
        if not self.quiet:
            self.log(text)

    def stderr(self, text: str) -> None:
        self._echo(text, err=True)

    # --- headers ----------------------------------------------------------

    def info1(self, text: str) -> None:
        """Section header on stdout."""
        self._echo(f"{PREFIX_INFO1}{text}")

    def info1_quiet(self, text: str) -> None:
        if not self.quiet:
            self.info1(text)

    def info2(self, text: str) -> None:
        """Sub-header on stdout."""
        self._echo(f"{PREFIX_INFO2}{text}")

    def info2_quiet(self, text: str) -> None:
        if not self.quiet:
            self.info2(text)

    # --- detail -----------------------------------------------------------

    def verbose(self, text: str) -> None:
        """Indented detail line on stdout."""
        self._echo(f"{PREFIX_VERBOSE}{text}")

    def verbose_quiet(self, text: str) -> None:
        if not self.quiet:
            self.verbose(text)

    def verbose_stderr(self, text: str) -> None:
        """Detail line on stderr."""
        self._echo(f"{PREFIX_ALERT}{text}", err=True)

    def verbose_stderr_quiet(self, text: str) -> None:
        if not self.quiet:
            self.verbose_stderr(text)

    # --- alerts -----------------------------------------------------------

    def warn(self, text: str) -> None:
        self._echo(f"{PREFIX_ALERT}{text}", err=True, fg=typer.colors.YELLOW)

    def exclaim(self, text: str) -> None:
        self._echo(f"{PREFIX_ALERT}{text}")

    def debug(self, text: str) -> None:
        """Trace line on stderr, printed only when tracing is enabled."""
        if self.settings.trace:
            self._echo(f"{PREFIX_DEBUG}{text.removeprefix(PREFIX_DEBUG)}", err=True)

    # --- failures ---------------------------------------------------------

    def _fail_line(self, text: str) -> None:
        self._echo(f"{PREFIX_ALERT}{text}", err=True, fg=typer.colors.RED)

    def fail(self, text: str) -> NoReturn:
        """Print text to stderr and terminate with status 1."""
        self._fail_line(text)
        _terminate(DEFAULT_EXIT_CODE)

    def fail_quiet(self, text: str) -> NoReturn:
        """Like fail, but the message is hidden in quiet mode."""
        if not self.quiet:
            self._fail_line(text)
        _terminate(DEFAULT_EXIT_CODE)

    def fail_with_error(self, err: Optional[BaseException]) -> None:
        """Report err and terminate with the exit code it carries.

        Exception groups are reported one constituent per line. Passing
        None does nothing.
        """
        if err is None:
            return
        for inner in flatten_errors(err):
            self._fail_line(str(inner))
        _terminate(exit_code_for(err))

    def fail_with_error_quiet(self, err: Optional[BaseException]) -> None:
        """Like fail_with_error, but the messages are hidden in quiet mode."""
        if err is None:
            return
        if not self.quiet:
            for inner in flatten_errors(err):
                self._fail_line(str(inner))
        _terminate(exit_code_for(err))

    # --- dispatch ---------------------------------------------------------

    def emit(self, style: str, text: str) -> None:
        """Print text using the style registered under `style` in STYLES."""
        if style not in STYLES:
            raise ValueError(f"Unknown style: {style}")
        getattr(self, style.replace("-", "_"))(text)
