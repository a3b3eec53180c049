"""Errors that carry a process exit code."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

DEFAULT_EXIT_CODE = 1


@runtime_checkable
class HasExitCode(Protocol):
    """Anything exposing the exit status the process should end with."""

    exit_code: int


class ExitCodeError(Exception):
    """An error with an explicit exit code."""

    def __init__(self, message: str, exit_code: int = DEFAULT_EXIT_CODE) -> None:
        super().__init__(message)
        self.exit_code = exit_code


def exit_code_for(err: BaseException) -> int:
    """Exit code advertised by err, or 1 when it has none."""
    if isinstance(err, HasExitCode) and isinstance(err.exit_code, int):
        return err.exit_code
    return DEFAULT_EXIT_CODE


def flatten_errors(err: BaseException) -> list[BaseException]:
    """Constituents of a (possibly nested) exception group, in order."""
    if isinstance(err, BaseExceptionGroup):
        flat: list[BaseException] = []
        for inner in err.exceptions:
            flat.extend(flatten_errors(inner))
        return flat
    return [err]
