"""dokkulog package."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable

from . import emit, logs, run
from .errors import ExitCodeError, HasExitCode, exit_code_for
from .log import STYLES, Logger
from .settings import OutputSettings
from .writers import MutexLineWriter, PrefixingWriter, Source, paired_writers


@dataclass(frozen=True)
class ToolCommand:
    """Declarative CLI registration entry for a dokkulog subcommand."""

    name: str
    callback: Callable[..., Any]
    context_settings: dict[str, Any] = field(default_factory=dict)


TOOL_COMMANDS: tuple[ToolCommand, ...] = (
    ToolCommand(name="emit", callback=emit.emit),
    ToolCommand(name="logs", callback=logs.logs),
    ToolCommand(name="run", callback=run.run, context_settings=run.CONTEXT_SETTINGS),
)


__all__ = [
    "emit",
    "logs",
    "run",
    "ExitCodeError",
    "HasExitCode",
    "exit_code_for",
    "Logger",
    "STYLES",
    "OutputSettings",
    "MutexLineWriter",
    "PrefixingWriter",
    "Source",
    "paired_writers",
    "ToolCommand",
    "TOOL_COMMANDS",
]
