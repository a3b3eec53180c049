"""Shared CLI helpers for dokkulog commands."""

from __future__ import annotations

from typing import Any, Optional

import typer

from .log import Logger
from .settings import OutputSettings

HELP_OPTION_NAMES = ("-h", "--help")


def new_typer_app(**kwargs: Any) -> typer.Typer:
    """Create a Typer app with consistent help flag shortcuts."""
    context_settings = dict(kwargs.pop("context_settings", {}) or {})
    context_settings.setdefault("help_option_names", list(HELP_OPTION_NAMES))
    return typer.Typer(context_settings=context_settings, **kwargs)


def get_logger(ctx: Optional[typer.Context]) -> Logger:
    """Logger stored on the context by the root callback.

    Falls back to one built from the environment when a command runs on
    its own.
    """
    if ctx is not None and isinstance(ctx.obj, Logger):
        return ctx.obj
    logger = Logger(OutputSettings.from_env())
    if ctx is not None:
        ctx.obj = logger
    return logger
