"""Output settings resolved once at process start."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional

QUIET_ENV = "DOKKU_QUIET_OUTPUT"
TRACE_ENV = "DOKKU_TRACE"
DOCKER_BIN_ENV = "DOCKER_BIN"


@dataclass(frozen=True)
class OutputSettings:
    """Switches consulted by every logging call.

    quiet:      hide informational and verbose output (the *_quiet helpers)
    trace:      emit debug lines
    docker_bin: executable used to fetch container logs
    """

    quiet: bool = False
    trace: bool = False
    docker_bin: str = "docker"

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "OutputSettings":
        """Build settings from environment variables.

        Any non-empty DOKKU_QUIET_OUTPUT enables quiet mode; only the exact
        value "1" for DOKKU_TRACE enables tracing.
        """
        env = os.environ if environ is None else environ
        return cls(
            quiet=env.get(QUIET_ENV, "") != "",
            trace=env.get(TRACE_ENV, "") == "1",
            docker_bin=env.get(DOCKER_BIN_ENV) or "docker",
        )

    def with_flags(self, *, quiet: bool = False, trace: bool = False) -> "OutputSettings":
        """Return a copy with command-line flags layered on top."""
        return OutputSettings(
            quiet=self.quiet or quiet,
            trace=self.trace or trace,
            docker_bin=self.docker_bin,
        )
