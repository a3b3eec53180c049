"""Writers that feed subprocess output into the console.

MutexLineWriter turns raw chunks from a child's stdout or stderr into
verbose log lines. The two writers attached to one child share a lock so
their groups of lines never interleave.

PrefixingWriter decorates any binary writer so that a prefix and the
payload reach the downstream writer in one `write` call.
"""

from __future__ import annotations

import threading
from enum import Enum
from typing import IO, Optional, Protocol

from .log import Logger


class BinaryWriter(Protocol):
    def write(self, data: bytes) -> Optional[int]: ...


class Source(str, Enum):
    STDOUT = "stdout"
    STDERR = "stderr"


class MutexLineWriter:
    """Split chunks on newlines and log every non-empty line.

    Lines from the stdout source go to Logger.verbose_quiet, lines from the
    stderr source to Logger.verbose_stderr_quiet.

    No state is kept between calls: a line split across two writes is
    logged as two entries.
    """

    def __init__(self, logger: Logger, lock: threading.Lock, source: Source) -> None:
        self.logger = logger
        self.lock = lock
        self.source = Source(source)

    def write(self, data: bytes) -> int:
        if self.source is Source.STDOUT:
            emit = self.logger.verbose_quiet
        else:
            emit = self.logger.verbose_stderr_quiet

        with self.lock:
            for line in data.decode("utf-8", errors="replace").split("\n"):
                if line == "":
                    continue
                emit(line)

        return len(data)


def paired_writers(logger: Logger) -> tuple[MutexLineWriter, MutexLineWriter]:
    """Create (stdout, stderr) writers for a single subprocess invocation.

    Each call creates a new lock; do not share the pair across invocations.
    """
    lock = threading.Lock()
    return (
        MutexLineWriter(logger, lock, Source.STDOUT),
        MutexLineWriter(logger, lock, Source.STDERR),
    )


class PrefixingWriter:
    """Write `prefix + data` to `writer` as one call."""

    def __init__(self, prefix: bytes, writer: BinaryWriter) -> None:
        self._prefix = bytes(prefix)
        self.writer = writer

    @property
    def prefix(self) -> bytes:
        return self._prefix

    def write(self, data: bytes) -> Optional[int]:
        if len(data) == 0:
            return 0

        # A single downstream write keeps other writers on the same sink from
        # landing between the prefix and the payload.
        n = self.writer.write(self._prefix + bytes(data))
        if n is not None and n > len(data):
            # Callers expect 0 <= n <= len(data); the prefix is not theirs.
            return len(data)
        return n


class FlushingWriter:
    """Flush a buffered binary stream after each write."""

    def __init__(self, stream: IO[bytes]) -> None:
        self.stream = stream

    def write(self, data: bytes) -> int:
        n = self.stream.write(data)
        self.stream.flush()
        return n
