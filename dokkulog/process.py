"""Run external commands and stream their output into writers."""

from __future__ import annotations

import subprocess
import threading
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from functools import partial
from typing import IO, Optional, Sequence

from .log import Logger
from .writers import BinaryWriter, FlushingWriter, PrefixingWriter, paired_writers

CHUNK_SIZE = 64 * 1024


@dataclass(frozen=True)
class ExecResult:
    exit_code: int


def _pump(pipe: IO[bytes], sink: BinaryWriter, line_buffered: bool, errors: list[BaseException]) -> None:
    """Copy everything from pipe into sink until EOF."""
    try:
        read = pipe.readline if line_buffered else partial(pipe.read1, CHUNK_SIZE)
        for chunk in iter(read, b""):
            sink.write(chunk)
    except BaseException as exc:
        errors.append(exc)
        # Keep draining so the child never blocks on a full pipe.
        for _ in iter(partial(pipe.read, CHUNK_SIZE), b""):
            pass
    finally:
        pipe.close()


def exec_command(
    command: str,
    args: Sequence[str] = (),
    *,
    stdout: Optional[BinaryWriter] = None,
    stderr: Optional[BinaryWriter] = None,
    line_buffered: bool = False,
) -> ExecResult:
    """Run `command args...`, copying its output into the given sinks.

    Streams without a sink are inherited from this process. The first
    exception raised by a sink is re-raised once the child has exited.
    OSError from starting the command propagates as-is.
    """
    proc = subprocess.Popen(
        [command, *args],
        stdout=subprocess.PIPE if stdout is not None else None,
        stderr=subprocess.PIPE if stderr is not None else None,
    )

    errors: list[BaseException] = []
    threads = []
    for pipe, sink in ((proc.stdout, stdout), (proc.stderr, stderr)):
        if pipe is None or sink is None:
            continue
        thread = threading.Thread(target=_pump, args=(pipe, sink, line_buffered, errors), daemon=True)
        thread.start()
        threads.append(thread)

    try:
        for thread in threads:
            thread.join()
        exit_code = proc.wait()
    except KeyboardInterrupt:
        proc.terminate()
        proc.wait()
        raise

    if errors:
        raise errors[0]
    return ExecResult(exit_code=exit_code)


def container_logs_args(container_id: str, lines: int = 0, follow: bool = False) -> list[str]:
    args = ["container", "logs", container_id]
    if lines > 0:
        args += ["--tail", str(lines)]
    if follow:
        args.append("--follow")
    return args


def container_logs(logger: Logger, container_id: str, lines: int = 0, follow: bool = False) -> Optional[int]:
    """Print a container's logs as verbose lines.

    stdout lines are indented, stderr lines carry the alert prefix; both are
    hidden in quiet mode. Returns the docker exit code, or None when docker
    could not be started.
    """
    stdout_writer, stderr_writer = paired_writers(logger)
    args = container_logs_args(container_id, lines, follow)
    logger.debug(f"running {logger.settings.docker_bin} {' '.join(args)}")

    try:
        result = exec_command(
            logger.settings.docker_bin,
            args,
            stdout=stdout_writer,
            stderr=stderr_writer,
        )
    except OSError:
        logger.exclaim(f"Failed to fetch container logs: {container_id}")
        return None

    if not follow and result.exit_code != 0:
        logger.exclaim(f"Failed to fetch container logs: {container_id}")
    return result.exit_code


def prefixed_container_logs(
    containers: Sequence[str],
    sink: IO[bytes],
    lines: int = 0,
    follow: bool = False,
    docker_bin: str = "docker",
) -> dict[str, int]:
    """Stream several containers at once, each line tagged `<id> | `.

    All containers share `sink`; every line reaches it in a single write.
    """
    downstream = FlushingWriter(sink)

    def _stream(container_id: str) -> int:
        writer = PrefixingWriter(f"{container_id} | ".encode(), downstream)
        result = exec_command(
            docker_bin,
            container_logs_args(container_id, lines, follow),
            stdout=writer,
            stderr=writer,
            line_buffered=True,
        )
        return result.exit_code

    with ThreadPoolExecutor(max_workers=max(len(containers), 1)) as pool:
        futures = {cid: pool.submit(_stream, cid) for cid in containers}
        return {cid: future.result() for cid, future in futures.items()}
