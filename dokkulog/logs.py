"""CLI: show container logs through the console formatter."""

from __future__ import annotations

import typer

from ._cli_common import get_logger
from .process import container_logs, prefixed_container_logs


def logs(
    ctx: typer.Context,
    containers: list[str] = typer.Argument(..., help="Container id(s) or name(s)"),
    tail: int = typer.Option(0, "-n", "--tail", help="Only show the last N lines (0 = all)"),
    follow: bool = typer.Option(False, "-f", "--follow", help="Keep streaming new output"),
    prefix: bool = typer.Option(False, "--prefix", help="Print raw lines tagged with the container id"),
):
    """Print logs for one or more containers.

    A single container is shown as indented verbose lines (hidden with
    --quiet). Several containers, or --prefix, stream raw lines tagged
    `<container> | ` so concurrent output stays readable.
    """
    if tail < 0:
        raise typer.BadParameter("--tail must be zero or a positive number of lines")

    logger = get_logger(ctx)

    if len(containers) == 1 and not prefix:
        container_logs(logger, containers[0], lines=tail, follow=follow)
        return

    try:
        codes = prefixed_container_logs(
            containers,
            typer.get_binary_stream("stdout"),
            lines=tail,
            follow=follow,
            docker_bin=logger.settings.docker_bin,
        )
    except OSError as exc:
        logger.fail_with_error(exc)
        return

    for container_id, code in codes.items():
        if not follow and code != 0:
            logger.exclaim(f"Failed to fetch container logs: {container_id}")
