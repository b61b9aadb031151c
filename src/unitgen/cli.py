"""Command line interface for unitgen."""

from __future__ import annotations

import sys

import click
from rich.console import Console
from rich.markup import escape

from . import __version__
from .config import load_config
from .constants import MIN_TIMEOUT_STOP_SEC
from .errors import UnitGenError
from .header import render_header
from .logging import get_logger, set_debug
from .options import GenerateOptions
from .pipeline import ExecLineRequest, build_exec_line, timeout_stop_sec
from .restart import validate_restart_policy

console = Console(highlight=False)
err_console = Console(stderr=True, highlight=False)
logger = get_logger(__name__)


def _fail(error: UnitGenError) -> None:
    """Print a user-facing error and exit with status 1."""
    err_console.print(f"[red]Error: {escape(str(error))}[/red]")
    sys.exit(1)


@click.group()
@click.option("--debug", is_flag=True, help="Enable debug logging")
@click.version_option(version=__version__, prog_name="unitgen")
def cli(debug: bool) -> None:
    """unitgen - Prepare container commands for systemd service units."""
    if debug:
        set_debug(True)


@cli.command(
    "exec-line",
    context_settings={"ignore_unknown_options": True, "allow_interspersed_args": False},
)
@click.option(
    "--arg-count",
    "-n",
    type=int,
    default=0,
    show_default=True,
    help="Number of trailing arguments (entrypoint) left unfiltered",
)
@click.option("--pod-scoped", is_flag=True, help="Also strip pod flags")
@click.argument("command", nargs=-1, required=True, type=click.UNPROCESSED)
def exec_line(arg_count: int, pod_scoped: bool, command: tuple[str, ...]) -> None:
    """Print COMMAND filtered and escaped for ExecStart=.

    Separate the container command with '--', e.g.
    unitgen exec-line -n 2 -- podman run --cidfile=/x alpine echo hi
    """
    request = ExecLineRequest(command=command, arg_count=arg_count, pod_scoped=pod_scoped)
    try:
        line = build_exec_line(request)
    except UnitGenError as e:
        _fail(e)
    click.echo(line)  # plain output, no Rich markup


@cli.command()
@click.argument("service_name")
@click.option("--no-header", is_flag=True, help="Omit the autogenerated comment block")
@click.option("--podman-version", help="Version shown in the comment block")
@click.option("--timestamp", "time_stamp", help="Timestamp shown in the comment block")
@click.option("--graph-root", help="Container storage graph root")
@click.option("--run-root", help="Container storage run root")
def header(
    service_name: str,
    no_header: bool,
    podman_version: str | None,
    time_stamp: str | None,
    graph_root: str | None,
    run_root: str | None,
) -> None:
    """Print the unit header for SERVICE_NAME."""
    options = GenerateOptions.from_cli(
        load_config(),
        podman_version=podman_version,
        graph_root=graph_root,
        run_root=run_root,
        no_header=no_header,
    )
    logger.debug("Header options: %s", options)
    click.echo(render_header(options.to_header_info(service_name, time_stamp)), nl=False)


@cli.command("check-restart")
@click.argument("policy", required=False)
def check_restart(policy: str | None) -> None:
    """Check that POLICY is a valid systemd restart policy.

    Without POLICY, the configured restart policy is checked.
    """
    if policy is None:
        policy = load_config().restart_policy
    try:
        validate_restart_policy(policy)
    except UnitGenError as e:
        _fail(e)
    console.print(f"[green]✓ {policy} is a valid restart policy[/green]")


@cli.command("stop-timeout")
@click.argument("seconds", type=int, required=False)
def stop_timeout(seconds: int | None) -> None:
    """Print TimeoutStopSec= for a container stop timeout of SECONDS.

    Without SECONDS, the configured stop timeout is used.
    """
    if seconds is None:
        seconds = load_config().stop_timeout
    try:
        value = timeout_stop_sec(seconds, MIN_TIMEOUT_STOP_SEC)
    except UnitGenError as e:
        _fail(e)
    click.echo(f"TimeoutStopSec={value}")
