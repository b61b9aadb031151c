"""Flag filtering for container commands run under systemd.

Every function here splits the command into a flag region and a frozen
payload (the last ``arg_count`` elements, e.g. the container entrypoint).
Only the flag region is inspected; the payload is appended unchanged.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from .constants import DETACH_FALSE_ARGS, REPLACE_FALSE_ARG

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence


@dataclass(frozen=True)
class FlagSpec:
    """A long flag that takes a value.

    ``--name value`` spans two elements, ``--name=value`` spans one.
    """

    name: str

    @property
    def bare(self) -> str:
        return f"--{self.name}"

    @property
    def prefix(self) -> str:
        return f"--{self.name}="


# Only meaningful for the unit of the pod's infra container
POD_FLAGS: tuple[FlagSpec, ...] = (
    FlagSpec("pod"),
    FlagSpec("pod-id-file"),
    FlagSpec("infra-conmon-pidfile"),
)

# Values are assigned at runtime and are invalid once systemd takes over
CONTAINER_FLAGS: tuple[FlagSpec, ...] = (
    FlagSpec("conmon-pidfile"),
    FlagSpec("cidfile"),
    FlagSpec("cgroups"),
)


def split_payload(args: Sequence[str], arg_count: int) -> tuple[list[str], list[str]]:
    """Split args into (flag region, payload).

    Args:
        args: Full command line.
        arg_count: Number of trailing payload elements.
    """
    boundary = len(args) - arg_count
    return list(args[:boundary]), list(args[boundary:])


def filter_flags(
    command: Sequence[str],
    arg_count: int,
    flags: Iterable[FlagSpec],
) -> list[str]:
    """Remove every occurrence of ``flags`` from the command's flag region.

    A bare flag also drops the element that follows it, whatever it looks
    like. A bare flag in the last flag position has no value to drop and
    is removed alone; the payload is never consumed.

    Args:
        command: Full command line.
        arg_count: Number of trailing elements which must not be filtered.
        flags: Flags to remove.

    Returns:
        New command list.
    """
    flags = tuple(flags)
    bare = {flag.bare for flag in flags}
    prefixes = tuple(flag.prefix for flag in flags)

    region, payload = split_payload(command, arg_count)
    processed: list[str] = []
    remaining = iter(region)
    for arg in remaining:
        if arg in bare:
            next(remaining, None)  # the flag's value
            continue
        if arg.startswith(prefixes):
            continue
        processed.append(arg)

    processed.extend(payload)
    return processed


def filter_pod_flags(command: Sequence[str], arg_count: int) -> list[str]:
    """Remove --pod, --pod-id-file and --infra-conmon-pidfile."""
    return filter_flags(command, arg_count, POD_FLAGS)


def filter_common_container_flags(command: Sequence[str], arg_count: int) -> list[str]:
    """Remove --conmon-pidfile, --cidfile and --cgroups."""
    return filter_flags(command, arg_count, CONTAINER_FLAGS)


def remove_arg(arg: str, args: Iterable[str]) -> list[str]:
    """Return args without any element equal to ``arg``."""
    return [a for a in args if a != arg]


def remove_detach_arg(args: Sequence[str], arg_count: int) -> list[str]:
    """Remove -d=false and --detach=false from the flag region.

    The same literal inside the payload (e.g. the entrypoint's own flag)
    is kept.
    """
    flag_args, real_args = split_payload(args, arg_count)
    for literal in DETACH_FALSE_ARGS:
        flag_args = remove_arg(literal, flag_args)
    return flag_args + real_args


def remove_replace_arg(args: Sequence[str], arg_count: int) -> list[str]:
    """Remove --replace=false from the flag region."""
    flag_args, real_args = split_payload(args, arg_count)
    return remove_arg(REPLACE_FALSE_ARG, flag_args) + real_args


def normalize_flags(args: Sequence[str], arg_count: int) -> list[str]:
    """Drop explicit detach/replace "false" flags systemd would conflict with."""
    return remove_replace_arg(remove_detach_arg(args, arg_count), arg_count)
