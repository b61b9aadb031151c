"""ExecStart= command line preparation.

Runs the stages in order: pod flag filter, container flag filter,
detach/replace normalization, systemd escaping.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from .constants import MIN_TIMEOUT_STOP_SEC
from .errors import ValidationError
from .escape import escape_systemd_arguments
from .flags import filter_common_container_flags, filter_pod_flags, normalize_flags
from .logging import get_logger

if TYPE_CHECKING:
    from collections.abc import Sequence

logger = get_logger(__name__)


@dataclass(frozen=True)
class ExecLineRequest:
    """A raw container command and how many trailing args are payload."""

    command: tuple[str, ...]
    arg_count: int = 0
    pod_scoped: bool = False

    def validate(self) -> None:
        """Raise ValidationError unless arg_count fits the command."""
        if self.arg_count < 0:
            raise ValidationError(f"arg_count must not be negative, got {self.arg_count}")
        if self.arg_count > len(self.command):
            raise ValidationError(
                f"arg_count {self.arg_count} exceeds command length {len(self.command)}"
            )


def prepare_command(
    command: Sequence[str],
    arg_count: int,
    *,
    pod_scoped: bool = False,
) -> list[str]:
    """Filter, normalize and escape a container command for systemd.

    Args:
        command: Container command line, entrypoint included.
        arg_count: Number of trailing elements left untouched by flag stages.
        pod_scoped: Also strip pod flags (unit of a container inside a pod).

    Returns:
        Escaped arguments ready for ExecStart=.
    """
    args = list(command)
    if pod_scoped:
        args = filter_pod_flags(args, arg_count)
    args = filter_common_container_flags(args, arg_count)
    args = normalize_flags(args, arg_count)
    logger.debug("Filtered command: %s", args)
    return escape_systemd_arguments(args)


def format_exec_line(args: Sequence[str]) -> str:
    """Join escaped arguments into one command line."""
    return " ".join(args)


def build_exec_line(request: ExecLineRequest) -> str:
    """Validate a request and return its ExecStart= command line.

    Raises:
        ValidationError: If arg_count is out of range.
    """
    request.validate()
    args = prepare_command(request.command, request.arg_count, pod_scoped=request.pod_scoped)
    return format_exec_line(args)


def timeout_stop_sec(stop_timeout: int, minimum: int = MIN_TIMEOUT_STOP_SEC) -> int:
    """Value for TimeoutStopSec=: the container stop timeout plus ``minimum``.

    Once exceeded, systemd kills the service's processes and cleans up its
    cgroup(s).

    Raises:
        ValidationError: If stop_timeout is negative.
    """
    if stop_timeout < 0:
        raise ValidationError(f"stop timeout must not be negative, got {stop_timeout}")
    return stop_timeout + minimum
