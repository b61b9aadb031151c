"""Restart policy validation for generated units."""

from __future__ import annotations

from .constants import RESTART_POLICIES
from .errors import RestartPolicyError


def validate_restart_policy(restart: str) -> None:
    """Check that the user-provided policy is valid.

    Matching is exact and case-sensitive.

    Raises:
        RestartPolicyError: If ``restart`` is not a known policy.
    """
    if restart not in RESTART_POLICIES:
        raise RestartPolicyError(restart)
