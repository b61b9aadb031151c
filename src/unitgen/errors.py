"""Unified exception hierarchy for unitgen.

All custom exceptions inherit from UnitGenError for consistent error handling.
The CLI catches these and prints them as user-facing errors.

Dependency direction:
    This module has NO internal dependencies (leaf module).
    It may be imported by: all other unitgen modules.
    It should NOT import from any other unitgen modules.
"""

from __future__ import annotations


class UnitGenError(Exception):
    """Base exception for all unitgen errors.

    All unitgen-specific exceptions should inherit from this class.
    This enables consistent error handling at the CLI layer.
    """


class ValidationError(UnitGenError):
    """Input validation errors.

    Examples:
        - Payload argument count outside the command
        - Negative stop timeout
    """


class RestartPolicyError(ValidationError):
    """Raised when a restart policy is not one systemd accepts.

    The offending value is kept on ``policy`` for reporting.
    """

    def __init__(self, policy: str) -> None:
        self.policy = policy
        super().__init__(f"{policy} is not a valid restart policy")
