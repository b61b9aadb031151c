"""unitgen - Prepare container commands for systemd service units."""

from __future__ import annotations

__version__ = "1.0.0"
