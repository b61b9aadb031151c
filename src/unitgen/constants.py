"""Constants module for unitgen.

All timeout values and shared constants are defined here (SSOT).
"""

from __future__ import annotations

# === Stop Timeouts (seconds) ===
# Once exceeded, processes of the service are killed and the cgroup(s) are
# cleaned up.
MIN_TIMEOUT_STOP_SEC = 60
DEFAULT_STOP_TIMEOUT = 10  # Container stop timeout when none is configured

# === Restart Policies ===
# Values accepted by systemd's Restart= setting
RESTART_POLICIES = (
    "no",
    "on-success",
    "on-failure",
    "on-abnormal",
    "on-watchdog",
    "on-abort",
    "always",
)
DEFAULT_RESTART_POLICY = "on-failure"

# === Flag Normalization ===
# Explicit "false" spellings that conflict with systemd owning the process
DETACH_FALSE_ARGS = ("-d=false", "--detach=false")
REPLACE_FALSE_ARG = "--replace=false"

# === Header Defaults ===
DEFAULT_PODMAN_VERSION = "3.4.0"
DEFAULT_GRAPH_ROOT = "/var/lib/containers/storage"
DEFAULT_RUN_ROOT = "/run/containers/storage"
