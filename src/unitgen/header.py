"""Header of generated systemd units."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class HeaderInfo:
    """Values substituted into the unit header."""

    service_name: str
    graph_root: str
    run_root: str
    podman_version: str = ""
    generate_no_header: bool = False
    time_stamp: str | None = None


def render_header(info: HeaderInfo) -> str:
    """Render the comment block and [Unit] section of a unit file.

    The comment block (version and optional timestamp) is dropped entirely
    when ``generate_no_header`` is set; the service name line and the
    [Unit] section are always rendered.
    """
    lines = [f"# {info.service_name}.service"]
    if not info.generate_no_header:
        lines.append(f"# autogenerated by Podman {info.podman_version}")
        if info.time_stamp:
            lines.append(f"# {info.time_stamp}")

    return "\n".join(lines) + f"""

[Unit]
Description=Podman {info.service_name}.service
Documentation=man:podman-generate-systemd(1)
Wants=network.target
After=network-online.target
RequiresMountsFor={info.graph_root} {info.run_root}
"""
