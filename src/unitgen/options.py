"""Header generation options for unitgen.

Bundles CLI arguments into a single configuration object for cleaner
function signatures and easier testing.
"""

from __future__ import annotations

from dataclasses import dataclass

from .config import Config
from .header import HeaderInfo


@dataclass(frozen=True)
class GenerateOptions:
    """Options for rendering a unit header.

    Immutable dataclass; unset CLI values are filled from Config.
    """

    podman_version: str
    graph_root: str
    run_root: str
    no_header: bool = False

    @classmethod
    def from_cli(
        cls,
        config: Config,
        *,
        podman_version: str | None = None,
        graph_root: str | None = None,
        run_root: str | None = None,
        no_header: bool = False,
    ) -> GenerateOptions:
        """Create GenerateOptions from CLI arguments.

        --no-header on the command line wins over the config; it can only
        turn the header off.
        """
        return cls(
            podman_version=podman_version or config.podman_version,
            graph_root=graph_root or config.graph_root,
            run_root=run_root or config.run_root,
            no_header=no_header or config.no_header,
        )

    def to_header_info(self, service_name: str, time_stamp: str | None = None) -> HeaderInfo:
        """Build the header values for one service."""
        return HeaderInfo(
            service_name=service_name,
            graph_root=self.graph_root,
            run_root=self.run_root,
            podman_version=self.podman_version,
            generate_no_header=self.no_header,
            time_stamp=time_stamp,
        )
