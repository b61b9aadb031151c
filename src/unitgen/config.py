"""Configuration management for unitgen."""

from __future__ import annotations

import json
from dataclasses import asdict, dataclass, fields
from pathlib import Path

from rich.console import Console
from rich.markup import escape

from .constants import (
    DEFAULT_GRAPH_ROOT,
    DEFAULT_PODMAN_VERSION,
    DEFAULT_RESTART_POLICY,
    DEFAULT_RUN_ROOT,
    DEFAULT_STOP_TIMEOUT,
)
from .errors import RestartPolicyError
from .restart import validate_restart_policy

console = Console(stderr=True)


@dataclass
class Config:
    """unitgen configuration model."""

    version: str = "1.0.0"

    # Rendered into the unit header
    podman_version: str = DEFAULT_PODMAN_VERSION
    graph_root: str = DEFAULT_GRAPH_ROOT
    run_root: str = DEFAULT_RUN_ROOT
    no_header: bool = False

    # Service settings
    restart_policy: str = DEFAULT_RESTART_POLICY
    stop_timeout: int = DEFAULT_STOP_TIMEOUT


def _check_types(config: Config) -> None:
    """Raise TypeError unless every field has the type of its default."""
    defaults = Config()
    for field in fields(Config):
        value = getattr(config, field.name)
        expected = type(getattr(defaults, field.name))
        # exact match: bool is an int subclass
        if type(value) is not expected:
            raise TypeError(f"{field.name} must be {expected.__name__}, got {value!r}")


def get_config_dir() -> Path:
    """Get the unitgen configuration directory."""
    return Path.home() / ".unitgen"


def get_config_path() -> Path:
    """Get the path to the config file."""
    return get_config_dir() / "config.json"


def load_config() -> Config:
    """Load configuration from file, or return defaults."""
    config_path = get_config_path()
    if not config_path.exists():
        return Config()

    try:
        data = json.loads(config_path.read_text(encoding="utf-8"))
        config = Config(**data)
        _check_types(config)
    except (json.JSONDecodeError, TypeError, ValueError) as e:
        console.print(
            f"[yellow]Warning: Failed to load config ({escape(str(e))}), using defaults[/yellow]"
        )
        return Config()

    try:
        validate_restart_policy(config.restart_policy)
    except RestartPolicyError as e:
        console.print(
            f"[yellow]Warning: {escape(str(e))}, using '{DEFAULT_RESTART_POLICY}'[/yellow]"
        )
        config.restart_policy = DEFAULT_RESTART_POLICY
    return config


def save_config(config: Config) -> None:
    """Save configuration to file."""
    config_dir = get_config_dir()
    config_dir.mkdir(parents=True, exist_ok=True)

    get_config_path().write_text(
        json.dumps(asdict(config), indent=2, ensure_ascii=False),
        encoding="utf-8",
    )
