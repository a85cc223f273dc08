"""
Configuration file loader for ctxgen.

Supports loading configuration from:
- ctxgen.toml / .ctxgen.toml

CLI flags override config file values.
"""

from __future__ import annotations

import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from rich.console import Console
from rich.markup import escape

from .config import DEFAULT_CONTEXT_DIR, DEFAULT_OUTPUT_DIR, GeneratorConfig
from .errors import ConfigError

err_console = Console(stderr=True)

# Config file search order (first found wins)
CONFIG_FILE_NAMES = [
    "ctxgen.toml",
    ".ctxgen.toml",
]


@dataclass
class ProjectConfig:
    """
    Project-level configuration loaded from a config file.

    All fields are optional - CLI flags will override any values set here.
    """

    context_dir: Path | None = None
    output_dir: Path | None = None

    # Source file path (for debugging)
    config_file: Path | None = field(default=None, repr=False)


def find_config_file(search_dir: Path) -> Path | None:
    """
    Find a configuration file in a directory.

    Args:
        search_dir: Directory to look in (usually the working directory)

    Returns:
        Path to the config file, or None if not found
    """
    for name in CONFIG_FILE_NAMES:
        config_path = search_dir / name
        if config_path.exists() and config_path.is_file():
            return config_path
    return None


def _parse_toml(path: Path) -> dict[str, Any]:
    """Parse a TOML config file into a dict.

    Supports both flat keys and a nested ``[ctxgen]`` table.
    """
    with open(path, "rb") as f:
        data: dict[str, Any] = tomllib.load(f)

    if "ctxgen" in data and isinstance(data["ctxgen"], dict):
        return dict(data["ctxgen"])
    return data


def _resolve_relative(value: Any, base_dir: Path) -> Path:
    path = Path(str(value))
    if path.is_absolute():
        return path
    return base_dir / path


def load_config(search_dir: Path, config_path: Path | None = None) -> ProjectConfig:
    """
    Load configuration from a config file.

    An explicitly requested file must exist and parse. An auto-discovered file
    that fails to parse is ignored with a warning.

    Args:
        search_dir: Directory searched when `config_path` is not given
        config_path: Explicit path to config file (optional)

    Returns:
        ProjectConfig with loaded values (unset values remain None).

    Raises:
        ConfigError: If the explicit config file is missing or invalid
    """
    explicit = config_path is not None

    if config_path is None:
        config_path = find_config_file(search_dir)

    if config_path is None:
        return ProjectConfig()

    if not config_path.is_file():
        raise ConfigError(f"Config file '{config_path}' does not exist")

    try:
        data = _parse_toml(config_path)
    except (OSError, UnicodeDecodeError, tomllib.TOMLDecodeError) as e:
        if explicit:
            raise ConfigError(f"Invalid config file '{config_path}'") from e
        err_console.print(
            f"[yellow]Warning: Ignoring invalid config file {escape(str(config_path))}: "
            f"{escape(str(e))}[/yellow]",
            soft_wrap=True,
        )
        return ProjectConfig()

    config = ProjectConfig(config_file=config_path)

    # Relative paths are relative to the config file, not the caller
    base_dir = config_path.parent
    if "context_dir" in data:
        config.context_dir = _resolve_relative(data["context_dir"], base_dir)
    if "output_dir" in data:
        config.output_dir = _resolve_relative(data["output_dir"], base_dir)

    return config


def merge_cli_with_config(
    config: ProjectConfig,
    *,
    # CLI arguments (None means not specified on CLI)
    context_dir: Path | None = None,
    output_dir: Path | None = None,
) -> GeneratorConfig:
    """Merge CLI arguments with config file values (CLI wins).

    Args:
        config: Config loaded from file (may have unset values).
        context_dir: CLI override for the context directory (optional).
        output_dir: CLI override for the output directory (optional).

    Returns:
        The GeneratorConfig used by the pipeline.
    """
    # Context dir
    if context_dir is not None:
        resolved_context_dir = context_dir
    elif config.context_dir is not None:
        resolved_context_dir = config.context_dir
    else:
        resolved_context_dir = DEFAULT_CONTEXT_DIR

    # Output dir
    if output_dir is not None:
        resolved_output_dir = output_dir
    elif config.output_dir is not None:
        resolved_output_dir = config.output_dir
    else:
        resolved_output_dir = DEFAULT_OUTPUT_DIR

    return GeneratorConfig(context_dir=resolved_context_dir, output_dir=resolved_output_dir)
