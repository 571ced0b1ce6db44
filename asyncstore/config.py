"""Configuration and logging setup."""

import logging
import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Literal, get_args

import msgspec
import yaml


class ConfigError(ValueError):
    """Raised when configuration cannot be loaded or validated."""

    pass


LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
LOG_LEVELS: tuple[str, ...] = get_args(LogLevel)


class StorageConfig(msgspec.Struct, frozen=True, forbid_unknown_fields=True):
    """Settings for building a storage instance."""

    backend: str = "memory"
    log_level: LogLevel = "INFO"


class Config:
    """Configuration file handling."""

    @staticmethod
    def from_file(path: Path) -> dict[str, Any]:
        """Load configuration from a YAML file."""
        try:
            with open(path) as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML in config file {path}: {e}") from e
        except OSError as e:
            raise ConfigError(f"Error reading config file {path}: {e}") from e

        if not isinstance(data, dict):
            raise ConfigError(f"Config file {path} must contain a mapping")
        return data

    @staticmethod
    def get_config_paths() -> list[Path]:
        """Get the configuration file paths, lowest precedence first."""
        paths = []

        # User config
        xdg_config_home = Path(
            os.environ.get("XDG_CONFIG_HOME", Path.home() / ".config")
        )
        paths.append(xdg_config_home / "asyncstore" / "config.yaml")

        # Project config
        paths.append(Path(".asyncstore.yaml"))
        paths.append(Path("asyncstore.yaml"))

        return paths

    @staticmethod
    def merge_configs(*configs: Mapping[str, Any]) -> dict[str, Any]:
        """Merge configuration mappings; later ones win."""
        result: dict[str, Any] = {}
        for config in configs:
            result.update(config)
        return result


def load_config(
    paths: list[Path] | None = None, env: Mapping[str, str] | None = None
) -> StorageConfig:
    """Load configuration from files and environment variables.

    Args:
        paths: Files to read, lowest precedence first. Missing files are
            skipped. Defaults to :meth:`Config.get_config_paths`.
        env: Environment to read overrides from. Defaults to ``os.environ``.

    Raises:
        ConfigError: If a file is malformed or a value is invalid.
    """
    if paths is None:
        paths = Config.get_config_paths()
    if env is None:
        env = os.environ

    config: dict[str, Any] = {}
    for path in paths:
        if path.exists():
            config = Config.merge_configs(config, Config.from_file(path))

    # Override with environment variables
    env_overrides = {}
    if backend := env.get("ASYNCSTORE_BACKEND"):
        env_overrides["backend"] = backend
    if log_level := env.get("ASYNCSTORE_LOG_LEVEL"):
        env_overrides["log_level"] = log_level.upper()

    merged = Config.merge_configs(config, env_overrides)
    try:
        return msgspec.convert(merged, StorageConfig)
    except msgspec.ValidationError as e:
        raise ConfigError(f"Invalid configuration: {e}") from e


def setup_logging(
    level: str = "INFO", quiet: bool = False, debug: bool = False
) -> None:
    """Configure logging for applications embedding the storage layer.

    Raises:
        ConfigError: If ``level`` is not a known log level name.
    """
    if level.upper() not in LOG_LEVELS:
        raise ConfigError(
            f"Invalid log level: {level!r} (expected one of {', '.join(LOG_LEVELS)})"
        )

    if quiet:
        resolved = logging.WARNING
    elif debug:
        resolved = logging.DEBUG
    else:
        resolved = getattr(logging, level.upper())

    logging.basicConfig(
        level=resolved,
        format="%(levelname)s: %(message)s"
        if not debug
        else "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
