"""TOML configuration loader with deep merge support."""

import os
import tomllib
from pathlib import Path
from typing import Any


def get_config_dir() -> Path:
    """Get the configuration directory path.

    The config directory can be overridden with FORMLOGIC_CONFIG_DIR env var.
    Defaults to 'config/' in the current directory or one of its parents.
    """
    config_dir_env = os.environ.get("FORMLOGIC_CONFIG_DIR")
    if config_dir_env:
        path = Path(config_dir_env)
        if not path.exists():
            raise FileNotFoundError(f"Config directory not found: {config_dir_env}")
        return path

    current = Path.cwd()
    for _ in range(5):  # Look up to 5 levels
        config_path = current / "config"
        if config_path.exists():
            return config_path
        current = current.parent

    return Path("config")


def get_environment() -> str:
    """Get the current environment from FORMLOGIC_ENV.

    Defaults to 'development' if not set.
    """
    return os.environ.get("FORMLOGIC_ENV", "development")


def load_toml(file_path: Path) -> dict[str, Any]:
    """Load a TOML file and return its contents as a dictionary.

    Raises:
        FileNotFoundError: If the file doesn't exist
        tomllib.TOMLDecodeError: If the TOML syntax is invalid
    """
    if not file_path.exists():
        raise FileNotFoundError(f"Configuration file not found: {file_path}")

    with file_path.open("rb") as f:
        return tomllib.load(f)


def deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Deep merge two dictionaries, with override taking precedence.

    For nested dictionaries, values are merged recursively.
    For other values, override replaces base.
    """
    result = base.copy()

    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = deep_merge(result[key], value)
        else:
            result[key] = value

    return result


def load_config(config_dir: Path | None = None, env: str | None = None) -> dict[str, Any]:
    """Load configuration from TOML files.

    Loading order:
    1. default.toml (optional; defaults in code apply without it)
    2. {env}.toml (optional)

    Args:
        config_dir: Directory holding the TOML files (located with
            get_config_dir when omitted)
        env: Environment name (FORMLOGIC_ENV when omitted)

    Returns:
        Merged configuration dictionary
    """
    config_dir = config_dir if config_dir is not None else get_config_dir()
    env = env or get_environment()

    config: dict[str, Any] = {}
    for path in (config_dir / "default.toml", config_dir / f"{env}.toml"):
        if path.exists():
            config = deep_merge(config, load_toml(path))

    return config
