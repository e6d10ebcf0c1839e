"""Configuration loading from TOML files and environment variables."""

import contextlib
import os
import tomllib
from pathlib import Path

from pydantic import ValidationError

from mention_search.config.defaults import (
    DEFAULT_CONFIG_TOML,
    ENV_INCLUDE_HIDDEN,
    ENV_LOG_LEVEL,
    ENV_MAX_RESULTS,
    ENV_NO_CACHE,
    get_config_path,
)
from mention_search.config.schema import MentionSearchConfig
from mention_search.exceptions import (
    ConfigError,
    ConfigNotFoundError,
    ConfigValidationError,
)

# Global config instance (singleton)
_config: MentionSearchConfig | None = None

_TRUTHY = ("1", "true", "yes", "on")


def load_config(
    config_path: Path | None = None,
    *,
    create_if_missing: bool = True,
) -> MentionSearchConfig:
    """Load configuration from a TOML file and environment variables.

    Args:
        config_path: Path to config file. If None, uses default.
        create_if_missing: Create default config if file doesn't exist.

    Returns:
        Loaded and validated configuration.

    Raises:
        ConfigError: If configuration cannot be loaded.
        ConfigValidationError: If configuration is invalid.
    """
    path = config_path or get_config_path()

    if not path.exists():
        if create_if_missing:
            try:
                path.parent.mkdir(parents=True, exist_ok=True)
                path.write_text(DEFAULT_CONFIG_TOML, encoding="utf-8")
            except OSError as e:
                raise ConfigError(f"Failed to create config at {path}: {e}") from e
        else:
            # Return default config without file
            return _apply_env_overrides(MentionSearchConfig())

    try:
        with open(path, "rb") as f:
            data = tomllib.load(f)
    except FileNotFoundError as e:
        raise ConfigNotFoundError(f"Config file disappeared: {path}") from e
    except (OSError, tomllib.TOMLDecodeError) as e:
        raise ConfigError(f"Failed to load config from {path}: {e}") from e

    try:
        config = MentionSearchConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigValidationError(f"Invalid configuration: {e}") from e

    return _apply_env_overrides(config)


def _apply_env_overrides(config: MentionSearchConfig) -> MentionSearchConfig:
    """Apply environment variable overrides to configuration."""
    log_level = os.environ.get(ENV_LOG_LEVEL)
    if log_level:
        config.logging.level = log_level.upper()

    max_results = os.environ.get(ENV_MAX_RESULTS)
    if max_results:
        with contextlib.suppress(ValueError, ValidationError):
            config.search.max_results = int(max_results)

    include_hidden = os.environ.get(ENV_INCLUDE_HIDDEN)
    if include_hidden:
        config.search.include_hidden = include_hidden.lower() in _TRUTHY

    no_cache = os.environ.get(ENV_NO_CACHE)
    if no_cache and no_cache.lower() in _TRUTHY:
        config.search.enable_caching = False

    return config


def get_config() -> MentionSearchConfig:
    """Get the current configuration (singleton).

    Loads config on first access, caches for subsequent calls.

    Returns:
        Current configuration.
    """
    global _config
    if _config is None:
        _config = load_config()
    return _config


def reload_config(config_path: Path | None = None) -> MentionSearchConfig:
    """Reload configuration from disk.

    Args:
        config_path: Path to config file. If None, uses default.

    Returns:
        Reloaded configuration.
    """
    global _config
    _config = load_config(config_path)
    return _config


def reset_config() -> None:
    """Reset the configuration singleton (mainly for testing)."""
    global _config
    _config = None
