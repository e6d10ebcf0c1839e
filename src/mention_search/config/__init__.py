"""Configuration management."""

from mention_search.config.loader import (
    get_config,
    load_config,
    reload_config,
    reset_config,
)
from mention_search.config.schema import (
    LoggingConfig,
    MentionSearchConfig,
    OutputConfig,
    OutputFormat,
    SearchConfig,
)

__all__ = [
    "LoggingConfig",
    "MentionSearchConfig",
    "OutputConfig",
    "OutputFormat",
    "SearchConfig",
    "get_config",
    "load_config",
    "reload_config",
    "reset_config",
]
