"""Default configuration values and paths."""

import os
from pathlib import Path
from typing import Final

# Default directories
DEFAULT_CONFIG_DIR: Final[Path] = Path.home() / ".config" / "mention-search"

# Default file paths
DEFAULT_CONFIG_FILE: Final[Path] = DEFAULT_CONFIG_DIR / "config.toml"

# Environment variable names
ENV_CONFIG_PATH: Final[str] = "MENTION_SEARCH_CONFIG"
ENV_LOG_LEVEL: Final[str] = "MENTION_SEARCH_LOG_LEVEL"
ENV_MAX_RESULTS: Final[str] = "MENTION_SEARCH_MAX_RESULTS"
ENV_INCLUDE_HIDDEN: Final[str] = "MENTION_SEARCH_INCLUDE_HIDDEN"
ENV_NO_CACHE: Final[str] = "MENTION_SEARCH_NO_CACHE"

# Default config content (TOML)
DEFAULT_CONFIG_TOML: Final[str] = """\
# mention-search configuration

[search]
max_depth = 10
max_results = 50
include_extensions = []
exclude_extensions = [
    "exe", "dll", "so", "dylib", "a", "o", "obj", "bin",
    "class", "jar", "war", "pyc", "pyo", "pyd",
]
respect_gitignore = true
include_hidden = false
min_score_threshold = 0.1
enable_caching = true
cache_refresh_interval = 5  # seconds

[output]
default_format = "rich"
color = true
show_scores = true

[logging]
level = "WARNING"
json_format = false
"""


def get_config_path() -> Path:
    """Get the configuration file path."""
    env_path = os.environ.get(ENV_CONFIG_PATH)
    if env_path:
        return Path(env_path)
    return DEFAULT_CONFIG_FILE
