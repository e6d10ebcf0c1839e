"""Pytest fixtures for mention-search tests."""

import tempfile
from collections.abc import Callable, Generator
from pathlib import Path

import pytest

from mention_search.config import reset_config
from mention_search.config.defaults import ENV_CONFIG_PATH
from mention_search.config.schema import SearchConfig


def _write_files(root: Path, *relative_paths: str) -> Path:
    """Create empty files (and their parent directories) under root."""
    for relative_path in relative_paths:
        path = root / relative_path
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text("")
    return root


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir).resolve()


@pytest.fixture
def sample_project(temp_dir: Path) -> Path:
    """Create a small project tree with ignored and hidden content."""
    _write_files(
        temp_dir,
        "README.md",
        "main.py",
        "src/main.x",
        "src/lib.x",
        "src/utils/helpers.py",
        "docs/guide.md",
        "target/build.x",
        "node_modules/pkg/index.js",
        ".env",
        ".git/HEAD",
    )
    return temp_dir


@pytest.fixture
def default_config() -> SearchConfig:
    """Get default search configuration."""
    return SearchConfig()


@pytest.fixture(autouse=True)
def reset_config_fixture(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path
) -> Generator[None, None, None]:
    """Reset config singleton and keep tests away from the user's config."""
    monkeypatch.setenv(ENV_CONFIG_PATH, str(tmp_path / "config" / "config.toml"))
    reset_config()
    yield
    reset_config()


@pytest.fixture
def config_file(temp_dir: Path) -> Path:
    """Create a test config file."""
    config_path = temp_dir / "config.toml"
    config_path.write_text("""
[search]
max_results = 20
max_depth = 4
include_extensions = [".PY", "md"]
min_score_threshold = 0.3

[output]
default_format = "plain"
show_scores = false

[logging]
level = "DEBUG"
""")
    return config_path


@pytest.fixture
def make_files() -> Callable[..., Path]:
    """Factory creating empty files under a root: make_files(root, "a/b.x")."""
    return _write_files
