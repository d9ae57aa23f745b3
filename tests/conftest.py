"""Shared fixtures for the test suite."""

from pathlib import Path
from typing import Callable, Dict, Generator
from unittest.mock import patch

import pytest

from vanilla_web_lint.config_paths import ENV_CONFIG_PATH


@pytest.fixture(autouse=True)
def isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Generator[Path, None, None]:
    """Keep tests away from the real user config and any project config above the checkout."""
    user_dir = tmp_path / "user-config"
    workdir = tmp_path / "work"
    workdir.mkdir()
    monkeypatch.delenv(ENV_CONFIG_PATH, raising=False)
    monkeypatch.chdir(workdir)
    with patch("vanilla_web_lint.config_paths.platformdirs") as fake_platformdirs:
        fake_platformdirs.user_config_dir.return_value = str(user_dir)
        yield workdir


@pytest.fixture
def make_project(isolated_config: Path) -> Callable[[Dict[str, str]], Path]:
    """Create files under the working directory from a ``{relative path: content}`` mapping."""

    def _make(files: Dict[str, str]) -> Path:
        for relative, content in files.items():
            target = isolated_config / relative
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(content, encoding="utf-8")
        return isolated_config

    return _make
