"""Tests for the config_paths module."""

import os
from pathlib import Path

import pytest

from vanilla_web_lint.config_paths import (
    APP_NAME,
    ENV_CONFIG_PATH,
    SOURCE_DEFAULT,
    SOURCE_ENV,
    SOURCE_EXPLICIT,
    SOURCE_PROJECT,
    SOURCE_USER,
    USER_CONFIG_FILENAME,
    copy_default_config,
    copy_default_to_user_config,
    describe_config_sources,
    ensure_user_config_dir_exists,
    find_project_config,
    get_default_config_path,
    get_user_config_dir,
    resolve_config_path,
)


def test_default_config_is_bundled() -> None:
    """Test that the default config ships inside the package."""
    path = get_default_config_path()
    assert path.is_file()
    assert path.parent.name == "defaults"


def test_user_config_dir_is_patched(tmp_path: Path) -> None:
    """Test that the user config directory comes from platformdirs."""
    assert get_user_config_dir() == tmp_path / "user-config"


def test_user_config_dir_contains_app_name() -> None:
    """Test that the real user config directory contains the app name."""
    import platformdirs

    assert APP_NAME in platformdirs.user_config_dir(APP_NAME)


def test_user_config_dir_is_created() -> None:
    """Test that the user config directory is created if it doesn't exist."""
    user_dir = get_user_config_dir()
    assert not user_dir.exists()

    ensure_user_config_dir_exists()

    assert user_dir.is_dir()


@pytest.mark.skipif(os.name == "nt" or os.geteuid() == 0, reason="permission bits are not enforced")
def test_unwritable_user_config_dir() -> None:
    """Test that a read-only user config directory is reported."""
    user_dir = get_user_config_dir()
    user_dir.mkdir(parents=True)
    user_dir.chmod(0o500)
    try:
        with pytest.raises(PermissionError):
            ensure_user_config_dir_exists()
    finally:
        user_dir.chmod(0o700)


def test_copy_default_to_user_config() -> None:
    """Test that the default config is copied once and never overwritten."""
    user_file = get_user_config_dir() / USER_CONFIG_FILENAME

    assert copy_default_to_user_config() is True
    assert user_file.read_bytes() == get_default_config_path().read_bytes()

    user_file.write_text("fail_on: warning\n", encoding="utf-8")
    assert copy_default_to_user_config() is False
    assert user_file.read_text(encoding="utf-8") == "fail_on: warning\n"


def test_copy_default_config_keeps_existing(tmp_path: Path) -> None:
    """Test that an existing target file is left alone."""
    target = tmp_path / "existing.yml"
    target.write_text("rules: {}\n", encoding="utf-8")
    assert copy_default_config(target) is False
    assert target.read_text(encoding="utf-8") == "rules: {}\n"


def test_find_project_config_walks_up(isolated_config: Path) -> None:
    """Test that the nearest project file above the start directory wins."""
    outer = isolated_config / ".vanilla-web-lint.yml"
    outer.write_text("{}\n", encoding="utf-8")
    nested = isolated_config / "site" / "pages"
    nested.mkdir(parents=True)

    assert find_project_config(nested) == outer.resolve()

    inner = isolated_config / "site" / "vanilla-web-lint.yml"
    inner.write_text("{}\n", encoding="utf-8")
    assert find_project_config(nested) == inner.resolve()


def test_find_project_config_prefers_dotfile(isolated_config: Path) -> None:
    """Test the filename order inside one directory."""
    (isolated_config / "vanilla-web-lint.yml").write_text("{}\n", encoding="utf-8")
    (isolated_config / ".vanilla-web-lint.yml").write_text("{}\n", encoding="utf-8")
    found = find_project_config()
    assert found is not None
    assert found.name == ".vanilla-web-lint.yml"


def test_resolve_defaults_to_bundled_config() -> None:
    """Test the fallback when nothing else is configured."""
    assert resolve_config_path() == (get_default_config_path(), SOURCE_DEFAULT)


def test_resolution_order(tmp_path: Path, isolated_config: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Test explicit > env > project > user > default."""
    user_file = get_user_config_dir() / USER_CONFIG_FILENAME
    user_file.parent.mkdir(parents=True)
    user_file.write_text("{}\n", encoding="utf-8")
    assert resolve_config_path() == (user_file, SOURCE_USER)

    project_file = isolated_config / ".vanilla-web-lint.yml"
    project_file.write_text("{}\n", encoding="utf-8")
    assert resolve_config_path() == (project_file.resolve(), SOURCE_PROJECT)

    env_file = tmp_path / "env.yml"
    env_file.write_text("{}\n", encoding="utf-8")
    monkeypatch.setenv(ENV_CONFIG_PATH, str(env_file))
    assert resolve_config_path() == (env_file, SOURCE_ENV)

    assert resolve_config_path("other.yml") == (Path("other.yml"), SOURCE_EXPLICIT)


def test_env_variable_pointing_nowhere_is_skipped(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Test that a missing env var target falls through to the next source."""
    monkeypatch.setenv(ENV_CONFIG_PATH, str(tmp_path / "missing.yml"))
    assert resolve_config_path()[1] == SOURCE_DEFAULT


def test_describe_config_sources(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Test the per-source listing used by `vwl config paths`."""
    env_file = tmp_path / "env.yml"
    env_file.write_text("{}\n", encoding="utf-8")
    monkeypatch.setenv(ENV_CONFIG_PATH, str(env_file))

    sources = describe_config_sources()

    assert [s["source"] for s in sources] == [
        SOURCE_EXPLICIT,
        SOURCE_ENV,
        SOURCE_PROJECT,
        SOURCE_USER,
        SOURCE_DEFAULT,
    ]
    by_source = {s["source"]: s for s in sources}
    assert by_source[SOURCE_EXPLICIT] == {"source": SOURCE_EXPLICIT, "path": None, "exists": False, "active": False}
    assert by_source[SOURCE_ENV]["active"] is True
    assert by_source[SOURCE_ENV]["exists"] is True
    assert by_source[SOURCE_PROJECT]["path"] is None
    assert by_source[SOURCE_DEFAULT]["exists"] is True
    assert sum(1 for s in sources if s["active"]) == 1
