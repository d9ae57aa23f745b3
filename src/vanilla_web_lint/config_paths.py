"""Configuration path handling for the linter.

This module implements path resolution for config files. User-wide settings
follow the XDG Base Directory Specification through platformdirs, and
project files are found by walking up from the working directory.
"""

import os
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

import platformdirs

from .logging import get_logger

logger = get_logger(__name__)

# Application name used for directory paths
APP_NAME = "vanilla-web-lint"

# Environment variable names
ENV_CONFIG_PATH = "VWL_CONFIG_PATH"

# Default filenames
DEFAULT_CONFIG_FILENAME = "default.yml"
USER_CONFIG_FILENAME = "config.yml"
PROJECT_CONFIG_FILENAMES = (".vanilla-web-lint.yml", "vanilla-web-lint.yml")

SOURCE_EXPLICIT = "CLI flag (--config)"
SOURCE_ENV = f"Environment variable ({ENV_CONFIG_PATH})"
SOURCE_PROJECT = "Project file"
SOURCE_USER = "User config directory"
SOURCE_DEFAULT = "Bundled default"


def get_package_config_dir() -> Path:
    """Get the path to the directory holding the bundled default config."""
    return Path(__file__).parent / "defaults"


def get_default_config_path() -> Path:
    return get_package_config_dir() / DEFAULT_CONFIG_FILENAME


def get_user_config_dir() -> Path:
    """Get the path to the user's config directory for this application."""
    return Path(platformdirs.user_config_dir(APP_NAME))


def ensure_user_config_dir_exists() -> None:
    """Ensure that the user config directory exists.

    Raises:
        OSError: If the directory cannot be created due to permission errors or other IO issues
        PermissionError: If the directory exists but is not writable
    """
    user_dir = get_user_config_dir()

    if user_dir.exists():
        if not os.access(user_dir, os.W_OK):
            raise PermissionError(f"Config directory exists but is not writable: {user_dir}")
        return

    os.makedirs(user_dir, exist_ok=True)

    if not os.access(user_dir, os.W_OK):
        raise PermissionError(f"Created config directory but it is not writable: {user_dir}")


def copy_default_config(target: Path) -> bool:
    """Copy the bundled default config to ``target`` if nothing is there yet.

    Args:
        target: Destination file

    Returns:
        True if the file was written, False if it already existed

    Raises:
        OSError: If the file cannot be written
    """
    if target.exists():
        return False
    try:
        target.write_bytes(get_default_config_path().read_bytes())
    except OSError as e:
        logger.error(f"Failed to write config file {target}: {e}")
        raise
    return True


def copy_default_to_user_config() -> bool:
    """Seed the user config directory with the bundled default config.

    Returns:
        True if the file was copied, False if it already existed

    Raises:
        OSError: If there is an error creating the directory or copying the file
    """
    user_file = get_user_config_dir() / USER_CONFIG_FILENAME
    if user_file.exists():
        return False

    try:
        ensure_user_config_dir_exists()
    except OSError as e:
        logger.error(f"Failed to create user config directory: {e}")
        raise

    return copy_default_config(user_file)


def find_project_config(start: Optional[Path] = None) -> Optional[Path]:
    """Walk up from ``start`` looking for a project config file.

    Args:
        start: Directory to start from (defaults to the working directory)

    Returns:
        Path of the first project config found, or None
    """
    current = (start or Path.cwd()).resolve()
    for directory in (current, *current.parents):
        for filename in PROJECT_CONFIG_FILENAMES:
            candidate = directory / filename
            if candidate.is_file():
                return candidate
    return None


def resolve_config_path(explicit: Optional[str] = None, cwd: Optional[Path] = None) -> Tuple[Path, str]:
    """Get the config file to use and where it came from.

    Resolution order: explicit path, environment variable, project file,
    user config directory, bundled default.

    Args:
        explicit: Path given on the command line; returned as-is even if missing
        cwd: Directory to start the project file search from

    Returns:
        Tuple of (path, source description)
    """
    # 1. Explicit path
    if explicit:
        return Path(explicit), SOURCE_EXPLICIT

    # 2. Environment variable
    env_path = os.environ.get(ENV_CONFIG_PATH)
    if env_path and Path(env_path).is_file():
        return Path(env_path), SOURCE_ENV

    # 3. Project file
    project = find_project_config(cwd)
    if project is not None:
        return project, SOURCE_PROJECT

    # 4. User config directory
    user_path = get_user_config_dir() / USER_CONFIG_FILENAME
    if user_path.is_file():
        return user_path, SOURCE_USER

    # 5. Fall back to package directory
    return get_default_config_path(), SOURCE_DEFAULT


def describe_config_sources(explicit: Optional[str] = None, cwd: Optional[Path] = None) -> List[Dict[str, Any]]:
    """List every config source in precedence order with its status."""
    active_path, active_source = resolve_config_path(explicit, cwd)
    env_value = os.environ.get(ENV_CONFIG_PATH)
    project = find_project_config(cwd)
    candidates = [
        (SOURCE_EXPLICIT, Path(explicit) if explicit else None),
        (SOURCE_ENV, Path(env_value) if env_value else None),
        (SOURCE_PROJECT, project),
        (SOURCE_USER, get_user_config_dir() / USER_CONFIG_FILENAME),
        (SOURCE_DEFAULT, get_default_config_path()),
    ]
    return [
        {
            "source": source,
            "path": str(path) if path is not None else None,
            "exists": bool(path is not None and path.is_file()),
            "active": source == active_source,
        }
        for source, path in candidates
    ]
