"""
.env support for tasklist settings.

Only TASKLIST_* variables are read from .env files; anything else in
them is left alone so a shared project .env cannot leak unrelated
settings into the server process.

Precedence (highest to lowest):
    1. Variables already exported in the shell
    2. Project .env.local, then .env
    3. User .env next to the user config (~/.config/tasklist/.env)
"""

import logging
import os
from pathlib import Path

from dotenv import dotenv_values

from .loader import get_user_config_path

logger = logging.getLogger(__name__)

ENV_PREFIX = "TASKLIST_"
PROJECT_ENV_FILES = (".env", ".env.local")


def get_user_env_path() -> Path:
    """Path to the user .env file, alongside the user config.json."""
    return get_user_config_path().with_name(".env")


def read_tasklist_env(path: Path) -> dict[str, str]:
    """
    Read TASKLIST_* assignments from a .env file.

    Returns an empty dict if the file does not exist. Keys without a
    value (a bare ``TASKLIST_X`` line) are skipped.
    """
    if not path.is_file():
        return {}
    return {
        key: value
        for key, value in dotenv_values(path).items()
        if key.startswith(ENV_PREFIX) and value is not None
    }


def load_layered_env(
    project_dir: Path | None = None,
    user_env_path: Path | None = None,
) -> dict[str, str]:
    """
    Export TASKLIST_* values from the user and project .env files.

    Later files override earlier ones; the shell environment overrides
    all of them.

    Args:
        project_dir: Directory holding .env/.env.local (defaults to cwd)
        user_env_path: User .env file (defaults to get_user_env_path())

    Returns:
        The variables that were exported into os.environ
    """
    if project_dir is None:
        project_dir = Path.cwd()
    if user_env_path is None:
        user_env_path = get_user_env_path()

    merged: dict[str, str] = {}
    for path in [user_env_path, *(project_dir / name for name in PROJECT_ENV_FILES)]:
        merged.update(read_tasklist_env(path))

    exported = {key: value for key, value in merged.items() if key not in os.environ}
    os.environ.update(exported)

    if exported:
        logger.debug("Loaded %s from .env files", ", ".join(sorted(exported)))
    return exported
