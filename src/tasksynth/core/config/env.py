"""Environment loading helpers.

API keys usually live in .env files rather than in config JSON. Files are
layered so that:

  os.environ (pre-existing) > project .env > user .env

A .env file never overrides a variable already exported in the shell.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Iterable

from dotenv import dotenv_values


def get_user_env_paths() -> list[Path]:
    """Default user-level .env locations."""
    xdg_home = os.environ.get("XDG_CONFIG_HOME") or str(Path.home() / ".config")
    return [Path(xdg_home) / "tasksynth" / ".env"]


def get_project_env_paths(project_dir: Path | None = None) -> list[Path]:
    """Default project-level .env locations, later files winning."""
    base = project_dir if project_dir is not None else Path.cwd()
    return [base / ".env", base / ".env.local"]


def read_env_files(paths: Iterable[Path]) -> dict[str, str]:
    """Merge the key/value pairs of several .env files; later files win.

    Missing files and keys without a value are skipped.
    """
    merged: dict[str, str] = {}
    for path in paths:
        path = Path(path)
        if not path.is_file():
            continue
        merged.update({k: v for k, v in dotenv_values(path).items() if k and v is not None})
    return merged


def load_layered_env(
    *,
    project_dir: Path | None = None,
    user_env_paths: Iterable[Path] | None = None,
    project_env_paths: Iterable[Path] | None = None,
) -> None:
    """Load environment variables from user and project .env files.

    Args:
        project_dir: base directory for project env paths (defaults to cwd)
        user_env_paths: explicit user env file paths
        project_env_paths: explicit project env file paths
    """
    if user_env_paths is None:
        user_env_paths = get_user_env_paths()
    if project_env_paths is None:
        project_env_paths = get_project_env_paths(project_dir)

    values = read_env_files([*user_env_paths, *project_env_paths])
    for key, value in values.items():
        os.environ.setdefault(key, value)
