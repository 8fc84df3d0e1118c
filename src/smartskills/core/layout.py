"""On-disk layout of installed skills within a project."""

from __future__ import annotations

from pathlib import Path

DEFAULT_INSTALL_DIR = Path(".agents") / "skills"

# Flat state file written by releases that predate the lock file.
LEGACY_STATE_FILE_NAME = ".agents-skills-state.json"


def is_valid_skill_name(name: str | None) -> bool:
    """True if *name* can be used as a single directory under the skills root."""
    if not name or name in (".", ".."):
        return False
    return "/" not in name and "\\" not in name and ":" not in name


def skills_root(project_root: Path, install_dir: str | Path | None = None) -> Path:
    """Directory holding one subdirectory per installed skill."""
    return project_root / (install_dir or DEFAULT_INSTALL_DIR)


def skill_dir(project_root: Path, skill_name: str, install_dir: str | Path | None = None) -> Path:
    """Directory owned by a single installed skill."""
    return skills_root(project_root, install_dir) / skill_name


def legacy_state_path(project_root: Path, install_dir: str | Path | None = None) -> Path:
    return skills_root(project_root, install_dir) / LEGACY_STATE_FILE_NAME
