"""File-system store for ``smart-skills.lock.json``.

Loading never fails because the file is missing: an empty version-1 lock
file is returned instead, and the file is created on the first save.

When no lock file exists but the legacy flat state file written by older
releases is present, ``load`` migrates it once: each legacy record becomes a
lock entry whose content hash is recomputed from the files currently
installed (or set to ``"unknown"`` if the directory is gone), the new lock
file is saved, and only then is the legacy file deleted. Later loads find the
lock file and never look at legacy state again.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from smartskills.core.hashing import compute_hash
from smartskills.core.layout import is_valid_skill_name, legacy_state_path, skill_dir
from smartskills.core.lockfile.models import (
    LOCK_FILE_NAME,
    UNKNOWN_CONTENT_HASH,
    SkillLockEntry,
    SkillsLockFile,
)
from smartskills.core.lockfile.serialization import deserialize, serialize

logger = logging.getLogger(__name__)


class LockFileStore:
    """Reads and writes the lock file at a project root.

    Args:
        install_dir: Skills root relative to the project, used to find the
            legacy state file and the directories it describes.
    """

    def __init__(self, install_dir: str | Path | None = None) -> None:
        self._install_dir = install_dir

    def lock_path(self, project_root: Path) -> Path:
        return Path(project_root) / LOCK_FILE_NAME

    def load(self, project_root: Path) -> SkillsLockFile:
        """Load the lock file for *project_root*, migrating legacy state once.

        Raises:
            LockFileError: If the lock file is malformed or has an
                unsupported version.
        """
        path = self.lock_path(project_root)
        if path.is_file():
            logger.debug("Loading lock file from %s", path)
            return deserialize(path.read_text(encoding="utf-8"))

        legacy = legacy_state_path(Path(project_root), self._install_dir)
        if legacy.is_file():
            return self._migrate_legacy(Path(project_root), legacy)

        logger.debug("Lock file not found at %s, returning empty lock file", path)
        return SkillsLockFile()

    def save(self, project_root: Path, lock_file: SkillsLockFile) -> None:
        """Write *lock_file* as canonical JSON, replacing any previous file."""
        path = self.lock_path(project_root)
        path.parent.mkdir(parents=True, exist_ok=True)
        tmp = path.with_name(path.name + ".tmp")
        tmp.write_text(serialize(lock_file), encoding="utf-8")
        tmp.replace(path)
        logger.debug("Saved lock file to %s", path)

    # -- Legacy migration ---------------------------------------------------

    def _migrate_legacy(self, project_root: Path, legacy: Path) -> SkillsLockFile:
        try:
            records = _read_legacy_records(legacy)
        except (OSError, ValueError) as exc:
            logger.warning("Ignoring unreadable legacy state file %s: %s", legacy, exc)
            return SkillsLockFile()

        lock_file = SkillsLockFile()
        for record in records:
            name = record.get("name")
            skill_path = record.get("sourceUrl") or record.get("skillPath")
            if not isinstance(name, str) or not isinstance(skill_path, str) or not skill_path:
                logger.warning("Skipping legacy record without name or source: %r", record)
                continue
            if not is_valid_skill_name(name):
                logger.warning("Skipping legacy record with invalid name: %r", name)
                continue

            installed = skill_dir(project_root, name, self._install_dir)
            content_hash = compute_hash(installed) if installed.is_dir() else UNKNOWN_CONTENT_HASH
            language = record.get("language")
            lock_file.skills[name] = SkillLockEntry(
                remote_url=str(record.get("remoteUrl") or record.get("repoUrl") or ""),
                skill_path=skill_path,
                commit_sha=str(record.get("commitSha") or ""),
                local_content_hash=content_hash,
                ecosystem=language if isinstance(language, str) else None,
            )

        self.save(project_root, lock_file)
        legacy.unlink()
        logger.info(
            "Migrated %d skills from legacy state file %s to %s",
            len(lock_file.skills), legacy, self.lock_path(project_root),
        )
        return lock_file


def _read_legacy_records(path: Path) -> list[dict[str, Any]]:
    data = json.loads(path.read_text(encoding="utf-8"))
    if isinstance(data, dict):
        data = data.get("skills", [])
    if not isinstance(data, list):
        raise ValueError("legacy state must be a JSON array of installed skills")
    return [item for item in data if isinstance(item, dict)]
