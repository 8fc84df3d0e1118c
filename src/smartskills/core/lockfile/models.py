"""Lock file data models --- SkillLockEntry and SkillsLockFile.

Pure data holders with no I/O, safe to import from anywhere without
circular-dependency concerns.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field

LOCK_FILE_NAME = "smart-skills.lock.json"
LOCK_FILE_VERSION = 1

# Recorded when a migrated skill has no installed directory to hash.
UNKNOWN_CONTENT_HASH = "unknown"

_CONTENT_HASH_RE = re.compile(r"^sha256:[0-9a-f]{64}$")


@dataclass
class SkillLockEntry:
    """Fetch coordinates and expected integrity of one installed skill.

    ``commit_sha`` and ``local_content_hash`` together distinguish "remote
    changed" from "local files were hand-edited" without a full diff.

    Attributes:
        remote_url: Repository URL the skill was fetched from.
        skill_path: Path of the skill directory inside that repository.
        commit_sha: Most recent remote commit touching ``skill_path`` at
            the last synchronization.
        local_content_hash: Expected ``sha256:<hex>`` digest of the installed
            files at ``commit_sha``.
        ecosystem: Ecosystem filter of the matching registry entry. Persisted
            as ``language`` and omitted when None.
    """

    remote_url: str
    skill_path: str
    commit_sha: str
    local_content_hash: str
    ecosystem: str | None = None

    @property
    def has_known_hash(self) -> bool:
        """False for migrated entries whose content could not be hashed."""
        return _CONTENT_HASH_RE.match(self.local_content_hash) is not None


@dataclass
class SkillsLockFile:
    """In-memory form of ``smart-skills.lock.json``.

    Attributes:
        version: Schema version. Only ``LOCK_FILE_VERSION`` is accepted.
        skills: Skill name to lock entry. Serialized in ordinal key order
            regardless of insertion order.
    """

    version: int = LOCK_FILE_VERSION
    skills: dict[str, SkillLockEntry] = field(default_factory=dict)

    @property
    def skill_names(self) -> list[str]:
        """Return skill names in ordinal order."""
        return sorted(self.skills)
