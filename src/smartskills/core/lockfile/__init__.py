"""Skill lock file --- durable record of what is installed and from where.

The package is split into focused submodules:

- ``models``: ``SkillLockEntry`` and ``SkillsLockFile`` data classes.
- ``serialization``: canonical JSON ``serialize``/``deserialize`` with the
  schema version gate.
- ``store``: ``LockFileStore`` reading and writing
  ``smart-skills.lock.json`` at a project root, including one-time legacy
  migration.
"""

from __future__ import annotations

from smartskills.core.lockfile.models import (
    LOCK_FILE_NAME,
    LOCK_FILE_VERSION,
    UNKNOWN_CONTENT_HASH,
    SkillLockEntry,
    SkillsLockFile,
)
from smartskills.core.lockfile.serialization import deserialize, serialize
from smartskills.core.lockfile.store import LockFileStore

__all__ = [
    "LOCK_FILE_NAME",
    "LOCK_FILE_VERSION",
    "UNKNOWN_CONTENT_HASH",
    "LockFileStore",
    "SkillLockEntry",
    "SkillsLockFile",
    "deserialize",
    "serialize",
]
