"""Canonical JSON form of the lock file.

``serialize`` is deterministic: two-space indentation, every object's keys
sorted ordinally, ``language`` omitted rather than written as null, and a
trailing newline. ``serialize(deserialize(serialize(lf))) == serialize(lf)``
holds for every lock file, keeping version-control diffs minimal.

``deserialize`` gates on the schema version. There is no forward or backward
negotiation: a future schema must ship explicit migration code.
"""

from __future__ import annotations

import json
from typing import Any

from smartskills.core.lockfile.models import LOCK_FILE_VERSION, SkillLockEntry, SkillsLockFile
from smartskills.exceptions import LockFileError

_REQUIRED_FIELDS = ("remoteUrl", "skillPath", "commitSha", "localContentHash")


def to_dict(lock_file: SkillsLockFile) -> dict[str, Any]:
    """Convert a lock file to its JSON-ready dict."""
    skills: dict[str, Any] = {}
    for name in sorted(lock_file.skills):
        entry = lock_file.skills[name]
        item: dict[str, Any] = {
            "remoteUrl": entry.remote_url,
            "skillPath": entry.skill_path,
            "commitSha": entry.commit_sha,
            "localContentHash": entry.local_content_hash,
        }
        if entry.ecosystem is not None:
            item["language"] = entry.ecosystem
        skills[name] = item
    return {"version": lock_file.version, "skills": skills}


def serialize(lock_file: SkillsLockFile) -> str:
    """Serialize to canonical JSON text."""
    return json.dumps(to_dict(lock_file), indent=2, sort_keys=True, ensure_ascii=False) + "\n"


def from_dict(data: Any) -> SkillsLockFile:
    """Build a lock file from parsed JSON, validating version and shape.

    Raises:
        LockFileError: On an unsupported version or malformed entries.
    """
    if not isinstance(data, dict):
        raise LockFileError("Lock file root must be a JSON object.")

    version = data.get("version")
    if type(version) is not int or version != LOCK_FILE_VERSION:
        raise LockFileError(
            f"Unsupported lock file version: {version!r}. "
            f"Only version {LOCK_FILE_VERSION} is supported."
        )

    raw_skills = data.get("skills") or {}
    if not isinstance(raw_skills, dict):
        raise LockFileError("Lock file 'skills' must be a JSON object.")

    skills: dict[str, SkillLockEntry] = {}
    for name, raw in raw_skills.items():
        if not isinstance(raw, dict):
            raise LockFileError(f"Lock entry {name!r} must be a JSON object.")
        missing = [key for key in _REQUIRED_FIELDS if not isinstance(raw.get(key), str)]
        if missing:
            raise LockFileError(
                f"Lock entry {name!r} is missing required fields: {', '.join(missing)}"
            )
        language = raw.get("language")
        skills[name] = SkillLockEntry(
            remote_url=raw["remoteUrl"],
            skill_path=raw["skillPath"],
            commit_sha=raw["commitSha"],
            local_content_hash=raw["localContentHash"],
            ecosystem=language if isinstance(language, str) else None,
        )

    return SkillsLockFile(version=version, skills=skills)


def deserialize(text: str) -> SkillsLockFile:
    """Parse lock file JSON text.

    Raises:
        LockFileError: If the text is empty, not JSON, or fails validation.
    """
    if not text or not text.strip():
        raise LockFileError("Lock file is empty.")
    try:
        data = json.loads(text)
    except ValueError as exc:
        raise LockFileError(f"Lock file is not valid JSON: {exc}") from exc
    return from_dict(data)
