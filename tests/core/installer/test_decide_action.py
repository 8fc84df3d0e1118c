"""Tests for the install state table."""

from __future__ import annotations

import pytest

from smartskills.core.installer import SyncAction, decide_action
from smartskills.core.lockfile import SkillLockEntry

LOCKED_HASH = "sha256:" + "a" * 64
OTHER_HASH = "sha256:" + "b" * 64


def _lock(commit: str = "c1") -> SkillLockEntry:
    return SkillLockEntry(
        remote_url="https://github.com/acme/skills",
        skill_path="skills/a",
        commit_sha=commit,
        local_content_hash=LOCKED_HASH,
    )


class TestDecideAction:
    """Every row of the table."""

    @pytest.mark.parametrize(
        ("lock", "remote", "local", "force", "expected"),
        [
            (None, "c1", None, False, SyncAction.INSTALL),
            (None, "c1", LOCKED_HASH, True, SyncAction.INSTALL),
            (_lock(), "c1", LOCKED_HASH, False, SyncAction.SKIP_UP_TO_DATE),
            (_lock(), "c1", LOCKED_HASH, True, SyncAction.SKIP_UP_TO_DATE),
            (_lock(), "c1", OTHER_HASH, False, SyncAction.SKIP_LOCALLY_MODIFIED),
            (_lock(), "c1", OTHER_HASH, True, SyncAction.UPDATE),
            (_lock(), "c2", OTHER_HASH, False, SyncAction.UPDATE),
            (_lock(), "c2", LOCKED_HASH, False, SyncAction.UPDATE),
            (_lock(), "c1", None, False, SyncAction.UPDATE),
        ],
    )
    def test_table(self, lock, remote, local, force, expected) -> None:
        assert decide_action(lock, remote, local, force) is expected
