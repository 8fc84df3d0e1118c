"""Skill installer --- install, restore, and uninstall skills for a project.

Public API::

    from smartskills.core.installer import SkillInstaller, InstallOptions
    from smartskills.core.installer import InstallResult, RestoreResult
"""

from __future__ import annotations

from smartskills.core.installer.installer import SkillInstaller, SyncAction, decide_action
from smartskills.core.installer.models import (
    InstalledSkill,
    InstallOptions,
    InstallResult,
    RestoreResult,
    SkillInstallFailure,
)

__all__ = [
    "InstallOptions",
    "InstallResult",
    "InstalledSkill",
    "RestoreResult",
    "SkillInstallFailure",
    "SkillInstaller",
    "SyncAction",
    "decide_action",
]
