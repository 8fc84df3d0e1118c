"""Installer options and structured results.

Results are always a tally, never a single pass/fail flag, so callers can
report partial success precisely.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from smartskills.core.metadata import SkillMetadata


@dataclass(frozen=True)
class InstallOptions:
    """Options for ``SkillInstaller.install``.

    Attributes:
        project_path: Project directory, solution, or project file. Defaults
            to the current working directory.
        dry_run: Decide every action (including the remote commit lookup)
            but change nothing on disk.
        force: Overwrite locally modified skills whose remote is unchanged.
    """

    project_path: str | Path | None = None
    dry_run: bool = False
    force: bool = False


@dataclass(frozen=True)
class InstalledSkill:
    """A skill written to disk during this run."""

    name: str
    metadata: SkillMetadata
    install_path: Path
    commit_sha: str
    source_provider_type: str
    source_url: str


@dataclass(frozen=True)
class SkillInstallFailure:
    """A per-skill failure that did not abort the batch."""

    skill_path: str
    reason: str


@dataclass
class InstallResult:
    """Outcome of one ``install`` call.

    Attributes:
        installed: Skills installed for the first time.
        updated: Skills overwritten (remote advanced, forced, or missing).
        skipped_up_to_date: Skill paths whose remote and local state match
            the lock file.
        skipped_locally_modified: Skill paths left untouched because local
            files differ from the lock file and ``force`` was not set.
        planned: Skill paths a dry run would install or update.
        failed: Per-skill failures.
    """

    installed: list[InstalledSkill] = field(default_factory=list)
    updated: list[InstalledSkill] = field(default_factory=list)
    skipped_up_to_date: list[str] = field(default_factory=list)
    skipped_locally_modified: list[str] = field(default_factory=list)
    planned: list[str] = field(default_factory=list)
    failed: list[SkillInstallFailure] = field(default_factory=list)


@dataclass
class RestoreResult:
    """Outcome of one ``restore`` call, keyed by skill name."""

    restored: list[str] = field(default_factory=list)
    skipped_up_to_date: list[str] = field(default_factory=list)
    failed: list[SkillInstallFailure] = field(default_factory=list)
