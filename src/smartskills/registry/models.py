"""Registry data models --- RegistryEntry and MatchedSkill.

A registry entry is a rule: a named match strategy plus its criteria, paired
with the location of a skill. Entries are pure data; the provider that
fetched a remote entry is carried as an opaque handle so the installer can
download from the same source without re-deriving it.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from smartskills.providers.base import SkillSourceProvider

DEFAULT_MATCH_STRATEGY = "package"


@dataclass(frozen=True)
class RegistryEntry:
    """A single rule in the skill registry.

    Attributes:
        match_criteria: Strategy-specific patterns (exact or glob), e.g.
            package names for ``package`` or file names for ``file-exists``.
        skill_path: Path of the skill directory within its source repository.
            Unique identity of a skill within a source.
        match_strategy: Name of the match strategy to evaluate.
        repo_url: Repository URL the skill is fetched from, if known.
        ecosystem: Optional ecosystem filter ("dotnet", "npm", "python", ...).
        source_provider: Provider that produced this entry. Excluded from
            equality and hashing.
    """

    match_criteria: tuple[str, ...]
    skill_path: str
    match_strategy: str = DEFAULT_MATCH_STRATEGY
    repo_url: str | None = None
    ecosystem: str | None = None
    source_provider: SkillSourceProvider | None = field(
        default=None, compare=False, hash=False, repr=False,
    )

    @property
    def skill_name(self) -> str:
        """Last path segment of ``skill_path``; names the install directory."""
        return self.skill_path.rstrip("/").rsplit("/", 1)[-1]


@dataclass(frozen=True)
class MatchedSkill:
    """A registry entry that matched a project, before download."""

    registry_entry: RegistryEntry
    matched_criteria: tuple[str, ...]
