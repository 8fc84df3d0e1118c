"""Data models produced by project scanners."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class ResolvedPackage:
    """A package resolved in a project's dependency graph.

    Attributes:
        name: Package identifier as the ecosystem spells it
            (e.g. "Microsoft.Extensions.Logging", "react", "requests").
        version: Resolved version string.
        is_transitive: True when pulled in by another dependency.
        ecosystem: Lowercase ecosystem id ("dotnet", "npm", "python", ...).
    """

    name: str
    version: str
    is_transitive: bool = False
    ecosystem: str = ""


@dataclass(frozen=True)
class ProjectPackages:
    """Packages resolved for a single project file."""

    project_path: str
    packages: tuple[ResolvedPackage, ...] = field(default_factory=tuple)
