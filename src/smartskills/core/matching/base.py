"""Match strategy interface and the signal bundle strategies evaluate.

``MatchContext`` is an open dataclass: new signal kinds (environment
variables, build-file contents, ...) are added as new defaulted fields, so
existing strategies keep working unchanged.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Sequence

from smartskills.scanning.models import ResolvedPackage


@dataclass
class MatchContext:
    """All project signals available to match strategies.

    Attributes:
        resolved_packages: Packages resolved by project scanning.
        root_file_names: File names (not paths) in the project root.
        ecosystem: Ecosystem filter of the registry entry being evaluated.
            None means any ecosystem.
    """

    resolved_packages: Sequence[ResolvedPackage] = field(default_factory=tuple)
    root_file_names: Sequence[str] = field(default_factory=tuple)
    ecosystem: str | None = None


@dataclass(frozen=True)
class MatchResult:
    """Outcome of one strategy evaluation."""

    is_match: bool
    matched_criteria: tuple[str, ...] = ()


NO_MATCH = MatchResult(is_match=False)


class MatchStrategy(ABC):
    """A named predicate deciding whether a registry entry applies.

    To add a signal type, implement this class and register an instance with
    a ``StrategyResolver``; the matcher needs no changes.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Strategy identifier used in registry entries (e.g. "package")."""

    @abstractmethod
    def evaluate(self, context: MatchContext, criteria: Sequence[str]) -> MatchResult:
        """Evaluate *criteria* against *context*.

        Args:
            context: Project signals.
            criteria: Strategy-specific patterns from the registry entry.

        Returns:
            A ``MatchResult`` listing each criterion that matched, or
            ``NO_MATCH``.
        """
