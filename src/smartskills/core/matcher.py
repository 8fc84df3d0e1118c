"""Skill matcher --- applies match strategies across registry entries.

Entries are evaluated in the order presented (embedded registry first, then
configured sources in priority order). The first entry to match a given
``skill_path`` (compared ignoring case) wins; later entries for that path are
not evaluated. Unknown strategy names propagate as ``UnknownStrategyError``
so a malformed registry entry is visible rather than silently skipped.
"""

from __future__ import annotations

import logging
from typing import Iterable, Sequence

from smartskills.core.matching import MatchContext, StrategyResolver, default_resolver
from smartskills.registry.models import DEFAULT_MATCH_STRATEGY, MatchedSkill, RegistryEntry
from smartskills.scanning.models import ResolvedPackage

logger = logging.getLogger(__name__)


class SkillMatcher:
    """Matches resolved packages and root files to registry entries."""

    def __init__(self, resolver: StrategyResolver | None = None) -> None:
        self._resolver = resolver or default_resolver()

    def match(
        self,
        packages: Iterable[ResolvedPackage],
        registry_entries: Iterable[RegistryEntry],
        root_file_names: Sequence[str] | None = None,
    ) -> list[MatchedSkill]:
        """Return one ``MatchedSkill`` per unique matching ``skill_path``.

        Args:
            packages: Resolved packages across all scanned projects.
            registry_entries: Registry entries in merge order.
            root_file_names: File names found in the project root.

        Returns:
            Matches in registry order.

        Raises:
            UnknownStrategyError: If an entry names an unregistered strategy.
        """
        package_list = tuple(packages)
        file_names = tuple(root_file_names or ())
        results: dict[str, MatchedSkill] = {}

        for entry in registry_entries:
            key = entry.skill_path.casefold()
            if key in results:
                continue

            strategy = self._resolver.resolve(entry.match_strategy or DEFAULT_MATCH_STRATEGY)
            context = MatchContext(
                resolved_packages=package_list,
                root_file_names=file_names,
                ecosystem=entry.ecosystem,
            )
            result = strategy.evaluate(context, entry.match_criteria)
            if result.is_match:
                logger.debug(
                    "Entry %s matched via %s on %s",
                    entry.skill_path, strategy.name, ", ".join(result.matched_criteria),
                )
                results[key] = MatchedSkill(
                    registry_entry=entry,
                    matched_criteria=result.matched_criteria,
                )

        return list(results.values())
