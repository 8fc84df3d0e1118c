"""Skill registry collaborator --- embedded entries plus configured sources.

Remote sources are fetched in priority order. A source whose index cannot be
fetched or parsed is logged and skipped; the embedded registry and the
remaining sources still apply.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Sequence

from smartskills.exceptions import SmartSkillsError
from smartskills.registry.index import load_embedded_registry, merge
from smartskills.registry.models import RegistryEntry

if TYPE_CHECKING:
    from smartskills.providers.base import SkillSourceProvider

logger = logging.getLogger(__name__)


class SkillRegistry:
    """Loads registry entries from the embedded base and remote providers.

    Args:
        providers: Configured source providers, highest priority first.
        embedded: Base entries; defaults to the registry shipped with the
            package. Pass an empty list to disable it.
    """

    def __init__(
        self,
        providers: Sequence[SkillSourceProvider] = (),
        embedded: Sequence[RegistryEntry] | None = None,
    ) -> None:
        self._providers = list(providers)
        self._embedded = embedded

    async def get_entries(self) -> list[RegistryEntry]:
        """Return embedded entries followed by provider-stamped remote entries."""
        embedded = load_embedded_registry() if self._embedded is None else list(self._embedded)

        fetched: list[tuple[SkillSourceProvider, list[RegistryEntry]]] = []
        for provider in self._providers:
            try:
                entries = await provider.get_registry_index()
            except SmartSkillsError as exc:
                logger.warning("Skipping registry source %s: %s", provider.repo_url, exc)
                continue
            logger.info("Loaded %d registry entries from %s", len(entries), provider.repo_url)
            fetched.append((provider, entries))

        return merge(embedded, fetched)
