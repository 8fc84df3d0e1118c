"""Registry index parsing and merging.

A registry index is a JSON document::

    {
      "repoUrl": "https://github.com/org/skills",
      "language": "dotnet",
      "skills": [
        {"type": "package", "matchCriteria": ["Azure.Identity"],
         "skillPath": "skills/azure-identity"},
        {"type": "file-exists", "matchCriteria": ["*.sln", "global.json"],
         "skillPath": "skills/nuget-manager"},
        {"packagePatterns": ["Microsoft.Extensions.*"],
         "skillPath": "skills/extensions"}
      ]
    }

Top-level ``repoUrl`` and ``language`` are defaults each skill may override.
The legacy ``packagePatterns`` key implies the ``package`` strategy. Skills
without a ``skillPath`` or without any criteria are dropped, as are skills
whose last ``skillPath`` segment cannot name a directory (``.``, ``..``).

``merge`` is a pure function: embedded entries first, then each provider's
entries in priority order, stamped with the provider that fetched them.
"""

from __future__ import annotations

import dataclasses
import json
import logging
from importlib import resources
from typing import TYPE_CHECKING, Any, Iterable

from smartskills.core.layout import is_valid_skill_name
from smartskills.exceptions import RegistryError
from smartskills.registry.models import DEFAULT_MATCH_STRATEGY, RegistryEntry

if TYPE_CHECKING:
    from smartskills.providers.base import SkillSourceProvider

logger = logging.getLogger(__name__)

EMBEDDED_REGISTRY_RESOURCE = "skills-registry.json"


def parse_registry_index(text: str) -> list[RegistryEntry]:
    """Parse registry index JSON text into entries.

    Raises:
        RegistryError: If the text is not a JSON object.
    """
    try:
        data = json.loads(text)
    except ValueError as exc:
        raise RegistryError(f"Registry index is not valid JSON: {exc}") from exc
    if not isinstance(data, dict):
        raise RegistryError("Registry index root must be a JSON object.")
    return parse_registry_document(data)


def parse_registry_document(data: dict[str, Any]) -> list[RegistryEntry]:
    """Build entries from an already-parsed registry index document."""
    default_repo = _str_or_none(data.get("repoUrl"))
    default_language = _str_or_none(data.get("language"))

    entries: list[RegistryEntry] = []
    for skill in data.get("skills") or []:
        if not isinstance(skill, dict):
            continue

        if "matchCriteria" in skill:
            criteria = skill.get("matchCriteria")
            strategy = _str_or_none(skill.get("type")) or DEFAULT_MATCH_STRATEGY
        else:
            criteria = skill.get("packagePatterns")
            strategy = DEFAULT_MATCH_STRATEGY

        patterns = tuple(p for p in (criteria or []) if isinstance(p, str) and p)
        skill_path = _str_or_none(skill.get("skillPath"))
        if not skill_path or not patterns:
            logger.debug("Skipping registry skill without path or criteria: %r", skill)
            continue
        if not is_valid_skill_name(skill_path.rstrip("/").rsplit("/", 1)[-1]):
            logger.warning("Skipping registry skill with unusable skillPath: %r", skill_path)
            continue

        entries.append(RegistryEntry(
            match_criteria=patterns,
            skill_path=skill_path,
            match_strategy=strategy,
            repo_url=_str_or_none(skill.get("repoUrl")) or default_repo,
            ecosystem=_str_or_none(skill.get("language")) or default_language,
        ))
    return entries


def load_embedded_registry() -> list[RegistryEntry]:
    """Load the base registry shipped with the package."""
    text = resources.files("smartskills.registry").joinpath(EMBEDDED_REGISTRY_RESOURCE).read_text(
        encoding="utf-8"
    )
    return parse_registry_index(text)


def merge(
    embedded: Iterable[RegistryEntry],
    sources: Iterable[tuple[SkillSourceProvider, Iterable[RegistryEntry]]],
) -> list[RegistryEntry]:
    """Concatenate embedded entries with provider-stamped remote entries.

    Remote entries without their own ``repo_url`` inherit the provider's.
    Order is preserved; de-duplication is the matcher's job.
    """
    merged = list(embedded)
    for provider, entries in sources:
        for entry in entries:
            merged.append(dataclasses.replace(
                entry,
                source_provider=provider,
                repo_url=entry.repo_url or provider.repo_url,
            ))
    return merged


def _str_or_none(value: Any) -> str | None:
    return value if isinstance(value, str) and value else None
