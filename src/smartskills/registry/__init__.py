"""Skill registry: rules pairing match strategies with skill locations.

Public API::

    from smartskills.registry import RegistryEntry, MatchedSkill, SkillRegistry
    from smartskills.registry import parse_registry_index, merge
"""

from __future__ import annotations

from smartskills.registry.index import (
    load_embedded_registry,
    merge,
    parse_registry_document,
    parse_registry_index,
)
from smartskills.registry.models import DEFAULT_MATCH_STRATEGY, MatchedSkill, RegistryEntry
from smartskills.registry.source import SkillRegistry

__all__ = [
    "DEFAULT_MATCH_STRATEGY",
    "MatchedSkill",
    "RegistryEntry",
    "SkillRegistry",
    "load_embedded_registry",
    "merge",
    "parse_registry_document",
    "parse_registry_index",
]
