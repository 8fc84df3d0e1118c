"""Pluggable match strategies evaluated against per-project signals.

Public API::

    from smartskills.core.matching import MatchContext, MatchResult, NO_MATCH
    from smartskills.core.matching import MatchStrategy, StrategyResolver
    from smartskills.core.matching import default_resolver
"""

from __future__ import annotations

from smartskills.core.matching.base import NO_MATCH, MatchContext, MatchResult, MatchStrategy
from smartskills.core.matching.resolver import StrategyResolver, default_resolver
from smartskills.core.matching.strategies import (
    FileExistsMatchStrategy,
    PackageMatchStrategy,
    is_match,
)

__all__ = [
    "NO_MATCH",
    "FileExistsMatchStrategy",
    "MatchContext",
    "MatchResult",
    "MatchStrategy",
    "PackageMatchStrategy",
    "StrategyResolver",
    "default_resolver",
    "is_match",
]
