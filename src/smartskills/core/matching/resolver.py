"""Name-keyed registry of match strategies.

Strategies are registered explicitly; there is no discovery by import or
reflection, so the set of available strategies is always visible at the
call site that builds the resolver.
"""

from __future__ import annotations

from smartskills.core.matching.base import MatchStrategy
from smartskills.core.matching.strategies import FileExistsMatchStrategy, PackageMatchStrategy
from smartskills.exceptions import UnknownStrategyError


class StrategyResolver:
    """Resolves ``MatchStrategy`` implementations by case-insensitive name."""

    def __init__(self, strategies: list[MatchStrategy] | None = None) -> None:
        self._strategies: dict[str, MatchStrategy] = {}
        for strategy in strategies or []:
            self.register(strategy)

    def register(self, strategy: MatchStrategy) -> None:
        """Add *strategy*, replacing any registered under the same name."""
        self._strategies[strategy.name.casefold()] = strategy

    @property
    def names(self) -> list[str]:
        """Registered strategy names, in registration order."""
        return [s.name for s in self._strategies.values()]

    def resolve(self, name: str) -> MatchStrategy:
        """Return the strategy registered under *name*.

        Raises:
            UnknownStrategyError: If nothing is registered under *name*.
                This is a registry configuration error, not a runtime
                condition to recover from.
        """
        strategy = self._strategies.get((name or "").casefold())
        if strategy is None:
            raise UnknownStrategyError(name, self.names)
        return strategy


def default_resolver() -> StrategyResolver:
    """Create a resolver pre-loaded with the built-in strategies."""
    return StrategyResolver([PackageMatchStrategy(), FileExistsMatchStrategy()])
