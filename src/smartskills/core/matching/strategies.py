"""Built-in match strategies: ``package`` and ``file-exists``.

Both share one matching rule: a criterion matches a value when they are
equal ignoring case, or when the criterion contains ``*``/``?`` and the
value matches it as an anchored, case-insensitive glob (``*`` is any run of
characters, ``?`` exactly one). ``Microsoft.Extensions.*`` therefore needs
the literal ``Microsoft.Extensions.`` prefix and does not match
``Microsoft.Extensions`` itself.

Each matching criterion is reported once, however many values it matched.
"""

from __future__ import annotations

import re
from functools import lru_cache
from typing import Iterable, Sequence

from smartskills.core.matching.base import NO_MATCH, MatchContext, MatchResult, MatchStrategy


@lru_cache(maxsize=1024)
def _compile_glob(pattern: str) -> re.Pattern[str]:
    regex = re.escape(pattern).replace(r"\*", ".*").replace(r"\?", ".")
    return re.compile(f"^{regex}$", re.IGNORECASE | re.DOTALL)


def is_match(value: str, pattern: str) -> bool:
    """Return True if *value* matches *pattern* exactly or as a glob."""
    if "*" in pattern or "?" in pattern:
        return _compile_glob(pattern).match(value) is not None
    return value.casefold() == pattern.casefold()


def match_criteria(values: Iterable[str], criteria: Sequence[str]) -> MatchResult:
    """Evaluate *criteria* against *values* using the shared matching rule."""
    candidates = list(values)
    matched = tuple(
        pattern for pattern in criteria
        if any(is_match(value, pattern) for value in candidates)
    )
    return MatchResult(is_match=True, matched_criteria=matched) if matched else NO_MATCH


class PackageMatchStrategy(MatchStrategy):
    """Matches resolved package names, honouring the entry's ecosystem filter."""

    @property
    def name(self) -> str:
        return "package"

    def evaluate(self, context: MatchContext, criteria: Sequence[str]) -> MatchResult:
        ecosystem = context.ecosystem.casefold() if context.ecosystem else None
        names: dict[str, str] = {}
        for pkg in context.resolved_packages:
            if ecosystem is not None and pkg.ecosystem.casefold() != ecosystem:
                continue
            names.setdefault(pkg.name.casefold(), pkg.name)
        return match_criteria(names.values(), criteria)


class FileExistsMatchStrategy(MatchStrategy):
    """Matches file names in the project root. File presence ignores ecosystem."""

    @property
    def name(self) -> str:
        return "file-exists"

    def evaluate(self, context: MatchContext, criteria: Sequence[str]) -> MatchResult:
        return match_criteria(context.root_file_names, criteria)
