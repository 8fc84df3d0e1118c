"""SmartSkills exception hierarchy.

All public exceptions inherit from SmartSkillsError, giving callers a single
base class to catch when they want to handle any SmartSkills-specific failure
without swallowing unrelated errors.

Configuration errors (unknown match strategy, unsupported lock file schema,
malformed lock JSON, unreadable config) are always fatal and surfaced to the
caller. Provider errors are operational and are caught per skill by the
installer.
"""

from __future__ import annotations


class SmartSkillsError(Exception):
    """Base exception for all SmartSkills errors."""


class ConfigurationError(SmartSkillsError):
    """Raised when an input makes the whole operation meaningless.

    Never retried. The installer lets these propagate instead of recording
    them as per-skill failures.
    """


class UnknownStrategyError(ConfigurationError):
    """Raised when a registry entry names an unregistered match strategy."""

    def __init__(self, name: str, known: list[str]) -> None:
        self.name = name
        self.known = known
        super().__init__(
            f"Unknown match strategy {name!r}. "
            f"Registered strategies: {', '.join(known)}"
        )


class LockFileError(ConfigurationError):
    """Raised for malformed lock files or unsupported schema versions."""


class ConfigError(ConfigurationError):
    """Raised when an explicitly requested config file cannot be used."""


class ProviderError(SmartSkillsError):
    """Raised when a remote source provider cannot satisfy a request.

    Covers HTTP failures after retries, unexpected response shapes, and
    paths with no commit history.
    """

    def __init__(self, message: str, status_code: int | None = None) -> None:
        self.status_code = status_code
        super().__init__(message)


class DirectoryNotFoundError(SmartSkillsError, FileNotFoundError):
    """Raised when a directory expected to hold skill content is missing."""


class SkillMetadataError(SmartSkillsError):
    """Raised when SKILL.md frontmatter is missing or invalid."""

    def __init__(self, errors: list[str]) -> None:
        self.errors = errors
        super().__init__("; ".join(errors))


class RegistryError(SmartSkillsError):
    """Raised when a registry index document cannot be parsed."""
