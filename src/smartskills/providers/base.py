"""Source provider interface.

A provider knows how to talk to one hosting backend for one repository:
fetch the repository's registry index, list the files under a skill
directory, download a file, and report the latest commit touching a path.
``commit_sha`` pins listing and download to an exact remote state; None
means the configured branch head.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from smartskills.registry.models import RegistryEntry

DEFAULT_BRANCH = "main"
DEFAULT_REGISTRY_INDEX_PATH = "skills-registry.json"


class SkillSourceProvider(ABC):
    """Abstract access to a remote skill repository."""

    @property
    @abstractmethod
    def provider_type(self) -> str:
        """Backend identifier ("github", "azuredevops")."""

    @property
    @abstractmethod
    def repo_url(self) -> str:
        """Canonical repository URL, recorded in lock entries."""

    @abstractmethod
    async def get_registry_index(self) -> list[RegistryEntry]:
        """Fetch and parse this repository's registry index."""

    @abstractmethod
    async def list_skill_files(self, skill_path: str, commit_sha: str | None = None) -> list[str]:
        """List files under *skill_path*, relative to it, ``/``-separated."""

    @abstractmethod
    async def download_file(self, file_path: str, commit_sha: str | None = None) -> bytes:
        """Download the raw content of a repository file."""

    @abstractmethod
    async def get_latest_commit_sha(self, skill_path: str) -> str:
        """Return the SHA of the newest commit touching *skill_path*.

        Raises:
            ProviderError: If the path has no commit history.
        """
