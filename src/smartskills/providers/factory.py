"""Creates source providers from repository URLs.

URL shapes understood:

- ``https://github.com/{owner}/{repo}`` (optional ``.git`` suffix)
- ``https://dev.azure.com/{org}/{project}/_git/{repo}``
- ``https://{org}.visualstudio.com/{project}/_git/{repo}``

Providers are cached per URL (ignoring case), branch and registry index path,
so every skill from the same repository and branch shares one provider.
"""

from __future__ import annotations

import logging
from urllib.parse import urlsplit

import httpx

from smartskills.providers.azure_devops import AdoSkillSourceProvider
from smartskills.providers.base import (
    DEFAULT_BRANCH,
    DEFAULT_REGISTRY_INDEX_PATH,
    SkillSourceProvider,
)
from smartskills.providers.github import GitHubSkillSourceProvider

logger = logging.getLogger(__name__)


class SkillSourceProviderFactory:
    """Builds and caches ``SkillSourceProvider`` instances.

    Args:
        default_branch: Branch used when a URL does not pin one.
        transport: Optional ``httpx`` transport handed to every provider.
    """

    def __init__(
        self,
        *,
        default_branch: str | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._default_branch = default_branch
        self._transport = transport
        self._cache: dict[tuple[str, str, str], SkillSourceProvider] = {}

    def create_from_repo_url(
        self,
        repo_url: str,
        *,
        branch: str | None = None,
        registry_index_path: str | None = None,
        provider_type: str | None = None,
    ) -> SkillSourceProvider:
        """Return the provider for *repo_url*, creating it on first use.

        Args:
            repo_url: Repository URL.
            branch: Branch to follow; defaults to the factory default.
            registry_index_path: Path of the registry index in the repository.
            provider_type: Expected backend ("github", "azuredevops"). When
                given, a URL for a different backend is rejected.

        Raises:
            ValueError: If the URL is malformed, its host is unsupported, or it
                does not match *provider_type*.
        """
        branch = branch or self._default_branch or DEFAULT_BRANCH
        index_path = registry_index_path or DEFAULT_REGISTRY_INDEX_PATH
        key = (repo_url.strip().casefold(), branch, index_path)
        provider = self._cache.get(key)
        if provider is None:
            provider = self._create(repo_url.strip(), branch, index_path)
            self._cache[key] = provider
            logger.debug("Created %s provider for %s", provider.provider_type, repo_url)

        if provider_type is not None and provider.provider_type != provider_type.lower():
            raise ValueError(
                f"Source {repo_url} is a {provider.provider_type} repository, not {provider_type}"
            )
        return provider

    def _create(
        self, repo_url: str, branch: str | None, registry_index_path: str | None,
    ) -> SkillSourceProvider:
        parts = urlsplit(repo_url)
        host = (parts.hostname or "").lower()
        segments = [s for s in parts.path.split("/") if s]

        if host == "github.com":
            if len(segments) < 2:
                raise ValueError(
                    f"Invalid GitHub URL: {repo_url}. Expected format: https://github.com/owner/repo"
                )
            repo = segments[1][:-4] if segments[1].endswith(".git") else segments[1]
            return GitHubSkillSourceProvider(
                segments[0], repo,
                branch=branch,
                registry_index_path=registry_index_path,
                transport=self._transport,
            )

        if host == "dev.azure.com":
            if len(segments) < 4 or segments[2] != "_git":
                raise ValueError(
                    f"Invalid Azure DevOps URL: {repo_url}. "
                    "Expected format: https://dev.azure.com/org/project/_git/repo"
                )
            org, project, repo = segments[0], segments[1], segments[3]
        elif host.endswith(".visualstudio.com"):
            if len(segments) < 3 or segments[1] != "_git":
                raise ValueError(
                    f"Invalid Azure DevOps URL: {repo_url}. "
                    "Expected format: https://org.visualstudio.com/project/_git/repo"
                )
            org, project, repo = host.split(".", 1)[0], segments[0], segments[2]
        else:
            raise ValueError(
                f"Unsupported repository host: {host or repo_url!r}. "
                "Supported: github.com, dev.azure.com"
            )

        return AdoSkillSourceProvider(
            org, project, repo,
            branch=branch,
            registry_index_path=registry_index_path,
            transport=self._transport,
        )
