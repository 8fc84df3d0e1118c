"""GitHub source provider over the REST API and raw content host."""

from __future__ import annotations

import logging
import os
from urllib.parse import quote

import httpx

from smartskills.exceptions import ProviderError
from smartskills.providers.base import (
    DEFAULT_BRANCH,
    DEFAULT_REGISTRY_INDEX_PATH,
    SkillSourceProvider,
)
from smartskills.providers.http_client import HttpClient
from smartskills.registry.index import parse_registry_index
from smartskills.registry.models import RegistryEntry

logger = logging.getLogger(__name__)

GITHUB_API = "https://api.github.com"
GITHUB_RAW = "https://raw.githubusercontent.com"

# Read for authenticated requests; anonymous access works for public repos.
TOKEN_ENV_VARS = ("SMART_SKILLS_GITHUB_TOKEN", "GITHUB_TOKEN")


class GitHubSkillSourceProvider(SkillSourceProvider):
    """Provider for ``https://github.com/{owner}/{repo}`` repositories."""

    def __init__(
        self,
        owner: str,
        repo: str,
        *,
        branch: str | None = None,
        registry_index_path: str | None = None,
        token: str | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.owner = owner
        self.repo = repo
        self.branch = branch or DEFAULT_BRANCH
        self.registry_index_path = registry_index_path or DEFAULT_REGISTRY_INDEX_PATH
        headers = {"Accept": "application/vnd.github.v3+json"}
        token = token or _token_from_env()
        if token:
            headers["Authorization"] = f"Bearer {token}"
        self._client = HttpClient(headers=headers, transport=transport)

    @property
    def provider_type(self) -> str:
        return "github"

    @property
    def repo_url(self) -> str:
        return f"https://github.com/{self.owner}/{self.repo}"

    async def get_registry_index(self) -> list[RegistryEntry]:
        url = f"{GITHUB_RAW}/{self.owner}/{self.repo}/{self.branch}/{self.registry_index_path}"
        logger.info("Fetching registry index from %s", url)
        return parse_registry_index(await self._client.get_text(url))

    async def list_skill_files(self, skill_path: str, commit_sha: str | None = None) -> list[str]:
        tree_ref = commit_sha or self.branch
        url = f"{GITHUB_API}/repos/{self.owner}/{self.repo}/git/trees/{tree_ref}"
        data = await self._client.get_json(url, params={"recursive": "1"})
        if not isinstance(data, dict):
            raise ProviderError(f"Unexpected tree response for {self.repo_url}@{tree_ref}")
        if data.get("truncated"):
            logger.warning("Tree listing for %s@%s was truncated by GitHub", self.repo_url, tree_ref)

        prefix = skill_path.strip("/") + "/"
        files: list[str] = []
        for item in data.get("tree") or []:
            path = item.get("path", "")
            if item.get("type") == "blob" and path.lower().startswith(prefix.lower()):
                files.append(path[len(prefix):])
        return files

    async def download_file(self, file_path: str, commit_sha: str | None = None) -> bytes:
        ref = commit_sha or self.branch
        url = f"{GITHUB_RAW}/{self.owner}/{self.repo}/{ref}/{quote(file_path)}"
        return await self._client.get_bytes(url)

    async def get_latest_commit_sha(self, skill_path: str) -> str:
        url = f"{GITHUB_API}/repos/{self.owner}/{self.repo}/commits"
        commits = await self._client.get_json(
            url, params={"path": skill_path, "per_page": "1", "sha": self.branch},
        )
        if not isinstance(commits, list) or not commits:
            raise ProviderError(f"No commits found for path: {skill_path}")
        return commits[0]["sha"]


def _token_from_env() -> str | None:
    for name in TOKEN_ENV_VARS:
        value = os.environ.get(name)
        if value:
            return value
    return None
