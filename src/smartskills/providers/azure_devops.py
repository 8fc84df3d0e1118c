"""Azure DevOps source provider over the Git REST API (api-version 7.0)."""

from __future__ import annotations

import base64
import logging
import os

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

API_VERSION = "7.0"

# Personal access token or pipeline token, sent as basic auth.
TOKEN_ENV_VARS = ("SMART_SKILLS_ADO_TOKEN", "AZURE_DEVOPS_EXT_PAT", "SYSTEM_ACCESSTOKEN")


class AdoSkillSourceProvider(SkillSourceProvider):
    """Provider for ``https://dev.azure.com/{org}/{project}/_git/{repo}``."""

    def __init__(
        self,
        organization: str,
        project: str,
        repository: str,
        *,
        branch: str | None = None,
        registry_index_path: str | None = None,
        token: str | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.organization = organization
        self.project = project
        self.repository = repository
        self.branch = branch or DEFAULT_BRANCH
        self.registry_index_path = registry_index_path or DEFAULT_REGISTRY_INDEX_PATH
        headers: dict[str, str] = {}
        token = token or _token_from_env()
        if token:
            encoded = base64.b64encode(f":{token}".encode()).decode("ascii")
            headers["Authorization"] = f"Basic {encoded}"
        self._client = HttpClient(headers=headers, transport=transport)

    @property
    def provider_type(self) -> str:
        return "azuredevops"

    @property
    def repo_url(self) -> str:
        return f"https://dev.azure.com/{self.organization}/{self.project}/_git/{self.repository}"

    @property
    def _base_url(self) -> str:
        return (
            f"https://dev.azure.com/{self.organization}/{self.project}"
            f"/_apis/git/repositories/{self.repository}"
        )

    def _version_params(self, commit_sha: str | None) -> dict[str, str]:
        return {
            "versionDescriptor.versionType": "commit" if commit_sha else "branch",
            "versionDescriptor.version": commit_sha or self.branch,
            "api-version": API_VERSION,
        }

    async def get_registry_index(self) -> list[RegistryEntry]:
        url = f"{self._base_url}/items"
        logger.info("Fetching registry index from Azure DevOps: %s", self.repo_url)
        text = await self._client.get_text(
            url, params={"path": self.registry_index_path, **self._version_params(None)},
        )
        return parse_registry_index(text)

    async def list_skill_files(self, skill_path: str, commit_sha: str | None = None) -> list[str]:
        data = await self._client.get_json(
            f"{self._base_url}/items",
            params={
                "scopePath": skill_path,
                "recursionLevel": "Full",
                **self._version_params(commit_sha),
            },
        )
        if not isinstance(data, dict):
            raise ProviderError(f"Unexpected items response for {self.repo_url}")

        prefix = "/" + skill_path.strip("/") + "/"
        files: list[str] = []
        for item in data.get("value") or []:
            if item.get("isFolder"):
                continue
            path = item.get("path", "")
            if not path.startswith("/"):
                path = "/" + path
            if path.lower().startswith(prefix.lower()):
                files.append(path[len(prefix):])
        return files

    async def download_file(self, file_path: str, commit_sha: str | None = None) -> bytes:
        return await self._client.get_bytes(
            f"{self._base_url}/items",
            params={"path": file_path, "download": "true", **self._version_params(commit_sha)},
        )

    async def get_latest_commit_sha(self, skill_path: str) -> str:
        data = await self._client.get_json(
            f"{self._base_url}/commits",
            params={
                "searchCriteria.itemPath": skill_path,
                "searchCriteria.itemVersion.version": self.branch,
                "$top": "1",
                "api-version": API_VERSION,
            },
        )
        commits = data.get("value") if isinstance(data, dict) else None
        if not commits:
            raise ProviderError(f"No commits found for path: {skill_path}")
        return commits[0]["commitId"]


def _token_from_env() -> str | None:
    for name in TOKEN_ENV_VARS:
        value = os.environ.get(name)
        if value:
            return value
    return None
