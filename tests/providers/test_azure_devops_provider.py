"""Tests for AdoSkillSourceProvider against a mocked Azure DevOps API."""

from __future__ import annotations

import asyncio
import base64
import json

import httpx
import pytest

from smartskills.exceptions import ProviderError
from smartskills.providers.azure_devops import AdoSkillSourceProvider

ITEMS = {
    "count": 4,
    "value": [
        {"path": "/skills/identity", "isFolder": True},
        {"path": "/skills/identity/SKILL.md"},
        {"path": "/skills/identity/samples/app.cs"},
        {"path": "/skills/identity-extra/SKILL.md"},
    ],
}

BASE = "/acme/tools/_apis/git/repositories/skills"


class _Ado:
    """Routes requests to canned Azure DevOps responses."""

    def __init__(self, commits: list | None = None) -> None:
        self.commits = [{"commitId": "beef01"}] if commits is None else commits
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        params = request.url.params
        if request.url.path == f"{BASE}/commits":
            return httpx.Response(200, json={"count": len(self.commits), "value": self.commits})
        if request.url.path == f"{BASE}/items":
            if "scopePath" in params:
                return httpx.Response(200, json=ITEMS)
            if params.get("path") == "skills-registry.json":
                return httpx.Response(200, text=json.dumps({
                    "skills": [{"matchCriteria": ["Azure.Identity"], "skillPath": "skills/identity"}],
                }))
            return httpx.Response(200, content=params["path"].encode())
        return httpx.Response(404)


def _provider(api: _Ado, **kwargs) -> AdoSkillSourceProvider:
    return AdoSkillSourceProvider(
        "acme", "tools", "skills", token="pat", transport=httpx.MockTransport(api), **kwargs,
    )


class TestIdentity:
    """Static properties."""

    def test_type_and_url(self) -> None:
        provider = _provider(_Ado())
        assert provider.provider_type == "azuredevops"
        assert provider.repo_url == "https://dev.azure.com/acme/tools/_git/skills"


class TestRequests:
    """API calls and parsing."""

    def test_registry_index(self) -> None:
        api = _Ado()
        entries = asyncio.run(_provider(api).get_registry_index())
        assert entries[0].match_criteria == ("Azure.Identity",)
        params = api.requests[0].url.params
        assert params["versionDescriptor.versionType"] == "branch"
        assert params["versionDescriptor.version"] == "main"

    def test_basic_auth_header(self) -> None:
        api = _Ado()
        asyncio.run(_provider(api).get_registry_index())
        expected = base64.b64encode(b":pat").decode("ascii")
        assert api.requests[0].headers["Authorization"] == f"Basic {expected}"

    def test_list_files_relative_to_skill(self) -> None:
        files = asyncio.run(_provider(_Ado()).list_skill_files("skills/identity"))
        assert files == ["SKILL.md", "samples/app.cs"]

    def test_pinned_listing_uses_commit_version(self) -> None:
        api = _Ado()
        asyncio.run(_provider(api).list_skill_files("skills/identity", "abc123"))
        params = api.requests[0].url.params
        assert params["versionDescriptor.versionType"] == "commit"
        assert params["versionDescriptor.version"] == "abc123"
        assert params["recursionLevel"] == "Full"

    def test_download(self) -> None:
        content = asyncio.run(_provider(_Ado()).download_file("skills/identity/SKILL.md"))
        assert content == b"skills/identity/SKILL.md"

    def test_latest_commit(self) -> None:
        api = _Ado()
        assert asyncio.run(_provider(api, branch="release").get_latest_commit_sha("skills/identity")) == "beef01"
        params = api.requests[0].url.params
        assert params["searchCriteria.itemPath"] == "skills/identity"
        assert params["searchCriteria.itemVersion.version"] == "release"
        assert params["$top"] == "1"

    def test_no_history_raises(self) -> None:
        with pytest.raises(ProviderError):
            asyncio.run(_provider(_Ado([])).get_latest_commit_sha("skills/identity"))
