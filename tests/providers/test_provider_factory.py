"""Tests for SkillSourceProviderFactory URL detection and caching."""

from __future__ import annotations

import pytest

from smartskills.providers import SkillSourceProviderFactory
from smartskills.providers.azure_devops import AdoSkillSourceProvider
from smartskills.providers.github import GitHubSkillSourceProvider


@pytest.fixture
def factory() -> SkillSourceProviderFactory:
    return SkillSourceProviderFactory()


class TestDetection:
    """Host and path parsing."""

    @pytest.mark.parametrize(
        "url",
        ["https://github.com/acme/skills", "https://github.com/acme/skills.git", "https://github.com/acme/skills/tree/main"],
    )
    def test_github(self, factory: SkillSourceProviderFactory, url: str) -> None:
        provider = factory.create_from_repo_url(url)
        assert isinstance(provider, GitHubSkillSourceProvider)
        assert provider.repo_url == "https://github.com/acme/skills"

    def test_dev_azure_com(self, factory: SkillSourceProviderFactory) -> None:
        provider = factory.create_from_repo_url("https://dev.azure.com/acme/tools/_git/skills")
        assert isinstance(provider, AdoSkillSourceProvider)
        assert (provider.organization, provider.project, provider.repository) == ("acme", "tools", "skills")

    def test_visualstudio_com(self, factory: SkillSourceProviderFactory) -> None:
        provider = factory.create_from_repo_url("https://acme.visualstudio.com/tools/_git/skills")
        assert isinstance(provider, AdoSkillSourceProvider)
        assert provider.organization == "acme"
        assert provider.repo_url == "https://dev.azure.com/acme/tools/_git/skills"

    @pytest.mark.parametrize(
        "url",
        [
            "https://gitlab.com/acme/skills",
            "https://github.com/acme",
            "https://dev.azure.com/acme/tools/skills",
            "not a url",
            "",
        ],
    )
    def test_unsupported_or_malformed(self, factory: SkillSourceProviderFactory, url: str) -> None:
        with pytest.raises(ValueError):
            factory.create_from_repo_url(url)


class TestOptions:
    """Branch and index path pass-through."""

    def test_default_branch_applied(self) -> None:
        factory = SkillSourceProviderFactory(default_branch="develop")
        assert factory.create_from_repo_url("https://github.com/acme/skills").branch == "develop"

    def test_explicit_branch_and_index(self, factory: SkillSourceProviderFactory) -> None:
        provider = factory.create_from_repo_url(
            "https://github.com/acme/skills", branch="release", registry_index_path="index.json",
        )
        assert provider.branch == "release"
        assert provider.registry_index_path == "index.json"


class TestCaching:
    """One provider per URL, ignoring case."""

    def test_same_instance_for_same_url(self, factory: SkillSourceProviderFactory) -> None:
        a = factory.create_from_repo_url("https://github.com/acme/skills")
        b = factory.create_from_repo_url("https://GitHub.com/Acme/Skills")
        assert a is b

    def test_different_urls_different_instances(self, factory: SkillSourceProviderFactory) -> None:
        a = factory.create_from_repo_url("https://github.com/acme/skills")
        b = factory.create_from_repo_url("https://github.com/acme/other")
        assert a is not b

    def test_branch_and_index_path_part_of_cache_key(self, factory: SkillSourceProviderFactory) -> None:
        main = factory.create_from_repo_url("https://github.com/acme/skills")
        release = factory.create_from_repo_url("https://github.com/acme/skills", branch="release")
        other_index = factory.create_from_repo_url(
            "https://github.com/acme/skills", registry_index_path="index.json",
        )
        assert len({id(main), id(release), id(other_index)}) == 3
        assert release.branch == "release"
        assert factory.create_from_repo_url("https://github.com/acme/skills", branch="main") is main


class TestProviderType:
    """Declared source type must agree with the URL."""

    def test_matching_type_accepted(self, factory: SkillSourceProviderFactory) -> None:
        provider = factory.create_from_repo_url(
            "https://dev.azure.com/org/proj/_git/repo", provider_type="AzureDevOps",
        )
        assert isinstance(provider, AdoSkillSourceProvider)

    def test_mismatched_type_rejected(self, factory: SkillSourceProviderFactory) -> None:
        with pytest.raises(ValueError, match="github repository, not azuredevops"):
            factory.create_from_repo_url("https://github.com/acme/skills", provider_type="azuredevops")
