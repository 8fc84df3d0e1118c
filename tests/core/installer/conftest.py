"""Fixtures for installer tests."""

from __future__ import annotations

from pathlib import Path

import pytest
from installer_fakes import FakeFactory, FakeProvider, FakeScanner, entry

from smartskills.core.installer import SkillInstaller
from smartskills.registry import RegistryEntry, SkillRegistry


@pytest.fixture
def provider() -> FakeProvider:
    """Repository with one published skill, ``skills/azure-identity``."""
    fake = FakeProvider()
    fake.publish("commit-1", "skills/azure-identity", {
        "SKILL.md": "---\nname: azure-identity\ndescription: Use Azure.Identity.\n---\n",
        "docs/credentials.md": "DefaultAzureCredential\n",
    })
    return fake


@pytest.fixture
def project(tmp_path: Path) -> Path:
    root = tmp_path / "app"
    root.mkdir()
    return root


@pytest.fixture
def make_installer(provider: FakeProvider):
    """Build an installer over the fake provider with the given registry entries."""

    def _make(*entries: RegistryEntry, packages: tuple[str, ...] = ("Azure.Identity",)) -> SkillInstaller:
        registry = SkillRegistry(embedded=list(entries) or [entry("skills/azure-identity", "Azure.Identity")])
        return SkillInstaller(
            FakeScanner(*packages),
            registry,
            provider_factory=FakeFactory(provider),
        )

    return _make
