"""Tests for CLI wiring: config to providers to installer."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from smartskills import config as config_module
from smartskills.cli.runtime import build_installer, project_root
from smartskills.core.installer import SkillInstaller
from smartskills.exceptions import ConfigError


@pytest.fixture(autouse=True)
def no_user_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(config_module, "USER_CONFIG_PATH", tmp_path / "no-user-config.json")


class TestBuildInstaller:
    """build_installer."""

    def test_defaults(self, tmp_path: Path) -> None:
        assert isinstance(build_installer(tmp_path), SkillInstaller)

    def test_configured_sources_become_providers(self, tmp_path: Path) -> None:
        (tmp_path / ".skills-installer.json").write_text(json.dumps({
            "installDir": "custom/skills",
            "sources": [{"type": "github", "url": "https://github.com/acme/skills", "branch": "dev"}],
        }), encoding="utf-8")
        installer = build_installer(tmp_path)
        providers = installer._registry._providers
        assert [p.repo_url for p in providers] == ["https://github.com/acme/skills"]
        assert providers[0].branch == "dev"
        assert installer._install_dir == "custom/skills"
        assert installer._lock_store._install_dir == "custom/skills"

    def test_unusable_source_url(self, tmp_path: Path) -> None:
        explicit = tmp_path / "team.json"
        explicit.write_text(json.dumps({"sources": [{"url": "https://gitlab.com/acme/skills"}]}), encoding="utf-8")
        with pytest.raises(ConfigError, match="gitlab.com"):
            build_installer(tmp_path, str(explicit))

    def test_source_type_must_match_url(self, tmp_path: Path) -> None:
        explicit = tmp_path / "team.json"
        explicit.write_text(json.dumps({"sources": [
            {"type": "azuredevops", "url": "https://github.com/acme/skills"},
        ]}), encoding="utf-8")
        with pytest.raises(ConfigError, match="not azuredevops"):
            build_installer(tmp_path, str(explicit))


class TestProjectRoot:
    """project_root."""

    def test_directory(self, tmp_path: Path) -> None:
        assert project_root(tmp_path) == tmp_path

    def test_file(self, tmp_path: Path) -> None:
        manifest = tmp_path / "package.json"
        manifest.write_text("{}", encoding="utf-8")
        assert project_root(manifest) == tmp_path
