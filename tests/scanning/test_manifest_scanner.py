"""Tests for ManifestScanner over package.json and requirements.txt."""

from __future__ import annotations

import asyncio
import json
from pathlib import Path

from smartskills.scanning import ManifestScanner, list_root_file_names
from smartskills.scanning.manifest import normalize_pypi_name


def _names(projects) -> set[str]:
    return {pkg.name for project in projects for pkg in project.packages}


class TestPackageJson:
    """npm manifests."""

    def test_reads_all_dependency_sections(self, tmp_path: Path) -> None:
        (tmp_path / "package.json").write_text(json.dumps({
            "dependencies": {"react": "^18.2.0"},
            "devDependencies": {"typescript": "5.4.0", "React": "18"},
            "peerDependencies": {"@azure/identity": "^4"},
        }), encoding="utf-8")
        project = asyncio.run(ManifestScanner().scan_project(tmp_path / "package.json"))
        assert [p.name for p in project.packages] == ["react", "typescript", "@azure/identity"]
        assert all(p.ecosystem == "npm" for p in project.packages)
        assert project.packages[0].version == "^18.2.0"

    def test_invalid_json_yields_nothing(self, tmp_path: Path) -> None:
        (tmp_path / "package.json").write_text("{", encoding="utf-8")
        project = asyncio.run(ManifestScanner().scan_project(tmp_path / "package.json"))
        assert project.packages == ()


class TestRequirements:
    """Python requirements files."""

    def test_parses_names_and_versions(self, tmp_path: Path) -> None:
        (tmp_path / "requirements.txt").write_text(
            "# comment\nFastAPI==0.110.0\nazure_identity>=1.15 ; python_version>'3.8'\n"
            "--index-url https://example.invalid\n\nrequests\n",
            encoding="utf-8",
        )
        project = asyncio.run(ManifestScanner().scan_project(tmp_path / "requirements.txt"))
        pkgs = {p.name: p for p in project.packages}
        assert set(pkgs) == {"fastapi", "azure-identity", "requests"}
        assert pkgs["fastapi"].version == "0.110.0"
        assert pkgs["azure-identity"].version == "1.15"
        assert pkgs["requests"].version == ""
        assert pkgs["fastapi"].ecosystem == "python"

    def test_follows_includes_once(self, tmp_path: Path) -> None:
        (tmp_path / "requirements.txt").write_text("-r base.txt\nhttpx\n", encoding="utf-8")
        (tmp_path / "base.txt").write_text("-r requirements.txt\nclick\n", encoding="utf-8")
        project = asyncio.run(ManifestScanner().scan_project(tmp_path / "requirements.txt"))
        assert {p.name for p in project.packages} == {"click", "httpx"}

    def test_normalize_pypi_name(self) -> None:
        assert normalize_pypi_name("Azure_Identity") == "azure-identity"
        assert normalize_pypi_name("zope.interface") == "zope-interface"
        assert normalize_pypi_name("a--_b") == "a-b"


class TestDirectoryScan:
    """Recursive discovery with excluded directories."""

    def test_finds_nested_manifests(self, tmp_path: Path) -> None:
        (tmp_path / "web").mkdir()
        (tmp_path / "web" / "package.json").write_text('{"dependencies": {"react": "18"}}', encoding="utf-8")
        (tmp_path / "api").mkdir()
        (tmp_path / "api" / "requirements.txt").write_text("fastapi\n", encoding="utf-8")
        projects = asyncio.run(ManifestScanner().scan_directory(tmp_path))
        assert _names(projects) == {"react", "fastapi"}

    def test_skips_excluded_directories(self, tmp_path: Path) -> None:
        nested = tmp_path / "node_modules" / "left-pad"
        nested.mkdir(parents=True)
        (nested / "package.json").write_text('{"dependencies": {"evil": "1"}}', encoding="utf-8")
        skills = tmp_path / ".agents" / "skills" / "x"
        skills.mkdir(parents=True)
        (skills / "requirements.txt").write_text("hidden\n", encoding="utf-8")
        assert asyncio.run(ManifestScanner().scan_directory(tmp_path)) == []

    def test_solution_scans_its_directory(self, tmp_path: Path) -> None:
        (tmp_path / "App.sln").write_text("", encoding="utf-8")
        (tmp_path / "requirements.txt").write_text("fastapi\n", encoding="utf-8")
        projects = asyncio.run(ManifestScanner().scan_solution(tmp_path / "App.sln"))
        assert _names(projects) == {"fastapi"}


class TestRootFileNames:
    """list_root_file_names."""

    def test_lists_only_files_sorted(self, tmp_path: Path) -> None:
        (tmp_path / "b.sln").write_text("", encoding="utf-8")
        (tmp_path / "a.json").write_text("", encoding="utf-8")
        (tmp_path / "sub").mkdir()
        assert list_root_file_names(tmp_path) == ["a.json", "b.sln"]

    def test_missing_directory(self, tmp_path: Path) -> None:
        assert list_root_file_names(tmp_path / "nope") == []
