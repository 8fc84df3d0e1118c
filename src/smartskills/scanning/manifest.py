"""Lightweight manifest scanner for npm and Python projects.

Reads declared dependencies straight from ``package.json`` and
``requirements.txt`` without invoking any package manager. Versions are the
declared specifiers, not solver output; matching only needs names.

Python names are normalized per PEP 503 (lowercase, runs of ``-_.`` folded
to a single ``-``) so registry criteria can be written once.
"""

from __future__ import annotations

import json
import logging
import re
from pathlib import Path

from smartskills.scanning.base import LibraryScanner
from smartskills.scanning.models import ProjectPackages, ResolvedPackage

logger = logging.getLogger(__name__)

EXCLUDED_DIRECTORIES: frozenset[str] = frozenset({
    ".git", ".hg", ".svn", ".vs", ".vscode", ".idea",
    "bin", "obj",
    "node_modules", ".next", ".nuxt", "bower_components",
    "venv", ".venv", "__pycache__", ".tox", ".mypy_cache", ".pytest_cache",
    "site-packages",
    "target", ".gradle", "build",
    "dist", "vendor", "coverage", ".cache",
    ".agents",
})

_PEP503_SEPARATORS = re.compile(r"[-_.]+")
_REQUIREMENT_NAME = re.compile(r"^([A-Za-z0-9]([A-Za-z0-9._-]*[A-Za-z0-9])?)")
_VERSION_SPEC = re.compile(r"(?:===|==|~=|!=|<=|>=|<|>)\s*([^\s,;]+)")

_MANIFESTS = ("package.json", "requirements.txt")


def normalize_pypi_name(name: str) -> str:
    """Normalize a Python distribution name per PEP 503."""
    return _PEP503_SEPARATORS.sub("-", name.lower())


class ManifestScanner(LibraryScanner):
    """Scanner for ``package.json`` and ``requirements.txt`` manifests."""

    async def scan_project(self, project_path: Path) -> ProjectPackages:
        if project_path.name == "package.json":
            packages = _parse_package_json(project_path)
        elif project_path.name.endswith(".txt"):
            packages = _parse_requirements(project_path, set())
        else:
            logger.debug("Unsupported project file %s, returning empty", project_path)
            packages = []
        logger.info("Resolved %d packages from %s", len(packages), project_path)
        return ProjectPackages(str(project_path), tuple(packages))

    async def scan_solution(self, solution_path: Path) -> list[ProjectPackages]:
        # Solutions carry no manifest of their own here; scan the tree they live in.
        return await self.scan_directory(solution_path.parent)

    async def scan_directory(self, directory: Path) -> list[ProjectPackages]:
        results: list[ProjectPackages] = []
        for manifest in _find_manifests(directory):
            results.append(await self.scan_project(manifest))
        return results


def _find_manifests(directory: Path) -> list[Path]:
    found: list[Path] = []
    pending = [directory]
    while pending:
        current = pending.pop()
        try:
            children = sorted(current.iterdir())
        except OSError:
            logger.warning("Cannot list %s", current, exc_info=True)
            continue
        for child in children:
            if child.is_dir():
                if child.name.lower() not in EXCLUDED_DIRECTORIES:
                    pending.append(child)
            elif child.name in _MANIFESTS:
                found.append(child)
    return sorted(found)


def _parse_package_json(path: Path) -> list[ResolvedPackage]:
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError):
        logger.warning("Skipping unreadable %s", path, exc_info=True)
        return []
    if not isinstance(data, dict):
        return []

    packages: list[ResolvedPackage] = []
    seen: set[str] = set()
    for section in ("dependencies", "devDependencies", "peerDependencies"):
        deps = data.get(section) or {}
        if not isinstance(deps, dict):
            continue
        for name, version in deps.items():
            if name.lower() in seen:
                continue
            seen.add(name.lower())
            packages.append(ResolvedPackage(
                name=name,
                version=str(version),
                is_transitive=False,
                ecosystem="npm",
            ))
    return packages


def _parse_requirements(path: Path, visited: set[Path]) -> list[ResolvedPackage]:
    """Parse a requirements file, following ``-r`` includes once each."""
    resolved = path.resolve()
    if resolved in visited or not path.is_file():
        return []
    visited.add(resolved)

    packages: list[ResolvedPackage] = []
    for raw in path.read_text(encoding="utf-8", errors="replace").splitlines():
        line = raw.split("#", 1)[0].strip()
        if not line:
            continue
        if line.startswith(("-r ", "--requirement ")):
            include = line.split(None, 1)[1].strip()
            packages.extend(_parse_requirements(path.parent / include, visited))
            continue
        if line.startswith("-"):
            continue
        match = _REQUIREMENT_NAME.match(line)
        if match is None:
            continue
        version_match = _VERSION_SPEC.search(line)
        packages.append(ResolvedPackage(
            name=normalize_pypi_name(match.group(1)),
            version=version_match.group(1) if version_match else "",
            is_transitive=False,
            ecosystem="python",
        ))

    unique: dict[str, ResolvedPackage] = {}
    for pkg in packages:
        unique.setdefault(pkg.name, pkg)
    return list(unique.values())
