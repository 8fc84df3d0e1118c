"""Scanner interface consumed by the skill installer."""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path

from smartskills.scanning.models import ProjectPackages


class LibraryScanner(ABC):
    """Resolves the packages used by a project, solution, or directory tree."""

    @abstractmethod
    async def scan_project(self, project_path: Path) -> ProjectPackages:
        """Resolve packages for a single project file."""

    @abstractmethod
    async def scan_solution(self, solution_path: Path) -> list[ProjectPackages]:
        """Resolve packages for every project referenced by a solution."""

    @abstractmethod
    async def scan_directory(self, directory: Path) -> list[ProjectPackages]:
        """Resolve packages for every project detected under *directory*."""


def list_root_file_names(directory: Path) -> list[str]:
    """Return the names (not paths) of regular files directly in *directory*.

    Feeds the ``file-exists`` match strategy. Sorted for stable logging.
    """
    if not directory.is_dir():
        return []
    return sorted(p.name for p in directory.iterdir() if p.is_file())
