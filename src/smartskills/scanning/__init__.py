"""Project scanning collaborators.

The synchronization engine only consumes the flat list of resolved packages
these produce; per-ecosystem lockfile parsing lives behind ``LibraryScanner``.

Public API::

    from smartskills.scanning import LibraryScanner, ManifestScanner
    from smartskills.scanning import ProjectPackages, ResolvedPackage
"""

from __future__ import annotations

from smartskills.scanning.base import LibraryScanner, list_root_file_names
from smartskills.scanning.manifest import ManifestScanner
from smartskills.scanning.models import ProjectPackages, ResolvedPackage

__all__ = [
    "LibraryScanner",
    "ManifestScanner",
    "ProjectPackages",
    "ResolvedPackage",
    "list_root_file_names",
]
