"""Remote skill source providers (GitHub, Azure DevOps).

Public API::

    from smartskills.providers import SkillSourceProvider, SkillSourceProviderFactory
    from smartskills.providers.github import GitHubSkillSourceProvider
    from smartskills.providers.azure_devops import AdoSkillSourceProvider
"""

from __future__ import annotations

from smartskills.providers.base import SkillSourceProvider
from smartskills.providers.factory import SkillSourceProviderFactory

__all__ = [
    "SkillSourceProvider",
    "SkillSourceProviderFactory",
]
