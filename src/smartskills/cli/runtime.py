"""Wiring shared by the CLI commands: config, providers, and the installer."""

from __future__ import annotations

from pathlib import Path

from smartskills.config import SkillsConfig, load_config
from smartskills.core.installer import SkillInstaller
from smartskills.exceptions import ConfigError
from smartskills.providers import SkillSourceProvider, SkillSourceProviderFactory
from smartskills.registry import SkillRegistry
from smartskills.scanning import ManifestScanner


def project_root(path: str | Path) -> Path:
    """Directory that holds the lock file for a project path."""
    p = Path(path)
    return p if p.is_dir() else p.parent


def build_installer(project_dir: Path, config_path: str | None = None) -> SkillInstaller:
    """Create a ``SkillInstaller`` configured for *project_dir*.

    Raises:
        ConfigError: If the config cannot be loaded or names an unusable
            source URL.
    """
    config = load_config(project_dir, config_path)
    factory = SkillSourceProviderFactory(default_branch=config.default_branch)
    return SkillInstaller(
        ManifestScanner(),
        SkillRegistry(_source_providers(config, factory)),
        provider_factory=factory,
        install_dir=config.install_dir,
    )


def _source_providers(
    config: SkillsConfig, factory: SkillSourceProviderFactory,
) -> list[SkillSourceProvider]:
    providers: list[SkillSourceProvider] = []
    for source in config.sources:
        try:
            providers.append(factory.create_from_repo_url(
                source.url,
                branch=source.branch,
                registry_index_path=source.registry_index_path,
                provider_type=source.type,
            ))
        except ValueError as exc:
            raise ConfigError(f"Invalid registry source: {exc}") from exc
    return providers
