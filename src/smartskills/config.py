"""Layered JSON configuration for the skill installer.

Sources, lowest precedence first:

1. Built-in defaults.
2. User config: ``~/.smart-skills/config.json``.
3. Project config: ``<project>/.skills-installer.json``.
4. An explicit ``--config`` file.

Scalar keys from a later layer replace earlier ones. ``sources`` lists are
concatenated across layers and then ordered by ascending ``priority``
(stable, so equal priorities keep file order).

Example::

    {
      "installDir": ".agents/skills",
      "defaultBranch": "main",
      "sources": [
        {"type": "github", "url": "https://github.com/acme/skills", "priority": 10},
        {"type": "azuredevops",
         "url": "https://dev.azure.com/acme/tools/_git/skills",
         "branch": "release",
         "registryIndexPath": "registry/skills-registry.json"}
      ]
    }
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from smartskills.exceptions import ConfigError
from smartskills.providers.base import DEFAULT_BRANCH, DEFAULT_REGISTRY_INDEX_PATH

logger = logging.getLogger(__name__)

USER_CONFIG_PATH = Path("~/.smart-skills/config.json")
PROJECT_CONFIG_FILE_NAME = ".skills-installer.json"

SourceType = Literal["github", "azuredevops"]
DEFAULT_PRIORITY = 100


class SourceConfig(BaseModel):
    """A remote registry source.

    ``type`` is optional; when given it must agree with the host of ``url``.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, str_strip_whitespace=True)

    url: str = Field(min_length=1)
    type: SourceType | None = None
    branch: str | None = None
    registry_index_path: str = Field(DEFAULT_REGISTRY_INDEX_PATH, alias="registryIndexPath")
    priority: int = Field(DEFAULT_PRIORITY, strict=True)

    @field_validator("type", mode="before")
    @classmethod
    def _lowercase_type(cls, value: Any) -> Any:
        return value.lower() if isinstance(value, str) else value

    @field_validator("branch", mode="before")
    @classmethod
    def _blank_branch(cls, value: Any) -> Any:
        return value or None

    @field_validator("registry_index_path", mode="before")
    @classmethod
    def _blank_index_path(cls, value: Any) -> Any:
        return value or DEFAULT_REGISTRY_INDEX_PATH


class ConfigLayer(BaseModel):
    """One config file as written on disk."""

    model_config = ConfigDict(populate_by_name=True, str_strip_whitespace=True)

    sources: list[SourceConfig] = Field(default_factory=list)
    install_dir: str | None = Field(None, alias="installDir", min_length=1)
    default_branch: str | None = Field(None, alias="defaultBranch", min_length=1)


class SkillsConfig(BaseModel):
    """Effective configuration after all layers are applied."""

    model_config = ConfigDict(frozen=True)

    sources: tuple[SourceConfig, ...] = ()
    install_dir: str | None = None
    default_branch: str = DEFAULT_BRANCH


def load_config(
    project_dir: str | Path | None = None,
    config_path: str | Path | None = None,
) -> SkillsConfig:
    """Load and merge configuration layers.

    Args:
        project_dir: Project root whose ``.skills-installer.json`` applies.
        config_path: Explicit config file; must exist and be valid.

    Raises:
        ConfigError: If *config_path* is missing or invalid.
    """
    layers: list[ConfigLayer] = []

    user = USER_CONFIG_PATH.expanduser()
    if user.is_file():
        layers.append(_read_optional(user))
    if project_dir is not None:
        project = Path(project_dir) / PROJECT_CONFIG_FILE_NAME
        if project.is_file():
            layers.append(_read_optional(project))
    if config_path is not None:
        layers.append(_read_required(Path(config_path)))

    sources: list[SourceConfig] = []
    install_dir: str | None = None
    default_branch = DEFAULT_BRANCH
    for layer in layers:
        sources.extend(layer.sources)
        install_dir = layer.install_dir or install_dir
        default_branch = layer.default_branch or default_branch

    sources.sort(key=lambda s: s.priority)
    config = SkillsConfig(
        sources=tuple(sources),
        install_dir=install_dir,
        default_branch=default_branch,
    )
    logger.debug("Effective config: %s", config)
    return config


def _read_optional(path: Path) -> ConfigLayer:
    try:
        return _read_required(path)
    except ConfigError as exc:
        logger.warning("Ignoring config file %s: %s", path, exc)
        return ConfigLayer()


def _read_required(path: Path) -> ConfigLayer:
    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError as exc:
        raise ConfigError(f"Config file not found: {path}") from exc
    except (OSError, ValueError) as exc:
        raise ConfigError(f"Cannot read config file {path}: {exc}") from exc

    try:
        return ConfigLayer.model_validate(raw)
    except ValidationError as exc:
        raise ConfigError(f"Invalid config file {path}: {exc}") from exc
