"""SKILL.md frontmatter parsing and validation.

Every skill ships a ``SKILL.md`` whose YAML frontmatter, delimited by ``---``
lines, names and describes it. Validation rules:

- ``name``: required, 1-64 chars of lowercase alphanumerics and hyphens,
  starting with an alphanumeric.
- ``description``: required, 1-1024 chars.
- ``compatibility``: optional, at most 500 chars.

Installation never fails on bad metadata; the installer falls back to the
directory name and logs the validation errors.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from smartskills.exceptions import SkillMetadataError

logger = logging.getLogger(__name__)

SKILL_FILE_NAME = "SKILL.md"

_FRONTMATTER_PATTERN = re.compile(r"\A---\s*\n(.*?)\n---\s*(?:\n|\Z)", re.DOTALL)
_NAME_PATTERN = re.compile(r"^[a-z0-9][a-z0-9-]*$")

_MAX_NAME = 64
_MAX_DESCRIPTION = 1024
_MAX_COMPATIBILITY = 500


@dataclass(frozen=True)
class SkillMetadata:
    """Parsed SKILL.md frontmatter.

    Attributes:
        name: Skill identifier; matches the install directory name.
        description: What the skill does and when an agent should use it.
        license: Optional license name or bundled license file reference.
        compatibility: Optional environment requirements.
        metadata: Optional free-form string key/value pairs.
        allowed_tools: Optional space-delimited list of pre-approved tools.
    """

    name: str
    description: str
    license: str | None = None
    compatibility: str | None = None
    metadata: dict[str, str] = field(default_factory=dict)
    allowed_tools: str | None = None


def parse_skill_metadata(content: str) -> SkillMetadata:
    """Parse and validate SKILL.md content.

    Raises:
        SkillMetadataError: With every validation problem found.
    """
    match = _FRONTMATTER_PATTERN.match(content)
    if match is None:
        raise SkillMetadataError(["No YAML frontmatter found (expected --- delimiters)."])

    try:
        data = yaml.safe_load(match.group(1)) or {}
    except yaml.YAMLError as exc:
        raise SkillMetadataError([f"Failed to parse YAML: {exc}"]) from exc
    if not isinstance(data, dict):
        raise SkillMetadataError(["Frontmatter must be a YAML mapping."])

    errors: list[str] = []
    name = _optional_str(data.get("name"))
    description = _optional_str(data.get("description"))
    compatibility = _optional_str(data.get("compatibility"))

    if not name:
        errors.append("'name' is required.")
    elif len(name) > _MAX_NAME or not _NAME_PATTERN.match(name):
        errors.append("'name' must be 1-64 lowercase alphanumeric chars or hyphens.")

    if not description:
        errors.append("'description' is required.")
    elif len(description) > _MAX_DESCRIPTION:
        errors.append("'description' must be 1-1024 characters.")

    if compatibility is not None and len(compatibility) > _MAX_COMPATIBILITY:
        errors.append("'compatibility' must be at most 500 characters.")

    if errors:
        raise SkillMetadataError(errors)

    raw_meta = data.get("metadata") or {}
    return SkillMetadata(
        name=name,
        description=description,
        license=_optional_str(data.get("license")),
        compatibility=compatibility,
        metadata={str(k): str(v) for k, v in raw_meta.items()} if isinstance(raw_meta, dict) else {},
        allowed_tools=_optional_str(data.get("allowed-tools")),
    )


def read_skill_metadata(install_dir: Path, fallback_name: str) -> SkillMetadata:
    """Read SKILL.md from an installed skill, falling back on any problem."""
    skill_md = install_dir / SKILL_FILE_NAME
    if skill_md.is_file():
        try:
            return parse_skill_metadata(skill_md.read_text(encoding="utf-8"))
        except SkillMetadataError as exc:
            logger.warning("SKILL.md validation failed for %s: %s", fallback_name, exc)
    return SkillMetadata(name=fallback_name, description="Unknown")


def _optional_str(value: Any) -> str | None:
    if value is None:
        return None
    return str(value).strip()
