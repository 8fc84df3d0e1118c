"""Skill installer: reconciles scanned projects, the registry, and disk.

One ``install`` call runs the whole pipeline:

1. Load the lock file (migrating legacy state if needed).
2. Scan the project path for resolved packages and root file names.
3. Merge registries and match entries against the project.
4. For each matched skill, look up the latest remote commit and decide:

   ============  =================  ==================  ====================
   Lock entry    Remote SHA equal   Local hash equal    Action
   ============  =================  ==================  ====================
   absent        n/a                n/a                 install
   present       yes                yes                 skip (up to date)
   present       yes                no, no force        skip (locally edited)
   present       yes                no, force           update
   present       no                 not checked         update
   ============  =================  ==================  ====================

5. Save the lock file once, only if an entry changed.

Skills are processed sequentially. A failure in one skill is recorded in the
result and the batch continues; configuration errors abort the call.
Cancellation is plain asyncio task cancellation: it surfaces at the next
await and the lock file is not saved.
"""

from __future__ import annotations

import enum
import logging
import shutil
import tempfile
from pathlib import Path, PurePosixPath

from smartskills.core.hashing import compute_hash
from smartskills.core.installer.models import (
    InstalledSkill,
    InstallOptions,
    InstallResult,
    RestoreResult,
    SkillInstallFailure,
)
from smartskills.core.layout import is_valid_skill_name, skill_dir
from smartskills.core.lockfile import LockFileStore, SkillLockEntry, SkillsLockFile
from smartskills.core.matcher import SkillMatcher
from smartskills.core.metadata import read_skill_metadata
from smartskills.exceptions import ConfigurationError, ProviderError
from smartskills.providers import SkillSourceProvider, SkillSourceProviderFactory
from smartskills.registry import MatchedSkill, SkillRegistry
from smartskills.scanning import LibraryScanner, ProjectPackages, list_root_file_names

logger = logging.getLogger(__name__)

_SOLUTION_SUFFIXES = frozenset({".sln", ".slnx"})
_STAGING_DIR_NAME = ".tmp"


class SyncAction(enum.Enum):
    """What the installer will do with one matched skill."""

    INSTALL = "install"
    UPDATE = "update"
    SKIP_UP_TO_DATE = "up-to-date"
    SKIP_LOCALLY_MODIFIED = "locally-modified"


def decide_action(
    lock_entry: SkillLockEntry | None,
    latest_commit_sha: str,
    current_hash: str | None,
    force: bool = False,
) -> SyncAction:
    """Apply the install state table.

    Args:
        lock_entry: Existing lock entry for the skill, if any.
        latest_commit_sha: Latest remote commit touching the skill path.
        current_hash: Content hash of the installed directory, or None when
            the directory is missing.
        force: Overwrite local modifications when the remote is unchanged.
    """
    if lock_entry is None:
        return SyncAction.INSTALL
    if lock_entry.commit_sha != latest_commit_sha:
        return SyncAction.UPDATE
    if current_hash is None:
        return SyncAction.UPDATE
    if current_hash == lock_entry.local_content_hash:
        return SyncAction.SKIP_UP_TO_DATE
    if force:
        return SyncAction.UPDATE
    return SyncAction.SKIP_LOCALLY_MODIFIED


class SkillInstaller:
    """Installs, restores, and uninstalls skills for a project.

    Args:
        scanner: Resolves packages for the project path.
        registry: Supplies merged registry entries.
        matcher: Matches entries to packages; defaults to the built-in
            strategies.
        lock_store: Reads and writes the lock file.
        provider_factory: Builds providers for entries without a source
            provider and for restore.
        install_dir: Skills root relative to the project, default
            ``.agents/skills``.
    """

    def __init__(
        self,
        scanner: LibraryScanner,
        registry: SkillRegistry,
        *,
        matcher: SkillMatcher | None = None,
        lock_store: LockFileStore | None = None,
        provider_factory: SkillSourceProviderFactory | None = None,
        install_dir: str | Path | None = None,
    ) -> None:
        self._scanner = scanner
        self._registry = registry
        self._matcher = matcher or SkillMatcher()
        self._lock_store = lock_store or LockFileStore(install_dir)
        self._provider_factory = provider_factory or SkillSourceProviderFactory()
        self._install_dir = install_dir

    # ------------------------------------------------------------------
    # Install
    # ------------------------------------------------------------------

    async def install(self, options: InstallOptions) -> InstallResult:
        """Install or update every skill matched for the project.

        Raises:
            ValueError: If *options* is None.
            FileNotFoundError: If the project path does not exist.
            ConfigurationError: For an unknown match strategy or an unusable
                lock file.
        """
        if options is None:
            raise ValueError("options must not be None")

        project_path = Path(options.project_path or Path.cwd())
        if not project_path.exists():
            raise FileNotFoundError(f"Project path not found: {project_path}")
        base_dir = project_path if project_path.is_dir() else project_path.parent

        lock_file = self._lock_store.load(base_dir)
        projects = await self._scan(project_path)
        packages = [pkg for project in projects for pkg in project.packages]
        root_files = list_root_file_names(base_dir)
        logger.info(
            "Resolved %d packages across %d projects in %s",
            len(packages), len(projects), project_path,
        )

        entries = await self._registry.get_entries()
        matched = self._matcher.match(packages, entries, root_files)
        logger.info("Matched %d skills", len(matched))

        result = InstallResult()
        changed = False
        claimed: dict[str, str] = {}
        for skill in matched:
            skill_path = skill.registry_entry.skill_path
            try:
                changed |= await self._sync_skill(
                    skill, base_dir, lock_file, options, result, claimed,
                )
            except ConfigurationError:
                raise
            except Exception as exc:
                logger.warning("Failed to install skill %s: %s", skill_path, exc, exc_info=True)
                result.failed.append(SkillInstallFailure(skill_path, str(exc)))

        if changed and not options.dry_run:
            self._lock_store.save(base_dir, lock_file)

        logger.info(
            "Install finished: %d installed, %d updated, %d up to date, "
            "%d locally modified, %d planned, %d failed",
            len(result.installed), len(result.updated), len(result.skipped_up_to_date),
            len(result.skipped_locally_modified), len(result.planned), len(result.failed),
        )
        return result

    async def _scan(self, project_path: Path) -> list[ProjectPackages]:
        if project_path.is_dir():
            return await self._scanner.scan_directory(project_path)
        if project_path.suffix.lower() in _SOLUTION_SUFFIXES:
            return await self._scanner.scan_solution(project_path)
        return [await self._scanner.scan_project(project_path)]

    async def _sync_skill(
        self,
        skill: MatchedSkill,
        base_dir: Path,
        lock_file: SkillsLockFile,
        options: InstallOptions,
        result: InstallResult,
        claimed: dict[str, str],
    ) -> bool:
        """Reconcile one matched skill. Returns True if the lock file changed.

        *claimed* maps case-folded install directory names to the skill path
        that took them earlier in this run.
        """
        entry = skill.registry_entry
        name = entry.skill_name
        if not is_valid_skill_name(name):
            raise ProviderError(f"Invalid install directory name {name!r} for {entry.skill_path!r}")
        owner = claimed.setdefault(name.casefold(), entry.skill_path)
        if owner != entry.skill_path:
            raise ProviderError(f"Install directory {name!r} already used by {owner}")

        provider = entry.source_provider
        if provider is None:
            if not entry.repo_url:
                raise ProviderError("No source provider or repoUrl configured for this skill")
            provider = self._provider_factory.create_from_repo_url(entry.repo_url)
        remote_url = entry.repo_url or provider.repo_url

        lock_entry = lock_file.skills.get(name)
        if lock_entry is not None and not _same_source(lock_entry, entry.skill_path, remote_url):
            raise ProviderError(
                f"Install directory {name!r} is locked to {lock_entry.skill_path} "
                f"from {lock_entry.remote_url or 'an unknown repository'}; uninstall it first"
            )

        target = skill_dir(base_dir, name, self._install_dir)
        latest_sha = await provider.get_latest_commit_sha(entry.skill_path)

        current_hash = None
        if lock_entry is not None and lock_entry.commit_sha == latest_sha and target.is_dir():
            current_hash = compute_hash(target)
        action = decide_action(lock_entry, latest_sha, current_hash, options.force)
        logger.debug("Skill %s: %s (remote %s)", name, action.value, latest_sha)

        if action in (SyncAction.SKIP_UP_TO_DATE, SyncAction.SKIP_LOCALLY_MODIFIED):
            if action is SyncAction.SKIP_UP_TO_DATE:
                result.skipped_up_to_date.append(entry.skill_path)
            else:
                logger.warning(
                    "Skill %s has local modifications; skipping (use --force to overwrite)", name,
                )
                result.skipped_locally_modified.append(entry.skill_path)
            # Migrated entries carry no repository URL until one is seen here.
            if lock_entry.remote_url:
                return False
            lock_entry.remote_url = remote_url
            logger.info("Recorded repository %s for skill %s", remote_url, name)
            return True

        if options.dry_run:
            logger.info("[dry run] Would %s skill %s at %s", action.value, name, latest_sha)
            result.planned.append(entry.skill_path)
            return False

        await self._fetch(provider, entry.skill_path, target, latest_sha)
        content_hash = compute_hash(target)
        lock_file.skills[name] = SkillLockEntry(
            remote_url=remote_url,
            skill_path=entry.skill_path,
            commit_sha=latest_sha,
            local_content_hash=content_hash,
            ecosystem=entry.ecosystem,
        )

        installed = InstalledSkill(
            name=name,
            metadata=read_skill_metadata(target, name),
            install_path=target,
            commit_sha=latest_sha,
            source_provider_type=provider.provider_type,
            source_url=entry.skill_path,
        )
        if action is SyncAction.INSTALL:
            logger.info("Installed skill %s at %s", name, latest_sha)
            result.installed.append(installed)
        else:
            logger.info("Updated skill %s to %s", name, latest_sha)
            result.updated.append(installed)
        return True

    # ------------------------------------------------------------------
    # Restore
    # ------------------------------------------------------------------

    async def restore(self, project_path: str | Path) -> RestoreResult:
        """Reproduce every lock file entry at its pinned commit.

        Entries whose installed content already matches the recorded hash are
        skipped. A hash mismatch after download is logged, not failed. Entries
        migrated with an unknown hash get the downloaded hash recorded.

        Raises:
            ValueError: If *project_path* is blank.
        """
        if project_path is None or not str(project_path).strip():
            raise ValueError("project_path must not be blank")

        path = Path(project_path)
        base_dir = path if path.is_dir() or not path.exists() else path.parent
        lock_file = self._lock_store.load(base_dir)
        result = RestoreResult()
        if not lock_file.skills:
            logger.info("No skills recorded in %s", self._lock_store.lock_path(base_dir))
            return result

        changed = False
        for name in lock_file.skill_names:
            entry = lock_file.skills[name]
            try:
                changed |= await self._restore_skill(name, entry, base_dir, lock_file, result)
            except ConfigurationError:
                raise
            except Exception as exc:
                logger.warning("Failed to restore skill %s: %s", name, exc, exc_info=True)
                result.failed.append(SkillInstallFailure(entry.skill_path, str(exc)))

        if changed:
            self._lock_store.save(base_dir, lock_file)
        logger.info(
            "Restore finished: %d restored, %d up to date, %d failed",
            len(result.restored), len(result.skipped_up_to_date), len(result.failed),
        )
        return result

    async def _restore_skill(
        self,
        name: str,
        entry: SkillLockEntry,
        base_dir: Path,
        lock_file: SkillsLockFile,
        result: RestoreResult,
    ) -> bool:
        if not is_valid_skill_name(name):
            raise ProviderError(f"Invalid install directory name {name!r} in lock file")
        target = skill_dir(base_dir, name, self._install_dir)
        if target.is_dir() and compute_hash(target) == entry.local_content_hash:
            result.skipped_up_to_date.append(name)
            return False

        provider = self._provider_factory.create_from_repo_url(entry.remote_url)
        await self._fetch(provider, entry.skill_path, target, entry.commit_sha or None)
        restored_hash = compute_hash(target)
        result.restored.append(name)

        if not entry.has_known_hash:
            lock_file.skills[name] = SkillLockEntry(
                remote_url=entry.remote_url,
                skill_path=entry.skill_path,
                commit_sha=entry.commit_sha,
                local_content_hash=restored_hash,
                ecosystem=entry.ecosystem,
            )
            return True
        if restored_hash != entry.local_content_hash:
            logger.warning(
                "Restored skill %s hash %s does not match lock file hash %s",
                name, restored_hash, entry.local_content_hash,
            )
        return False

    # ------------------------------------------------------------------
    # Uninstall
    # ------------------------------------------------------------------

    async def uninstall(self, skill_name: str, project_root: str | Path) -> bool:
        """Remove an installed skill and its lock entry.

        Returns:
            True if a lock entry was removed. The lock file is only saved in
            that case.

        Raises:
            ValueError: If *skill_name* is not a plain directory name.
        """
        if not is_valid_skill_name(skill_name):
            raise ValueError(f"Invalid skill name: {skill_name!r}")

        root = Path(project_root)
        lock_file = self._lock_store.load(root)
        target = skill_dir(root, skill_name, self._install_dir)
        if target.is_dir():
            shutil.rmtree(target)
            logger.info("Removed %s", target)

        removed = lock_file.skills.pop(skill_name, None)
        if removed is None:
            logger.debug("Skill %s not present in lock file", skill_name)
            return False
        self._lock_store.save(root, lock_file)
        return True

    # ------------------------------------------------------------------
    # Fetch
    # ------------------------------------------------------------------

    async def _fetch(
        self,
        provider: SkillSourceProvider,
        skill_path: str,
        target: Path,
        commit_sha: str | None,
    ) -> None:
        """Download a skill into a staging directory, then swap it into *target*."""
        files = await provider.list_skill_files(skill_path, commit_sha)
        if not files:
            raise ProviderError(f"No files found under {skill_path!r}")
        relative = [_safe_relative_path(rel) for rel in files]

        staging_root = target.parent / _STAGING_DIR_NAME
        staging_root.mkdir(parents=True, exist_ok=True)
        staging = Path(tempfile.mkdtemp(prefix=f"{target.name}-", dir=staging_root))
        backup: Path | None = None
        try:
            for rel in relative:
                remote = f"{skill_path.strip('/')}/{rel.as_posix()}"
                dest = staging.joinpath(*rel.parts)
                dest.parent.mkdir(parents=True, exist_ok=True)
                dest.write_bytes(await provider.download_file(remote, commit_sha))
                logger.debug("Downloaded %s", remote)

            if target.exists():
                backup = staging_root / f"{staging.name}.bak"
                target.replace(backup)
            try:
                staging.replace(target)
            except OSError:
                if backup is not None:
                    backup.replace(target)
                    backup = None
                raise
        finally:
            shutil.rmtree(staging, ignore_errors=True)
            if backup is not None:
                shutil.rmtree(backup, ignore_errors=True)
            _remove_if_empty(staging_root)


def _safe_relative_path(rel: str) -> PurePosixPath:
    """Validate a provider-relative file path.

    Raises:
        ProviderError: If the path is empty, absolute, or escapes the skill
            directory.
    """
    normalized = rel.replace("\\", "/")
    path = PurePosixPath(normalized)
    if not normalized.strip("/") or path.is_absolute() or ".." in path.parts:
        raise ProviderError(f"Refusing unsafe file path from provider: {rel!r}")
    if ":" in path.parts[0]:
        raise ProviderError(f"Refusing unsafe file path from provider: {rel!r}")
    return path


def _same_source(lock_entry: SkillLockEntry, skill_path: str, remote_url: str) -> bool:
    """True if *lock_entry* records the skill at *skill_path* in *remote_url*.

    An empty recorded URL (migrated entry) matches any repository.
    """
    if lock_entry.skill_path.strip("/").casefold() != skill_path.strip("/").casefold():
        return False
    if not lock_entry.remote_url:
        return True
    return _normalize_url(lock_entry.remote_url) == _normalize_url(remote_url)


def _normalize_url(url: str) -> str:
    url = url.strip().rstrip("/").casefold()
    return url[:-4] if url.endswith(".git") else url


def _remove_if_empty(directory: Path) -> None:
    try:
        directory.rmdir()
    except OSError:
        pass
