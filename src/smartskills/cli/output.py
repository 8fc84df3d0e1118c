"""Rich output formatting helpers for the SmartSkills CLI.

Tables go to stdout; error messages are printed in red. Styles:
    installed = bold green, updated = cyan, up to date = dim,
    locally modified = yellow, planned = magenta, failed = bold red
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from rich.console import Console
from rich.table import Table
from rich.text import Text

from smartskills.core.installer import InstallResult, RestoreResult
from smartskills.core.lockfile import SkillsLockFile
from smartskills.core.metadata import read_skill_metadata

console = Console()

_SHORT_SHA = 10


def short_sha(sha: str) -> str:
    return sha[:_SHORT_SHA] if sha else "-"


def print_error(message: str) -> None:
    console.print(f"[bold red]Error:[/bold red] {message}")


def print_install_result(result: InstallResult, dry_run: bool = False) -> None:
    """Print one row per skill touched by an install run.

    Args:
        result: Outcome of ``SkillInstaller.install``.
        dry_run: Title the table as a plan rather than a report.
    """
    title = "SmartSkills Install Plan" if dry_run else "SmartSkills Install"
    table = Table(title=title, show_header=True, header_style="bold")
    table.add_column("Skill", style="bold")
    table.add_column("Status", justify="center")
    table.add_column("Commit", style="dim")
    table.add_column("Detail")

    for skill in result.installed:
        table.add_row(skill.name, Text("installed", style="bold green"),
                      short_sha(skill.commit_sha), skill.metadata.description)
    for skill in result.updated:
        table.add_row(skill.name, Text("updated", style="cyan"),
                      short_sha(skill.commit_sha), skill.metadata.description)
    for path in result.skipped_up_to_date:
        table.add_row(path, Text("up to date", style="dim"), "-", "")
    for path in result.skipped_locally_modified:
        table.add_row(path, Text("modified", style="yellow"), "-",
                      "local changes kept; use --force to overwrite")
    for path in result.planned:
        table.add_row(path, Text("planned", style="magenta"), "-", "")
    for failure in result.failed:
        table.add_row(failure.skill_path, Text("failed", style="bold red"), "-", failure.reason)

    if table.row_count == 0:
        console.print("[dim]No skills matched this project.[/dim]")
        return
    console.print(table)

    parts = [
        f"[green]{len(result.installed)} installed[/green]",
        f"[cyan]{len(result.updated)} updated[/cyan]",
        f"{len(result.skipped_up_to_date)} up to date",
    ]
    if result.skipped_locally_modified:
        parts.append(f"[yellow]{len(result.skipped_locally_modified)} locally modified[/yellow]")
    if result.planned:
        parts.append(f"[magenta]{len(result.planned)} planned[/magenta]")
    if result.failed:
        parts.append(f"[red]{len(result.failed)} failed[/red]")
    console.print(" | ".join(parts))


def print_restore_result(result: RestoreResult) -> None:
    """Print a restore summary with any failures listed."""
    console.print(
        f"[bold]{len(result.restored)}[/bold] restored | "
        f"{len(result.skipped_up_to_date)} up to date | "
        f"{len(result.failed)} failed"
    )
    for failure in result.failed:
        console.print(f"  [red]{failure.skill_path}[/red]: {failure.reason}")


def print_lock_entries(lock_file: SkillsLockFile, skills_root: Path) -> None:
    """Print the lock file as a table, with descriptions from installed SKILL.md files.

    Args:
        lock_file: Loaded lock file.
        skills_root: Directory holding installed skill directories.
    """
    if not lock_file.skills:
        console.print("[dim]No skills installed.[/dim]")
        return

    table = Table(title="Installed Skills", show_header=True, header_style="bold")
    table.add_column("Skill", style="bold")
    table.add_column("Commit", style="dim")
    table.add_column("Language")
    table.add_column("Content")
    table.add_column("Description")

    for name in lock_file.skill_names:
        entry = lock_file.skills[name]
        install_dir = skills_root / name
        if not install_dir.is_dir():
            content = Text("missing", style="red")
            description = ""
        else:
            content = Text("ok" if entry.has_known_hash else "unknown",
                           style="green" if entry.has_known_hash else "yellow")
            description = read_skill_metadata(install_dir, name).description
        table.add_row(name, short_sha(entry.commit_sha), entry.ecosystem or "-",
                      content, description)
    console.print(table)


def install_result_to_json(result: InstallResult) -> dict[str, Any]:
    """Convert an install result to a JSON-serializable dict."""
    def installed(skill: Any) -> dict[str, Any]:
        return {
            "name": skill.name,
            "description": skill.metadata.description,
            "installPath": str(skill.install_path),
            "commitSha": skill.commit_sha,
            "sourceProviderType": skill.source_provider_type,
            "sourceUrl": skill.source_url,
        }

    return {
        "installed": [installed(s) for s in result.installed],
        "updated": [installed(s) for s in result.updated],
        "skippedUpToDate": list(result.skipped_up_to_date),
        "skippedLocallyModified": list(result.skipped_locally_modified),
        "planned": list(result.planned),
        "failed": [{"skillPath": f.skill_path, "reason": f.reason} for f in result.failed],
    }
