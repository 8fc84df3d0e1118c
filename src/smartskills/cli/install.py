"""``smart-skills install [path]`` --- Install skills matched to a project.

Scans PATH for packages, matches them against the embedded and configured
registries, and installs or updates each matched skill under
``.agents/skills``. The lock file is updated once at the end of the run.

Exit Codes:
    0 --- Every matched skill was installed, updated, or skipped.
    1 --- One or more skills failed.
    2 --- Configuration error (bad config, lock file, or registry).
"""

from __future__ import annotations

import asyncio
import json
import sys
from pathlib import Path

import click

from smartskills.cli.output import install_result_to_json, print_error, print_install_result
from smartskills.cli.runtime import build_installer, project_root
from smartskills.core.installer import InstallOptions
from smartskills.exceptions import SmartSkillsError


@click.command("install")
@click.argument("path", type=click.Path(exists=True), default=".")
@click.option("--dry-run", is_flag=True, help="Show what would change without touching disk.")
@click.option("--force", is_flag=True, help="Overwrite skills with local modifications.")
@click.option(
    "--format", "output_format",
    type=click.Choice(["text", "json"], case_sensitive=False),
    default="text",
    help="Output format (default: text).",
)
@click.pass_context
def install_command(
    ctx: click.Context, path: str, dry_run: bool, force: bool, output_format: str,
) -> None:
    """Install skills for the project, solution, or directory at PATH."""
    target = Path(path)
    config_path = (ctx.obj or {}).get("config_path")
    try:
        installer = build_installer(project_root(target), config_path)
        result = asyncio.run(installer.install(
            InstallOptions(project_path=target, dry_run=dry_run, force=force)
        ))
    except SmartSkillsError as exc:
        print_error(str(exc))
        sys.exit(2)

    if output_format.lower() == "json":
        click.echo(json.dumps(install_result_to_json(result), indent=2))
    else:
        print_install_result(result, dry_run=dry_run)
    sys.exit(1 if result.failed else 0)
