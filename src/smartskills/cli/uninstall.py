"""``smart-skills uninstall <name>`` --- Remove an installed skill."""

from __future__ import annotations

import asyncio
import sys
from pathlib import Path

import click

from smartskills.cli.output import console, print_error
from smartskills.cli.runtime import build_installer
from smartskills.exceptions import SmartSkillsError


@click.command("uninstall")
@click.argument("name")
@click.option(
    "--project", "project",
    type=click.Path(exists=True, file_okay=False),
    default=".",
    help="Project root holding the lock file (default: current directory).",
)
@click.pass_context
def uninstall_command(ctx: click.Context, name: str, project: str) -> None:
    """Remove skill NAME and its lock file entry.

    Exit code 0 if the entry was removed, 1 if NAME was not in the lock
    file, 2 on configuration errors.
    """
    root = Path(project)
    try:
        installer = build_installer(root, (ctx.obj or {}).get("config_path"))
        removed = asyncio.run(installer.uninstall(name, root))
    except (ValueError, SmartSkillsError) as exc:
        print_error(str(exc))
        sys.exit(2)

    if removed:
        console.print(f"[green]Uninstalled[/green] {name}")
        sys.exit(0)
    console.print(f"[yellow]{name} is not recorded in the lock file.[/yellow]")
    sys.exit(1)
