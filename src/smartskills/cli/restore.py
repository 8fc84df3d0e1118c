"""``smart-skills restore [path]`` --- Reinstall skills pinned in the lock file.

Each entry is fetched at its recorded commit. Entries whose installed files
already match the recorded hash are left alone.

Exit Codes:
    0 --- All entries restored or already up to date.
    1 --- One or more entries failed.
    2 --- Configuration error.
"""

from __future__ import annotations

import asyncio
import sys
from pathlib import Path

import click

from smartskills.cli.output import print_error, print_restore_result
from smartskills.cli.runtime import build_installer, project_root
from smartskills.exceptions import SmartSkillsError


@click.command("restore")
@click.argument("path", type=click.Path(exists=True), default=".")
@click.pass_context
def restore_command(ctx: click.Context, path: str) -> None:
    """Restore skills recorded in smart-skills.lock.json under PATH."""
    root = project_root(Path(path))
    try:
        installer = build_installer(root, (ctx.obj or {}).get("config_path"))
        result = asyncio.run(installer.restore(root))
    except SmartSkillsError as exc:
        print_error(str(exc))
        sys.exit(2)

    print_restore_result(result)
    sys.exit(1 if result.failed else 0)
