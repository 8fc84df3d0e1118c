"""``smart-skills list [path]`` --- Show skills recorded in the lock file."""

from __future__ import annotations

import sys
from pathlib import Path

import click

from smartskills.cli.output import print_error, print_lock_entries
from smartskills.cli.runtime import project_root
from smartskills.config import load_config
from smartskills.core.layout import skills_root
from smartskills.core.lockfile import LockFileStore, serialize
from smartskills.exceptions import SmartSkillsError


@click.command("list")
@click.argument("path", type=click.Path(exists=True), default=".")
@click.option(
    "--format", "output_format",
    type=click.Choice(["text", "json"], case_sensitive=False),
    default="text",
    help="Output format (default: text).",
)
@click.pass_context
def list_command(ctx: click.Context, path: str, output_format: str) -> None:
    """List installed skills for the project at PATH."""
    root = project_root(Path(path))
    try:
        config = load_config(root, (ctx.obj or {}).get("config_path"))
        lock_file = LockFileStore(config.install_dir).load(root)
    except SmartSkillsError as exc:
        print_error(str(exc))
        sys.exit(2)

    if output_format.lower() == "json":
        click.echo(serialize(lock_file), nl=False)
    else:
        print_lock_entries(lock_file, skills_root(root, config.install_dir))
