"""SmartSkills CLI --- Keep agent skills in sync with project dependencies.

Entry point for the ``smart-skills`` command-line tool. Registers all
subcommands under a single Click group.

Commands:
    install    --- Install or update skills matched to a project.
    restore    --- Reinstall skills at the commits pinned in the lock file.
    uninstall  --- Remove an installed skill.
    list       --- Show installed skills.
    hash       --- Print a directory's content hash.

Usage::

    smart-skills install                     # Current directory
    smart-skills install ./app --dry-run
    smart-skills install ./app --force
    smart-skills restore
    smart-skills uninstall react
    smart-skills list --format json
    smart-skills --config team.json install
"""

from __future__ import annotations

import click

from smartskills import __version__
from smartskills.cli.hash_cmd import hash_command
from smartskills.cli.install import install_command
from smartskills.cli.list_cmd import list_command
from smartskills.cli.logging_setup import configure_logging
from smartskills.cli.restore import restore_command
from smartskills.cli.uninstall import uninstall_command


@click.group()
@click.version_option(version=__version__, prog_name="smart-skills")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging.")
@click.option(
    "--config", "config_path",
    type=click.Path(exists=True, dir_okay=False),
    default=None,
    help="Config file applied on top of user and project config.",
)
@click.pass_context
def cli(ctx: click.Context, verbose: bool, config_path: str | None) -> None:
    """SmartSkills: install agent skills matched to your dependencies.

    Scans projects for packages and marker files, matches them against
    skill registries, and keeps .agents/skills in sync with a lock file.
    """
    configure_logging(verbose)
    ctx.ensure_object(dict)
    ctx.obj["config_path"] = config_path


# Register all subcommands
cli.add_command(install_command)
cli.add_command(restore_command)
cli.add_command(uninstall_command)
cli.add_command(list_command)
cli.add_command(hash_command)
