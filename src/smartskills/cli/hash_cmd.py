"""``smart-skills hash <dir>`` --- Print the content hash of a directory."""

from __future__ import annotations

import click

from smartskills.core.hashing import compute_hash


@click.command("hash")
@click.argument("directory", type=click.Path(exists=True, file_okay=False))
def hash_command(directory: str) -> None:
    """Print the sha256 content hash of DIRECTORY as recorded in lock files."""
    click.echo(compute_hash(directory))
