"""Deterministic content hashing over an installed skill directory.

The digest lets the installer tell "local files were edited" apart from
"remote changed" without diffing. The algorithm is fixed so that hashes
recorded by earlier installations stay comparable:

1. Enumerate all files recursively, skipping any file whose relative path
   has a segment starting with ``.`` (VCS metadata, staging directories).
2. Convert each relative path to ``/`` separators and Unicode NFC.
3. Sort paths by code point (ordinal), never by locale.
4. For each file append ``"<relpath>\\n<sha256-hex>\\n"`` to a manifest.
5. Hash the UTF-8 manifest and return ``"sha256:<hex>"``.
"""

from __future__ import annotations

import hashlib
import os
import unicodedata
from pathlib import Path

from smartskills.exceptions import DirectoryNotFoundError

HASH_PREFIX = "sha256:"

_CHUNK_SIZE = 64 * 1024


def compute_hash(directory: str | os.PathLike[str]) -> str:
    """Compute the content hash of every non-hidden file under *directory*.

    Args:
        directory: Root of the skill installation.

    Returns:
        Digest string in ``"sha256:<64 lowercase hex chars>"`` format.

    Raises:
        DirectoryNotFoundError: If *directory* does not exist.
    """
    root = Path(directory)
    if not root.is_dir():
        raise DirectoryNotFoundError(f"Directory not found: {root}")

    manifest: list[str] = []
    for rel, path in sorted(_relative_paths(root)):
        manifest.append(f"{rel}\n{hash_file(path)}\n")

    digest = hashlib.sha256("".join(manifest).encode("utf-8")).hexdigest()
    return HASH_PREFIX + digest


def hash_file(path: Path) -> str:
    """Return the lowercase SHA-256 hex digest of a file's raw bytes."""
    sha = hashlib.sha256()
    with path.open("rb") as fh:
        for chunk in iter(lambda: fh.read(_CHUNK_SIZE), b""):
            sha.update(chunk)
    return sha.hexdigest()


def _relative_paths(root: Path) -> list[tuple[str, Path]]:
    """Collect (normalized relative path, on-disk path) for non-hidden files."""
    paths: list[tuple[str, Path]] = []
    for dirpath, dirnames, filenames in os.walk(root):
        dirnames[:] = [d for d in dirnames if not d.startswith(".")]
        rel_dir = Path(dirpath).relative_to(root)
        for name in filenames:
            if name.startswith("."):
                continue
            rel = (rel_dir / name).as_posix()
            paths.append((unicodedata.normalize("NFC", rel), Path(dirpath, name)))
    return paths
