"""
scriptor.io - File moves, removal, and output cleanup.

Centralized filesystem helpers for all pipeline stages.
"""

from __future__ import annotations

import shutil
from pathlib import Path

GENERATED_SUFFIXES = (".wav", ".txt")


def relocate(src: Path, dest: Path) -> Path:
    """Move a file into place, across filesystems if needed.

    Args:
        src: Existing file
        dest: Destination path (parent created if missing)

    Returns:
        The destination path
    """
    dest.parent.mkdir(parents=True, exist_ok=True)
    shutil.move(str(src), str(dest))
    return dest


def remove_file(path: Path) -> bool:
    """Delete a file if it exists. Returns True if something was removed."""
    if path.is_file():
        path.unlink()
        return True
    return False


def clean_outputs(output_dir: Path) -> list[Path]:
    """Delete generated WAV and TXT files directly inside ``output_dir``.

    Subdirectories and every other file are left untouched.

    Returns:
        Paths that were removed, sorted
    """
    if not output_dir.is_dir():
        return []
    removed = []
    for path in sorted(output_dir.iterdir()):
        if path.suffix.lower() in GENERATED_SUFFIXES and path.is_file():
            path.unlink()
            removed.append(path)
    return removed
