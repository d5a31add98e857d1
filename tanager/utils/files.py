# MIT License
# Copyright (c) 2025 Matt / Grain Ecosystem

"""Filesystem helpers used by the entry dispatcher."""

from pathlib import Path
from typing import Iterable, Union


def expand_user(path: Union[str, Path]) -> Path:
    """Replace a leading ~ with the user's home directory."""
    return Path(path).expanduser()


def ensure_dir(path: Union[str, Path]) -> None:
    """Create a directory and any missing parents. No-op if it exists."""
    Path(path).mkdir(parents=True, exist_ok=True)


def find_files(directory: Union[str, Path], suffixes: Iterable[str]) -> list[Path]:
    """
    List files under a directory (recursively) ending in one of the suffixes.

    A missing directory has no files.
    """
    root = Path(directory)
    if not root.is_dir():
        return []
    wanted = tuple(suffixes)
    return [p for p in root.rglob("*") if p.is_file() and p.name.endswith(wanted)]


def get_mtime(path: Union[str, Path]) -> float:
    """Get a file's modification time as a POSIX timestamp."""
    return Path(path).stat().st_mtime
