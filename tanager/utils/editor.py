# MIT License
# Copyright (c) 2025 Matt / Grain Ecosystem

"""Launching the user's editor."""

import shlex
import subprocess
from typing import Sequence

from tanager.core.errors import EditorError
from tanager.logging import get_logger


def split_command(command: str) -> list[str]:
    """Split an editor command like "code --wait" into argv form."""
    try:
        return shlex.split(command)
    except ValueError:
        # Unbalanced quotes, treat the whole thing as the program name
        return [command]


def launch_editor(command: str, args: Sequence[str]) -> None:
    """
    Run the editor on the given arguments.

    The editor inherits this process's terminal (stdin/stdout/stderr are not
    captured) and its exit status is not checked.

    Raises:
        EditorError: the editor program could not be found or started
    """
    argv = split_command(command) + [str(a) for a in args]
    if not argv:
        raise EditorError("Editor command is empty. Try setting $VISUAL.", command=command)

    get_logger("editor").debug(f"Launching editor: {argv}")
    try:
        subprocess.run(argv, check=False)
    except FileNotFoundError as e:
        raise EditorError(f"Editor '{argv[0]}' not found.", command=command) from e
    except PermissionError as e:
        raise EditorError(f"Editor '{argv[0]}' is not executable.", command=command) from e
