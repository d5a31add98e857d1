# MIT License
# Copyright (c) 2025 Matt / Grain Ecosystem

"""
Entry dispatcher - turns a resolved config, a date and the title words into
an action: open a new/existing entry, reopen the latest entry, or print the
notebook directory.

Filesystem and process access go through collaborators passed to
EntryDispatcher, so tests can swap them without patching module globals.
"""

from pathlib import Path
from typing import Callable, Iterable, Optional, Sequence, Union

from tanager.core.config import TanagerConfig
from tanager.core.errors import NoFilesFoundError
from tanager.core.notebooks import build_registry, resolve_notebook, strip_notebook_word
from tanager.core.template import DateLike, expand_path, get_file_suffix
from tanager.core.types import Notebook
from tanager.logging import get_logger
from tanager.utils import editor, files
from tanager.utils.terminal import safe_print

NO_FILES_MESSAGE = "No files in notebook"

PathLike = Union[str, Path]


def find_last_modified_file(
    directory: PathLike,
    suffixes: Iterable[str],
    find_files: Callable[[PathLike, Iterable[str]], Sequence[PathLike]] = files.find_files,
    get_mtime: Callable[[PathLike], float] = files.get_mtime,
) -> Path:
    """
    Find the most recently modified file under a directory.

    Every candidate is stat'ed before the newest is picked. Ties go to
    whichever tied file comes first from find_files.

    Raises:
        NoFilesFoundError: no file with a matching suffix exists
    """
    candidates = list(find_files(directory, set(suffixes)))
    if not candidates:
        raise NoFilesFoundError(NO_FILES_MESSAGE, directory=Path(directory))

    mtimes = [(get_mtime(path), path) for path in candidates]
    newest = max(mtimes, key=lambda pair: pair[0])
    return Path(newest[1])


class EntryDispatcher:
    """
    Runs one tanager invocation against injected collaborators.

    Args:
        launch_editor: (command, args) -> None, inherits the terminal
        ensure_dir: path -> None, creates missing parents
        find_files: (directory, suffixes) -> paths, recursive
        get_mtime: path -> timestamp
        output: line printer for user-facing messages
    """

    def __init__(
        self,
        launch_editor: Callable[[str, Sequence[str]], None] = editor.launch_editor,
        ensure_dir: Callable[[PathLike], None] = files.ensure_dir,
        find_files: Callable[[PathLike, Iterable[str]], Sequence[PathLike]] = files.find_files,
        get_mtime: Callable[[PathLike], float] = files.get_mtime,
        output: Callable[[str], None] = safe_print,
    ):
        self.launch_editor = launch_editor
        self.ensure_dir = ensure_dir
        self.find_files = find_files
        self.get_mtime = get_mtime
        self.output = output
        self.log = get_logger("dispatcher")

    def run(self, config: TanagerConfig, date: DateLike, words: Sequence[str]) -> int:
        """
        Handle one invocation.

        Modes are checked in order: edit_recent, pwd, then the default of
        opening the entry for date.

        Returns:
            Exit code (0 for success, including "no files in notebook")

        Raises:
            NotebookNotFoundError: before any side effect
        """
        registry = build_registry(config.notebooks)
        notebook = resolve_notebook(registry, words)
        title_words = strip_notebook_word(notebook, words)
        self.log.debug(f"Notebook '{notebook.name}', title words {title_words}")

        if config.edit_recent:
            return self.edit_last_modified_file(config.editor_cmd, notebook)

        if config.pwd:
            self.print_notebook_path(notebook)
            return 0

        entry_path = self.get_entry_path(notebook, date, title_words)
        self.edit_entry(config.editor_cmd, entry_path)
        return 0

    def print_notebook_path(self, notebook: Notebook) -> None:
        """Print the notebook directory."""
        self.output(str(notebook.path))

    def get_entry_path(self, notebook: Notebook, date: DateLike, words: Sequence[str]) -> Path:
        """Compute the entry path and make sure its directory exists."""
        entry_path = expand_path(date, words, notebook.path, notebook.template, notebook.default_title)
        self.ensure_dir(entry_path.parent)
        return entry_path

    def edit_last_modified_file(self, editor_cmd: str, notebook: Notebook) -> int:
        """Open the newest entry in the notebook, if there is one."""
        suffix = get_file_suffix(notebook.template)
        try:
            entry_path = find_last_modified_file(
                notebook.path, [suffix], find_files=self.find_files, get_mtime=self.get_mtime
            )
        except NoFilesFoundError as e:
            self.log.info(f"{e} ({notebook.path})")
            self.output(str(e))
            return e.exit_code

        self.edit_entry(editor_cmd, entry_path)
        return 0

    def edit_entry(self, editor_cmd: str, entry_path: PathLike) -> None:
        """Open entry_path in the editor."""
        self.log.info(f"Editing {entry_path}")
        self.launch_editor(editor_cmd, [str(entry_path)])


def run(
    config: TanagerConfig,
    date: DateLike,
    words: Sequence[str],
    dispatcher: Optional[EntryDispatcher] = None,
) -> int:
    """Handle one invocation with the real collaborators (or the given dispatcher)."""
    return (dispatcher or EntryDispatcher()).run(config, date, words)
