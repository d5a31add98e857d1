# MIT License
# Copyright (c) 2025 Matt / Grain Ecosystem

"""Exception classes for tanager.

Everything raised on purpose derives from TanagerError, so the CLI can turn
it into a message on stderr and a non-zero exit code. OS errors from the
filesystem and process collaborators are not wrapped.
"""

from pathlib import Path
from typing import Optional


class TanagerError(Exception):
    """Base exception for tanager errors."""

    exit_code = 1


class ConfigError(TanagerError):
    """The resolved configuration cannot be used."""

    def __init__(self, message: str, key: Optional[str] = None):
        self.key = key
        super().__init__(message)


class NotebookNotFoundError(TanagerError):
    """No notebook matched the words and no default is configured."""

    def __init__(self, message: str, words: Optional[list[str]] = None):
        self.words = list(words) if words else []
        super().__init__(message)


class InvalidTemplateError(TanagerError):
    """A notebook template is missing its <title> placeholder."""

    def __init__(self, message: str, template: Optional[str] = None):
        self.template = template
        super().__init__(message)


class TemplateExpansionError(TanagerError):
    """Placeholder substitution did not converge."""

    def __init__(self, message: str, template: Optional[str] = None):
        self.template = template
        super().__init__(message)


class NoFilesFoundError(TanagerError):
    """A notebook has no entry files to reopen."""

    exit_code = 0

    def __init__(self, message: str, directory: Optional[Path] = None):
        self.directory = directory
        super().__init__(message)


class InvalidDateError(TanagerError):
    """A --date phrase could not be understood."""

    def __init__(self, message: str, phrase: Optional[str] = None):
        self.phrase = phrase
        super().__init__(message)


class EditorError(TanagerError):
    """The editor command could not be started."""

    def __init__(self, message: str, command: Optional[str] = None):
        self.command = command
        super().__init__(message)


class EntryPathError(TanagerError):
    """An entry path would not be a file inside its notebook."""

    def __init__(self, message: str, path: Optional[Path] = None):
        self.path = path
        super().__init__(message)
