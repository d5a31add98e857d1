# Notebooks, entry path templates and the entry dispatcher

from tanager.core.errors import (
    ConfigError,
    EntryPathError,
    EditorError,
    InvalidDateError,
    InvalidTemplateError,
    NoFilesFoundError,
    NotebookNotFoundError,
    TanagerError,
    TemplateExpansionError,
)
from tanager.core.types import DEFAULT_TEMPLATE, DEFAULT_TITLE, Notebook

__all__ = [
    "ConfigError",
    "EntryPathError",
    "EditorError",
    "InvalidDateError",
    "InvalidTemplateError",
    "NoFilesFoundError",
    "NotebookNotFoundError",
    "TanagerError",
    "TemplateExpansionError",
    "DEFAULT_TEMPLATE",
    "DEFAULT_TITLE",
    "Notebook",
]
