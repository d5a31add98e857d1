# MIT License
# Copyright (c) 2025 Matt / Grain Ecosystem

"""Core types for tanager."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

DEFAULT_TEMPLATE = "<YYYY>/<YYYY-MM-DD>_<title>.md"
DEFAULT_TITLE = "daily"


@dataclass(frozen=True)
class Notebook:
    """
    A named, aliasable directory plus a file-naming template.

    The same instance is registered under its name and every alias, so
    identity checks against any of them succeed.
    """

    name: str
    path: Path  # Tilde-expanded notebook directory
    aliases: tuple[str, ...] = ()
    template: str = DEFAULT_TEMPLATE
    default_title: str = DEFAULT_TITLE
    is_default: bool = False
    extra: dict[str, Any] = field(default_factory=dict, hash=False)  # Undeclared config keys

    def answers_to(self, word: str) -> bool:
        """Check if a word is this notebook's name or one of its aliases."""
        return word == self.name or word in self.aliases
