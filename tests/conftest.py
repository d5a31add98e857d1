# MIT License
# Copyright (c) 2025 Matt / Grain Ecosystem

"""
Pytest fixtures for tanager tests.
"""

import json
from datetime import datetime
from pathlib import Path
from typing import Any

import pytest

import tanager.logging as tanager_logging
from tanager.core.config import TanagerConfig
from tanager.core.dispatcher import EntryDispatcher

CHRISTMAS = datetime(2017, 12, 25)


@pytest.fixture(autouse=True)
def reset_logging(monkeypatch):
    """Start every test with logging unconfigured (null sink).

    This prevents a debug-enabled config in one test from writing log files
    in another.
    """
    monkeypatch.setattr(tanager_logging, "_configured", False)
    yield
    tanager_logging.logger.remove()


@pytest.fixture
def christmas() -> datetime:
    """The date used throughout the path examples."""
    return CHRISTMAS


@pytest.fixture
def notebook_configs(tmp_path: Path) -> dict[str, dict[str, Any]]:
    """Two notebooks: a default journal with an alias, and a notes notebook."""
    return {
        "journal": {
            "path": str(tmp_path / "journal"),
            "aliases": ["j"],
            "default": True,
        },
        "notes": {
            "path": str(tmp_path / "notes"),
            "aliases": ["n", "nb"],
            "template": "<YYYY>/<MM>/<YYYY-MM-DD>_<title>.txt",
            "defaultTitle": "scratch",
        },
    }


@pytest.fixture
def config(notebook_configs) -> TanagerConfig:
    """A validated config using the test notebooks."""
    return TanagerConfig.model_validate({"editorCmd": "vim", "notebooks": notebook_configs})


@pytest.fixture
def config_file(tmp_path: Path, notebook_configs) -> Path:
    """Write the test notebooks to a config file and return its path."""
    path = tmp_path / "tanager.json"
    path.write_text(json.dumps({"editorCmd": "nano", "notebooks": notebook_configs}), encoding="utf-8")
    return path


class FakeCollaborators:
    """Records what the dispatcher asked the outside world to do."""

    def __init__(self, files: dict[str, float] | None = None):
        self.files = files or {}  # path -> mtime
        self.launched: list[tuple[str, list[str]]] = []
        self.ensured: list[Path] = []
        self.searched: list[tuple[Path, set[str]]] = []
        self.printed: list[str] = []

    def launch_editor(self, command: str, args) -> None:
        self.launched.append((command, list(args)))

    def ensure_dir(self, path) -> None:
        self.ensured.append(Path(path))

    def find_files(self, directory, suffixes) -> list[str]:
        self.searched.append((Path(directory), set(suffixes)))
        return [p for p in self.files if p.endswith(tuple(suffixes))]

    def get_mtime(self, path) -> float:
        return self.files[str(path)]

    def output(self, line: str) -> None:
        self.printed.append(line)

    def dispatcher(self) -> EntryDispatcher:
        return EntryDispatcher(
            launch_editor=self.launch_editor,
            ensure_dir=self.ensure_dir,
            find_files=self.find_files,
            get_mtime=self.get_mtime,
            output=self.output,
        )


@pytest.fixture
def fakes() -> FakeCollaborators:
    """Fake collaborators with no files."""
    return FakeCollaborators()


@pytest.fixture
def make_fakes():
    """Factory for fake collaborators that know about some files."""
    return FakeCollaborators
