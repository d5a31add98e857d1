# MIT License
# Copyright (c) 2025 Matt / Grain Ecosystem

"""Tests for the entry dispatcher."""

import itertools
import os
from pathlib import Path

import pytest

from tanager.core.config import TanagerConfig
from tanager.core.dispatcher import EntryDispatcher, find_last_modified_file, run
from tanager.core.errors import NoFilesFoundError, NotebookNotFoundError


class TestFindLastModifiedFile:
    """Tests for find_last_modified_file function."""

    @pytest.mark.parametrize("order", list(itertools.permutations(["a.md", "b.md", "c.md"])))
    def test_picks_newest_regardless_of_order(self, order):
        """Should return the file with the largest mtime whatever the listing order."""
        mtimes = {"a.md": 100, "b.md": 500, "c.md": 250}
        result = find_last_modified_file(
            "/nb",
            [".md"],
            find_files=lambda directory, suffixes: list(order),
            get_mtime=lambda path: mtimes[str(path)],
        )
        assert result == Path("b.md")

    def test_tie_returns_one_of_the_tied(self):
        """Should return one of the files sharing the newest mtime."""
        mtimes = {"a.md": 500, "b.md": 500, "c.md": 100}
        result = find_last_modified_file(
            "/nb",
            [".md"],
            find_files=lambda directory, suffixes: list(mtimes),
            get_mtime=lambda path: mtimes[str(path)],
        )
        assert result in (Path("a.md"), Path("b.md"))

    def test_no_files_raises(self):
        """Should raise NoFilesFoundError for an empty notebook."""
        with pytest.raises(NoFilesFoundError) as exc:
            find_last_modified_file("/nb", [".md"], find_files=lambda d, s: [], get_mtime=lambda p: 0)
        assert exc.value.directory == Path("/nb")

    def test_real_filesystem(self, tmp_path):
        """Should work against real files, recursing and filtering by suffix."""
        old = tmp_path / "2017" / "2017-12-24_daily.md"
        new = tmp_path / "2017" / "2017-12-25_daily.md"
        other = tmp_path / "notes.txt"
        for path, mtime in ((old, 1000), (new, 3000), (other, 9000)):
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text("entry")
            os.utime(path, (mtime, mtime))

        assert find_last_modified_file(tmp_path, [".md"]) == new


class TestEntryDispatcherRun:
    """Tests for EntryDispatcher.run."""

    def test_opens_default_notebook_entry(self, config, fakes, christmas, tmp_path):
        """Should open today's entry in the default notebook."""
        code = fakes.dispatcher().run(config, christmas, [])

        expected = tmp_path / "journal" / "2017" / "2017-12-25_daily.md"
        assert code == 0
        assert fakes.launched == [("vim", [str(expected)])]
        assert fakes.ensured == [expected.parent]

    def test_named_notebook_strips_name(self, config, fakes, christmas, tmp_path):
        """Should use the named notebook and drop its name from the title."""
        fakes.dispatcher().run(config, christmas, ["journal", "meeting"])

        expected = tmp_path / "journal" / "2017" / "2017-12-25_meeting.md"
        assert fakes.launched == [("vim", [str(expected)])]

    def test_alias_selects_notebook_and_template(self, config, fakes, christmas, tmp_path):
        """Should use the aliased notebook's own template."""
        fakes.dispatcher().run(config, christmas, ["n", "cat", "dog"])

        expected = tmp_path / "notes" / "2017" / "12" / "2017-12-25_cat-dog.txt"
        assert fakes.launched == [("vim", [str(expected)])]
        assert fakes.ensured == [expected.parent]

    def test_notebook_default_title(self, fakes, christmas, tmp_path):
        """Should use the notebook's defaultTitle when no words are given."""
        config = TanagerConfig.model_validate(
            {
                "editorCmd": "vim",
                "notebooks": {"notes": {"path": str(tmp_path), "defaultTitle": "scratch", "default": True}},
            }
        )
        fakes.dispatcher().run(config, christmas, [])

        assert fakes.launched == [("vim", [str(tmp_path / "2017" / "2017-12-25_scratch.md")])]

    def test_unknown_word_is_part_of_title(self, config, fakes, christmas, tmp_path):
        """Should keep an unknown first word in the title."""
        fakes.dispatcher().run(config, christmas, ["unknown", "meeting"])

        expected = tmp_path / "journal" / "2017" / "2017-12-25_unknown-meeting.md"
        assert fakes.launched == [("vim", [str(expected)])]

    def test_lone_notebook_name_becomes_title(self, config, fakes, christmas, tmp_path):
        """A single word naming the notebook is used as the title."""
        fakes.dispatcher().run(config, christmas, ["journal"])

        expected = tmp_path / "journal" / "2017" / "2017-12-25_journal.md"
        assert fakes.launched == [("vim", [str(expected)])]

    def test_pwd_prints_notebook_path(self, config, fakes, christmas, tmp_path):
        """Should print the notebook directory and not open anything."""
        config = config.model_copy(update={"pwd": True})
        code = fakes.dispatcher().run(config, christmas, ["notes"])

        assert code == 0
        assert fakes.printed == [str(tmp_path / "notes")]
        assert fakes.launched == []
        assert fakes.ensured == []

    def test_edit_recent_opens_newest_file(self, config, make_fakes, christmas, tmp_path):
        """Should open the most recently modified entry with the notebook's suffix."""
        journal = tmp_path / "journal"
        fakes = make_fakes(
            files={
                str(journal / "2017" / "a.md"): 100,
                str(journal / "2017" / "b.md"): 500,
                str(journal / "2017" / "c.md"): 250,
            }
        )
        config = config.model_copy(update={"edit_recent": True})
        code = fakes.dispatcher().run(config, christmas, [])

        assert code == 0
        assert fakes.launched == [("vim", [str(journal / "2017" / "b.md")])]
        assert fakes.searched == [(journal, {".md"})]
        assert fakes.ensured == []

    def test_edit_recent_uses_template_suffix(self, config, make_fakes, christmas, tmp_path):
        """Should look for the suffix the notebook's template produces."""
        fakes = make_fakes()
        config = config.model_copy(update={"edit_recent": True})
        fakes.dispatcher().run(config, christmas, ["notes"])

        assert fakes.searched == [(tmp_path / "notes", {".txt"})]

    def test_edit_recent_with_no_files(self, config, fakes, christmas):
        """Should report an empty notebook and exit cleanly without an editor."""
        config = config.model_copy(update={"edit_recent": True})
        code = fakes.dispatcher().run(config, christmas, [])

        assert code == 0
        assert fakes.printed == ["No files in notebook"]
        assert fakes.launched == []

    def test_edit_recent_takes_precedence_over_pwd(self, config, fakes, christmas):
        """Should check edit_recent before pwd."""
        config = config.model_copy(update={"edit_recent": True, "pwd": True})
        fakes.dispatcher().run(config, christmas, [])

        assert fakes.printed == ["No files in notebook"]

    def test_notebook_not_found_has_no_side_effects(self, config, fakes, christmas):
        """Should fail before touching the filesystem or editor."""
        config = config.model_copy(update={"notebooks": {"notes": config.notebooks["notes"]}})

        with pytest.raises(NotebookNotFoundError):
            fakes.dispatcher().run(config, christmas, ["meeting"])
        assert fakes.launched == []
        assert fakes.ensured == []
        assert fakes.printed == []

    def test_real_directory_is_created(self, config, christmas, tmp_path):
        """Should create the entry's parent directory with the default collaborator."""
        launched = []
        dispatcher = EntryDispatcher(launch_editor=lambda cmd, args: launched.append(args))
        dispatcher.run(config, christmas, [])

        assert (tmp_path / "journal" / "2017").is_dir()
        assert launched == [[str(tmp_path / "journal" / "2017" / "2017-12-25_daily.md")]]


class TestRun:
    """Tests for the module-level run function."""

    def test_uses_given_dispatcher(self, config, fakes, christmas):
        """Should delegate to the dispatcher it is given."""
        assert run(config, christmas, ["notes"], dispatcher=fakes.dispatcher()) == 0
        assert len(fakes.launched) == 1
