# MIT License
# Copyright (c) 2025 Matt / Grain Ecosystem

"""
Entry path templates.

A template is a relative path with one <title> placeholder and any number of
date placeholders, e.g. "<YYYY>/<YYYY-MM-DD>_<title>.md". Each date
placeholder holds a moment-style format pattern (YYYY, MM, DD, dd, ddd, E, ...)
that pendulum renders against the entry date:

    <YYYY>/<MM>/<YYYY-MM-DD>_<title>.md  ->  2017/12/2017-12-25_cat-dog.md
"""

import os
from datetime import date as date_type, datetime
from pathlib import Path
from typing import Callable, Optional, Sequence, Union

import pendulum

from tanager.core.errors import EntryPathError, InvalidTemplateError, TemplateExpansionError
from tanager.core.types import DEFAULT_TITLE

TITLE_PLACEHOLDER = "<title>"
TITLE_WORDS_DELIMITER = "-"
DEFAULT_FILE_SUFFIX = ".md"

# A date format whose output contains another placeholder would never finish.
MAX_EXPANSIONS = 30

DateLike = Union[date_type, datetime]
DateFormatter = Callable[[DateLike, str], str]


def format_date(value: DateLike, pattern: str) -> str:
    """Render a date with a moment-style format pattern."""
    if isinstance(value, datetime):
        moment = pendulum.instance(value)
    else:
        moment = pendulum.datetime(value.year, value.month, value.day)
    return moment.format(pattern)


def get_title(words: Sequence[str], default_title: Optional[str] = None) -> str:
    """Join title words with dashes, or fall back to the default title."""
    if words:
        return TITLE_WORDS_DELIMITER.join(words)
    if default_title:
        return str(default_title)
    return DEFAULT_TITLE


def find_placeholder(text: str) -> Optional[tuple[int, int]]:
    """
    Find the leftmost, shortest <...> span in text.

    A span never contains another "<": in "<a<b>" the span is "<b>".

    Returns:
        (start, end) slice bounds including both brackets, or None
    """
    start = text.find("<")
    while start != -1:
        for index in range(start + 1, len(text)):
            char = text[index]
            if char == ">":
                return start, index + 1
            if char == "<":
                start = index
                break
        else:
            # Unclosed "<" with nothing after it to close
            return None
    return None


def check_template(template: str) -> None:
    """Raise InvalidTemplateError unless template has exactly one <title>."""
    count = template.count(TITLE_PLACEHOLDER)
    if count == 0:
        raise InvalidTemplateError(
            f"Template must contain {TITLE_PLACEHOLDER}: {template!r}", template=template
        )
    if count > 1:
        raise InvalidTemplateError(
            f"Template must contain {TITLE_PLACEHOLDER} only once: {template!r}",
            template=template,
        )


def _expand_dates(
    text: str, date: DateLike, format_date: DateFormatter, budget: int, template: str
) -> tuple[str, int]:
    """Replace every date placeholder in text, using at most budget substitutions."""
    span = find_placeholder(text)
    while span is not None:
        if budget == 0:
            raise TemplateExpansionError(
                f"Template did not settle after {MAX_EXPANSIONS} substitutions: {template!r}",
                template=template,
            )
        budget -= 1
        start, end = span
        text = text[:start] + format_date(date, text[start + 1 : end - 1]) + text[end:]
        span = find_placeholder(text)
    return text, budget


def expand_template(
    template: str,
    date: DateLike,
    title: str,
    format_date: DateFormatter = format_date,
) -> str:
    """
    Expand the date placeholders around <title>, then insert the title.

    The title is inserted verbatim, so "<YYYY>" typed as a title word stays
    "<YYYY>" in the file name.

    Raises:
        InvalidTemplateError: template has no (or more than one) <title>
        TemplateExpansionError: more than MAX_EXPANSIONS date substitutions
    """
    check_template(template)
    before, after = template.split(TITLE_PLACEHOLDER)

    before, budget = _expand_dates(before, date, format_date, MAX_EXPANSIONS, template)
    after, _ = _expand_dates(after, date, format_date, budget, template)

    return before + title + after


def join_entry_path(base_dir: Union[str, Path], relative: str) -> Path:
    """
    Join an expanded template onto the notebook directory.

    Raises:
        EntryPathError: the result is the notebook directory itself or
            lies outside it (e.g. a title of "..")
    """
    # The template is always relative to the notebook, even with a leading slash
    relative = relative.lstrip("/" + os.sep)
    base = os.path.normpath(str(base_dir))
    joined = os.path.normpath(os.path.join(base, relative))
    if joined == base or os.path.commonpath([base, joined]) != base:
        raise EntryPathError(f"Entry path {joined} is not inside notebook {base}.", path=Path(joined))
    return Path(joined)


def expand_path(
    date: DateLike,
    words: Sequence[str],
    base_dir: Union[str, Path],
    template: str,
    default_title: Optional[str] = None,
    format_date: DateFormatter = format_date,
) -> Path:
    """
    Compute the absolute path of an entry.

    Does not touch the filesystem; creating the parent directory is the
    caller's job.

    Args:
        date: Date the entry is about
        words: Title words (already stripped of any notebook name)
        base_dir: Notebook directory
        template: Path template relative to base_dir
        default_title: Title used when no words are given
        format_date: Renders one date placeholder (pattern without brackets)

    Returns:
        Path to the entry file
    """
    title = get_title(words, default_title)
    relative = expand_template(template, date, title, format_date=format_date)
    return join_entry_path(base_dir, relative)


def get_file_suffix(template: str) -> str:
    """
    Get the entry file suffix a template produces.

    Looks at the extension of the template's last path component; a suffix
    that is part of a placeholder does not count.
    """
    last_part = template.replace("\\", "/").rsplit("/", 1)[-1]
    suffix = os.path.splitext(last_part)[1]
    if not suffix or "<" in suffix or ">" in suffix:
        return DEFAULT_FILE_SUFFIX
    return suffix
