# MIT License
# Copyright (c) 2025 Matt / Grain Ecosystem

"""
Date phrases for --date.

Understands a few relative words ("today", "yesterday", "tomorrow",
"3 days ago", "2 weeks ago") and anything python-dateutil can parse
("dec 5", "dec5", "2017-12-25", "5 December 2017"). Missing fields are
taken from today, so "dec 5" means December 5 of the current year.
"""

import re
from datetime import datetime
from typing import Optional

from dateutil import parser as dtparser
from dateutil.relativedelta import relativedelta

from tanager.core.errors import InvalidDateError

RELATIVE_DAYS = {
    "today": 0,
    "now": 0,
    "yesterday": -1,
    "tomorrow": 1,
}

AGO_PATTERN = re.compile(r"^(\d+)\s+(day|week|month|year)s?\s+ago$")


def parse_date_phrase(text: str, now: Optional[datetime] = None) -> datetime:
    """
    Turn a date phrase into a datetime.

    Args:
        text: Phrase from the command line
        now: Reference time (defaults to the current local time)

    Returns:
        The date the phrase refers to

    Raises:
        InvalidDateError: the phrase could not be parsed
    """
    now = now or datetime.now()
    phrase = " ".join(text.lower().split())

    if phrase in RELATIVE_DAYS:
        return now + relativedelta(days=RELATIVE_DAYS[phrase])

    match = AGO_PATTERN.match(phrase)
    if match:
        amount = int(match.group(1))
        unit = match.group(2) + "s"
        return now - relativedelta(**{unit: amount})

    try:
        return dtparser.parse(phrase, default=now.replace(hour=0, minute=0, second=0, microsecond=0))
    except (ValueError, OverflowError) as e:
        raise InvalidDateError(f"Could not understand date '{text}'.", phrase=text) from e
