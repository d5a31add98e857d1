# MIT License
# Copyright (c) 2025 Matt / Grain Ecosystem

"""Terminal output with an ASCII fallback for non-UTF-8 consoles."""

import sys
from functools import lru_cache

ICON_FALLBACKS = {
    "❌": "[X]",
}


@lru_cache(maxsize=8)
def supports_unicode(encoding: str) -> bool:
    """Check if an encoding can represent emoji. Cached per encoding."""
    try:
        "❌".encode(encoding)
        return True
    except (UnicodeEncodeError, LookupError):
        return False


def safe_text(text: str, stream=None) -> str:
    """Replace emoji with ASCII when the stream can't show them.

    Args:
        text: Text about to be written
        stream: Where it will be written (default: sys.stdout)
    """
    stream = sys.stdout if stream is None else stream
    if supports_unicode(getattr(stream, "encoding", None) or ""):
        return text
    for icon, fallback in ICON_FALLBACKS.items():
        text = text.replace(icon, fallback)
    return text


def safe_print(*args, file=None, **kwargs) -> None:
    """print() with the safe_text fallback applied for the target stream."""
    print(*(safe_text(str(arg), stream=file) for arg in args), file=file, **kwargs)
