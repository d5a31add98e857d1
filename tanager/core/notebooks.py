# MIT License
# Copyright (c) 2025 Matt / Grain Ecosystem

"""
Notebook registry and resolution.

The registry maps every notebook name and alias to its Notebook. The first
command-line word may name a notebook; otherwise the default notebook is used
and all the words become the title.
"""

from typing import Any, Mapping, Sequence

from tanager.core.errors import ConfigError, NotebookNotFoundError
from tanager.core.types import DEFAULT_TEMPLATE, DEFAULT_TITLE, Notebook
from tanager.logging import get_logger
from tanager.utils.files import expand_user

# Config keys that become Notebook fields; anything else lands in Notebook.extra
DECLARED_KEYS = {"path", "aliases", "template", "defaultTitle", "default"}


def _as_mapping(raw: Any) -> dict[str, Any]:
    """Accept plain dicts or pydantic NotebookConfig models."""
    if hasattr(raw, "model_dump"):
        return raw.model_dump(by_alias=True, exclude_none=True)
    return dict(raw)


def build_notebook(name: str, raw: Any) -> Notebook:
    """Create a Notebook from one raw config entry."""
    data = _as_mapping(raw)
    path = data.get("path")
    if not path:
        raise ConfigError("Notebook missing a path in .tanager.json, failing fast.", key=name)

    return Notebook(
        name=name,
        path=expand_user(path),
        aliases=tuple(data.get("aliases") or ()),
        template=data.get("template") or DEFAULT_TEMPLATE,
        default_title=str(data.get("defaultTitle") or DEFAULT_TITLE),
        is_default=bool(data.get("default", False)),
        extra={k: v for k, v in data.items() if k not in DECLARED_KEYS},
    )


def build_registry(notebook_configs: Mapping[str, Any]) -> dict[str, Notebook]:
    """
    Build the name/alias -> Notebook lookup table.

    The caller's configuration is not modified.

    Args:
        notebook_configs: Notebook name -> raw config (dict or NotebookConfig)

    Returns:
        Dict keyed by every name and alias; aliases share the named instance

    Raises:
        ConfigError: a name or alias is claimed twice, a notebook has no
            path, or more than one notebook is marked default
    """
    log = get_logger("notebooks")
    registry: dict[str, Notebook] = {}
    defaults: list[str] = []

    for name, raw in notebook_configs.items():
        notebook = build_notebook(name, raw)
        if notebook.is_default:
            defaults.append(name)

        for key in (name, *notebook.aliases):
            claimed_by = registry.get(key)
            if claimed_by is not None and claimed_by is not notebook:
                raise ConfigError(
                    f"'{key}' is used by both notebook '{claimed_by.name}' and notebook '{name}'.",
                    key=key,
                )
            registry[key] = notebook

        log.debug(f"Notebook '{name}' -> {notebook.path} (aliases: {list(notebook.aliases)})")

    if len(defaults) > 1:
        raise ConfigError(
            f"Only one notebook can be the default, found: {', '.join(defaults)}.",
            key="default",
        )

    return registry


def resolve_notebook(registry: Mapping[str, Notebook], words: Sequence[str]) -> Notebook:
    """
    Pick the notebook an invocation applies to.

    Args:
        registry: Result of build_registry()
        words: Words from the command line

    Returns:
        The notebook named by the first word, else the default notebook

    Raises:
        NotebookNotFoundError: no notebook named and no default configured
    """
    if words and words[0] in registry:
        return registry[words[0]]

    for notebook in registry.values():
        if notebook.is_default:
            return notebook

    raise NotebookNotFoundError("Cannot find notebook. Check name or set default.", words=list(words))


def strip_notebook_word(notebook: Notebook, words: Sequence[str]) -> list[str]:
    """
    Remove a leading notebook name or alias from the title words.

    "journal meeting notes" gives ["meeting", "notes"]. A lone word naming
    the notebook is kept so it can still serve as the title.
    """
    words = list(words)
    if len(words) > 1 and notebook.answers_to(words[0]):
        return words[1:]
    return words
