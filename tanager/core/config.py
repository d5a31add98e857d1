# MIT License
# Copyright (c) 2025 Matt / Grain Ecosystem

"""
Configuration for tanager.

A config file is JSON and might look like:

    {
      "editorCmd": "vim -e",
      "notebooks": {
        "journal": {
          "path": "~/writing/journal/",
          "aliases": ["j"],
          "default": true
        },
        "notes": {
          "path": "~/Documents/notes",
          "template": "<YYYY>/<MM>/<YYYY-MM-DD>_<title>.txt",
          "defaultTitle": "scratch"
        }
      },
      "logging": {"debug": false}
    }

Priority (highest to lowest):
  1. Command line
  2. Config file
  3. Defaults ($VISUAL, then $EDITOR, as git does)
"""

import json
import os
from typing import Any, Mapping, Optional, Sequence, TypeVar

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from tanager.core.errors import ConfigError
from tanager.logging import DEFAULT_LOG_RETENTION_COUNT, get_logger
from tanager.utils.files import expand_user

DEFAULT_CONFIG_PATH = "~/.tanager.json"

NO_EDITOR_MESSAGE = "Could not find editor. Try setting $VISUAL."
NO_NOTEBOOKS_MESSAGE = "No notebooks found. Set in .tanager.json."
NO_PATH_MESSAGE = "Notebook missing a path in .tanager.json, failing fast."

T = TypeVar("T")


class NotebookConfig(BaseModel):
    """One notebook as written in the config file. Unknown keys are kept."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    path: str
    aliases: list[str] = Field(default_factory=list)
    template: Optional[str] = None
    default_title: Optional[str] = Field(default=None, alias="defaultTitle")
    default: bool = False

    @field_validator("path")
    @classmethod
    def path_not_empty(cls, v: str) -> str:
        if not v.strip():
            raise ValueError(NO_PATH_MESSAGE)
        return v


class LoggingConfig(BaseModel):
    """Logging preferences."""

    debug: bool = False
    log_retention_count: int = DEFAULT_LOG_RETENTION_COUNT


class TanagerConfig(BaseModel):
    """Fully resolved configuration for one invocation."""

    model_config = ConfigDict(populate_by_name=True)

    editor_cmd: str = Field(alias="editorCmd")
    notebooks: dict[str, NotebookConfig]
    edit_recent: bool = Field(default=False, alias="editRecent")
    pwd: bool = False
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def resolve_priority(values: Sequence[Optional[T]]) -> Optional[T]:
    """
    Return the first value that is present (not None).

    False and "" count as present; only None is skipped.
    """
    for value in values:
        if value is not None:
            return value
    return None


def _env_value(environ: Mapping[str, str], key: str) -> Optional[str]:
    """Read an environment variable, treating empty as unset."""
    value = environ.get(key, "").strip()
    return value or None


def get_editor_cmd_from_env(environ: Optional[Mapping[str, str]] = None) -> Optional[str]:
    """Get the default editor command: $VISUAL, then $EDITOR."""
    environ = os.environ if environ is None else environ
    return resolve_priority([_env_value(environ, "VISUAL"), _env_value(environ, "EDITOR")])


def build_config(editor_cmd: Optional[str]) -> dict[str, Any]:
    """Start a config layer, leaving editorCmd out when not given."""
    result: dict[str, Any] = {}
    if editor_cmd:
        result["editorCmd"] = editor_cmd
    return result


def get_default_config(environ: Optional[Mapping[str, str]] = None) -> dict[str, Any]:
    """Config layer built from defaults only."""
    return build_config(get_editor_cmd_from_env(environ))


def get_cli_config(cli_args: Any) -> dict[str, Any]:
    """
    Config layer built from the command line.

    Args:
        cli_args: argparse Namespace (or any object) with optional
            editor_cmd, edit_recent and pwd attributes
    """
    result = build_config(getattr(cli_args, "editor_cmd", None))
    result["editRecent"] = bool(getattr(cli_args, "edit_recent", False))
    result["pwd"] = bool(getattr(cli_args, "pwd", False))
    return result


def get_file_config(config_path: Optional[str] = None) -> dict[str, Any]:
    """
    Config layer read from the JSON config file.

    Raises:
        ConfigError: file missing, unreadable, or not a JSON object
    """
    path = expand_user(config_path or DEFAULT_CONFIG_PATH)
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError as e:
        raise ConfigError(f"Config file not found: {path}", key="configFile") from e
    except json.JSONDecodeError as e:
        raise ConfigError(f"Config file {path} is not valid JSON: {e}", key="configFile") from e
    except OSError as e:
        raise ConfigError(f"Could not read config file {path}: {e}", key="configFile") from e

    if not isinstance(data, dict):
        raise ConfigError(f"Config file {path} must contain a JSON object.", key="configFile")
    return data


def merge_layers(*layers: Mapping[str, Any]) -> dict[str, Any]:
    """Overlay config layers; later layers win key by key."""
    merged: dict[str, Any] = {}
    for layer in layers:
        merged.update(layer)
    return merged


def validate_config(merged: Mapping[str, Any]) -> TanagerConfig:
    """
    Check the merged config has enough to work with.

    Raises:
        ConfigError: with the first problem found
    """
    if not merged.get("editorCmd"):
        raise ConfigError(NO_EDITOR_MESSAGE, key="editorCmd")
    if not merged.get("notebooks"):
        raise ConfigError(NO_NOTEBOOKS_MESSAGE, key="notebooks")

    try:
        return TanagerConfig.model_validate(merged)
    except ValidationError as e:
        first = e.errors()[0]
        location = ".".join(str(part) for part in first["loc"])
        if location.startswith("notebooks.") and location.endswith(".path"):
            raise ConfigError(NO_PATH_MESSAGE, key=location) from e
        raise ConfigError(f"Invalid config value for {location}: {first['msg']}", key=location) from e


def resolve_config(cli_args: Any, environ: Optional[Mapping[str, str]] = None) -> TanagerConfig:
    """
    Resolve the configuration for this invocation.

    Args:
        cli_args: Parsed command line (see get_cli_config); config_file
            selects the file, defaulting to ~/.tanager.json
        environ: Environment to read defaults from (defaults to os.environ)

    Returns:
        Validated TanagerConfig

    Raises:
        ConfigError: if something is missing or malformed
    """
    log = get_logger("config")

    from_defaults = get_default_config(environ)
    from_file = get_file_config(getattr(cli_args, "config_file", None))
    from_cli = get_cli_config(cli_args)

    config = validate_config(merge_layers(from_defaults, from_file, from_cli))
    log.debug(f"Resolved config: editor={config.editor_cmd!r}, notebooks={list(config.notebooks)}")
    return config
