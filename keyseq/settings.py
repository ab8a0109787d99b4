"""Reading and writing the JSON settings document."""

import json
import os
import tempfile
from typing import Union

from keyseq.errors import SettingsError
from keyseq.groups import CommandGroupSettings, default_settings
from keyseq.ids import has_legacy_ids, migrate_legacy_ids
from keyseq.util import _debug

__all__ = ["load_settings", "save_settings"]

PathLike = Union[str, "os.PathLike[str]"]


def load_settings(path: PathLike, validate: bool = True) -> CommandGroupSettings:
    """
    Load settings from ``path``; a missing file yields the defaults.

    Legacy numbered ids are migrated and written back. Stored sequence keys are
    parsed again so a bad hand edit fails here rather than at match time.
    """
    if not os.path.exists(path):
        _debug(f"No settings at {path}, using defaults")
        return default_settings()

    with open(path, "r", encoding="utf-8") as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as exc:
            raise SettingsError(f"invalid JSON: {exc}", location=str(path)) from exc

    if not isinstance(data, dict):
        raise SettingsError("top level must be an object", location=str(path))

    settings = CommandGroupSettings.from_dict(data)
    if has_legacy_ids(data) or "nextGroupId" in data or "nextCommandId" in data:
        result = migrate_legacy_ids(data)
        settings = CommandGroupSettings.from_dict(data)
        print(
            f"Migrated {path}: {result.groups_updated} groups and "
            f"{result.commands_updated} commands updated"
        )
        save_settings(settings, path)

    if validate:
        settings.validate()
    return settings


def save_settings(settings: CommandGroupSettings, path: PathLike) -> None:
    """Write settings as JSON, replacing the file in one step."""
    directory = os.path.dirname(os.path.abspath(path))
    os.makedirs(directory, exist_ok=True)
    fd, tmp_path = tempfile.mkstemp(prefix=".keyseq-", suffix=".json", dir=directory)
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            json.dump(settings.to_dict(), f, indent=2)
            f.write("\n")
        os.replace(tmp_path, path)
    except BaseException:
        os.unlink(tmp_path)
        raise
    _debug(f"Saved settings to {path}")
