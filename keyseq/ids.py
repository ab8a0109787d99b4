"""Random group/command identifiers and migration of legacy numbered ids."""

import re
import secrets
import string
from dataclasses import dataclass
from typing import Any, Dict

from keyseq.util import _debug

__all__ = [
    "MigrationResult",
    "generate_group_id",
    "generate_command_id",
    "is_legacy_id",
    "has_legacy_ids",
    "migrate_legacy_ids",
]

_ALPHABET = string.ascii_uppercase + string.ascii_lowercase + string.digits
_ID_LENGTH = 12

_LEGACY_ID = re.compile(r"^(group|command)\d+$")
_LEGACY_GROUP_ID = re.compile(r"^group\d+$")
_LEGACY_COMMAND_ID = re.compile(r"^command\d+$")
_LEGACY_COUNTERS = ("nextGroupId", "nextCommandId")


def _random_id(length: int = _ID_LENGTH) -> str:
    return "".join(secrets.choice(_ALPHABET) for _ in range(length))


def generate_group_id() -> str:
    return _random_id()


def generate_command_id() -> str:
    return f"cmd_{_random_id()}"


def is_legacy_id(value: str) -> bool:
    """Legacy ids are sequential: ``group1``, ``command12``..."""
    return bool(_LEGACY_ID.match(value))


def has_legacy_ids(settings: Dict[str, Any]) -> bool:
    for group in settings.get("commandGroups", ()):
        if is_legacy_id(group["id"]):
            return True
        if any(is_legacy_id(command["id"]) for command in group.get("commands", ())):
            return True
    return False


@dataclass
class MigrationResult:
    migrated: bool = False
    groups_updated: int = 0
    commands_updated: int = 0


def migrate_legacy_ids(settings: Dict[str, Any]) -> MigrationResult:
    """
    Replace sequential ids with random ones, in place.

    The old ``nextGroupId`` / ``nextCommandId`` counters are dropped as well;
    everything else in the document is preserved.
    """
    result = MigrationResult()

    for group in settings.get("commandGroups", ()):
        if _LEGACY_GROUP_ID.match(group["id"]):
            old_id, group["id"] = group["id"], generate_group_id()
            result.groups_updated += 1
            _debug(f"Migrated group id: {old_id} -> {group['id']}")

        for command in group.get("commands", ()):
            if _LEGACY_COMMAND_ID.match(command["id"]):
                old_id, command["id"] = command["id"], generate_command_id()
                result.commands_updated += 1
                _debug(f"Migrated command id: {old_id} -> {command['id']}")

    for counter in _LEGACY_COUNTERS:
        if counter in settings:
            del settings[counter]
            result.migrated = True

    if result.groups_updated or result.commands_updated:
        result.migrated = True
    return result
