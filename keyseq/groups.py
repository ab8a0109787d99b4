"""Command groups: named lists of commands, each with an optional sequence key."""

# pylint: disable=missing-function-docstring

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from keyseq.bindings import Binding, assert_no_duplicate, make_binding
from keyseq.errors import SettingsError
from keyseq.ids import generate_command_id, generate_group_id

__all__ = [
    "CommandEntry",
    "CommandGroup",
    "CommandGroupSettings",
    "default_settings",
]


def _string_field(data: Dict[str, Any], name: str, optional: bool = False) -> Optional[str]:
    value = data.get(name) if optional else data[name]
    if value is None and optional:
        return None
    if not isinstance(value, str):
        raise TypeError(f"{name!r} must be a string, got {type(value).__name__}")
    return value


@dataclass
class CommandEntry:
    id: str
    command: str
    sequence_key: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CommandEntry":
        return cls(
            id=_string_field(data, "id"),
            command=_string_field(data, "command"),
            sequence_key=_string_field(data, "sequenceKey", optional=True) or None,
        )

    def to_dict(self) -> Dict[str, Any]:
        data = {"id": self.id, "command": self.command}
        if self.sequence_key:
            data["sequenceKey"] = self.sequence_key
        return data


@dataclass
class CommandGroup:
    id: str
    name: str
    commands: List[CommandEntry] = field(default_factory=list)

    def bindings(self) -> List[Binding]:
        """
        Build the group's bindings in list order.

        Raises on the first key that does not parse or duplicates an earlier one.
        """
        bindings: List[Binding] = []
        for command in self.commands:
            if not command.sequence_key:
                continue
            binding = make_binding(self.id, command.sequence_key, command.id)
            assert_no_duplicate(binding, bindings)
            bindings.append(binding)
        return bindings

    def set_sequence_key(self, index: int, value: Optional[str]) -> Optional[Binding]:
        """
        Assign a sequence key to the command at ``index``.

        A blank value clears the key. Otherwise the value must parse and must not
        be equivalent to another command's key in this group; on failure the
        entry keeps its previous key and the error propagates.
        """
        command = self.commands[index]
        if value is None or value.strip() == "":
            command.sequence_key = None
            return None

        binding = make_binding(self.id, value, command.id)
        others = [
            make_binding(self.id, other.sequence_key, other.id)
            for i, other in enumerate(self.commands)
            if i != index and other.sequence_key
        ]
        assert_no_duplicate(binding, others)
        command.sequence_key = binding.surface_form
        return binding

    def add_command(self, command: str, sequence_key: Optional[str] = None) -> CommandEntry:
        entry = CommandEntry(id=generate_command_id(), command=command)
        self.commands.append(entry)
        if sequence_key:
            try:
                self.set_sequence_key(len(self.commands) - 1, sequence_key)
            except ValueError:
                self.commands.pop()
                raise
        return entry

    def remove_command(self, index: int) -> CommandEntry:
        return self.commands.pop(index)

    def move_command(self, from_index: int, to_index: int) -> None:
        entry = self.commands.pop(from_index)
        self.commands.insert(to_index, entry)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CommandGroup":
        commands = data.get("commands", [])
        if not isinstance(commands, list):
            raise TypeError(f"'commands' must be a list, got {type(commands).__name__}")
        return cls(
            id=_string_field(data, "id"),
            name=_string_field(data, "name"),
            commands=[CommandEntry.from_dict(c) for c in commands],
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "commands": [c.to_dict() for c in self.commands],
        }


@dataclass
class CommandGroupSettings:
    command_groups: List[CommandGroup] = field(default_factory=list)

    def find_group(self, group_id: str) -> Optional[CommandGroup]:
        for group in self.command_groups:
            if group.id == group_id:
                return group
        return None

    def add_group(self, name: str) -> CommandGroup:
        group = CommandGroup(id=generate_group_id(), name=name)
        self.command_groups.append(group)
        return group

    def validate(self) -> Dict[str, List[Binding]]:
        """
        Re-parse every stored sequence key and check each group for duplicates.

        Returns the bindings per group id; errors are wrapped in SettingsError
        naming the group.
        """
        bindings = {}
        for group in self.command_groups:
            try:
                bindings[group.id] = group.bindings()
            except ValueError as exc:
                raise SettingsError(str(exc), location=f"group {group.name!r} ({group.id})") from exc
        return bindings

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CommandGroupSettings":
        groups = data.get("commandGroups", [])
        if not isinstance(groups, list):
            raise SettingsError("commandGroups must be a list")
        parsed = []
        for n, group in enumerate(groups):
            try:
                parsed.append(CommandGroup.from_dict(group))
            except (KeyError, TypeError, AttributeError) as exc:
                raise SettingsError(f"missing or malformed field {exc}", location=f"commandGroups[{n}]") from exc
        return cls(command_groups=parsed)

    def to_dict(self) -> Dict[str, Any]:
        return {"commandGroups": [g.to_dict() for g in self.command_groups]}


def default_settings() -> CommandGroupSettings:
    return CommandGroupSettings(command_groups=[
        CommandGroup(
            id="grp_example_001",
            name="Example Group",
            commands=[
                CommandEntry(id="cmd_example_001", command="app:go-back"),
                CommandEntry(id="cmd_example_002", command="app:go-forward"),
                CommandEntry(id="cmd_example_003", command="app:open-settings"),
            ],
        )
    ])
