"""Tests for id generation, legacy migration and the JSON settings store."""

import json
import os
import tempfile
import unittest
from unittest.mock import patch

from keyseq.errors import SettingsError
from keyseq.groups import CommandGroupSettings
from keyseq.ids import (
    generate_command_id,
    generate_group_id,
    has_legacy_ids,
    is_legacy_id,
    migrate_legacy_ids,
)
from keyseq.settings import load_settings, save_settings


def _legacy_document():
    return {
        "commandGroups": [
            {
                "id": "group1",
                "name": "Navigation",
                "commands": [
                    {"id": "command1", "command": "app:go-back", "sequenceKey": "h"},
                    {"id": "cmd_keepThisOne", "command": "app:go-forward", "sequenceKey": "l"},
                ],
            },
            {"id": "abcdefghijkl", "name": "Other", "commands": [{"id": "command2", "command": "x"}]},
        ],
        "nextGroupId": 2,
        "nextCommandId": 3,
    }


class IdTests(unittest.TestCase):
    """Random identifiers."""

    def test_formats(self):
        group_id = generate_group_id()
        command_id = generate_command_id()
        self.assertEqual(len(group_id), 12)
        self.assertTrue(group_id.isalnum())
        self.assertTrue(command_id.startswith("cmd_"))
        self.assertEqual(len(command_id), 16)

    def test_ids_differ(self):
        self.assertNotEqual(generate_group_id(), generate_group_id())

    def test_is_legacy_id(self):
        self.assertTrue(is_legacy_id("group1"))
        self.assertTrue(is_legacy_id("command42"))
        self.assertFalse(is_legacy_id("group"))
        self.assertFalse(is_legacy_id("cmd_abc"))
        self.assertFalse(is_legacy_id("mygroup1"))

    def test_has_legacy_ids(self):
        self.assertTrue(has_legacy_ids(_legacy_document()))
        self.assertFalse(has_legacy_ids({"commandGroups": [{"id": "abc", "commands": []}]}))


class MigrationTests(unittest.TestCase):
    """Rewriting sequential ids."""

    def test_migrates_in_place(self):
        data = _legacy_document()
        result = migrate_legacy_ids(data)

        self.assertTrue(result.migrated)
        self.assertEqual(result.groups_updated, 1)
        self.assertEqual(result.commands_updated, 2)
        self.assertNotIn("nextGroupId", data)
        self.assertNotIn("nextCommandId", data)
        self.assertFalse(has_legacy_ids(data))
        self.assertEqual(data["commandGroups"][0]["commands"][1]["id"], "cmd_keepThisOne")
        self.assertEqual(data["commandGroups"][1]["id"], "abcdefghijkl")
        self.assertEqual(data["commandGroups"][0]["commands"][0]["sequenceKey"], "h")

    def test_only_counters(self):
        data = {"commandGroups": [], "nextGroupId": 1}
        result = migrate_legacy_ids(data)
        self.assertTrue(result.migrated)
        self.assertEqual(data, {"commandGroups": []})

    def test_nothing_to_do(self):
        result = migrate_legacy_ids({"commandGroups": []})
        self.assertFalse(result.migrated)


class SettingsStoreTests(unittest.TestCase):
    """Loading and saving the JSON document."""

    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.path = os.path.join(self._tmp.name, "settings.json")

    def tearDown(self):
        self._tmp.cleanup()

    def _write(self, data):
        with open(self.path, "w", encoding="utf-8") as f:
            f.write(data if isinstance(data, str) else json.dumps(data))

    def test_missing_file_gives_defaults(self):
        settings = load_settings(self.path)
        self.assertEqual(settings.command_groups[0].name, "Example Group")
        self.assertFalse(os.path.exists(self.path))

    def test_save_then_load(self):
        settings = CommandGroupSettings()
        group = settings.add_group("Files")
        group.add_command("file:open", "<C-o>")
        save_settings(settings, self.path)

        loaded = load_settings(self.path)
        self.assertEqual(loaded.to_dict(), settings.to_dict())
        self.assertEqual([f for f in os.listdir(self._tmp.name)], ["settings.json"])

    def test_legacy_file_is_migrated_and_rewritten(self):
        self._write(_legacy_document())
        with patch("builtins.print") as print_mock:
            settings = load_settings(self.path)

        messages = [c.args[0] for c in print_mock.call_args_list]
        self.assertTrue(any("1 groups and 2 commands" in m for m in messages))
        self.assertNotEqual(settings.command_groups[0].id, "group1")
        with open(self.path, encoding="utf-8") as f:
            stored = json.load(f)
        self.assertNotIn("nextGroupId", stored)
        self.assertEqual(stored["commandGroups"][0]["id"], settings.command_groups[0].id)

    def test_reloading_is_idempotent(self):
        self._write({"commandGroups": [{"id": "g", "name": "G", "commands": [
            {"id": "c1", "command": "a", "sequenceKey": "A"},
            {"id": "c2", "command": "b", "sequenceKey": "<C-S-x>"},
        ]}]})
        first = load_settings(self.path).validate()
        second = load_settings(self.path).validate()
        self.assertEqual([b.parsed for b in first["g"]], [b.parsed for b in second["g"]])

    def test_invalid_json(self):
        self._write("{not json")
        self.assertRaises(SettingsError, load_settings, self.path)

    def test_top_level_must_be_object(self):
        self._write("[]")
        self.assertRaises(SettingsError, load_settings, self.path)

    def test_invalid_sequence_key_fails_load(self):
        self._write({"commandGroups": [{"id": "g", "name": "G", "commands": [
            {"id": "c1", "command": "a", "sequenceKey": "<Esc>"},
        ]}]})
        with self.assertRaises(SettingsError) as ctx:
            load_settings(self.path)
        self.assertIn("reserved", str(ctx.exception))

    def test_non_string_sequence_key_fails_load(self):
        self._write({"commandGroups": [{"id": "g", "name": "G", "commands": [
            {"id": "c", "command": "x", "sequenceKey": 5},
        ]}]})
        with self.assertRaises(SettingsError) as ctx:
            load_settings(self.path)
        self.assertEqual(ctx.exception.location, "commandGroups[0]")
        self.assertIn("sequenceKey", str(ctx.exception))

    def test_non_string_group_id_fails_load(self):
        self._write({"commandGroups": [{"id": 1, "name": "G", "commands": []}]})
        with self.assertRaises(SettingsError) as ctx:
            load_settings(self.path)
        self.assertIn("'id'", str(ctx.exception))

    def test_malformed_commands_fail_load(self):
        for commands in ({"id": "c"}, ["not a command"], [{"id": "c", "command": None}]):
            with self.subTest(commands=commands):
                self._write({"commandGroups": [{"id": "g", "name": "G", "commands": commands}]})
                self.assertRaises(SettingsError, load_settings, self.path)

    def test_null_sequence_key_is_unbound(self):
        self._write({"commandGroups": [{"id": "g", "name": "G", "commands": [
            {"id": "c", "command": "x", "sequenceKey": None},
        ]}]})
        settings = load_settings(self.path)
        self.assertIsNone(settings.command_groups[0].commands[0].sequence_key)

    def test_validation_can_be_skipped(self):
        self._write({"commandGroups": [{"id": "g", "name": "G", "commands": [
            {"id": "c1", "command": "a", "sequenceKey": "a"},
            {"id": "c2", "command": "b", "sequenceKey": "a"},
        ]}]})
        settings = load_settings(self.path, validate=False)
        self.assertEqual(len(settings.command_groups[0].commands), 2)


if __name__ == "__main__":
    unittest.main()
