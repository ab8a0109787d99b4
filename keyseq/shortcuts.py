"""Command group orchestration, settings hot-reload and the ``keyseq`` CLI."""

# pylint: disable=missing-function-docstring,missing-class-docstring,too-few-public-methods
# pylint: disable=too-many-instance-attributes

import argparse
import json
import os
import sys
import threading
import time
from time import sleep
from typing import Callable, List, Optional, Tuple

from watchdog.events import FileSystemEvent, FileSystemEventHandler  # pylint: disable=import-error
from watchdog.observers import Observer  # pylint: disable=import-error

from keyseq.action import CommandAction, Executor, Notifier
from keyseq.bindings import BindingBank
from keyseq.events import KeyEventDescriptor
from keyseq.groups import CommandGroupSettings
from keyseq.matchers import equivalent, normalize_event
from keyseq.notation import ParsedKey, parse_key
from keyseq.platforms import KeySource, create_key_source
from keyseq.selection import SelectionHost, SelectionItem, SelectionList
from keyseq.settings import load_settings
from keyseq.util import _debug, _warn

__all__ = ["App", "check_settings"]

_DEBOUNCE_SECONDS = 1


class _HotReloader(FileSystemEventHandler):
    def __init__(self, app: "App"):
        self.app = app
        self.last_modified = 0

    def on_modified(self, event: FileSystemEvent):
        self._maybe_reload(event.src_path)

    def on_created(self, event: FileSystemEvent):
        self._maybe_reload(event.src_path)

    def on_moved(self, event: FileSystemEvent):
        # save_settings replaces the file through a rename
        self._maybe_reload(getattr(event, "dest_path", event.src_path))

    def _maybe_reload(self, path: str):
        if os.path.abspath(path) != os.path.abspath(self.app.settings_path):
            return
        current_time = time.time()
        if current_time - self.last_modified > _DEBOUNCE_SECONDS:
            self.last_modified = current_time
            _debug(f"Detected change in {path}. Reloading settings...")
            self.reload_settings()

    def reload_settings(self):
        try:
            self.app.reload()
        except Exception as e:  # pylint: disable=broad-exception-caught
            print(f"Failed to reload settings: {e}")
        else:
            print("Settings reloaded successfully.")


class App:
    """
    Opens a command group as a selection list and runs the picked command.

    ``executor`` runs a host command by id and returns False if it could not;
    ``notify`` shows a short message to the user; ``describe`` turns a command
    id into a display name.
    """

    def __init__(
            self,
            settings_path: str,
            executor: Executor,
            notify: Optional[Notifier] = None,
            describe: Optional[Callable[[str], Optional[str]]] = None,
            key_source: Optional[KeySource] = None,
    ):
        self.settings_path = settings_path
        self._executor = executor
        self._notify = notify or _warn
        self._describe = describe
        self._key_source = key_source
        self._lock = threading.Lock()
        self._running = threading.Event()

        self.host = SelectionHost()
        self.bindings = BindingBank()
        self.settings: CommandGroupSettings = CommandGroupSettings()
        self.last_action: Optional[CommandAction] = None
        self._group_keys: List[Tuple[ParsedKey, str, Optional[Callable[[SelectionList], None]]]] = []

        # Hot-reload
        self._observer = None
        self._reloader = None

        self.reload()

    def reload(self) -> None:
        """Load the settings again; the previous state stays if they are invalid."""
        settings = load_settings(self.settings_path)
        bindings = BindingBank()
        for group in settings.command_groups:
            for command in group.commands:
                if command.sequence_key:
                    bindings.register(group.id, command.sequence_key, command.id)
        with self._lock:
            self.settings = settings
            self.bindings = bindings
        _debug(f"Loaded {len(settings.command_groups)} groups from {self.settings_path}")

    def bind_group(
            self,
            notation: str,
            group_id: str,
            on_open: Optional[Callable[[SelectionList], None]] = None,
    ) -> ParsedKey:
        """
        Open ``group_id`` whenever the key written as ``notation`` is pressed.

        ``on_open`` receives the list once it is shown. Binding a key that is
        already bound to another group raises ValueError; binding a group again
        replaces its key.
        """
        parsed = parse_key(notation)
        with self._lock:
            for existing, other_id, _ in self._group_keys:
                if other_id != group_id and equivalent(existing, parsed):
                    raise ValueError(f"{notation!r} already opens group {other_id!r}")
            self._group_keys = [k for k in self._group_keys if k[1] != group_id]
            self._group_keys.append((parsed, group_id, on_open))
        _debug(f"Bound {parsed} to group {group_id}")
        return parsed

    def open_group(self, group_id: str) -> Optional[SelectionList]:
        with self._lock:
            group = self.settings.find_group(group_id)
            matcher = self.bindings.matcher(group_id)
        if group is None:
            self._notify(f"Unknown command group: {group_id}")
            return None
        if not group.commands:
            self._notify("No commands in this group")
            return None

        items = [
            SelectionItem(
                id=command.id,
                name=self._display_name(command.command),
                command=command.command,
                sequence_key=command.sequence_key,
            )
            for command in group.commands
        ]
        selection = SelectionList(group.name, items, self._run_item, owner_id=group.id, matcher=matcher)
        return self.host.open(selection)

    def handle_key(self, event: KeyEventDescriptor) -> bool:
        """Give the key to the open list first, then to the group keys."""
        if self.host.dispatch(event):
            return True

        pressed = normalize_event(event)
        if pressed is None:
            return False
        with self._lock:
            group_keys = list(self._group_keys)
        for parsed, group_id, on_open in group_keys:
            if equivalent(parsed, pressed):
                selection = self.open_group(group_id)
                if selection is not None and on_open is not None:
                    on_open(selection)
                return True
        return False

    def _display_name(self, command: str) -> str:
        if self._describe is None:
            return command
        return self._describe(command) or "Invalid command"

    def _run_item(self, item: SelectionItem) -> None:
        action = CommandAction(item.command, self._executor, self._notify, name=item.name)
        self.last_action = action
        action.execute()

    def __call__(self):
        if self._key_source is None:
            self._key_source = create_key_source()
        self._key_source.start(self.handle_key)
        self._running.set()

        self._setup_hot_reload()

        try:
            while self._running.is_set():
                sleep(0.1)
        except KeyboardInterrupt:
            self.stop()

    def stop(self):
        self.host.close()
        if self._key_source:
            self._key_source.stop()
        self._running.clear()
        if self._observer:
            self._observer.stop()
            self._observer.join()
            self._observer = None

    def _setup_hot_reload(self):
        self._reloader = _HotReloader(self)
        self._observer = Observer()
        self._observer.schedule(
            self._reloader,
            path=os.path.dirname(os.path.abspath(self.settings_path)),
            recursive=False,
        )
        self._observer.start()


def check_settings(path: str) -> CommandGroupSettings:
    """
    Load and validate the settings at ``path``.

    Raises on an unparsable or duplicated sequence key.
    """
    if not os.path.exists(path):
        raise ValueError(f"No settings found at {path}")
    return load_settings(path)


def _main(argv: Optional[List[str]] = None):
    parser = argparse.ArgumentParser(prog="keyseq", description="Vim-style sequence key tools.")
    subparsers = parser.add_subparsers(dest="command", required=True)

    parse_cmd = subparsers.add_parser("parse", help="Show the canonical form of a key notation.")
    parse_cmd.add_argument("notation", help="Key notation such as <C-a>, A or <Space>.")

    check_cmd = subparsers.add_parser("check", help="Validate a settings file.")
    check_cmd.add_argument("file", help="Path to the JSON settings file.")

    args = parser.parse_args(argv)

    try:
        if args.command == "parse":
            parsed = parse_key(args.notation)
            print(json.dumps(dict(parsed.to_dict(), notation=parsed.notation())))
        else:
            settings = check_settings(args.file)
            count = sum(len(g.bindings()) for g in settings.command_groups)
            print(
                f"Settings OK ({len(settings.command_groups)} groups, "
                f"{count} sequence keys) for {args.file}"
            )
    except ValueError as exc:
        print(exc)
        sys.exit(1)


if __name__ == "__main__":  # pragma: no cover
    _main()
