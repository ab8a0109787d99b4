"""Example: open the "Editor" group whenever F9 is pressed and print the picked command."""

import os

from keyseq.selection import SelectionList
from keyseq.shortcuts import App

SETTINGS = os.path.join(os.path.dirname(__file__), "settings.json")


def run_command(command_id: str) -> bool:
    """Stand-in for a real command runner."""
    print(f"Running {command_id}")
    return True


def show(selection: SelectionList):
    print(selection.title)
    for item in selection.items:
        print(f"  [{item.badge or ' '}] {item.name}")


app = App(SETTINGS, executor=run_command, notify=print)
app.bind_group("<F9>", "grp_editor_01", on_open=show)

if __name__ == "__main__":
    app()
