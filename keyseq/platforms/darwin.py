"""macOS-specific key source helpers."""

import os
import subprocess
import sys
from contextlib import suppress

from keyseq.platforms.common import PynputKeySource
from keyseq.util import _warn

_SETTINGS_URL = "x-apple.systempreferences:com.apple.preference.security?Privacy_Keyboard"


def _running_interactively() -> bool:
    """Return True if stdout/stderr are attached to a TTY."""
    return sys.stdout.isatty() or sys.stderr.isatty()


class MacKeySource(PynputKeySource):
    """
    pynput key source that points the user at the Input Monitoring setting when
    the listener cannot start.
    """

    _prompted = False

    def start(self, handler):
        try:
            super().start(handler)
        except Exception:
            self._prompt_permissions()
            raise

    def _prompt_permissions(self):
        if MacKeySource._prompted or os.environ.get("KEYSEQ_SKIP_MAC_PROMPT"):
            return

        MacKeySource._prompted = True
        message = (
            "keyseq could not listen to the keyboard; grant this executable "
            "Input Monitoring access in System Settings > Privacy & Security."
        )
        if not _running_interactively():
            _warn(message)
            return

        _warn(f"{message} Opening the settings pane...")
        with suppress(OSError):
            subprocess.Popen(  # pylint: disable=consider-using-with
                ["open", _SETTINGS_URL],
                stdout=subprocess.DEVNULL,
                stderr=subprocess.DEVNULL,
            )
