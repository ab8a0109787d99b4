"""Shared pynput-backed key source."""

# pylint: disable=missing-function-docstring,import-error

import threading
from typing import Optional, Set, Union

import pynput
import pynput.keyboard

from keyseq.key_utils import descriptor_from_pynput, modifier_of
from keyseq.keys import Modifier
from keyseq.platforms.base import KeyHandler, KeySource
from keyseq.util import _debug


class PynputKeySource(KeySource):
    """Key source backed by a pynput listener that tracks held modifiers."""

    def __init__(self):
        self._lock = threading.Lock()
        self._listener = None
        self._handler: Optional[KeyHandler] = None
        self._held: Set[Modifier] = set()

    def start(self, handler: KeyHandler) -> None:
        self._handler = handler
        self._listener = pynput.keyboard.Listener(
            on_press=self._on_press,
            on_release=self._on_release
        )
        self._listener.start()

    def stop(self) -> None:
        if self._listener:
            self._listener.stop()
            self._listener = None
        with self._lock:
            self._held.clear()

    def held_modifiers(self) -> frozenset:
        with self._lock:
            return frozenset(self._held)

    def _on_press(self, key: Union[pynput.keyboard.Key, pynput.keyboard.KeyCode]):
        modifier = modifier_of(key)
        with self._lock:
            if modifier is not None:
                self._held.add(modifier)
                return
            event = descriptor_from_pynput(key, frozenset(self._held))
        if event is None or self._handler is None:
            return
        _debug(f"Key press {event}")
        self._handler(event)

    def _on_release(self, key: Union[pynput.keyboard.Key, pynput.keyboard.KeyCode]):
        modifier = modifier_of(key)
        if modifier is None:
            return
        with self._lock:
            self._held.discard(modifier)
