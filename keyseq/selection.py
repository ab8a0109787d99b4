"""Headless selection list driven by arrow keys and sequence keys."""

# pylint: disable=missing-function-docstring

import threading
import uuid
from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence

from keyseq.bindings import make_binding
from keyseq.events import KeyEventDescriptor
from keyseq.matchers import SequenceMatcher
from keyseq.notation import format_key_for_display
from keyseq.util import _debug

__all__ = ["SelectionItem", "SelectionList", "SelectionHost"]


@dataclass(frozen=True)
class SelectionItem:
    id: str
    name: str
    command: str
    sequence_key: Optional[str] = None

    @property
    def badge(self) -> str:
        return format_key_for_display(self.sequence_key or "")


class SelectionList:
    """
    A list of items the user picks from with the keyboard.

    ArrowUp/ArrowDown move the highlight, Enter picks it, Escape closes the list.
    Any other key is matched against the items' sequence keys. Sequence keys are
    parsed when the list is built, so an invalid one fails here.
    """

    def __init__(
            self,
            title: str,
            items: Sequence[SelectionItem],
            on_select: Callable[[SelectionItem], None],
            owner_id: Optional[str] = None,
            matcher: Optional[SequenceMatcher] = None,
    ):
        self.title = title
        self.items: List[SelectionItem] = list(items)
        self._on_select = on_select
        self._owner_id = owner_id or str(uuid.uuid4())
        self._items_by_id = {item.id: item for item in self.items}
        if matcher is None:
            matcher = SequenceMatcher(
                make_binding(self._owner_id, item.sequence_key, item.id)
                for item in self.items
                if item.sequence_key
            )
        self._matcher = matcher
        self.selected_index = 0
        self.closed = False
        self._on_close: List[Callable[["SelectionList"], None]] = []

    @property
    def owner_id(self) -> str:
        return self._owner_id

    @property
    def selected(self) -> Optional[SelectionItem]:
        if not self.items:
            return None
        return self.items[self.selected_index]

    def on_close(self, callback: Callable[["SelectionList"], None]) -> None:
        self._on_close.append(callback)

    def handle(self, event: KeyEventDescriptor) -> bool:
        """Process one key press; return True if the list consumed it."""
        if self.closed:
            return False

        if event.key == "ArrowUp":
            self.move(-1)
            return True
        if event.key == "ArrowDown":
            self.move(1)
            return True
        if event.key == "Enter":
            if self.selected is not None:
                self.choose(self.selected)
            return True
        if event.key == "Escape":
            self.close()
            return True

        binding = self._matcher.match(event)
        item = self._items_by_id.get(binding.action_id) if binding is not None else None
        if item is None:
            return False
        self.choose(item)
        return True

    def move(self, step: int) -> None:
        if not self.items:
            return
        self.selected_index = min(max(self.selected_index + step, 0), len(self.items) - 1)

    def choose(self, item: SelectionItem) -> None:
        _debug(f"Selected {item.name} ({item.command}) from {self.title}")
        self.close()
        self._on_select(item)

    def close(self) -> None:
        if self.closed:
            return
        self.closed = True
        for callback in self._on_close:
            callback(self)


class SelectionHost:
    """
    Owns the one selection list that may be open at a time.

    Opening a new list closes the current one first.
    """

    def __init__(self):
        self._lock = threading.RLock()
        self._active: Optional[SelectionList] = None

    @property
    def active(self) -> Optional[SelectionList]:
        with self._lock:
            return self._active

    def open(self, selection: SelectionList) -> SelectionList:
        with self._lock:
            self.close()
            self._active = selection
            selection.on_close(self._release)
            return selection

    def close(self) -> None:
        with self._lock:
            if self._active is not None:
                self._active.close()
            self._active = None

    def dispatch(self, event: KeyEventDescriptor) -> bool:
        with self._lock:
            selection = self._active
        if selection is None:
            return False
        return selection.handle(event)

    def _release(self, selection: SelectionList) -> None:
        with self._lock:
            if self._active is selection:
                self._active = None
