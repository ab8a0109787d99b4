"""Canonical key comparison and live event matching."""

# pylint: disable=missing-function-docstring

from typing import TYPE_CHECKING, Iterable, Iterator, Optional, Sequence, Tuple

from keyseq.events import KeyEventDescriptor
from keyseq.keys import NAVIGATION_KEYS, Modifier
from keyseq.notation import ParsedKey
from keyseq.util import _debug

if TYPE_CHECKING:
    from keyseq.bindings import Binding

__all__ = [
    "equivalent",
    "normalize_event",
    "match",
    "SequenceMatcher",
    "collides",
    "collision_report",
]


def equivalent(a: ParsedKey, b: ParsedKey) -> bool:
    """Return True if both keys name the same key with the same modifier set."""
    return a.key == b.key and set(a.modifiers) == set(b.modifiers)


def _is_alphabetic(key: str) -> bool:
    return len(key) == 1 and key.isascii() and key.isalpha()


def normalize_event(event: KeyEventDescriptor) -> Optional[ParsedKey]:
    """
    Bring a live key press into the same canonical form the parser produces.

    Navigation keys yield None. Shift is only kept for letters and named keys:
    for a single symbol such as ``*`` the Shift press already chose the
    character, so it is dropped.
    """
    if event.key in NAVIGATION_KEYS:
        return None

    alphabetic = _is_alphabetic(event.key)
    key = event.key.lower() if alphabetic and event.key.isupper() else event.key

    modifiers = set()
    if event.ctrl:
        modifiers.add(Modifier.CTRL)
    if event.alt:
        modifiers.add(Modifier.ALT)
    if event.meta:
        modifiers.add(Modifier.META)
    if event.shift and (alphabetic or len(event.key) > 1):
        modifiers.add(Modifier.SHIFT)

    return ParsedKey(key=key, modifiers=frozenset(modifiers))


def match(event: KeyEventDescriptor, bindings: Iterable["Binding"]) -> Optional["Binding"]:
    """Return the first binding (in order) the event triggers, or None."""
    pressed = normalize_event(event)
    if pressed is None:
        return None

    for binding in bindings:
        if equivalent(binding.parsed, pressed):
            _debug(f"Matched {event} -> {binding.surface_form} ({binding.action_id})")
            return binding
    return None


class SequenceMatcher:
    """Read-only set of bindings for one trigger context, e.g. one open list."""

    def __init__(self, bindings: Iterable["Binding"]):
        self._bindings: Tuple["Binding", ...] = tuple(bindings)

    def match(self, event: KeyEventDescriptor) -> Optional["Binding"]:
        return match(event, self._bindings)

    @property
    def bindings(self) -> Sequence["Binding"]:
        return self._bindings

    def __iter__(self) -> Iterator["Binding"]:
        return iter(self._bindings)

    def __len__(self) -> int:
        return len(self._bindings)

    def debug(self) -> str:
        return f"SequenceMatcher({', '.join(b.surface_form for b in self._bindings)})"


# Collision detection ----------------------------------------------------------

def collides(a: "Binding", b: "Binding") -> bool:
    """Two bindings collide when one owner holds two equivalent keys."""
    return a.owner_id == b.owner_id and equivalent(a.parsed, b.parsed)


def collision_report(a: "Binding", b: "Binding") -> str:
    """Best-effort description of why two bindings collide."""
    if a.owner_id != b.owner_id:
        return f"{a.surface_form!r} and {b.surface_form!r} belong to different groups"
    if not equivalent(a.parsed, b.parsed):
        return f"{a.surface_form!r} ({a.parsed}) and {b.surface_form!r} ({b.parsed}) differ"
    if a.surface_form.strip() == b.surface_form.strip():
        return f"Same key: {a.surface_form!r}"
    return f"{a.surface_form!r} and {b.surface_form!r} both mean {a.parsed}"
