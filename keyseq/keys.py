"""Modifier and named-key tables shared by the parser and the matcher."""

# pylint: disable=invalid-name

from enum import Enum
from typing import Dict, FrozenSet, Optional

__all__ = [
    "Modifier",
    "ModifierSet",
    "MODIFIER_LETTERS",
    "MODIFIER_ORDER",
    "SPECIAL_KEYS",
    "RESERVED_KEYS",
    "NAVIGATION_KEYS",
    "lookup_modifier",
    "lookup_special",
    "special_key_name",
]


class Modifier(Enum):
    """Modifier keys a sequence key may carry."""

    CTRL = "Ctrl"
    SHIFT = "Shift"
    ALT = "Alt"
    META = "Meta"

    def __str__(self) -> str:
        return self.value


ModifierSet = FrozenSet[Modifier]

MODIFIER_ORDER = (Modifier.CTRL, Modifier.SHIFT, Modifier.ALT, Modifier.META)

MODIFIER_LETTERS: Dict[str, Modifier] = {
    "C": Modifier.CTRL,
    "S": Modifier.SHIFT,
    "A": Modifier.ALT,
    "M": Modifier.META,
}

# Vim notation name -> canonical key name
SPECIAL_KEYS: Dict[str, str] = {
    "Esc": "Escape",
    "CR": "Enter",
    "Enter": "Enter",
    "Return": "Enter",
    "Tab": "Tab",
    "Space": " ",
    "BS": "Backspace",
    "Backspace": "Backspace",
    "Del": "Delete",
    "Delete": "Delete",
    "Home": "Home",
    "End": "End",
    "PageUp": "PageUp",
    "PageDown": "PageDown",
    "Up": "ArrowUp",
    "Down": "ArrowDown",
    "Left": "ArrowLeft",
    "Right": "ArrowRight",
    "ArrowUp": "ArrowUp",
    "ArrowDown": "ArrowDown",
    "ArrowLeft": "ArrowLeft",
    "ArrowRight": "ArrowRight",
}
SPECIAL_KEYS.update({f"F{n}": f"F{n}" for n in range(1, 13)})

_SPECIAL_KEYS_FOLDED: Dict[str, str] = {name.casefold(): key for name, key in SPECIAL_KEYS.items()}

# canonical key name -> preferred Vim notation name
_NOTATION_NAMES: Dict[str, str] = {
    " ": "Space",
    "Tab": "Tab",
    "Backspace": "BS",
    "Delete": "Del",
    "Home": "Home",
    "End": "End",
    "PageUp": "PageUp",
    "PageDown": "PageDown",
}
_NOTATION_NAMES.update({f"F{n}": f"F{n}" for n in range(1, 13)})

# Keys driving the selection list itself; never usable as sequence keys.
RESERVED_KEYS: FrozenSet[str] = frozenset({
    "ArrowUp",
    "ArrowDown",
    "ArrowLeft",
    "ArrowRight",
    "Enter",
    "Escape",
})

NAVIGATION_KEYS = RESERVED_KEYS


def lookup_modifier(letter: str) -> Optional[Modifier]:
    """Return the modifier for a Vim modifier letter, ignoring case."""
    return MODIFIER_LETTERS.get(letter.upper())


def lookup_special(name: str) -> Optional[str]:
    """Resolve a Vim key name; exact spelling wins over a case-folded match."""
    if name in SPECIAL_KEYS:
        return SPECIAL_KEYS[name]
    return _SPECIAL_KEYS_FOLDED.get(name.casefold())


def special_key_name(key: str) -> Optional[str]:
    """Return the notation name for a canonical key, or None for plain characters."""
    return _NOTATION_NAMES.get(key)
