"""Utilities for converting pynput keys into key event descriptors."""

from contextlib import suppress
from typing import AbstractSet, Dict, Optional, Union

import pynput  # pylint: disable=import-error
import pynput.keyboard  # pylint: disable=import-error

from keyseq.events import KeyEventDescriptor
from keyseq.keys import Modifier

__all__ = ["descriptor_from_pynput", "modifier_of", "key_name"]

_PynputKey = Union[pynput.keyboard.Key, pynput.keyboard.KeyCode]

_MODIFIER_KEYS: Dict[str, Modifier] = {
    "ctrl": Modifier.CTRL,
    "ctrl_l": Modifier.CTRL,
    "ctrl_r": Modifier.CTRL,
    "shift": Modifier.SHIFT,
    "shift_l": Modifier.SHIFT,
    "shift_r": Modifier.SHIFT,
    "alt": Modifier.ALT,
    "alt_l": Modifier.ALT,
    "alt_r": Modifier.ALT,
    "alt_gr": Modifier.ALT,
    "cmd": Modifier.META,
    "cmd_l": Modifier.META,
    "cmd_r": Modifier.META,
}

_NAMED_KEYS: Dict[str, str] = {
    "esc": "Escape",
    "enter": "Enter",
    "tab": "Tab",
    "space": " ",
    "backspace": "Backspace",
    "delete": "Delete",
    "home": "Home",
    "end": "End",
    "page_up": "PageUp",
    "page_down": "PageDown",
    "up": "ArrowUp",
    "down": "ArrowDown",
    "left": "ArrowLeft",
    "right": "ArrowRight",
}
_NAMED_KEYS.update({f"f{n}": f"F{n}" for n in range(1, 13)})


def _by_member(names: Dict[str, object]) -> dict:
    table = {}
    for name, value in names.items():
        # not every platform defines every key (alt_gr, cmd_r...)
        with suppress(AttributeError):
            table[getattr(pynput.keyboard.Key, name)] = value
    return table


_MODIFIERS_BY_KEY = _by_member(_MODIFIER_KEYS)
_NAMES_BY_KEY = _by_member(_NAMED_KEYS)


def modifier_of(key: _PynputKey) -> Optional[Modifier]:
    """Return the modifier a pynput key stands for, if it is one."""
    if isinstance(key, pynput.keyboard.Key):
        return _MODIFIERS_BY_KEY.get(key)
    return None


def key_name(key: _PynputKey, ctrl: bool = False) -> Optional[str]:
    """Return the layout-resolved key name, or None for keys we do not track."""
    if isinstance(key, pynput.keyboard.Key):
        return _NAMES_BY_KEY.get(key)

    char = getattr(key, "char", None)
    if not char:
        return None
    # Ctrl+letter arrives as a control character on some platforms
    if ctrl and len(char) == 1 and 1 <= ord(char) <= 26:
        return chr(ord(char) + 96)
    return char


def descriptor_from_pynput(key: _PynputKey, held: AbstractSet[Modifier]) -> Optional[KeyEventDescriptor]:
    """Describe a non-modifier pynput key press given the modifiers held down."""
    if modifier_of(key) is not None:
        return None
    name = key_name(key, ctrl=Modifier.CTRL in held)
    if name is None:
        return None
    return KeyEventDescriptor(
        key=name,
        ctrl=Modifier.CTRL in held,
        alt=Modifier.ALT in held,
        shift=Modifier.SHIFT in held,
        meta=Modifier.META in held,
    )
