"""Keyboard event structures."""

from dataclasses import dataclass
from typing import List

from keyseq.keys import Modifier

__all__ = ["KeyEventDescriptor"]


@dataclass(frozen=True)
class KeyEventDescriptor:
    """
    One key press as reported by the host: the layout-resolved key name
    (``"a"``, ``"*"``, ``"Tab"``, ``"ArrowUp"``) plus the modifier flags.
    """

    key: str
    ctrl: bool = False
    alt: bool = False
    shift: bool = False
    meta: bool = False

    def held_modifiers(self) -> List[Modifier]:
        held = []
        if self.ctrl:
            held.append(Modifier.CTRL)
        if self.shift:
            held.append(Modifier.SHIFT)
        if self.alt:
            held.append(Modifier.ALT)
        if self.meta:
            held.append(Modifier.META)
        return held

    def __str__(self) -> str:
        return "+".join([m.value for m in self.held_modifiers()] + [repr(self.key)])
