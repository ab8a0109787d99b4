"""Vim-style key notation parser.

Supported forms:

- single characters: ``a``, ``5``, ``*``; an uppercase ASCII letter implies Shift
  (``A`` is ``<S-a>``)
- named keys in angle brackets: ``<Space>``, ``<Tab>``, ``<BS>``, ``<F1>``
- modifiers joined with dashes: ``<C-a>``, ``<S-F1>``, ``<C-S-x>``

Modifier letters are ``C`` (Ctrl), ``S`` (Shift), ``A`` (Alt) and ``M`` (Meta),
in any case and any order. Keys used to drive the selection list (arrows,
Enter, Escape) are rejected whatever modifiers are attached.

A bracketed name must be a single character or one of the names in
``keyseq.keys.SPECIAL_KEYS``; anything else, such as ``<Insert>`` or
``<C-foo>``, raises InvalidNotation instead of being kept as literal text.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, FrozenSet, Iterable

from keyseq.errors import EmptyInput, InvalidNotation, ReservedKey, UnknownModifier
from keyseq.keys import (
    MODIFIER_LETTERS,
    MODIFIER_ORDER,
    RESERVED_KEYS,
    Modifier,
    lookup_modifier,
    lookup_special,
    special_key_name,
)

__all__ = [
    "ParsedKey",
    "parse_key",
    "is_valid_notation",
    "format_key_for_display",
]


_MODIFIER_LETTERS = {modifier: letter for letter, modifier in MODIFIER_LETTERS.items()}


def _is_ascii_letter(char: str) -> bool:
    return len(char) == 1 and char.isascii() and char.isalpha()


@dataclass(frozen=True)
class ParsedKey:
    """Canonical form of a sequence key: a modifier set plus one key."""

    key: str
    modifiers: FrozenSet[Modifier] = field(default_factory=frozenset)

    def __post_init__(self):
        # accept any iterable of modifiers but always store a frozenset
        if not isinstance(self.modifiers, frozenset):
            object.__setattr__(self, "modifiers", frozenset(self.modifiers))

    @classmethod
    def of(cls, key: str, *modifiers: Modifier) -> "ParsedKey":
        return cls(key=key, modifiers=frozenset(modifiers))

    def sorted_modifiers(self) -> Iterable[Modifier]:
        return [m for m in MODIFIER_ORDER if m in self.modifiers]

    def to_dict(self) -> Dict[str, Any]:
        return {"modifiers": [m.value for m in self.sorted_modifiers()], "key": self.key}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ParsedKey":
        return cls(key=data["key"], modifiers=frozenset(Modifier(m) for m in data.get("modifiers", ())))

    def notation(self) -> str:
        """Render a surface form that parses back to this key."""
        name = special_key_name(self.key)
        if not self.modifiers and name is None and len(self.key) == 1 and not self.key.isspace():
            if not _is_ascii_letter(self.key) or self.key.islower():
                return self.key

        if name is None:
            if len(self.key) != 1 or self.key == "-" or self.key.isupper():
                raise ValueError(f"{self!r} has no Vim notation")
            name = self.key

        letters = [_MODIFIER_LETTERS[m] for m in self.sorted_modifiers()]
        return "<" + "-".join(letters + [name]) + ">"

    def __str__(self) -> str:
        return "+".join([m.value for m in self.sorted_modifiers()] + [repr(self.key)])


def parse_key(text: str) -> ParsedKey:
    """
    Parse Vim-style key notation into a ParsedKey.

    Raises EmptyInput, InvalidNotation, UnknownModifier or ReservedKey.
    """
    if text is None or text.strip() == "":
        raise EmptyInput(text or "")

    trimmed = text.strip()

    if len(trimmed) == 1:
        parsed = _parse_single_char(trimmed)
    elif trimmed.startswith("<") and trimmed.endswith(">"):
        parsed = _parse_angle_brackets(trimmed, text)
    else:
        raise InvalidNotation(text)

    if parsed.key in RESERVED_KEYS:
        raise ReservedKey(parsed.key, text)
    return parsed


def _parse_single_char(char: str) -> ParsedKey:
    if _is_ascii_letter(char) and char.isupper():
        return ParsedKey(key=char.lower(), modifiers=frozenset({Modifier.SHIFT}))
    return ParsedKey(key=char)


def _parse_angle_brackets(trimmed: str, text: str) -> ParsedKey:
    parts = trimmed[1:-1].split("-")
    key_part = parts[-1]

    modifiers = set()
    for token in parts[:-1]:
        modifier = lookup_modifier(token)
        if modifier is None:
            raise UnknownModifier(token, text)
        modifiers.add(modifier)

    if not key_part:
        raise InvalidNotation(text)

    key = lookup_special(key_part)
    if key is None:
        if len(key_part) != 1:
            raise InvalidNotation(text)
        key = key_part.lower()

    return ParsedKey(key=key, modifiers=frozenset(modifiers))


def is_valid_notation(text: str) -> bool:
    try:
        parse_key(text)
    except ValueError:
        return False
    return True


def format_key_for_display(text: str) -> str:
    """Strip the angle brackets for a badge: ``<C-a>`` -> ``C-a``."""
    if not text:
        return ""
    trimmed = text.strip()
    if len(trimmed) >= 2 and trimmed.startswith("<") and trimmed.endswith(">"):
        return trimmed[1:-1]
    return trimmed
