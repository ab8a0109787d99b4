"""Vim-style sequence keys for picking commands from a selection list."""

from keyseq.bindings import Binding, BindingBank, assert_no_duplicate, find_duplicate, make_binding
from keyseq.errors import (
    DuplicateBinding,
    EmptyInput,
    InvalidNotation,
    ParseError,
    ReservedKey,
    SettingsError,
    UnknownModifier,
)
from keyseq.events import KeyEventDescriptor
from keyseq.keys import RESERVED_KEYS, Modifier
from keyseq.matchers import SequenceMatcher, equivalent, match, normalize_event
from keyseq.notation import ParsedKey, format_key_for_display, is_valid_notation, parse_key

__all__ = [
    "Binding",
    "BindingBank",
    "DuplicateBinding",
    "EmptyInput",
    "InvalidNotation",
    "KeyEventDescriptor",
    "Modifier",
    "ParseError",
    "ParsedKey",
    "RESERVED_KEYS",
    "ReservedKey",
    "SequenceMatcher",
    "SettingsError",
    "UnknownModifier",
    "assert_no_duplicate",
    "equivalent",
    "find_duplicate",
    "format_key_for_display",
    "is_valid_notation",
    "make_binding",
    "match",
    "normalize_event",
    "parse_key",
]
