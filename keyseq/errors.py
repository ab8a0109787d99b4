"""Errors raised while parsing and registering sequence keys."""

# pylint: disable=missing-class-docstring

from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from keyseq.bindings import Binding

__all__ = [
    "ParseError",
    "EmptyInput",
    "InvalidNotation",
    "UnknownModifier",
    "ReservedKey",
    "DuplicateBinding",
    "SettingsError",
]


class ParseError(ValueError):
    """A sequence key that could not be turned into a parsed key."""

    def __init__(self, message: str, text: str):
        super().__init__(message)
        self.input = text


class EmptyInput(ParseError):
    def __init__(self, text: str = ""):
        super().__init__("Key sequence cannot be empty", text)


class InvalidNotation(ParseError):
    def __init__(self, text: str):
        super().__init__(
            f"Invalid key sequence: {text}. "
            "Use Vim notation like <C-a>, <Space>, or single characters.",
            text,
        )


class UnknownModifier(ParseError):
    def __init__(self, token: str, text: str):
        super().__init__(f"Unknown modifier: {token} in {text}", text)
        self.token = token


class ReservedKey(ParseError):
    def __init__(self, key: str, text: str):
        super().__init__(
            f'Key "{key}" is reserved for list navigation and cannot be used as a sequence key',
            text,
        )
        self.key = key


class DuplicateBinding(ValueError):
    """A sequence key equivalent to one already bound in the same group."""

    def __init__(self, surface_form: str, owner_id: str, existing: "Binding"):
        super().__init__(
            f'Sequence key "{surface_form}" is already used in this group '
            f'(bound as "{existing.surface_form}")'
        )
        self.surface_form = surface_form
        self.owner_id = owner_id
        self.existing = existing


class SettingsError(ValueError):
    def __init__(self, message: str, location: Optional[str] = None):
        super().__init__(f"{location}: {message}" if location else message)
        self.location = location
