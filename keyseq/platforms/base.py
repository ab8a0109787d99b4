"""Live keyboard source abstraction."""

# pylint: disable=missing-function-docstring

import abc
from typing import Callable

from keyseq.events import KeyEventDescriptor

KeyHandler = Callable[[KeyEventDescriptor], bool]


class KeySource(abc.ABC):
    """Delivers one descriptor per key press to a handler."""

    @abc.abstractmethod
    def start(self, handler: KeyHandler) -> None:
        raise NotImplementedError

    @abc.abstractmethod
    def stop(self) -> None:
        raise NotImplementedError

    @abc.abstractmethod
    def held_modifiers(self) -> frozenset:
        raise NotImplementedError
