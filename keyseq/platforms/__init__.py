"""Factory for platform-specific key sources."""

import sys

from keyseq.platforms.base import KeyHandler, KeySource
from keyseq.platforms.common import PynputKeySource
from keyseq.platforms.darwin import MacKeySource


def create_key_source() -> KeySource:
    """Return a key source suitable for the current platform."""
    if sys.platform == "darwin":
        return MacKeySource()
    return PynputKeySource()


__all__ = ["KeyHandler", "KeySource", "PynputKeySource", "create_key_source"]
