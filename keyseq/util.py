"""Small shared helpers."""

import os
import sys

__all__ = ["_debug", "_warn"]

_DEBUG = os.environ.get("DEBUG", False)


def _debug(msg):
    if _DEBUG:
        print(msg)


def _warn(msg):
    print(msg, file=sys.stderr)
