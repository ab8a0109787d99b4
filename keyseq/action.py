"""Running the command picked from a selection list."""

# pylint: disable=missing-class-docstring,missing-function-docstring

import abc
import threading
from typing import Callable, Optional

from keyseq.util import _debug, _warn

__all__ = ["Action", "CommandAction", "Executor", "Notifier"]

Executor = Callable[[str], bool]
Notifier = Callable[[str], None]


class Action(abc.ABC):
    @abc.abstractmethod
    def execute(self):
        pass

    @abc.abstractmethod
    def is_running(self) -> bool:
        pass

    @property
    @abc.abstractmethod
    def id(self) -> str:
        pass

    def __eq__(self, other: "Action"):
        return isinstance(other, Action) and self.id == other.id

    def __hash__(self):
        return hash(self.id)

    def __str__(self) -> str:
        return self.id


class CommandAction(Action):
    """
    Run a host command by id on a worker thread, one run at a time.

    ``executor`` returns False when the host does not know the command; that and
    any exception it raises are reported through ``notify``.
    """

    def __init__(self, command_id: str, executor: Executor, notify: Optional[Notifier] = None, name: str = ""):
        self._command_id = command_id
        self._name = name or command_id
        self._executor = executor
        self._notify = notify or _warn
        self._execution: Optional[threading.Thread] = None
        self._lock = threading.Lock()

    def execute(self):
        with self._lock:
            if self.is_running():
                return
            self._execution = threading.Thread(target=self._run, daemon=True)
            self._execution.start()

    def _run(self):
        _debug(f"Executing {self._command_id}")
        try:
            ok = self._executor(self._command_id)
        except Exception as exc:  # pylint: disable=broad-exception-caught
            self._notify(f"Error executing command: {exc}")
            return
        if not ok:
            self._notify(f"Failed to execute command: {self._name}")

    def join(self, timeout: Optional[float] = None) -> None:
        if self._execution is not None:
            self._execution.join(timeout)

    def is_running(self) -> bool:
        if self._execution is None:
            return False
        return self._execution.is_alive()

    @property
    def id(self) -> str:
        return self._command_id

    def __str__(self) -> str:
        return f"CommandAction(command={self._command_id})"
