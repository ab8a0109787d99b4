"""Owner-scoped sequence key bindings."""

# pylint: disable=missing-function-docstring

import threading
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional

from keyseq.errors import DuplicateBinding
from keyseq.matchers import SequenceMatcher, collides, collision_report
from keyseq.notation import ParsedKey, parse_key
from keyseq.util import _debug

__all__ = [
    "Binding",
    "BindingBank",
    "make_binding",
    "find_duplicate",
    "assert_no_duplicate",
]


@dataclass(frozen=True)
class Binding:
    """A sequence key bound to an action inside one group."""

    owner_id: str
    surface_form: str
    parsed: ParsedKey
    action_id: Optional[str] = None

    def __str__(self) -> str:
        return f"{self.surface_form} -> {self.action_id} [{self.owner_id}]"


def make_binding(owner_id: str, surface_form: str, action_id: Optional[str] = None) -> Binding:
    """Parse the surface form up front; invalid notation never becomes a binding."""
    return Binding(
        owner_id=owner_id,
        surface_form=surface_form.strip(),
        parsed=parse_key(surface_form),
        action_id=action_id,
    )


def find_duplicate(
        candidate: Binding,
        bindings: Iterable[Binding],
        exclude: Optional[str] = None,
) -> Optional[Binding]:
    """
    Return the first binding of the same owner equivalent to the candidate.

    ``exclude`` names an action id to skip, so an entry being edited is not
    compared against its own previous key.
    """
    for existing in bindings:
        if existing is candidate:
            continue
        if exclude is not None and existing.action_id == exclude:
            continue
        if collides(existing, candidate):
            return existing
    return None


def assert_no_duplicate(
        candidate: Binding,
        bindings: Iterable[Binding],
        exclude: Optional[str] = None,
) -> None:
    existing = find_duplicate(candidate, bindings, exclude=exclude)
    if existing is not None:
        _debug(collision_report(candidate, existing))
        raise DuplicateBinding(candidate.surface_form, candidate.owner_id, existing)


class BindingBank:
    """Registry of bindings keyed by owner, rejecting duplicates on register."""

    def __init__(self):
        self._lock = threading.Lock()
        self._owners: Dict[str, List[Binding]] = {}

    def register(self, owner_id: str, surface_form: str, action_id: Optional[str] = None) -> Binding:
        binding = make_binding(owner_id, surface_form, action_id)
        with self._lock:
            existing = self._owners.setdefault(owner_id, [])
            assert_no_duplicate(binding, existing, exclude=action_id)
            # re-registering an action replaces its previous key
            if action_id is not None:
                existing[:] = [b for b in existing if b.action_id != action_id]
            existing.append(binding)
        return binding

    def for_owner(self, owner_id: str) -> List[Binding]:
        with self._lock:
            return list(self._owners.get(owner_id, ()))

    def matcher(self, owner_id: str) -> SequenceMatcher:
        return SequenceMatcher(self.for_owner(owner_id))

    def remove_by_action(self, action_id: str) -> None:
        with self._lock:
            for owner_id, bindings in self._owners.items():
                self._owners[owner_id] = [b for b in bindings if b.action_id != action_id]

    def clear_owner(self, owner_id: str) -> None:
        with self._lock:
            self._owners.pop(owner_id, None)

