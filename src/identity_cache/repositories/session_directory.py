"""In-process session directory.

Game servers report connects and disconnects here; the resolver asks it first
because a connected entity's live name and identifier are always current.
"""

import threading
from uuid import UUID


class InMemorySessionDirectory:
    """Thread-safe registry of currently connected entities.

    Satisfies the SessionDirectory protocol. Name matching is case-insensitive;
    the stored name keeps the case it was connected with.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._names: dict[UUID, str] = {}
        self._identifiers: dict[str, UUID] = {}

    def connect(self, name: str, identifier: UUID) -> None:
        """Register a connected entity, replacing any stale registration."""
        with self._lock:
            previous = self._names.pop(identifier, None)
            if previous is not None:
                self._identifiers.pop(previous.lower(), None)
            self._names[identifier] = name
            self._identifiers[name.lower()] = identifier

    def disconnect(self, identifier: UUID) -> None:
        """Forget a connected entity. Unknown identifiers are ignored."""
        with self._lock:
            name = self._names.pop(identifier, None)
            if name is not None and self._identifiers.get(name.lower()) == identifier:
                del self._identifiers[name.lower()]

    def is_online_by_name(self, name: str) -> UUID | None:
        return self._identifiers.get(name.lower())

    def is_online_by_identifier(self, identifier: UUID) -> str | None:
        return self._names.get(identifier)

    @property
    def online_count(self) -> int:
        """Number of connected entities."""
        return len(self._names)
