"""Session directory protocol.

The session directory knows which entities are connected right now. It is
always consulted first because it is authoritative and free.
"""

from typing import Protocol, runtime_checkable
from uuid import UUID


@runtime_checkable
class SessionDirectory(Protocol):
    """Protocol for the directory of currently connected entities."""

    def is_online_by_name(self, name: str) -> UUID | None:
        """Return the live identifier of a connected entity, matched by name."""
        ...

    def is_online_by_identifier(self, identifier: UUID) -> str | None:
        """Return the live name of a connected entity, matched by identifier."""
        ...
