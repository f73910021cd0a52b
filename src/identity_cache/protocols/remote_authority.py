"""Remote authority protocol.

The authority is the external service that owns the name/identifier mapping.
It is slow, rate limited and fallible; implementations raise
``AuthorityError`` on any failure.
"""

from typing import Protocol, runtime_checkable
from uuid import UUID


@runtime_checkable
class RemoteAuthority(Protocol):
    """Protocol for authoritative name/identifier lookups."""

    def lookup_identifiers_by_names(self, names: list[str]) -> dict[str, UUID]:
        """Resolve names to identifiers.

        Args:
            names: Names to resolve

        Returns:
            Mapping of case-preserved name to identifier. Names the authority
            cannot resolve are omitted.
        """
        ...

    def lookup_name_history(self, identifier: UUID) -> list[str]:
        """Fetch every name an identifier has used.

        Args:
            identifier: The identifier to look up

        Returns:
            Historical names, most recent first. Empty if unknown.
        """
        ...
