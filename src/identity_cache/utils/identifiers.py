"""Identifier format helpers.

Two textual forms are recognized:
- canonical dashed: ``069a79f4-44e9-4726-a5be-fca90e38aaf5``
- undashed 32 hex digits, as returned by the remote authority
"""

import re
from uuid import UUID

DASHED_PATTERN = re.compile(
    r"[a-fA-F0-9]{8}-[a-fA-F0-9]{4}-[a-fA-F0-9]{4}-[a-fA-F0-9]{4}-[a-fA-F0-9]{12}"
)
UNDASHED_PATTERN = re.compile(r"[a-fA-F0-9]{32}")


def parse_identifier(text: str) -> UUID | None:
    """Parse a dashed or undashed identifier string.

    Args:
        text: Candidate identifier text

    Returns:
        The UUID if the whole string is an identifier, None otherwise
    """
    if DASHED_PATTERN.fullmatch(text) or UNDASHED_PATTERN.fullmatch(text):
        return UUID(hex=text)
    return None


def undashed(identifier: UUID) -> str:
    """Return the 32-hex-digit form of an identifier."""
    return identifier.hex
