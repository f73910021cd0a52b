"""Utility modules for identity resolution."""

from .identifiers import DASHED_PATTERN, UNDASHED_PATTERN, parse_identifier, undashed

__all__ = [
    "DASHED_PATTERN",
    "UNDASHED_PATTERN",
    "parse_identifier",
    "undashed",
]
