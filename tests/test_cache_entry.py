"""
Tests for the cache entry entity and its wire record.
"""

from datetime import datetime, timedelta, timezone

import pytest

from identity_cache.dto import CachedIdentityRecord
from identity_cache.entities import DEFAULT_TTL, CacheEntry
from tests.conftest import NOTCH_ID

ISSUED = datetime(2026, 1, 1, 12, 0, 0, 123456, tzinfo=timezone.utc)


def test_issue_expires_three_days_later():
    entry = CacheEntry.issue("Notch", NOTCH_ID, now=ISSUED)
    assert DEFAULT_TTL == timedelta(days=3)
    assert entry.expires_at == ISSUED + timedelta(days=3)


def test_expired_is_strictly_after():
    entry = CacheEntry.issue("Notch", NOTCH_ID, now=ISSUED)
    assert not entry.expired(ISSUED + timedelta(days=3))
    assert entry.expired(ISSUED + timedelta(days=3, microseconds=1))


def test_entry_is_immutable():
    entry = CacheEntry.issue("Notch", NOTCH_ID, now=ISSUED)
    with pytest.raises(AttributeError):
        entry.name = "Jeb"  # type: ignore[misc]


def test_name_key_is_lowercased():
    assert CacheEntry.issue("NoTcH", NOTCH_ID, now=ISSUED).name_key == "notch"


def test_record_uses_wire_field_names():
    entry = CacheEntry.issue("Notch", NOTCH_ID, now=ISSUED)
    payload = CachedIdentityRecord.from_entry(entry).model_dump(by_alias=True, mode="json")
    assert set(payload) == {"name", "identifier", "expiresAt"}
    assert payload["identifier"] == "069a79f4-44e9-4726-a5be-fca90e38aaf5"


def test_record_keeps_microsecond_precision():
    entry = CacheEntry.issue("Notch", NOTCH_ID, now=ISSUED)
    restored = CachedIdentityRecord.model_validate_json(
        CachedIdentityRecord.from_entry(entry).to_json()
    ).to_entry()
    assert restored == entry
