"""
Tests for the distributed cache gateway.
"""

import json
from datetime import timedelta

import pytest
from structlog.testing import capture_logs

from identity_cache.entities import CacheEntry
from identity_cache.exceptions import CacheStoreError
from identity_cache.services import IdentityCacheGateway
from tests.conftest import NOTCH_ID


@pytest.fixture
def gateway(store, clock):
    return IdentityCacheGateway(store=store, bucket="uuid-cache", clock=clock)


def test_store_writes_same_payload_under_both_keys(gateway, store, clock):
    gateway.store(CacheEntry.issue("Notch", NOTCH_ID, now=clock()))

    bucket = store.buckets["uuid-cache"]
    assert bucket["notch"] == bucket[str(NOTCH_ID)]
    assert json.loads(bucket["notch"])["name"] == "Notch"
    # Name key first, then identifier key.
    assert [key for op, _, key in store.calls if op == "set"] == ["notch", str(NOTCH_ID)]


def test_fetch_by_either_key_rebuilds_the_same_pair(gateway, clock):
    entry = CacheEntry.issue("Notch", NOTCH_ID, now=clock())
    gateway.store(entry)

    assert gateway.fetch_by_name("NOTCH") == entry
    assert gateway.fetch_by_identifier(NOTCH_ID) == entry


def test_fetch_miss(gateway):
    assert gateway.fetch_by_name("nobody") is None


@pytest.mark.parametrize(
    "payload",
    [
        "not json",
        '{"name": "Notch"}',
        '{"name": "Notch", "identifier": "nope", "expiresAt": "2026-01-01T00:00:00Z"}',
        (
            '{"name": "Notch", "identifier": "069a79f4-44e9-4726-a5be-fca90e38aaf5", '
            '"expiresAt": "2099-01-01T00:00:00"}'
        ),
    ],
)
def test_malformed_record_is_a_logged_miss(gateway, store, payload):
    store.buckets["uuid-cache"]["notch"] = payload

    with capture_logs() as logs:
        assert gateway.fetch_by_name("notch") is None

    assert logs[0]["event"] == "malformed_cache_record"
    assert logs[0]["log_level"] == "warning"


def test_evict(gateway, store, clock):
    gateway.store(CacheEntry.issue("Notch", NOTCH_ID, now=clock()))
    gateway.evict_name("Notch")
    gateway.evict_identifier(NOTCH_ID)
    assert store.buckets["uuid-cache"] == {}


def test_is_expired_uses_gateway_clock(gateway, clock):
    entry = CacheEntry.issue("Notch", NOTCH_ID, now=clock())
    assert not gateway.is_expired(entry)
    clock.advance(timedelta(days=4))
    assert gateway.is_expired(entry)


def test_session_releases_connection(gateway, store):
    with gateway.session() as shared:
        assert shared is not None
        shared.fetch_by_name("notch")
    assert store.sessions_opened == store.sessions_released == 1


def test_session_releases_connection_on_error(gateway, store):
    with pytest.raises(RuntimeError):
        with gateway.session():
            raise RuntimeError("boom")
    assert store.sessions_released == 1


def test_session_yields_none_when_store_unavailable(gateway, store):
    store.fail_sessions = True

    with capture_logs() as logs:
        with gateway.session() as shared:
            assert shared is None

    assert logs[0]["event"] == "shared_cache_unavailable"


def test_store_errors_propagate(gateway, store):
    store.fail_operations = True
    with pytest.raises(CacheStoreError):
        gateway.fetch_by_name("notch")
