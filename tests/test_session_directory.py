"""
Tests for the in-memory session directory.
"""

from identity_cache.protocols import SessionDirectory
from identity_cache.repositories import InMemorySessionDirectory
from tests.conftest import JEB_ID, NOTCH_ID


def test_satisfies_protocol():
    assert isinstance(InMemorySessionDirectory(), SessionDirectory)


def test_connect_and_lookup_case_insensitive():
    sessions = InMemorySessionDirectory()
    sessions.connect("Notch", NOTCH_ID)

    assert sessions.is_online_by_name("notch") == NOTCH_ID
    assert sessions.is_online_by_identifier(NOTCH_ID) == "Notch"
    assert sessions.online_count == 1


def test_disconnect():
    sessions = InMemorySessionDirectory()
    sessions.connect("Notch", NOTCH_ID)
    sessions.disconnect(NOTCH_ID)
    sessions.disconnect(JEB_ID)

    assert sessions.is_online_by_name("Notch") is None
    assert sessions.is_online_by_identifier(NOTCH_ID) is None
    assert sessions.online_count == 0


def test_reconnect_with_new_name_drops_old_name():
    sessions = InMemorySessionDirectory()
    sessions.connect("Notch", NOTCH_ID)
    sessions.connect("Notch2", NOTCH_ID)

    assert sessions.is_online_by_name("Notch") is None
    assert sessions.is_online_by_name("notch2") == NOTCH_ID
