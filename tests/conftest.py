"""Shared fixtures: in-memory fakes for the three external collaborators."""

import threading
from collections import defaultdict
from contextlib import contextmanager
from datetime import datetime, timedelta, timezone
from uuid import UUID

import pytest

from identity_cache.exceptions import AuthorityError, CacheStoreError
from identity_cache.repositories import InMemorySessionDirectory
from identity_cache.services import IdentityResolver

NOTCH_ID = UUID("069a79f4-44e9-4726-a5be-fca90e38aaf5")
JEB_ID = UUID("853c80ef-3c37-49fd-aa49-938b674adae6")


class FakeClock:
    """Manually advanced clock."""

    def __init__(self, start: datetime) -> None:
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, delta: timedelta) -> None:
        self.now += delta


class FakeCacheStore:
    """Dictionary-backed CacheStore recording every call."""

    def __init__(self) -> None:
        self.buckets: dict[str, dict[str, str]] = defaultdict(dict)
        self.calls: list[tuple[str, str, str]] = []
        self.fail_operations = False
        self.fail_sessions = False
        self.healthy = True
        self.sessions_opened = 0
        self.sessions_released = 0
        self._lock = threading.Lock()

    def _record(self, op: str, bucket: str, key: str) -> None:
        with self._lock:
            self.calls.append((op, bucket, key))
        if self.fail_operations:
            raise CacheStoreError(f"{op} {bucket} {key} failed: connection reset")

    def get(self, bucket: str, key: str) -> str | None:
        self._record("get", bucket, key)
        with self._lock:
            return self.buckets[bucket].get(key)

    def set(self, bucket: str, key: str, value: str) -> None:
        self._record("set", bucket, key)
        with self._lock:
            self.buckets[bucket][key] = value

    def delete(self, bucket: str, key: str) -> None:
        self._record("delete", bucket, key)
        with self._lock:
            self.buckets[bucket].pop(key, None)

    @contextmanager
    def session(self):
        if self.fail_sessions:
            raise CacheStoreError("No connection available.")
        with self._lock:
            self.sessions_opened += 1
        try:
            yield self
        finally:
            with self._lock:
                self.sessions_released += 1

    def health_check(self) -> bool:
        return self.healthy

    def count(self, op: str) -> int:
        return sum(1 for call in self.calls if call[0] == op)


class FakeAuthority:
    """RemoteAuthority answering from dictionaries."""

    def __init__(self) -> None:
        self.profiles: dict[str, UUID] = {}
        self.histories: dict[UUID, list[str]] = {}
        self.failures_remaining = 0
        self.error: Exception | None = None
        self.name_calls = 0
        self.history_calls = 0
        self._lock = threading.Lock()

    def _maybe_fail(self) -> None:
        if self.error is not None:
            raise self.error
        with self._lock:
            if self.failures_remaining > 0:
                self.failures_remaining -= 1
                raise AuthorityError("POST /profiles/minecraft failed: timed out")

    def lookup_identifiers_by_names(self, names: list[str]) -> dict[str, UUID]:
        with self._lock:
            self.name_calls += 1
        self._maybe_fail()
        wanted = {name.lower() for name in names}
        return {name: ident for name, ident in self.profiles.items() if name.lower() in wanted}

    def lookup_name_history(self, identifier: UUID) -> list[str]:
        with self._lock:
            self.history_calls += 1
        self._maybe_fail()
        return list(self.histories.get(identifier, []))

    @property
    def calls(self) -> int:
        return self.name_calls + self.history_calls


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock(datetime(2026, 1, 1, 12, 0, tzinfo=timezone.utc))


@pytest.fixture
def store() -> FakeCacheStore:
    return FakeCacheStore()


@pytest.fixture
def authority() -> FakeAuthority:
    fake = FakeAuthority()
    fake.profiles = {"Notch": NOTCH_ID, "jeb_": JEB_ID}
    fake.histories = {NOTCH_ID: ["Notch"], JEB_ID: ["jeb_", "jeb"]}
    return fake


@pytest.fixture
def sessions() -> InMemorySessionDirectory:
    return InMemorySessionDirectory()


@pytest.fixture
def resolver(store, authority, sessions, clock) -> IdentityResolver:
    return IdentityResolver.create(
        store=store,
        authority=authority,
        sessions=sessions,
        clock=clock,
    )
