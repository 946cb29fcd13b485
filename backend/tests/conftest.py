"""
Name: Pytest Configuration and Shared Fixtures

Responsibilities:
  - Provide an in-memory DocumentStore double (no Redis server required)
  - Provide a controllable clock for TTLs and millisecond timestamps

Notes:
  - FakeDocumentStore mirrors DocumentStore's interface, values are deep-copied
    on write and read the way a JSON round trip through Redis would
  - String values are stored as str, matching decode_responses=True
  - Non-root writes to a missing key raise ResponseError like RedisJSON
"""

import copy
from typing import Any, Optional

import pytest
from redis.exceptions import ResponseError

from account_dal.core import security
from account_dal.core.document_store import ROOT_PATH
from account_dal.core.redis import set_store


class FakeClock:
    """Manually advanced clock (seconds)."""

    def __init__(self, start: float = 1_700_000_000.0) -> None:
        self.now = start

    def advance(self, seconds: float) -> None:
        self.now += seconds

    def now_ms(self) -> int:
        return int(self.now * 1000)


MISSING_KEY_ERROR = "could not perform this operation on a key that doesn't exist"


def _field(path: str) -> Optional[str]:
    if path == ROOT_PATH:
        return None
    assert path.startswith("$."), f"unsupported path: {path}"
    return path[2:]


class FakeDocumentStore:
    """In-memory stand-in for DocumentStore with call tracking."""

    def __init__(self, clock: FakeClock) -> None:
        self.clock = clock
        self.documents: dict[str, Any] = {}
        self.strings: dict[str, str] = {}
        self.expires_at: dict[str, float] = {}
        self.calls: list[tuple] = []
        self.fail_string_set = False

    def _purge(self, key: str) -> None:
        deadline = self.expires_at.get(key)
        if deadline is not None and self.clock.now >= deadline:
            self.strings.pop(key, None)
            self.documents.pop(key, None)
            self.expires_at.pop(key, None)

    # --- JSON ---

    async def json_get(self, key: str, path: str = ROOT_PATH) -> Optional[Any]:
        self._purge(key)
        self.calls.append(("json_get", key, path))
        doc = self.documents.get(key)
        if doc is None:
            return None
        field = _field(path)
        value = doc if field is None else doc.get(field)
        return copy.deepcopy(value)

    async def json_set(self, key: str, path: str, value: Any, nx: bool = False) -> bool:
        self._purge(key)
        self.calls.append(("json_set", key, path))
        field = _field(path)
        if field is None:
            if nx and key in self.documents:
                return False
            self.documents[key] = copy.deepcopy(value)
            return True
        if key not in self.documents:
            raise ResponseError(MISSING_KEY_ERROR)
        self.documents[key][field] = copy.deepcopy(value)
        return True

    async def json_arrappend(self, key: str, path: str, value: Any) -> list[Optional[int]]:
        self._purge(key)
        self.calls.append(("json_arrappend", key, path))
        if key not in self.documents:
            raise ResponseError(MISSING_KEY_ERROR)
        array = self.documents.get(key, {}).get(_field(path))
        if not isinstance(array, list):
            return [None]
        array.append(copy.deepcopy(value))
        return [len(array)]

    async def json_numincrby(self, key: str, path: str, delta: int) -> list[Optional[Any]]:
        self._purge(key)
        self.calls.append(("json_numincrby", key, path))
        if key not in self.documents:
            raise ResponseError(MISSING_KEY_ERROR)
        doc = self.documents.get(key, {})
        field = _field(path)
        if not isinstance(doc.get(field), (int, float)):
            return [None]
        doc[field] += delta
        return [doc[field]]

    # --- keys ---

    async def exists(self, key: str) -> int:
        self._purge(key)
        return int(key in self.documents or key in self.strings)

    async def delete(self, key: str) -> int:
        self._purge(key)
        self.calls.append(("delete", key))
        removed = int(key in self.documents or key in self.strings)
        self.documents.pop(key, None)
        self.strings.pop(key, None)
        self.expires_at.pop(key, None)
        return removed

    # --- strings ---

    async def get(self, key: str) -> Optional[str]:
        self._purge(key)
        return self.strings.get(key)

    async def set(self, key: str, value: Any, ex: Optional[int] = None) -> bool:
        self.calls.append(("set", key))
        if self.fail_string_set:
            return False
        self.strings[key] = str(value)
        self.expires_at.pop(key, None)
        if ex is not None:
            self.expires_at[key] = self.clock.now + ex
        return True

    async def expire(self, key: str, seconds: int) -> bool:
        self._purge(key)
        if key not in self.strings and key not in self.documents:
            return False
        self.expires_at[key] = self.clock.now + seconds
        return True

    async def ttl(self, key: str) -> int:
        self._purge(key)
        if key not in self.strings and key not in self.documents:
            return -2
        deadline = self.expires_at.get(key)
        if deadline is None:
            return -1
        return int(deadline - self.clock.now)

    async def ping(self) -> bool:
        return True

    async def close(self) -> None:
        pass


@pytest.fixture
def clock(monkeypatch) -> FakeClock:
    fake = FakeClock()
    monkeypatch.setattr(security, "now_ms", fake.now_ms)
    return fake


@pytest.fixture
def store(clock) -> FakeDocumentStore:
    fake = FakeDocumentStore(clock)
    set_store(fake)
    yield fake
    set_store(None)
