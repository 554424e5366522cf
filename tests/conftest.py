"""
Pytest fixtures for testing.

Provides:
- Mock services standing in for the data-access layer
- Hook context builders for external and internal calls
- Isolation from OWNER_GUARD_* environment variables
"""

from typing import Any

import pytest

from owner_guard import HookContext, get_settings


# ============ Mock Implementations ============


class MockService:
    """Mock data-access service that records get() calls."""

    def __init__(self, record: Any):
        self.record = record
        self.calls: list[Any] = []

    async def get(self, id: Any) -> Any:
        self.calls.append(id)
        return self.record


class Record:
    """Attribute-style record, like an ORM model instance."""

    def __init__(self, **fields: Any):
        self.__dict__.update(fields)


@pytest.fixture(autouse=True)
def clean_settings(monkeypatch: pytest.MonkeyPatch):
    """Drop env overrides and the settings cache around each test."""
    monkeypatch.delenv("OWNER_GUARD_OWNER_FIELD", raising=False)
    monkeypatch.delenv("OWNER_GUARD_ID_FIELD", raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def message() -> dict[str, Any]:
    return {"userId": "1", "text": "hey"}


@pytest.fixture
def shared_message() -> dict[str, Any]:
    return {"userId": ["1"], "text": "hey"}


@pytest.fixture
def service(message: dict[str, Any]) -> MockService:
    return MockService(message)


@pytest.fixture
def shared_service(shared_message: dict[str, Any]) -> MockService:
    return MockService(shared_message)


@pytest.fixture
def external_context(service: MockService) -> HookContext:
    """A 'get' call from an authenticated REST caller with _id '1'."""
    return HookContext(
        type="before",
        method="get",
        id="1",
        params={"provider": "rest", "user": {"_id": "1"}},
        service=service,
    )


@pytest.fixture
def make_service() -> type[MockService]:
    return MockService


@pytest.fixture
def make_record() -> type[Record]:
    return Record
