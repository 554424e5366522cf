"""
Hook context passed through a service pipeline.

The pipeline builds one HookContext per call and hands it to each hook
in turn. Hooks may mutate ``params`` (typically ``params["query"]``) and
return the same context.

Usage:
    context = HookContext(
        type=HookType.BEFORE,
        method="get",
        id="42",
        params={"provider": "rest", "user": current_user},
        service=messages,
    )
    context = await restrict_to_owner()(context)
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Protocol, runtime_checkable

from .errors import ConfigurationError


class HookType(str, Enum):
    """Pipeline stage a hook runs in."""
    BEFORE = "before"
    AFTER = "after"
    ERROR = "error"


# Methods that target a set of records via a query rather than a single id
COLLECTION_METHODS = frozenset({"find"})


class _Missing:
    """Sentinel type for an id that was never supplied."""

    _instance: _Missing | None = None

    def __new__(cls) -> _Missing:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False


MISSING: Any = _Missing()


@runtime_checkable
class ResourceService(Protocol):
    """Data-access handle a hook can call back into."""

    async def get(self, id: Any) -> Any:
        ...


@dataclass
class HookContext:
    """
    Mutable per-call context.

    Attributes:
        type: Pipeline stage (before, after or error)
        method: Service method being called (find, get, create, update, patch, remove)
        id: Target record id. MISSING when not supplied; None for a
            multi-record call such as ``patch(None, data)``
        params: Call parameters: ``provider`` (transport marker, absent for
            internal calls), ``user`` (authenticated caller) and ``query``
        service: Data-access handle for the service being called
    """
    type: HookType | str
    method: str
    id: Any = MISSING
    params: dict[str, Any] = field(default_factory=dict)
    service: ResourceService | None = None

    def __post_init__(self) -> None:
        try:
            self.type = HookType(self.type)
        except ValueError as e:
            raise ConfigurationError(f"Unknown hook type: {self.type!r}") from e

    @property
    def provider(self) -> str | None:
        return self.params.get("provider")

    @property
    def user(self) -> Any:
        return self.params.get("user")

    @property
    def query(self) -> dict[str, Any]:
        """Query params, created empty on first access."""
        query = self.params.get("query")
        if query is None:
            query = self.params["query"] = {}
        return query

    @property
    def has_id(self) -> bool:
        return self.id is not MISSING

    @property
    def is_collection(self) -> bool:
        """True for query-based calls: find, or an explicit ``None`` id."""
        return self.method in COLLECTION_METHODS or self.id is None


def read_field(record: Any, name: str) -> Any:
    """
    Read a field off a mapping or an object.

    Returns None when the field is absent.
    """
    if record is None:
        return None
    if isinstance(record, Mapping):
        return record.get(name)
    return getattr(record, name, None)
