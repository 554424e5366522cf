"""
Owner field classification.

A resource records its owner either as a single identifier or as a
collection of identifiers. The value is classified once into a tagged
variant, then checked against the caller id through ``includes``.

Usage:
    claim = classify_owner(resource["userId"])
    if claim is None:
        ...  # no recorded owner
    elif claim.includes(caller_id):
        ...  # caller owns it
"""

from dataclasses import dataclass
from typing import Any


# Owner values of these types list several owners
OWNER_COLLECTION_TYPES = (list, tuple, set, frozenset)


def same_identifier(a: Any, b: Any) -> bool:
    """
    Type-sensitive identifier equality.

    "1" never matches 1, and True never matches 1.
    """
    return type(a) is type(b) and a == b


@dataclass(frozen=True)
class SingleOwner:
    """Resource owned by exactly one identity."""
    owner_id: Any

    def includes(self, caller_id: Any) -> bool:
        return same_identifier(self.owner_id, caller_id)


@dataclass(frozen=True)
class OwnerSet:
    """Resource shared by several identities."""
    owner_ids: tuple[Any, ...]

    @property
    def is_empty(self) -> bool:
        return not self.owner_ids

    def includes(self, caller_id: Any) -> bool:
        return any(same_identifier(owner_id, caller_id) for owner_id in self.owner_ids)


OwnerClaim = SingleOwner | OwnerSet


def classify_owner(value: Any) -> OwnerClaim | None:
    """
    Classify a raw owner field value.

    Returns:
        None if the value is absent, OwnerSet for list-like values,
        SingleOwner otherwise (strings and bytes count as single ids)
    """
    if value is None:
        return None
    if isinstance(value, OWNER_COLLECTION_TYPES):
        return OwnerSet(owner_ids=tuple(value))
    return SingleOwner(owner_id=value)
