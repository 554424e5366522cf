"""
Ownership hooks for service pipelines.

Restricts externally originated calls to the records the caller owns.

Single records:
---------------
    from owner_guard import HookContext, restrict_to_owner

    guard = restrict_to_owner()  # owner_field="userId", id_field="_id"
    context = await guard(HookContext(
        type="before",
        method="get",
        id="42",
        params={"provider": "rest", "user": {"_id": "1"}},
        service=messages,
    ))
    # ForbiddenError (403) unless messages.get("42")["userId"] is "1"
    # or a list containing "1"

Collections:
------------
    context = await guard(HookContext(
        type="before",
        method="find",
        params={"provider": "rest", "user": {"_id": "1"}, "query": {"read": False}},
    ))
    # context.query == {"read": False, "userId": "1"}

Configuration:
==============

Environment variables (or pass options to the hook factories):
- OWNER_GUARD_OWNER_FIELD: "userId" (default)
- OWNER_GUARD_ID_FIELD: "_id" (default)
"""

from .config import GuardConfig, GuardSettings, get_settings
from .context import COLLECTION_METHODS, MISSING, HookContext, HookType, ResourceService
from .errors import ConfigurationError, ForbiddenError, NotAuthenticatedError
from .hooks import query_with_current_user, restrict_to_owner, scope_query
from .ownership import OwnerSet, SingleOwner, classify_owner

__all__ = [
    # Hooks
    "restrict_to_owner",
    "query_with_current_user",
    "scope_query",
    # Context
    "HookContext",
    "HookType",
    "ResourceService",
    "MISSING",
    "COLLECTION_METHODS",
    # Configuration
    "GuardConfig",
    "GuardSettings",
    "get_settings",
    # Errors
    "ConfigurationError",
    "NotAuthenticatedError",
    "ForbiddenError",
    # Ownership
    "SingleOwner",
    "OwnerSet",
    "classify_owner",
]
