"""
Ownership hooks for service pipelines.

Usage:
    from owner_guard import restrict_to_owner, query_with_current_user

    # Only let callers read or modify their own messages
    guard = restrict_to_owner(owner_field="sentBy")
    context = await guard(context)

    # Always scope find() to the caller's records
    scope = query_with_current_user(as_field="sentBy")
    context = await scope(context)

Both are "before" hooks. Internal calls (no provider on the context)
pass through untouched.

Calling a hook runs every check that needs no I/O right away, so
misconfiguration and missing authentication raise at the call site.
The returned awaitable only does the resource fetch, if any.
"""

from collections.abc import Mapping
from typing import Any, Awaitable, Callable

import structlog

from .config import GuardConfig, GuardSettings
from .context import HookContext, HookType, read_field
from .errors import ConfigurationError, ForbiddenError, NotAuthenticatedError
from .ownership import OwnerSet, classify_owner

logger = structlog.get_logger()

Hook = Callable[[HookContext], Awaitable[HookContext]]


def scope_query(query: dict[str, Any] | None, owner_field: str, owner_id: Any) -> dict[str, Any]:
    """
    Merge an owner constraint into a query.

    Other filters are kept; an existing ``owner_field`` is overwritten.
    """
    merged = query if query is not None else {}
    merged[owner_field] = owner_id
    return merged


async def _resolved(context: HookContext) -> HookContext:
    return context


def _require_before(context: HookContext, hook_name: str) -> None:
    if context.type != HookType.BEFORE:
        raise ConfigurationError(f"The '{hook_name}' hook should only be used as a 'before' hook.")


def _is_authenticated(user: Any) -> bool:
    # An empty mapping is a caller record that lacks fields, not a missing caller
    return bool(user) or isinstance(user, Mapping)


def _caller_id(context: HookContext, config: GuardConfig, hook_name: str) -> Any:
    """
    Resolve the caller's own id.

    Raises:
        NotAuthenticatedError: If there is no caller on the context
        ConfigurationError: If the caller has no ``id_field``
    """
    user = context.user
    if not _is_authenticated(user):
        logger.warning(
            "Unauthenticated call rejected",
            hook=hook_name,
            method=context.method,
            id=context.id if context.has_id else None,
            owner_field=config.owner_field,
            provider=context.provider,
        )
        raise NotAuthenticatedError()

    caller_id = read_field(user, config.id_field)
    if caller_id is None:
        raise ConfigurationError(
            f"Current user is missing '{config.id_field}' field. "
            f"Check the id_field option of '{hook_name}'."
        )
    return caller_id


def query_with_current_user(
    id_field: str | None = None,
    as_field: str | None = None,
    *,
    settings: GuardSettings | None = None,
) -> Hook:
    """
    Create a hook that adds the caller's id to the query.

    Args:
        id_field: Field on the caller holding its id (default from settings)
        as_field: Query key to bind the id to (default: the owner field)
        settings: Settings to take defaults from (default: cached env settings)

    Raises:
        ConfigurationError: If a field name is invalid
    """
    config = GuardConfig.resolve(owner_field=as_field, id_field=id_field, settings=settings)

    def hook(context: HookContext) -> Awaitable[HookContext]:
        _require_before(context, "query_with_current_user")

        if context.provider:
            caller_id = _caller_id(context, config, "query_with_current_user")
            scope_query(context.query, config.owner_field, caller_id)

        return _resolved(context)

    return hook


def restrict_to_owner(
    owner_field: str | None = None,
    id_field: str | None = None,
    *,
    settings: GuardSettings | None = None,
) -> Hook:
    """
    Create a hook that only lets callers touch resources they own.

    Collection calls (find, or an explicit None id) get the caller's id
    merged into the query. Single-record calls fetch the record through
    ``context.service`` and compare its owner field to the caller's id.

    Args:
        owner_field: Field on the resource recording its owner(s)
        id_field: Field on the caller holding its id
        settings: Settings to take defaults from (default: cached env settings)

    Raises:
        ConfigurationError: If a field name is invalid

    Calling the returned hook raises immediately:
        ConfigurationError: Wrong stage, no id on a single-record call,
            caller without ``id_field``, or no service
        NotAuthenticatedError: External call without a caller (401)

    Awaiting its result raises:
        ConfigurationError: The resource has an empty owner list
        ForbiddenError: Caller does not own the resource (403)
    """
    config = GuardConfig.resolve(owner_field=owner_field, id_field=id_field, settings=settings)

    async def check_owner(context: HookContext, caller_id: Any) -> HookContext:
        resource = await context.service.get(context.id)
        claim = classify_owner(read_field(resource, config.owner_field))

        if isinstance(claim, OwnerSet) and claim.is_empty:
            raise ConfigurationError(
                f"The '{config.owner_field}' field of resource {context.id!r} is an empty list."
            )

        if claim is None or not claim.includes(caller_id):
            logger.warning(
                "Ownership check failed",
                method=context.method,
                id=context.id,
                owner_field=config.owner_field,
                has_owner=claim is not None,
            )
            raise ForbiddenError()

        return context

    def guard(context: HookContext) -> Awaitable[HookContext]:
        _require_before(context, "restrict_to_owner")

        if not context.has_id and not context.is_collection:
            raise ConfigurationError(
                "The 'restrict_to_owner' hook should only be used on the "
                "'find', 'get', 'update', 'patch' and 'remove' service methods."
            )

        # Internal calls are trusted
        if not context.provider:
            logger.debug("Internal call, skipping ownership check", method=context.method)
            return _resolved(context)

        caller_id = _caller_id(context, config, "restrict_to_owner")

        if context.is_collection:
            scope_query(context.query, config.owner_field, caller_id)
            logger.debug(
                "Scoped query to owner",
                method=context.method,
                owner_field=config.owner_field,
            )
            return _resolved(context)

        if context.service is None:
            raise ConfigurationError(
                "The 'restrict_to_owner' hook needs a service to fetch the resource from."
            )

        return check_owner(context, caller_id)

    return guard
