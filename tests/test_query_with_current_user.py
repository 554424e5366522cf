"""
Tests for the query_with_current_user hook and scope_query.
"""

import pytest

from owner_guard import (
    ConfigurationError,
    HookContext,
    NotAuthenticatedError,
    query_with_current_user,
    scope_query,
)


def test_scope_query_creates_query():
    assert scope_query(None, "userId", "1") == {"userId": "1"}


def test_scope_query_merges_in_place():
    query = {"name": "David", "userId": "2"}

    merged = scope_query(query, "userId", "1")

    assert merged is query
    assert query == {"name": "David", "userId": "1"}


@pytest.mark.asyncio
async def test_adds_caller_id_to_query():
    """Test the caller id is bound to the configured field."""
    context = HookContext(
        type="before",
        method="find",
        params={"provider": "socketio", "user": {"_id": "1"}, "query": {"read": False}},
    )

    await query_with_current_user(as_field="sentBy")(context)

    assert context.params["query"] == {"read": False, "sentBy": "1"}


@pytest.mark.asyncio
async def test_create_call_is_scoped_too():
    """Test the hook does not care which method it runs on."""
    context = HookContext(
        type="before",
        method="create",
        params={"provider": "rest", "user": {"uid": 5}},
    )

    await query_with_current_user(id_field="uid")(context)

    assert context.params["query"] == {"userId": 5}


@pytest.mark.asyncio
async def test_internal_call_is_untouched():
    context = HookContext(type="before", method="find", params={})

    returned = await query_with_current_user()(context)

    assert returned is context
    assert context.params == {}


@pytest.mark.asyncio
async def test_missing_user_is_not_authenticated():
    context = HookContext(type="before", method="find", params={"provider": "rest"})

    with pytest.raises(NotAuthenticatedError):
        await query_with_current_user()(context)


@pytest.mark.asyncio
async def test_user_missing_id_field():
    context = HookContext(
        type="before",
        method="find",
        params={"provider": "rest", "user": {"email": "a@example.com"}},
    )

    with pytest.raises(ConfigurationError):
        await query_with_current_user()(context)


@pytest.mark.asyncio
async def test_rejects_after_stage():
    context = HookContext(type="after", method="find", params={"provider": "rest"})

    with pytest.raises(ConfigurationError):
        await query_with_current_user()(context)


def test_rejects_after_stage_on_call():
    """Test a misplaced hook fails when called, before anything awaits it."""
    context = HookContext(type="after", method="find", params={"provider": "rest"})

    with pytest.raises(ConfigurationError):
        query_with_current_user()(context)
