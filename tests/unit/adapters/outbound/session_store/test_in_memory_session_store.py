"""Unit tests for in-memory session store."""

from pathlib import Path

import pytest

from pdf_unlock_bot.adapters.outbound.session_store import InMemorySessionStore
from pdf_unlock_bot.domain.entities.session import (
    AwaitingFileSession,
    AwaitingPasswordSession,
    PendingFile,
)


@pytest.fixture
def store():
    """Create in-memory session store."""
    return InMemorySessionStore()


@pytest.mark.asyncio
async def test_get_returns_none_when_missing(store):
    """Test get for an unknown user."""
    assert await store.get("nobody") is None


@pytest.mark.asyncio
async def test_set_replaces_session(store):
    """Test that set overwrites the previous session."""
    await store.set("42", AwaitingFileSession("42"))
    replacement = AwaitingPasswordSession("42", PendingFile(Path("/tmp/x.pdf"), "x.pdf"))

    await store.set("42", replacement)

    assert await store.get("42") is replacement


@pytest.mark.asyncio
async def test_delete_is_idempotent(store):
    """Test that deleting a missing session does nothing."""
    await store.set("42", AwaitingFileSession("42"))

    await store.delete("42")
    await store.delete("42")

    assert await store.get("42") is None


@pytest.mark.asyncio
async def test_items_returns_snapshot(store):
    """Test that items can be iterated while sessions are deleted."""
    await store.set("1", AwaitingFileSession("1"))
    await store.set("2", AwaitingFileSession("2"))

    for user_id, _ in await store.items():
        await store.delete(user_id)

    assert await store.items() == []
