"""Unit tests for local file store."""

import builtins
import errno
import os
import time

import pytest

from pdf_unlock_bot.adapters.outbound.file_store import (
    LocalFileStore,
    local_file_store,
    sanitize_file_name,
)


@pytest.fixture
def store(tmp_path):
    """Create file store rooted in a temporary directory."""
    return LocalFileStore(tmp_path / "storage")


@pytest.mark.parametrize(
    "name,expected",
    [
        ("statement.pdf", "statement.pdf"),
        ("../../etc/passwd", "passwd"),
        ("C:\\Users\\ada\\tax return.pdf", "tax_return.pdf"),
        ("résumé 2024.pdf", "r_sum_2024.pdf"),
        ("..", "document.pdf"),
        ("", "document.pdf"),
    ],
)
def test_sanitize_file_name(name, expected):
    """Test that user-supplied names are reduced to safe basenames."""
    assert sanitize_file_name(name) == expected


@pytest.mark.asyncio
async def test_store_inbound_writes_unique_files(store):
    """Test that two uploads with the same name never share a path."""
    first = await store.store_inbound(b"one", "same.pdf")
    second = await store.store_inbound(b"two", "same.pdf")

    assert first != second
    assert first.parent == store.inbound_dir
    assert first.name.endswith("_same.pdf")
    assert first.read_bytes() == b"one"
    assert second.read_bytes() == b"two"


@pytest.mark.asyncio
async def test_store_inbound_stays_inside_root(store):
    """Test that path traversal in names is neutralized."""
    path = await store.store_inbound(b"x", "../../escape.pdf")

    assert path.parent == store.inbound_dir


def test_reserve_outbound_does_not_create_file(store):
    """Test that reserving an outbound path only prepares its directory."""
    path = store.reserve_outbound("statement.pdf")

    assert path.parent == store.outbound_dir
    assert path.parent.is_dir()
    assert path.name.startswith("unlocked_")
    assert path.name.endswith("_statement.pdf")
    assert not path.exists()
    assert store.reserve_outbound("statement.pdf") != path


@pytest.mark.asyncio
async def test_outbound_context_deletes_file(store):
    """Test that the outbound path is removed when the block exits."""
    async with store.outbound("statement.pdf") as path:
        path.write_bytes(b"unlocked")
        assert path.exists()

    assert not path.exists()


@pytest.mark.asyncio
async def test_outbound_context_deletes_file_on_error(store):
    """Test that the outbound path is removed even if the block raises."""
    with pytest.raises(RuntimeError):
        async with store.outbound("statement.pdf") as path:
            path.write_bytes(b"partial")
            raise RuntimeError("failed")

    assert not path.exists()


@pytest.mark.asyncio
async def test_delete_missing_file_is_noop(store, tmp_path):
    """Test that deleting a missing file does not raise."""
    await store.delete(tmp_path / "missing.pdf")


@pytest.mark.asyncio
async def test_sweep_removes_old_inbound_and_outbound(store):
    """Test that sweep deletes files older than the threshold in both directories."""
    old_inbound = await store.store_inbound(b"x", "old.pdf")
    old_outbound = store.reserve_outbound("old.pdf")
    old_outbound.write_bytes(b"y")
    fresh = await store.store_inbound(b"z", "fresh.pdf")
    past = time.time() - 7200
    for path in (old_inbound, old_outbound):
        os.utime(path, (past, past))

    removed = await store.sweep(3600)

    assert removed == 2
    assert not old_inbound.exists()
    assert not old_outbound.exists()
    assert fresh.exists()


@pytest.mark.asyncio
async def test_sweep_without_directories(store):
    """Test sweep before anything was stored."""
    assert await store.sweep(0) == 0


class _FailingWriter:
    """File wrapper that writes a prefix, then fails like a full disk."""

    def __init__(self, fh):
        self._fh = fh

    def write(self, data):
        self._fh.write(data[:1024])
        raise OSError(errno.ENOSPC, "No space left on device")

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self._fh.close()
        return False


@pytest.mark.asyncio
async def test_store_inbound_removes_partial_file_on_write_error(store, monkeypatch):
    """Test that a failed write leaves nothing behind in the inbound directory."""

    def failing_open(path, mode):
        return _FailingWriter(builtins.open(path, mode))

    monkeypatch.setattr(local_file_store, "open", failing_open, raising=False)

    with pytest.raises(OSError):
        await store.store_inbound(b"x" * 8192, "doc.pdf")

    assert list(store.inbound_dir.iterdir()) == []
