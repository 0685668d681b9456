"""Tests for the in-memory cache client."""

from time import time
from unittest.mock import patch

import pytest

from app.clients.memory_client import MemoryClient


@pytest.fixture
def memory_client() -> MemoryClient:
    return MemoryClient(max_entries=3)


async def test_set_and_get(memory_client: MemoryClient) -> None:
    """Test setting and getting a value."""
    await memory_client.set("key", "value")
    assert await memory_client.get("key") == "value"


async def test_get_non_existent(memory_client: MemoryClient) -> None:
    assert await memory_client.get("non_existent_key") is None


async def test_delete_counts_present_keys(memory_client: MemoryClient) -> None:
    await memory_client.set("a", "1")
    await memory_client.set("b", "2")
    assert await memory_client.delete("a", "b", "missing") == 2
    assert await memory_client.get("a") is None


async def test_exists(memory_client: MemoryClient) -> None:
    await memory_client.set("key", "value")
    assert await memory_client.exists("key") == 1
    assert await memory_client.exists("key", "non_existent_key") == 1


async def test_expiry(memory_client: MemoryClient) -> None:
    """Test a key disappears once its TTL has passed."""
    await memory_client.set("key", "value", ex=10)
    with patch("app.clients.memory_client.time", return_value=time() + 11):
        assert await memory_client.get("key") is None
        assert await memory_client.exists("key") == 0


async def test_ttl_values(memory_client: MemoryClient) -> None:
    await memory_client.set("expiring", "value", ex=10)
    await memory_client.set("forever", "value")
    assert 8 <= await memory_client.ttl("expiring") <= 10
    assert await memory_client.ttl("forever") == -1
    assert await memory_client.ttl("missing") == -2


async def test_set_without_ex_clears_expiry(memory_client: MemoryClient) -> None:
    await memory_client.set("key", "value", ex=10)
    await memory_client.set("key", "value")
    assert await memory_client.ttl("key") == -1


async def test_evicts_least_recently_used(memory_client: MemoryClient) -> None:
    await memory_client.set("a", "1")
    await memory_client.set("b", "2")
    await memory_client.set("c", "3")
    await memory_client.get("a")
    await memory_client.set("d", "4")

    assert await memory_client.get("b") is None
    assert await memory_client.get("a") == "1"
    assert await memory_client.get("d") == "4"


async def test_flush_all_and_close(memory_client: MemoryClient) -> None:
    await memory_client.set("key1", "value1")
    await memory_client.flush_all()
    assert await memory_client.exists("key1") == 0
    assert await memory_client.ping()
    await memory_client.close()
    assert not await memory_client.ping()
