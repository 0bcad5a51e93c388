import asyncio
import threading
from datetime import datetime, timedelta, timezone

import pytest

from devfeed.adapters.outbound.security.revocation_store import (
    RevocationStore,
    periodic_revocation_purge,
)

NOW = datetime(2024, 5, 1, 12, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def store():
    return RevocationStore()


def test_revoke_and_lookup(store):
    store.revoke("token-a", NOW + timedelta(hours=1))

    assert store.is_revoked("token-a") is True
    assert store.is_revoked("token-b") is False


@pytest.mark.parametrize("token", ["", "   ", None])
def test_blank_tokens_ignored(store, token):
    store.revoke(token, NOW)

    assert store.size() == 0
    assert store.is_revoked(token) is False


def test_revoke_twice_keeps_one_entry(store):
    store.revoke("token-a", NOW)
    store.revoke("token-a", NOW)

    assert store.size() == 1


def test_revoke_keeps_latest_expiry(store):
    store.revoke("token-a", NOW + timedelta(hours=2))
    store.revoke("token-a", NOW + timedelta(hours=1))

    # Still present after the earlier expiry has passed
    store.purge(NOW + timedelta(hours=1, minutes=30))
    assert store.is_revoked("token-a") is True


def test_lookup_ignores_expiry(store):
    store.revoke("token-a", NOW - timedelta(days=1))

    assert store.is_revoked("token-a") is True


def test_purge_removes_only_expired(store):
    store.revoke("expired", NOW - timedelta(seconds=1))
    store.revoke("boundary", NOW)
    store.revoke("live", NOW + timedelta(hours=1))

    removed = store.purge(NOW)

    assert removed == 1
    assert store.is_revoked("expired") is False
    assert store.is_revoked("boundary") is True
    assert store.is_revoked("live") is True


def test_purge_empty_store(store):
    assert store.purge(NOW) == 0


def test_concurrent_revocations(store):
    def worker(offset):
        for i in range(200):
            store.revoke(f"token-{offset}-{i}", NOW)
            store.is_revoked(f"token-{offset}-{i}")

    threads = [threading.Thread(target=worker, args=(n,)) for n in range(8)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert store.size() == 8 * 200


@pytest.mark.asyncio
async def test_periodic_purge_runs_and_cancels(store):
    store.revoke("expired", datetime.now(timezone.utc) - timedelta(minutes=1))
    store.revoke("live", datetime.now(timezone.utc) + timedelta(hours=1))

    task = asyncio.create_task(periodic_revocation_purge(store, timedelta(milliseconds=10)))
    await asyncio.sleep(0.1)
    task.cancel()

    with pytest.raises(asyncio.CancelledError):
        await task

    assert store.is_revoked("expired") is False
    assert store.is_revoked("live") is True


@pytest.mark.asyncio
async def test_periodic_purge_survives_errors(store, monkeypatch):
    calls = []

    def failing_purge(now):
        calls.append(now)
        raise RuntimeError("boom")

    monkeypatch.setattr(store, "purge", failing_purge)

    task = asyncio.create_task(periodic_revocation_purge(store, timedelta(milliseconds=5)))
    await asyncio.sleep(0.1)
    task.cancel()

    with pytest.raises(asyncio.CancelledError):
        await task

    assert len(calls) > 1
