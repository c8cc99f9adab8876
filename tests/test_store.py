# Copyright (c) 2025 CoReason, Inc.
#
# This software is proprietary and dual-licensed.
# Licensed under the Prosperity Public License 3.0 (the "License").
# A copy of the license is available at https://prosperitylicense.com/versions/3.0.0
# For details, see the LICENSE file.
# Commercial use beyond a 30-day trial requires a separate license.
#
# Source Code: https://github.com/CoReason-AI/coreason_mailshield

from conftest import ManualClock

from coreason_mailshield.store import MappingStore, TTLCacheStore


def test_put_and_get(store: TTLCacheStore) -> None:
    store.put("k", "v", 10)
    assert store.get("k") == "v"
    assert len(store) == 1


def test_get_missing(store: TTLCacheStore) -> None:
    assert store.get("missing") is None


def test_put_overwrites(store: TTLCacheStore) -> None:
    store.put("k", "first", 10)
    store.put("k", "second", 10)
    assert store.get("k") == "second"


def test_remove(store: TTLCacheStore) -> None:
    store.put("k", "v", 10)
    store.remove("k")
    assert store.get("k") is None


def test_remove_missing_is_noop(store: TTLCacheStore) -> None:
    store.remove("missing")


def test_per_entry_ttl(clock: ManualClock, store: TTLCacheStore) -> None:
    store.put("short", "a", 5)
    store.put("long", "b", 50)

    clock.advance(10)
    assert store.get("short") is None
    assert store.get("long") == "b"

    clock.advance(45)
    assert store.get("long") is None


def test_non_positive_ttl_drops_existing_value(store: TTLCacheStore) -> None:
    store.put("k", "v", 10)
    store.put("k", "newer", 0)
    assert store.get("k") is None


def test_max_size_eviction(clock: ManualClock) -> None:
    store = TTLCacheStore(max_size=2, timer=clock)

    store.put("1", "a", 100)
    store.put("2", "b", 100)
    store.put("3", "c", 100)  # Should evict least recently used ("1")

    assert store.get("1") is None
    assert store.get("2") == "b"
    assert store.get("3") == "c"


def test_satisfies_protocol(store: TTLCacheStore) -> None:
    backend: MappingStore = store
    backend.put("k", "v", 1)
    assert backend.get("k") == "v"
