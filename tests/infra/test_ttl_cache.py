from chapterkit.infra.cache import TTLCache


def test_set_get_roundtrip(clock):
    cache: TTLCache[dict] = TTLCache(300, clock=clock)
    cache.set("k", {"v": 1})

    assert cache.get("k") == {"v": 1}
    assert cache.has("k")


def test_missing_key_returns_none(clock):
    cache: TTLCache[str] = TTLCache(clock=clock)
    assert cache.get("missing") is None
    assert cache.has("missing") is False


def test_entry_lives_until_ttl_elapses(clock):
    cache: TTLCache[str] = TTLCache(300, clock=clock)
    cache.set("k", "v")

    clock.advance(300)
    assert cache.get("k") == "v"  # now - stored_at == ttl is still live

    clock.advance(0.001)
    assert cache.get("k") is None


def test_expired_entry_is_evicted_on_read(clock):
    cache: TTLCache[str] = TTLCache(10, clock=clock)
    cache.set("k", "v")
    clock.advance(11)

    assert len(cache) == 1
    assert cache.has("k") is False
    assert len(cache) == 0


def test_per_entry_ttl_overrides_default(clock):
    cache: TTLCache[str] = TTLCache(300, clock=clock)
    cache.set("short", "a", ttl=5)
    cache.set("default", "b")

    clock.advance(6)
    assert cache.get("short") is None
    assert cache.get("default") == "b"


def test_set_overwrites_and_restarts_ttl(clock):
    cache: TTLCache[str] = TTLCache(10, clock=clock)
    cache.set("k", "old")
    clock.advance(8)
    cache.set("k", "new")
    clock.advance(8)

    assert cache.get("k") == "new"


def test_delete_and_clear(clock):
    cache: TTLCache[int] = TTLCache(clock=clock)
    cache.set("a", 1)
    cache.set("b", 2)

    assert cache.delete("a") is True
    assert cache.delete("a") is False
    assert cache.get("a") is None

    cache.clear()
    assert len(cache) == 0


def test_falsy_values_are_cached(clock):
    cache: TTLCache[object] = TTLCache(clock=clock)
    cache.set("zero", 0)
    cache.set("empty", {})

    assert cache.get("zero") == 0
    assert cache.get("empty") == {}


def test_cleanup_removes_only_expired(clock):
    cache: TTLCache[str] = TTLCache(10, clock=clock)
    cache.set("a", "1")
    cache.set("b", "2", ttl=100)
    cache.set("c", "3")
    clock.advance(20)

    assert cache.cleanup() == 2
    assert cache.stats()["keys"] == ["b"]
    assert cache.cleanup() == 0


def test_stats(clock):
    cache: TTLCache[str] = TTLCache(clock=clock)
    assert cache.stats() == {
        "size": 0,
        "keys": [],
        "oldest_timestamp": None,
        "newest_timestamp": None,
    }

    cache.set("a", "1")
    clock.advance(5)
    cache.set("b", "2")

    stats = cache.stats()
    assert stats["size"] == 2
    assert sorted(stats["keys"]) == ["a", "b"]
    assert stats["oldest_timestamp"] == 1_000.0
    assert stats["newest_timestamp"] == 1_005.0


def test_repr(clock):
    assert "TTLCache" in repr(TTLCache(60, clock=clock))
