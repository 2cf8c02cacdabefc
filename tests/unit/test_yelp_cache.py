import json

from app.core.yelp_cache import FileYelpCache, MemoryYelpCache, build_cache_key


def test_build_cache_key():
    assert build_cache_key("Paris, France", "restaurants", "", False, 1) == (
        "Paris, France-restaurants--False-1"
    )


def test_file_cache_round_trip(tmp_path):
    cache = FileYelpCache(tmp_path / "cache")
    assert cache.get("k") is None

    cache.set("k", {"businesses": [{"id": "a"}], "total": 1})

    assert cache.get("k") == {"businesses": [{"id": "a"}], "total": 1}


def test_file_cache_expired_entry_is_removed(tmp_path):
    cache = FileYelpCache(tmp_path)
    cache.set("k", {"total": 0}, ttl_seconds=-1)

    assert cache.get("k") is None
    assert list(tmp_path.glob("*.json")) == []


def test_file_cache_ignores_corrupt_entries(tmp_path):
    cache = FileYelpCache(tmp_path)
    cache.set("k", {"total": 0})
    path = next(tmp_path.glob("*.json"))
    path.write_text("{not json", encoding="utf-8")

    assert cache.get("k") is None


def test_file_cache_entry_layout(tmp_path):
    cache = FileYelpCache(tmp_path, ttl_seconds=60)
    cache.set("k", [1, 2])
    entry = json.loads(next(tmp_path.glob("*.json")).read_text(encoding="utf-8"))
    assert entry["data"] == [1, 2]
    assert entry["ttl"] == 60


def test_file_cache_clear(tmp_path):
    cache = FileYelpCache(tmp_path / "cache")
    cache.set("a", 1)
    cache.set("b", 2)

    cache.clear()

    assert cache.get("a") is None
    assert (tmp_path / "cache").is_dir()


def test_memory_cache_expiry():
    cache = MemoryYelpCache()
    cache.set("fresh", "x")
    cache.set("stale", "y", ttl_seconds=-1)

    assert cache.get("fresh") == "x"
    assert cache.get("stale") is None

    cache.clear()
    assert cache.get("fresh") is None
