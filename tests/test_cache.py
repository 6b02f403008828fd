# tests/test_cache.py

from __future__ import annotations

from pathlib import Path

from sitepipe.orchestrator.cache import FileCache, compute_key


def test_key_depends_on_content_and_options() -> None:
    base = compute_key("images", b"abc", {"progressive": False})
    assert base == compute_key("images", b"abc", {"progressive": False})
    assert base != compute_key("images", b"abd", {"progressive": False})
    assert base != compute_key("images", b"abc", {"progressive": True})
    assert base != compute_key("other", b"abc", {"progressive": False})


def test_get_or_compute_reuses_stored_result(tmp_path: Path) -> None:
    cache = FileCache(tmp_path / "cache")
    calls: list[bytes] = []

    def compute(data: bytes) -> bytes:
        calls.append(data)
        return data.upper()

    assert cache.get_or_compute("ns", b"x", {}, compute) == b"X"
    assert cache.get_or_compute("ns", b"x", {}, compute) == b"X"

    assert calls == [b"x"]
    assert (cache.hits, cache.misses) == (1, 1)


def test_clear_all(tmp_path: Path) -> None:
    cache = FileCache(tmp_path / "cache")
    assert cache.clear_all() == 0

    cache.put(compute_key("ns", b"1", {}), b"one")
    cache.put(compute_key("ns", b"2", {}), b"two")

    assert cache.clear_all() == 2
    assert not (tmp_path / "cache").exists()
