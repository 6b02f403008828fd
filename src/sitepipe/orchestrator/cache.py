from __future__ import annotations

import hashlib
import json
import shutil
from pathlib import Path

from .logging import get_logger


log = get_logger("sitepipe.cache")


def sha256_bytes(data: bytes) -> str:
    return hashlib.sha256(data).hexdigest()


def compute_key(namespace: str, data: bytes, options: dict) -> str:
    """Cache key for transforming `data` with `options` inside `namespace`."""
    payload = {
        "namespace": namespace,
        "digest": sha256_bytes(data),
        "options": options,
    }
    return sha256_bytes(json.dumps(payload, sort_keys=True).encode("utf-8"))


class FileCache:
    """Content-addressed store of transformed file contents.

    Entries live at `<root>/<key[:2]>/<key>`; a hit returns the stored bytes
    instead of recomputing them.
    """

    def __init__(self, root: str | Path):
        self.root = Path(root)
        self.hits = 0
        self.misses = 0

    def _entry(self, key: str) -> Path:
        return self.root / key[:2] / key

    def get(self, key: str) -> bytes | None:
        entry = self._entry(key)
        try:
            data = entry.read_bytes()
        except FileNotFoundError:
            self.misses += 1
            return None
        self.hits += 1
        return data

    def put(self, key: str, data: bytes) -> None:
        entry = self._entry(key)
        entry.parent.mkdir(parents=True, exist_ok=True)
        tmp = entry.with_suffix(".tmp")
        tmp.write_bytes(data)
        tmp.replace(entry)

    def get_or_compute(self, namespace: str, data: bytes, options: dict, compute) -> bytes:
        key = compute_key(namespace, data, options)
        cached = self.get(key)
        if cached is not None:
            return cached
        result = compute(data)
        self.put(key, result)
        return result

    def clear_all(self) -> int:
        """Remove every entry; returns how many were deleted."""
        if not self.root.exists():
            return 0
        removed = sum(1 for p in self.root.rglob("*") if p.is_file())
        shutil.rmtree(self.root)
        log.info("Cleared %d cache entries from %s", removed, self.root)
        return removed
