# tests/fakes.py

from __future__ import annotations

from typing import Callable, Optional


class FakeLiveServer:
    """
    Stand-in for `livereload.Server`.

    Records watch registrations and serve() arguments instead of binding
    sockets; `change(path)` plays the watcher's role for one file event and
    counts the reload that livereload would broadcast afterwards.
    """

    def __init__(self) -> None:
        self.watches: list[tuple[str, Optional[Callable[[], None]], Optional[Callable[[str], bool]]]] = []
        self.served: dict | None = None
        self.reloads = 0

    def watch(self, filepath, func=None, delay=None, ignore=None):
        self.watches.append((filepath, func, ignore))

    def serve(self, **kwargs):
        self.served = kwargs

    def change(self, path: str) -> bool:
        """Simulate one change event; returns True when a reload went out."""
        for root, func, ignore in self.watches:
            if not str(path).startswith(root):
                continue
            if ignore is not None and ignore(str(path)):
                continue
            if func is not None:
                func()
            self.reloads += 1
            return True
        return False
