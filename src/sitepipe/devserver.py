"""Live-reload development server over the source tree."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, List, Optional

import livereload

from .orchestrator.files import match_any, static_prefix
from .orchestrator.logging import get_logger


log = get_logger("sitepipe.devserver")


@dataclass
class WatchRule:
    patterns: List[str]
    base_dir: Path
    on_change: Optional[Callable[[], None]] = None
    events: int = field(default=0, compare=False)

    def matches(self, path: str) -> bool:
        rel = os.path.relpath(os.path.abspath(path), os.path.abspath(self.base_dir))
        if rel.startswith(".."):
            return False
        return match_any(rel, self.patterns)

    def roots(self) -> List[Path]:
        """Directories to hand to the watcher.

        One per static pattern prefix, dropping any nested inside another so a
        single change is only ever seen by one watch entry.
        """
        candidates = sorted(
            {self.base_dir / static_prefix(p) for p in self.patterns},
            key=lambda p: len(p.parts),
        )
        roots: list[Path] = []
        for root in candidates:
            if not any(root == r or r in root.parents for r in roots):
                roots.append(root)
        return roots

    def fire(self) -> None:
        self.events += 1
        if self.on_change is not None:
            self.on_change()


class DevServer:
    """Static file server with live reload.

    `server_factory` builds the underlying `livereload.Server`; every change
    matched by a watch rule runs the rule's callback and then livereload
    broadcasts one reload to the connected browsers.
    """

    def __init__(
        self,
        host: str = "127.0.0.1",
        port: int = 3000,
        live_port: int = 35729,
        open_browser: bool = False,
        server_factory: Callable[[], livereload.Server] = livereload.Server,
    ):
        self.host = host
        self.port = port
        self.live_port = live_port
        self.open_browser = open_browser
        self.server_factory = server_factory
        self.base_dir: Path | None = None
        self.rules: List[WatchRule] = []
        self._server = None

    def start(self, base_dir: str | Path) -> None:
        base_dir = Path(base_dir)
        if not base_dir.is_dir():
            raise FileNotFoundError(f"Server root not found: {base_dir}")
        self.base_dir = base_dir
        self._server = self.server_factory()
        log.info("Serving %s", base_dir)

    def watch(
        self,
        patterns: List[str],
        base_dir: str | Path | None = None,
        on_change: Callable[[], None] | None = None,
    ) -> WatchRule:
        if self._server is None:
            raise RuntimeError("DevServer.start() must be called before watch()")
        rule = WatchRule(
            patterns=list(patterns),
            base_dir=Path(base_dir) if base_dir is not None else self.base_dir,
            on_change=on_change,
        )
        for root in rule.roots():
            self._server.watch(
                str(root),
                func=rule.fire,
                ignore=lambda path, rule=rule: not rule.matches(path),
            )
        self.rules.append(rule)
        log.info("Watching %s in %s", ", ".join(rule.patterns), rule.base_dir)
        return rule

    def serve(self) -> None:
        """Block serving until the process is terminated."""
        if self._server is None or self.base_dir is None:
            raise RuntimeError("DevServer.start() must be called before serve()")
        log.info("Live server → http://%s:%d", self.host, self.port)
        self._server.serve(
            host=self.host,
            port=self.port,
            liveport=self.live_port,
            root=str(self.base_dir),
            open_url_delay=1 if self.open_browser else None,
        )
