from __future__ import annotations

"""Small helpers for reading build settings and paths from config params."""

from typing import Dict, List


DEFAULT_PREFIXES = {
    "user-select": ["-webkit-", "-moz-", "-ms-"],
    "appearance": ["-webkit-", "-moz-"],
    "backdrop-filter": ["-webkit-"],
    "text-size-adjust": ["-webkit-", "-moz-", "-ms-"],
    "hyphens": ["-webkit-", "-ms-"],
}


def _get(d: Dict, *keys, default=None):
    cur = d
    for k in keys:
        if not isinstance(cur, dict):
            return default
        cur = cur.get(k)
        if cur is None:
            return default
    return cur


def _as_list(value) -> List[str]:
    if isinstance(value, str):
        return [value]
    return [str(v) for v in value]


def src_dir(p: Dict) -> str:
    return _get(p, "project", "src_dir", default="src")


def docs_dir(p: Dict) -> str:
    return _get(p, "project", "docs_dir", default="docs")


def cache_dir(p: Dict) -> str:
    return _get(p, "project", "cache_dir", default=".cache/sitepipe")


def section_dir(p: Dict, section: str, default: str) -> str:
    """Subdirectory shared by a task's source and output trees, e.g. `scripts`."""
    return _get(p, section, "dir", default=default)


def patterns(p: Dict, section: str, default: List[str]) -> List[str]:
    return _as_list(_get(p, section, "patterns", default=default))


def flag(p: Dict, section: str, key: str, default: bool) -> bool:
    return bool(_get(p, section, key, default=default))


def css_prefixes(p: Dict) -> Dict[str, List[str]]:
    table = _get(p, "css", "prefixes", default=DEFAULT_PREFIXES)
    return {str(k): _as_list(v) for k, v in table.items()}


def server_host(p: Dict) -> str:
    return _get(p, "server", "host", default="127.0.0.1")


def server_port(p: Dict) -> int:
    return int(_get(p, "server", "port", default=3000))


def live_port(p: Dict) -> int:
    return int(_get(p, "server", "live_port", default=35729))


def open_browser(p: Dict) -> bool:
    return flag(p, "server", "open_browser", False)


def watch_patterns(p: Dict) -> List[str]:
    return _as_list(
        _get(p, "server", "watch", default=["*.html", "stylesheets/**/*.css"])
    )
