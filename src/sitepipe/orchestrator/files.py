"""Reading matched source files, writing transformed ones, and source maps.

Glob patterns are POSIX paths relative to a base directory, matched one path
segment at a time with `fnmatch`. A `**` segment spans any number of
directories (including none) and `{a,b}` expands to alternatives.
"""

from __future__ import annotations

import fnmatch
import json
import os
import re
from dataclasses import dataclass, replace
from functools import lru_cache
from pathlib import Path
from typing import Iterable, Iterator, List, Sequence, Tuple


MAGIC = set("*?[{")
BRACE_RE = re.compile(r"\{([^{}]*)\}")


@lru_cache(maxsize=256)
def _expand_braces(pattern: str) -> Tuple[Tuple[str, ...], ...]:
    m = BRACE_RE.search(pattern)
    if not m:
        return (tuple(pattern.split("/")),)
    out: list[Tuple[str, ...]] = []
    for alt in m.group(1).split(","):
        out.extend(_expand_braces(pattern[: m.start()] + alt + pattern[m.end() :]))
    return tuple(out)


def _match_parts(parts: Sequence[str], pats: Sequence[str]) -> bool:
    if not pats:
        return not parts
    head = pats[0]
    if head == "**":
        return any(_match_parts(parts[i:], pats[1:]) for i in range(len(parts) + 1))
    if not parts:
        return False
    return fnmatch.fnmatchcase(parts[0], head) and _match_parts(parts[1:], pats[1:])


def match(relpath: str, pattern: str) -> bool:
    parts = relpath.replace(os.sep, "/").split("/")
    return any(_match_parts(parts, pats) for pats in _expand_braces(pattern))


def match_any(relpath: str, patterns: Iterable[str]) -> bool:
    return any(match(relpath, p) for p in patterns)


def static_prefix(pattern: str) -> str:
    """Leading directory segments of `pattern` that contain no glob syntax."""
    parts = pattern.split("/")[:-1]
    fixed: list[str] = []
    for part in parts:
        if MAGIC & set(part):
            break
        fixed.append(part)
    return "/".join(fixed)


def expand(base: str | Path, patterns: Iterable[str]) -> List[Path]:
    """Files under `base` matching any pattern, as sorted relative paths.

    Raises FileNotFoundError when `base` itself does not exist.
    """
    base = Path(base)
    if not base.is_dir():
        raise FileNotFoundError(f"Source directory not found: {base}")
    patterns = list(patterns)
    found: list[Path] = []
    for root, _, files in os.walk(base):
        for file in files:
            rel = (Path(root) / file).relative_to(base)
            if match_any(rel.as_posix(), patterns):
                found.append(rel)
    return sorted(found)


@dataclass(frozen=True)
class SourceFile:
    base: Path
    relpath: str
    contents: bytes

    @property
    def path(self) -> Path:
        return self.base / self.relpath

    @property
    def name(self) -> str:
        return Path(self.relpath).name

    @property
    def text(self) -> str:
        return self.contents.decode("utf-8")

    def with_contents(self, contents: bytes | str) -> "SourceFile":
        if isinstance(contents, str):
            contents = contents.encode("utf-8")
        return replace(self, contents=contents)

    def with_relpath(self, relpath: str) -> "SourceFile":
        return replace(self, relpath=relpath)


def src(base: str | Path, patterns: Iterable[str]) -> Iterator[SourceFile]:
    base = Path(base)
    for rel in expand(base, patterns):
        yield SourceFile(base=base, relpath=rel.as_posix(), contents=(base / rel).read_bytes())


def dest(files: Iterable[SourceFile], out_dir: str | Path) -> List[Path]:
    """Write each file under `out_dir` at its relative path; returns written paths."""
    out_dir = Path(out_dir)
    written: list[Path] = []
    for f in files:
        target = out_dir / f.relpath
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_bytes(f.contents)
        written.append(target)
    return written


def with_sourcemap(
    original: SourceFile, output: SourceFile, out_dir: str | Path, comment: str
) -> List[SourceFile]:
    """Attach a version 3 source map to `output`, which `dest` writes under `out_dir`.

    `comment` is a format string for the trailing reference, e.g.
    "/*# sourceMappingURL={} */". `sources` points at the original file
    relative to the map's own directory, and the map carries the original
    source text; segment mappings are left empty.
    """
    map_rel = output.relpath + ".map"
    map_dir = (Path(out_dir) / map_rel).parent
    smap = {
        "version": 3,
        "file": output.name,
        "sources": [Path(os.path.relpath(original.path, map_dir)).as_posix()],
        "sourcesContent": [original.text],
        "names": [],
        "mappings": "",
    }
    body = output.text.rstrip("\n") + "\n" + comment.format(Path(map_rel).name) + "\n"
    return [
        output.with_contents(body),
        output.with_relpath(map_rel).with_contents(json.dumps(smap)),
    ]
