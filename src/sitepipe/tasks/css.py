"""Stylesheet task: vendor-prefix, minify and map every stylesheet."""

from __future__ import annotations

import re
from typing import Dict, List

import rcssmin

from ..orchestrator import task
from ..orchestrator.files import dest, src, with_sourcemap
from ..orchestrator.logging import get_logger
from ..orchestrator.utils import css_prefixes, docs_dir, flag, patterns, section_dir, src_dir


log = get_logger("sitepipe.tasks.css")

DEFAULT_PATTERNS = ["**/*.css"]


COMMENT_RE = re.compile(r"/\*.*?\*/", re.S)
# Innermost blocks only, so rules nested in @media are reached too.
BLOCK_RE = re.compile(r"\{([^{}]*)\}")


def _prefix_block(body: str, table: Dict[str, List[str]]) -> str:
    decls = body.split(";")
    present = {d.split(":", 1)[0].strip() for d in decls if ":" in d}
    out: List[str] = []
    for decl in decls:
        if ":" in decl:
            prop, value = decl.split(":", 1)
            name = prop.strip()
            lead = prop[: len(prop) - len(prop.lstrip())]
            for pre in table.get(name, []):
                if pre + name not in present:
                    out.append(f"{lead}{pre}{name}:{value}")
        out.append(decl)
    return ";".join(out)


def add_prefixes(css: str, table: Dict[str, List[str]]) -> str:
    """Insert vendor-prefixed copies ahead of each declaration named in `table`.

    Comments are dropped first. A prefixed copy the block already declares is
    not added again.
    """
    if not table:
        return css
    css = COMMENT_RE.sub("", css)
    return BLOCK_RE.sub(lambda m: "{" + _prefix_block(m.group(1), table) + "}", css)


def minify(css: str) -> str:
    return rcssmin.cssmin(css)


def _dirs(p: dict) -> tuple[str, str]:
    sub = section_dir(p, "css", "stylesheets")
    return f"{src_dir(p)}/{sub}", f"{docs_dir(p)}/{sub}"


@task(
    name="css",
    inputs=lambda p: [f"{_dirs(p)[0]}/{pat}" for pat in patterns(p, "css", DEFAULT_PATTERNS)],
    outputs=lambda p: [_dirs(p)[1]],
)
def css(params: dict):
    """Prefix and minify stylesheets, writing source maps."""
    source, out = _dirs(params)
    table = css_prefixes(params)
    maps = flag(params, "css", "sourcemaps", True)
    files = []
    for f in src(source, patterns(params, "css", DEFAULT_PATTERNS)):
        result = f.with_contents(minify(add_prefixes(f.text, table)))
        if maps:
            files.extend(with_sourcemap(f, result, out, "/*# sourceMappingURL={} */"))
        else:
            files.append(result)
    written = dest(files, out)
    log.info("Wrote %d stylesheet file(s) into %s", len(written), out)
