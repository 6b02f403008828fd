"""Script task: transpile to ES5 with Babel, minify and map every script."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

import dukpy
import rjsmin

from ..orchestrator import task
from ..orchestrator.files import dest, src, with_sourcemap
from ..orchestrator.logging import get_logger
from ..orchestrator.utils import docs_dir, flag, patterns, section_dir, src_dir


log = get_logger("sitepipe.tasks.js")

DEFAULT_PATTERNS = ["**/*.js"]

BABEL_PRESETS = ["es2015"]


@lru_cache(maxsize=1)
def _babel_source() -> str:
    """babel-standalone as shipped inside dukpy's `jsmodules` directory."""
    modules = Path(dukpy.__file__).parent / "jsmodules"
    bundles = sorted(modules.glob("babel-*.js"))
    if not bundles:
        raise RuntimeError(f"No babel-standalone bundle found in {modules}")
    return bundles[-1].read_text(encoding="utf-8")


def transpile(code: str, filename: str = "unknown") -> str:
    return dukpy.evaljs(
        (
            _babel_source(),
            "Babel.transform(dukpy.es6code, dukpy.babel_options).code;",
        ),
        es6code=code,
        babel_options={"presets": BABEL_PRESETS, "filename": filename},
    )


def minify(code: str) -> str:
    return rjsmin.jsmin(code)


def _dirs(p: dict) -> tuple[str, str]:
    sub = section_dir(p, "js", "scripts")
    return f"{src_dir(p)}/{sub}", f"{docs_dir(p)}/{sub}"


@task(
    name="js",
    inputs=lambda p: [f"{_dirs(p)[0]}/{pat}" for pat in patterns(p, "js", DEFAULT_PATTERNS)],
    outputs=lambda p: [_dirs(p)[1]],
)
def js(params: dict):
    """Transpile and minify scripts, writing source maps."""
    source, out = _dirs(params)
    use_babel = flag(params, "js", "transpile", True)
    maps = flag(params, "js", "sourcemaps", True)
    files = []
    for f in src(source, patterns(params, "js", DEFAULT_PATTERNS)):
        code = transpile(f.text, filename=f.relpath) if use_babel else f.text
        result = f.with_contents(minify(code))
        if maps:
            files.extend(with_sourcemap(f, result, out, "//# sourceMappingURL={}"))
        else:
            files.append(result)
    written = dest(files, out)
    log.info("Wrote %d script file(s) into %s", len(written), out)
