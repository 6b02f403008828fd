"""HTML task: collapse whitespace in every page under the source tree."""

from __future__ import annotations

import minify_html

from ..orchestrator import task
from ..orchestrator.files import dest, src
from ..orchestrator.logging import get_logger
from ..orchestrator.utils import docs_dir, flag, patterns, src_dir


log = get_logger("sitepipe.tasks.html")

DEFAULT_PATTERNS = ["**/*.html"]


def minify(text: str, keep_comments: bool = True) -> str:
    # Collapses whitespace and unquotes safe attribute values. Inline CSS/JS
    # and optional tags are left alone.
    return minify_html.minify(
        text,
        keep_comments=keep_comments,
        keep_closing_tags=True,
        keep_html_and_head_opening_tags=True,
        minify_css=False,
        minify_js=False,
    )


@task(
    name="html",
    inputs=lambda p: [f"{src_dir(p)}/{pat}" for pat in patterns(p, "html", DEFAULT_PATTERNS)],
    outputs=lambda p: [docs_dir(p)],
)
def html(params: dict):
    """Minify HTML pages into the docs tree."""
    keep_comments = flag(params, "html", "keep_comments", True)
    files = [
        f.with_contents(minify(f.text, keep_comments=keep_comments))
        for f in src(src_dir(params), patterns(params, "html", DEFAULT_PATTERNS))
    ]
    written = dest(files, docs_dir(params))
    log.info("Minified %d HTML file(s) into %s", len(written), docs_dir(params))
