"""Clean tasks: remove the docs tree and clear the image cache."""

from __future__ import annotations

import shutil
from pathlib import Path

from ..orchestrator import task
from ..orchestrator.cache import FileCache
from ..orchestrator.logging import get_logger
from ..orchestrator.utils import cache_dir, docs_dir


log = get_logger("sitepipe.tasks.clean")


@task(name="clean:docs", outputs=lambda p: [docs_dir(p)])
def clean_docs(params: dict):
    """Delete the docs output tree."""
    out = Path(docs_dir(params))
    if not out.exists():
        log.info("Nothing to clean at %s", out)
        return
    shutil.rmtree(out)
    log.info("Removed %s", out)


@task(name="clean:cache", outputs=lambda p: [cache_dir(p)])
def clean_cache(params: dict):
    """Clear the image optimisation cache."""
    FileCache(cache_dir(params)).clear_all()
