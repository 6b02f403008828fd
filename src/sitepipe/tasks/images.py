"""Image task: lossless recompression of PNG/JPEG files through the file cache."""

from __future__ import annotations

import io

from PIL import Image

from ..orchestrator import task
from ..orchestrator.cache import FileCache
from ..orchestrator.files import dest, src
from ..orchestrator.logging import get_logger
from ..orchestrator.utils import cache_dir, docs_dir, flag, patterns, section_dir, src_dir


log = get_logger("sitepipe.tasks.images")

DEFAULT_PATTERNS = ["**/*.{png,jpg}"]


def optimize(data: bytes, progressive: bool = False) -> bytes:
    """Re-encode an image without changing its pixels.

    Returns the input unchanged when re-encoding does not make it smaller.
    """
    with Image.open(io.BytesIO(data)) as img:
        fmt = img.format
        out = io.BytesIO()
        if fmt == "PNG":
            img.save(out, format="PNG", optimize=True)
        elif fmt == "JPEG":
            # "keep" reuses the source quantization tables, so no quality loss
            img.save(out, format="JPEG", quality="keep", optimize=True, progressive=progressive)
        else:
            raise ValueError(f"Unsupported image format: {fmt}")
    optimized = out.getvalue()
    return optimized if len(optimized) < len(data) else data


def _dirs(p: dict) -> tuple[str, str]:
    sub = section_dir(p, "images", "images")
    return f"{src_dir(p)}/{sub}", f"{docs_dir(p)}/{sub}"


@task(
    name="images",
    inputs=lambda p: [f"{_dirs(p)[0]}/{pat}" for pat in patterns(p, "images", DEFAULT_PATTERNS)],
    outputs=lambda p: [_dirs(p)[1]],
)
def images(params: dict):
    """Compress PNG and JPEG images, reusing cached results."""
    source, out = _dirs(params)
    options = {"progressive": flag(params, "images", "progressive", False)}
    cache = FileCache(cache_dir(params)) if flag(params, "images", "use_cache", True) else None

    def compress(data: bytes) -> bytes:
        return optimize(data, **options)

    files = []
    saved = 0
    for f in src(source, patterns(params, "images", DEFAULT_PATTERNS)):
        if cache is not None:
            data = cache.get_or_compute("images", f.contents, options, compress)
        else:
            data = compress(f.contents)
        saved += len(f.contents) - len(data)
        files.append(f.with_contents(data))
    written = dest(files, out)
    if cache is not None:
        log.info("Cache: %d hit(s), %d miss(es)", cache.hits, cache.misses)
    log.info("Wrote %d image(s) into %s, saved %d bytes", len(written), out, saved)
