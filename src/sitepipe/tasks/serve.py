"""Development server and the aggregate tasks built on the file tasks."""

from __future__ import annotations

from ..devserver import DevServer
from ..orchestrator import alias, task
from ..orchestrator.utils import (
    live_port,
    open_browser,
    server_host,
    server_port,
    src_dir,
    watch_patterns,
)


@task(name="live-server", inputs=lambda p: [src_dir(p)])
def live_server(params: dict):
    """Serve the source tree and reload browsers on change."""
    server = DevServer(
        host=server_host(params),
        port=server_port(params),
        live_port=live_port(params),
        open_browser=open_browser(params),
    )
    server.start(src_dir(params))
    server.watch(watch_patterns(params), src_dir(params))
    server.serve()


build = alias(
    "build",
    deps=["clean:docs", "html", "css", "js", "images"],
    help="Clean, then rebuild the docs tree.",
)

default = alias("default", deps=["live-server"], help="Start the live server.")
