"""In-repo task runner for the site build.

Provides Task and Pipeline primitives, prerequisite resolution, a content-addressed
file cache, glob-driven file streams, and a Typer CLI.
"""

from .core import TaskSpec, Pipeline, alias, task  # re-export for convenience

__all__ = ["TaskSpec", "Pipeline", "alias", "task"]
