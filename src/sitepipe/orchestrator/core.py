from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Callable, Iterable, Union, List, Optional

from .logging import get_logger


# Allow static lists or callables that build paths from params
PathSpec = Union[List[str], Callable[[dict], List[str]]]


@dataclass
class TaskSpec:
    name: str
    fn: Optional[Callable[..., None]] = None
    deps: List[str] = field(default_factory=list)
    inputs: PathSpec = field(default_factory=list)
    outputs: PathSpec = field(default_factory=list)
    help: str = ""


def task(
    name: str,
    deps: Iterable[str] = (),
    inputs: PathSpec | None = None,
    outputs: PathSpec | None = None,
):
    """Decorator to declare a task on a function.

    The wrapped function should accept a single dict `params` (parsed config).
    Prerequisites in `deps` run first, in the order given.
    """

    def deco(fn: Callable[..., None]):
        doc = (fn.__doc__ or "").strip().splitlines()
        spec = TaskSpec(
            name=name,
            fn=fn,
            deps=list(deps),
            inputs=inputs or [],
            outputs=outputs or [],
            help=doc[0] if doc else "",
        )
        setattr(fn, "_task_spec", spec)
        return fn

    return deco


def alias(name: str, deps: Iterable[str], help: str = "") -> TaskSpec:
    """A task with no body that only runs its prerequisites."""
    return TaskSpec(name=name, deps=list(deps), help=help)


class Pipeline:
    def __init__(
        self,
        tasks: dict[str, TaskSpec] | None = None,
        name: str = "pipeline",
    ):
        self.name = name
        self.tasks: dict[str, TaskSpec] = {}
        self.logger = get_logger(f"sitepipe.{self.name}")
        for spec in (tasks or {}).values():
            self.add(spec)

    def add(self, spec: TaskSpec) -> TaskSpec:
        if spec.name in self.tasks:
            raise ValueError(f"Task already registered: {spec.name}")
        self.tasks[spec.name] = spec
        return spec

    def register(
        self,
        name: str,
        fn: Callable[..., None] | None,
        deps: Iterable[str] = (),
    ) -> TaskSpec:
        return self.add(TaskSpec(name=name, fn=fn, deps=list(deps)))

    def resolve(self, target: str) -> list[str]:
        """Order in which `target` and its prerequisites run.

        Prerequisites are visited depth-first in declaration order and each
        appears once, before anything that depends on it.
        """
        ordered: list[str] = []
        done: set[str] = set()
        visiting: list[str] = []

        def visit(name: str, parent: str | None) -> None:
            if name in done:
                return
            if name not in self.tasks:
                if parent is None:
                    raise KeyError(f"Unknown task: {name}")
                raise KeyError(f"Unknown task: {name} (required by {parent})")
            if name in visiting:
                cycle = visiting[visiting.index(name):] + [name]
                raise ValueError("Cycle detected: " + " -> ".join(cycle))
            visiting.append(name)
            for dep in self.tasks[name].deps:
                visit(dep, name)
            visiting.pop()
            done.add(name)
            ordered.append(name)

        visit(target, None)
        return ordered

    def run(self, target: str, params: dict | None = None) -> list[str]:
        params = params or {}

        selected = self.resolve(target)
        self.logger.info("Selected tasks: %s", " → ".join(selected))

        executed: list[str] = []
        for step_name in selected:
            spec = self.tasks[step_name]
            step_logger = get_logger(f"sitepipe.{self.name}.{step_name}")
            if spec.fn is None:
                executed.append(step_name)
                continue
            started = time.perf_counter()
            step_logger.info("Run: %s", step_name)
            try:
                spec.fn(params=params)
            except Exception:
                step_logger.exception(
                    "Task failed (%s) after %.2fs",
                    step_name,
                    time.perf_counter() - started,
                )
                raise
            step_logger.info(
                "Done: %s (%.2fs)", step_name, time.perf_counter() - started
            )
            executed.append(step_name)
        return executed


def resolve_paths(paths_spec: PathSpec, params: dict) -> list[str]:
    """Resolve a static list of paths or a callable(PathSpec) into a list[str].

    Callables receive the full params dict and must return a list of path strings.
    """
    if callable(paths_spec):
        paths = paths_spec(params)
    else:
        paths = paths_spec
    if paths is None:
        return []
    # Normalize to strings
    out: list[str] = []
    for p in paths:
        out.append(str(p))
    return out
