from __future__ import annotations

import importlib
import pkgutil
from pathlib import Path
from typing import Dict, Optional

import typer
import yaml
from dotenv import load_dotenv

from .core import Pipeline, TaskSpec, resolve_paths
from .logging import configure_logging, get_logger


DEFAULT_CONFIG = "configs/base.yaml"

load_dotenv()

app = typer.Typer(add_completion=False, help="Static site build pipeline")
log = get_logger("sitepipe.cli")


def load_config(path: str | Path) -> dict:
    """Read the YAML config; a missing default config means built-in defaults."""
    p = Path(path)
    if not p.exists() and str(path) == DEFAULT_CONFIG:
        log.debug("No %s, using defaults", DEFAULT_CONFIG)
        return {}
    with open(p, "r", encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


def discover_tasks(tasks_pkg: str = "sitepipe.tasks") -> Dict[str, TaskSpec]:
    """Import all modules in the tasks package and collect declared tasks."""
    specs: Dict[str, TaskSpec] = {}
    pkg = importlib.import_module(tasks_pkg)
    for m in pkgutil.iter_modules(pkg.__path__, prefix=f"{tasks_pkg}."):
        mod = importlib.import_module(m.name)
        for attr_name in dir(mod):
            obj = getattr(mod, attr_name)
            spec = obj if isinstance(obj, TaskSpec) else getattr(obj, "_task_spec", None)
            if isinstance(spec, TaskSpec):
                if spec.name in specs and specs[spec.name] is not spec:
                    raise ValueError(f"Task declared twice: {spec.name} ({m.name})")
                specs[spec.name] = spec
    return specs


@app.callback(invoke_without_command=True)
def main_options(
    ctx: typer.Context,
    log_level: Optional[str] = typer.Option(
        None, "--log-level", help="Override SITEPIPE_LOG_LEVEL"
    ),
    log_file: Optional[Path] = typer.Option(None, help="Also log to this file"),
):
    configure_logging(level=log_level, log_file=log_file)
    # Bare `sitepipe` runs the default task, i.e. the live server.
    if ctx.invoked_subcommand is None:
        _run("default", DEFAULT_CONFIG)


@app.command("list")
def list_tasks(
    config: str = typer.Option(DEFAULT_CONFIG, help="Path to YAML config"),
):
    """List discovered tasks."""
    specs = discover_tasks()
    params = load_config(config)
    typer.echo("Discovered tasks:")
    for name in sorted(specs.keys()):
        spec = specs[name]
        line = f"- {name}"
        if spec.deps:
            line += f" [{', '.join(spec.deps)}]"
        if spec.help:
            line += f": {spec.help}"
        typer.echo(line)
        inputs = resolve_paths(spec.inputs, params)
        if inputs:
            typer.echo(f"    in:  {' '.join(inputs)}")
        outputs = resolve_paths(spec.outputs, params)
        if outputs:
            typer.echo(f"    out: {' '.join(outputs)}")


def _run(name: str, config: str) -> None:
    specs = discover_tasks()
    if name not in specs:
        typer.echo(f"Task not found: {name}")
        raise typer.Exit(code=1)
    params = load_config(config)
    pipe = Pipeline(tasks=specs, name=name)
    pipe.run(name, params=params)


@app.command("run")
def run_task(
    name: str = typer.Argument("default", help="Task name to run"),
    config: str = typer.Option(DEFAULT_CONFIG, help="Path to YAML config"),
):
    """Run a task and its prerequisites."""
    _run(name, config)


@app.command()
def build(
    config: str = typer.Option(DEFAULT_CONFIG, help="Path to YAML config"),
):
    """Clean the docs tree and rebuild every asset."""
    _run("build", config)


@app.command()
def serve(
    config: str = typer.Option(DEFAULT_CONFIG, help="Path to YAML config"),
):
    """Serve the source tree with live reload."""
    _run("live-server", config)


def main():  # pragma: no cover
    app()


if __name__ == "__main__":  # pragma: no cover
    main()
