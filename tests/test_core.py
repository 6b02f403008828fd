# tests/test_core.py

from __future__ import annotations

import pytest

from sitepipe.orchestrator import Pipeline, TaskSpec, alias, task


def _recorder(calls: list[str], name: str, fail: bool = False):
    def body(params: dict) -> None:
        calls.append(name)
        if fail:
            raise RuntimeError(f"{name} broke")

    return body


def test_prerequisites_run_once_in_declaration_order() -> None:
    calls: list[str] = []
    pipe = Pipeline()
    pipe.register("d", _recorder(calls, "d"))
    pipe.register("b", _recorder(calls, "b"), deps=["d"])
    pipe.register("c", _recorder(calls, "c"), deps=["d"])
    pipe.register("a", _recorder(calls, "a"), deps=["b", "c"])

    executed = pipe.run("a")

    assert calls == ["d", "b", "c", "a"]
    assert executed == ["d", "b", "c", "a"]


def test_declaration_order_is_respected_over_name_order() -> None:
    calls: list[str] = []
    pipe = Pipeline()
    for name in ["zeta", "alpha", "mid"]:
        pipe.register(name, _recorder(calls, name))
    pipe.add(alias("all", deps=["zeta", "alpha", "mid"]))

    assert pipe.run("all") == ["zeta", "alpha", "mid", "all"]
    assert calls == ["zeta", "alpha", "mid"]


def test_duplicate_registration_is_rejected() -> None:
    pipe = Pipeline()
    pipe.register("html", None)
    with pytest.raises(ValueError):
        pipe.register("html", None)


def test_unknown_prerequisite_names_the_dependent() -> None:
    pipe = Pipeline()
    pipe.register("build", None, deps=["clean", "html"])
    pipe.register("clean", None)

    with pytest.raises(KeyError, match="html.*build"):
        pipe.resolve("build")


def test_unknown_target() -> None:
    with pytest.raises(KeyError):
        Pipeline().run("missing")


def test_cycle_is_reported() -> None:
    pipe = Pipeline()
    pipe.register("a", None, deps=["b"])
    pipe.register("b", None, deps=["c"])
    pipe.register("c", None, deps=["a"])

    with pytest.raises(ValueError, match="a -> b -> c -> a"):
        pipe.resolve("a")


def test_failure_aborts_the_chain() -> None:
    calls: list[str] = []
    pipe = Pipeline()
    pipe.register("first", _recorder(calls, "first"))
    pipe.register("broken", _recorder(calls, "broken", fail=True))
    pipe.register("last", _recorder(calls, "last"))
    pipe.add(alias("all", deps=["first", "broken", "last"]))

    with pytest.raises(RuntimeError, match="broken broke"):
        pipe.run("all")
    assert calls == ["first", "broken"]


def test_params_are_passed_to_every_body_unchanged() -> None:
    seen: list[dict] = []
    pipe = Pipeline()
    pipe.register("a", lambda params: seen.append(params))
    pipe.register("b", lambda params: seen.append(params), deps=["a"])

    original = {"project": {"src_dir": "site"}}
    pipe.run("b", params=original)

    assert seen == [original, original]
    assert original == {"project": {"src_dir": "site"}}


def test_task_decorator_attaches_spec() -> None:
    @task(name="demo", deps=["clean:docs"], inputs=["src/*.txt"])
    def demo(params: dict):
        """Do the demo thing.

        More detail here.
        """

    spec = demo._task_spec
    assert isinstance(spec, TaskSpec)
    assert spec.name == "demo"
    assert spec.deps == ["clean:docs"]
    assert spec.inputs == ["src/*.txt"]
    assert spec.help == "Do the demo thing."
    assert spec.fn is demo
